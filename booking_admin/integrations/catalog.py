"""
Product catalog contract and a static in-memory catalog.

In production the lookup goes to the shop's product API; the core only
needs titles, variant titles, opaque price strings, and image URLs.
"""

import logging
from typing import Optional, Protocol

from booking_admin.schemas.service_schema import Product, ProductVariant

logger = logging.getLogger(__name__)


class ProductCatalog(Protocol):
    def get_product(self, product_id: str) -> Optional[Product]:
        ...

    def get_variants(self, product_id: str, variant_ids: list[str]) -> list[ProductVariant]:
        ...


class StaticProductCatalog:
    """Catalog backed by a dict of product records keyed by product id."""

    def __init__(self, products: Optional[dict[str, dict]] = None) -> None:
        self._products: dict[str, Product] = {
            pid: Product(id=pid, **record) for pid, record in (products or {}).items()
        }

    def get_product(self, product_id: str) -> Optional[Product]:
        product = self._products.get(product_id)
        if product is None:
            logger.debug("Product %s not in catalog", product_id)
        return product

    def get_variants(self, product_id: str, variant_ids: list[str]) -> list[ProductVariant]:
        """Selected variants in catalog order; unknown ids are skipped."""
        product = self.get_product(product_id)
        if product is None:
            return []
        wanted = set(variant_ids)
        return [v for v in product.variants if v.id in wanted]
