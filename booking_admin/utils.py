"""Shared utilities used across the booking admin core."""

import re


def slugify_label(label: str) -> str:
    """Derive a machine key from a field label.

    Examples:
        >>> slugify_label("Date of Birth")
        'date_of_birth'
        >>> slugify_label("  Company   name ")
        'company_name'
    """
    return re.sub(r"\s+", "_", label.strip().lower())


def normalize_email(value: str) -> str:
    """Lowercase and strip an email address; no format checking."""
    return value.strip().lower()


def split_emails(value: str) -> list[str]:
    """Split a comma or semicolon separated email list, dropping blanks.

    Examples:
        >>> split_emails("a@x.com, b@x.com;;")
        ['a@x.com', 'b@x.com']
    """
    return [part.strip() for part in re.split(r"[,;]", value) if part.strip()]
