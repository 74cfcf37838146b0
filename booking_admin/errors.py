"""Error taxonomy for the service configuration core."""

from typing import Optional


class ServiceConfigError(Exception):
    """Base class for all service configuration errors."""


class ValidationError(ServiceConfigError):
    """A recoverable, field-level problem reported back to the caller.

    Instances are usually carried inside result objects rather than raised,
    so the admin UI can show them next to the offending field.
    """

    def __init__(self, code: str, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.field = field

    def __repr__(self) -> str:
        return f"ValidationError(code={self.code!r}, field={self.field!r})"


class UnknownServiceTypeError(ServiceConfigError):
    """Raised when a record carries a service type outside the closed set."""


class ServiceTypeLockedError(ServiceConfigError):
    """Raised when changing the service type of an already persisted service."""


class ServiceNotFoundError(ServiceConfigError):
    """Raised when the store holds no service under the requested id."""


class StepBlockedError(ServiceConfigError):
    """Raised when a wizard moves forward past a step that fails validation."""

    def __init__(self, step: int, violations: list[str]) -> None:
        super().__init__(
            f"Step {step} has {len(violations)} unresolved issue(s): {'; '.join(violations)}"
        )
        self.step = step
        self.violations = violations


class DivergentWindowsError(ServiceConfigError):
    """Raised when a regular service's open days do not share one window list."""
