"""Error taxonomy for ordering operations.

Field-level input problems (bad enum value, non-positive quantity, blank
delivery field) are reported with ``protean.exceptions.ValidationError``,
keyed by field name. The classes below cover the remaining categories.
"""


class OrderingError(Exception):
    """Base class for business-rule failures reported to the caller."""

    code = "error"

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class AuthRequired(OrderingError):
    """No caller identity was supplied."""

    code = "auth_required"


class PermissionDenied(OrderingError):
    """The caller is known but may not perform the operation."""

    code = "permission_denied"


class EmptyCart(OrderingError):
    """Checkout was attempted without a cart or without priced lines."""

    code = "empty_cart"


class NotFound(OrderingError):
    """A referenced order, slip, product, category or image does not exist."""

    code = "not_found"


class Conflict(OrderingError):
    """A concurrent write invalidated an assumption; the caller may retry."""

    code = "conflict"
