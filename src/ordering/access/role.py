"""User roles and the explicit authorization checks built on them.

Every admin-only handler calls ``require_admin`` as its first statement, so
each operation's precondition is visible where the operation is defined.
"""

from enum import Enum

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.errors import AuthRequired, PermissionDenied


class Role(Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


@ordering.aggregate
class UserRole:
    user_id = Identifier(identifier=True, required=True)
    role = String(choices=Role, required=True)
    granted_at = DateTime()


def role_of(user_id) -> str | None:
    if not user_id:
        return None
    try:
        return current_domain.repository_for(UserRole).get(str(user_id)).role
    except ObjectNotFoundError:
        return None


def is_admin(user_id) -> bool:
    return role_of(user_id) == Role.ADMIN.value


def require_identity(user_id) -> str:
    """Return the caller id, or raise ``AuthRequired`` when there is none."""
    if not user_id or not str(user_id).strip():
        raise AuthRequired("Sign in to continue")
    return str(user_id)


def require_admin(user_id) -> str:
    user_id = require_identity(user_id)
    if not is_admin(user_id):
        raise PermissionDenied("Admin privileges required", user_id=user_id)
    return user_id
