"""Role management: command and handler."""

from datetime import UTC, datetime

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.access.role import Role, UserRole, require_admin
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


@ordering.command(part_of="UserRole")
class GrantRole:
    actor_id = Identifier()
    user_id = Identifier(required=True)
    role = String(required=True, choices=Role)


@ordering.command_handler(part_of=UserRole)
class ManageRolesHandler:
    @handle(GrantRole)
    def grant_role(self, command):
        require_admin(command.actor_id)
        assign_role(command.user_id, command.role)


def assign_role(user_id, role) -> UserRole:
    """Create or overwrite a user's role. Also used by ``manage.py grant-role`` to bootstrap admins."""
    repo = current_domain.repository_for(UserRole)
    try:
        user_role = repo.get(str(user_id))
        user_role.role = role
    except ObjectNotFoundError:
        user_role = UserRole(user_id=str(user_id), role=role)
    user_role.granted_at = datetime.now(UTC)
    repo.add(user_role)
    logger.info("Role granted", user_id=str(user_id), role=role)
    return user_role
