# mentor_network/utils/validation_utils.py
from ..core.entity_store import EntityStore
from ..constants import ErrorMessages
from ..exceptions import UnauthorizedError, NotFoundError, ForbiddenError
from ..models import User, Role
from ..schemas import AuthContext

class ValidationUtils:
    def __init__(self, store: EntityStore):
        self.store = store

    def get_actor(self, auth: AuthContext) -> User:
        """Resolves the calling user; anonymous callers are rejected."""
        if auth is None or not auth.is_authenticated:
            raise UnauthorizedError(ErrorMessages.UNAUTHORIZED)
        actor = self.store.find_user_by_id(auth.user_id)
        if not actor:
            raise NotFoundError(ErrorMessages.USER_NOT_FOUND)
        return actor

    def require_role(self, actor: User, role: Role, message: str):
        if actor.role != role:
            raise ForbiddenError(message)
