# mentor_network/services/user_service.py
import logging
from typing import List, Optional, Tuple

from ..config import get_settings
from ..constants import ErrorMessages
from ..core.entity_store import EntityStore
from ..core.filtering import build_predicate
from ..exceptions import ConstraintViolationError, UnauthorizedError
from ..models import User
from ..schemas import AuthContext, LoginInput, SignupInput, UserFilter
from ..security import create_user_token, get_password_hash, verify_password
from ..utils.validation_utils import ValidationUtils

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self, store: EntityStore):
        self.store = store
        self.settings = get_settings()
        self.validator = ValidationUtils(store)

    def signup(self, data: SignupInput) -> Tuple[str, User]:
        """Registers a user and returns a fresh token for them"""
        if self.store.find_user_by_email(data.email):
            raise ConstraintViolationError(ErrorMessages.EMAIL_IN_USE)

        user = self.store.create_user(
            name=data.name,
            email=data.email,
            hashed_password=get_password_hash(data.password),
            image_url=self.settings.DEFAULT_IMAGE_URL,
            role=data.role,
            year_of_study=data.year_of_study,
            domain=data.domain,
            branch=data.branch,
            companies=data.companies or [],
            companies_interested=data.companies_interested or [],
        )
        return create_user_token(user.id, user.email), user

    def login(self, data: LoginInput) -> Tuple[str, User]:
        user = self.store.find_user_by_email(data.email)
        if not user or not verify_password(data.password, user.hashed_password):
            raise UnauthorizedError(ErrorMessages.INVALID_CREDENTIALS)
        logger.info(f"User {user.id} logged in")
        return create_user_token(user.id, user.email), user

    def me(self, auth: AuthContext) -> Optional[User]:
        if not auth.is_authenticated:
            return None
        return self.store.find_user_by_id(auth.user_id)

    def list_users(self) -> List[User]:
        return self.store.list_users()

    def search_users(self, user_filter: Optional[UserFilter] = None) -> List[User]:
        """Users matching every field set on the filter, newest first"""
        predicate = build_predicate(user_filter or UserFilter())
        return self.store.query_users(predicate, limit=self.settings.SEARCH_RESULT_LIMIT)

    def update_profile_image(self, auth: AuthContext, image_url: str) -> User:
        actor = self.validator.get_actor(auth)
        return self.store.update_user_image(actor.id, image_url)
