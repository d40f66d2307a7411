# mentor_network/core/entity_store.py
import logging
from functools import wraps
from typing import Any, List, Optional, Sequence

from sqlalchemy import text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError
from sqlalchemy.orm import Session, joinedload

from ..constants import ErrorMessages
from ..exceptions import (
    BusinessLogicError,
    ConstraintViolationError,
    InvalidStatusTransitionError,
    NotFoundError,
    StoreUnavailableError,
)
from ..models import FollowRequest, RequestStatus, User, normalize_email, utcnow

logger = logging.getLogger(__name__)

# Dialects with a native single-statement INSERT ... ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def translate_store_errors(method):
    """Rolls back the session and maps SQLAlchemy failures onto the store error kinds."""
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except BusinessLogicError:
            raise
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Integrity error in {method.__name__}: {e}")
            raise ConstraintViolationError(ErrorMessages.CONSTRAINT_VIOLATION) from e
        except (OperationalError, InterfaceError) as e:
            self.db.rollback()
            logger.error(f"Store unreachable in {method.__name__}: {e}")
            raise StoreUnavailableError(ErrorMessages.STORE_UNAVAILABLE) from e
        except DBAPIError as e:
            self.db.rollback()
            if e.connection_invalidated:
                logger.error(f"Connection lost in {method.__name__}: {e}")
                raise StoreUnavailableError(ErrorMessages.STORE_UNAVAILABLE) from e
            logger.error(f"Database error in {method.__name__}: {e}")
            raise
    return wrapper


class EntityStore:
    """Typed reads and writes over users and follow requests for one session."""

    def __init__(self, db: Session):
        self.db = db

    # --- Users ---

    @translate_store_errors
    def find_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    @translate_store_errors
    def find_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email_key == normalize_email(email)).first()

    @translate_store_errors
    def query_users(self, predicate=None, limit: Optional[int] = None, order: Optional[Sequence[Any]] = None) -> List[User]:
        """Users matching ``predicate``; newest first unless ``order`` is given."""
        query = self.db.query(User)
        if predicate is not None:
            query = query.filter(predicate)
        # id breaks ties between users created in the same instant
        query = query.order_by(*(order or (User.created_at.desc(), User.id)))
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def list_users(self) -> List[User]:
        return self.query_users()

    @translate_store_errors
    def create_user(self, **fields) -> User:
        companies = fields.pop("companies", None)
        companies_interested = fields.pop("companies_interested", None)
        user = User(**fields)
        user.companies = companies
        user.companies_interested = companies_interested
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"User {user.id} ({user.role.value}) created")
        return user

    @translate_store_errors
    def update_user_image(self, user_id: str, image_url: str) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError(ErrorMessages.USER_NOT_FOUND)
        user.image_url = image_url
        self.db.commit()
        self.db.refresh(user)
        return user

    # --- Follow requests ---

    def _get_follow_request(self, mentor_id: str, mentee_id: str) -> Optional[FollowRequest]:
        return self.db.query(FollowRequest).populate_existing().filter(
            FollowRequest.mentor_id == mentor_id,
            FollowRequest.mentee_id == mentee_id,
        ).first()

    @translate_store_errors
    def get_follow_request(self, mentor_id: str, mentee_id: str) -> Optional[FollowRequest]:
        return self._get_follow_request(mentor_id, mentee_id)

    @translate_store_errors
    def upsert_follow_request(self, mentor_id: str, mentee_id: str, status: RequestStatus) -> FollowRequest:
        """
        Creates the (mentor, mentee) row or overwrites the status of the existing one.
        created_at is only written on insert; updated_at is refreshed either way.
        """
        now = utcnow()
        insert = UPSERT_INSERTS.get(self.db.get_bind().dialect.name)
        if insert is not None:
            stmt = insert(FollowRequest).values(
                mentor_id=mentor_id,
                mentee_id=mentee_id,
                status=status,
                created_at=now,
                updated_at=now,
            ).on_conflict_do_update(
                index_elements=["mentor_id", "mentee_id"],
                set_={"status": status, "updated_at": now},
            )
            self.db.execute(stmt)
        else:
            self._upsert_with_row_lock(mentor_id, mentee_id, status, now)
        self.db.commit()
        return self._get_follow_request(mentor_id, mentee_id)

    def _upsert_with_row_lock(self, mentor_id: str, mentee_id: str, status: RequestStatus, now) -> None:
        # Dialects without ON CONFLICT: lock the row if present, otherwise insert and
        # let the primary key reject a concurrent duplicate insert.
        existing = self.db.query(FollowRequest).with_for_update().filter(
            FollowRequest.mentor_id == mentor_id,
            FollowRequest.mentee_id == mentee_id,
        ).first()
        if existing:
            existing.status = status
            existing.updated_at = now
        else:
            self.db.add(FollowRequest(
                mentor_id=mentor_id,
                mentee_id=mentee_id,
                status=status,
                created_at=now,
                updated_at=now,
            ))
        self.db.flush()

    @translate_store_errors
    def update_follow_request_status(
        self,
        mentor_id: str,
        mentee_id: str,
        status: RequestStatus,
        only_if: Optional[RequestStatus] = None,
    ) -> FollowRequest:
        """
        Sets the status of an existing row in a single UPDATE. With ``only_if`` the
        update applies only while the row still holds that status.
        """
        query = self.db.query(FollowRequest).filter(
            FollowRequest.mentor_id == mentor_id,
            FollowRequest.mentee_id == mentee_id,
        )
        if only_if is not None:
            query = query.filter(FollowRequest.status == only_if)
        updated = query.update(
            {FollowRequest.status: status, FollowRequest.updated_at: utcnow()},
            synchronize_session=False,
        )
        if updated == 0:
            self.db.rollback()
            current = self._get_follow_request(mentor_id, mentee_id)
            # Without a status condition a zero count can only mean the row was missing
            if current is None or only_if is None:
                raise NotFoundError(ErrorMessages.REQUEST_NOT_FOUND)
            raise InvalidStatusTransitionError(
                f"{ErrorMessages.ALREADY_RESPONDED} (current: {current.status.value})"
            )
        self.db.commit()
        return self._get_follow_request(mentor_id, mentee_id)

    @translate_store_errors
    def list_follow_requests(self, predicate=None, include_users: bool = False, order: Optional[Sequence[Any]] = None) -> List[FollowRequest]:
        query = self.db.query(FollowRequest)
        if include_users:
            query = query.options(joinedload(FollowRequest.mentor), joinedload(FollowRequest.mentee))
        if predicate is not None:
            query = query.filter(predicate)
        query = query.order_by(*(order or (FollowRequest.created_at.desc(), FollowRequest.mentee_id)))
        return query.all()

    @translate_store_errors
    def ping(self) -> bool:
        self.db.execute(text("SELECT 1"))
        return True
