# mentor_network/services/relationship_service.py
from typing import List
from sqlalchemy import and_
from ..core.entity_store import EntityStore
from ..models import User, FollowRequest, Role, RequestStatus
from ..schemas import AuthContext
from ..utils.validation_utils import ValidationUtils

class RelationshipService:
    def __init__(self, store: EntityStore):
        self.store = store
        self.validator = ValidationUtils(store)

    def my_mentees(self, auth: AuthContext) -> List[User]:
        """Mentees whose requests the calling mentor has accepted"""
        mentor = self.validator.get_actor(auth)
        if mentor.role != Role.MENTOR:
            return []
        requests = self.store.list_follow_requests(
            and_(FollowRequest.mentor_id == mentor.id, FollowRequest.status == RequestStatus.ACCEPTED),
            include_users=True,
        )
        return [request.mentee for request in requests]

    def my_pending_requests(self, auth: AuthContext) -> List[FollowRequest]:
        """PENDING requests addressed to the calling mentor, newest first"""
        mentor = self.validator.get_actor(auth)
        if mentor.role != Role.MENTOR:
            return []
        return self.store.list_follow_requests(
            and_(FollowRequest.mentor_id == mentor.id, FollowRequest.status == RequestStatus.PENDING),
            include_users=True,
            order=(FollowRequest.created_at.desc(), FollowRequest.mentee_id),
        )
