# mentor_network/services/follow_request_service.py
import logging
from ..core.entity_store import EntityStore
from ..constants import ErrorMessages
from ..exceptions import InvalidOperationError, NotFoundError
from ..models import FollowRequest, Role, RequestStatus, RequestAction
from ..schemas import AuthContext
from ..utils.validation_utils import ValidationUtils

logger = logging.getLogger(__name__)

# Status a mentor's response moves a PENDING request to
ACTION_TO_STATUS = {
    RequestAction.ACCEPT: RequestStatus.ACCEPTED,
    RequestAction.REJECT: RequestStatus.REJECTED,
}

class FollowRequestService:
    def __init__(self, store: EntityStore):
        self.store = store
        self.validator = ValidationUtils(store)

    def send_follow_request(self, auth: AuthContext, mentor_id: str) -> FollowRequest:
        """
        Creates a PENDING request from the calling mentee to ``mentor_id``.
        Re-sending resets an existing request to PENDING, whatever its status.
        """
        mentee = self.validator.get_actor(auth)
        self.validator.require_role(mentee, Role.MENTEE, ErrorMessages.ONLY_MENTEES_SEND)
        if mentor_id == mentee.id:
            raise InvalidOperationError(ErrorMessages.SELF_FOLLOW)

        mentor = self.store.find_user_by_id(mentor_id)
        if not mentor:
            raise NotFoundError(ErrorMessages.MENTOR_NOT_FOUND)
        if mentor.role != Role.MENTOR:
            raise InvalidOperationError(ErrorMessages.TARGET_NOT_MENTOR)

        request = self.store.upsert_follow_request(mentor.id, mentee.id, RequestStatus.PENDING)
        logger.info(f"Mentee {mentee.id} sent follow request to mentor {mentor.id}")
        return request

    def respond_follow_request(self, auth: AuthContext, mentee_id: str, action) -> FollowRequest:
        """Accepts or rejects the PENDING request ``mentee_id`` sent to the calling mentor."""
        mentor = self.validator.get_actor(auth)
        self.validator.require_role(mentor, Role.MENTOR, ErrorMessages.ONLY_MENTORS_RESPOND)
        try:
            status = ACTION_TO_STATUS[RequestAction(action)]
        except ValueError:
            raise InvalidOperationError(ErrorMessages.INVALID_ACTION)

        # Only the pair keyed on the calling mentor is ever looked up, so a request
        # addressed to another mentor surfaces as NotFound.
        request = self.store.update_follow_request_status(
            mentor.id, mentee_id, status, only_if=RequestStatus.PENDING
        )
        logger.info(f"Mentor {mentor.id} moved request from mentee {mentee_id} to {status.value}")
        return request
