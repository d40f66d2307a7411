# mentor_network/services/recommendation_service.py
import logging
from typing import List

from sqlalchemy import and_, or_

from ..config import get_settings
from ..core.entity_store import EntityStore
from ..core.filtering import works_at_any, not_matched_with
from ..models import User, Role
from ..schemas import AuthContext
from ..utils.validation_utils import ValidationUtils

logger = logging.getLogger(__name__)

class RecommendationService:
    def __init__(self, store: EntityStore):
        self.store = store
        self.settings = get_settings()
        self.validator = ValidationUtils(store)

    def recommend_mentors(self, auth: AuthContext) -> List[User]:
        """
        Mentors sharing at least one profile signal with the calling mentee, newest first.

        Signals are domain, branch, year of study, and an overlap between the mentor's
        companies and the mentee's companies of interest. Each counts only when the
        mentee has filled it in; with none filled in every mentor is a candidate.
        Mentors already matched (ACCEPTED) with the mentee are left out.
        """
        mentee = self.validator.get_actor(auth)
        if mentee.role != Role.MENTEE:
            logger.debug(f"User {mentee.id} is not a mentee; no recommendations.")
            return []

        signals = self._profile_signals(mentee)
        predicate = and_(User.role == Role.MENTOR, not_matched_with(mentee.id))
        if signals:
            predicate = and_(predicate, or_(*signals))
        else:
            logger.debug(f"Mentee {mentee.id} has no profile signals; falling back to all mentors.")

        mentors = self.store.query_users(predicate, limit=self.settings.RECOMMENDATION_LIMIT)
        logger.info(f"Recommended {len(mentors)} mentors to mentee {mentee.id} from {len(signals)} signals.")
        return mentors

    def _profile_signals(self, mentee: User) -> list:
        signals = []
        if mentee.domain is not None:
            signals.append(User.domain == mentee.domain)
        if mentee.branch is not None:
            signals.append(User.branch == mentee.branch)
        if mentee.year_of_study is not None:
            signals.append(User.year_of_study == mentee.year_of_study)
        if mentee.companies_interested:
            signals.append(works_at_any(mentee.companies_interested))
        return signals
