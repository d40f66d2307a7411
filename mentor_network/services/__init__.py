# mentor_network/services/__init__.py
from .follow_request_service import FollowRequestService
from .recommendation_service import RecommendationService
from .relationship_service import RelationshipService
from .user_service import UserService

__all__ = ["FollowRequestService", "RecommendationService", "RelationshipService", "UserService"]
