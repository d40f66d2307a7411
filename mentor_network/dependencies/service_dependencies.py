# mentor_network/dependencies/service_dependencies.py
from fastapi import Depends
from sqlalchemy.orm import Session
from ..database import get_db
from ..core.entity_store import EntityStore
from ..services.follow_request_service import FollowRequestService
from ..services.recommendation_service import RecommendationService
from ..services.relationship_service import RelationshipService
from ..services.user_service import UserService

def get_entity_store(db: Session = Depends(get_db)) -> EntityStore:
    return EntityStore(db)

def get_user_service(store: EntityStore = Depends(get_entity_store)) -> UserService:
    return UserService(store)

def get_recommendation_service(store: EntityStore = Depends(get_entity_store)) -> RecommendationService:
    return RecommendationService(store)

def get_follow_request_service(store: EntityStore = Depends(get_entity_store)) -> FollowRequestService:
    return FollowRequestService(store)

def get_relationship_service(store: EntityStore = Depends(get_entity_store)) -> RelationshipService:
    return RelationshipService(store)
