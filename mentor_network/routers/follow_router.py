# mentor_network/routers/follow_router.py
from typing import List
from fastapi import APIRouter, Depends, Path

from ..dependencies.auth_dependencies import get_auth_context
from ..dependencies.service_dependencies import (
    get_follow_request_service,
    get_recommendation_service,
    get_relationship_service,
)
from ..exceptions import BusinessLogicError
from ..schemas import AuthContext, FollowRequestResponse, RespondInput, UserResponse
from ..services import FollowRequestService, RecommendationService, RelationshipService
from ..utils.http_errors import to_http_exception

router = APIRouter(prefix="/api", tags=["follow"])

@router.get("/mentors/recommended", response_model=List[UserResponse])
def recommended_mentors(
    auth: AuthContext = Depends(get_auth_context),
    recommendation_service: RecommendationService = Depends(get_recommendation_service)
):
    """Mentor recommendations for the calling mentee"""
    try:
        return recommendation_service.recommend_mentors(auth)
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.post("/mentors/{mentor_id}/follow", response_model=bool)
def send_follow_request(
    mentor_id: str = Path(..., description="The ID of the mentor to follow"),
    auth: AuthContext = Depends(get_auth_context),
    follow_service: FollowRequestService = Depends(get_follow_request_service)
):
    """Send (or re-send) a follow request to a mentor"""
    try:
        follow_service.send_follow_request(auth, mentor_id)
    except BusinessLogicError as e:
        raise to_http_exception(e)
    return True

@router.post("/mentees/{mentee_id}/respond", response_model=bool)
def respond_follow_request(
    data: RespondInput,
    mentee_id: str = Path(..., description="The ID of the mentee who sent the request"),
    auth: AuthContext = Depends(get_auth_context),
    follow_service: FollowRequestService = Depends(get_follow_request_service)
):
    """Accept or reject a pending follow request"""
    try:
        follow_service.respond_follow_request(auth, mentee_id, data.action)
    except BusinessLogicError as e:
        raise to_http_exception(e)
    return True

@router.get("/mentor/mentees", response_model=List[UserResponse])
def my_mentees(
    auth: AuthContext = Depends(get_auth_context),
    relationship_service: RelationshipService = Depends(get_relationship_service)
):
    """Mentees the calling mentor has accepted"""
    try:
        return relationship_service.my_mentees(auth)
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.get("/mentor/requests/pending", response_model=List[FollowRequestResponse])
def my_pending_requests(
    auth: AuthContext = Depends(get_auth_context),
    relationship_service: RelationshipService = Depends(get_relationship_service)
):
    """Pending follow requests addressed to the calling mentor"""
    try:
        return relationship_service.my_pending_requests(auth)
    except BusinessLogicError as e:
        raise to_http_exception(e)
