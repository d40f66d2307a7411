# mentor_network/routers/users_router.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from ..dependencies.auth_dependencies import get_auth_context
from ..dependencies.service_dependencies import get_user_service
from ..exceptions import BusinessLogicError
from ..models import Role, Domain, Branch
from ..schemas import AuthContext, ProfileImageUpdate, UserFilter, UserResponse
from ..services import UserService
from ..utils.http_errors import to_http_exception

router = APIRouter(prefix="/api", tags=["users"])

@router.get("/me", response_model=Optional[UserResponse])
def get_me(
    auth: AuthContext = Depends(get_auth_context),
    user_service: UserService = Depends(get_user_service)
):
    """The calling user, or null when anonymous"""
    try:
        return user_service.me(auth)
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.put("/me/image", response_model=UserResponse)
def update_profile_image(
    data: ProfileImageUpdate,
    auth: AuthContext = Depends(get_auth_context),
    user_service: UserService = Depends(get_user_service)
):
    """Point the calling user's profile image at an already uploaded URL"""
    try:
        return user_service.update_profile_image(auth, data.image_url)
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.get("/users", response_model=List[UserResponse])
def list_users(user_service: UserService = Depends(get_user_service)):
    try:
        return user_service.list_users()
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.get("/users/search", response_model=List[UserResponse])
def search_users(
    role: Optional[Role] = Query(None),
    name: Optional[str] = Query(None, description="Case-insensitive name substring"),
    domain: Optional[Domain] = Query(None),
    branch: Optional[Branch] = Query(None),
    year_of_study: Optional[int] = Query(None),
    company: Optional[str] = Query(None),
    user_service: UserService = Depends(get_user_service)
):
    """Public user search; every supplied field narrows the result"""
    user_filter = UserFilter(
        role=role, name=name, domain=domain, branch=branch, year_of_study=year_of_study, company=company
    )
    try:
        return user_service.search_users(user_filter)
    except BusinessLogicError as e:
        raise to_http_exception(e)
