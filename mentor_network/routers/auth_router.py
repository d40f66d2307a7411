# mentor_network/routers/auth_router.py
from fastapi import APIRouter, Depends, Response

from ..config import get_settings
from ..dependencies.service_dependencies import get_user_service
from ..exceptions import BusinessLogicError
from ..schemas import AuthPayload, LoginInput, SignupInput, UserResponse
from ..services import UserService
from ..utils.http_errors import to_http_exception

router = APIRouter(tags=["authentication"])
settings = get_settings()

def _set_token_cookie(response: Response, token: str):
    response.set_cookie(
        key="access_token",
        value=token,
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )

@router.post("/register", response_model=AuthPayload, status_code=201)
def register_user(
    data: SignupInput,
    response: Response,
    user_service: UserService = Depends(get_user_service)
):
    """Register a new mentor or mentee"""
    try:
        token, user = user_service.signup(data)
    except BusinessLogicError as e:
        raise to_http_exception(e)
    _set_token_cookie(response, token)
    return AuthPayload(token=token, user=UserResponse.model_validate(user))

@router.post("/token", response_model=AuthPayload)
def login(
    data: LoginInput,
    response: Response,
    user_service: UserService = Depends(get_user_service)
):
    """Login and set HttpOnly cookie, also return the token payload"""
    try:
        token, user = user_service.login(data)
    except BusinessLogicError as e:
        raise to_http_exception(e)
    _set_token_cookie(response, token)
    return AuthPayload(token=token, user=UserResponse.model_validate(user))

@router.post("/logout", status_code=200)
def logout(response: Response):
    """Logout user by clearing cookie"""
    response.delete_cookie(key="access_token")
    return {"message": "Logged out successfully"}
