# mentor_network/dependencies/auth_dependencies.py
import logging
from typing import Optional
from fastapi import Header, Cookie
from ..schemas import AuthContext
from ..security import decode_user_id

logger = logging.getLogger(__name__)

def get_auth_context(
    authorization: Optional[str] = Header(None),
    access_token: Optional[str] = Cookie(None),
) -> AuthContext:
    """
    Accepts either Authorization: Bearer <token> OR the 'access_token' cookie.
    Prefers the header; a missing or invalid token gives an anonymous context.
    """
    token = None
    if authorization:
        if authorization.startswith("Bearer "):
            token = authorization.split(" ", 1)[1]
        else:
            logger.info("Authorization header present but not Bearer.")

    if not token:
        token = access_token

    return AuthContext(user_id=decode_user_id(token))
