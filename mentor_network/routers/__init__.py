# mentor_network/routers/__init__.py
from . import auth_router
from . import users_router
from . import follow_router

__all__ = [
    "auth_router",
    "users_router",
    "follow_router",
]
