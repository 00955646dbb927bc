"""
FastAPI routers grouped by collection (users, posts).

Each module exposes an APIRouter that the application factory includes. The
services they need are read from ``app.state`` so tests can point the app at a
temporary store.
"""

from fastapi import Request

from postboard.services import PostService, UserService


def get_user_service(request: Request) -> UserService:
    svc = getattr(getattr(request.app, "state", None), "user_service", None)
    if not svc:
        raise RuntimeError("UserService not configured")
    return svc


def get_post_service(request: Request) -> PostService:
    svc = getattr(getattr(request.app, "state", None), "post_service", None)
    if not svc:
        raise RuntimeError("PostService not configured")
    return svc
