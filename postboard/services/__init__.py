"""
Use cases for the postboard API.

Routers (FastAPI endpoints) call these services instead of talking to the JSON
store directly. Store errors propagate unchanged so the HTTP layer can map
them to status codes by type.
"""

from .post_service import PostService
from .user_service import UserService

__all__ = ["PostService", "UserService"]
