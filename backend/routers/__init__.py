"""
Routers package - exports all API routers for the application.
"""

from . import conversation_router
from . import health_router
from . import legal_chat_router
from . import upload_router

__all__ = [
    "conversation_router",
    "health_router",
    "legal_chat_router",
    "upload_router",
]
