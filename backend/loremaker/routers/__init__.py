"""
API Routers / API 路由
"""

from .characters import router as characters_router
from .taxonomies import router as taxonomies_router
from .duels import router as duels_router

__all__ = [
    "characters_router",
    "taxonomies_router",
    "duels_router",
]
