"""
Services / 服务层
"""

from .lore_index import DIMENSIONS, LoreIndex
from .spotlight import SpotlightCarousel

__all__ = ["DIMENSIONS", "LoreIndex", "SpotlightCarousel"]
