"""
Storage Layer / 存储层
"""

from .base import BaseStorage
from .library import CharacterLibrary

__all__ = ["BaseStorage", "CharacterLibrary"]
