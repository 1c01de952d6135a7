"""
LoreMaker Universe - taxonomy & duel engine.
"""

__version__ = "0.1.0"
