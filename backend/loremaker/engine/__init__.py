"""
Taxonomy & Duel Engine / 分类与对决引擎

Pure functions over the character library; randomness comes from an injected
``random.Random``.
"""

from .arena import resolve_faction_duel
from .auto_advance import AUTO_ADVANCE_INTERVAL_MS, AutoAdvance, create_auto_advance
from .championship import queue_opponents, run_championship
from .duel import battle_timeline, simulate_duel
from .featured import compute_featured
from .origin import classify_origin
from .pairing import PairFilter, choose_random, pick_random_pair, sample_members
from .scoring import score_character
from .taxonomy import build_taxonomies

__all__ = [
    "AUTO_ADVANCE_INTERVAL_MS",
    "AutoAdvance",
    "PairFilter",
    "battle_timeline",
    "build_taxonomies",
    "choose_random",
    "classify_origin",
    "compute_featured",
    "create_auto_advance",
    "pick_random_pair",
    "queue_opponents",
    "resolve_faction_duel",
    "run_championship",
    "sample_members",
    "score_character",
    "simulate_duel",
]
