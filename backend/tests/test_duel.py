"""Duel simulator."""
import random

import pytest

from conftest import FixedRandom, make_character
from loremaker.engine.duel import DAMAGE_SCALE, SWINGS, battle_timeline, roll_luck, simulate_duel
from loremaker.engine.scoring import score_character


@pytest.fixture
def strong():
    return make_character("strong", powers=[{"name": "Blast", "level": 50}])


@pytest.fixture
def weak():
    return make_character("weak", powers=[{"name": "Jab", "level": 10}])


def test_stronger_fighter_wins(strong, weak):
    result = simulate_duel(strong, weak, rng=random.Random(7))
    assert result.winner.id == "strong"
    assert result.loser.id == "weak"
    assert len(result.logs) == SWINGS
    assert 0 <= result.h2 <= result.h1 <= 100


def test_logs_are_monotonic_and_bounded():
    rng = random.Random(21)
    for n in range(40):
        c1 = make_character("a", powers=[{"name": "X", "level": rng.randint(0, 30)}])
        c2 = make_character("b", powers=[{"name": "Y", "level": rng.randint(0, 30)}], tags=["Mutant"])
        result = simulate_duel(c1, c2, rng=random.Random(n))
        assert [log.swing for log in result.logs] == [1, 2, 3]
        previous = (100, 100)
        for log in result.logs:
            assert 0 <= log.h1 <= previous[0]
            assert 0 <= log.h2 <= previous[1]
            assert log.dmg1 + log.dmg2 <= DAMAGE_SCALE + 1
            previous = (log.h1, log.h2)
        assert (result.h1, result.h2) == previous
        assert {result.winner.id, result.loser.id} == {"a", "b"}


def test_same_seed_same_duel(strong, weak):
    first = simulate_duel(strong, weak, rng=random.Random(123))
    second = simulate_duel(strong, weak, rng=random.Random(123))
    assert first.model_dump() == second.model_dump()


def test_missing_or_identical_fighters(strong):
    assert simulate_duel(strong, None) is None
    assert simulate_duel(None, strong) is None
    assert simulate_duel(strong, strong) is None
    assert simulate_duel(strong, make_character("strong", name="Clone")) is None


def test_breakdown_reports_scores(strong, weak):
    result = simulate_duel(strong, weak, rng=random.Random(1))
    assert result.breakdown.s1 == score_character(strong)
    assert result.breakdown.s2 == score_character(weak)
    assert result.breakdown.origin1.label == "Legend"


def test_neutral_luck_damage_split():
    # Scores 11 and 21; with zero luck each swing deals 8 and 40.
    c1 = make_character("a", powers=[{"name": "X", "level": 10}])
    c2 = make_character("b", powers=[{"name": "Y", "level": 20}])
    result = simulate_duel(c1, c2, rng=FixedRandom(0.5))
    assert [(log.dmg1, log.dmg2) for log in result.logs] == [(8, 40)] * 3
    assert [(log.h1, log.h2) for log in result.logs] == [(60, 92), (20, 84), (0, 76)]
    assert result.winner.id == "b"


def test_full_tie_goes_to_coin_flip():
    c1 = make_character("a", powers=[{"name": "X", "level": 10}])
    c2 = make_character("b", powers=[{"name": "X", "level": 10}])
    result = simulate_duel(c1, c2, rng=FixedRandom(0.5))
    assert result.h1 == result.h2 == 28
    # 0.5 is not > 0.5, so the flip goes to the second fighter
    assert result.winner.id == "b"
    result = simulate_duel(c1, c2, rng=FixedRandom(0.9))
    assert result.winner.id == "a"


def test_roll_luck_range():
    rng = random.Random(8)
    for _ in range(200):
        assert -18 <= roll_luck(100, rng) <= 18
    assert roll_luck(100, FixedRandom(0.5)) == 0


def test_battle_timeline(strong, weak):
    result = simulate_duel(strong, weak, rng=random.Random(7))
    timeline = battle_timeline(result)
    assert [entry.round for entry in timeline] == [1, 2, 3]
    assert timeline[-1].health_a == result.h1
    assert timeline[-1].health_b == result.h2
    assert timeline[0].damage_to_b == result.logs[0].dmg1
