"""Championship runs."""
import random

from conftest import make_character
from loremaker.engine.championship import championship_sizes, queue_opponents, run_championship


def _fighter(id, level):
    return make_character(id, powers=[{"name": "Strike", "level": level}], cover=f"https://img/{id}.jpg")


def test_sizes_from_config():
    sizes = championship_sizes()
    assert sizes["duel"] == 1
    assert sizes["championship-3"] == 3
    assert sizes["championship-4"] == 4


def test_duel_mode_only_rival():
    champion, rival = _fighter("champ", 5), _fighter("rival", 5)
    roster = [champion, rival, _fighter("x", 1)]
    assert queue_opponents(champion, rival, roster, mode="duel") == [rival]


def test_championship_tops_up_with_distinct_opponents():
    champion, rival = _fighter("champ", 5), _fighter("rival", 5)
    roster = [champion, rival] + [_fighter(f"o{n}", 3) for n in range(5)]
    opponents = queue_opponents(champion, rival, roster, mode="championship-4", rng=random.Random(2))
    ids = [opponent.id for opponent in opponents]
    assert len(ids) == 4
    assert ids[0] == "rival"
    assert len(set(ids)) == 4
    assert "champ" not in ids


def test_small_roster_caps_queue():
    champion, rival = _fighter("champ", 5), _fighter("rival", 5)
    opponents = queue_opponents(champion, rival, [champion, rival], mode="championship-3")
    assert opponents == [rival]


def test_strong_champion_sweeps():
    champion = _fighter("champ", 50)
    opponents = [_fighter(f"o{n}", 1) for n in range(3)]
    result = run_championship(champion, opponents, mode="championship-3", rng=random.Random(4))
    assert result.champion_wins
    assert len(result.matches) == 3
    assert result.final_winner.id == "champ"


def test_run_stops_at_first_loss():
    champion = _fighter("champ", 1)
    opponents = [_fighter(f"o{n}", 50) for n in range(3)]
    result = run_championship(champion, opponents, mode="championship-3", rng=random.Random(4))
    assert not result.champion_wins
    assert len(result.matches) == 1
    assert result.final_winner.id == "o0"
    assert result.final_loser.id == "champ"


def test_no_valid_opponents():
    champion = _fighter("champ", 5)
    assert run_championship(champion, [], rng=random.Random(1)) is None
    assert run_championship(champion, [champion], rng=random.Random(1)) is None
    assert run_championship(None, [_fighter("x", 1)]) is None
