"""Daily featured spotlight."""
from datetime import date

from conftest import make_character
from loremaker.engine.featured import compute_featured

TODAY = date(2026, 1, 1)


def _library():
    return [
        make_character(
            "aurelia",
            cover="https://img/aurelia.jpg",
            faction=["Radiant Order"],
            locations=["Lumen Spire"],
            powers=[{"name": "Flight", "level": 4}, {"name": "Light", "level": 9}],
        ),
        make_character(
            "kade",
            gallery=["https://img/kade.jpg"],
            faction=["Radiant Order"],
            locations=["Lumen Spire"],
            powers=[{"name": "Light", "level": 3}],
        ),
        make_character("hale", faction=["Radiant Order"]),
    ]


def test_stable_for_one_day():
    first = compute_featured(_library(), today=TODAY)
    second = compute_featured(_library(), today=TODAY)
    assert first["character"].id == second["character"].id


def test_prefers_portraits_and_brings_pick_forward():
    for day in range(1, 20):
        featured = compute_featured(_library(), today=date(2026, 3, day))
        character = featured["character"]
        assert character.id in {"aurelia", "kade"}
        assert featured["faction"]["name"] == "Radiant Order"
        assert featured["faction"]["members"][0].id == character.id
        assert len(featured["faction"]["members"]) == 3
        assert featured["location"]["residents"][0].id == character.id
        assert featured["power"]["name"] == "Light"
        assert featured["backgrounds"]


def test_empty_library():
    featured = compute_featured([], today=TODAY)
    assert featured["character"] is None
    assert featured["backgrounds"] == []
