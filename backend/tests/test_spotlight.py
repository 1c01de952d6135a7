"""Spotlight carousel."""
from conftest import make_character
from loremaker.engine.taxonomy import build_taxonomies
from loremaker.services.spotlight import SpotlightCarousel


def _entries(*names):
    characters = [make_character(f"c{n}", faction=[name]) for n, name in enumerate(names)]
    return build_taxonomies(characters).factions


def test_auto_advance_rotates(manual_timer):
    carousel = SpotlightCarousel(_entries("Alpha", "Beta", "Gamma"), timer=manual_timer)
    carousel.start()
    assert carousel.current.name == "Alpha"
    manual_timer.advance_ms(60_000)
    assert carousel.current.name == "Beta"
    manual_timer.advance_ms(120_000)
    assert carousel.current.name == "Alpha"
    carousel.stop()
    manual_timer.advance_ms(600_000)
    assert carousel.current.name == "Alpha"


def test_navigate_restarts_interval(manual_timer):
    carousel = SpotlightCarousel(_entries("Alpha", "Beta", "Gamma"), timer=manual_timer)
    carousel.start()
    manual_timer.advance_ms(50_000)
    assert carousel.navigate(-1).name == "Gamma"
    assert carousel.direction == -1
    manual_timer.advance_ms(50_000)
    assert carousel.current.name == "Gamma"
    manual_timer.advance_ms(10_000)
    assert carousel.current.name == "Alpha"


def test_limit_and_single_slide(manual_timer):
    carousel = SpotlightCarousel(_entries("A", "B", "C", "D"), limit=2, timer=manual_timer)
    assert len(carousel.slides) == 2
    single = SpotlightCarousel(_entries("Solo"), timer=manual_timer)
    single.start()
    manual_timer.advance_ms(300_000)
    assert single.current.name == "Solo"
    assert manual_timer.pending == 0


def test_replace_keeps_current_slide(manual_timer):
    carousel = SpotlightCarousel(_entries("Alpha", "Beta"), timer=manual_timer)
    carousel.next()
    carousel.replace(_entries("Beta", "Gamma", "Alpha"))
    assert carousel.current.name == "Beta"
    carousel.replace([])
    assert carousel.current is None
    assert carousel.next() is None
