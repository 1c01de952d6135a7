"""Taxonomy builder: grouping, ordering, summaries and entry invariants."""
import pytest

from conftest import make_character
from loremaker.engine.taxonomy import (
    SUMMARY_LIMIT,
    build_dimension,
    build_taxonomies,
    default_summary,
    entry_primary_image,
)
from loremaker.exceptions import InvariantViolation
from loremaker.schemas.taxonomy import TaxonomyEntry, TaxonomyType

LONG_SENTENCE = "This sentence is definitely long enough to count as a snippet."


def test_faction_grouping_and_order():
    c1 = make_character("c1", faction=["Order", "Void"])
    c2 = make_character("c2", faction=["Void"])
    factions = build_taxonomies([c1, c2]).factions

    assert [(entry.name, entry.member_count) for entry in factions] == [("Void", 2), ("Order", 1)]
    assert [member.id for member in factions[0].members] == ["c1", "c2"]
    assert factions[0].filter_key == "faction"
    assert factions[0].type is TaxonomyType.FACTION


def test_empty_library():
    taxonomies = build_taxonomies([])
    assert taxonomies.factions == []
    assert taxonomies.locations == []
    assert taxonomies.powers == []
    assert taxonomies.timelines == []
    assert build_taxonomies(None).factions == []


def test_every_value_is_covered():
    characters = [
        make_character("a", faction=["Order"], locations=["Spire"], powers=[{"name": "Flight", "level": 3}], era="Modern"),
        make_character("b", faction=["Void", "Order"], powers=[{"name": "Healing", "level": 5}]),
    ]
    taxonomies = build_taxonomies(characters)
    for character in characters:
        for name in character.faction:
            entry = next(entry for entry in taxonomies.factions if entry.name == name)
            assert character.id in [member.id for member in entry.members]
        for power in character.powers:
            entry = next(entry for entry in taxonomies.powers if entry.name == power.name)
            assert character.id in [member.id for member in entry.members]
    assert [entry.name for entry in taxonomies.locations] == ["Spire"]
    assert [entry.name for entry in taxonomies.timelines] == ["Modern"]


def test_repeated_value_on_one_character_counts_once():
    character = make_character("a", faction=["Void", "Void"])
    entries = build_dimension([character], TaxonomyType.FACTION)
    assert len(entries) == 1
    assert entries[0].member_count == 1


def test_ties_sorted_case_insensitively():
    characters = [
        make_character("a", faction=["beta"]),
        make_character("b", faction=["Alpha"]),
        make_character("c", faction=["gamma"]),
        make_character("d", faction=["gamma"]),
    ]
    names = [entry.name for entry in build_taxonomies(characters).factions]
    assert names == ["gamma", "Alpha", "beta"]


def test_slugs_unique_within_taxonomy():
    characters = [make_character("a", faction=["Void"]), make_character("b", faction=["void!"])]
    slugs = [entry.slug for entry in build_taxonomies(characters).factions]
    assert sorted(slugs) == ["void", "void-2"]


def test_location_uses_primary_location_only():
    character = make_character("a", locations=["New Carthage", "Lumen Spire"])
    assert character.primary_location == "New Carthage"
    locations = build_taxonomies([character]).locations
    assert [entry.name for entry in locations] == ["New Carthage"]
    assert locations[0].filter_key == "primaryLocation"


def test_timeline_entries_carry_era():
    characters = [make_character("a", era="Old Gods"), make_character("b")]
    timelines = build_taxonomies(characters).timelines
    assert len(timelines) == 1
    assert timelines[0].era == "Old Gods"
    assert timelines[0].member_count == 1


def test_primary_image_prefers_any_cover():
    first = make_character("a", gallery=["https://img/a-1.jpg"])
    second = make_character("b", cover="https://img/b-cover.jpg")
    assert entry_primary_image([first, second]) == "https://img/b-cover.jpg"
    assert entry_primary_image([first]) == "https://img/a-1.jpg"
    assert entry_primary_image([make_character("c")]) is None


def test_summary_truncated_single_line():
    long_desc = "The Void remembers.\n" + "ancient " * 60
    character = make_character("a", faction=["Void"], long_desc=long_desc)
    summary = build_taxonomies([character]).factions[0].summary
    assert len(summary) <= SUMMARY_LIMIT
    assert "\n" not in summary
    assert summary.endswith("…")


def test_summary_prefers_long_description():
    character = make_character("a", faction=["Void"], short_desc="Short.", long_desc="Long story.")
    assert build_taxonomies([character]).factions[0].summary == "Long story."


def test_summary_falls_back_to_default():
    characters = [make_character("a", faction=["Void"]), make_character("b", faction=["Void"])]
    entry = build_taxonomies(characters).factions[0]
    assert entry.summary == "Void unites 2 members within the LoreMaker Universe."


def test_power_default_summary_mentions_mastery():
    characters = [
        make_character("a", powers=[{"name": "Flight", "level": 4}]),
        make_character("b", powers=[{"name": "Flight", "level": 6}]),
    ]
    entry = build_taxonomies(characters).powers[0]
    assert entry.metrics.average_level == 5.0
    assert entry.metrics.max_level == 6
    assert entry.metrics.min_level == 4
    assert entry.summary == "Flight is channelled by 2 wielders with an average mastery of 5/10."


def test_repeated_power_counts_each_occurrence_once():
    character = make_character("a", powers=[{"name": "Flight", "level": 3}, {"name": "Flight", "level": 5}])
    entry = build_taxonomies([character]).powers[0]
    assert entry.member_count == 1
    assert entry.metrics.samples == 2
    assert entry.metrics.total_level == 8
    assert entry.metrics.average_level == 4.0


def test_blank_long_description_falls_back_to_short():
    character = make_character("a", faction=["Void"], long_desc="   \n ", short_desc="Keeper of the gate.")
    assert build_taxonomies([character]).factions[0].summary == "Keeper of the gate."


def test_default_summary_singular():
    assert default_summary("Lumen Spire", TaxonomyType.LOCATION, 1) == (
        "Lumen Spire unites 1 legend within the LoreMaker Universe."
    )


def test_snippets_filtered_and_deduplicated():
    a = make_character(
        "a",
        faction=["Void"],
        long_desc=f"Short one. {LONG_SENTENCE} Another sentence that is also long enough to be quoted here!",
    )
    b = make_character("b", faction=["Void"], long_desc=LONG_SENTENCE.upper())
    snippets = build_taxonomies([a, b]).factions[0].snippets
    assert snippets == [LONG_SENTENCE, "Another sentence that is also long enough to be quoted here!"]


def test_snippets_capped_at_three():
    text = " ".join(f"Sentence number {n} is comfortably longer than forty characters." for n in range(6))
    entry = build_taxonomies([make_character("a", faction=["Void"], long_desc=text)]).factions[0]
    assert len(entry.snippets) == 3


def test_rebuild_is_deterministic():
    characters = [
        make_character("a", faction=["Order"], powers=[{"name": "Flight", "level": 3}]),
        make_character("b", faction=["Void"], era="Modern"),
    ]
    assert build_taxonomies(characters) == build_taxonomies(characters)


def test_find_and_dimension():
    taxonomies = build_taxonomies([make_character("a", faction=["Court of Ash"])])
    assert taxonomies.find("factions", "court-of-ash").name == "Court of Ash"
    assert taxonomies.find("factions", "missing") is None
    assert taxonomies.dimension("galaxies") is None


class TestEntryInvariants:
    def test_duplicate_member_rejected(self):
        member = make_character("a")
        with pytest.raises(InvariantViolation):
            TaxonomyEntry(
                slug="void", name="Void", type=TaxonomyType.FACTION, filter_key="faction",
                members=[member, member], member_count=2,
            )

    def test_count_mismatch_rejected(self):
        with pytest.raises(InvariantViolation):
            TaxonomyEntry(
                slug="void", name="Void", type=TaxonomyType.FACTION, filter_key="faction",
                members=[make_character("a")], member_count=3,
            )
