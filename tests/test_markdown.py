"""Unit tests for the grouped markdown renderers."""

from __future__ import annotations

import pytest

from gw2refs.helpers.errors import ShapeError
from gw2refs.helpers.markdown import render_buffs, render_grouped, render_skills, render_traits

pytestmark = pytest.mark.unit


def _skill(profession: str, skill_type: str, name: str) -> dict:
    return {"professions": profession, "type": skill_type, "name": name, "icon": f"{name}.png"}


def test_render_skills_emits_headers_only_on_key_changes() -> None:
    """Headers appear once per contiguous (profession) and (profession, type) run."""

    skills = [_skill("A", "heal", "Z"), _skill("A", "heal", "M"), _skill("A", "util", "B"), _skill("B", "heal", "C")]

    assert render_skills(skills) == [
        "## A",
        "### heal",
        "[M]: M.png",
        "[Z]: Z.png",
        "### util",
        "[B]: B.png",
        "## B",
        "### heal",
        "[C]: C.png",
    ]


def test_render_skills_sorts_case_sensitively() -> None:
    """Ordering is by code point, so uppercase sorts before lowercase."""

    skills = [_skill("Thief", "Utility", "blink"), _skill("Thief", "Utility", "Shadowstep")]

    assert render_skills(skills)[2:] == ["[Shadowstep]: Shadowstep.png", "[blink]: blink.png"]


def test_render_skills_outer_change_reopens_inner_header() -> None:
    """A new profession re-emits the inner header even when the type is unchanged."""

    lines = render_skills([_skill("Guardian", "Heal", "a"), _skill("Warrior", "Heal", "b")])

    assert lines == ["## Guardian", "### Heal", "[a]: a.png", "## Warrior", "### Heal", "[b]: b.png"]


def test_render_traits_groups_by_profession_and_specialization() -> None:
    """Traits group under profession then specialization display name."""

    traits = [{"name": "X", "icon": "i", "specialization": 1, "profession": "Guardian", "spec_str": "Zeal"}]

    assert render_traits(traits) == ["## Guardian", "### Zeal", "[X]: i"]


def test_render_grouped_is_idempotent() -> None:
    """Rendering the same input twice gives identical output."""

    skills = [_skill("A", "heal", "M"), _skill("A", "heal", "Z"), _skill("B", "util", "C")]

    assert render_grouped(skills, "professions", "type") == render_grouped(skills, "professions", "type")


def test_render_grouped_does_not_reorder_caller_input() -> None:
    """Sorting happens on a private copy."""

    skills = [_skill("B", "heal", "C"), _skill("A", "heal", "M")]
    render_skills(skills)

    assert [s["name"] for s in skills] == ["C", "M"]


def test_render_grouped_empty_input() -> None:
    """No records means no lines, not even headers."""

    assert render_skills([]) == []
    assert render_traits([]) == []


@pytest.mark.parametrize("missing", ["name", "icon", "type"])
def test_render_skills_requires_string_fields(missing) -> None:
    """A record without a string name, icon or grouping key is a shape error."""

    skill = _skill("A", "heal", "M")
    del skill[missing]

    with pytest.raises(ShapeError, match=missing):
        render_skills([skill])


def test_render_buffs_sorted_by_status() -> None:
    """Buff lines follow the fixed header in status order."""

    assert render_buffs({"Might": "m.png", "Fury": "f.png", "Aegis": "a.png"}) == [
        "## Buffs",
        "[Aegis]: a.png",
        "[Fury]: f.png",
        "[Might]: m.png",
    ]


def test_render_buffs_always_emits_header() -> None:
    """An empty buff map still yields the section header."""

    assert render_buffs({}) == ["## Buffs"]
