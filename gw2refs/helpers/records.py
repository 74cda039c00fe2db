from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping

from gw2refs.helpers.errors import JoinError, ShapeError

SKILL_FIELDS = ("name", "icon", "type", "professions")
TRAIT_FIELDS = ("name", "icon", "specialization")


@dataclass(frozen=True)
class SpecializationEntry:
    profession: str
    name: str


def _is_id(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _require_object(record: Any, kind: str) -> Dict[str, Any]:
    if not isinstance(record, dict):
        raise ShapeError(f"{kind} record is not an object: {record!r}")
    return record


def shrink(record: Dict[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    return {k: record[k] for k in fields if k in record}


def shrink_skills(records: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    Keep only single-profession skills with a type. Skills shared by several
    professions are excluded from the sheet.
    """
    out: List[Dict[str, Any]] = []
    for record in records:
        skill = shrink(_require_object(record, "skill"), SKILL_FIELDS)
        professions = skill.get("professions")
        if not isinstance(professions, list) or len(professions) != 1:
            continue
        if skill.get("type") is None:
            continue
        skill["professions"] = professions[0]
        out.append(skill)
    return out


def shrink_traits(records: Iterable[Any]) -> List[Dict[str, Any]]:
    return [shrink(_require_object(record, "trait"), TRAIT_FIELDS) for record in records]


def build_specialization_index(records: Iterable[Any]) -> Mapping[int, SpecializationEntry]:
    index: Dict[int, SpecializationEntry] = {}
    for record in records:
        spec = _require_object(record, "specialization")
        sid = spec.get("id")
        if not _is_id(sid):
            raise ShapeError(f"specialization id missing or not an unsigned integer: {sid!r}")
        name = spec.get("name")
        if not isinstance(name, str):
            raise ShapeError(f"specialization {sid} has no string name")
        profession = spec.get("profession")
        if not isinstance(profession, str):
            raise ShapeError(f"specialization {sid} has no string profession")
        index[sid] = SpecializationEntry(profession=profession, name=name)
    return MappingProxyType(index)


def enrich_traits(traits: List[Dict[str, Any]], index: Mapping[int, SpecializationEntry]) -> List[Dict[str, Any]]:
    """Add `profession` and `spec_str` to every trait in place; returns the same list."""
    for trait in traits:
        if "specialization" not in trait:
            raise ShapeError(f"trait {trait.get('name')!r} has no specialization")
        sid = trait["specialization"]
        if not _is_id(sid):
            raise ShapeError(f"trait {trait.get('name')!r} specialization is not an unsigned integer: {sid!r}")
        entry = index.get(sid)
        if entry is None:
            raise JoinError(f"cannot find spec {sid} for trait {trait.get('name')!r}")
        trait["profession"] = entry.profession
        trait["spec_str"] = entry.name
    return traits


def extract_buffs(trait_records: Iterable[Any]) -> Dict[str, str]:
    """
    Collect buff status -> icon from the `facts` of full trait records.
    The first icon seen for a status wins; later duplicates are dropped.
    """
    buffs: Dict[str, str] = {}
    for record in trait_records:
        trait = _require_object(record, "trait")
        facts = trait.get("facts")
        if facts is None:
            continue
        if not isinstance(facts, list):
            raise ShapeError(f"trait {trait.get('id')} facts is not a list")
        for fact in facts:
            if not isinstance(fact, dict):
                raise ShapeError(f"trait {trait.get('id')} has a non-object fact: {fact!r}")
            if fact.get("type") != "Buff":
                continue
            status = fact.get("status")
            if not isinstance(status, str):
                raise ShapeError(f"cannot find status of a buff in trait {trait.get('id')}")
            icon = fact.get("icon")
            if not isinstance(icon, str):
                raise ShapeError(f"cannot find icon of buff {status!r} in trait {trait.get('id')}")
            buffs.setdefault(status, icon)
    return buffs
