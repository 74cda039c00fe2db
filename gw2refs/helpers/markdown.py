from typing import Any, Dict, List, Mapping, Sequence

from gw2refs.helpers.errors import ShapeError

BUFFS_HEADER = "## Buffs"


def _text(record: Mapping[str, Any], field: str) -> str:
    value = record.get(field)
    if not isinstance(value, str):
        raise ShapeError(f"record {record.get('name')!r} has no string '{field}'")
    return value


def entry_line(name: str, icon: str) -> str:
    return f"[{name}]: {icon}"


def render_grouped(records: Sequence[Mapping[str, Any]], outer: str, inner: str) -> List[str]:
    """
    Sort records by (outer, inner, name) and emit markdown with a `## outer`
    header at every outer-key change and a `### inner` header at every
    inner-key change, each record as a `[name]: icon` line.

    The trackers start empty so the first record always opens both headers;
    real keys are never empty strings.
    """
    keyed = [
        ((_text(r, outer), _text(r, inner), _text(r, "name")), _text(r, "icon"))
        for r in records
    ]
    keyed.sort(key=lambda item: item[0])

    lines: List[str] = []
    last_outer, last_inner = "", ""
    for (outer_key, inner_key, name), icon in keyed:
        if outer_key != last_outer:
            last_outer, last_inner = outer_key, inner_key
            lines.append(f"## {outer_key}")
            lines.append(f"### {inner_key}")
        elif inner_key != last_inner:
            last_inner = inner_key
            lines.append(f"### {inner_key}")
        lines.append(entry_line(name, icon))
    return lines


def render_skills(skills: Sequence[Mapping[str, Any]]) -> List[str]:
    return render_grouped(skills, "professions", "type")


def render_traits(traits: Sequence[Mapping[str, Any]]) -> List[str]:
    return render_grouped(traits, "profession", "spec_str")


def render_buffs(buffs: Dict[str, str]) -> List[str]:
    # sorted by status
    lines = [BUFFS_HEADER]
    lines.extend(entry_line(status, buffs[status]) for status in sorted(buffs))
    return lines
