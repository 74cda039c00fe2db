#!/usr/bin/env python3
"""
Build a markdown reference sheet of Guild Wars 2 buffs, traits and skills
from the public API and print it to stdout.

Sections come out in a fixed order: buffs, then traits grouped by
profession/specialization, then single-profession skills grouped by
profession/skill type. Progress goes to stderr; pass --out to write the
sheet to a file instead.

Usage:
  gw2-reference > reference.md
  gw2-reference --out work/reference.md
  gw2-reference --config gw2refs.yaml --quiet
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from gw2refs import gw2_api
from gw2refs.helpers.config import Settings, load_settings
from gw2refs.helpers.errors import Gw2RefsError
from gw2refs.helpers.markdown import render_buffs, render_skills, render_traits
from gw2refs.helpers.output import Progress, format_path_for_console, write_lines, write_sheet
from gw2refs.helpers.records import (
    build_specialization_index,
    enrich_traits,
    extract_buffs,
    shrink_skills,
    shrink_traits,
)


def build_reference(settings: Settings, progress: Optional[Callable[[str], None]] = None) -> List[str]:
    """Run the whole fetch -> project -> join -> render pipeline and return the sheet lines."""
    say = progress or (lambda _msg: None)

    spec_ids = gw2_api.fetch_ids("specializations", settings=settings)
    skill_ids = gw2_api.fetch_ids("skills", settings=settings)
    trait_ids = gw2_api.fetch_ids("traits", settings=settings)
    say(f"Catalog: {len(spec_ids)} specializations, {len(skill_ids)} skills, {len(trait_ids)} traits")

    specs_full = gw2_api.fetch_records(spec_ids, "specializations", settings=settings, progress=progress)
    skills_full = gw2_api.fetch_records(skill_ids, "skills", settings=settings, progress=progress)
    traits_full = gw2_api.fetch_records(trait_ids, "traits", settings=settings, progress=progress)

    buffs = extract_buffs(traits_full)
    skills = shrink_skills(skills_full)
    traits = shrink_traits(traits_full)
    index = build_specialization_index(specs_full)
    enrich_traits(traits, index)
    say(f"Kept {len(skills)} skills, {len(traits)} traits, {len(buffs)} buffs")

    return render_buffs(buffs) + render_traits(traits) + render_skills(skills)


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate the GW2 buff/trait/skill markdown reference sheet.")
    parser.add_argument("--config", type=Path, help="YAML settings file (default: gw2refs.yaml if present)")
    parser.add_argument("--base-url", help="API root, e.g. https://api.guildwars2.com/v2")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("--out", type=Path, help="Write the sheet here instead of stdout")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress messages")
    return parser.parse_args(argv)


def main(argv: Sequence[str]) -> int:
    args = parse_args(argv)
    progress = Progress(quiet=args.quiet)
    try:
        settings = load_settings(args.config, base_url=args.base_url, timeout=args.timeout)
        lines = build_reference(settings, progress)
    except Gw2RefsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.out:
        count = write_sheet(lines, args.out)
        progress(f"wrote {count} lines to {format_path_for_console(args.out, Path.cwd())}")
    else:
        write_lines(lines, sys.stdout)
    return 0


def run() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    run()
