"""
Fetch roadmap.sh roadmaps and store them as curated taxonomy JSON.
Each roadmap becomes one file usable with JsonFileSource.

Usage:
    uv run python scripts/fetch_roadmaps.py frontend backend devops
    uv run python scripts/fetch_roadmaps.py --all --out ~/.skill-tree/taxonomy
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from skill_tree.nodes.ingestion.taxonomy_parser import parse_taxonomy_payload
from skill_tree.nodes.ingestion.taxonomy_sources import ROLE_BASED_ROADMAPS, RoadmapSource

# --- Config ---
DEFAULT_OUT_DIR = Path.home() / ".skill-tree" / "taxonomy"


def to_curated(name, entries):
    """Serialize parsed entries in the bundled curated shape."""
    return {
        "name": name,
        "entries": [
            {
                "key": e.key,
                "name": e.display_name,
                "category": e.category,
                "keywords": sorted(e.keywords),
                "parent": e.parent_key,
                "weight": e.weight,
                "description": e.description,
                "difficulty": e.difficulty.value,
                "metadata": e.metadata,
            }
            for e in entries
        ],
    }


def main():
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("roadmaps", nargs="*", help="Roadmap names, e.g. frontend")
    parser.add_argument("--all", action="store_true", help="Fetch every role-based roadmap")
    parser.add_argument("--out", type=Path, default=DEFAULT_OUT_DIR, help="Output directory")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    names = list(ROLE_BASED_ROADMAPS) if args.all else args.roadmaps
    if not names:
        print("ERROR: name at least one roadmap or pass --all")
        sys.exit(1)

    args.out.expanduser().mkdir(parents=True, exist_ok=True)

    failed = []
    for name in names:
        try:
            payload = RoadmapSource(name).load()
        except LookupError as e:
            print(f"  SKIP {name}: {e}")
            failed.append(name)
            continue

        entries = parse_taxonomy_payload(payload, source_name=name)
        out_path = args.out.expanduser() / f"{name}.json"
        out_path.write_text(json.dumps(to_curated(name, entries), indent=2), encoding="utf-8")
        print(f"  {name}: {len(entries)} entries -> {out_path}")

    print(f"\nDone: {len(names) - len(failed)} fetched, {len(failed)} failed")
    if failed:
        sys.exit(2)


if __name__ == "__main__":
    main()
