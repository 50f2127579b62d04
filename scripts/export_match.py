#!/usr/bin/env python3
"""
PitchTagger match export — CLI entry point.

Reads match documents from a JSON record store and:
  1. Optionally repairs legacy regain / loses records in place
  2. Writes each action collection and the shots to Parquet
  3. Prints a per-player PxT / xG table

Usage:
    python scripts/export_match.py --store data/matches --match m1
    python scripts/export_match.py --store data/matches --all --migrate
    python scripts/export_match.py --store data/matches --match m1 --out exports
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pitch_tagger.analysis.summary import summarize_player
from pitch_tagger.data.base import Collection
from pitch_tagger.data.export import export_match_parquet
from pitch_tagger.data.migration import migrate_match
from pitch_tagger.data.shots import ShotBook
from pitch_tagger.data.store import JsonRecordStore
from pitch_tagger.session import TaggingSession


def _print_summary(store: JsonRecordStore, match_id: str) -> None:
    session = TaggingSession(store, match_id)
    records = session.all_records()
    shots = ShotBook(store, match_id).shots()

    player_ids = sorted(
        {r.sender_id for r in records if r.sender_id is not None}
        | {s.player_id for s in shots if s.player_id is not None}
    )
    if not player_ids:
        print(f"  {match_id}: no tagged players")
        return

    print(f"\n  {match_id}")
    print(f"  {'player':<16} {'PxT':>8} {'xT':>8} {'xG':>6} {'reg':>4} {'los':>4}")
    for pid in player_ids:
        s = summarize_player(records, shots, pid)
        print(
            f"  {pid:<16} {s.total_pxt:>8.3f} {s.total_xt:>8.3f} "
            f"{s.total_xg:>6.2f} {s.regains:>4d} {s.loses:>4d}"
        )


def main() -> None:
    parser = argparse.ArgumentParser(
        description="PitchTagger match export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--store", type=str, required=True,
        help="Directory holding <match_id>.json documents",
    )
    parser.add_argument(
        "--match", type=str, default=None,
        help="Match id to export",
    )
    parser.add_argument(
        "--all", action="store_true",
        help="Export every match in the store",
    )
    parser.add_argument(
        "--out", type=str, default="exports",
        help="Output directory for Parquet files (default: exports)",
    )
    parser.add_argument(
        "--migrate", action="store_true",
        help="Repair legacy regain / loses records before exporting",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Debug logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = JsonRecordStore(args.store)
    if args.all:
        match_ids = store.match_ids()
    elif args.match:
        match_ids = [args.match]
    else:
        print("ERROR: pass --match <id> or --all", file=sys.stderr)
        sys.exit(1)

    out_dir = Path(args.out)
    for match_id in match_ids:
        if args.migrate:
            migrate_match(store, match_id)
        for collection in Collection:
            path = out_dir / match_id / f"{collection.value}.parquet"
            export_match_parquet(store, match_id, collection, path)
        _print_summary(store, match_id)


if __name__ == "__main__":
    main()
