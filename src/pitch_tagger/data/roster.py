"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: data/roster.py
Description:
    Match roster loading and lookups.
    Parses roster JSON / CSV files into RosterPlayer entries per match
    and checks picked player ids against them.
"""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Iterable
from pathlib import Path

from pitch_tagger.models import RosterPlayer

logger = logging.getLogger(__name__)


class Roster:
    """In-memory roster provider: match id → players."""

    def __init__(self, players_by_match: dict[str, list[RosterPlayer]] | None = None):
        self._players = {k: list(v) for k, v in (players_by_match or {}).items()}

    def players_for_match(self, match_id: str) -> list[RosterPlayer]:
        return list(self._players.get(match_id, []))

    def add_players(self, match_id: str, players: Iterable[RosterPlayer]) -> None:
        self._players.setdefault(match_id, []).extend(players)

    def player_ids(self, match_id: str) -> set[str]:
        return {p.player_id for p in self._players.get(match_id, [])}


def unknown_player_ids(roster, match_id: str, player_ids: Iterable[str]) -> list[str]:
    """Ids in ``player_ids`` that are not in the match roster."""
    known = {p.player_id for p in roster.players_for_match(match_id)}
    unknown = [pid for pid in player_ids if pid not in known]
    if unknown:
        logger.warning("Players not in roster of match %s: %s", match_id, unknown)
    return unknown


def _player_from_entry(entry: dict) -> RosterPlayer:
    player = entry.get("player", entry)
    name = player.get("name") or " ".join(
        part for part in (player.get("firstName", ""), player.get("lastName", "")) if part
    )
    number = entry.get("number", player.get("number"))
    return RosterPlayer(
        player_id=str(player.get("id", "")),
        name=name,
        position=entry.get("position", player.get("position")) or None,
        number=int(number) if number not in (None, "") else None,
    )


def load_roster_json(roster_path: str | Path) -> Roster:
    """Load rosters from JSON.

    Accepts ``{"<match_id>": [player, ...], ...}`` where each player has
    ``id`` and ``name`` (or ``firstName``/``lastName``), optionally
    ``position`` and ``number``.
    """
    path = Path(roster_path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Roster file {path} must map match ids to player lists")

    roster = Roster()
    for match_id, entries in data.items():
        roster.add_players(str(match_id), (_player_from_entry(e) for e in entries))
    return roster


def load_roster_csv(csv_path: str | Path) -> Roster:
    """Load rosters from a CSV with columns matchId, id, name, position, number."""
    path = Path(csv_path)
    roster = Roster()

    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            number = row.get("number", "")
            roster.add_players(
                row["matchId"],
                [RosterPlayer(
                    player_id=row["id"],
                    name=row.get("name", ""),
                    position=row.get("position") or None,
                    number=int(number) if number else None,
                )],
            )

    return roster
