"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: analysis/summary.py
Description:
    Per-player aggregates over the recorded actions of a match.

    PxT of a packing action = (xT_end − xT_start) × packing points,
    credited to the sender.  Regains and losses are credited to the
    single player stored on the record.  Defense-mode packing has no
    sender and counts for nobody.

    connections() collapses packing actions into sender → receiver
    edges, the same shape as a pass network built from tagged data.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from pitch_tagger.models import (
    ActionMode,
    ActionRecord,
    ActionType,
    LosesRecord,
    PackingRecord,
    RegainRecord,
    ShotEvent,
)


@dataclass(frozen=True)
class PlayerSummary:
    player_id: str

    total_pxt: float           # Σ ΔxT × packing points, as sender
    total_xt: float            # Σ ΔxT, as sender
    total_xg: float            # Σ final xG of own shots (probability)
    packing_points_sent: int
    packing_points_received: int
    passes: int
    dribbles: int
    receptions: int
    shots: int
    goals: int
    penalty_area_entries: int  # as sender or receiver
    regains: int
    regains_attack: int        # regains whose mirrored zone is below the threshold
    loses: int

    @property
    def pxt_per_action(self) -> float:
        n = self.passes + self.dribbles
        return self.total_pxt / n if n > 0 else 0.0


@dataclass(frozen=True)
class Connection:
    """All packing actions from sender_id to receiver_id."""

    sender_id: str
    receiver_id: str
    count: int
    packing_points: int
    pxt: float


def summarize_player(
    records: Iterable[ActionRecord],
    shots: Iterable[ShotEvent],
    player_id: str,
) -> PlayerSummary:
    """Aggregate every action and shot of one player.

    Args:
        records: Packing, regain and loses records (any mix).
        shots: Shots of the match; only those with ``player_id`` count.
        player_id: Player to summarise.
    """
    records = list(records)
    sent = [
        r for r in records
        if isinstance(r, PackingRecord)
        and r.mode is ActionMode.ATTACK
        and r.sender_id == player_id
    ]
    received = [
        r for r in records
        if isinstance(r, PackingRecord) and r.receiver_id == player_id
    ]

    delta = np.array([r.delta_xt for r in sent], dtype=float)
    points = np.array([r.packing_points for r in sent], dtype=float)

    own_shots = [s for s in shots if s.player_id == player_id]
    xg = np.array([s.xg or 0.0 for s in own_shots], dtype=float)

    regains = [
        r for r in records
        if isinstance(r, RegainRecord) and r.sender_id == player_id
    ]
    loses = [
        r for r in records
        if isinstance(r, LosesRecord) and r.sender_id == player_id
    ]

    return PlayerSummary(
        player_id=player_id,
        total_pxt=float(np.sum(delta * points)),
        total_xt=float(np.sum(delta)),
        total_xg=float(np.sum(xg)),
        packing_points_sent=int(np.sum(points)),
        packing_points_received=sum(r.packing_points for r in received),
        passes=sum(1 for r in sent if r.action_type is ActionType.PASS),
        dribbles=sum(1 for r in sent if r.action_type is ActionType.DRIBBLE),
        receptions=len(received),
        shots=len(own_shots),
        goals=sum(1 for s in own_shots if s.is_goal),
        penalty_area_entries=sum(
            1 for r in records
            if isinstance(r, PackingRecord)
            and r.is_penalty_area_entry
            and player_id in (r.sender_id, r.receiver_id)
        ),
        regains=len(regains),
        regains_attack=sum(1 for r in regains if r.is_attack),
        loses=len(loses),
    )


def connections(records: Iterable[ActionRecord]) -> list[Connection]:
    """Sender → receiver edges of all attack-mode passes.

    Returns:
        Connections sorted by count (desc), then by the id pair.
    """
    counts: dict[tuple[str, str], int] = defaultdict(int)
    points: dict[tuple[str, str], int] = defaultdict(int)
    pxt: dict[tuple[str, str], float] = defaultdict(float)

    for r in records:
        if not isinstance(r, PackingRecord) or r.mode is not ActionMode.ATTACK:
            continue
        if r.sender_id is None or r.receiver_id is None:
            continue
        key = (r.sender_id, r.receiver_id)
        counts[key] += 1
        points[key] += r.packing_points
        pxt[key] += r.pxt

    edges = [
        Connection(
            sender_id=s,
            receiver_id=t,
            count=counts[(s, t)],
            packing_points=points[(s, t)],
            pxt=pxt[(s, t)],
        )
        for s, t in counts
    ]
    edges.sort(key=lambda e: (-e.count, e.sender_id, e.receiver_id))
    return edges
