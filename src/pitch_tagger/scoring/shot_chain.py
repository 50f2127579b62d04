"""
Project: PitchTagger
File Created: 2026-02-18
Author: Xingnan Zhu
File Name: shot_chain.py
Description:
    Shot xG — the modifier pipeline from a base shot quality to the
    final, persisted xG percent, and its inverse.

    Forward (applied in this order):
      1. v = base − line_defenders × penalty       (1 pt per defender)
      2. direct free kick, taken directly:  v ×= 1.65
      3. rebound of an earlier shot:        v ×= Π(1 − xG_ancestor / 100)
      4. head / other body part:            v ×= 0.73
      5. final = max(1, round(v))           (round half up)

    Inverse undoes 4 → 3 → 2 → 1 on the stored final value and rounds
    once at the end, so base values are recovered to within ±1.

    Rebound chains follow ``previous_shot_id`` links.  Stored data can
    be malformed (dangling ids, cycles), so the walk is iterative with a
    visited set and a hard depth cap; it truncates instead of failing.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace

from pitch_tagger.config import DEFAULT_CONFIG, EngineConfig
from pitch_tagger.errors import ChainIntegrityWarning
from pitch_tagger.models import BodyPart, ShotEvent

logger = logging.getLogger(__name__)

ShotLookup = Callable[[str], "ShotEvent | None"]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from −∞ (27.5 → 28)."""
    return int(math.floor(value + 0.5))


# ---------------------------------------------------------------------------
# Rebound chain
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ChainWalk:
    """Ancestors of a shot, nearest first."""

    ancestors: tuple[ShotEvent, ...] = ()
    truncated: ChainIntegrityWarning | None = None

    @property
    def depth(self) -> int:
        return len(self.ancestors)

    @property
    def remaining(self) -> float:
        """Probability that every ancestor missed, in [0, 1]."""
        return remaining_probability(s.xg_percent for s in self.ancestors)


def remaining_probability(ancestor_xg_percents: Iterable[int | None]) -> float:
    """Π(1 − xG/100) over the ancestors' final xG values.

    Ancestors without a computed xG count as 0 %.  Each factor is
    clamped to [0, 1] so inflated set-piece values cannot flip the sign.
    """
    product = 1.0
    for xg in ancestor_xg_percents:
        p = min(max((xg or 0) / 100.0, 0.0), 1.0)
        product *= 1.0 - p
    return product


def walk_chain(
    previous_shot_id: str | None,
    lookup: ShotLookup | None,
    *,
    origin_id: str | None = None,
    config: EngineConfig | None = None,
) -> ChainWalk:
    """Collect the ancestors reachable from ``previous_shot_id``.

    Args:
        previous_shot_id: First link of the chain (None → empty walk).
        lookup: Resolves a shot id within the current match.
        origin_id: Id of the shot the chain belongs to; revisiting it
            counts as a cycle.
        config: Supplies ``max_chain_depth``.

    Returns:
        ChainWalk with at most ``max_chain_depth`` ancestors and the
        reason the walk stopped early, if it did.
    """
    cfg = config or DEFAULT_CONFIG
    if previous_shot_id is None:
        return ChainWalk()

    visited: set[str] = {origin_id} if origin_id is not None else set()
    ancestors: list[ShotEvent] = []
    truncated: ChainIntegrityWarning | None = None
    current_id: str | None = previous_shot_id

    while current_id is not None:
        if current_id in visited:
            truncated = ChainIntegrityWarning.CYCLE
            break
        if len(ancestors) >= cfg.max_chain_depth:
            truncated = ChainIntegrityWarning.DEPTH_CAP
            break
        shot = lookup(current_id) if lookup is not None else None
        if shot is None:
            truncated = ChainIntegrityWarning.MISSING
            break
        visited.add(current_id)
        ancestors.append(shot)
        current_id = shot.previous_shot_id

    if truncated is not None:
        logger.warning(
            "Rebound chain of shot %s truncated at depth %d (%s, next id %s)",
            origin_id, len(ancestors), truncated.value, current_id,
        )
    return ChainWalk(ancestors=tuple(ancestors), truncated=truncated)


# ---------------------------------------------------------------------------
# Modifier pipeline
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ShotModifiers:
    """Everything besides the base value that shapes a shot's final xG."""

    line_defenders: int = 0
    direct_free_kick: bool = False
    remaining: float = 1.0  # chain factor Π(1 − xG_i)
    non_foot: bool = False

    @classmethod
    def from_shot(
        cls,
        shot: ShotEvent,
        lookup: ShotLookup | None = None,
        config: EngineConfig | None = None,
    ) -> ShotModifiers:
        walk = walk_chain(
            shot.previous_shot_id, lookup, origin_id=shot.id, config=config,
        )
        return cls(
            line_defenders=shot.effective_line_defenders,
            direct_free_kick=shot.is_direct_free_kick,
            remaining=walk.remaining,
            non_foot=shot.body_part is not BodyPart.FOOT,
        )


def apply_modifiers(
    base_percent: float,
    mods: ShotModifiers,
    config: EngineConfig | None = None,
) -> int:
    """Forward pipeline: base xG percent → final xG percent."""
    cfg = config or DEFAULT_CONFIG
    v = base_percent - mods.line_defenders * cfg.line_defender_penalty
    if mods.direct_free_kick:
        v *= cfg.direct_free_kick_multiplier
    v *= mods.remaining
    if mods.non_foot:
        v *= cfg.non_foot_multiplier
    return max(cfg.min_xg_percent, round_half_up(v))


def invert_modifiers(
    final_percent: float,
    mods: ShotModifiers,
    config: EngineConfig | None = None,
) -> int:
    """Inverse pipeline: final xG percent → base xG percent (±1).

    A zero chain factor (an ancestor at 100 %) erased the base value;
    that step is skipped rather than dividing by zero.
    """
    cfg = config or DEFAULT_CONFIG
    v = float(final_percent)
    if mods.non_foot:
        v /= cfg.non_foot_multiplier
    if mods.remaining > 0.0:
        v /= mods.remaining
    else:
        logger.warning("Chain factor is zero; base xG cannot be recovered exactly")
    if mods.direct_free_kick:
        v /= cfg.direct_free_kick_multiplier
    v += mods.line_defenders * cfg.line_defender_penalty
    return max(cfg.min_xg_percent, round_half_up(v))


def final_xg(
    shot: ShotEvent,
    lookup: ShotLookup | None = None,
    config: EngineConfig | None = None,
) -> int:
    """Final xG percent for ``shot`` from its base value and modifiers."""
    mods = ShotModifiers.from_shot(shot, lookup, config)
    return apply_modifiers(shot.base_xg_percent, mods, config)


def recover_base_xg(
    shot: ShotEvent,
    lookup: ShotLookup | None = None,
    config: EngineConfig | None = None,
) -> int:
    """Base xG percent of a stored shot, for reopening it in the editor.

    Raises:
        ValueError: If the shot has no stored final xG.
    """
    if shot.xg_percent is None:
        raise ValueError(f"Shot {shot.id} has no stored xG to invert")
    mods = ShotModifiers.from_shot(shot, lookup, config)
    return invert_modifiers(shot.xg_percent, mods, config)


def evaluate_shot(
    shot: ShotEvent,
    lookup: ShotLookup | None = None,
    config: EngineConfig | None = None,
) -> ShotEvent:
    """Return a copy of ``shot`` with ``xg_percent`` filled in."""
    return replace(shot, xg_percent=final_xg(shot, lookup, config))
