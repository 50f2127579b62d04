"""Tunable constants for the valuation engine.

Defaults reproduce the values the tagging app has always used.
Pass an ``EngineConfig`` to override any of them, e.g. in sensitivity
checks or when a club calibrates its own thresholds.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping


@dataclass(frozen=True)
class EngineConfig:
    """Constants used by the zone, shot and record modules."""

    # Regain is "in attack" when the mirrored zone's xT is below this.
    # Empirical, not a law of the game.
    attack_xt_threshold: float = 0.02

    direct_free_kick_multiplier: float = 1.65
    non_foot_multiplier: float = 0.73  # head / other body part
    line_defender_penalty: int = 1  # xG points per defender on the line

    max_chain_depth: int = 100
    min_xg_percent: int = 1

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EngineConfig:
        """Build a config from a plain mapping, e.g. a JSON section.

        Raises:
            ValueError: On keys that are not config fields.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**dict(data))


DEFAULT_CONFIG = EngineConfig()
