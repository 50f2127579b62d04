"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: __init__.py
Description:
    Zone threat and shot xG computation.
"""

from pitch_tagger.scoring.shot_chain import (
    ShotModifiers,
    evaluate_shot,
    final_xg,
    recover_base_xg,
    walk_chain,
)
from pitch_tagger.scoring.zone_value import DEFAULT_TABLE, ZoneTable, mirror, threat_of

__all__ = [
    "DEFAULT_TABLE",
    "ShotModifiers",
    "ZoneTable",
    "evaluate_shot",
    "final_xg",
    "mirror",
    "recover_base_xg",
    "threat_of",
    "walk_chain",
]
