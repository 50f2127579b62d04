"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: __init__.py
Description:
    Player and zone picking state machines.
"""

from pitch_tagger.selection.players import PlayerSelection
from pitch_tagger.selection.state import ActionSelectionState
from pitch_tagger.selection.zones import ZonePicker, ZonePickState

__all__ = ["ActionSelectionState", "PlayerSelection", "ZonePickState", "ZonePicker"]
