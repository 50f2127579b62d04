"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: selection/state.py
Description:
    ActionSelectionState — the picking state of the action currently
    being recorded: player picks plus the zone pick, kept consistent
    with each other (a dribble picked on the pitch drops the receiver).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pitch_tagger.models import ActionCategory, ActionMode, ActionType, PitchZone, ZoneTransition
from pitch_tagger.selection.players import PlayerSelection
from pitch_tagger.selection.zones import ZonePicker


@dataclass
class ActionSelectionState:
    category: ActionCategory = ActionCategory.PACKING
    players: PlayerSelection = field(default_factory=PlayerSelection)
    zones: ZonePicker = field(default_factory=ZonePicker)

    @property
    def mode(self) -> ActionMode:
        return self.players.mode

    @property
    def action_type(self) -> ActionType:
        return self.players.action_type

    @property
    def transition(self) -> ZoneTransition | None:
        return self.zones.transition

    def click_player(self, player_id: str) -> None:
        self.players.click(player_id)

    def click_zone(self, zone: PitchZone) -> None:
        action_type = self.zones.click(zone)
        self.players.set_action_type(action_type)

    def set_action_type(self, action_type: ActionType) -> None:
        """Manual pass/dribble toggle in the form."""
        self.zones.action_type = action_type
        self.players.set_action_type(action_type)

    def set_mode(self, mode: ActionMode) -> None:
        self.players.set_mode(mode)

    def reset(self) -> None:
        """Called after a save or a cancel.

        Player picks survive between consecutive actions; the zone pick
        and the point counter do not.
        """
        self.zones.reset()
        self.players.set_action_type(ActionType.PASS)
        self.players.reset_points()
