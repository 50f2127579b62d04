"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: selection/players.py
Description:
    Cyclic player picking for pass / dribble / defense recording.

    Attack mode, click on player p (first matching rule wins):
      1. p is the sender          → clear sender
      2. p is the receiver        → clear receiver
      3. no sender                → p becomes sender
      4. sender, no receiver      → p becomes receiver
      5. both set, p is new       → p becomes sender, receiver cleared
    Dribbles never have a receiver, so only rules 1, 3 and 5 apply.

    Defense mode replaces sender/receiver with a set of bypassed
    opponents toggled by membership; the packing point counter is tied
    to the size of that set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pitch_tagger.models import ActionMode, ActionType

logger = logging.getLogger(__name__)


@dataclass
class PlayerSelection:
    """Mutable picking state for one action being recorded."""

    mode: ActionMode = ActionMode.ATTACK
    action_type: ActionType = ActionType.PASS
    sender_id: str | None = None
    receiver_id: str | None = None
    defense_player_ids: set[str] = field(default_factory=set)
    points: int = 0

    # ------------------------------------------------------------------ #
    # Clicks                                                              #
    # ------------------------------------------------------------------ #

    def click(self, player_id: str) -> None:
        """Apply one player click according to the current mode."""
        if self.mode is ActionMode.DEFENSE:
            self.toggle_defender(player_id)
            return

        if self.sender_id == player_id:
            self.sender_id = None
        elif self.receiver_id == player_id:
            self.receiver_id = None
        elif self.sender_id is None:
            self.sender_id = player_id
        elif self.receiver_id is None and self.action_type is ActionType.PASS:
            self.receiver_id = player_id
        else:
            self.sender_id = player_id
            self.receiver_id = None
        logger.debug(
            "Player click %s → sender=%s receiver=%s",
            player_id, self.sender_id, self.receiver_id,
        )

    def toggle_defender(self, player_id: str) -> None:
        """Add or remove a bypassed opponent (defense mode)."""
        if player_id in self.defense_player_ids:
            self.defense_player_ids.discard(player_id)
        else:
            self.defense_player_ids.add(player_id)
        self.sync_defense_points()

    # ------------------------------------------------------------------ #
    # Mode / type switches                                                #
    # ------------------------------------------------------------------ #

    def set_action_type(self, action_type: ActionType) -> None:
        self.action_type = action_type
        if action_type is ActionType.DRIBBLE:
            self.receiver_id = None

    def set_mode(self, mode: ActionMode) -> None:
        """Switch between attack and defense; clears the other mode's picks."""
        if mode is self.mode:
            return
        self.mode = mode
        if mode is ActionMode.DEFENSE:
            self.sender_id = None
            self.receiver_id = None
        else:
            self.defense_player_ids.clear()
            self.points = 0
        self.sync_defense_points()

    # ------------------------------------------------------------------ #
    # Point counter                                                       #
    # ------------------------------------------------------------------ #

    def add_points(self, delta: int) -> None:
        self.points += delta
        self.sync_defense_points()

    def set_points(self, value: int) -> None:
        self.points = value
        self.sync_defense_points()

    def sync_defense_points(self) -> None:
        """In defense mode, restore points == number of bypassed opponents."""
        if self.mode is not ActionMode.DEFENSE:
            return
        delta = len(self.defense_player_ids) - self.points
        if delta:
            self.points += delta

    @property
    def selected_ids(self) -> list[str]:
        """Every player id currently picked, in a stable order."""
        if self.mode is ActionMode.DEFENSE:
            return sorted(self.defense_player_ids)
        return [pid for pid in (self.sender_id, self.receiver_id) if pid is not None]

    def reset_points(self) -> None:
        self.points = 0
        self.sync_defense_points()

    def clear(self) -> None:
        """Drop every pick; mode and action type are kept."""
        self.sender_id = None
        self.receiver_id = None
        self.defense_player_ids.clear()
        self.points = 0
