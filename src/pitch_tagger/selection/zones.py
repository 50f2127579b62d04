"""Two-click zone picking on the pitch.

States: EMPTY → FIRST_SET → BOTH_SET.  Clicking the first zone again
completes a dribble (end = start); clicking once both ends are set
starts a new pick from the clicked zone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from pitch_tagger.models import ActionType, PitchZone, ZoneTransition

logger = logging.getLogger(__name__)


class ZonePickState(str, Enum):
    EMPTY = "empty"
    FIRST_SET = "first_set"
    BOTH_SET = "both_set"


@dataclass
class ZonePicker:
    start: PitchZone | None = None
    end: PitchZone | None = None
    action_type: ActionType = ActionType.PASS

    @property
    def state(self) -> ZonePickState:
        if self.start is None:
            return ZonePickState.EMPTY
        if self.end is None:
            return ZonePickState.FIRST_SET
        return ZonePickState.BOTH_SET

    @property
    def transition(self) -> ZoneTransition | None:
        """The completed pick, or None while it is still open."""
        if self.start is None or self.end is None:
            return None
        return ZoneTransition(self.start, self.end)

    def click(self, zone: PitchZone) -> ActionType:
        """Apply one zone click; returns the action type it implies."""
        state = self.state
        if state is ZonePickState.FIRST_SET:
            self.end = zone
            if zone == self.start:
                self.action_type = ActionType.DRIBBLE
            else:
                self.action_type = ActionType.PASS
        else:
            # EMPTY, or a finished pick: begin a new cycle.
            self.start = zone
            self.end = None
            self.action_type = ActionType.PASS
        logger.debug("Zone click %s: %s → %s", zone, state.value, self.state.value)
        return self.action_type

    def reset(self) -> None:
        self.start = None
        self.end = None
        self.action_type = ActionType.PASS
