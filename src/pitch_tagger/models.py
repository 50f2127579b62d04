"""
Project: PitchTagger
File Created: 2026-02-16 23:11:04
Author: Xingnan Zhu
File Name: models.py
Description:
    Core data models for PitchTagger match tagging.
    The schematic pitch is an 8 × 12 grid of zones:
      row ∈ [0, 7]   labelled 'a'..'h'
      col ∈ [0, 11]  labelled 1..12 (defense → attack)
    Shot coordinates are canonical percentages:
      x ∈ [0, 100]  (our team attacks towards x = 100)
      y ∈ [0, 100]  (0 = top, 100 = bottom)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from pitch_tagger.errors import ZoneRangeError

N_ROWS = 8
N_COLS = 12
N_ZONES = N_ROWS * N_COLS

ROW_LETTERS = "abcdefgh"


class ActionCategory(str, Enum):
    PACKING = "packing"
    REGAIN = "regain"
    LOSES = "loses"


class ActionMode(str, Enum):
    ATTACK = "attack"
    DEFENSE = "defense"


class ActionType(str, Enum):
    PASS = "pass"
    DRIBBLE = "dribble"


class BodyPart(str, Enum):
    FOOT = "foot"
    HEAD = "head"
    OTHER = "other"


class ShotSituation(str, Enum):
    """How the shot came about. The last five are set pieces (SFG)."""

    OPEN_PLAY = "open_play"
    COUNTER = "counter"
    REGAIN = "regain"
    CORNER = "corner"
    FREE_KICK = "free_kick"
    DIRECT_FREE_KICK = "direct_free_kick"
    PENALTY = "penalty"
    THROW_IN = "throw_in"

    @property
    def is_set_piece(self) -> bool:
        return self in _SET_PIECES


_SET_PIECES = frozenset({
    ShotSituation.CORNER,
    ShotSituation.FREE_KICK,
    ShotSituation.DIRECT_FREE_KICK,
    ShotSituation.PENALTY,
    ShotSituation.THROW_IN,
})


class SetPieceSubtype(str, Enum):
    DIRECT = "direct"
    COMBINATION = "combination"


class TeamContext(str, Enum):
    """Whose shot it is: ours (attack) or the opponent's (defense)."""

    ATTACK = "attack"
    DEFENSE = "defense"


@dataclass(frozen=True, order=True)
class PitchZone:
    """One cell of the 8 × 12 pitch grid."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if not (0 <= self.row < N_ROWS and 0 <= self.col < N_COLS):
            raise ZoneRangeError(
                f"Zone ({self.row}, {self.col}) outside the {N_ROWS}x{N_COLS} grid"
            )

    @property
    def index(self) -> int:
        """Flat index 0–95 (row-major), as used by legacy stored records."""
        return self.row * N_COLS + self.col

    @property
    def label(self) -> str:
        """Letter-number label, e.g. ``"a1"`` for (0, 0)."""
        return f"{ROW_LETTERS[self.row]}{self.col + 1}"

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class ZoneTransition:
    """A completed two-click pick on the pitch.

    ``start == end`` denotes a single-zone action (dribble).
    """

    start: PitchZone
    end: PitchZone

    @property
    def is_dribble(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class ShotEvent:
    """A shot, optionally a rebound of ``previous_shot_id``.

    ``base_xg_percent`` is the positional shot quality picked on the pitch;
    ``xg_percent`` is the final, persisted value after all modifiers
    (None until computed).
    """

    id: str
    x: float
    y: float
    base_xg_percent: int
    body_part: BodyPart = BodyPart.FOOT
    situation: ShotSituation = ShotSituation.OPEN_PLAY
    set_piece_subtype: SetPieceSubtype | None = None  # direct free kicks only
    line_defenders_count: int = 0
    previous_shot_id: str | None = None
    xg_percent: int | None = None

    # Bookkeeping carried through to storage
    match_id: str | None = None
    player_id: str | None = None
    minute: int = 1
    is_goal: bool = False
    team_context: TeamContext = TeamContext.ATTACK
    line_defender_ids: tuple[str, ...] = ()

    @property
    def is_set_piece(self) -> bool:
        return self.situation.is_set_piece

    @property
    def is_direct_free_kick(self) -> bool:
        """Direct free kick taken directly (not a combination)."""
        return (
            self.situation is ShotSituation.DIRECT_FREE_KICK
            and self.set_piece_subtype is SetPieceSubtype.DIRECT
        )

    @property
    def effective_line_defenders(self) -> int:
        """Defenders on the goal line.

        Opponent shots list our players by id; our own shots only
        record a count.
        """
        if self.team_context is TeamContext.DEFENSE:
            return len(self.line_defender_ids)
        return self.line_defenders_count

    @property
    def xg(self) -> float | None:
        """Final xG as a probability (0–1)."""
        if self.xg_percent is None:
            return None
        return self.xg_percent / 100.0


@dataclass(frozen=True)
class PhaseFlags:
    """P0–P3 markers for where the action started and ended."""

    p0_start: bool = False
    p1_start: bool = False
    p2_start: bool = False
    p3_start: bool = False
    p0: bool = False
    p1: bool = False
    p2: bool = False
    p3: bool = False


@dataclass(frozen=True)
class ContactFlags:
    """Number of touches before releasing the ball."""

    one: bool = False
    two: bool = False
    three_plus: bool = False


@dataclass(frozen=True)
class ActionRecord(ABC):
    """Spine shared by all recorded actions.

    Only the concrete packing, regain and loses records are instantiable.
    """

    id: str
    match_id: str
    minute: int
    is_second_half: bool
    sender_id: str | None  # None for defense-mode packing
    zone_transition: ZoneTransition
    receiver_id: str | None = None
    team_id: str | None = None

    @property
    @abstractmethod
    def category(self) -> ActionCategory:
        ...


@dataclass(frozen=True)
class PackingRecord(ActionRecord):
    packing_points: int = 0
    xt_start: float = 0.0
    xt_end: float = 0.0
    action_type: ActionType = ActionType.PASS
    phases: PhaseFlags = field(default_factory=PhaseFlags)
    contacts: ContactFlags = field(default_factory=ContactFlags)
    is_shot: bool = False
    is_goal: bool = False
    is_penalty_area_entry: bool = False
    mode: ActionMode = ActionMode.ATTACK
    defense_player_ids: tuple[str, ...] = ()

    @property
    def category(self) -> ActionCategory:
        return ActionCategory.PACKING

    @property
    def delta_xt(self) -> float:
        return self.xt_end - self.xt_start

    @property
    def pxt(self) -> float:
        """Packing-weighted xT gain: ΔxT × packing points."""
        return self.delta_xt * self.packing_points


@dataclass(frozen=True)
class PossessionChangeRecord(ActionRecord):
    """Fields shared by regains and losses.

    ``defense_zone`` is where the event was tagged; ``attack_zone`` is
    always its mirrored counterpart.
    """

    defense_zone: PitchZone = PitchZone(0, 0)
    attack_zone: PitchZone = PitchZone(N_ROWS - 1, N_COLS - 1)
    defense_xt: float = 0.0
    attack_xt: float = 0.0
    is_below_8s: bool = False
    players_behind_ball: int = 0
    opponents_behind_ball: int = 0


@dataclass(frozen=True)
class RegainRecord(PossessionChangeRecord):
    is_attack: bool = False
    players_left_field: int = 0
    opponents_left_field: int = 0

    @property
    def category(self) -> ActionCategory:
        return ActionCategory.REGAIN


@dataclass(frozen=True)
class LosesRecord(PossessionChangeRecord):
    is_reaction_5s: bool = False
    is_out_of_play: bool = False

    @property
    def category(self) -> ActionCategory:
        return ActionCategory.LOSES


@dataclass(frozen=True)
class RosterPlayer:
    """A player available for selection in a match."""

    player_id: str
    name: str
    position: str | None = None  # e.g. "GK", "CB", "ST"
    number: int | None = None
