"""
Project: PitchTagger
File Created: 2026-02-18
Author: Xingnan Zhu
File Name: records/builder.py
Description:
    ActionRecordBuilder — turns the current selection state into the
    record that gets persisted.

    Packing   needs a full zone transition; attack mode needs a sender
              (and a receiver for passes), defense mode a non-empty set
              of bypassed opponents.  xT is read at the start and end
              zones.
    Regain /  need one zone and exactly one picked player.  The zone is
    Loses     stored as the defense zone; its mirror is the attack zone,
              whose threat is the attacking-side value of the event.

    Missing input is reported as a ValidationError value, never raised:
    the caller decides whether to show it or let the user fix it.
"""

from __future__ import annotations

import uuid
from collections.abc import Collection
from dataclasses import dataclass, field
from typing import Union

from pitch_tagger.config import DEFAULT_CONFIG, EngineConfig
from pitch_tagger.errors import ValidationError
from pitch_tagger.models import (
    ActionCategory,
    ActionMode,
    ActionType,
    ContactFlags,
    LosesRecord,
    PackingRecord,
    PhaseFlags,
    PitchZone,
    RegainRecord,
    ZoneTransition,
)
from pitch_tagger.scoring.zone_value import DEFAULT_TABLE, ZoneTable, mirror
from pitch_tagger.selection.state import ActionSelectionState

ActionRecordT = Union[PackingRecord, RegainRecord, LosesRecord]


@dataclass(frozen=True)
class ActionDetails:
    """Form fields that are not picked on the pitch or the player grid.

    Each category only reads the fields that belong to it.
    """

    minute: int = 1
    is_second_half: bool = False
    team_id: str | None = None

    # Packing
    phases: PhaseFlags = field(default_factory=PhaseFlags)
    contacts: ContactFlags = field(default_factory=ContactFlags)
    is_shot: bool = False
    is_goal: bool = False
    is_penalty_area_entry: bool = False

    # Regain / loses
    is_below_8s: bool = False
    players_behind_ball: int = 0
    opponents_behind_ball: int = 0
    players_left_field: int = 0  # regain
    opponents_left_field: int = 0  # regain
    is_reaction_5s: bool = False  # loses
    is_out_of_play: bool = False  # loses


def build_record(
    state: ActionSelectionState,
    match_id: str,
    details: ActionDetails | None = None,
    *,
    record_id: str | None = None,
    known_player_ids: Collection[str] | None = None,
    table: ZoneTable | None = None,
    config: EngineConfig | None = None,
) -> ActionRecordT | ValidationError:
    """Build the record for ``state.category``.

    Args:
        state: Current picking state.
        match_id: Match the record belongs to.
        details: Remaining form fields (defaults when None).
        record_id: Id to use; a fresh UUID when None.  Passing the same
            id makes a retried build produce an identical record.
        known_player_ids: Roster of the match.  When given, picks that
            are not on it are rejected.
        table: xT table (default: built-in grid).
        config: Supplies the regain attack threshold.

    Returns:
        The record, or a ValidationError naming the missing field.
    """
    details = details or ActionDetails()
    table = table or DEFAULT_TABLE
    cfg = config or DEFAULT_CONFIG
    record_id = record_id or str(uuid.uuid4())

    if known_player_ids is not None:
        unknown = [pid for pid in state.players.selected_ids if pid not in known_player_ids]
        if unknown:
            return ValidationError(
                "player_id", f"not in the match roster: {', '.join(unknown)}",
            )

    if state.category is ActionCategory.PACKING:
        return _build_packing(state, match_id, details, record_id, table)
    return _build_possession_change(state, match_id, details, record_id, table, cfg)


def _build_packing(
    state: ActionSelectionState,
    match_id: str,
    details: ActionDetails,
    record_id: str,
    table: ZoneTable,
) -> PackingRecord | ValidationError:
    players = state.players
    transition = state.transition
    if transition is None:
        return ValidationError("zone_transition", "pick a start and an end zone")

    action_type = ActionType.DRIBBLE if transition.is_dribble else players.action_type

    if players.mode is ActionMode.DEFENSE:
        if not players.defense_player_ids:
            return ValidationError("defense_player_ids", "pick at least one bypassed opponent")
        sender_id = players.sender_id
        receiver_id = None
        defense_ids = tuple(sorted(players.defense_player_ids))
        points = len(defense_ids)
    else:
        if players.sender_id is None:
            return ValidationError("sender_id", "pick the player starting the action")
        if action_type is ActionType.PASS and players.receiver_id is None:
            return ValidationError("receiver_id", "pick the player receiving the pass")
        sender_id = players.sender_id
        receiver_id = players.receiver_id if action_type is ActionType.PASS else None
        defense_ids = ()
        points = players.points

    return PackingRecord(
        id=record_id,
        match_id=match_id,
        minute=details.minute,
        is_second_half=details.is_second_half,
        sender_id=sender_id,
        receiver_id=receiver_id,
        zone_transition=transition,
        team_id=details.team_id,
        packing_points=points,
        xt_start=table.threat_of(transition.start),
        xt_end=table.threat_of(transition.end),
        action_type=action_type,
        phases=details.phases,
        contacts=details.contacts,
        # A goal is always a shot.
        is_shot=details.is_shot or details.is_goal,
        is_goal=details.is_goal,
        is_penalty_area_entry=details.is_penalty_area_entry,
        mode=players.mode,
        defense_player_ids=defense_ids,
    )


def _build_possession_change(
    state: ActionSelectionState,
    match_id: str,
    details: ActionDetails,
    record_id: str,
    table: ZoneTable,
    cfg: EngineConfig,
) -> RegainRecord | LosesRecord | ValidationError:
    role = "ball receiver" if state.category is ActionCategory.REGAIN else "ball loser"

    zone = state.zones.start
    if zone is None:
        return ValidationError("zone", "pick the zone where possession changed")

    selected = state.players.selected_ids
    if len(selected) != 1:
        return ValidationError(
            "player_id", f"pick exactly one {role} ({len(selected)} selected)",
        )
    player_id = selected[0]

    defense_zone: PitchZone = zone
    attack_zone = mirror(defense_zone)
    defense_xt = table.threat_of(defense_zone)
    attack_xt = table.threat_of(attack_zone)

    common = dict(
        id=record_id,
        match_id=match_id,
        minute=details.minute,
        is_second_half=details.is_second_half,
        sender_id=player_id,
        zone_transition=ZoneTransition(defense_zone, defense_zone),
        team_id=details.team_id,
        defense_zone=defense_zone,
        attack_zone=attack_zone,
        defense_xt=defense_xt,
        attack_xt=attack_xt,
        is_below_8s=details.is_below_8s,
        players_behind_ball=details.players_behind_ball,
        opponents_behind_ball=details.opponents_behind_ball,
    )

    if state.category is ActionCategory.REGAIN:
        return RegainRecord(
            **common,
            is_attack=attack_xt < cfg.attack_xt_threshold,
            players_left_field=details.players_left_field,
            opponents_left_field=details.opponents_left_field,
        )
    return LosesRecord(
        **common,
        is_reaction_5s=details.is_reaction_5s,
        is_out_of_play=details.is_out_of_play,
    )
