"""Record ⇄ storage dict conversion.

Stored documents use the tagging app's camelCase keys and upper-case
zone labels ("A1"), so records written here stay readable by existing
match documents and dashboards.
"""

from __future__ import annotations

from typing import Any

from pitch_tagger.models import (
    ActionCategory,
    ActionMode,
    ActionType,
    BodyPart,
    ContactFlags,
    LosesRecord,
    PackingRecord,
    PhaseFlags,
    PitchZone,
    RegainRecord,
    SetPieceSubtype,
    ShotEvent,
    ShotSituation,
    TeamContext,
    ZoneTransition,
)
from pitch_tagger.records.builder import ActionRecordT
from pitch_tagger.scoring.shot_chain import round_half_up
from pitch_tagger.scoring.zone_value import coerce_zone, mirror, zone_to_label

_PHASE_KEYS = {
    "p0_start": "isP0Start",
    "p1_start": "isP1Start",
    "p2_start": "isP2Start",
    "p3_start": "isP3Start",
    "p0": "isP0",
    "p1": "isP1",
    "p2": "isP2",
    "p3": "isP3",
}

_CONTACT_KEYS = {
    "one": "isContact1",
    "two": "isContact2",
    "three_plus": "isContact3Plus",
}


def _label(zone: PitchZone) -> str:
    return zone_to_label(zone, upper=True)


def _zone(data: dict[str, Any], *keys: str) -> PitchZone:
    for key in keys:
        zone = coerce_zone(data.get(key))
        if zone is not None:
            return zone
    raise ValueError(f"Record {data.get('id')!r} has no valid zone under {keys}")


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

def record_to_dict(record: ActionRecordT) -> dict[str, Any]:
    """Flatten a record into a storage document (None values dropped)."""
    out: dict[str, Any] = {
        "id": record.id,
        "matchId": record.match_id,
        "teamId": record.team_id,
        "category": record.category.value,
        "minute": record.minute,
        "isSecondHalf": record.is_second_half,
        "senderId": record.sender_id,
        "receiverId": record.receiver_id,
        "fromZone": _label(record.zone_transition.start),
        "toZone": _label(record.zone_transition.end),
    }

    if isinstance(record, PackingRecord):
        out.update({
            "actionType": record.action_type.value,
            "mode": record.mode.value,
            "packingPoints": record.packing_points,
            "xTValueStart": record.xt_start,
            "xTValueEnd": record.xt_end,
            "PxT": record.pxt,
            "isShot": record.is_shot,
            "isGoal": record.is_goal,
            "isPenaltyAreaEntry": record.is_penalty_area_entry,
        })
        out.update({key: getattr(record.phases, attr) for attr, key in _PHASE_KEYS.items()})
        out.update({key: getattr(record.contacts, attr) for attr, key in _CONTACT_KEYS.items()})
        if record.mode is ActionMode.DEFENSE:
            out["defensePlayerIds"] = list(record.defense_player_ids)
    else:
        out.update({
            "defenseZone": _label(record.defense_zone),
            "attackZone": _label(record.attack_zone),
            "defenseXT": record.defense_xt,
            "attackXT": record.attack_xt,
            "isBelow8s": record.is_below_8s,
            "playersBehindBall": record.players_behind_ball,
            "opponentsBehindBall": record.opponents_behind_ball,
        })
        if isinstance(record, RegainRecord):
            out.update({
                "isAttack": record.is_attack,
                "playersLeftField": record.players_left_field,
                "opponentsLeftField": record.opponents_left_field,
            })
        else:
            out.update({
                "isReaction5s": record.is_reaction_5s,
                "isOutOfPlay": record.is_out_of_play,
            })

    return {k: v for k, v in out.items() if v is not None}


def record_from_dict(data: dict[str, Any]) -> ActionRecordT:
    """Rebuild a record from a storage document carrying a ``category``.

    Raises:
        ValueError: If the category is missing/unknown or zones are invalid.
    """
    try:
        category = ActionCategory(data["category"])
    except (KeyError, ValueError) as exc:
        raise ValueError(
            f"Record {data.get('id')!r} has no valid category; "
            "run it through migration.infer_category first"
        ) from exc

    start = _zone(data, "fromZone", "startZone")
    end = _zone(data, "toZone", "endZone", "fromZone", "startZone")
    spine = dict(
        id=str(data["id"]),
        match_id=str(data.get("matchId", "")),
        minute=int(data.get("minute", 1)),
        is_second_half=data.get("isSecondHalf") is True,
        sender_id=data.get("senderId"),
        receiver_id=data.get("receiverId"),
        zone_transition=ZoneTransition(start, end),
        team_id=data.get("teamId"),
    )

    if category is ActionCategory.PACKING:
        return PackingRecord(
            **spine,
            packing_points=int(data.get("packingPoints", 0)),
            xt_start=float(data.get("xTValueStart", 0.0)),
            xt_end=float(data.get("xTValueEnd", 0.0)),
            action_type=ActionType(data.get("actionType", "pass")),
            phases=PhaseFlags(**{
                attr: bool(data.get(key, False)) for attr, key in _PHASE_KEYS.items()
            }),
            contacts=ContactFlags(**{
                attr: bool(data.get(key, False)) for attr, key in _CONTACT_KEYS.items()
            }),
            is_shot=bool(data.get("isShot", False)) or bool(data.get("isGoal", False)),
            is_goal=bool(data.get("isGoal", False)),
            is_penalty_area_entry=bool(data.get("isPenaltyAreaEntry", False)),
            mode=ActionMode(data.get("mode", "attack")),
            defense_player_ids=tuple(data.get("defensePlayerIds", ())),
        )

    defense_zone = _zone(data, "defenseZone", "fromZone", "startZone")
    possession = dict(
        defense_zone=defense_zone,
        # Attack zone is always the mirror of the defense zone.
        attack_zone=mirror(defense_zone),
        defense_xt=float(data.get("defenseXT", data.get("xTValueStart", 0.0))),
        attack_xt=float(data.get("attackXT", data.get("oppositeXT", 0.0))),
        is_below_8s=bool(data.get("isBelow8s", False)),
        players_behind_ball=int(data.get("playersBehindBall", 0)),
        opponents_behind_ball=int(
            data.get("opponentsBehindBall", data.get("opponentsBeforeBall", 0))
        ),
    )
    if category is ActionCategory.REGAIN:
        return RegainRecord(
            **spine,
            **possession,
            is_attack=bool(data.get("isAttack", False)),
            players_left_field=int(data.get("playersLeftField", 0)),
            opponents_left_field=int(data.get("opponentsLeftField", 0)),
        )
    return LosesRecord(
        **spine,
        **possession,
        is_reaction_5s=bool(data.get("isReaction5s", False)),
        is_out_of_play=bool(data.get("isOutOfPlay", False)),
    )


# ---------------------------------------------------------------------------
# Shots
# ---------------------------------------------------------------------------

def shot_to_dict(shot: ShotEvent) -> dict[str, Any]:
    """Storage document for a shot; xG is stored as a probability."""
    out: dict[str, Any] = {
        "id": shot.id,
        "matchId": shot.match_id,
        "playerId": shot.player_id,
        "minute": shot.minute,
        "x": shot.x,
        "y": shot.y,
        "xG": shot.xg,
        "baseXG": shot.base_xg_percent,
        "bodyPart": shot.body_part.value,
        "actionType": shot.situation.value,
        "sfgSubtype": shot.set_piece_subtype.value if shot.set_piece_subtype else None,
        "linePlayersCount": shot.line_defenders_count,
        "linePlayers": list(shot.line_defender_ids),
        "previousShotId": shot.previous_shot_id,
        "isGoal": shot.is_goal,
        "teamContext": shot.team_context.value,
    }
    return {k: v for k, v in out.items() if v is not None}


def shot_from_dict(data: dict[str, Any]) -> ShotEvent:
    """Rebuild a shot from storage.

    Documents written before the base value was stored carry only
    ``xG``; their ``base_xg_percent`` is set to the final value and
    should be recovered with ``shot_chain.recover_base_xg``.
    """
    xg = data.get("xG")
    xg_percent = round_half_up(float(xg) * 100) if xg is not None else None
    subtype = data.get("sfgSubtype")
    base = data.get("baseXG", xg_percent if xg_percent is not None else 0)
    return ShotEvent(
        id=str(data["id"]),
        x=float(data.get("x", 0.0)),
        y=float(data.get("y", 0.0)),
        base_xg_percent=int(base),
        body_part=BodyPart(data.get("bodyPart", "foot")),
        situation=ShotSituation(data.get("actionType", "open_play")),
        set_piece_subtype=SetPieceSubtype(subtype) if subtype else None,
        line_defenders_count=int(data.get("linePlayersCount", 0)),
        previous_shot_id=data.get("previousShotId"),
        xg_percent=xg_percent,
        match_id=data.get("matchId"),
        player_id=data.get("playerId"),
        minute=int(data.get("minute", 1)),
        is_goal=bool(data.get("isGoal", False)),
        team_context=TeamContext(data.get("teamContext", "attack")),
        line_defender_ids=tuple(data.get("linePlayers", ())),
    )
