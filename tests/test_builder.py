"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: test_builder.py
Description:
    Tests for turning a selection state into packing, regain and
    loses records.
"""

import pytest

from pitch_tagger.config import EngineConfig
from pitch_tagger.errors import ValidationError
from pitch_tagger.models import (
    ActionCategory,
    ActionMode,
    ActionRecord,
    ActionType,
    LosesRecord,
    PackingRecord,
    PitchZone,
    RegainRecord,
    ZoneTransition,
)
from pitch_tagger.records.builder import ActionDetails, build_record
from pitch_tagger.scoring.zone_value import DEFAULT_TABLE, label_to_zone, mirror
from pitch_tagger.selection.state import ActionSelectionState


def _state(
    category: ActionCategory = ActionCategory.PACKING,
    players: tuple[str, ...] = (),
    zones: tuple[str, ...] = (),
    mode: ActionMode = ActionMode.ATTACK,
) -> ActionSelectionState:
    state = ActionSelectionState(category=category)
    state.set_mode(mode)
    for pid in players:
        state.click_player(pid)
    for label in zones:
        state.click_zone(label_to_zone(label))
    return state


class TestPackingAttack:
    def test_pass_record(self):
        state = _state(players=("p1", "p2"), zones=("c3", "d9"))
        state.players.add_points(2)
        record = build_record(state, "m1", record_id="r1")

        assert isinstance(record, PackingRecord)
        assert record.category is ActionCategory.PACKING
        assert record.id == "r1"
        assert record.sender_id == "p1"
        assert record.receiver_id == "p2"
        assert record.action_type is ActionType.PASS
        assert record.packing_points == 2
        assert record.xt_start == DEFAULT_TABLE.threat(2, 2)
        assert record.xt_end == DEFAULT_TABLE.threat(3, 8)
        assert record.pxt == pytest.approx((record.xt_end - record.xt_start) * 2)

    def test_dribble_record_has_no_receiver(self):
        state = _state(players=("p1",), zones=("b4", "b4"))
        record = build_record(state, "m1")
        assert isinstance(record, PackingRecord)
        assert record.action_type is ActionType.DRIBBLE
        assert record.receiver_id is None
        assert record.zone_transition.is_dribble
        assert record.delta_xt == 0.0

    def test_missing_sender(self):
        state = _state(zones=("c3", "d9"))
        result = build_record(state, "m1")
        assert result == ValidationError("sender_id", result.message)

    def test_pass_without_receiver(self):
        state = _state(players=("p1",), zones=("c3", "d9"))
        result = build_record(state, "m1")
        assert isinstance(result, ValidationError)
        assert result.field == "receiver_id"

    def test_incomplete_zone_pick(self):
        state = _state(players=("p1", "p2"), zones=("c3",))
        result = build_record(state, "m1")
        assert isinstance(result, ValidationError)
        assert result.field == "zone_transition"

    def test_goal_implies_shot(self):
        state = _state(players=("p1", "p2"), zones=("d10", "d12"))
        record = build_record(state, "m1", ActionDetails(is_goal=True, is_shot=False))
        assert record.is_goal
        assert record.is_shot

    def test_details_carried(self):
        state = _state(players=("p1", "p2"), zones=("d10", "d12"))
        details = ActionDetails(minute=67, is_second_half=True, team_id="t1",
                                is_penalty_area_entry=True)
        record = build_record(state, "m1", details)
        assert record.minute == 67
        assert record.is_second_half
        assert record.team_id == "t1"
        assert record.is_penalty_area_entry

    def test_same_id_same_record(self):
        state = _state(players=("p1", "p2"), zones=("c3", "d9"))
        assert build_record(state, "m1", record_id="x") == build_record(state, "m1", record_id="x")

    def test_fresh_ids_by_default(self):
        state = _state(players=("p1", "p2"), zones=("c3", "d9"))
        assert build_record(state, "m1").id != build_record(state, "m1").id

    def test_unknown_player_rejected(self):
        state = _state(players=("p1", "ghost"), zones=("c3", "d9"))
        result = build_record(state, "m1", known_player_ids={"p1", "p2"})
        assert isinstance(result, ValidationError)
        assert "ghost" in result.message


class TestPackingDefense:
    def test_points_equal_bypassed_opponents(self):
        state = _state(players=("d1", "d2", "d3"), zones=("e5", "e8"), mode=ActionMode.DEFENSE)
        record = build_record(state, "m1")
        assert isinstance(record, PackingRecord)
        assert record.mode is ActionMode.DEFENSE
        assert record.packing_points == 3
        assert record.defense_player_ids == ("d1", "d2", "d3")
        assert record.sender_id is None

    def test_empty_set_rejected(self):
        state = _state(zones=("e5", "e8"), mode=ActionMode.DEFENSE)
        result = build_record(state, "m1")
        assert isinstance(result, ValidationError)
        assert result.field == "defense_player_ids"


class TestPossessionChange:
    def test_regain_mirrors_zone(self):
        state = _state(ActionCategory.REGAIN, players=("p7",), zones=("a1",))
        record = build_record(state, "m1")

        assert isinstance(record, RegainRecord)
        assert record.category is ActionCategory.REGAIN
        assert record.defense_zone == PitchZone(0, 0)
        assert record.attack_zone == PitchZone(7, 11)
        assert record.attack_zone == mirror(record.defense_zone)
        assert record.defense_xt == pytest.approx(0.00638303)
        assert record.attack_xt == pytest.approx(0.0379259)
        assert record.sender_id == "p7"

    def test_regain_deep_in_own_half_is_not_attack(self):
        record = build_record(_state(ActionCategory.REGAIN, ("p7",), ("d1",)), "m1")
        # Mirror of d1 is e12, the most dangerous zone.
        assert record.is_attack is False

    def test_regain_high_up_is_attack(self):
        record = build_record(_state(ActionCategory.REGAIN, ("p7",), ("d12",)), "m1")
        # Mirror of d12 is e1.
        assert record.attack_xt < 0.02
        assert record.is_attack is True

    def test_attack_threshold_is_configurable(self):
        state = _state(ActionCategory.REGAIN, ("p7",), ("d12",))
        record = build_record(state, "m1", config=EngineConfig(attack_xt_threshold=0.001))
        assert record.is_attack is False

    def test_loses_record(self):
        state = _state(ActionCategory.LOSES, players=("p9",), zones=("f6",))
        details = ActionDetails(is_reaction_5s=True, players_behind_ball=4)
        record = build_record(state, "m1", details)

        assert isinstance(record, LosesRecord)
        assert record.category is ActionCategory.LOSES
        assert record.attack_zone == mirror(record.defense_zone)
        assert record.is_reaction_5s
        assert record.players_behind_ball == 4
        assert not hasattr(record, "is_attack")

    def test_needs_exactly_one_player(self):
        state = _state(ActionCategory.REGAIN, players=("p1", "p2"), zones=("c3",))
        result = build_record(state, "m1")
        assert isinstance(result, ValidationError)
        assert result.field == "player_id"

    def test_needs_a_player(self):
        result = build_record(_state(ActionCategory.LOSES, zones=("c3",)), "m1")
        assert isinstance(result, ValidationError)
        assert result.field == "player_id"

    def test_needs_a_zone(self):
        result = build_record(_state(ActionCategory.REGAIN, players=("p1",)), "m1")
        assert isinstance(result, ValidationError)
        assert result.field == "zone"


class TestRecordTypes:
    def test_base_record_is_abstract(self):
        with pytest.raises(TypeError):
            ActionRecord(
                id="a", match_id="m1", minute=1, is_second_half=False, sender_id="p1",
                zone_transition=ZoneTransition(PitchZone(0, 0), PitchZone(0, 0)),
            )

    def test_concrete_records_carry_their_category(self):
        transition = ZoneTransition(PitchZone(0, 0), PitchZone(0, 0))
        common = dict(id="a", match_id="m1", minute=1, is_second_half=False, sender_id="p1",
                      zone_transition=transition)
        assert PackingRecord(**common).category is ActionCategory.PACKING
        assert RegainRecord(**common).category is ActionCategory.REGAIN
        assert LosesRecord(**common).category is ActionCategory.LOSES
