"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: test_roster.py
Description:
    Tests for roster loading, roster checks and engine config.
"""

import json

import pytest

from pitch_tagger.config import DEFAULT_CONFIG, EngineConfig
from pitch_tagger.data.roster import Roster, load_roster_csv, load_roster_json, unknown_player_ids
from pitch_tagger.models import RosterPlayer


class TestRoster:
    def test_players_for_match(self):
        roster = Roster({"m1": [RosterPlayer("p1", "Anna", "CB", 4)]})
        assert roster.players_for_match("m1")[0].name == "Anna"
        assert roster.players_for_match("m2") == []

    def test_unknown_ids(self, caplog):
        roster = Roster({"m1": [RosterPlayer("p1", "Anna"), RosterPlayer("p2", "Bea")]})
        assert unknown_player_ids(roster, "m1", ["p1", "p7"]) == ["p7"]
        assert "p7" in caplog.text
        assert unknown_player_ids(roster, "m1", ["p2"]) == []


class TestRosterLoaders:
    def test_json(self, tmp_path):
        path = tmp_path / "roster.json"
        path.write_text(json.dumps({
            "m1": [
                {"id": "p1", "name": "Anna", "position": "GK", "number": 1},
                {"id": 7, "firstName": "Bea", "lastName": "Kowalska"},
            ],
        }), encoding="utf-8")
        roster = load_roster_json(path)
        players = roster.players_for_match("m1")
        assert players[0] == RosterPlayer("p1", "Anna", "GK", 1)
        assert players[1].player_id == "7"
        assert players[1].name == "Bea Kowalska"
        assert players[1].number is None

    def test_json_must_be_mapping(self, tmp_path):
        path = tmp_path / "roster.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ValueError):
            load_roster_json(path)

    def test_csv(self, tmp_path):
        path = tmp_path / "roster.csv"
        path.write_text(
            "matchId,id,name,position,number\n"
            "m1,p1,Anna,CB,4\n"
            "m1,p2,Bea,,\n"
            "m2,p3,Cleo,ST,9\n",
            encoding="utf-8",
        )
        roster = load_roster_csv(path)
        assert roster.player_ids("m1") == {"p1", "p2"}
        bea = roster.players_for_match("m1")[1]
        assert bea.position is None
        assert bea.number is None
        assert roster.players_for_match("m2")[0].number == 9


class TestEngineConfig:
    def test_defaults(self):
        assert DEFAULT_CONFIG.attack_xt_threshold == 0.02
        assert DEFAULT_CONFIG.max_chain_depth == 100

    def test_from_dict(self):
        cfg = EngineConfig.from_dict({"non_foot_multiplier": 0.8})
        assert cfg.non_foot_multiplier == 0.8
        assert cfg.direct_free_kick_multiplier == 1.65

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ValueError, match="head_multiplier"):
            EngineConfig.from_dict({"head_multiplier": 0.8})
