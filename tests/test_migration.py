"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: test_migration.py
Description:
    Tests for legacy regain / loses repairs and category inference.
"""

import pytest

from pitch_tagger.data.base import Collection
from pitch_tagger.data.export import export_match_parquet, read_parquet_records
from pitch_tagger.data.migration import infer_category, migrate_match, migrate_regain_loses
from pitch_tagger.data.store import InMemoryRecordStore
from pitch_tagger.models import ActionCategory
from pitch_tagger.records.serialize import record_from_dict
from pitch_tagger.scoring.zone_value import DEFAULT_TABLE


class TestMigrateRegainLoses:
    def test_fills_mirror_fields(self):
        record = {"id": "r1", "fromZone": "A1"}
        migrated, changed = migrate_regain_loses(record)
        assert changed
        assert migrated["defenseZone"] == "A1"
        assert migrated["attackZone"] == "H12"
        assert migrated["defenseXT"] == pytest.approx(0.00638303)
        assert migrated["attackXT"] == pytest.approx(0.0379259)
        assert migrated["isAttack"] is False
        assert "defenseZone" not in record

    def test_zone_keys_rewritten_as_labels(self):
        migrated, changed = migrate_regain_loses({"id": "r1", "fromZone": 5, "toZone": "b2"})
        assert changed
        assert migrated["fromZone"] == "A6"
        assert migrated["toZone"] == "B2"
        assert migrated["defenseZone"] == "A6"

    def test_complete_record_with_flat_index_is_normalised(self):
        record = {"id": "r1", "fromZone": 0, "attackZone": "H12", "attackXT": 0.04,
                  "isAttack": False}
        migrated, changed = migrate_regain_loses(record)
        assert changed
        assert migrated["fromZone"] == "A1"
        assert migrated["attackXT"] == 0.04
        assert record["fromZone"] == 0

    def test_legacy_flat_index(self):
        migrated, changed = migrate_regain_loses({"id": "r1", "startZone": 47})
        assert changed
        assert migrated["defenseZone"] == "D12"
        assert migrated["attackZone"] == "E1"
        assert migrated["isAttack"] is True

    def test_loses_get_no_attack_flag(self):
        migrated, _ = migrate_regain_loses({"id": "l1", "fromZone": "c4"}, ActionCategory.LOSES)
        assert "isAttack" not in migrated
        assert migrated["attackZone"] == "F9"

    def test_complete_record_untouched(self):
        record = {"id": "r1", "fromZone": "A1", "attackZone": "H12", "attackXT": 0.04,
                  "isAttack": False}
        migrated, changed = migrate_regain_loses(record)
        assert not changed
        assert migrated is record

    def test_unusable_zone_untouched(self, caplog):
        record = {"id": "r1", "fromZone": "zz"}
        migrated, changed = migrate_regain_loses(record)
        assert not changed
        assert migrated is record
        assert "no usable zone" in caplog.text

    def test_migrated_record_reads_back(self):
        migrated, _ = migrate_regain_loses(
            {"id": "r1", "fromZone": "B3", "category": "regain", "senderId": "p1"},
        )
        record = record_from_dict(migrated)
        assert record.attack_xt == pytest.approx(DEFAULT_TABLE.threat(6, 9))


class TestInferCategory:
    def test_explicit_tag_wins(self):
        assert infer_category({"category": "loses", "playersBehindBall": 2}) is ActionCategory.LOSES

    def test_reaction_flag_means_loses(self):
        assert infer_category({"isReaction5s": False, "isBelow8s": True}) is ActionCategory.LOSES

    @pytest.mark.parametrize("key", ["playersBehindBall", "opponentsBeforeBall", "opponentsBehindBall"])
    def test_regain_markers(self, key):
        assert infer_category({key: 0}) is ActionCategory.REGAIN

    def test_below_8s_alone_means_loses(self):
        assert infer_category({"isBelow8s": True}) is ActionCategory.LOSES

    def test_default_is_packing(self):
        assert infer_category({"packingPoints": 2}) is ActionCategory.PACKING
        assert infer_category({"defensePlayerIds": ["d1"]}) is ActionCategory.PACKING


class TestMigrateMatch:
    def test_updates_store_in_place(self):
        store = InMemoryRecordStore()
        store.append_record("m1", Collection.REGAIN, {"id": "g1", "fromZone": "d12"})
        store.append_record("m1", Collection.LOSES, {"id": "l1", "fromZone": "a1"})
        store.append_record("m1", Collection.LOSES, {
            "id": "l2", "fromZone": "A1", "attackZone": "H12", "attackXT": 0.04,
            "category": "loses",
        })

        stats = migrate_match(store, "m1")

        assert stats == {"regain": 1, "loses": 1}
        regain = store.list_records("m1", Collection.REGAIN)[0]
        assert regain["category"] == "regain"
        assert regain["isAttack"] is True
        loses = store.list_records("m1", Collection.LOSES)
        assert loses[0]["attackZone"] == "H12"
        assert loses[0]["category"] == "loses"

    def test_mixed_zone_notations_export(self, tmp_path):
        store = InMemoryRecordStore()
        store.append_record("m1", Collection.REGAIN, {"id": "g0", "fromZone": 5, "category": "regain"})
        store.append_record("m1", Collection.REGAIN, {
            "id": "g1", "fromZone": "A1", "defenseZone": "A1", "defenseXT": 0.006,
            "attackZone": "H12", "attackXT": 0.04, "isAttack": False, "category": "regain",
        })

        migrate_match(store, "m1")
        path = tmp_path / "regain.parquet"
        n = export_match_parquet(store, "m1", Collection.REGAIN, path)

        assert n == 2
        rows = read_parquet_records(path)
        assert [r["fromZone"] for r in rows] == ["A6", "A1"]
        assert rows[0]["attackZone"] == "H7"
