"""
Project: PitchTagger
Author: Xingnan Zhu
File Name: test_zone_value.py
Description:
    Tests for zone geometry, labels and the xT table.
"""

import json

import numpy as np
import pytest

from pitch_tagger.errors import ZoneRangeError
from pitch_tagger.models import PitchZone
from pitch_tagger.scoring.zone_value import (
    DEFAULT_TABLE,
    ZoneTable,
    all_zones,
    coerce_zone,
    label_to_zone,
    mirror,
    threat_of,
    zone_at,
    zone_from_index,
    zone_to_label,
)


class TestMirror:
    def test_corners_swap(self):
        """a1 ↔ h12."""
        assert mirror(label_to_zone("a1")) == label_to_zone("h12")
        assert mirror(label_to_zone("h12")) == label_to_zone("a1")

    def test_involution_on_every_zone(self):
        for zone in all_zones():
            assert mirror(mirror(zone)) == zone

    def test_no_fixed_points(self):
        """8 × 12 has even sides, so no zone is its own mirror."""
        assert all(mirror(z) != z for z in all_zones())

    def test_mirrored_threat_matches_table(self):
        zone = label_to_zone("d2")
        assert DEFAULT_TABLE.mirrored_threat_of(zone) == DEFAULT_TABLE.threat_of(mirror(zone))


class TestLabels:
    def test_round_trip_every_zone(self):
        for zone in all_zones():
            assert label_to_zone(zone_to_label(zone)) == zone

    def test_examples(self):
        assert label_to_zone("a1") == PitchZone(0, 0)
        assert label_to_zone("h12") == PitchZone(7, 11)
        assert zone_to_label(PitchZone(3, 9)) == "d10"

    def test_case_insensitive_input(self):
        assert label_to_zone("C7") == label_to_zone("c7")

    def test_upper_case_output_for_storage(self):
        assert zone_to_label(PitchZone(0, 0), upper=True) == "A1"

    @pytest.mark.parametrize("label", ["", "i1", "a0", "a13", "1a", "aa", None, "a 100"])
    def test_invalid_labels_return_none(self, label):
        assert label_to_zone(label) is None

    def test_labels_are_unique(self):
        labels = {zone_to_label(z) for z in all_zones()}
        assert len(labels) == 96


class TestIndices:
    def test_flat_index(self):
        assert zone_from_index(0) == PitchZone(0, 0)
        assert zone_from_index(95) == PitchZone(7, 11)
        assert PitchZone(2, 5).index == 29

    @pytest.mark.parametrize("index", [-1, 96, 200])
    def test_index_out_of_range_raises(self, index):
        with pytest.raises(ZoneRangeError):
            zone_from_index(index)

    def test_zone_at_out_of_range_raises(self):
        with pytest.raises(ZoneRangeError):
            zone_at(8, 0)
        with pytest.raises(ZoneRangeError):
            zone_at(0, -1)

    @pytest.mark.parametrize("row, col", [(-1, 0), (8, 0), (0, -1), (0, 12)])
    def test_out_of_grid_zone_raises(self, row, col):
        with pytest.raises(ZoneRangeError):
            PitchZone(row, col)

    def test_zone_range_error_is_value_error(self):
        with pytest.raises(ValueError):
            zone_at(0, 12)

    def test_coerce_accepts_every_notation(self):
        zone = PitchZone(1, 4)
        assert coerce_zone(zone) is zone
        assert coerce_zone("B5") == zone
        assert coerce_zone(16) == zone
        assert coerce_zone(None) is None
        assert coerce_zone(-3) is None
        assert coerce_zone(True) is None


class TestThreat:
    def test_known_values(self):
        assert threat_of(label_to_zone("a1")) == pytest.approx(0.00638303)
        assert threat_of(label_to_zone("d12")) == pytest.approx(0.25745362)

    def test_highest_in_front_of_goal(self):
        grid = DEFAULT_TABLE.grid
        row, col = np.unravel_index(np.argmax(grid), grid.shape)
        assert col == 11
        assert row in (3, 4)

    def test_symmetric_across_touchlines(self):
        grid = DEFAULT_TABLE.grid
        assert np.array_equal(grid, grid[::-1, :])

    def test_threat_out_of_grid_raises(self):
        with pytest.raises(ZoneRangeError):
            DEFAULT_TABLE.threat(8, 0)

    def test_grid_is_read_only(self):
        with pytest.raises(ValueError):
            DEFAULT_TABLE.grid[0, 0] = 1.0

    def test_total_over_all_zones(self):
        assert all(threat_of(z) >= 0.0 for z in all_zones())


class TestZoneTableLoading:
    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError, match="shape"):
            ZoneTable(np.zeros((12, 8)))

    def test_rejects_negative_values(self):
        grid = np.zeros((8, 12))
        grid[0, 0] = -0.1
        with pytest.raises(ValueError):
            ZoneTable(grid)

    def test_from_json_nested_list(self, tmp_path):
        path = tmp_path / "xt.json"
        path.write_text(json.dumps([[0.5] * 12 for _ in range(8)]))
        table = ZoneTable.from_json(path)
        assert table.threat(7, 11) == 0.5

    def test_from_json_label_map(self, tmp_path):
        data = {z.label.upper(): float(z.index) for z in all_zones()}
        path = tmp_path / "xt.json"
        path.write_text(json.dumps(data))
        table = ZoneTable.from_json(path)
        assert table.threat_of(label_to_zone("b1")) == 12.0

    def test_from_json_label_map_missing_zone(self, tmp_path):
        data = {z.label: 0.1 for z in all_zones() if z.label != "c3"}
        path = tmp_path / "xt.json"
        path.write_text(json.dumps(data))
        with pytest.raises(ValueError, match="c3"):
            ZoneTable.from_json(path)

    def test_from_csv(self, tmp_path):
        path = tmp_path / "xt.csv"
        path.write_text("\n".join(",".join(["0.25"] * 12) for _ in range(8)) + "\n")
        table = ZoneTable.from_csv(path)
        assert table.threat(3, 3) == 0.25

    def test_custom_table_used_by_threat_of(self):
        table = ZoneTable(np.ones((8, 12)))
        assert threat_of(PitchZone(0, 0), table) == 1.0
