"""
Tests for the time-layered danger grid.

Scenario used throughout: a 10 x 10 square grid, owner 0 parked at (0, 0)
and aircraft 1 at (5, 5) flying due north to (5, 0).
"""
import io
import logging
import math

import pytest

from danger_grid_core import (
    Aircraft,
    DangerGrid,
    DangerGridConfig,
    SpatialLayer,
    SpreadPolicy,
    TimeOffsetError,
    CellIndexError,
    NegativeDangerError,
    DistanceCostsNotComputedError,
    DistanceCostsAlreadyComputedError,
)


def neighbours(x, y):
    return [(x + dx, y + dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)]


class TestNorthboundScenario:
    """End-to-end deposits for a single aircraft heading north."""

    @pytest.fixture(autouse=True)
    def build(self, northbound_aircraft, plane_danger_10x10):
        self.grid = DangerGrid(northbound_aircraft, width=10, height=10, resolution=1, owner_id=0)
        self.pd = plane_danger_10x10

    def test_dimensions(self):
        assert self.grid.get_width_in_squares() == 10
        assert self.grid.get_height_in_squares() == 10
        assert self.grid.get_time_in_secs() == 20
        assert self.grid.get_res() == 1
        assert len(self.grid.get_danger_space()) == 23

    def test_plane_danger_scales_with_diagonal(self):
        assert self.grid.plane_danger == pytest.approx(self.pd)
        assert self.grid.danger_ratings == pytest.approx((self.pd,) * 23)

    def test_present_layer(self):
        assert self.grid.get_danger_at(5, 5, 0) == pytest.approx(self.pd)
        assert self.grid.layer_at(0).get_planes_at(5, 5) == (1,)
        # no spread at the present time, and nothing for the owner
        assert self.grid.get_danger_at(5, 4, 0) == 0.0
        assert self.grid.get_danger_at(0, 0, 0) == 0.0
        assert self.grid.layer_at(0).as_array().sum() == pytest.approx(self.pd)

    @pytest.mark.parametrize("seconds", [1, 2, 3, 4, 5])
    def test_trail_towards_destination(self, seconds):
        y = 5 - seconds
        assert self.grid.get_danger_at(5, y, seconds) == pytest.approx(0.4 * self.pd)
        for cell in neighbours(5, y):
            if 0 <= cell[1] < 10:
                assert self.grid.get_danger_at(*cell, seconds) == pytest.approx(0.28 * self.pd)

    def test_trail_moves_one_square_per_second(self):
        for seconds in range(1, 6):
            layer = self.grid.layer_at(seconds).as_array()
            x, y = divmod(int(layer.argmax()), layer.shape[1])
            assert (x, y) == (5, 5 - seconds)

    @pytest.mark.parametrize("seconds", [6, 7, 8])
    def test_destination_stays_marked(self, seconds):
        assert self.grid.get_danger_at(5, 0, seconds) == pytest.approx(self.pd)
        for cell in [(4, 0), (6, 0), (4, 1), (5, 1), (6, 1)]:
            assert self.grid.get_danger_at(*cell, seconds) == pytest.approx(0.7 * self.pd)

    def test_nothing_after_goal_hazard(self):
        for seconds in range(9, 21):
            assert self.grid.layer_at(seconds).as_array().sum() == 0.0

    def test_past_layers_empty(self):
        for seconds in (-2, -1):
            assert self.grid.layer_at(seconds).as_array().sum() == 0.0

    def test_overlay_accumulates_deposits(self):
        assert self.grid.overlay.get_danger_at(5, 5) == pytest.approx(self.pd)
        assert self.grid.overlay.get_danger_at(5, 0) == pytest.approx(3.4 * self.pd)
        assert self.grid.overlay.get_danger_at(4, 4) == 0.0

    def test_call_matches_get_danger_at(self):
        assert self.grid(5, 3, 2) == self.grid.get_danger_at(5, 3, 2)


class TestHorizonAndOwnership:
    """Look-ahead cut-off, owner handling and aircraft outside the grid."""

    def test_short_horizon_discards_later_estimates(self, northbound_aircraft):
        grid = DangerGrid(northbound_aircraft, 10, 10, 1, owner_id=0,
                          config=DangerGridConfig(look_ahead=3))
        assert len(grid.get_danger_space()) == 6
        assert grid.get_danger_at(5, 2, 3) > 0
        assert grid.get_danger_at(5, 0, 3) == 0.0
        with pytest.raises(TimeOffsetError):
            grid.get_danger_at(5, 1, 4)

    def test_unknown_owner_considers_everyone(self, northbound_aircraft, caplog):
        with caplog.at_level(logging.WARNING, logger="danger_grid_core"):
            grid = DangerGrid(northbound_aircraft, 10, 10, 1, owner_id=99)
        assert "not in the aircraft list" in caplog.text
        assert grid.get_danger_at(0, 0, 0) == pytest.approx(grid.plane_danger)
        assert grid.get_danger_at(0, 0, 1) == pytest.approx(grid.plane_danger)

    def test_aircraft_outside_grid(self, caplog):
        aircraft = [Aircraft(3, location=(20, 5), bearing=270.0,
                             destination=(5, 5), final_destination=(5, 5))]
        with caplog.at_level(logging.WARNING, logger="danger_grid_core"):
            grid = DangerGrid(aircraft, 10, 10, 1)
        assert "outside the grid" in caplog.text
        assert grid.layer_at(0).as_array().sum() == 0.0

    def test_aircraft_at_destination(self):
        aircraft = [Aircraft.heading_straight_to(4, location=(2, 2), final_destination=(2, 2))]
        grid = DangerGrid(aircraft, 10, 10, 1)
        for seconds in (0, 1, 2, 3):
            assert grid.get_danger_at(2, 2, seconds) == pytest.approx(grid.plane_danger)
        assert grid.get_danger_at(2, 2, 4) == 0.0

    def test_two_legs_share_the_clock(self):
        aircraft = [Aircraft(1, location=(5, 9), bearing=0.0,
                             destination=(5, 7), final_destination=(8, 7))]
        grid = DangerGrid(aircraft, 10, 10, 1)
        # (5, 9) -> (5, 7) takes 2 s, (5, 7) -> (8, 7) takes 3 s
        assert grid.get_danger_at(5, 7, 2) == pytest.approx(0.4 * grid.plane_danger)
        assert grid.get_danger_at(8, 7, 5) == pytest.approx(0.4 * grid.plane_danger)
        assert grid.get_danger_at(8, 7, 6) == pytest.approx(grid.plane_danger)

    def test_from_map_matches_constructor(self, northbound_aircraft):
        the_map = SpatialLayer(10, 10, 1)
        grid = DangerGrid.from_map(northbound_aircraft, the_map, owner_id=0)
        direct = DangerGrid(northbound_aircraft, 10, 10, 1, owner_id=0)
        for seconds in range(-2, 21):
            assert (grid.layer_at(seconds).as_array() == direct.layer_at(seconds).as_array()).all()


class TestSpreadPolicyAndDecay:
    """Alternative spreading and the decay hook."""

    def test_bearing_gated_spread(self, northbound_aircraft):
        config = DangerGridConfig(spread_policy=SpreadPolicy.BEARING_GATED_5)
        grid = DangerGrid(northbound_aircraft, 10, 10, 1, owner_id=0, config=config)
        pd = grid.plane_danger
        for cell in [(4, 4), (4, 3), (5, 3), (6, 3), (6, 4)]:
            assert grid.get_danger_at(*cell, 1) == pytest.approx(0.28 * pd)
        assert grid.get_danger_at(5, 5, 1) == 0.0
        # the tail is gated by the bearing to the final destination (north)
        assert grid.get_danger_at(4, 0, 6) == pytest.approx(0.7 * pd)
        assert grid.get_danger_at(5, 1, 6) == 0.0

    def test_decay(self, northbound_aircraft):
        config = DangerGridConfig(decay=lambda seconds, pd: pd / (1 + abs(seconds)))
        grid = DangerGrid(northbound_aircraft, 10, 10, 1, owner_id=0, config=config)
        pd = grid.plane_danger
        assert grid.adjust_danger(0) == pytest.approx(pd)
        assert grid.adjust_danger(1) == pytest.approx(pd / 2)
        assert grid.get_danger_at(5, 4, 1) == pytest.approx(0.4 * pd / 2)
        assert grid.get_danger_at(5, 3, 2) == pytest.approx(0.4 * pd / 3)


class TestAccessors:
    """Time offset validation, writes and copies."""

    def setup_method(self):
        aircraft = [Aircraft(1, location=(5, 5), bearing=0.0,
                             destination=(5, 0), final_destination=(5, 0))]
        self.grid = DangerGrid(aircraft, 10, 10, 1)

    @pytest.mark.parametrize("seconds", [-3, 21, 1.5, True, "1"])
    def test_bad_time_offset(self, seconds):
        with pytest.raises(TimeOffsetError):
            self.grid.get_danger_at(0, 0, seconds)

    def test_time_offset_error_is_index_error(self):
        with pytest.raises(IndexError):
            self.grid.get_danger_at(0, 0, 100)

    def test_bad_cell(self):
        with pytest.raises(CellIndexError):
            self.grid.get_danger_at(10, 0, 0)

    def test_set_and_add(self):
        self.grid.set_danger_at(1, 1, -2, 3.0)
        self.grid.add_danger_at(1, 1, -2, 1.5)
        assert self.grid.get_danger_at(1, 1, -2) == pytest.approx(4.5)

    def test_negative_danger_rejected(self):
        with pytest.raises(NegativeDangerError):
            self.grid.add_danger_at(1, 1, 0, -1.0)
        with pytest.raises(ValueError):
            self.grid.set_danger_at(1, 1, 0, -0.1)

    def test_copy_is_independent(self):
        clone = self.grid.copy()
        clone.set_danger_at(0, 0, 0, 99.0)
        assert self.grid.get_danger_at(0, 0, 0) == 0.0
        assert clone.get_danger_at(5, 5, 0) == self.grid.get_danger_at(5, 5, 0)

    def test_danger_space_is_copied(self):
        space = self.grid.get_danger_space()
        space[2].set_danger_at(0, 0, 50.0)
        assert self.grid.get_danger_at(0, 0, 0) == 0.0

    def test_dump(self):
        out = io.StringIO()
        self.grid.dump(0, file=out)
        rows = out.getvalue().splitlines()
        assert len(rows) == 10
        assert rows[5].split()[5] == "%2.0f" % (self.grid.plane_danger * 100)

    def test_to_csv(self, tmp_path):
        path = self.grid.to_csv(tmp_path / "overlay.csv")
        assert path.read_text().count("\n") == 10

    def test_repr(self):
        assert repr(self.grid) == "DangerGrid(10x10, t=[-2, 20], owner=None)"


class TestDistanceCosts:
    """Goal distance fused into the grid."""

    @pytest.fixture(autouse=True)
    def build(self, northbound_aircraft):
        self.grid = DangerGrid(northbound_aircraft, 10, 10, 1, owner_id=0)
        self.pd = self.grid.plane_danger

    def test_not_computed(self):
        assert not self.grid.has_distance_costs
        with pytest.raises(DistanceCostsNotComputedError):
            self.grid.get_dist_cost_at(0, 0)

    def test_fused_layers(self):
        self.grid.calculate_distance_costs(0, 0)
        assert self.grid.has_distance_costs
        assert self.grid.get_danger_at(3, 4, 0) == pytest.approx(5.0)
        assert self.grid.get_danger_at(5, 5, 0) == pytest.approx(self.pd + math.sqrt(50))
        assert self.grid.get_danger_at(4, 4, 1) == pytest.approx(0.28 * self.pd + math.sqrt(32))
        assert self.grid.get_dist_cost_at(3, 4) == pytest.approx(5.0)

    def test_layers_outside_range_untouched(self):
        self.grid.calculate_distance_costs(0, 0)
        assert self.grid.get_danger_at(3, 4, 20) == 0.0
        assert self.grid.get_danger_at(3, 4, -1) == 0.0

    def test_danger_weight(self):
        self.grid.calculate_distance_costs(9, 9, danger_weight=0.5)
        assert self.grid.get_danger_at(5, 5, 0) == pytest.approx(0.5 * self.pd + math.sqrt(32))

    def test_second_call_rejected(self):
        self.grid.calculate_distance_costs(0, 0)
        with pytest.raises(DistanceCostsAlreadyComputedError):
            self.grid.calculate_distance_costs(1, 1)

    def test_dump_big_numbers(self):
        self.grid.calculate_distance_costs(0, 0)
        out = io.StringIO()
        self.grid.dump_big_numbers(9, file=out)
        rows = out.getvalue().splitlines()
        assert rows[0].split()[:3] == ["0", "1", "2"]
