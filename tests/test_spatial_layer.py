"""
Tests for the single-layer spatial grid.
"""
import io

import numpy as np
import pytest

from danger_grid_core import SpatialLayer, CellIndexError, ConfigurationError


class TestSpatialLayerDimensions:
    """Width/height in squares and degenerate maps."""

    def test_squares_from_field_size(self):
        layer = SpatialLayer(500, 300, 10)
        assert layer.get_width_in_squares() == 50
        assert layer.get_height_in_squares() == 30
        assert layer.shape == (50, 30)
        assert layer.get_resolution() == 10

    def test_partial_square_counts_as_whole(self):
        layer = SpatialLayer(10.5, 5, 1)
        assert layer.get_width_in_squares() == 11

    @pytest.mark.parametrize("width,height,resolution", [
        (0, 10, 1),
        (10, 0, 1),
        (10, 10, 0),
        (10, 10, -1),
    ])
    def test_degenerate_map_rejected(self, width, height, resolution):
        with pytest.raises(ConfigurationError):
            SpatialLayer(width, height, resolution)

    def test_like_keeps_shape_and_starts_empty(self):
        layer = SpatialLayer(30, 20, 10)
        layer.set_danger_at(1, 1, 4.0)
        empty = SpatialLayer.like(layer)
        assert empty.shape == (3, 2)
        assert empty.get_danger_at(1, 1) == 0.0
        assert empty.get_resolution() == 10

    def test_from_danger_copies_array(self):
        values = np.arange(6, dtype=float).reshape(3, 2)
        layer = SpatialLayer.from_danger(values)
        values[0, 0] = 100.0
        assert layer.shape == (3, 2)
        assert layer.get_danger_at(0, 0) == 0.0
        assert layer.get_danger_at(2, 1) == 5.0

    def test_from_danger_rejects_1d(self):
        with pytest.raises(ConfigurationError):
            SpatialLayer.from_danger(np.zeros(4))


class TestSpatialLayerAccess:
    """Checked and safe danger access."""

    def setup_method(self):
        self.layer = SpatialLayer(5, 4, 1)

    def test_set_and_add(self):
        self.layer.set_danger_at(2, 3, 1.5)
        self.layer.add_danger_at(2, 3, 0.5)
        assert self.layer.get_danger_at(2, 3) == pytest.approx(2.0)

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (5, 0), (0, 4)])
    def test_out_of_bounds_raises(self, x, y):
        with pytest.raises(CellIndexError):
            self.layer.get_danger_at(x, y)
        with pytest.raises(IndexError):
            self.layer.add_danger_at(x, y, 1.0)

    def test_safely_add_ignores_out_of_bounds(self):
        assert self.layer.safely_add_danger_at(-1, 2, 3.0) is False
        assert self.layer.safely_add_danger_at(4, 3, 3.0) is True
        assert self.layer.get_danger_at(4, 3) == 3.0
        assert self.layer.as_array().sum() == pytest.approx(3.0)

    def test_as_array_is_a_copy(self):
        values = self.layer.as_array()
        values[0, 0] = 9.0
        assert self.layer.get_danger_at(0, 0) == 0.0

    def test_copy_is_independent(self):
        self.layer.set_danger_at(1, 1, 2.0)
        self.layer.add_plane_at(1, 1, 4)
        clone = self.layer.copy()
        clone.set_danger_at(1, 1, 7.0)
        clone.add_plane_at(1, 1, 5)
        assert self.layer.get_danger_at(1, 1) == 2.0
        assert self.layer.get_planes_at(1, 1) == (4,)
        assert clone.get_planes_at(1, 1) == (4, 5)


class TestOccupants:
    """Aircraft registered in a cell."""

    def test_planes_sorted_and_danger_untouched(self):
        layer = SpatialLayer(5, 5, 1)
        layer.add_plane_at(2, 3, 7)
        layer.add_plane_at(2, 3, 1)
        layer.add_plane_at(2, 3, 7)
        assert layer.get_planes_at(2, 3) == (1, 7)
        assert layer.get_planes_at(0, 0) == ()
        assert layer.get_danger_at(2, 3) == 0.0

    def test_add_plane_out_of_bounds(self):
        layer = SpatialLayer(5, 5, 1)
        with pytest.raises(CellIndexError):
            layer.add_plane_at(5, 0, 1)


class TestTroubleshootingOutput:
    """Text and CSV dumps."""

    def test_render_north_row_first(self):
        layer = SpatialLayer(3, 2, 1)
        layer.set_danger_at(1, 0, 0.5)
        lines = layer.render().splitlines()
        assert lines[0] == " - 50  -"
        assert lines[1] == " -  -  -"

    def test_render_big_numbers(self):
        layer = SpatialLayer(2, 2, 1)
        layer.set_danger_at(0, 0, 1.4)
        layer.set_danger_at(1, 0, 12.0)
        layer.set_danger_at(0, 1, 3.0)
        assert layer.render_big_numbers().splitlines() == [" 1 12", " 3  0"]

    def test_dump_writes_to_file(self):
        layer = SpatialLayer(2, 1, 1)
        layer.set_danger_at(0, 0, 0.25)
        out = io.StringIO()
        layer.dump(out)
        assert out.getvalue() == "25  -\n"

    def test_to_csv_rows_are_y(self, tmp_path):
        layer = SpatialLayer(3, 2, 1)
        layer.set_danger_at(2, 0, 1.25)
        layer.set_danger_at(0, 1, 4.0)
        path = layer.to_csv(tmp_path / "layer.csv")
        loaded = np.loadtxt(path, delimiter=",")
        assert loaded.shape == (2, 3)
        assert loaded[0, 2] == pytest.approx(1.25)
        assert loaded[1, 0] == pytest.approx(4.0)
