"""Unit tests for the geo → scene projection."""

import pytest

from iqmap.geo.projection import (
    DEFAULT_PROJECTION,
    ProjectionConfig,
    ScenePosition,
    in_region,
    project,
    region_polygon,
    to_viewbox,
)


class TestToViewbox:
    """Pre-centering remap into the background map's viewBox."""

    def test_southwest_corner(self):
        x, y = to_viewbox(34.7, 19.3)
        assert x == pytest.approx(-5.0)
        assert y == pytest.approx(85.0)

    def test_northeast_corner(self):
        x, y = to_viewbox(41.8, 29.6)
        assert x == pytest.approx(80.0)
        assert y == pytest.approx(-5.0)

    def test_north_is_smaller_y_west_is_smaller_x(self):
        x_w, _ = to_viewbox(38.0, 20.0)
        x_e, _ = to_viewbox(38.0, 28.0)
        _, y_s = to_viewbox(35.0, 24.0)
        _, y_n = to_viewbox(41.0, 24.0)
        assert x_w < x_e
        assert y_n < y_s

    def test_longitude_strictly_increases_x(self):
        xs = [to_viewbox(38.0, lng)[0] for lng in (19.3, 21.0, 23.7, 26.2, 29.6)]
        assert all(a < b for a, b in zip(xs, xs[1:]))

    def test_latitude_strictly_decreases_y(self):
        ys = [to_viewbox(lat, 24.0)[1] for lat in (34.7, 36.1, 37.98, 40.0, 41.8)]
        assert all(a > b for a, b in zip(ys, ys[1:]))


class TestProject:
    """Centred, scaled scene coordinates."""

    def test_deterministic(self):
        a = project(37.98, 23.73)
        b = project(37.98, 23.73)
        assert a == b
        assert a.x == b.x and a.y == b.y

    def test_returns_scene_position(self):
        assert isinstance(project(38.0, 23.0), ScenePosition)

    def test_athens_matches_formula(self):
        pos = project(37.98, 23.73)

        svg_x = -5 + (23.73 - 19.3) / (29.6 - 19.3) * 85
        svg_y = -5 + (1 - (37.98 - 34.7) / (41.8 - 34.7)) * 90
        expected_x = (svg_x - 30) * 0.155
        expected_y = -(svg_y - 40) * 0.155

        assert pos.x == pytest.approx(expected_x, abs=1e-9)
        assert pos.y == pytest.approx(expected_y, abs=1e-9)
        # Athens sits near the reference meridian and south of centre
        assert abs(pos.x) < 0.3
        assert pos.y == pytest.approx(-0.5305, abs=1e-3)

    def test_center_maps_to_origin(self):
        # viewBox (30, 40) ↔ lng 19.3 + 35/85·10.3, lat 41.8 − 45/90·7.1
        lng = 19.3 + (35.0 / 85.0) * 10.3
        lat = 41.8 - (45.0 / 90.0) * 7.1
        pos = project(lat, lng)
        assert pos.x == pytest.approx(0.0, abs=1e-9)
        assert pos.y == pytest.approx(0.0, abs=1e-9)

    def test_north_is_positive_scene_y(self):
        assert project(41.0, 24.0).y > project(35.0, 24.0).y

    def test_out_of_range_is_not_clamped(self):
        pos = project(45.0, 35.0)
        corner = project(41.8, 29.6)
        assert pos.x > corner.x
        assert pos.y > corner.y

    def test_custom_config(self):
        cfg = ProjectionConfig(center=(0.0, 0.0), scale=1.0)
        pos = project(34.7, 19.3, cfg)
        assert pos.x == pytest.approx(-5.0)
        assert pos.y == pytest.approx(-85.0)


class TestRegion:

    def test_polygon_bounds(self):
        assert region_polygon().bounds == pytest.approx((19.3, 34.7, 29.6, 41.8))

    def test_in_region(self):
        assert in_region(37.98, 23.73)
        assert in_region(34.7, 19.3)  # edge counts
        assert not in_region(45.0, 23.0)


class TestProjectionConfig:

    def test_from_dict(self):
        cfg = ProjectionConfig.from_dict({"center": [37.5, 40], "scale": 0.2})
        assert cfg.center == (37.5, 40.0)
        assert cfg.scale == 0.2
        assert cfg.lng_range == DEFAULT_PROJECTION.lng_range

    def test_from_dict_unknown_key(self):
        with pytest.raises(KeyError):
            ProjectionConfig.from_dict({"zoom": 2})
