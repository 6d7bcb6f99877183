"""
Geo → scene coordinate conversion.

The background map is an SVG whose viewBox is ``-5 -5 85 90``: x runs
-5 → 80 and y runs -5 → 85 with north at low y.  Latitude/longitude inside
the Greece bounding box are remapped linearly into that viewBox, then
translated so a configured centre sits at the scene origin and scaled into
scene units tuned for a camera at z = 22.

No clamping is applied.  Points outside the bounding box are accepted and
simply land off the visible map.

Usage
-----
    pos = project(37.98, 23.73)      # Athens
    print(pos.x, pos.y)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from shapely.geometry import Point, Polygon, box


@dataclass(frozen=True)
class ProjectionConfig:
    """Alignment constants between geography and the background map."""

    lng_range: Tuple[float, float] = (19.3, 29.6)
    lat_range: Tuple[float, float] = (34.7, 41.8)
    output_x_range: Tuple[float, float] = (-5.0, 80.0)   # viewBox x
    output_y_range: Tuple[float, float] = (-5.0, 85.0)   # viewBox y (north = low y)

    # Sits left of the geometric centre (37.5) so dots shift right onto the map
    center: Tuple[float, float] = (30.0, 40.0)
    scale: float = 0.155                                  # scene units per viewBox unit

    @classmethod
    def from_dict(cls, data: dict) -> "ProjectionConfig":
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise KeyError(f"Unknown projection keys: {sorted(unknown)}")
        kwargs = {}
        for key, value in data.items():
            kwargs[key] = float(value) if key == "scale" else tuple(float(v) for v in value)
        return cls(**kwargs)


DEFAULT_PROJECTION = ProjectionConfig()


@dataclass(frozen=True)
class ScenePosition:
    """A projected point in scene units (x right, y up)."""
    x: float
    y: float


def to_viewbox(
    lat: float,
    lng: float,
    config: ProjectionConfig = DEFAULT_PROJECTION,
) -> Tuple[float, float]:
    """Remap lat/lng into viewBox space before centring.

    Longitude grows to the right; latitude is inverted so that increasing
    latitude gives a smaller y (north-up).
    """
    lng_min, lng_max = config.lng_range
    lat_min, lat_max = config.lat_range
    x_min, x_max = config.output_x_range
    y_min, y_max = config.output_y_range

    vx = x_min + (lng - lng_min) / (lng_max - lng_min) * (x_max - x_min)
    vy = y_min + (1.0 - (lat - lat_min) / (lat_max - lat_min)) * (y_max - y_min)
    return vx, vy


def project(
    lat: float,
    lng: float,
    config: ProjectionConfig = DEFAULT_PROJECTION,
) -> ScenePosition:
    """Project lat/lng into scene units.

    Pure and deterministic: identical inputs always give identical output.
    """
    vx, vy = to_viewbox(lat, lng, config)
    cx, cy = config.center
    return ScenePosition(
        x=(vx - cx) * config.scale,
        y=-(vy - cy) * config.scale,
    )


def region_polygon(config: ProjectionConfig = DEFAULT_PROJECTION) -> Polygon:
    """Return the projection's bounding box as a (lon, lat) polygon."""
    lng_min, lng_max = config.lng_range
    lat_min, lat_max = config.lat_range
    return box(lng_min, lat_min, lng_max, lat_max)


def in_region(
    lat: float,
    lng: float,
    config: ProjectionConfig = DEFAULT_PROJECTION,
) -> bool:
    """True if the point lies inside (or on the edge of) the mapped region."""
    return region_polygon(config).intersects(Point(lng, lat))
