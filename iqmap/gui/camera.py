"""
Perspective camera looking down -z at the map plane.

The map lives on the z = 0 plane in scene units.  The camera only decides
how many pixels one scene unit takes on screen; marker positions are never
recomputed when the viewport changes size.
"""
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class Camera:
    fov_deg: float = 48.0       # vertical field of view
    distance: float = 22.0      # far enough back to show the whole country
    near: float = 0.1
    far: float = 1000.0
    aspect: float = 1.0
    width: int = 1
    height: int = 1

    @classmethod
    def from_dict(cls, data: dict) -> "Camera":
        allowed = {"fov_deg", "distance", "near", "far"}
        unknown = set(data) - allowed
        if unknown:
            raise KeyError(f"Unknown camera keys: {sorted(unknown)}")
        return cls(**{key: float(value) for key, value in data.items()})

    def resize(self, width: int, height: int) -> None:
        """Update output size and aspect ratio.

        A zero height would make the aspect ratio degenerate, so the
        divisor is clamped to 1.
        """
        self.width = int(width)
        self.height = int(height)
        self.aspect = self.width / max(self.height, 1)

    @property
    def visible_height(self) -> float:
        """Height of the z = 0 plane covered by the view, in scene units."""
        return 2.0 * self.distance * math.tan(math.radians(self.fov_deg) / 2.0)

    @property
    def visible_width(self) -> float:
        return self.visible_height * self.aspect

    @property
    def pixels_per_unit(self) -> float:
        return max(self.height, 1) / self.visible_height
