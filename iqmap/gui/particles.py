"""
Ambient sea particles.

A fixed-size field of faint points scattered behind the markers.  Each
frame every particle is nudged by a small sine/cosine term of elapsed time
and its own index, so the field shimmers without moving in lock-step.

Drift is unbounded by default; over a very long session particles wander
slowly away from their start.  Set ``drift_bound`` to wrap them back into
the initial box instead.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np


@dataclass
class ParticleConfig:
    count: int = 1800
    spread_x: float = 22.0
    spread_y: float = 16.0
    spread_z: float = 3.0
    z_offset: float = -1.5          # push the field behind the markers
    point_size: float = 0.022       # diameter in scene units at z = 0
    opacity: float = 0.5

    drift_speed_y: float = 0.35
    drift_phase_y: float = 0.01
    drift_amp_y: float = 0.0005
    drift_speed_x: float = 0.22
    drift_phase_x: float = 0.018
    drift_amp_x: float = 0.0003

    seed: Optional[int] = None
    drift_bound: Optional[float] = None   # None = unbounded

    @classmethod
    def from_dict(cls, data: dict) -> "ParticleConfig":
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise KeyError(f"Unknown particle keys: {sorted(unknown)}")
        kwargs = {}
        for key, value in data.items():
            if value is None:
                kwargs[key] = None
            elif key in ("count", "seed"):
                kwargs[key] = int(value)
            else:
                kwargs[key] = float(value)
        return cls(**kwargs)


class ParticleField:
    """Positions (N, 3) and colours (N, 3) for N particles.

    Arrays are mutated in place; their shapes never change.
    """

    def __init__(
        self,
        positions: np.ndarray,
        colors: np.ndarray,
        config: ParticleConfig,
    ):
        self.positions = positions
        self.colors = colors
        self._config = config
        self._index = np.arange(len(positions), dtype=np.float64)

    @classmethod
    def generate(cls, config: ParticleConfig) -> "ParticleField":
        rng = np.random.default_rng(config.seed)
        n = config.count

        positions = np.empty((n, 3), dtype=np.float64)
        positions[:, 0] = (rng.random(n) - 0.5) * config.spread_x
        positions[:, 1] = (rng.random(n) - 0.5) * config.spread_y
        positions[:, 2] = (rng.random(n) - 0.5) * config.spread_z + config.z_offset

        # Deep ocean blue → cyan
        m = rng.random(n)
        colors = np.zeros((n, 3), dtype=np.float64)
        colors[:, 1] = 0.35 + m * 0.45
        colors[:, 2] = 0.55 + m * 0.35

        return cls(positions, colors, config)

    def __len__(self) -> int:
        return len(self.positions)

    def drift(self, t: float) -> None:
        """Apply one frame of drift at elapsed time *t* (seconds)."""
        c = self._config
        i = self._index
        self.positions[:, 1] += np.sin(t * c.drift_speed_y + i * c.drift_phase_y) * c.drift_amp_y
        self.positions[:, 0] += np.cos(t * c.drift_speed_x + i * c.drift_phase_x) * c.drift_amp_x

        if c.drift_bound is not None:
            half_x = c.spread_x / 2.0 + c.drift_bound
            half_y = c.spread_y / 2.0 + c.drift_bound
            self.positions[:, 0] = (self.positions[:, 0] + half_x) % (2 * half_x) - half_x
            self.positions[:, 1] = (self.positions[:, 1] + half_y) % (2 * half_y) - half_y

    def depth_factor(self, camera_distance: float) -> np.ndarray:
        """Per-particle perspective scale relative to the z = 0 plane.

        1.0 on the plane, below 1.0 for particles behind it.
        """
        depth = camera_distance - self.positions[:, 2]
        return camera_distance / np.maximum(depth, 1e-6)

    def projected(self, camera_distance: float) -> np.ndarray:
        """Perspective-scaled (x, y) for a camera at z = *camera_distance*.

        Particles further from the camera than the z = 0 plane shrink
        towards the origin.
        """
        return self.positions[:, :2] * self.depth_factor(camera_distance)[:, None]

    def color_bins(self, n_bins: int = 8) -> List[Tuple[Tuple[float, float, float], np.ndarray]]:
        """Group particles by colour for batched drawing.

        Returns ``[(rgb, indices), ...]`` where *rgb* is the bin's mean
        colour in 0-1 floats.  Empty bins are dropped.
        """
        if len(self) == 0:
            return []
        # Green channel spans the whole 0.35 → 0.80 range used by generate()
        g = self.colors[:, 1]
        lo, hi = float(g.min()), float(g.max())
        span = max(hi - lo, 1e-9)
        bin_idx = np.minimum(((g - lo) / span * n_bins).astype(int), n_bins - 1)

        bins = []
        for b in range(n_bins):
            members = np.nonzero(bin_idx == b)[0]
            if len(members) == 0:
                continue
            rgb = tuple(float(v) for v in self.colors[members].mean(axis=0))
            bins.append((rgb, members))
        return bins
