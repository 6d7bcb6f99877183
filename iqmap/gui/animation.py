"""
Per-frame animation maths for the destination map.

Everything here is plain Python with no Qt dependency so it can be driven
by the map widget's frame loop and tested on its own.

Pulse
-----
Each marker breathes with phase ``sin(t·ω + i·φ)`` mapped into [0, 1].
The index term offsets neighbouring markers so they never pulse in unison.

Pointer
-------
Pointer samples are normalised to [-1, 1] and low-pass filtered once per
frame (``smoothed += (raw·gain − smoothed)·decay``).  The filter has a
single pole: it never overshoots and only approaches the target.
"""
from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class AnimationConfig:
    """Timing and gain constants for pulse and parallax."""

    frame_interval_ms: int = 16

    # Pulse
    pulse_speed: float = 2.2          # ω (rad/s)
    pulse_index_phase: float = 0.6    # φ (rad per marker index)
    ring_opacity_base: float = 0.12
    ring_opacity_gain: float = 0.35
    ring_scale_gain: float = 0.4
    glow_opacity_base: float = 0.015
    glow_opacity_gain: float = 0.04

    # Pointer smoothing
    pointer_gain_x: float = 0.45
    pointer_gain_y: float = 0.28
    pointer_decay: float = 0.03

    # Parallax applied to the world group
    parallax_shift_x: float = 0.75
    parallax_shift_y: float = 0.4
    parallax_tilt_y: float = 0.012    # rad per unit smoothed x
    parallax_tilt_x: float = 0.008    # rad per unit smoothed y

    @classmethod
    def from_dict(cls, data: dict) -> "AnimationConfig":
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise KeyError(f"Unknown animation keys: {sorted(unknown)}")
        kwargs = {}
        for key, value in data.items():
            # QTimer only takes whole milliseconds
            kwargs[key] = int(round(value)) if key == "frame_interval_ms" else float(value)
        return cls(**kwargs)


@dataclass(frozen=True)
class PulseFrame:
    ring_opacity: float
    ring_scale: float
    glow_opacity: float


def pulse_phase(t: float, index: int, config: AnimationConfig) -> float:
    """Breathing phase of marker *index* at time *t*, in [0, 1]."""
    return math.sin(t * config.pulse_speed + index * config.pulse_index_phase) * 0.5 + 0.5


def pulse_frame(t: float, index: int, config: AnimationConfig) -> PulseFrame:
    p = pulse_phase(t, index, config)
    return PulseFrame(
        ring_opacity=config.ring_opacity_base + p * config.ring_opacity_gain,
        ring_scale=1.0 + p * config.ring_scale_gain,
        glow_opacity=config.glow_opacity_base + p * config.glow_opacity_gain,
    )


def normalize_pointer(px: float, py: float, width: float, height: float):
    """Map a pixel position inside a *width* × *height* area to [-1, 1]².

    Zero-sized areas are treated as 1 px so the result stays finite.
    """
    w = max(width, 1.0)
    h = max(height, 1.0)
    return (px / w) * 2.0 - 1.0, (py / h) * 2.0 - 1.0


class PointerState:
    """Latest pointer sample plus its smoothed value.

    Written by pointer-move events and read by the frame loop.  Both run on
    the Qt GUI thread, so no locking is needed.
    """

    def __init__(self, config: AnimationConfig):
        self._config = config
        self.raw_x = 0.0
        self.raw_y = 0.0
        self.smoothed_x = 0.0
        self.smoothed_y = 0.0

    def sample(self, x: float, y: float) -> None:
        self.raw_x = x
        self.raw_y = y

    def smooth(self) -> None:
        """Advance the low-pass filter by one frame."""
        c = self._config
        self.smoothed_x += (self.raw_x * c.pointer_gain_x - self.smoothed_x) * c.pointer_decay
        self.smoothed_y += (self.raw_y * c.pointer_gain_y - self.smoothed_y) * c.pointer_decay


@dataclass(frozen=True)
class Parallax:
    """World-group offset in scene units (y up) and tilt in radians."""
    dx: float
    dy: float
    tilt_x: float
    tilt_y: float


def parallax(pointer: PointerState, config: AnimationConfig) -> Parallax:
    return Parallax(
        dx=pointer.smoothed_x * config.parallax_shift_x,
        dy=pointer.smoothed_y * config.parallax_shift_y,
        tilt_x=-pointer.smoothed_y * config.parallax_tilt_x,
        tilt_y=pointer.smoothed_x * config.parallax_tilt_y,
    )
