"""
Destination marker items.

Each destination is drawn as up to four stacked layers, all centred on the
projected position so that scaling happens about the marker centre:

  1. Glow disk        radius 3·size, very faint, breathes with the pulse
  2. Outer ring       3.2–4.5·size, major hubs only, static
  3. Pulse ring       1.6–2.6·size, opacity and scale follow the pulse
  4. Core dot         radius size, static

Scene coordinates: projected positions are y-up, Qt scene is y-down, so
items are placed at (x, -y).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from PyQt5 import QtCore, QtGui, QtWidgets

from ..geo.destinations import GeoPoint
from ..geo.projection import DEFAULT_PROJECTION, ProjectionConfig, ScenePosition, in_region, project
from .animation import PulseFrame

log = logging.getLogger(__name__)

# Z order inside the world group
_Z_GLOW = 1.0
_Z_OUTER_RING = 2.0
_Z_RING = 3.0
_Z_DOT = 4.0


@dataclass(frozen=True)
class TierStyle:
    core: str
    core_opacity: float
    ring: str                         # pulse ring and glow share a colour
    outer_ring: Optional[str] = None  # None = no outer ring


@dataclass(frozen=True)
class MarkerPalette:
    """Two-tier colour rule: major hubs are brighter and get an outer ring."""

    major: TierStyle = TierStyle(core="#00ffe0", core_opacity=1.0, ring="#00e8c0", outer_ring="#00c9a7")
    minor: TierStyle = TierStyle(core="#00d4e8", core_opacity=0.85, ring="#00bcd4")
    ring_opacity: float = 0.25
    glow_opacity: float = 0.03
    outer_ring_opacity: float = 0.1

    def style_for(self, point: GeoPoint) -> TierStyle:
        return self.major if point.is_major else self.minor


DEFAULT_PALETTE = MarkerPalette()


def _disk(radius: float) -> QtWidgets.QGraphicsEllipseItem:
    r = max(radius, 0.0)
    return QtWidgets.QGraphicsEllipseItem(-r, -r, 2 * r, 2 * r)


def _ring(inner: float, outer: float) -> QtWidgets.QGraphicsPathItem:
    """Annulus centred on the item origin (odd-even fill punches the hole)."""
    ri = max(inner, 0.0)
    ro = max(outer, 0.0)
    path = QtGui.QPainterPath()
    path.setFillRule(QtCore.Qt.OddEvenFill)
    path.addEllipse(QtCore.QPointF(0, 0), ro, ro)
    path.addEllipse(QtCore.QPointF(0, 0), ri, ri)
    return QtWidgets.QGraphicsPathItem(path)


def _style_item(item: QtWidgets.QAbstractGraphicsShapeItem, color: str, opacity: float, z: float) -> None:
    item.setPen(QtGui.QPen(QtCore.Qt.NoPen))
    item.setBrush(QtGui.QBrush(QtGui.QColor(color)))
    item.setOpacity(opacity)
    item.setZValue(z)


@dataclass
class MarkerVisual:
    """Drawable layers for one destination."""

    point: GeoPoint
    position: ScenePosition
    index: int
    dot: QtWidgets.QGraphicsEllipseItem
    ring: QtWidgets.QGraphicsPathItem
    glow: QtWidgets.QGraphicsEllipseItem
    outer_ring: Optional[QtWidgets.QGraphicsPathItem] = None

    def items(self) -> List[QtWidgets.QGraphicsItem]:
        layers = [self.glow]
        if self.outer_ring is not None:
            layers.append(self.outer_ring)
        layers.extend([self.ring, self.dot])
        return layers

    def apply_pulse(self, frame: PulseFrame) -> None:
        self.ring.setOpacity(frame.ring_opacity)
        self.ring.setScale(frame.ring_scale)
        self.glow.setOpacity(frame.glow_opacity)


def build_markers(
    points: Iterable[GeoPoint],
    projection: ProjectionConfig = DEFAULT_PROJECTION,
    palette: MarkerPalette = DEFAULT_PALETTE,
) -> List[MarkerVisual]:
    """Create one MarkerVisual per point, preserving input order.

    The marker index is used later as the pulse phase offset, so order
    must stay stable for the lifetime of the view.
    """
    markers: List[MarkerVisual] = []
    for idx, point in enumerate(points):
        if not in_region(point.latitude, point.longitude, projection):
            log.warning("Destination %s (%.2f, %.2f) is outside the mapped region",
                        point.name, point.latitude, point.longitude)

        pos = project(point.latitude, point.longitude, projection)
        style = palette.style_for(point)
        sz = point.display_size

        glow = _disk(sz * 3.0)
        _style_item(glow, style.ring, palette.glow_opacity, _Z_GLOW)

        ring = _ring(sz * 1.6, sz * 2.6)
        _style_item(ring, style.ring, palette.ring_opacity, _Z_RING)

        outer = None
        if style.outer_ring is not None:
            outer = _ring(sz * 3.2, sz * 4.5)
            _style_item(outer, style.outer_ring, palette.outer_ring_opacity, _Z_OUTER_RING)

        dot = _disk(sz)
        _style_item(dot, style.core, style.core_opacity, _Z_DOT)
        dot.setToolTip(point.name)

        marker = MarkerVisual(
            point=point,
            position=pos,
            index=idx,
            dot=dot,
            ring=ring,
            glow=glow,
            outer_ring=outer,
        )
        for item in marker.items():
            item.setPos(pos.x, -pos.y)
        markers.append(marker)

    log.debug("Built %d markers (%d major)", len(markers),
              sum(1 for m in markers if m.point.is_major))
    return markers
