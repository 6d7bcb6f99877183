"""
Destination map widget — QGraphicsScene-based animated map.

Renders the IQ Travel destinations over an optional background SVG map:
  - Layered pulsing markers, one per destination (see markers.py)
  - A field of faint drifting sea particles behind them
  - Pointer parallax: the whole world group shifts and tilts slightly
    towards the pointer
  - Language toggle for the floating title label

Scene coordinates are scene units from projection.py with y flipped for Qt
(y down).  The view is scaled by the camera so the z = 0 plane shows
``camera.visible_height`` units vertically at any window size; markers are
positioned once and never reprojected.

Animation runs on a FrameLoop (one QTimer tick per frame on the GUI thread)
that is started when the widget is shown and stopped when it is hidden or
closed.
"""
from __future__ import annotations

import dataclasses
import logging
import math
import time
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from PyQt5 import QtCore, QtGui, QtSvg, QtWidgets

from ..config import RenderConfig
from ..geo.destinations import DESTINATIONS, GeoPoint
from ..i18n import DEFAULT_LANGUAGE, toggle, translate
from .animation import PointerState, normalize_pointer, parallax, pulse_frame
from .camera import Camera
from .markers import MarkerVisual, build_markers
from .particles import ParticleField

log = logging.getLogger(__name__)

_BACKGROUND = QtGui.QColor(3, 8, 18)
_SCENE_EXTENT = 60.0   # half-size of the scene rect in scene units

_Z_SVG = -10.0
_Z_PARTICLES = 0.0
_Z_MARKERS = 1.0

_DEPTH_BANDS = 4     # pen sizes per particle colour bin


# ── Frame loop ────────────────────────────────────────────────────────

class FrameLoop(QtCore.QObject):
    """Explicit start/stop owner of the per-frame timer.

    Ticks are delivered on the GUI thread, so one frame handler always
    finishes before the next tick is dispatched.  After ``stop()`` no
    further ``frame`` signals are emitted.

    Signals
    -------
    frame(float)
        Seconds elapsed since ``start()``.
    """

    frame = QtCore.pyqtSignal(float)

    def __init__(self, interval_ms: int = 16, parent: Optional[QtCore.QObject] = None):
        super().__init__(parent)
        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._tick)
        self._running = False
        self._t0 = 0.0
        self._frames = 0

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._t0 = time.monotonic()
        self._frames = 0
        self._timer.start()
        log.info("FrameLoop started — %d ms interval", self._timer.interval())

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        self._timer.stop()
        log.info("FrameLoop stopped after %d frames", self._frames)

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    @property
    def frame_count(self) -> int:
        return self._frames

    def _tick(self) -> None:
        if not self._running:
            return
        self._frames += 1
        self.frame.emit(time.monotonic() - self._t0)


# ── Scene items ───────────────────────────────────────────────────────

class _WorldGroup(QtWidgets.QGraphicsObject):
    """Contentless parent of everything that moves with the parallax."""

    def __init__(self):
        super().__init__()
        self.setFlag(QtWidgets.QGraphicsItem.ItemHasNoContents, True)

    def boundingRect(self) -> QtCore.QRectF:
        return QtCore.QRectF()

    def paint(self, painter, option, widget=None) -> None:
        pass


class ParticleLayer(QtWidgets.QGraphicsItem):
    """Draws a ParticleField as round points.

    Points are batched by colour bin and, inside each bin, by depth band.
    A batch is drawn with one pen whose width is ``point_size`` (the
    diameter on the z = 0 plane) scaled by the band's mean depth factor,
    so deeper particles come out smaller.
    """

    def __init__(self, field: ParticleField, camera_distance: float,
                 point_size: float, opacity: float):
        super().__init__()
        self._field = field
        self._distance = camera_distance
        self._point_size = point_size
        self._bins = field.color_bins()
        self.setOpacity(opacity)
        self.setZValue(_Z_PARTICLES)

    @property
    def field(self) -> ParticleField:
        return self._field

    def boundingRect(self) -> QtCore.QRectF:
        return QtCore.QRectF(-_SCENE_EXTENT, -_SCENE_EXTENT,
                             2 * _SCENE_EXTENT, 2 * _SCENE_EXTENT)

    def batches(self) -> List[Tuple[QtGui.QColor, float, QtGui.QPolygonF]]:
        """Return ``[(colour, diameter, points), ...]`` for the current frame."""
        xy = self._field.projected(self._distance)
        factor = self._field.depth_factor(self._distance)
        if len(factor) == 0:
            return []
        lo, hi = float(factor.min()), float(factor.max())
        span = max(hi - lo, 1e-9)
        band = np.minimum(((factor - lo) / span * _DEPTH_BANDS).astype(int), _DEPTH_BANDS - 1)

        out = []
        for rgb, members in self._bins:
            color = QtGui.QColor.fromRgbF(*rgb)
            for b in range(_DEPTH_BANDS):
                sel = members[band[members] == b]
                if len(sel) == 0:
                    continue
                diameter = self._point_size * float(factor[sel].mean())
                points = QtGui.QPolygonF([QtCore.QPointF(x, -y) for x, y in xy[sel]])
                out.append((color, diameter, points))
        return out

    def paint(self, painter: QtGui.QPainter, option, widget=None) -> None:
        for color, diameter, points in self.batches():
            pen = QtGui.QPen(color)
            pen.setWidthF(diameter)
            pen.setCapStyle(QtCore.Qt.RoundCap)
            painter.setPen(pen)
            painter.drawPoints(points)


class _MapView(QtWidgets.QGraphicsView):
    """Graphics view that reports pointer moves without any button held."""

    pointer_moved = QtCore.pyqtSignal(float, float)

    def __init__(self, scene: QtWidgets.QGraphicsScene, parent=None):
        super().__init__(scene, parent)
        self.setMouseTracking(True)
        self.viewport().setMouseTracking(True)

    def mouseMoveEvent(self, event):
        self.pointer_moved.emit(event.pos().x(), event.pos().y())
        super().mouseMoveEvent(event)


# ── Main map widget ───────────────────────────────────────────────────

class DestinationMapWidget(QtWidgets.QWidget):
    """Animated map of IQ Travel destinations.

    Signals
    -------
    language_changed(str)
        Emitted when the overlay toggle switches language ('el' / 'en').
    """

    language_changed = QtCore.pyqtSignal(str)

    def __init__(
        self,
        points: Sequence[GeoPoint] = DESTINATIONS,
        config: Optional[RenderConfig] = None,
        autostart: bool = True,
        parent: Optional[QtWidgets.QWidget] = None,
    ):
        super().__init__(parent)
        self._config = config or RenderConfig()
        self._camera = dataclasses.replace(self._config.camera)
        self._autostart = autostart
        self._lang = DEFAULT_LANGUAGE
        self._pointer = PointerState(self._config.animation)

        self._scene = QtWidgets.QGraphicsScene(self)
        self._scene.setBackgroundBrush(QtGui.QBrush(_BACKGROUND))
        self._scene.setSceneRect(-_SCENE_EXTENT, -_SCENE_EXTENT,
                                 2 * _SCENE_EXTENT, 2 * _SCENE_EXTENT)

        self._view = _MapView(self._scene, self)
        self._view.setRenderHints(
            QtGui.QPainter.Antialiasing | QtGui.QPainter.SmoothPixmapTransform
        )
        self._view.setHorizontalScrollBarPolicy(QtCore.Qt.ScrollBarAlwaysOff)
        self._view.setVerticalScrollBarPolicy(QtCore.Qt.ScrollBarAlwaysOff)
        self._view.setDragMode(QtWidgets.QGraphicsView.NoDrag)
        self._view.setInteractive(True)
        self._view.setViewportUpdateMode(QtWidgets.QGraphicsView.FullViewportUpdate)
        self._view.setStyleSheet("border: none; background: #030812;")
        self._view.pointer_moved.connect(self._on_pointer_moved)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self._view, 1)

        # ── Floating title + language toggle ──
        self._overlay_top = QtWidgets.QWidget(self._view)
        self._overlay_top.setStyleSheet("background: transparent;")
        otl = QtWidgets.QHBoxLayout(self._overlay_top)
        otl.setContentsMargins(8, 4, 8, 0)
        otl.setSpacing(4)

        self._title_label = QtWidgets.QLabel("")
        self._title_label.setStyleSheet(
            "color: rgba(0,232,192,210); font-family: 'Helvetica Neue'; "
            "font-size: 11px; padding: 2px 4px; background: transparent;"
        )
        otl.addWidget(self._title_label)
        otl.addStretch(1)

        self._btn_lang = QtWidgets.QPushButton("")
        self._btn_lang.setStyleSheet(
            "QPushButton { background: rgba(6,10,16,180); color: #50a0b0; "
            "border: 1px solid rgba(0,188,212,120); padding: 2px 8px; "
            "font-family: 'Helvetica Neue Mono'; font-size: 10px; }"
            "QPushButton:hover { color: #00ffe0; }"
        )
        self._btn_lang.clicked.connect(self.toggle_language)
        otl.addWidget(self._btn_lang)

        # Populate scene
        self._world = _WorldGroup()
        self._scene.addItem(self._world)
        self._background: Optional[QtSvg.QGraphicsSvgItem] = None
        self._add_background(self._config.background_svg)
        self._particles = self._add_particles()
        self._markers = self._add_markers(points)

        self._loop = FrameLoop(self._config.animation.frame_interval_ms, self)
        self._loop.frame.connect(self.render_frame)

        self._refresh_texts()
        self.set_viewport_size(max(self.width(), 1), max(self.height(), 1))

    # ── Scene construction ────────────────────────────────────────────

    def _add_background(self, svg_path: Optional[Path]) -> None:
        """Place the background SVG so its viewBox lines up with the projection."""
        if svg_path is None:
            return
        if not Path(svg_path).exists():
            log.warning("Background SVG not found: %s", svg_path)
            return

        item = QtSvg.QGraphicsSvgItem(str(svg_path))
        if not item.renderer().isValid():
            log.warning("Background SVG could not be parsed: %s", svg_path)
            return

        proj = self._config.projection
        x_min, x_max = proj.output_x_range
        y_min, y_max = proj.output_y_range
        cx, cy = proj.center
        target = QtCore.QRectF(
            (x_min - cx) * proj.scale,
            (y_min - cy) * proj.scale,      # Qt y-down: no flip needed here
            (x_max - x_min) * proj.scale,
            (y_max - y_min) * proj.scale,
        )
        src = item.boundingRect()
        if src.width() <= 0 or src.height() <= 0:
            log.warning("Background SVG has an empty viewBox: %s", svg_path)
            return
        item.setTransform(QtGui.QTransform.fromScale(
            target.width() / src.width(), target.height() / src.height()
        ))
        item.setPos(target.topLeft())
        item.setZValue(_Z_SVG)
        self._scene.addItem(item)
        self._background = item
        log.info("Background map loaded: %s", svg_path)

    def _add_particles(self) -> ParticleLayer:
        pcfg = self._config.particles
        field = ParticleField.generate(pcfg)
        layer = ParticleLayer(field, self._camera.distance, pcfg.point_size, pcfg.opacity)
        layer.setParentItem(self._world)
        log.info("Particle field: %d points", len(field))
        return layer

    def _add_markers(self, points: Iterable[GeoPoint]) -> List[MarkerVisual]:
        markers = build_markers(points, self._config.projection)
        for marker in markers:
            for item in marker.items():
                item.setZValue(_Z_MARKERS + item.zValue())
                item.setParentItem(self._world)
        log.info("Destination markers: %d", len(markers))
        return markers

    # ── Public API ────────────────────────────────────────────────────

    @property
    def markers(self) -> List[MarkerVisual]:
        return self._markers

    @property
    def particles(self) -> ParticleField:
        return self._particles.field

    @property
    def camera(self) -> Camera:
        return self._camera

    @property
    def pointer(self) -> PointerState:
        return self._pointer

    @property
    def loop(self) -> FrameLoop:
        return self._loop

    @property
    def language(self) -> str:
        return self._lang

    @property
    def scene(self) -> QtWidgets.QGraphicsScene:
        return self._scene

    @property
    def world(self) -> QtWidgets.QGraphicsObject:
        return self._world

    @property
    def background(self) -> Optional[QtSvg.QGraphicsSvgItem]:
        return self._background

    def start(self) -> None:
        self._loop.start()

    def stop(self) -> None:
        self._loop.stop()

    @QtCore.pyqtSlot(float)
    def render_frame(self, t: float) -> None:
        """Advance every animated attribute to time *t* and repaint."""
        anim = self._config.animation

        # Parallax
        self._pointer.smooth()
        p = parallax(self._pointer, anim)
        tr = QtGui.QTransform()
        tr.rotate(math.degrees(p.tilt_y), QtCore.Qt.YAxis)
        tr.rotate(math.degrees(p.tilt_x), QtCore.Qt.XAxis)
        self._world.setTransform(tr)
        self._world.setPos(p.dx, -p.dy)

        # Marker pulse — index offsets the phase so markers breathe out of step
        for marker in self._markers:
            marker.apply_pulse(pulse_frame(t, marker.index, anim))

        # Sea drift
        self._particles.field.drift(t)
        self._particles.update()

    def set_viewport_size(self, width: int, height: int) -> None:
        """Fit the camera to a new output size.

        Only the camera and the view transform change; marker positions
        stay as they were projected.
        """
        self._camera.resize(width, height)
        ppu = self._camera.pixels_per_unit
        self._view.resetTransform()
        self._view.scale(ppu, ppu)
        self._view.centerOn(0.0, 0.0)
        log.debug("Viewport %dx%d — aspect %.3f, %.1f px/unit",
                  width, height, self._camera.aspect, ppu)

    def toggle_language(self) -> None:
        self.set_language(toggle(self._lang))

    def set_language(self, lang: str) -> None:
        translate("map.toggle", lang)   # validates lang
        if lang == self._lang:
            return
        self._lang = lang
        self._refresh_texts()
        self.language_changed.emit(lang)

    def snapshot(self, path: Path, t: float = 0.0,
                 width: Optional[int] = None, height: Optional[int] = None) -> Path:
        """Render a single frame at time *t* to an image file."""
        w = int(width or self._camera.width)
        h = int(height or self._camera.height)
        if width or height:
            self.set_viewport_size(w, h)
        self.render_frame(t)

        ppu = self._camera.pixels_per_unit
        vis_w = w / ppu
        vis_h = h / ppu
        source = QtCore.QRectF(-vis_w / 2.0, -vis_h / 2.0, vis_w, vis_h)

        image = QtGui.QImage(max(w, 1), max(h, 1), QtGui.QImage.Format_ARGB32)
        image.fill(_BACKGROUND)
        painter = QtGui.QPainter(image)
        painter.setRenderHint(QtGui.QPainter.Antialiasing)
        self._scene.render(painter, QtCore.QRectF(image.rect()), source)
        painter.end()

        path = Path(path)
        if not image.save(str(path)):
            raise OSError(f"Could not write snapshot to {path}")
        log.info("Snapshot written: %s (%dx%d, t=%.2f s)", path, w, h, t)
        return path

    # ── Internals ─────────────────────────────────────────────────────

    def _refresh_texts(self) -> None:
        self._title_label.setText(
            translate("map.title", self._lang, count=len(self._markers))
        )
        self._btn_lang.setText(translate("map.toggle", self._lang))

    def _on_pointer_moved(self, px: float, py: float) -> None:
        x, y = normalize_pointer(px, py, self._view.width(), self._view.height())
        self._pointer.sample(x, y)

    # ── Event handlers ────────────────────────────────────────────────

    def resizeEvent(self, event):
        super().resizeEvent(event)
        vw = self._view.width()
        vh = self._view.height()
        self._overlay_top.setGeometry(0, 0, vw, 30)
        self.set_viewport_size(vw, vh)

    def showEvent(self, event):
        super().showEvent(event)
        if self._autostart:
            self._loop.start()

    def hideEvent(self, event):
        self._loop.stop()
        super().hideEvent(event)

    def closeEvent(self, event):
        self._loop.stop()
        super().closeEvent(event)


def mount_map(
    container: Optional[QtWidgets.QWidget],
    points: Sequence[GeoPoint] = DESTINATIONS,
    config: Optional[RenderConfig] = None,
    autostart: bool = True,
) -> Optional[DestinationMapWidget]:
    """Build the map into *container*.

    The map is decorative: with no container there is nothing to draw into,
    so this returns None instead of raising.
    """
    if container is None:
        log.debug("No map container — map not mounted")
        return None

    widget = DestinationMapWidget(points=points, config=config,
                                  autostart=autostart, parent=container)
    layout = container.layout()
    if layout is None:
        layout = QtWidgets.QVBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
    layout.addWidget(widget)
    return widget
