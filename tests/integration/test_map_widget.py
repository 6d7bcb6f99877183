"""DestinationMapWidget, FrameLoop and mount_map (offscreen Qt)."""

import dataclasses

import numpy as np
import pytest
from PyQt5 import QtGui, QtWidgets
from PyQt5.QtTest import QTest

from iqmap.config import config_from_dict
from iqmap.gui.camera import Camera
from iqmap.gui.map_widget import DestinationMapWidget, FrameLoop, ParticleLayer, mount_map
from iqmap.gui.particles import ParticleConfig, ParticleField

_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="85" height="90" '
    'viewBox="-5 -5 85 90">'
    '<rect x="-5" y="-5" width="85" height="90" fill="#0a1a2a"/>'
    '</svg>'
)


@pytest.fixture
def widget(qapp, small_config):
    w = DestinationMapWidget(config=small_config, autostart=False)
    yield w
    w.stop()
    w.deleteLater()


class TestFrameLoop:

    def test_emits_while_running_only(self, qapp):
        loop = FrameLoop(interval_ms=5)
        seen = []
        loop.frame.connect(seen.append)

        loop.start()
        assert loop.is_running
        QTest.qWait(120)
        loop.stop()
        assert not loop.is_running

        count = len(seen)
        assert count > 0
        assert loop.frame_count == count
        assert seen == sorted(seen)

        QTest.qWait(60)
        assert len(seen) == count

    def test_start_stop_idempotent(self, qapp):
        loop = FrameLoop(interval_ms=5)
        loop.start()
        loop.start()
        loop.stop()
        loop.stop()
        assert not loop.is_running


class TestConstruction:

    def test_marker_and_particle_counts(self, widget):
        assert len(widget.markers) == 47
        assert len(widget.particles) == 200

    def test_items_live_under_world_group(self, widget):
        for m in widget.markers:
            for item in m.items():
                assert item.parentItem() is widget.world

    def test_camera_copied_from_config(self, qapp, small_config):
        w = DestinationMapWidget(config=small_config, autostart=False)
        w.set_viewport_size(300, 100)
        assert small_config.camera.width == 1
        assert w.camera.width == 300

    def test_no_background_by_default(self, widget):
        assert widget.background is None

    def test_fractional_json_numbers_start_cleanly(self, qapp):
        cfg = config_from_dict({
            "animation": {"frame_interval_ms": 16.7},
            "particles": {"count": 20.0, "seed": 1},
        })
        w = DestinationMapWidget(config=cfg, autostart=False)
        assert w.loop.interval_ms == 17
        assert len(w.particles) == 20
        w.start()
        assert w.loop.is_running
        w.stop()


class TestFrames:

    def test_markers_pulse_out_of_phase(self, widget):
        widget.render_frame(0.5)
        opacities = [m.ring.opacity() for m in widget.markers]
        assert opacities[0] != pytest.approx(opacities[1])
        assert len({round(o, 4) for o in opacities}) > 10
        for o in opacities:
            assert 0.12 - 1e-6 <= o <= 0.47 + 1e-6

    def test_particles_drift_each_frame(self, widget):
        before = widget.particles.positions.copy()
        widget.render_frame(1.0)
        assert not np.array_equal(before, widget.particles.positions)

    def test_pointer_moves_world(self, widget):
        widget.render_frame(0.0)
        assert widget.world.pos().x() == pytest.approx(0.0)

        widget.pointer.sample(1.0, 1.0)
        for frame in range(20):
            widget.render_frame(frame / 60.0)
        assert widget.world.pos().x() > 0.0
        assert widget.world.pos().y() < 0.0   # pointer low → world up (Qt y-down)
        assert not widget.world.transform().isIdentity()

    def test_resize_keeps_marker_positions(self, widget):
        widget.set_viewport_size(800, 600)
        before = [(m.dot.pos().x(), m.dot.pos().y()) for m in widget.markers]
        ppu = widget.camera.pixels_per_unit

        widget.set_viewport_size(400, 300)
        after = [(m.dot.pos().x(), m.dot.pos().y()) for m in widget.markers]

        assert before == after
        assert widget.camera.aspect == pytest.approx(4 / 3)
        assert widget.camera.pixels_per_unit == pytest.approx(ppu / 2)

    def test_zero_height_viewport(self, widget):
        widget.set_viewport_size(640, 0)
        widget.render_frame(0.2)
        assert widget.camera.aspect == 640


class TestLifecycle:

    def test_show_starts_hide_stops(self, qapp, small_config):
        w = DestinationMapWidget(config=small_config, autostart=True)
        w.show()
        assert w.loop.is_running
        w.hide()
        assert not w.loop.is_running
        w.close()

    def test_no_autostart(self, qapp, small_config):
        w = DestinationMapWidget(config=small_config, autostart=False)
        w.show()
        assert not w.loop.is_running
        w.start()
        assert w.loop.is_running
        w.close()
        assert not w.loop.is_running


class TestLanguage:

    def test_toggle_emits_signal(self, widget):
        seen = []
        widget.language_changed.connect(seen.append)
        assert widget.language == "el"
        widget.toggle_language()
        assert widget.language == "en"
        assert seen == ["en"]

    def test_same_language_is_noop(self, widget):
        seen = []
        widget.language_changed.connect(seen.append)
        widget.set_language("el")
        assert seen == []

    def test_unknown_language_rejected(self, widget):
        with pytest.raises(KeyError):
            widget.set_language("fr")
        assert widget.language == "el"


class TestBackground:

    def test_svg_viewbox_aligned_to_projection(self, qapp, small_config, tmp_path):
        svg = tmp_path / "greece.svg"
        svg.write_text(_SVG, encoding="utf-8")
        cfg = dataclasses.replace(small_config, background_svg=svg)

        w = DestinationMapWidget(config=cfg, autostart=False)
        rect = w.background.sceneBoundingRect()
        assert rect.x() == pytest.approx(-5.425, abs=1e-3)
        assert rect.y() == pytest.approx(-6.975, abs=1e-3)
        assert rect.width() == pytest.approx(13.175, abs=1e-3)
        assert rect.height() == pytest.approx(13.95, abs=1e-3)

    def test_missing_svg_is_skipped(self, qapp, small_config, tmp_path):
        cfg = dataclasses.replace(small_config, background_svg=tmp_path / "absent.svg")
        w = DestinationMapWidget(config=cfg, autostart=False)
        assert w.background is None
        assert len(w.markers) == 47


def test_snapshot_writes_image(widget, tmp_path):
    out = widget.snapshot(tmp_path / "frame.png", t=1.0, width=320, height=200)
    assert out.exists()
    image = QtGui.QImage(str(out))
    assert (image.width(), image.height()) == (320, 200)


class TestMount:

    def test_no_container(self, qapp, small_config):
        assert mount_map(None, config=small_config) is None

    def test_mounts_into_container(self, qapp, small_config):
        container = QtWidgets.QWidget()
        w = mount_map(container, config=small_config, autostart=False)
        assert w.parent() is container
        assert container.layout().indexOf(w) >= 0

    def test_reuses_existing_layout(self, qapp, small_config):
        container = QtWidgets.QWidget()
        layout = QtWidgets.QHBoxLayout(container)
        layout.addWidget(QtWidgets.QLabel("hero"))
        w = mount_map(container, config=small_config, autostart=False)
        assert container.layout() is layout
        assert layout.count() == 2
        assert layout.indexOf(w) == 1


class TestParticleLayer:

    def test_batches_cover_every_particle(self, qapp):
        field = ParticleField.generate(ParticleConfig(count=300, seed=5))
        layer = ParticleLayer(field, 22.0, 0.022, 0.5)
        batches = layer.batches()
        assert sum(points.count() for _, _, points in batches) == 300

    def test_point_size_is_diameter_scaled_by_depth(self, qapp):
        positions = np.array([[0.0, 0.0, 0.0], [1.0, 1.0, -3.0]])
        colors = np.array([[0.0, 0.5, 0.7], [0.0, 0.5, 0.7]])
        field = ParticleField(positions, colors, ParticleConfig(count=2))
        layer = ParticleLayer(field, 22.0, 0.022, 0.5)

        diameters = sorted(d for _, d, _ in layer.batches())
        assert diameters == pytest.approx([0.022 * 22.0 / 25.0, 0.022])

    def test_points_stay_subpixel_at_800px(self, qapp):
        cam = Camera()
        cam.resize(1280, 800)
        field = ParticleField.generate(ParticleConfig(count=200, seed=5))
        layer = ParticleLayer(field, cam.distance, 0.022, 0.5)
        for _, diameter, _ in layer.batches():
            assert diameter * cam.pixels_per_unit < 1.0

    def test_empty_field(self, qapp):
        layer = ParticleLayer(ParticleField.generate(ParticleConfig(count=0)), 22.0, 0.022, 0.5)
        assert layer.batches() == []
