"""Shared fixtures for the iqmap tests."""

import os

import pytest

# Qt must pick its platform plugin before the first QApplication exists
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from iqmap.config import RenderConfig
from iqmap.gui.particles import ParticleConfig


@pytest.fixture(scope="session")
def qapp():
    """One QApplication for the whole session (offscreen)."""
    from PyQt5 import QtWidgets

    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def small_config() -> RenderConfig:
    """Render config with a small, seeded particle field."""
    return RenderConfig(particles=ParticleConfig(count=200, seed=1))
