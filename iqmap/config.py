"""
Render and contact configuration.

Defaults live in the dataclasses of each module.  A JSON file can override
any of them, section by section::

    {
      "projection": {"center": [30, 40], "scale": 0.155},
      "animation":  {"pulse_speed": 2.2},
      "particles":  {"count": 1800, "seed": 7},
      "camera":     {"fov_deg": 48, "distance": 22},
      "map":        {"background_svg": "assets/greece.svg"},
      "contact":    {"endpoint": "https://api.web3forms.com/submit"}
    }

The file is looked up in this order: explicit path, ``$IQMAP_CONFIG``,
``config/render.json`` at the repository root.  A missing default file is
not an error; unknown sections or keys are.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .geo.projection import ProjectionConfig
from .gui.animation import AnimationConfig
from .gui.camera import Camera
from .gui.particles import ParticleConfig

log = logging.getLogger(__name__)

ROOT_DIR = Path(__file__).resolve().parent.parent
CONFIG_DIR = ROOT_DIR / "config"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "render.json"
ENV_CONFIG = "IQMAP_CONFIG"


@dataclass
class ContactConfig:
    endpoint: Optional[str] = None
    access_key: Optional[str] = None
    timeout_s: float = 15.0

    @classmethod
    def from_dict(cls, data: dict) -> "ContactConfig":
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise KeyError(f"Unknown contact keys: {sorted(unknown)}")
        kwargs = dict(data)
        if "timeout_s" in kwargs:
            kwargs["timeout_s"] = float(kwargs["timeout_s"])
        return cls(**kwargs)


@dataclass
class RenderConfig:
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
    animation: AnimationConfig = field(default_factory=AnimationConfig)
    particles: ParticleConfig = field(default_factory=ParticleConfig)
    camera: Camera = field(default_factory=Camera)
    contact: ContactConfig = field(default_factory=ContactConfig)
    background_svg: Optional[Path] = None


_SECTIONS = {
    "projection": ProjectionConfig,
    "animation": AnimationConfig,
    "particles": ParticleConfig,
    "camera": Camera,
    "contact": ContactConfig,
}


def resolve_config_path(path: Optional[Path] = None) -> Optional[Path]:
    if path is not None:
        return Path(path)
    env = os.environ.get(ENV_CONFIG)
    if env:
        return Path(env)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def config_from_dict(data: dict, base_dir: Optional[Path] = None) -> RenderConfig:
    """Build a RenderConfig from parsed JSON.

    Relative ``background_svg`` paths are resolved against *base_dir*.
    """
    unknown = set(data) - set(_SECTIONS) - {"map"}
    if unknown:
        raise KeyError(f"Unknown config sections: {sorted(unknown)}")

    cfg = RenderConfig()
    for name, cls in _SECTIONS.items():
        if name in data:
            setattr(cfg, name, cls.from_dict(data[name]))

    map_section = dict(data.get("map", {}))
    svg = map_section.pop("background_svg", None)
    if map_section:
        raise KeyError(f"Unknown map keys: {sorted(map_section)}")
    if svg:
        svg_path = Path(svg)
        if not svg_path.is_absolute() and base_dir is not None:
            svg_path = base_dir / svg_path
        cfg.background_svg = svg_path
    return cfg


def load_config(path: Optional[Path] = None) -> RenderConfig:
    cfg_path = resolve_config_path(path)
    if cfg_path is None:
        log.info("No config file found, using built-in defaults")
        return RenderConfig()

    with cfg_path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    log.info("Loaded config: %s", cfg_path)
    return config_from_dict(data, base_dir=cfg_path.parent)
