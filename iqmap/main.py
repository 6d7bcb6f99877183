"""
IQ Travel map — command line entry point.

Two modes:
  1) 'map'     – open the animated destination map (or, with --snapshot,
                 render one frame to an image and exit)
  2) 'contact' – send one contact-form submission to the relay endpoint
"""
from __future__ import annotations

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import List, Optional

from .config import RenderConfig, load_config
from .contact.client import ContactClient
from .contact.form import ContactSubmission
from .geo.destinations import DESTINATIONS, major_destinations
from .i18n import DEFAULT_LANGUAGE, LANGUAGES, translate
from .logger import setup_logging

log = logging.getLogger(__name__)


def run_map_mode(cfg: RenderConfig, lang: str, snapshot: Optional[Path],
                 size: List[int], fullscreen: bool) -> int:
    from PyQt5 import QtCore, QtGui, QtWidgets

    from .gui.map_widget import DestinationMapWidget

    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv[:1])
    app.setStyle("Fusion")

    palette = QtGui.QPalette()
    palette.setColor(QtGui.QPalette.Window, QtGui.QColor("#030812"))
    palette.setColor(QtGui.QPalette.WindowText, QtGui.QColor("#c0e0e8"))
    palette.setColor(QtGui.QPalette.Button, QtGui.QColor("#06101c"))
    palette.setColor(QtGui.QPalette.ButtonText, QtGui.QColor("#c0e0e8"))
    palette.setColor(QtGui.QPalette.Highlight, QtGui.QColor("#00e8c0"))
    app.setPalette(palette)

    log.info("Destinations: %d (%d major hubs)", len(DESTINATIONS), len(major_destinations()))
    widget = DestinationMapWidget(points=DESTINATIONS, config=cfg, autostart=snapshot is None)
    widget.set_language(lang)

    if snapshot is not None:
        widget.snapshot(snapshot, t=0.0, width=size[0], height=size[1])
        return 0

    widget.setWindowTitle("IQ Travel")
    widget.resize(size[0], size[1])
    if fullscreen:
        widget.showFullScreen()
    else:
        widget.show()

    # Qt's event loop blocks Python signal delivery; a no-op timer lets
    # the handler run periodically.
    def _sigint_handler(*_args):
        log.info("SIGINT received — closing map")
        widget.close()
        app.quit()

    signal.signal(signal.SIGINT, _sigint_handler)
    signal.signal(signal.SIGTERM, _sigint_handler)
    sig_timer = QtCore.QTimer()
    sig_timer.timeout.connect(lambda: None)
    sig_timer.start(200)

    return app.exec_()


def run_contact_mode(cfg: RenderConfig, lang: str, args: argparse.Namespace) -> int:
    client = ContactClient(
        endpoint=args.endpoint or cfg.contact.endpoint,
        timeout=cfg.contact.timeout_s,
        access_key=args.access_key or cfg.contact.access_key,
    )
    submission = ContactSubmission.from_form(
        name=args.name, email=args.email, subject=args.subject, message=args.message,
    )
    print(translate("contact.sending", lang), flush=True)
    result = client.submit(submission, lang=lang)
    print(result.message)
    return 0 if result.success else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "IQ Travel destination map.\n"
            "  map     – animated map window (or --snapshot to an image)\n"
            "  contact – send a contact-form submission"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--mode", choices=["map", "contact"], default="map",
                        help="What to run (default: map).")
    parser.add_argument("--config", type=Path, default=None,
                        help="JSON config file (default: $IQMAP_CONFIG or config/render.json).")
    parser.add_argument("--lang", choices=list(LANGUAGES), default=DEFAULT_LANGUAGE,
                        help="UI language.")
    parser.add_argument("--background", type=Path, default=None,
                        help="Background SVG map (overrides the config file).")
    parser.add_argument("--snapshot", type=Path, default=None,
                        help="Render one frame to this image file and exit.")
    parser.add_argument("--size", type=int, nargs=2, default=[1280, 800],
                        metavar=("W", "H"), help="Window / snapshot size in pixels.")
    parser.add_argument("--fullscreen", action="store_true",
                        help="Open the map full screen.")
    parser.add_argument("--verbose", action="store_true",
                        help="Debug logging.")

    contact = parser.add_argument_group("contact mode")
    contact.add_argument("--endpoint", default=None, help="Relay endpoint URL.")
    contact.add_argument("--access-key", default=None, help="Form service access key.")
    contact.add_argument("--name", default="")
    contact.add_argument("--email", default="")
    contact.add_argument("--subject", default="")
    contact.add_argument("--message", default="")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    cfg = load_config(args.config)
    if args.background is not None:
        cfg.background_svg = args.background

    if args.mode == "contact":
        return run_contact_mode(cfg, args.lang, args)
    return run_map_mode(cfg, args.lang, args.snapshot, args.size, args.fullscreen)


if __name__ == "__main__":
    sys.exit(main())
