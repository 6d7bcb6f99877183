"""
IQ Travel destination map.

Entry point: python -m iqmap.main

Provides:
- Geographic projection onto the background map's viewBox (geo.projection)
- The compiled-in list of Greek destinations (geo.destinations)
- Pulse / pointer / parallax maths (gui.animation)
- Ambient drifting sea particles (gui.particles)
- Layered marker items and the PyQt5 map widget (gui.markers, gui.map_widget)
- Contact-form relay client (contact/)
"""

__version__ = "0.2.0"
