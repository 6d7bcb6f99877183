"""PyQt5 rendering of the destination map."""
