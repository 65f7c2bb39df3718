# Open Gate Package
"""
Persistent web panels ("gates") for Ignis/Wayland.

Each gate is a named configuration that becomes an openable panel hosting
an embedded web page, anchored left, right or center on screen.
"""

__version__ = "0.1.0-dev"
