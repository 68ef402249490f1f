"""Editor for NES background screens: tiles, attributes and collisions."""

__version__ = "0.1.0"