"""A tile-based collect-and-escape arcade game on .ber maps, with an XPM reader."""

__version__ = "0.1.0"
__all__ = ["colors", "display", "game", "mapfile", "validate", "xpm"]