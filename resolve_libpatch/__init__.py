"""resolve-libpatch — toggle DaVinci Resolve's bundled GLib libraries on Linux."""

__version__ = "0.1.0"
