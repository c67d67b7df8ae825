"""ASTRO RUN - endless runner game loop."""

__version__ = "0.1.0"
