"""Rendering for ASTRO RUN."""

from .renderer import GameRenderer
from .backgrounds import BACKGROUNDS, draw_background

__all__ = ["GameRenderer", "BACKGROUNDS", "draw_background"]
