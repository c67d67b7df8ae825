"""Draws session snapshots into RGB frame buffers."""

from typing import Optional
import logging
import math

import numpy as np

from astrorun.core.state import GamePhase
from astrorun.game.session import ObstacleView, PlayerView, Snapshot
from astrorun.graphics.backgrounds import draw_background
from astrorun.graphics.primitives import (
    Buffer, Color, blend_rect, draw_circle, draw_ellipse, draw_line, draw_rect, hsb_to_rgb, new_buffer,
)

logger = logging.getLogger(__name__)

GROUND_COLOR: Color = hsb_to_rgb(20, 80, 20)
SUIT_COLOR: Color = hsb_to_rgb(0, 0, 90)
OUTLINE_COLOR: Color = hsb_to_rgb(0, 0, 20)
HELMET_COLOR: Color = hsb_to_rgb(0, 0, 80)
VISOR_COLOR: Color = hsb_to_rgb(180, 30, 100)
BACKPACK_COLOR: Color = hsb_to_rgb(0, 0, 50)


def obstacle_color(color_seed: float) -> Color:
    """Rock color for an obstacle: hue 15-35, saturation 60-80, brightness 30-50."""
    hue = 15 + 20 * color_seed
    saturation = 60 + 20 * ((color_seed * 7.0) % 1.0)
    brightness = 30 + 20 * ((color_seed * 13.0) % 1.0)
    return hsb_to_rgb(hue, saturation, brightness)


class GameRenderer:
    """Renders a Snapshot without touching the session.

    Layers, back to front: environment background, ground band,
    obstacles, player, jetpack particles. Text overlays are left to
    the host window.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.buffer = new_buffer(width, height)

    def resize(self, width: int, height: int) -> None:
        if (width, height) != (self.width, self.height):
            self.width = width
            self.height = height
            self.buffer = new_buffer(width, height)
            logger.debug(f"Render buffer resized to {width}x{height}")

    def render(self, snapshot: Snapshot, buffer: Optional[Buffer] = None) -> Buffer:
        """Draw a full frame and return the buffer it was drawn into."""
        target = self.buffer if buffer is None else buffer

        draw_background(target, snapshot.environment_index, snapshot.tick, snapshot.obstacle_speed)
        draw_rect(
            target, 0, snapshot.ground_y,
            snapshot.field_width, snapshot.field_height - snapshot.ground_y,
            GROUND_COLOR,
        )

        for obstacle in snapshot.obstacles:
            self._draw_obstacle(target, obstacle)

        self._draw_player(target, snapshot.player, snapshot.tick, snapshot.phase)

        for particle in snapshot.particles:
            color = hsb_to_rgb(particle.hue, particle.saturation, 100)
            draw_circle(target, particle.x, particle.y, particle.size / 2, color, alpha=particle.alpha / 100)

        return target

    def _draw_obstacle(self, buffer: Buffer, obstacle: ObstacleView) -> None:
        color = obstacle_color(obstacle.color_seed)
        draw_rect(buffer, obstacle.x, obstacle.y, obstacle.width, obstacle.height, color)

        # Top highlight and bottom shadow
        highlight = tuple(min(255, c + 40) for c in color)
        shadow = tuple(max(0, c - 40) for c in color)
        blend_rect(buffer, obstacle.x, obstacle.y, obstacle.width, 5, highlight, 0.5)
        blend_rect(buffer, obstacle.x, obstacle.y + obstacle.height - 5, obstacle.width, 5, shadow, 0.5)

    def _draw_player(self, buffer: Buffer, player: PlayerView, tick: int, phase: GamePhase) -> None:
        x, y, w, h = player.x, player.y, player.width, player.height

        # Legs swing while running, tuck in the air
        if player.is_grounded:
            leg = 3 * math.sin(tick * 0.3) if phase == GamePhase.PLAYING else 0.0
        else:
            leg = float(np.clip(player.vy / 2, -5, 5))
        draw_line(buffer, x - w * 0.2, y + h * 0.4, x - w * 0.2 + leg, y + h * 0.5 + 5, OUTLINE_COLOR, 5)
        draw_line(buffer, x + w * 0.2, y + h * 0.4, x + w * 0.2 - leg, y + h * 0.5 + 5, OUTLINE_COLOR, 5)

        # Body
        body_w, body_h = w * 0.8, h * 0.9
        draw_rect(buffer, x - body_w / 2, y - body_h / 2, body_w, body_h, SUIT_COLOR)
        draw_rect(buffer, x - body_w / 2, y - body_h / 2, body_w, body_h, OUTLINE_COLOR, filled=False)

        # Backpack
        draw_rect(buffer, x - w * 0.45, y + h * 0.1 - h * 0.25, w * 0.9, h * 0.5, BACKPACK_COLOR)

        # Helmet
        helmet_y = y - h * 0.35
        draw_circle(buffer, x, helmet_y, w * 0.375, HELMET_COLOR)
        draw_ellipse(buffer, x, helmet_y, w * 0.35, w * 0.35, VISOR_COLOR, alpha=0.7)
