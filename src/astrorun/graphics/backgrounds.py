"""Environment backgrounds, one per environment index.

Layouts are generated from fixed seeds so every frame of an environment
places its stars and rocks in the same spots; only the drift changes
with the tick counter.
"""

from functools import lru_cache
from typing import Callable, List
import numpy as np
from numpy.typing import NDArray

from astrorun.graphics.primitives import Buffer, draw_circle, draw_ellipse, fill, hsb_to_rgb

BackgroundDrawer = Callable[[Buffer, int, float], None]


@lru_cache(maxsize=16)
def _scatter(seed: int, count: int) -> NDArray[np.float64]:
    """count rows of (x, y, size) in [0, 1), stable for a given seed."""
    rng = np.random.default_rng(seed)
    return rng.random((count, 3))


def _draw_stars(buffer: Buffer, seed: int, count: int, drift: float, max_size: float, brightness: float) -> None:
    h, w = buffer.shape[:2]
    color = hsb_to_rgb(0, 0, brightness)
    for sx, sy, ss in _scatter(seed, count):
        x = (sx * w * 1.2 - w * 0.1 + drift) % w
        draw_circle(buffer, x, sy * h, ss * max_size + 0.5, color)


def draw_starfield(buffer: Buffer, tick: int, speed: float) -> None:
    """Dark blue sky with slowly drifting stars."""
    fill(buffer, hsb_to_rgb(240, 80, 10))
    _draw_stars(buffer, seed=101, count=150, drift=tick * 0.05, max_size=1.5, brightness=80)


def draw_nebula(buffer: Buffer, tick: int, speed: float) -> None:
    """Purple sky with slowly evolving nebula clouds."""
    h, w = buffer.shape[:2]
    fill(buffer, hsb_to_rgb(270, 90, 15))

    # Smooth field from a few sine waves, evaluated on a coarse grid
    cell = 10
    t = tick * 0.005
    ys, xs = np.mgrid[0:h:cell, 0:w:cell].astype(np.float32)
    field = (
        np.sin(xs * 0.011 + t) * np.cos(ys * 0.013 - t * 0.5)
        + 0.5 * np.sin((xs + ys) * 0.007 + t * 0.7)
    )
    n = (field + 1.5) / 3.0  # roughly 0..1

    dense = n > 0.55
    if dense.any():
        hue = 260 + (n - 0.3) / 0.4 * 60
        light = np.clip(5 + (n - 0.2) / 0.6 * 35, 5, 40)
        alpha = np.clip((n - 0.55) / 0.2, 0.0, 0.6)
        colors = np.array([hsb_to_rgb(hv, 80, lv) for hv, lv in zip(hue[dense], light[dense])], dtype=np.float32)
        cloud = np.zeros(n.shape + (3,), dtype=np.float32)
        cloud[dense] = colors
        weight = np.where(dense, alpha, 0.0)[..., None]

        # Upscale coarse cells to full resolution
        cloud = np.repeat(np.repeat(cloud, cell, axis=0), cell, axis=1)[:h, :w]
        weight = np.repeat(np.repeat(weight, cell, axis=0), cell, axis=1)[:h, :w]
        blended = buffer.astype(np.float32) * (1 - weight) + cloud * weight
        buffer[:, :] = blended.astype(np.uint8)

    _draw_stars(buffer, seed=202, count=50, drift=tick * 0.03, max_size=1.0, brightness=90)


def draw_planet(buffer: Buffer, tick: int, speed: float) -> None:
    """Deep blue sky with a banded gas giant swaying in the distance."""
    h, w = buffer.shape[:2]
    fill(buffer, hsb_to_rgb(220, 70, 12))
    _draw_stars(buffer, seed=303, count=100, drift=0.0, max_size=1.0, brightness=70)

    px = w * 0.7 + np.cos(tick * 0.002) * 50
    py = h * 0.3 + np.sin(tick * 0.003) * 30
    radius = w * 0.15

    for i in range(5, 0, -1):
        draw_circle(buffer, px, py, radius * (1 + i * 0.02), hsb_to_rgb(200, 50, 100), alpha=0.1)
    draw_circle(buffer, px, py, radius, hsb_to_rgb(30, 70, 50))
    draw_ellipse(buffer, px, py - radius * 0.4, radius * 0.95, radius * 0.2, hsb_to_rgb(35, 60, 60), alpha=0.5)
    draw_ellipse(buffer, px, py + radius * 0.2, radius * 0.85, radius * 0.3, hsb_to_rgb(25, 65, 40), alpha=0.4)


def draw_asteroid_field(buffer: Buffer, tick: int, speed: float) -> None:
    """Near-black sky with three parallax layers of drifting rocks."""
    h, w = buffer.shape[:2]
    fill(buffer, hsb_to_rgb(250, 50, 5))

    span = w * 1.5
    for layer in range(3):
        parallax = 0.1 + layer * 0.2
        count = 20 + layer * 15
        base_size = 10 + layer * 15
        color = hsb_to_rgb(0, 0, 15 + layer * 10)

        for sx, sy, ss in _scatter(400 + layer, count):
            x = (sx * w * 2 - tick * speed * parallax) % span
            if x > w * 1.25:
                x -= span
            size = ss * base_size + 5
            draw_ellipse(buffer, x, sy * h, size / 2, size * (0.35 + 0.3 * ss), color, alpha=0.9)


BACKGROUNDS: List[BackgroundDrawer] = [
    draw_starfield,
    draw_nebula,
    draw_planet,
    draw_asteroid_field,
]


def draw_background(buffer: Buffer, environment_index: int, tick: int, speed: float) -> None:
    """Draw the background for an environment index, cycling through all of them."""
    BACKGROUNDS[environment_index % len(BACKGROUNDS)](buffer, tick, speed)
