"""Basic drawing primitives for numpy frame buffers."""

from typing import Optional, Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int, color: Color = (0, 0, 0)) -> Buffer:
    """Create an RGB buffer of shape (height, width, 3)."""
    buffer = np.zeros((height, width, 3), dtype=np.uint8)
    if color != (0, 0, 0):
        buffer[:, :] = color
    return buffer


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def hsb_to_rgb(h: float, s: float, b: float) -> Color:
    """Convert HSB to RGB color.

    Args:
        h: Hue (0-360)
        s: Saturation (0-100)
        b: Brightness (0-100)

    Returns:
        RGB tuple (0-255 each)
    """
    h = h % 360
    s = min(max(s, 0.0), 100.0) / 100.0
    v = min(max(b, 0.0), 100.0) / 100.0
    c = v * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = v - c

    if h < 60:
        r, g, bl = c, x, 0.0
    elif h < 120:
        r, g, bl = x, c, 0.0
    elif h < 180:
        r, g, bl = 0.0, c, x
    elif h < 240:
        r, g, bl = 0.0, x, c
    elif h < 300:
        r, g, bl = x, 0.0, c
    else:
        r, g, bl = c, 0.0, x

    return (round((r + m) * 255), round((g + m) * 255), round((bl + m) * 255))


def _clip_rect(buffer: Buffer, x: float, y: float, width: float, height: float) -> Tuple[int, int, int, int]:
    h, w = buffer.shape[:2]
    x1 = max(0, min(int(round(x)), w))
    y1 = max(0, min(int(round(y)), h))
    x2 = max(0, min(int(round(x + width)), w))
    y2 = max(0, min(int(round(y + height)), h))
    return x1, y1, x2, y2


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    filled: bool = True,
) -> None:
    """Draw a rectangle anchored at its top-left corner.

    Coordinates are rounded to whole pixels and clamped to the buffer.
    """
    x1, y1, x2, y2 = _clip_rect(buffer, x, y, width, height)
    if x2 <= x1 or y2 <= y1:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
    else:
        buffer[y1, x1:x2] = color
        buffer[y2 - 1, x1:x2] = color
        buffer[y1:y2, x1] = color
        buffer[y1:y2, x2 - 1] = color


def blend_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    alpha: float,
) -> None:
    """Alpha-blend a filled rectangle (alpha 0.0 to 1.0) onto the buffer."""
    if alpha <= 0:
        return
    if alpha >= 1:
        draw_rect(buffer, x, y, width, height, color)
        return

    x1, y1, x2, y2 = _clip_rect(buffer, x, y, width, height)
    if x2 <= x1 or y2 <= y1:
        return

    region = buffer[y1:y2, x1:x2].astype(np.float32)
    blended = region * (1 - alpha) + np.array(color, dtype=np.float32) * alpha
    buffer[y1:y2, x1:x2] = blended.astype(np.uint8)


def _circle_mask(
    buffer: Buffer, cx: float, cy: float, rx: float, ry: float
) -> Optional[Tuple[Tuple[slice, slice], NDArray[np.bool_]]]:
    h, w = buffer.shape[:2]
    x1 = max(0, int(np.floor(cx - rx)))
    x2 = min(w, int(np.ceil(cx + rx)) + 1)
    y1 = max(0, int(np.floor(cy - ry)))
    y2 = min(h, int(np.ceil(cy + ry)) + 1)
    if x2 <= x1 or y2 <= y1 or rx <= 0 or ry <= 0:
        return None

    ys, xs = np.ogrid[y1:y2, x1:x2]
    mask = ((xs - cx) / rx) ** 2 + ((ys - cy) / ry) ** 2 <= 1.0
    return (slice(y1, y2), slice(x1, x2)), mask


def draw_ellipse(
    buffer: Buffer,
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    color: Color,
    alpha: float = 1.0,
) -> None:
    """Draw a filled ellipse, optionally alpha-blended.

    Only the bounding window of the ellipse is touched.
    """
    found = _circle_mask(buffer, cx, cy, rx, ry)
    if found is None or alpha <= 0:
        return

    window, mask = found
    region = buffer[window]
    if alpha >= 1:
        region[mask] = color
    else:
        pixels = region[mask].astype(np.float32)
        region[mask] = (pixels * (1 - alpha) + np.array(color, dtype=np.float32) * alpha).astype(np.uint8)


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    alpha: float = 1.0,
) -> None:
    """Draw a filled circle."""
    draw_ellipse(buffer, cx, cy, radius, radius, color, alpha)


def draw_line(
    buffer: Buffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: Color,
    thickness: int = 1,
) -> None:
    """Draw a line using Bresenham's algorithm.

    Args:
        buffer: Target numpy array (height, width, 3)
        x1, y1: Start point
        x2, y2: End point
        color: RGB color tuple
        thickness: Line thickness in pixels
    """
    h, w = buffer.shape[:2]
    x1, y1, x2, y2 = int(round(x1)), int(round(y1)), int(round(x2)), int(round(y2))

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    x, y = x1, y1

    while True:
        for tx in range(-(thickness // 2), (thickness + 1) // 2):
            for ty in range(-(thickness // 2), (thickness + 1) // 2):
                px, py = x + tx, y + ty
                if 0 <= px < w and 0 <= py < h:
                    buffer[py, px] = color

        if x == x2 and y == y2:
            break

        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
