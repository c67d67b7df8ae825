"""Simulation entities: the player and the obstacles it jumps over.

All rates are per tick. Screen coordinates: x grows right, y grows down,
so the ground line is the largest y the player's lower edge may reach.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle normalized to its four edges."""

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_center(cls, cx: float, cy: float, width: float, height: float) -> "BoundingBox":
        """Box centered on (cx, cy)."""
        half_w = width / 2
        half_h = height / 2
        return cls(left=cx - half_w, top=cy - half_h, right=cx + half_w, bottom=cy + half_h)

    @classmethod
    def from_corner(cls, x: float, y: float, width: float, height: float) -> "BoundingBox":
        """Box anchored at its top-left corner (x, y)."""
        return cls(left=x, top=y, right=x + width, bottom=y + height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


class PlayerEntity:
    """The runner. Horizontally fixed; only vertical motion is simulated.

    Position is the center of the body. At most one double jump is
    available per airborne sequence: jumps_used is always 0, 1 or 2.
    """

    def __init__(
        self,
        width: float = 40.0,
        height: float = 60.0,
        gravity: float = 0.6,
        jump_force: float = -11.0,
        double_jump_force: float = -9.0,
    ) -> None:
        self.width = width
        self.height = height
        self.gravity = gravity
        self.jump_force = jump_force
        self.double_jump_force = double_jump_force

        self.x = 0.0
        self.y = 0.0
        self.vx = 0.0
        self.vy = 0.0
        self.ax = 0.0
        self.ay = 0.0
        self.is_grounded = True
        self.jumps_used = 0

    @property
    def bottom(self) -> float:
        """Y of the lower edge."""
        return self.y + self.height / 2

    def reset(self, x: float, y: float) -> None:
        """Place the player at (x, y), at rest and grounded."""
        self.x = x
        self.y = y
        self.vx = 0.0
        self.vy = 0.0
        self.ax = 0.0
        self.ay = 0.0
        self.is_grounded = True
        self.jumps_used = 0

    def pin_to_ground(self, ground_y: float) -> None:
        """Hold the player idle on the ground line without moving x."""
        self.y = ground_y - self.height / 2
        self.vy = 0.0
        self.is_grounded = True
        self.jumps_used = 0

    def apply_force(self, fx: float, fy: float) -> None:
        """Accumulate acceleration for the current tick."""
        self.ax += fx
        self.ay += fy

    def apply_gravity(self) -> None:
        """Add one tick of gravity to the acceleration."""
        self.apply_force(0.0, self.gravity)

    def jump(self) -> bool:
        """Launch from the ground, or spend the single double jump.

        Returns:
            True if an impulse was applied, False when no jump is left
        """
        if self.is_grounded:
            self.vy = self.jump_force
            self.is_grounded = False
            self.jumps_used = 1
            return True

        if self.jumps_used < 2:
            self.vy = self.double_jump_force
            self.jumps_used = 2
            return True

        return False

    def integrate(self, ground_y: float) -> None:
        """Advance one tick: velocity += acceleration, position += velocity.

        Acceleration is cleared afterwards. If the lower edge ends up below
        the ground line the player is clamped back onto it and landed.
        """
        self.vy += self.ay
        self.vx += self.ax
        self.x += self.vx
        self.y += self.vy
        self.ax = 0.0
        self.ay = 0.0

        if self.bottom > ground_y:
            self._land(ground_y)

    def check_ground_collision(self, ground_y: float) -> bool:
        """Land if touching or past the ground while not moving up.

        Leaving the ground never clears is_grounded here; only jump() does.

        Returns:
            True if the player is resting on the ground after the check
        """
        if self.bottom >= ground_y and self.vy >= 0:
            self._land(ground_y)
            return True
        return False

    def _land(self, ground_y: float) -> None:
        self.y = ground_y - self.height / 2
        self.vy = 0.0
        self.is_grounded = True
        self.jumps_used = 0

    def bounding_box(self) -> BoundingBox:
        """Current body rectangle, centered on the position."""
        return BoundingBox.from_center(self.x, self.y, self.width, self.height)


class Obstacle:
    """A ground rock scrolling left at the run's obstacle speed."""

    def __init__(self, x: float, y: float, width: float, height: float, color_seed: float = 0.0) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Obstacle size must be positive, got {width}x{height}")
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        # Opaque to the simulation; the renderer turns it into a color
        self.color_seed = color_seed

    @property
    def right(self) -> float:
        return self.x + self.width

    def advance(self, speed: float) -> None:
        """Move left by one tick at the given speed."""
        self.x -= speed

    def is_offscreen(self) -> bool:
        """True once the right edge has passed the left side of the field."""
        return self.right < 0

    def bounding_box(self) -> BoundingBox:
        """Rectangle anchored at the top-left position."""
        return BoundingBox.from_corner(self.x, self.y, self.width, self.height)

    def __repr__(self) -> str:
        return f"Obstacle(x={self.x:.1f}, y={self.y:.1f}, w={self.width:.1f}, h={self.height:.1f})"
