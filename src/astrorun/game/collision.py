"""Axis-aligned bounding box collision test."""

from astrorun.game.entities import BoundingBox


def overlaps(a: BoundingBox, b: BoundingBox) -> bool:
    """Return True if the two boxes intersect.

    Edges are closed intervals: boxes that only touch along a boundary
    count as colliding. The test is symmetric in its arguments.
    """
    separated = (
        a.right < b.left
        or a.left > b.right
        or a.bottom < b.top
        or a.top > b.bottom
    )
    return not separated
