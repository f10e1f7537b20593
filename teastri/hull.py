"""
2D convex hulls for point sets on the TEAS plane.

The hull bounds polymer reach regions and the outline drawn through
linked solvents and mixtures.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

Point = Tuple[float, float]


def _cross(o: Point, a: Point, b: Point) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def convex_hull(points: Sequence[Point]) -> List[Point]:
    """Convex hull by Andrew's monotone chain.

    Points are sorted by x then y; a point is kept on a chain only when it
    makes a strict left turn, so collinear and duplicate points never appear
    in the result. The hull is returned counter-clockwise, starting from the
    lowest-x point.

    Args:
        points: Any sequence of (x, y) pairs.

    Returns:
        Hull vertices. Fewer than 2 input points come back unchanged; two
        distinct points come back as a 2-vertex degenerate hull, and so do
        collinear inputs. Two or more identical points come back as two
        copies of that point, so a 2-vertex result does not imply two
        distinct points.
    """
    if len(points) <= 1:
        return list(points)

    pts = sorted(points, key=lambda p: (p[0], p[1]))

    lower: List[Point] = []
    for p in pts:
        while len(lower) >= 2 and _cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)

    upper: List[Point] = []
    for p in reversed(pts):
        while len(upper) >= 2 and _cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)

    return lower[:-1] + upper[:-1]


def polygon_area(hull: Sequence[Point]) -> float:
    """Shoelace area of a polygon; 0.0 below three vertices."""
    if len(hull) < 3:
        return 0.0
    s = 0.0
    for i, p in enumerate(hull):
        q = hull[(i + 1) % len(hull)]
        s += p[0] * q[1] - q[0] * p[1]
    return abs(s) / 2.0


def contains_point(
    hull: Sequence[Point], point: Point, tolerance: float = 1e-12
) -> bool:
    """Inclusive point-in-polygon test for a counter-clockwise convex hull."""
    if len(hull) < 3:
        return False
    n = len(hull)
    return all(
        _cross(hull[i], hull[(i + 1) % n], point) >= -tolerance for i in range(n)
    )


def link_outline(points: Sequence[Point]) -> List[Point]:
    """Outline through a set of linked points.

    Three or more points with a proper hull give the hull. Otherwise (two
    points, or everything collinear) the outline is the segment from the
    leftmost to the rightmost point. Fewer than two points give nothing.
    """
    if len(points) < 2:
        return []
    if len(points) >= 3:
        hull = convex_hull(points)
        if len(hull) >= 3:
            return hull
    by_x = sorted(points, key=lambda p: p[0])
    return [by_x[0], by_x[-1]]
