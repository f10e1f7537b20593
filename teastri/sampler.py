"""
Polymer reach regions.

A polymer's solubility sphere (centre D0/P0/H0, radius R0) lives in raw
Hansen space. Its footprint on the TEAS triangle is approximated by
sampling the sphere surface on a Fibonacci spiral, projecting every sample
into fraction space and taking the convex hull of the projected points.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from . import config
from .catalog import CatalogEntry
from .geometry import DEFAULT_GEOMETRY, Fractions, PlanePoint, TernaryGeometry
from .hull import contains_point, convex_hull, polygon_area

logger = logging.getLogger(__name__)

GOLDEN_ANGLE = math.pi * (3.0 - math.sqrt(5.0))


def sample_sphere(
    D0: float,
    P0: float,
    H0: float,
    R0: float,
    n: int = config.SAMPLING_POINTS,
) -> List[Fractions]:
    """Sample a Hansen sphere surface and project it into fraction space.

    Deterministic: the same arguments always give the same samples.
    Negative magnitudes are clamped to zero before normalization.

    Args:
        D0, P0, H0: Sphere centre.
        R0: Sphere radius.
        n: Number of samples, at least 2.

    Returns:
        n fraction triples in percent.
    """
    if n < 2:
        raise ValueError(f"Sphere sampling needs at least 2 points, got {n}")

    i = np.arange(n, dtype=float)
    y = 1.0 - 2.0 * i / (n - 1)
    r = np.sqrt(np.clip(1.0 - y * y, 0.0, None))
    theta = GOLDEN_ANGLE * i
    x = np.cos(theta) * r
    z = np.sin(theta) * r

    dph = np.column_stack(
        (
            np.maximum(0.0, D0 + R0 * x),
            np.maximum(0.0, P0 + R0 * y),
            np.maximum(0.0, H0 + R0 * z),
        )
    )
    sums = dph.sum(axis=1, keepdims=True)
    pct = np.where(sums == 0, 0.0, 100.0 * dph / np.where(sums == 0, 1.0, sums))
    return [Fractions(float(a), float(b), float(c)) for a, b, c in pct]


@dataclass(frozen=True)
class ReachRegion:
    """Projected footprint of a polymer's solubility sphere.

    Attributes:
        name: Polymer name.
        hull: Counter-clockwise hull vertices in the plane.
        center: Plane point of the sphere centre's fractions.
        max_radius: Largest distance from the centre to a hull vertex.
    """

    name: str
    hull: Tuple[PlanePoint, ...]
    center: PlanePoint
    max_radius: float

    @property
    def area(self) -> float:
        return polygon_area(self.hull)

    def contains(self, point: Tuple[float, float]) -> bool:
        return contains_point(self.hull, point)

    def to_dict(self):
        return {
            "name": self.name,
            "center": list(self.center),
            "max_radius": self.max_radius,
            "area": self.area,
            "hull": [list(p) for p in self.hull],
        }


def reach_region(
    entry: CatalogEntry,
    geometry: Optional[TernaryGeometry] = None,
    n: int = config.SAMPLING_POINTS,
) -> Optional[ReachRegion]:
    """Reach region of a polymer entry.

    Returns None when the entry lacks any of D, P, H or R0, or when the
    samples do not span a proper polygon.
    """
    geometry = geometry or DEFAULT_GEOMETRY
    if not entry.has_dph or entry.R0 is None:
        logger.debug("No reach region for %s: missing D/P/H/R0", entry.name)
        return None

    samples = sample_sphere(entry.D, entry.P, entry.H, entry.R0, n=n)
    points = [PlanePoint(*p) for p in geometry.to_plane_many(np.array(samples))]
    hull = convex_hull(points)
    if len(hull) < 3:
        logger.debug(
            "No reach region for %s: hull has %d vertices", entry.name, len(hull)
        )
        return None

    center = geometry.to_plane(*entry.dph_fractions)
    max_radius = max(math.hypot(p.x - center.x, p.y - center.y) for p in hull)
    return ReachRegion(
        name=entry.name,
        hull=tuple(hull),
        center=center,
        max_radius=max_radius or 1.0,
    )
