"""
Ternary geometry for the TEAS triangle.

Maps fraction triples (fd, fp, fh) onto an equilateral triangle centred at
the origin with a horizontal base, and back. The fd corner sits bottom
right, the fp corner at the top and the fh corner bottom left.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

import numpy as np

from . import config

logger = logging.getLogger(__name__)

SQRT3 = math.sqrt(3.0)


class Fractions(NamedTuple):
    """TEAS fraction triple. Percent scale unless produced by ``normalize``."""

    fd: float
    fp: float
    fh: float


class PlanePoint(NamedTuple):
    """Point in the plane of the triangle."""

    x: float
    y: float


def normalize(fd: float, fp: float, fh: float) -> Fractions:
    """Scale a triple so it sums to 1. A zero sum gives (0, 0, 0)."""
    s = fd + fp + fh
    if not s:
        return Fractions(0.0, 0.0, 0.0)
    return Fractions(fd / s, fp / s, fh / s)


@dataclass(frozen=True)
class TernaryGeometry:
    """Affine map between fraction space and the triangle plane.

    Attributes:
        size: Edge length of the triangle.
    """

    size: float = config.TRIANGLE_SIZE

    def __post_init__(self):
        if not self.size > 0:
            raise ValueError(f"Triangle size must be > 0, got {self.size}")

    def to_plane(self, fd: float, fp: float, fh: float) -> PlanePoint:
        """Project a (possibly unnormalized) triple onto the plane."""
        n = normalize(fd, fp, fh)
        return PlanePoint(
            (n.fd + 0.5 * n.fp - 0.5) * self.size,
            ((SQRT3 / 2) * n.fp - SQRT3 / 6) * self.size,
        )

    def to_fractions(self, x: float, y: float) -> Fractions:
        """Inverse of ``to_plane``, in percent.

        Defined for every plane point. Points outside the triangle yield at
        least one negative component.
        """
        fp = 2 * y / (self.size * SQRT3) + 1 / 3
        fd = x / self.size + 0.5 - 0.5 * fp
        fh = 1 - fd - fp
        return Fractions(fd * 100, fp * 100, fh * 100)

    def to_plane_many(self, fractions: np.ndarray) -> np.ndarray:
        """Vectorised ``to_plane`` over an (n, 3) array. Returns (n, 2)."""
        arr = np.asarray(fractions, dtype=float).reshape(-1, 3)
        sums = arr.sum(axis=1, keepdims=True)
        safe = np.where(sums == 0, 1.0, sums)
        n = np.where(sums == 0, 0.0, arr / safe)
        x = (n[:, 0] + 0.5 * n[:, 1] - 0.5) * self.size
        y = ((SQRT3 / 2) * n[:, 1] - SQRT3 / 6) * self.size
        return np.column_stack((x, y))

    def is_inside(
        self, fractions: Fractions, tolerance: float = config.INSIDE_TOLERANCE
    ) -> bool:
        """True when no component of a percent triple is below -tolerance."""
        return all(v >= -tolerance for v in fractions)

    def locate(
        self, x: float, y: float, tolerance: float = config.INSIDE_TOLERANCE
    ) -> Optional[Fractions]:
        """Fractions of a plane point, or None if it lies outside the triangle."""
        fractions = self.to_fractions(x, y)
        if not self.is_inside(fractions, tolerance):
            logger.debug("Point (%.4f, %.4f) is outside the triangle", x, y)
            return None
        return fractions

    def vertices(self) -> Tuple[PlanePoint, PlanePoint, PlanePoint]:
        """Corners for pure fd, pure fp and pure fh, in that order."""
        return (
            self.to_plane(100, 0, 0),
            self.to_plane(0, 100, 0),
            self.to_plane(0, 0, 100),
        )


DEFAULT_GEOMETRY = TernaryGeometry()


def to_plane(fd: float, fp: float, fh: float) -> PlanePoint:
    """``TernaryGeometry.to_plane`` for the default triangle."""
    return DEFAULT_GEOMETRY.to_plane(fd, fp, fh)


def to_fractions(x: float, y: float) -> Fractions:
    """``TernaryGeometry.to_fractions`` for the default triangle."""
    return DEFAULT_GEOMETRY.to_fractions(x, y)
