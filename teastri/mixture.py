"""
Solvent mixtures.

A mixture is an ordered list of (entry, weight) components. Its TEAS
fractions and its D, P, H and molar volume are weighted means over the
components that carry the attribute in question; the weights need not sum
to 100.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .catalog import CatalogEntry
from .geometry import Fractions

logger = logging.getLogger(__name__)

PARAMETERS = ("D", "P", "H", "V")


@dataclass(frozen=True)
class MixtureComponent:
    """One row of a mixture.

    Attributes:
        entry: The catalog entry.
        weight: Percentage weight; negative values count as zero.
        locked: Whether the row keeps its weight when others are rebalanced.
    """

    entry: CatalogEntry
    weight: float
    locked: bool = False

    @property
    def effective_weight(self) -> float:
        return max(0.0, self.weight or 0.0)


@dataclass(frozen=True)
class MixtureResult:
    """Aggregated properties of a mixture. Missing values are None."""

    fractions: Optional[Fractions]
    D: Optional[float]
    P: Optional[float]
    H: Optional[float]
    V: Optional[float]
    total_weight: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fractions": self.fractions._asdict() if self.fractions else None,
            "D": self.D,
            "P": self.P,
            "H": self.H,
            "V": self.V,
            "total_weight": self.total_weight,
        }


def mixture_fractions(components: Sequence[MixtureComponent]) -> Optional[Fractions]:
    """Weighted mean of the components' fractions.

    Components without fractions are skipped and their weight left out of
    the denominator. Returns None when no usable weight remains.
    """
    weights: List[float] = []
    rows: List[Fractions] = []
    for c in components:
        f = c.entry.fractions
        if f is None:
            continue
        weights.append(c.effective_weight)
        rows.append(f)

    total = math.fsum(weights)
    if total <= 0:
        return None
    return Fractions(
        *(
            math.fsum(w * f[axis] for w, f in zip(weights, rows)) / total
            for axis in range(3)
        )
    )


def mixture_parameter(
    components: Sequence[MixtureComponent], attribute: str
) -> Optional[float]:
    """Weighted mean of one of D, P, H or V.

    Components missing the attribute are left out of both numerator and
    denominator for that attribute only.
    """
    if attribute not in PARAMETERS:
        raise ValueError(f"Unknown mixture attribute {attribute!r}")

    pairs = [
        (c.effective_weight, getattr(c.entry, attribute))
        for c in components
        if getattr(c.entry, attribute) is not None
    ]
    total = math.fsum(w for w, _ in pairs)
    if total <= 0:
        return None
    return math.fsum(w * v for w, v in pairs) / total


def aggregate_mixture(
    components: Sequence[MixtureComponent],
) -> Optional[MixtureResult]:
    """Aggregate fractions, D, P, H and V of a mixture.

    Returns None when nothing can be aggregated, e.g. when every weight is
    zero. The result does not depend on component order.
    """
    fractions = mixture_fractions(components)
    values = {attr: mixture_parameter(components, attr) for attr in PARAMETERS}
    if fractions is None and all(v is None for v in values.values()):
        logger.debug("Mixture of %d components has no usable weight", len(components))
        return None
    return MixtureResult(
        fractions=fractions,
        total_weight=math.fsum(c.effective_weight for c in components),
        **values,
    )


def rebalance_percentages(
    percents: Sequence[int],
    locked: Sequence[bool],
    changed: Optional[int] = None,
) -> List[int]:
    """Redistribute integer slider percentages so they sum to 100.

    Args:
        percents: Current percentage of each row.
        locked: Per-row lock flags.
        changed: Index of the row the user just moved, if any.

    Returns:
        New percentages. With every row locked they are rescaled to 100.
        Otherwise locked rows keep their values, the changed row keeps its
        value clamped to what is left, and the remainder is split evenly
        over the other unlocked rows, the first rows taking one extra point
        each until it is used up.
    """
    if len(percents) != len(locked):
        raise ValueError("percents and locked must have the same length")

    result = [int(p) for p in percents]
    locked_idx = [i for i, flag in enumerate(locked) if flag]
    unlocked_idx = [i for i, flag in enumerate(locked) if not flag]

    if not unlocked_idx:
        total = sum(result) or 1
        for i in locked_idx:
            result[i] = math.floor(100 * result[i] / total + 0.5)
        diff = 100 - sum(result)
        for i in locked_idx:
            if not diff:
                break
            step = 1 if diff > 0 else -1
            result[i] += step
            diff -= step
        return result

    remaining = 100 - min(100, sum(result[i] for i in locked_idx))

    base = unlocked_idx
    if changed is not None and not locked[changed]:
        fixed = max(0, min(remaining, result[changed]))
        remaining -= fixed
        result[changed] = fixed
        base = [i for i in unlocked_idx if i != changed]

    if base:
        each, leftover = divmod(remaining, len(base))
        for i in base:
            result[i] = each
        for i in base[:leftover]:
            result[i] += 1
    return result
