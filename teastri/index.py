"""Nearest-neighbour search over catalog entries in TEAS fraction space."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Union

import numpy as np

from .catalog import CatalogEntry
from .geometry import Fractions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Neighbor:
    """A catalog entry and its distance to a query point."""

    entry: CatalogEntry
    fractions: Fractions
    distance: float

    @property
    def name(self) -> str:
        return self.entry.name

    def to_dict(self):
        return {
            "name": self.entry.name,
            "fd": self.fractions.fd,
            "fp": self.fractions.fp,
            "fh": self.fractions.fh,
            "distance": self.distance,
        }


class CompositionIndex:
    """Linear-scan index of entries with derivable fractions.

    Distances are Euclidean over percent fractions (0-100 per axis), not
    over raw D/P/H. Entries without fractions are left out of the index.
    """

    def __init__(self, entries: Sequence[CatalogEntry]):
        self.entries: List[CatalogEntry] = []
        fractions: List[Fractions] = []
        for entry in entries:
            f = entry.fractions
            if f is None:
                logger.debug("Not indexing %s: no fractions", entry.name)
                continue
            self.entries.append(entry)
            fractions.append(f)
        self._fractions = np.array(fractions, dtype=float).reshape(-1, 3)

    def __len__(self) -> int:
        return len(self.entries)

    def nearest(
        self, target: Union[CatalogEntry, Sequence[float]], k: int = 3
    ) -> List[Neighbor]:
        """The k entries closest to target, nearest first.

        Ties keep catalog order. Asking for more entries than are indexed
        returns all of them.

        Args:
            target: A percent fraction triple, or an entry whose fractions
                are used.
            k: Number of neighbours.
        """
        if isinstance(target, CatalogEntry):
            t = target.fractions
            if t is None:
                raise ValueError(f"{target.name} has no TEAS fractions")
        else:
            t = target
        if k <= 0 or not self.entries:
            return []

        t = np.asarray(t, dtype=float)
        d2 = np.sum((self._fractions - t) ** 2, axis=1)
        order = np.argsort(d2, kind="stable")[:k]
        return [
            Neighbor(
                entry=self.entries[i],
                fractions=Fractions(*(float(v) for v in self._fractions[i])),
                distance=float(np.sqrt(d2[i])),
            )
            for i in order
        ]
