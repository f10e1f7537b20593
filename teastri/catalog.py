"""
Solvent and polymer catalogs.

Catalog files are JSON arrays of objects. The engine reads ``name``, the
Hansen components ``D``/``P``/``H``, optional explicit TEAS fractions
``fd``/``fp``/``fh``, the polymer reach radius ``R0`` and the molar volume
``V``. Every other field is carried through untouched in ``attributes``.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from . import config
from .geometry import Fractions

logger = logging.getLogger(__name__)

KNOWN_FIELDS = ("name", "D", "P", "H", "fd", "fp", "fh", "R0", "V")


class CatalogError(Exception):
    """Exception raised when a catalog file cannot be read."""

    pass


def is_finite_number(value: Any) -> bool:
    """True for real finite numbers. Booleans and numeric strings are not."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _number_or_none(value: Any) -> Optional[float]:
    return float(value) if is_finite_number(value) else None


@dataclass(frozen=True)
class CatalogEntry:
    """A solvent or polymer record.

    Attributes:
        name: Display name, also the key in the compatibility table.
        D, P, H: Hansen component magnitudes (MPa^0.5).
        fd, fp, fh: Explicit TEAS fractions in percent.
        R0: Reach radius of a polymer's solubility sphere.
        V: Molar volume (cm³/mol).
        extra: Any other fields from the source record, as (key, value)
            pairs; read them through ``attributes``.
    """

    name: str
    D: Optional[float] = None
    P: Optional[float] = None
    H: Optional[float] = None
    fd: Optional[float] = None
    fp: Optional[float] = None
    fh: Optional[float] = None
    R0: Optional[float] = None
    V: Optional[float] = None
    extra: Tuple[Tuple[str, Any], ...] = field(default=(), compare=False)

    def __post_init__(self):
        if isinstance(self.extra, Mapping):
            object.__setattr__(self, "extra", tuple(self.extra.items()))

    @property
    def attributes(self) -> Mapping[str, Any]:
        """Read-only view of the pass-through fields."""
        return MappingProxyType(dict(self.extra))

    @property
    def is_polymer(self) -> bool:
        return self.R0 is not None

    @property
    def has_dph(self) -> bool:
        return all(v is not None for v in (self.D, self.P, self.H))

    @property
    def fractions(self) -> Optional[Fractions]:
        """TEAS fractions in percent, or None when none can be derived.

        Explicit fd/fp/fh win when all three are present; otherwise they are
        derived from D/P/H by normalization.
        """
        if self.fd is not None and self.fp is not None and self.fh is not None:
            return Fractions(self.fd, self.fp, self.fh)
        return self.dph_fractions

    @property
    def dph_fractions(self) -> Optional[Fractions]:
        """Fractions derived from D/P/H only, ignoring explicit fd/fp/fh."""
        if not self.has_dph:
            return None
        s = self.D + self.P + self.H
        if not s:
            return Fractions(0.0, 0.0, 0.0)
        return Fractions(100 * self.D / s, 100 * self.P / s, 100 * self.H / s)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CatalogEntry":
        """Build an entry from a decoded JSON object.

        Non-numeric or non-finite values for the numeric fields are treated
        as missing.
        """
        name = data.get("name")
        if not isinstance(name, str):
            raise CatalogError(f"Catalog record has no name: {dict(data)!r}")
        return cls(
            name=name,
            D=_number_or_none(data.get("D")),
            P=_number_or_none(data.get("P")),
            H=_number_or_none(data.get("H")),
            fd=_number_or_none(data.get("fd")),
            fp=_number_or_none(data.get("fp")),
            fh=_number_or_none(data.get("fh")),
            R0=_number_or_none(data.get("R0")),
            V=_number_or_none(data.get("V")),
            extra=tuple((k, v) for k, v in data.items() if k not in KNOWN_FIELDS),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to a JSON-ready dict, omitting missing fields."""
        result: Dict[str, Any] = {"name": self.name}
        for key in KNOWN_FIELDS[1:]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        result.update(self.attributes)
        return result


class Catalog(Sequence[CatalogEntry]):
    """Immutable, ordered collection of catalog entries."""

    def __init__(self, entries: Sequence[CatalogEntry] = ()):
        self._entries: Tuple[CatalogEntry, ...] = tuple(entries)
        self._by_name: Dict[str, CatalogEntry] = {}
        for entry in self._entries:
            # First occurrence wins, matching lookup by catalog order
            self._by_name.setdefault(entry.name, entry)

    def __getitem__(self, index):
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"Catalog({len(self._entries)} entries)"

    def get(self, name: str) -> Optional[CatalogEntry]:
        return self._by_name.get(name)

    def names(self) -> List[str]:
        return [e.name for e in self._entries]

    def with_fractions(self) -> List[CatalogEntry]:
        """Entries that have derivable TEAS fractions, in catalog order."""
        return [e for e in self._entries if e.fractions is not None]

    def polymers(self) -> List[CatalogEntry]:
        return [e for e in self._entries if e.is_polymer]

    @property
    def mean_dph_sum(self) -> float:
        """Mean of D+P+H over entries with complete D/P/H."""
        sums = [e.D + e.P + e.H for e in self._entries if e.has_dph]
        if not sums:
            return config.DEFAULT_DPH_SUM
        return math.fsum(sums) / len(sums)

    @classmethod
    def from_records(cls, records: Sequence[Any]) -> "Catalog":
        """Build a catalog from decoded JSON, skipping unusable records."""
        entries = []
        for i, record in enumerate(records):
            if not isinstance(record, Mapping):
                logger.warning("Skipping catalog record %d: not an object", i)
                continue
            try:
                entries.append(CatalogEntry.from_dict(record))
            except CatalogError as e:
                logger.warning("Skipping catalog record %d: %s", i, e)
        return cls(entries)


def load_catalog(path: Union[str, Path]) -> Catalog:
    """Load a catalog JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        CatalogError: If the file is not a JSON array.
    """
    path = Path(path).expanduser()
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, list):
        raise CatalogError(
            f"Catalog {path} must be a JSON array, got {type(data).__name__}"
        )

    catalog = Catalog.from_records(data)
    logger.info(f"Loaded {len(catalog)} entries from {path.name}")
    return catalog


def fractions_to_parameters(
    fractions: Fractions, dph_sum: float = config.DEFAULT_DPH_SUM
) -> Tuple[float, float, float]:
    """Estimate (D, P, H) from percent fractions and a total D+P+H."""
    fd, fp, fh = fractions
    return dph_sum * fd / 100, dph_sum * fp / 100, dph_sum * fh / 100
