"""
Pairwise compatibility (miscibility) table.

The table is delimited text: a header row naming the columns, then one row
per entry whose first cell is the row name. Cells are truthy when they
match one of ``config.TRUTHY_TOKENS``, case-insensitively.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from . import config

logger = logging.getLogger(__name__)


class CompatibilityTable:
    """Read-only lookup of compatibility flags keyed by (row, column) name."""

    def __init__(self, rows: Optional[Dict[str, Dict[str, bool]]] = None):
        self._rows: Dict[str, Dict[str, bool]] = {
            name: dict(row) for name, row in (rows or {}).items()
        }

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, name: str) -> bool:
        return name in self._rows

    def lookup(self, a: str, b: str) -> Optional[bool]:
        """Flag in row a, column b; None when either is missing."""
        row = self._rows.get(a)
        if row is None:
            return None
        return row.get(b)

    def incompatible_pairs(self, names: Sequence[str]) -> List[Tuple[str, str]]:
        """Pairs (a, b), a listed before b, explicitly marked incompatible."""
        pairs = []
        for i, a in enumerate(names):
            for b in names[i + 1 :]:
                if self.lookup(a, b) is False:
                    pairs.append((a, b))
        return pairs

    def is_feasible(self, names: Sequence[str]) -> bool:
        return not self.incompatible_pairs(names)


def parse_compatibility(text: str) -> CompatibilityTable:
    """Parse a ``;``- or ``,``-separated compatibility table."""
    lines = (text or "").strip().splitlines()
    if len(lines) < 2:
        return CompatibilityTable()

    sep = ";" if ";" in lines[0] else ","
    headers = [h.strip() for h in lines[0].split(sep)][1:]

    rows: Dict[str, Dict[str, bool]] = {}
    for line in lines[1:]:
        cols = [c.strip() for c in line.split(sep)]
        if not cols[0]:
            continue
        rows[cols[0]] = {
            header: cell.lower() in config.TRUTHY_TOKENS
            for header, cell in zip(headers, cols[1:])
        }
    logger.debug("Parsed compatibility table with %d rows", len(rows))
    return CompatibilityTable(rows)


def load_compatibility(path: Union[str, Path]) -> CompatibilityTable:
    """Read and parse a compatibility table file."""
    path = Path(path).expanduser()
    table = parse_compatibility(path.read_text(encoding="utf-8"))
    logger.info(f"Loaded compatibility table with {len(table)} rows from {path.name}")
    return table
