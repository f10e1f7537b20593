"""
Chart exploration and reporting.

``ChartExplorer`` ties the solvent and polymer catalogs, the compatibility
table and the ternary geometry together and answers the questions the
chart asks: what is at this point, which polymers reach it, what does this
blend come to.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from . import config
from .catalog import Catalog, CatalogEntry, CatalogError, fractions_to_parameters, load_catalog
from .colors import Colors
from .compatibility import CompatibilityTable, load_compatibility
from .geometry import DEFAULT_GEOMETRY, Fractions, PlanePoint, TernaryGeometry
from .hull import link_outline
from .index import CompositionIndex, Neighbor
from .mixture import MixtureComponent, MixtureResult, aggregate_mixture
from .sampler import ReachRegion, reach_region

logger = logging.getLogger(__name__)


@dataclass
class PointReport:
    """Everything the chart shows about a single composition."""

    fractions: Fractions
    point: PlanePoint
    parameters: Tuple[float, float, float]
    nearest: List[Neighbor] = field(default_factory=list)
    regions: List[str] = field(default_factory=list)

    def summary(self) -> str:
        """Generate a text summary of the report."""
        C = Colors
        fd, fp, fh = self.fractions
        D, P, H = self.parameters
        lines = [
            f"{C.BOLD}{C.CYAN}fd={fd:.1f}  fp={fp:.1f}  fh={fh:.1f}{C.RESET}",
            f"{C.DIM}{'─' * 50}{C.RESET}",
            f"δD={D:.1f}  δP={P:.1f}  δH={H:.1f} {C.DIM}(estimated){C.RESET}",
            "",
        ]

        if self.nearest:
            lines.append(f"{C.BOLD}Nearest solvents{C.RESET}")
            for i, n in enumerate(self.nearest, 1):
                lines.append(
                    f"  {i}. {n.name:<28} "
                    f"{C.DIM}fd={n.fractions.fd:.1f} fp={n.fractions.fp:.1f} "
                    f"fh={n.fractions.fh:.1f}{C.RESET}  Δ={n.distance:.1f}"
                )
            lines.append("")

        if self.regions:
            lines.append(f"{C.BOLD}Inside polymer regions{C.RESET}")
            for name in self.regions:
                lines.append(f"  {C.MAGENTA}{name}{C.RESET}")

        return "\n".join(lines).rstrip()

    def to_dict(self) -> Dict[str, Any]:
        D, P, H = self.parameters
        return {
            "fractions": self.fractions._asdict(),
            "point": self.point._asdict(),
            "parameters": {"D": D, "P": P, "H": H},
            "nearest": [n.to_dict() for n in self.nearest],
            "regions": list(self.regions),
        }


@dataclass
class MixtureReport:
    """Aggregate of a blend plus its compatibility status."""

    components: List[MixtureComponent]
    result: Optional[MixtureResult]
    point: Optional[PlanePoint] = None
    incompatible: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def feasible(self) -> bool:
        return not self.incompatible

    def summary(self) -> str:
        """Generate a text summary of the report."""
        C = Colors
        lines = [
            f"{C.swatch(config.MIX_COLOR)} {C.BOLD}{C.CYAN}Mixture{C.RESET}",
            f"{C.DIM}{'─' * 50}{C.RESET}",
        ]
        for c in self.components:
            lines.append(f"  {c.entry.name:<28} {c.weight:>6.1f} %")
        lines.append("")

        if self.result is None:
            lines.append(f"{C.YELLOW}No result (no usable weight){C.RESET}")
        else:
            r = self.result
            if r.fractions is not None:
                lines.append(
                    f"fd={r.fractions.fd:.1f}  fp={r.fractions.fp:.1f}  fh={r.fractions.fh:.1f}"
                )

            def fmt(label: str, value: Optional[float], unit: str = "") -> str:
                return f"{label}={value:.1f}{unit}" if value is not None else f"{label}="

            lines.append(f"{fmt('δD', r.D)}  {fmt('δP', r.P)}  {fmt('δH', r.H)}")
            lines.append(fmt("Vmix", r.V, " cm³/mol"))

        lines.append("")
        if self.feasible:
            lines.append(f"{C.GREEN}Feasible{C.RESET}")
        else:
            pairs = ", ".join(f"{a} / {b}" for a, b in self.incompatible)
            lines.append(f"{C.RED}Not miscible{C.RESET} {C.DIM}({pairs}){C.RESET}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "components": [
                {"name": c.entry.name, "weight": c.weight} for c in self.components
            ],
            "result": self.result.to_dict() if self.result else None,
            "point": self.point._asdict() if self.point else None,
            "feasible": self.feasible,
            "incompatible": [list(p) for p in self.incompatible],
        }


class ChartExplorer:
    """
    Queries over a solvent catalog, a polymer catalog and a compatibility table.

    Example:
        >>> explorer = ChartExplorer.from_directory("./data")
        >>> report = explorer.locate(0.0, 0.0)
        >>> print(report.summary())
        >>> explorer.mix({"Acetone": 40, "Ethanol": 60}).feasible
    """

    def __init__(
        self,
        solvents: Sequence[CatalogEntry],
        polymers: Sequence[CatalogEntry] = (),
        compatibility: Optional[CompatibilityTable] = None,
        geometry: Optional[TernaryGeometry] = None,
    ):
        self.solvents = solvents if isinstance(solvents, Catalog) else Catalog(solvents)
        self.polymers = polymers if isinstance(polymers, Catalog) else Catalog(polymers)
        self.compatibility = compatibility or CompatibilityTable()
        self.geometry = geometry or DEFAULT_GEOMETRY
        self.index = CompositionIndex(self.solvents)

    @classmethod
    def from_directory(
        cls,
        data_dir: Optional[Union[str, Path]] = None,
        geometry: Optional[TernaryGeometry] = None,
    ) -> "ChartExplorer":
        """Load the chart data files from a directory.

        The solvent catalog and the compatibility table are required; the
        polymer catalog is optional and a missing or malformed file just
        means no polymers.
        """
        data_dir = Path(data_dir or config.DATA_DIR).expanduser()
        solvents = load_catalog(data_dir / config.SOLVENTS_FILE)
        compatibility = load_compatibility(data_dir / config.COMPATIBILITY_FILE)

        polymers = Catalog()
        polymers_path = data_dir / config.POLYMERS_FILE
        try:
            polymers = load_catalog(polymers_path)
        except FileNotFoundError:
            logger.warning(f"No polymer catalog at {polymers_path}")
        except CatalogError as e:
            logger.warning(f"Ignoring polymer catalog: {e}")

        return cls(solvents, polymers, compatibility, geometry)

    # -------------------- Points --------------------

    def describe(
        self, fractions: Sequence[float], k: int = config.NEAREST_COUNT
    ) -> PointReport:
        """Report for a percent fraction triple."""
        fractions = Fractions(*(float(v) for v in fractions))
        point = self.geometry.to_plane(*fractions)
        return PointReport(
            fractions=fractions,
            point=point,
            parameters=fractions_to_parameters(fractions, self.solvents.mean_dph_sum),
            nearest=self.index.nearest(fractions, k),
            regions=[r.name for r in self.polymer_regions() if r.contains(point)],
        )

    def locate(
        self, x: float, y: float, k: int = config.NEAREST_COUNT
    ) -> Optional[PointReport]:
        """Report for a plane point, or None outside the triangle."""
        fractions = self.geometry.locate(x, y)
        if fractions is None:
            return None
        report = self.describe(fractions, k)
        report.point = PlanePoint(x, y)
        return report

    def nearest(self, fractions: Sequence[float], k: int = 3) -> List[Neighbor]:
        return self.index.nearest(fractions, k)

    # -------------------- Regions --------------------

    def polymer_regions(
        self, names: Optional[Sequence[str]] = None
    ) -> List[ReachRegion]:
        """Reach regions of the named polymers (all polymers by default).

        Polymers without a region (missing parameters, degenerate hull)
        are skipped.
        """
        entries = self.polymers if names is None else [self._polymer(n) for n in names]
        regions = []
        for entry in entries:
            region = reach_region(entry, self.geometry)
            if region is None:
                logger.debug(f"Skipping region for {entry.name}")
                continue
            regions.append(region)
        return regions

    # -------------------- Mixtures --------------------

    def mix(self, weights: Mapping[str, float]) -> MixtureReport:
        """Aggregate a blend of solvents given as name -> percentage."""
        components = [
            MixtureComponent(self._solvent(name), float(w)) for name, w in weights.items()
        ]
        result = aggregate_mixture(components)
        point = None
        if result is not None and result.fractions is not None:
            point = self.geometry.to_plane(*result.fractions)
        return MixtureReport(
            components=components,
            result=result,
            point=point,
            incompatible=self.compatibility.incompatible_pairs(list(weights)),
        )

    def link_outline(self, names: Sequence[str]) -> List[PlanePoint]:
        """Outline through the named solvents, skipping those without fractions."""
        points = []
        for name in names:
            f = self._solvent(name).fractions
            if f is not None:
                points.append(self.geometry.to_plane(*f))
        return link_outline(points)

    # -------------------- Lookup --------------------

    def _solvent(self, name: str) -> CatalogEntry:
        entry = self.solvents.get(name)
        if entry is None:
            raise KeyError(f"Unknown solvent: {name}")
        return entry

    def _polymer(self, name: str) -> CatalogEntry:
        entry = self.polymers.get(name)
        if entry is None:
            raise KeyError(f"Unknown polymer: {name}")
        return entry
