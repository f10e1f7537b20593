"""
teastri: TEAS Solubility Triangle Engine

Geometry and numerics behind an interactive Teas-triangle chart: ternary
projection of Hansen fraction triples, convex hulls of polymer reach
regions sampled from their solubility spheres, nearest-solvent search and
mixture aggregation.
"""

import logging

from .catalog import (
    Catalog,
    CatalogEntry,
    CatalogError,
    fractions_to_parameters,
    load_catalog,
)
from .colors import Colors
from .compatibility import CompatibilityTable, load_compatibility, parse_compatibility
from .geometry import (
    Fractions,
    PlanePoint,
    TernaryGeometry,
    normalize,
    to_fractions,
    to_plane,
)
from .hull import contains_point, convex_hull, link_outline, polygon_area
from .index import CompositionIndex, Neighbor
from .mixture import (
    MixtureComponent,
    MixtureResult,
    aggregate_mixture,
    mixture_fractions,
    mixture_parameter,
    rebalance_percentages,
)
from .report import ChartExplorer, MixtureReport, PointReport
from .sampler import ReachRegion, reach_region, sample_sphere

# Library use stays silent unless the application configures logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Geometry
    "Fractions",
    "PlanePoint",
    "TernaryGeometry",
    "normalize",
    "to_plane",
    "to_fractions",
    # Hull
    "convex_hull",
    "polygon_area",
    "contains_point",
    "link_outline",
    # Sampling
    "sample_sphere",
    "reach_region",
    "ReachRegion",
    # Catalog
    "Catalog",
    "CatalogEntry",
    "CatalogError",
    "load_catalog",
    "fractions_to_parameters",
    # Search
    "CompositionIndex",
    "Neighbor",
    # Mixtures
    "MixtureComponent",
    "MixtureResult",
    "aggregate_mixture",
    "mixture_fractions",
    "mixture_parameter",
    "rebalance_percentages",
    # Compatibility
    "CompatibilityTable",
    "parse_compatibility",
    "load_compatibility",
    # Reporting
    "ChartExplorer",
    "PointReport",
    "MixtureReport",
    # Utilities
    "Colors",
]
