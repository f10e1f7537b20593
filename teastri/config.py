"""Defaults for the TEAS chart engine.

Values that differ between deployments can be overridden through
environment variables; everything else is a plain module constant.
"""

import os
from pathlib import Path

# Edge length of the equilateral triangle in plane units.
TRIANGLE_SIZE = float(os.environ.get("TEASTRI_TRIANGLE_SIZE", 6.0))

# Number of Fibonacci-sphere samples used to approximate a reach region.
SAMPLING_POINTS = int(os.environ.get("TEASTRI_SAMPLING_POINTS", 120))

# Plane points whose fractions dip below -INSIDE_TOLERANCE are outside.
INSIDE_TOLERANCE = 1e-3

# Number of solvent suggestions in a point report.
NEAREST_COUNT = 5

# Fallback D+P+H sum when the solvent catalog has no complete D/P/H triple.
DEFAULT_DPH_SUM = 30.0

# Data files
DATA_DIR = Path(os.environ.get("TEASTRI_DATA_DIR", Path.cwd()))
SOLVENTS_FILE = "solvants.json"
POLYMERS_FILE = "polymeres.json"
COMPATIBILITY_FILE = "miscibilite_matrix.csv"

# Cells of the compatibility table read as "compatible".
TRUTHY_TOKENS = frozenset({"1", "true", "yes", "y", "oui"})

# Display palettes (RGB)
SOLVENT_COLORS = [
    (255, 213, 107),
    (255, 107, 107),
    (124, 196, 255),
    (120, 224, 143),
    (255, 160, 122),
    (200, 160, 255),
]
POLYMER_COLORS = [
    (255, 140, 207),
    (255, 200, 0),
    (0, 220, 200),
    (190, 255, 120),
]
MIX_COLOR = (124, 196, 255)
