import json

import pytest

SOLVENTS = [
    {"name": "Acetone", "D": 15.5, "P": 10.4, "H": 7.0, "V": 73.8, "CAS": "67-64-1"},
    {"name": "Ethanol", "D": 15.8, "P": 8.8, "H": 19.4, "V": 58.5},
    {"name": "Hexane", "D": 14.9, "P": 0.0, "H": 0.0, "V": 131.6},
    {"name": "Water", "fd": 18, "fp": 28, "fh": 54, "V": 18.0},
    {"name": "Mystery"},
]

POLYMERS = [
    {"name": "Paraloid B72", "D": 17.6, "P": 9.1, "H": 5.6, "R0": 8.0, "Tg": 40},
    {"name": "Incomplete", "D": 17.0, "P": 8.0},
]

COMPATIBILITY = """\
name;Acetone;Ethanol;Hexane;Water
Acetone;1;1;1;1
Ethanol;1;1;1;1
Hexane;1;1;1;0
Water;1;1;0;1
"""


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "solvants.json").write_text(json.dumps(SOLVENTS), encoding="utf-8")
    (tmp_path / "polymeres.json").write_text(json.dumps(POLYMERS), encoding="utf-8")
    (tmp_path / "miscibilite_matrix.csv").write_text(COMPATIBILITY, encoding="utf-8")
    return tmp_path
