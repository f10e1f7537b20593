import json
import logging

import pytest

from teastri import config
from teastri.cli import main, parse_weights
from teastri.colors import Colors


@pytest.fixture(autouse=True)
def restore_global_state():
    was_enabled = Colors._enabled
    yield
    if was_enabled:
        Colors.enable()
    else:
        Colors.disable()
    logger = logging.getLogger("teastri")
    logger.handlers = [logging.NullHandler()]
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def run_json(capsys, *argv):
    main(list(argv))
    return json.loads(capsys.readouterr().out)


def test_parse_weights():
    assert parse_weights(["Acetone=40", "Ethyl acetate = 60"]) == {
        "Acetone": 40.0,
        "Ethyl acetate": 60.0,
    }
    with pytest.raises(ValueError):
        parse_weights(["Acetone"])


def test_nearest_json(capsys, data_dir):
    out = run_json(capsys, "--data-dir", str(data_dir), "--json", "nearest", "18", "28", "54", "-k", "2")
    assert [n["name"] for n in out] == ["Water", "Ethanol"]
    assert out[0]["distance"] == pytest.approx(0.0)


def test_nearest_text_has_solvent_swatches(capsys, data_dir):
    Colors.enable()
    main(["-d", str(data_dir), "nearest", "18", "28", "54", "-k", "2"])
    lines = capsys.readouterr().out.splitlines()
    r, g, b = config.SOLVENT_COLORS[0]
    assert lines[0].startswith(f"1. \033[38;2;{r};{g};{b}m")
    assert "Water" in lines[0]


def test_nearest_text_without_color(capsys, data_dir):
    main(["-d", str(data_dir), "--no-color", "nearest", "18", "28", "54", "-k", "1"])
    assert capsys.readouterr().out.startswith("1. ● Water")


def test_describe_json(capsys, data_dir):
    out = run_json(capsys, "-d", str(data_dir), "-j", "describe", "47", "32", "21")
    assert out["nearest"][0]["name"] == "Acetone"
    assert set(out["parameters"]) == {"D", "P", "H"}


def test_locate_text(capsys, data_dir):
    main(["-d", str(data_dir), "--no-color", "locate", "0", "0"])
    out = capsys.readouterr().out
    assert "Nearest solvents" in out


def test_locate_outside_exits(capsys, data_dir):
    with pytest.raises(SystemExit) as exc:
        main(["-d", str(data_dir), "locate", "0", "-10"])
    assert exc.value.code == 1
    assert "outside the triangle" in capsys.readouterr().err


def test_region_json(capsys, data_dir):
    out = run_json(capsys, "-d", str(data_dir), "-j", "region")
    assert [r["name"] for r in out] == ["Paraloid B72"]
    assert len(out[0]["hull"]) >= 3


def test_mix_json(capsys, data_dir):
    out = run_json(capsys, "-d", str(data_dir), "-j", "mix", "Hexane=50", "Water=50")
    assert out["feasible"] is False
    assert out["result"]["V"] == pytest.approx((131.6 + 18.0) / 2)


def test_unknown_solvent_exits(capsys, data_dir):
    with pytest.raises(SystemExit):
        main(["-d", str(data_dir), "mix", "Nope=100"])
    assert "Error" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit):
        main([])
    assert "usage" in capsys.readouterr().out
