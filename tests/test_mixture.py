import itertools

import pytest

from teastri.catalog import CatalogEntry
from teastri.mixture import (
    MixtureComponent,
    aggregate_mixture,
    mixture_fractions,
    mixture_parameter,
    rebalance_percentages,
)

A = CatalogEntry(name="A", D=15, P=0, H=0)
B = CatalogEntry(name="B", D=5, P=0, H=0)


def test_equal_blend_of_d():
    result = aggregate_mixture([MixtureComponent(A, 50), MixtureComponent(B, 50)])
    assert result.D == pytest.approx(10.0)
    assert result.P == pytest.approx(0.0)
    assert result.total_weight == 100


def test_order_does_not_matter():
    acetone = CatalogEntry(name="Acetone", D=15.5, P=10.4, H=7.0, V=73.8)
    ethanol = CatalogEntry(name="Ethanol", D=15.8, P=8.8, H=19.4, V=58.5)
    water = CatalogEntry(name="Water", fd=18, fp=28, fh=54, V=18.0)
    comps = [
        MixtureComponent(acetone, 35),
        MixtureComponent(ethanol, 40),
        MixtureComponent(water, 25),
    ]
    reference = aggregate_mixture(comps)
    for perm in itertools.permutations(comps):
        result = aggregate_mixture(list(perm))
        assert list(result.fractions) == pytest.approx(list(reference.fractions))
        for attr in ("D", "P", "H", "V"):
            assert getattr(result, attr) == pytest.approx(getattr(reference, attr))


def test_zero_total_weight_is_no_result():
    assert aggregate_mixture([MixtureComponent(A, 0), MixtureComponent(B, 0)]) is None
    assert aggregate_mixture([]) is None
    assert mixture_fractions([MixtureComponent(A, 0)]) is None


def test_all_zero_composition_is_a_result():
    zero = CatalogEntry(name="Z", D=0, P=0, H=0)
    result = aggregate_mixture([MixtureComponent(zero, 100)])
    assert result is not None
    assert result.fractions == (0.0, 0.0, 0.0)
    assert result.D == 0.0


def test_weights_need_not_sum_to_100():
    result = aggregate_mixture([MixtureComponent(A, 1), MixtureComponent(B, 3)])
    assert result.D == pytest.approx(7.5)


def test_negative_weights_count_as_zero():
    result = aggregate_mixture([MixtureComponent(A, -20), MixtureComponent(B, 10)])
    assert result.D == pytest.approx(5.0)


def test_entries_without_fractions_are_skipped():
    unknown = CatalogEntry(name="U", V=100.0)
    comps = [MixtureComponent(A, 50), MixtureComponent(unknown, 50)]
    assert list(mixture_fractions(comps)) == pytest.approx([100, 0, 0])
    assert mixture_parameter(comps, "D") == pytest.approx(15.0)
    assert mixture_parameter(comps, "V") == pytest.approx(100.0)


def test_missing_attribute_leaves_denominator():
    with_v = CatalogEntry(name="X", D=10, P=0, H=0, V=80.0)
    comps = [MixtureComponent(with_v, 25), MixtureComponent(A, 75)]
    assert mixture_parameter(comps, "V") == pytest.approx(80.0)
    assert mixture_parameter([MixtureComponent(A, 10)], "V") is None


def test_unknown_attribute_rejected():
    with pytest.raises(ValueError):
        mixture_parameter([MixtureComponent(A, 10)], "R0")


def test_result_to_dict():
    result = aggregate_mixture([MixtureComponent(A, 50), MixtureComponent(B, 50)])
    data = result.to_dict()
    assert data["fractions"] == {"fd": 100.0, "fp": 0.0, "fh": 0.0}
    assert data["V"] is None


@pytest.mark.parametrize(
    "percents, locked, changed, expected",
    [
        ([50, 50], [False, False], None, [50, 50]),
        ([0, 0, 0], [False, False, False], None, [34, 33, 33]),
        ([70, 10, 10], [False, False, False], 0, [70, 15, 15]),
        ([30, 0, 0], [True, False, False], None, [30, 35, 35]),
        ([30, 90, 0], [True, False, False], 1, [30, 70, 0]),
        ([20, 20], [True, True], None, [50, 50]),
        ([1, 1, 1], [True, True, True], None, [34, 33, 33]),
        ([80, 60, 5], [True, True, False], None, [80, 60, 0]),
    ],
)
def test_rebalance_percentages(percents, locked, changed, expected):
    assert rebalance_percentages(percents, locked, changed) == expected


def test_rebalance_sums_to_100_when_unlocked_rows_remain():
    result = rebalance_percentages([10, 45, 7, 3], [False, True, False, False], 2)
    assert sum(result) == 100
    assert result[1] == 45
    assert result[2] == 7


def test_rebalance_length_mismatch():
    with pytest.raises(ValueError):
        rebalance_percentages([50, 50], [False])
