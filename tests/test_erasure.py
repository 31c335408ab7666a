from fractions import Fraction

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pool_sizer.erasure import (
    ERROR_INVALID_PARITY,
    ERROR_NO_PARITY_OPTIONS,
    analyze_parity,
    parse_parity,
)
from pool_sizer.units import GIB


def test_parse_parity():
    assert parse_parity("EC:4") == 4
    assert parse_parity("EC:0") == 0
    with pytest.raises(ValueError):
        parse_parity("RAID5")
    with pytest.raises(ValueError):
        parse_parity("EC:")


@given(st.integers(min_value=0, max_value=1024), st.integers(min_value=0, max_value=1024 * GIB))
def test_no_options(total_drives, volume_size):
    summary = analyze_parity([], total_drives, volume_size)
    assert summary.error == ERROR_NO_PARITY_OPTIONS
    assert summary.options == ()
    assert summary.max_ec == ""
    assert summary.raw_capacity_bytes == 0
    assert not summary.ok


def test_sixteen_drives_of_one_gib():
    summary = analyze_parity(["EC:0", "EC:2", "EC:4"], 16, GIB)

    assert summary.ok
    assert summary.erasure_stripe_set_size == 8
    assert summary.max_ec == "EC:4"
    assert summary.default_ec == "EC:4"
    assert summary.raw_capacity_bytes == 16 * GIB
    assert [o.erasure_code for o in summary.options] == ["EC:0", "EC:2", "EC:4"]

    ec4 = summary.option("EC:4")
    assert ec4.storage_factor == 2
    assert ec4.usable_capacity_bytes == 8 * GIB
    assert ec4.max_failure_tolerations == 8

    ec2 = summary.option("EC:2")
    assert ec2.storage_factor == Fraction(4, 3)
    assert ec2.usable_capacity_bytes == 12 * GIB
    assert ec2.max_failure_tolerations == 4

    ec0 = summary.option("EC:0")
    assert ec0.storage_factor == 1
    assert ec0.usable_capacity_bytes == 16 * GIB
    assert ec0.max_failure_tolerations == 0


def test_default_falls_back_to_max_parity():
    summary = analyze_parity(["EC:3", "EC:2"], 8, GIB)

    assert summary.max_ec == "EC:3"
    assert summary.default_ec == "EC:3"
    assert summary.erasure_stripe_set_size == 6
    assert summary.option("EC:2").storage_factor == Fraction(3, 2)
    assert summary.option("EC:2").max_failure_tolerations == 3


@pytest.mark.parametrize("options", [["RAID5"], ["EC:4", "EC:x"], ["EC:0"]])
def test_invalid_options(options):
    summary = analyze_parity(options, 16, GIB)
    assert summary.error == ERROR_INVALID_PARITY
    assert summary.options == ()


@given(
    st.lists(st.integers(min_value=0, max_value=8), min_size=1, max_size=6).filter(lambda p: max(p) > 0),
    st.integers(min_value=1, max_value=512),
    st.integers(min_value=GIB, max_value=256 * GIB),
)
def test_storage_factor_matches_stripe_set(parities, total_drives, volume_size):
    summary = analyze_parity([f"EC:{p}" for p in parities], total_drives, volume_size)
    ess = summary.erasure_stripe_set_size

    assert ess == 2 * max(parities)
    for parity, option in zip(parities, summary.options):
        assert option.storage_factor == Fraction(ess, ess - parity)
        assert option.storage_factor >= 1
        assert 0 <= option.usable_capacity_bytes <= summary.raw_capacity_bytes
        assert 0 <= option.max_failure_tolerations <= total_drives


def test_same_inputs_same_summary():
    args = (["EC:4", "EC:3", "EC:2"], 32, 100 * GIB)
    assert analyze_parity(*args) == analyze_parity(*args)
