from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pool_sizer.units import (
    GENERIC_UNITS,
    GIB,
    K8S_UNITS,
    ByteQuantity,
    from_bytes,
    to_bytes,
    unit_system,
)


def test_to_bytes_k8s_units():
    assert to_bytes(5, "Gi", K8S_UNITS) == 5 * GIB
    assert to_bytes(1, "B", K8S_UNITS) == 1
    assert to_bytes(2, "Mi", K8S_UNITS) == 2 * 1024 ** 2


def test_to_bytes_generic_units():
    assert to_bytes(1, "GiB") == GIB
    assert to_bytes(3, "TiB", GENERIC_UNITS) == 3 * 1024 ** 4
    assert to_bytes(1, "YiB") == 1024 ** 8


def test_to_bytes_accepts_fractions_and_strings():
    assert to_bytes(1.5, "Ki", K8S_UNITS) == 1536
    assert to_bytes("2.5", "Gi", K8S_UNITS) == 5 * GIB // 2
    assert to_bytes(Decimal("0.5"), "KiB") == 512


def test_unit_symbols_are_system_specific():
    assert to_bytes(1, "Gi", GENERIC_UNITS) == 0
    assert to_bytes(1, "GiB", K8S_UNITS) == 0
    assert unit_system(True) is K8S_UNITS
    assert unit_system(False) is GENERIC_UNITS


@given(st.one_of(st.integers(min_value=0, max_value=10 ** 12), st.floats(allow_nan=False, allow_infinity=False)))
def test_unknown_unit_is_zero(magnitude):
    assert to_bytes(magnitude, "XB", GENERIC_UNITS) == 0
    assert to_bytes(magnitude, "XB", K8S_UNITS) == 0


@pytest.mark.parametrize("magnitude", ["abc", "", float("nan"), float("inf"), None])
def test_to_bytes_rejects_non_numbers(magnitude):
    with pytest.raises(ValueError):
        to_bytes(magnitude, "Gi", K8S_UNITS)


def test_from_bytes_zero():
    assert from_bytes(0) == ByteQuantity(0, "B")
    assert from_bytes(0, K8S_UNITS) == ByteQuantity(0, "B")


def test_from_bytes_picks_largest_unit():
    assert from_bytes(5 * GIB, K8S_UNITS) == ByteQuantity(5, "Gi")
    assert from_bytes(1023) == ByteQuantity(1023, "B")
    assert from_bytes(1024) == ByteQuantity(1, "KiB")


def test_from_bytes_rounding():
    assert from_bytes(1536, show_decimals=True, round_down=False) == ByteQuantity(1.5, "KiB")
    assert from_bytes(1536, show_decimals=True, round_down=True) == ByteQuantity(1.0, "KiB")
    assert from_bytes(1536, round_down=True) == ByteQuantity(1, "KiB")


def test_from_bytes_rounds_half_up():
    assert from_bytes(2560, K8S_UNITS, round_down=False) == ByteQuantity(3, "Ki")
    assert from_bytes(1536, round_down=False) == ByteQuantity(2, "KiB")
    assert from_bytes(2560, K8S_UNITS, round_down=True) == ByteQuantity(2, "Ki")


def test_from_bytes_stays_in_largest_unit():
    # K8s units stop at Ei
    assert from_bytes(1024 ** 8, K8S_UNITS) == ByteQuantity(1024 ** 2, "Ei")


@given(
    st.integers(min_value=1, max_value=1023),
    st.sampled_from(K8S_UNITS.symbols),
)
def test_whole_values_survive_round_trip(n, unit):
    assert from_bytes(to_bytes(n, unit, K8S_UNITS), K8S_UNITS) == ByteQuantity(n, unit)
