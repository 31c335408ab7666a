# units.py
#
# Byte <-> (magnitude, unit) conversion for base-1024 unit systems.

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

KIB = 1024
GIB = KIB ** 3

Magnitude = Union[int, float, Decimal, str]


@dataclass(frozen=True)
class UnitSystem:
    name: str
    symbols: tuple  # ordered, smallest first; position is the power of 1024

    def ordinal(self, symbol: str) -> Optional[int]:
        try:
            return self.symbols.index(symbol)
        except ValueError:
            return None

    def symbol(self, ordinal: int) -> str:
        return self.symbols[ordinal]

    @property
    def largest(self) -> int:
        return len(self.symbols) - 1


@dataclass(frozen=True)
class ByteQuantity:
    value: Union[int, float]
    unit: str


GENERIC_UNITS = UnitSystem(
    name="generic",
    symbols=("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB"),
)

K8S_UNITS = UnitSystem(
    name="k8s",
    symbols=("B", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei"),
)


def unit_system(k8s: bool) -> UnitSystem:
    return K8S_UNITS if k8s else GENERIC_UNITS


def _as_decimal(magnitude: Magnitude) -> Decimal:
    if isinstance(magnitude, float):
        # shortest repr, so 1.1 stays 1.1 and not 1.100000000000000088...
        magnitude = repr(magnitude)
    try:
        value = Decimal(str(magnitude).strip() if isinstance(magnitude, str) else magnitude)
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError(f"magnitude {magnitude!r} is not a number")
    if not value.is_finite():
        raise ValueError(f"magnitude {magnitude!r} is not a finite number")
    return value


def to_bytes(magnitude: Magnitude, unit: str, system: UnitSystem = GENERIC_UNITS) -> int:
    """
    Convert magnitude * unit into an absolute byte count.

    An unknown unit symbol yields 0 rather than an error; callers that need a
    non-zero answer must validate the symbol first. A magnitude that is not a
    finite number raises ValueError.
    """
    value = _as_decimal(magnitude)

    power = system.ordinal(unit)
    if power is None:
        return 0

    return int(value * (KIB ** power))


def from_bytes(
    n: int,
    system: UnitSystem = GENERIC_UNITS,
    show_decimals: bool = False,
    round_down: bool = True,
) -> ByteQuantity:
    """
    Express a byte count in the largest unit that keeps the value >= 1.

    Values beyond the system's largest symbol stay in that symbol.
    """
    if n == 0:
        return ByteQuantity(0, system.symbol(0))

    i = 0
    scaled = n
    while scaled >= KIB and i < system.largest:
        scaled = scaled / KIB
        i += 1

    if round_down:
        scaled = math.floor(scaled)

    # half up, like a fixed-point display
    if scaled == int(scaled):
        rounded = Decimal(int(scaled))
    else:
        step = Decimal("0.1") if show_decimals else Decimal(1)
        rounded = Decimal(scaled).quantize(step, rounding=ROUND_HALF_UP)

    value = float(rounded) if show_decimals else int(rounded)

    return ByteQuantity(value, system.symbol(i))
