# erasure.py
#
# Erasure code parity trade-offs (usable capacity vs. drive failures) for a
# planned pool.

import logging
import math
from fractions import Fraction
from typing import Sequence

from pool_sizer.models import ErasureSummary, ParityAnalysis

logger = logging.getLogger(__name__)

ERROR_NO_PARITY_OPTIONS = 1
ERROR_INVALID_PARITY = 2

PREFERRED_EC = "EC:4"


def parse_parity(erasure_code: str) -> int:
    """'EC:4' -> 4. Raises ValueError for anything else."""
    prefix, sep, count = erasure_code.partition(":")
    if prefix != "EC" or not sep or not count.strip().isdigit():
        raise ValueError(f"invalid erasure code {erasure_code!r}")
    return int(count)


def analyze_parity(
    parity_options: Sequence[str],
    total_drives: int,
    volume_size_bytes: int,
) -> ErasureSummary:
    """
    Usable capacity and fault tolerance of each parity option.

    The stripe set size is twice the highest parity on offer. For a parity
    count p the storage factor is ESS / (ESS - p); usable capacity and the
    number of drives that may fail are both floored.

    Options are reported in the order given. error is 1 when no options are
    supplied and 2 when the options cannot be evaluated (a malformed code,
    or no option with parity above 0).
    """
    if len(parity_options) < 1:
        return ErasureSummary(error=ERROR_NO_PARITY_OPTIONS)

    try:
        parities = [parse_parity(code) for code in parity_options]
    except ValueError as e:
        logger.debug("parity analysis rejected: %s", e)
        return ErasureSummary(error=ERROR_INVALID_PARITY)

    total_storage = total_drives * volume_size_bytes

    # The first option is the most protective one when callers order the
    # list by decreasing parity; pick the actual maximum so any order works.
    max_index = max(range(len(parities)), key=lambda i: (parities[i], -i))
    max_ec = parity_options[max_index]
    erasure_stripe_set = parities[max_index] * 2

    if erasure_stripe_set == 0:
        logger.debug("parity analysis rejected: no parity above 0 in %s", list(parity_options))
        return ErasureSummary(error=ERROR_INVALID_PARITY)

    options = []
    for code, parity in zip(parity_options, parities):
        storage_factor = Fraction(erasure_stripe_set, erasure_stripe_set - parity)
        options.append(
            ParityAnalysis(
                erasure_code=code,
                storage_factor=storage_factor,
                usable_capacity_bytes=math.floor(total_storage / storage_factor),
                max_failure_tolerations=total_drives - math.floor(total_drives / storage_factor),
            )
        )

    default_ec = PREFERRED_EC if PREFERRED_EC in parity_options else max_ec

    return ErasureSummary(
        options=tuple(options),
        max_ec=max_ec,
        default_ec=default_ec,
        erasure_stripe_set_size=erasure_stripe_set,
        raw_capacity_bytes=total_storage,
        error=0,
    )
