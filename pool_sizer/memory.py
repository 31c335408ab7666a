# memory.py
#
# Per-server memory request and limit for a pool.

import logging

from pool_sizer.config import MIN_MEMORY_BYTES
from pool_sizer.models import ErrorKind, MemoryPlan, MemoryResult, PlanFailure
from pool_sizer.units import GENERIC_UNITS, K8S_UNITS, to_bytes

logger = logging.getLogger(__name__)

# (capacity threshold, minimum memory limit), largest threshold first
MEMORY_LIMIT_STEPS = (
    (to_bytes(1, "Pi", K8S_UNITS), to_bytes(64, "Gi", K8S_UNITS)),
    (to_bytes(100, "TiB", GENERIC_UNITS), to_bytes(32, "Gi", K8S_UNITS)),
    (to_bytes(10, "TiB", GENERIC_UNITS), to_bytes(16, "Gi", K8S_UNITS)),
    (to_bytes(1, "TiB", GENERIC_UNITS), to_bytes(8, "Gi", K8S_UNITS)),
)


def plan_memory(memory_gib, capacity_bytes: int, max_memory_bytes: int) -> MemoryResult:
    """
    Memory request/limit for each server of a pool.

    memory_gib is the requested memory in Gi. max_memory_bytes is the most
    memory any single server of the selected nodes can offer. The limit
    equals the request, except that larger pools get a bigger floor.
    """
    try:
        request = to_bytes(memory_gib, "Gi", K8S_UNITS)
    except ValueError:
        return PlanFailure(ErrorKind.INVALID_DATA, "invalid data")

    if max_memory_bytes == 0:
        return PlanFailure(
            ErrorKind.NO_MEMORY_AVAILABLE,
            "there is no memory available for the selected number of nodes",
        )

    if max_memory_bytes < MIN_MEMORY_BYTES:
        return PlanFailure(
            ErrorKind.INSUFFICIENT_MEMORY,
            "there are not enough memory resources available",
        )

    if request < MIN_MEMORY_BYTES:
        return PlanFailure(
            ErrorKind.MEMORY_TOO_SMALL,
            "the requested memory size must be greater than 2Gi",
        )

    if request > max_memory_bytes:
        return PlanFailure(
            ErrorKind.MEMORY_EXCEEDS_AVAILABLE,
            "the requested memory is greater than the max available memory "
            "for the selected number of nodes",
        )

    limit = request
    for threshold, floor in MEMORY_LIMIT_STEPS:
        if capacity_bytes >= threshold:
            limit = max(request, floor)
            break

    logger.debug("memory for %d bytes pool: request=%d limit=%d", capacity_bytes, request, limit)
    return MemoryPlan(request_bytes=request, limit_bytes=limit)
