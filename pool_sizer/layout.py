# layout.py
#
# Pool layout planner: turns a desired capacity into nodes x drives x volume
# size.

import logging
import math
import numbers
from fractions import Fraction
from typing import Optional, Union

from pool_sizer.config import DEFAULT_LIMITS, PlannerLimits
from pool_sizer.integrations import IntegrationContext
from pool_sizer.models import (
    CapacityRequest,
    ErrorKind,
    LayoutConstraints,
    LayoutPlan,
    LayoutResult,
    PlanFailure,
)

logger = logging.getLogger(__name__)

MSG_POOL_TOO_SMALL = "pool size must be greater than 1Gi"
MSG_INVALID_DRIVE_COUNT = "number of drives must be at least 1"
MSG_INVALID_NODE_COUNT = "number of nodes must be at least 1"
MSG_INVALID_DATA = "invalid data"
MSG_ALLOCATION_EXCEEDS_LIMIT = "unable to allocate this server"
MSG_VOLUME_TOO_SMALL = "disk size would be less than 1Gi, try another combination"


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Number):
        return False
    try:
        return math.isfinite(value)
    except TypeError:
        # complex and friends
        return False


def _fail(kind: ErrorKind, message: str) -> PlanFailure:
    logger.debug("layout rejected: %s (%s)", message, kind.value)
    return PlanFailure(kind=kind, message=message)


def plan_layout(
    request: CapacityRequest,
    constraints: LayoutConstraints,
    integration: Optional[IntegrationContext] = None,
    limits: PlannerLimits = DEFAULT_LIMITS,
) -> LayoutResult:
    """Plan a pool for a user-entered capacity (magnitude + unit)."""
    try:
        requested_bytes = request.to_bytes()
    except ValueError:
        return _fail(ErrorKind.INVALID_DATA, MSG_INVALID_DATA)

    return plan_layout_bytes(requested_bytes, constraints, integration, limits)


def plan_layout_bytes(
    requested_bytes: Union[int, float],
    constraints: LayoutConstraints,
    integration: Optional[IntegrationContext] = None,
    limits: PlannerLimits = DEFAULT_LIMITS,
) -> LayoutResult:
    """
    Plan a pool for an absolute byte count.

    Inputs are validated in order and the first failure is returned:

    - capacity below the minimum volume size
    - forced drives per node that is not a positive integer
    - any input that is not a finite number
    - no positive integral node count (neither forced nor a caller-supplied candidate)

    Nodes are never guessed here: when the node count is not forced the
    caller must supply constraints.candidate_node_count.
    """
    nodes = constraints.node_count
    drives = constraints.forced_drives_per_node
    max_cluster = constraints.max_cluster_bytes

    numeric = [requested_bytes, max_cluster, limits.min_volume_bytes, limits.max_volume_bytes]
    if nodes is not None:
        numeric.append(nodes)
    if drives is not None:
        numeric.append(drives)
    all_numbers = all(_is_number(value) for value in numeric)

    if _is_number(requested_bytes) and requested_bytes < limits.min_volume_bytes:
        return _fail(ErrorKind.POOL_TOO_SMALL, MSG_POOL_TOO_SMALL)

    if drives is not None and _is_number(drives) and (drives <= 0 or drives != int(drives)):
        return _fail(ErrorKind.INVALID_DRIVE_COUNT, MSG_INVALID_DRIVE_COUNT)

    if not all_numbers or max_cluster <= 0:
        return _fail(ErrorKind.INVALID_DATA, MSG_INVALID_DATA)

    if not nodes or nodes < 1 or nodes != int(nodes):
        return _fail(ErrorKind.INVALID_NODE_COUNT, MSG_INVALID_NODE_COUNT)

    result = structure_calc(
        nodes=int(nodes),
        desired_capacity=int(requested_bytes),
        max_disk_size=int(limits.max_volume_bytes),
        max_cluster_size=int(max_cluster),
        disks_per_node=int(drives) if drives is not None else 0,
        min_disk_size=int(limits.min_volume_bytes),
    )
    if not result.ok:
        return result

    if integration is not None:
        failure = check_integration_minimum(result, integration)
        if failure is not None:
            return failure

    logger.debug(
        "layout for %d bytes: %d nodes x %d volumes of %d bytes",
        requested_bytes,
        result.nodes,
        result.volumes_per_node,
        result.volume_size_bytes,
    )
    return result


def structure_calc(
    nodes: int,
    desired_capacity: int,
    max_disk_size: int,
    max_cluster_size: int,
    disks_per_node: int = 0,
    min_disk_size: int = DEFAULT_LIMITS.min_volume_bytes,
) -> LayoutResult:
    """
    Compute volumes per node, total volumes and volume size.

    disks_per_node == 0 lets the planner pick the drive count: the volume
    size is the capacity spread over at least 4 volumes, capped at
    max_disk_size. Otherwise the drive count is fixed and the volume size
    floats.

    Whenever the resulting volumes per node is fractional it is rounded up
    and the volume size recomputed downwards.
    """
    if disks_per_node == 0:
        # pVS = min(dC / max(4, n), maxDiskSize)
        volume_size = math.floor(min(Fraction(desired_capacity, max(4, nodes)), max_disk_size))
        if volume_size == 0:
            return _fail(ErrorKind.VOLUME_TOO_SMALL, MSG_VOLUME_TOO_SMALL)
        total_volumes = Fraction(desired_capacity, volume_size)  # nPV = dC / pVS
        volumes_per_node = total_volumes / nodes                 # vPS = nPV / n
    else:
        volumes_per_node = Fraction(disks_per_node)
        total_volumes = volumes_per_node * nodes
        volume_size = desired_capacity // int(total_volumes)

    if volumes_per_node.denominator != 1:
        volumes_per_node = Fraction(math.ceil(volumes_per_node))
        total_volumes = volumes_per_node * nodes
        volume_size = desired_capacity // int(total_volumes)

    volumes_per_node = int(volumes_per_node)
    total_volumes = int(total_volumes)

    if volume_size * volumes_per_node * nodes > max_cluster_size:
        return _fail(ErrorKind.ALLOCATION_EXCEEDS_LIMIT, MSG_ALLOCATION_EXCEEDS_LIMIT)

    if volume_size < min_disk_size:
        return _fail(ErrorKind.VOLUME_TOO_SMALL, MSG_VOLUME_TOO_SMALL)

    return LayoutPlan(
        nodes=nodes,
        volumes_per_node=volumes_per_node,
        total_volumes=total_volumes,
        volume_size_bytes=volume_size,
    )


def check_integration_minimum(
    plan: LayoutPlan, integration: IntegrationContext
) -> Optional[PlanFailure]:
    minimum = integration.catalog.lookup_minimum_volume_size(
        integration.marketplace, integration.storage_type
    )
    if minimum is None:
        return None

    if plan.volume_size_bytes < minimum.to_bytes():
        return _fail(
            ErrorKind.BELOW_INTEGRATION_MINIMUM,
            f"for the {minimum.label} storage type the minimum volume size is {minimum}",
        )
    return None
