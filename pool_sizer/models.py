# models.py
#
# Value objects shared by the planners. All of them are immutable and built
# fresh per planning call.

from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from typing import Optional, Union

from pool_sizer.units import Magnitude, to_bytes, unit_system


# ------------------------------
# Inputs
# ------------------------------

@dataclass(frozen=True)
class CapacityRequest:
    amount: Magnitude
    unit: str
    k8s: bool = True  # Ki/Mi/Gi symbols rather than KiB/MiB/GiB

    def to_bytes(self) -> int:
        return to_bytes(self.amount, self.unit, unit_system(self.k8s))


@dataclass(frozen=True)
class LayoutConstraints:
    max_cluster_bytes: int
    forced_node_count: Optional[int] = None
    forced_drives_per_node: Optional[int] = None
    candidate_node_count: Optional[int] = None  # used when nodes are not forced

    @property
    def node_count(self) -> Optional[int]:
        if self.forced_node_count:
            return self.forced_node_count
        return self.candidate_node_count


# ------------------------------
# Layout results
# ------------------------------

class ErrorKind(Enum):
    POOL_TOO_SMALL = "pool_too_small"
    INVALID_DRIVE_COUNT = "invalid_drive_count"
    INVALID_NODE_COUNT = "invalid_node_count"
    INVALID_DATA = "invalid_data"
    ALLOCATION_EXCEEDS_LIMIT = "allocation_exceeds_limit"
    VOLUME_TOO_SMALL = "volume_too_small"
    BELOW_INTEGRATION_MINIMUM = "below_integration_minimum"

    NO_MEMORY_AVAILABLE = "no_memory_available"
    INSUFFICIENT_MEMORY = "insufficient_memory"
    MEMORY_TOO_SMALL = "memory_too_small"
    MEMORY_EXCEEDS_AVAILABLE = "memory_exceeds_available"


@dataclass(frozen=True)
class LayoutPlan:
    nodes: int
    volumes_per_node: int
    total_volumes: int
    volume_size_bytes: int

    ok = True

    @property
    def raw_capacity_bytes(self) -> int:
        return self.total_volumes * self.volume_size_bytes

    def as_record(self) -> dict:
        return {
            "nodes": self.nodes,
            "volumesPerNode": self.volumes_per_node,
            "totalVolumes": self.total_volumes,
            "volumeSizeBytes": self.volume_size_bytes,
            "error": "",
        }


@dataclass(frozen=True)
class PlanFailure:
    kind: ErrorKind
    message: str

    ok = False

    def as_record(self) -> dict:
        """Flat display record: zeroed numbers next to the error message."""
        return {
            "nodes": 0,
            "volumesPerNode": 0,
            "totalVolumes": 0,
            "volumeSizeBytes": 0,
            "error": self.message,
        }


LayoutResult = Union[LayoutPlan, PlanFailure]


@dataclass(frozen=True)
class MemoryPlan:
    request_bytes: int
    limit_bytes: int

    ok = True


MemoryResult = Union[MemoryPlan, PlanFailure]


# ------------------------------
# Erasure code analysis
# ------------------------------

@dataclass(frozen=True)
class ParityAnalysis:
    erasure_code: str
    storage_factor: Fraction  # raw : usable, always >= 1
    usable_capacity_bytes: int
    max_failure_tolerations: int


@dataclass(frozen=True)
class ErasureSummary:
    options: tuple = field(default_factory=tuple)
    max_ec: str = ""
    default_ec: str = ""
    erasure_stripe_set_size: int = 0
    raw_capacity_bytes: int = 0
    error: int = 0

    @property
    def ok(self) -> bool:
        return self.error == 0

    def option(self, erasure_code: str) -> Optional[ParityAnalysis]:
        for analysis in self.options:
            if analysis.erasure_code == erasure_code:
                return analysis
        return None
