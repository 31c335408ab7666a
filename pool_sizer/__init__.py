from pool_sizer.config import DEFAULT_LIMITS, DEFAULT_PARITY_OPTIONS, PlannerLimits, setup_logging
from pool_sizer.erasure import ERROR_INVALID_PARITY, ERROR_NO_PARITY_OPTIONS, analyze_parity, parse_parity
from pool_sizer.integrations import (
    IntegrationContext,
    MinimumVolumeSize,
    StaticVolumeSizeCatalog,
    VolumeSizeCatalog,
)
from pool_sizer.layout import plan_layout, plan_layout_bytes, structure_calc
from pool_sizer.memory import plan_memory
from pool_sizer.models import (
    CapacityRequest,
    ErasureSummary,
    ErrorKind,
    LayoutConstraints,
    LayoutPlan,
    LayoutResult,
    MemoryPlan,
    ParityAnalysis,
    PlanFailure,
)
from pool_sizer.units import GENERIC_UNITS, GIB, K8S_UNITS, ByteQuantity, UnitSystem, from_bytes, to_bytes, unit_system

__version__ = "0.1.0"
