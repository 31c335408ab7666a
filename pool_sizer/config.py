# config.py
#
# Planner limits, defaults and logging setup.

import logging
import sys
from dataclasses import dataclass

from pool_sizer.units import GIB

MIN_VOLUME_BYTES = GIB        # smallest volume worth deploying
MAX_VOLUME_BYTES = 256 * GIB  # auto mode never picks a larger volume
MIN_MEMORY_BYTES = 2 * GIB    # smallest per-server memory request

DEFAULT_PARITY_OPTIONS = ("EC:4", "EC:3", "EC:2")

LOG_FORMAT = "[%(asctime)s] %(name)s %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class PlannerLimits:
    min_volume_bytes: int = MIN_VOLUME_BYTES
    max_volume_bytes: int = MAX_VOLUME_BYTES


DEFAULT_LIMITS = PlannerLimits()


def setup_logging(level=logging.INFO) -> logging.Logger:
    """Send pool_sizer log records to stdout."""
    logger = logging.getLogger("pool_sizer")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.debug("logging initialized (level=%s)", logging.getLevelName(level))
    return logger
