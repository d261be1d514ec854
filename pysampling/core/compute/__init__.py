"""
Shared compute infrastructure: device detection and timing.

Experiment backends live in pysampling/montecarlo/backends/, not here.
"""

from pysampling.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pysampling.core.compute.timing import Timer, timed

__all__ = [
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    "Timer",
    "timed",
]
