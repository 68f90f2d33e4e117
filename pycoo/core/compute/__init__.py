"""
Shared compute infrastructure for pycoo.

This module provides timing utilities and numeric thresholds shared by the
sparse kernels and their backends.

IMPORTANT: This is NOT where accumulation backends live. Those go in
sparse/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Near-zero threshold and comparison tiers
"""

from pycoo.core.compute.timing import Timer, timed
from pycoo.core.compute.tolerances import EPSILON, ToleranceTier, select_tolerance

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "EPSILON",
    "ToleranceTier",
    "select_tolerance",
]
