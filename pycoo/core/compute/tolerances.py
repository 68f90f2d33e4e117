"""
Numerical thresholds for the sparse kernels.

EPSILON is the near-zero threshold: values whose magnitude falls below it
are never stored. Tolerance tiers describe how closely kernel output must
match a dense or scipy reference; used by the test suite.
"""

from dataclasses import dataclass

# Values below this magnitude are treated as zero and not stored
EPSILON = 1e-3


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Exact-order accumulation in float64
CPU_FP64 = ToleranceTier(
    rtol=1e-12,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision, same summation order as the reference',
)

# Summation order differs from the reference (e.g. dense matmul via BLAS)
CPU_FP64_REORDERED = ToleranceTier(
    rtol=1e-10,
    atol=1e-10,
    name='cpu_fp64_reordered',
    description='CPU double precision, different summation order',
)


def select_tolerance(same_order: bool = True) -> ToleranceTier:
    """Select the tolerance tier for comparing against a reference."""
    if same_order:
        return CPU_FP64
    return CPU_FP64_REORDERED
