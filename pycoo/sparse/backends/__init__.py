"""
Accumulation backends for the sparse kernels.

    cpu_scan: linear search of the output accumulator (reference)
    cpu_hash: dict-indexed accumulator (default)
"""

from pycoo.sparse.backends.scan import ScanBackend
from pycoo.sparse.backends.hashed import HashBackend

__all__ = [
    "ScanBackend",
    "HashBackend",
]
