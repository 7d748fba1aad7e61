"""
Twiddle Factor Table

Primitive power-of-two roots of unity, one per butterfly stage:

    POW2_UNITY_ROOTS[s] = exp(-pi * i / 2^s)    (order 2^(s+1))

Entry 0 is exactly -1. Every later entry is the square root of the one
before it, taken in the lower half-plane. The FFT kernels advance the
twiddle within a segment by repeated multiplication with the stage root,
so the table is the only place trigonometric functions are evaluated.
"""

import math

import numpy as np

# Number of butterfly stages the table covers (transform lengths up to 2^32)
MAX_POW2 = 32


def compute_pow2_roots_of_unity(max_pow2: int = MAX_POW2) -> np.ndarray:
    """
    Precompute the stage roots: W_(2^(s+1)) = exp(-2*pi*i / 2^(s+1))

    The angle starts at pi/2 for stage 1 and is halved for each further
    stage.

    Args:
        max_pow2: Number of stages to compute

    Returns:
        Read-only complex128 array of length max_pow2
    """
    roots = np.empty(max_pow2, dtype=np.complex128)
    roots[0] = complex(-1.0, 0.0)

    theta = math.pi * 0.5
    for s in range(1, max_pow2):
        roots[s] = complex(math.cos(theta), -math.sin(theta))
        theta *= 0.5

    roots.setflags(write=False)
    return roots


# Global twiddle table, shared by every transform call
POW2_UNITY_ROOTS = compute_pow2_roots_of_unity()
