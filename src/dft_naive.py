"""
Naive Discrete Fourier Transform (reference implementation)

Direct O(N^2) summation of the DFT definition for 1-D, 2-D and 3-D
signals:

    X[k] = sum_n x[n] * exp(-2*pi*i * sum_a k_a * n_a / N_a)

Every output bin is summed over the whole input, with the phase of each
term built from the per-axis angles 2*pi*k_a*n_a/N_a. Nothing is factored
by axis, so the result is independent of the fast transform and serves as
its correctness oracle. Inputs are never modified; a new array is returned.
"""

import numpy as np


def _direct_sum(x: np.ndarray, sign: float) -> np.ndarray:
    """
    Sum x against the complex exponential of every output bin.

    Args:
        x: Complex input of any dimensionality
        sign: -1.0 for the forward transform, +1.0 for the inverse

    Returns:
        Unnormalized transform of x
    """
    shape = x.shape
    index_grids = np.meshgrid(*[np.arange(n) for n in shape], indexing='ij')

    y = np.empty(shape, dtype=np.complex128)

    for k in np.ndindex(*shape):
        # w = sum over axes of (2*pi*k_a/N_a) * n_a
        w = np.zeros(shape, dtype=np.float64)
        for axis, length in enumerate(shape):
            dw = 2 * np.pi * k[axis] / length
            w += dw * index_grids[axis]

        y[k] = np.sum(x * (np.cos(w) + sign * 1j * np.sin(w)))

    return y


def _as_signal(x, ndim: int) -> np.ndarray:
    x = np.asarray(x, dtype=np.complex128)
    if x.ndim != ndim:
        raise ValueError(f"Expected a {ndim}-D signal, got shape {x.shape}")
    return x


def dft(x) -> np.ndarray:
    """
    Naive 1-D DFT.

    Args:
        x: Input sequence (any length)

    Returns:
        DFT of x as a new complex128 array

    Example:
        dft([2, 3, 5, 7, -3, -2, -5, -11])[1] ~= -4.19 - 26.26j
    """
    return _direct_sum(_as_signal(x, 1), -1.0)


def inverse_dft(X) -> np.ndarray:
    """
    Naive 1-D inverse DFT.

    x[n] = (1/N) * sum_k X[k] * exp(2*pi*i*k*n/N)
    """
    X = _as_signal(X, 1)
    return _direct_sum(X, 1.0) / X.size


def dft_2d(x) -> np.ndarray:
    """Naive 2-D DFT over a rectangular grid."""
    return _direct_sum(_as_signal(x, 2), -1.0)


def inverse_dft_2d(X) -> np.ndarray:
    """Naive 2-D inverse DFT, normalized by the total element count."""
    X = _as_signal(X, 2)
    return _direct_sum(X, 1.0) / X.size


def dft_3d(x) -> np.ndarray:
    """Naive 3-D DFT over a rectangular volume."""
    return _direct_sum(_as_signal(x, 3), -1.0)


def inverse_dft_3d(X) -> np.ndarray:
    """Naive 3-D inverse DFT, normalized by the total element count."""
    X = _as_signal(X, 3)
    return _direct_sum(X, 1.0) / X.size
