"""
In-Place Multi-Dimensional Radix-2 FFT

Iterative Cooley-Tukey decimation-in-time FFT over a flat, row-major
buffer. A D-dimensional signal whose axis lengths are all powers of two is
transformed one axis at a time, without reshaping or copying:

    1. Axes are processed last to first. The stride along the current axis
       is 2^(bits of the axes already processed).
    2. Every 1-D line ("plane") along the current axis is enumerated by
       splitting a counter into the bits below the stride (kept in place)
       and the bits above it (shifted left past the current axis).
    3. Each plane is bit-reverse permuted and then combined by log2(n)
       butterfly stages, with the twiddle factor advanced by repeated
       multiplication with the stage root.

The inverse reuses the forward butterflies: reversing samples 1..n-1 of
every plane turns the forward DFT into an unscaled inverse DFT, and the
whole transformed extent is divided by its element count once at the end.

Kernels are compiled with numba; the Python entry points validate sizes
before any data is touched.
"""

import numpy as np
from numba import njit
from typing import Optional, Sequence

from fft_bits import floor_log2, reverse_bits_kernel
from fft_twiddle import MAX_POW2, POW2_UNITY_ROOTS
from fft_utils import validate_fft_result


# =============================================================================
# Compiled Kernels
# =============================================================================

@njit
def fft_plane(data, plane_shift, plane, log2_n):
    """
    Forward FFT of one plane, in place.

    Transforms the 2^log2_n elements at offsets plane + i * 2^plane_shift
    and leaves every other offset of data untouched. The caller is trusted
    to pass a plane that lies inside data.

    Args:
        data: Flat complex128 buffer (modified in-place)
        plane_shift: log2 of the stride between consecutive plane elements
        plane: Offset of the plane's first element
        log2_n: log2 of the plane length
    """
    dp = 1 << plane_shift
    n = 1 << log2_n

    # Step 1: Bit-reversal permutation
    ipos = plane
    for i in range(n):
        r = reverse_bits_kernel(i, log2_n)
        if i < r:
            rpos = plane + (r << plane_shift)
            tmp = data[ipos]
            data[ipos] = data[rpos]
            data[rpos] = tmp
        ipos += dp

    # Step 2: Butterfly stages, half-width dj = dp, 2*dp, 4*dp, ...
    s = 0
    pmax = 1 << (log2_n + plane_shift)
    kmax = plane + pmax
    dj = dp
    while dj < pmax:
        dk = dj + dj
        dw = POW2_UNITY_ROOTS[s]
        s += 1

        for k0 in range(plane, kmax, dk):
            # First pair of each segment has twiddle 1
            k1 = k0 + dj
            x0 = data[k0]
            x1 = data[k1]
            data[k0] = x0 + x1
            data[k1] = x0 - x1

            w = dw
            for j0 in range(k0 + dp, k0 + dj, dp):
                j1 = j0 + dj
                x0 = data[j0]
                x1 = w * data[j1]
                data[j0] = x0 + x1
                data[j1] = x0 - x1
                w *= dw

        dj = dk


@njit
def reverse_plane(data, start, length, stride):
    """Reverse 'length' elements spaced 'stride' apart, starting at 'start'."""
    i = start
    r = start + (length - 1) * stride
    while i < r:
        tmp = data[i]
        data[i] = data[r]
        data[r] = tmp
        i += stride
        r -= stride


@njit
def multi_fft_kernel(data, log2_ns, inverse):
    """
    Transform every axis of a flat buffer, last axis first.

    Args:
        data: Flat complex128 buffer of at least 2^sum(log2_ns) elements
        log2_ns: int64 array of per-axis bit widths, outermost axis first
        inverse: If True, compute the normalized inverse transform
    """
    dn = log2_ns.shape[0]
    total_bits = 0
    for d in range(dn):
        total_bits += log2_ns[d]

    lower_bits = 0
    lower_mask = 0
    for d in range(dn):
        log2_n = log2_ns[dn - d - 1]
        n = 1 << log2_n
        stride = 1 << lower_bits

        n_planes = 1 << (total_bits - log2_n)
        upper_mask = ~lower_mask << log2_n
        for i in range(n_planes):
            plane = (i & lower_mask) | ((i << log2_n) & upper_mask)
            if inverse:
                reverse_plane(data, plane + stride, n - 1, stride)
            fft_plane(data, lower_bits, plane, log2_n)

        lower_bits += log2_n
        lower_mask = ~(~lower_mask << log2_n)

    if inverse:
        total = 1 << total_bits
        for i in range(total):
            data[i] = data[i] / total


# =============================================================================
# Host Functions
# =============================================================================

def _as_buffer(signal) -> np.ndarray:
    """
    Flat complex128 buffer for a signal.

    A C-contiguous complex128 ndarray yields a view, so the kernels write
    straight into it. Anything else yields a working copy that
    _write_back() copies into the caller's signal.
    """
    if isinstance(signal, np.ndarray):
        if not np.iscomplexobj(signal):
            raise TypeError(
                f"In-place FFT requires a complex array, got dtype {signal.dtype}"
            )
        if not signal.flags.writeable:
            raise ValueError("In-place FFT requires a writeable array")
        return np.ascontiguousarray(signal, dtype=np.complex128).reshape(-1)

    buffer = np.array(signal, dtype=np.complex128)
    if buffer.ndim != 1:
        raise ValueError(f"Sequence signals must be flat, got shape {buffer.shape}")
    return buffer


def _write_back(signal, buffer: np.ndarray) -> None:
    if isinstance(signal, np.ndarray):
        if not np.may_share_memory(signal, buffer):
            signal[...] = buffer.reshape(signal.shape)
    else:
        signal[:] = buffer.tolist()


def _length_log2(n: int) -> int:
    log2_n = floor_log2(n)
    if log2_n < 0 or (1 << log2_n) != n:
        raise ValueError(f"Input length {n} must be a power of 2")
    if log2_n > MAX_POW2:
        raise ValueError(f"Input length {n} exceeds 2^{MAX_POW2}")
    return log2_n


def _signal_length(signal) -> int:
    if isinstance(signal, np.ndarray):
        if signal.ndim != 1:
            raise ValueError(
                f"1-D FFT expects a 1-D signal, got shape {signal.shape}; "
                f"use multi_fft_inplace for multi-dimensional data"
            )
        return signal.size
    return len(signal)


def _axis_widths(signal, axis_bit_widths: Optional[Sequence[int]]) -> np.ndarray:
    if axis_bit_widths is None:
        if not isinstance(signal, np.ndarray):
            raise ValueError("axis_bit_widths is required for sequence signals")
        axis_bit_widths = [_length_log2(n) for n in signal.shape]

    widths = np.asarray(axis_bit_widths, dtype=np.int64).reshape(-1)
    if np.any(widths < 0) or np.any(widths > MAX_POW2):
        raise ValueError(
            f"Axis bit widths must be between 0 and {MAX_POW2}, got {widths.tolist()}"
        )
    return widths


def _run(signal, widths: np.ndarray, inverse: bool) -> None:
    buffer = _as_buffer(signal)

    total_bits = int(widths.sum())
    if buffer.size < (1 << total_bits):
        raise ValueError(
            f"length/dimension mismatch: signal has {buffer.size} elements, "
            f"axes {widths.tolist()} need {1 << total_bits}"
        )

    multi_fft_kernel(buffer, widths, inverse)
    _write_back(signal, buffer)


def fft_inplace(signal) -> None:
    """
    Forward FFT of a 1-D signal, in place.

    Args:
        signal: Complex ndarray or flat list (length must be power of 2)

    Raises:
        ValueError: If the length is not a power of 2
    """
    widths = np.array([_length_log2(_signal_length(signal))], dtype=np.int64)
    _run(signal, widths, inverse=False)


def inverse_fft_inplace(signal) -> None:
    """
    Inverse FFT of a 1-D signal, in place.

    IFFT(X)[k] = (1/N) * FFT(X reversed on samples 1..N-1)[k]
    """
    widths = np.array([_length_log2(_signal_length(signal))], dtype=np.int64)
    _run(signal, widths, inverse=True)


def multi_fft_inplace(signal, axis_bit_widths: Optional[Sequence[int]] = None) -> None:
    """
    Forward multi-dimensional FFT of a flat row-major signal, in place.

    Args:
        signal: Complex ndarray or flat list holding at least
                2^sum(axis_bit_widths) elements
        axis_bit_widths: log2 of each axis length, outermost axis first.
                         Taken from signal.shape when omitted.

    Raises:
        ValueError: If the signal is shorter than the axes require

    Example:
        # 8 x 4 x 16 volume stored row-major
        multi_fft_inplace(x, (3, 2, 4))
    """
    _run(signal, _axis_widths(signal, axis_bit_widths), inverse=False)


def inverse_multi_fft_inplace(
    signal,
    axis_bit_widths: Optional[Sequence[int]] = None
) -> None:
    """
    Inverse multi-dimensional FFT, in place.

    Every plane is time-reversed before its forward pass; the single
    division by the element count happens after the last axis.
    """
    _run(signal, _axis_widths(signal, axis_bit_widths), inverse=True)


# =============================================================================
# Validation
# =============================================================================

def validate_fast_fft(sizes: list = None, tolerance: float = 1e-10) -> bool:
    """
    Validate the in-place FFT against NumPy.

    Args:
        sizes: List of sizes to test
        tolerance: Maximum allowed error

    Returns:
        True if all tests pass
    """
    if sizes is None:
        sizes = [8, 16, 32, 64, 128, 256, 512, 1024]

    rng = np.random.default_rng(101)

    print("Validating in-place FFT implementation...")
    print("-" * 50)

    all_passed = True

    for N in sizes:
        x = rng.standard_normal(N) + 1j * rng.standard_normal(N)

        result = x.copy()
        fft_inplace(result)
        metrics = validate_fft_result(result, np.fft.fft(x), tolerance)

        status = "PASS" if metrics['passed'] else "FAIL"
        print(f"  N={N:>6}: max_error = {metrics['max_error']:.2e} [{status}]")

        if not metrics['passed']:
            all_passed = False

    print("-" * 50)
    if all_passed:
        print("All validation tests PASSED")
    else:
        print("Some validation tests FAILED")

    return all_passed


if __name__ == "__main__":
    print("In-Place Multi-Dimensional FFT - Quick Test")
    print("-" * 40)

    x = np.array([2, 3, 5, 7, -3, -2, -5, -11], dtype=np.complex128)
    X = x.copy()
    fft_inplace(X)
    print(f"Input: {x.real}")
    print(f"FFT vs NumPy max error: {np.max(np.abs(X - np.fft.fft(x))):.2e}")

    inverse_fft_inplace(X)
    print(f"IFFT reconstruction error: {np.max(np.abs(X - x)):.2e}")

    volume = np.random.randn(8, 4, 16) + 1j * np.random.randn(8, 4, 16)
    result = volume.copy()
    multi_fft_inplace(result)
    print(f"3-D FFT vs NumPy fftn max error: {np.max(np.abs(result - np.fft.fftn(volume))):.2e}")

    print()
    validate_fast_fft()
