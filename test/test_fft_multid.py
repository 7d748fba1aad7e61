"""
In-Place FFT Validation Tests

Tests the 1-D and multi-dimensional in-place FFT against the naive DFT
and NumPy, including round trips, strided planes, input types, and size
preconditions.
"""

import numpy as np
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from dft_naive import dft, dft_2d, dft_3d, inverse_dft
from fft_multid import (
    fft_inplace,
    fft_plane,
    inverse_fft_inplace,
    inverse_multi_fft_inplace,
    multi_fft_inplace,
    reverse_plane,
    validate_fast_fft,
)
from fft_utils import (
    flatten_grid,
    generate_test_signal,
    max_error,
    random_complex_array,
    random_complex_grid,
)


# =============================================================================
# 1-D
# =============================================================================

def test_fft_matches_naive_dft():
    rng = np.random.default_rng(101)
    tolerance = 1e-10

    for _ in range(10):
        x = random_complex_array(rng, 64)

        expected = dft(x)
        fft_inplace(x)

        error = max_error(x, expected)
        assert error < tolerance, f"max_error = {error:.2e}"


def test_inverse_fft_matches_naive_inverse():
    rng = np.random.default_rng(101)
    tolerance = 1e-10

    for _ in range(10):
        x = random_complex_array(rng, 64)

        expected = inverse_dft(x)
        inverse_fft_inplace(x)

        error = max_error(x, expected)
        assert error < tolerance, f"max_error = {error:.2e}"


def test_fft_known_values():
    x = np.array([2, 3, 5, 7, -3, -2, -5, -11], dtype=np.complex128)
    expected = dft(x)

    fft_inplace(x)

    assert max_error(x, expected) < 1e-10
    assert x[1] == pytest.approx(-4.19 - 26.26j, abs=0.006)
    assert x[3] == pytest.approx(14.19 - 6.26j, abs=0.006)


@pytest.mark.parametrize("N", [1, 2, 4, 8, 16, 32, 64, 128, 256, 512, 1024])
def test_fft_matches_numpy(N):
    rng = np.random.default_rng(N)
    x = rng.standard_normal(N) + 1j * rng.standard_normal(N)

    result = x.copy()
    fft_inplace(result)

    error = max_error(result, np.fft.fft(x))
    assert error < 1e-10, f"N={N}: max_error = {error:.2e}"


@pytest.mark.parametrize("signal_type", [
    'zeros', 'ones', 'impulse', 'cosine', 'exponential', 'mixed'
])
def test_fft_special_inputs(signal_type):
    N = 1024
    x = generate_test_signal(N, signal_type)

    result = x.copy()
    fft_inplace(result)

    error = max_error(result, np.fft.fft(x))
    assert error < 1e-9, f"{signal_type}: error = {error:.2e}"


@pytest.mark.parametrize("N", [2, 16, 256, 4096])
def test_fft_round_trip(N):
    rng = np.random.default_rng(101)
    x = random_complex_array(rng, N)
    original = x.copy()

    fft_inplace(x)
    inverse_fft_inplace(x)

    error = max_error(x, original)
    assert error < 1e-10, f"N={N}: round trip error = {error:.2e}"


def test_fft_parseval():
    rng = np.random.default_rng(101)
    N = 1024
    x = random_complex_array(rng, N)

    X = x.copy()
    fft_inplace(X)

    energy_time = np.sum(np.abs(x)**2)
    energy_freq = np.sum(np.abs(X)**2) / N
    assert abs(energy_time - energy_freq) / energy_time < 1e-10


# =============================================================================
# Multi-dimensional
# =============================================================================

def test_fft_2d_matches_naive_dft():
    rng = np.random.default_rng(101)
    tolerance = 1e-10

    for _ in range(10):
        data = random_complex_grid(rng, 8, 16)
        data_2d = np.asarray(data)
        x = flatten_grid(data)

        np.testing.assert_array_equal(x, data_2d.reshape(-1))

        expected = dft_2d(data_2d)
        multi_fft_inplace(x, (3, 4))

        error = max_error(expected.reshape(-1), x)
        assert error < tolerance, f"max_error = {error:.2e}"


def test_fft_3d_matches_naive_dft():
    rng = np.random.default_rng(101)
    tolerance = 1e-6

    for _ in range(2):
        data = random_complex_grid(rng, 8, 4, 16)
        data_3d = np.asarray(data)
        x = flatten_grid(data)

        np.testing.assert_array_equal(x, data_3d.reshape(-1))

        expected = dft_3d(data_3d)
        multi_fft_inplace(x, (3, 2, 4))

        error = max_error(expected.reshape(-1), x)
        assert error < tolerance, f"max_error = {error:.2e}"


@pytest.mark.parametrize("shape", [(16,), (4, 8), (8, 1, 2), (2, 4, 8, 4)])
def test_multi_fft_matches_numpy_fftn(shape):
    rng = np.random.default_rng(101)
    volume = random_complex_array(rng, int(np.prod(shape))).reshape(shape)

    result = volume.copy()
    multi_fft_inplace(result)

    error = max_error(result, np.fft.fftn(volume))
    assert error < 1e-10, f"{shape}: max_error = {error:.2e}"


def test_inverse_multi_fft_matches_numpy_ifftn():
    rng = np.random.default_rng(101)
    spectrum = random_complex_array(rng, 8 * 4 * 16).reshape(8, 4, 16)

    result = spectrum.copy()
    inverse_multi_fft_inplace(result, (3, 2, 4))

    error = max_error(result, np.fft.ifftn(spectrum))
    assert error < 1e-10, f"max_error = {error:.2e}"


def test_inverse_multi_fft_round_trip():
    rng = np.random.default_rng(101)

    for _ in range(5):
        x = flatten_grid(random_complex_grid(rng, 8, 4, 16))
        original = x.copy()

        multi_fft_inplace(x, (3, 2, 4))
        inverse_multi_fft_inplace(x, (3, 2, 4))

        error = max_error(x, original)
        assert error < 1e-6, f"round trip error = {error:.2e}"


def test_large_scale_multi_fft_round_trip():
    rng = np.random.default_rng(101)
    x = random_complex_array(rng, 64 * 64 * 64)
    original = x.copy()

    multi_fft_inplace(x, (6, 6, 6))
    inverse_multi_fft_inplace(x, (6, 6, 6))

    error = max_error(x, original)
    assert error < 1e-6, f"round trip error = {error:.2e}"


def test_single_axis_multi_fft_equals_fft():
    rng = np.random.default_rng(101)
    x = random_complex_array(rng, 32)
    y = x.copy()

    fft_inplace(x)
    multi_fft_inplace(y, [5])

    np.testing.assert_array_equal(x, y)


def test_empty_axis_list_is_identity():
    x = np.array([1 + 2j, 3 - 1j], dtype=np.complex128)

    multi_fft_inplace(x, [])
    np.testing.assert_array_equal(x, [1 + 2j, 3 - 1j])

    inverse_multi_fft_inplace(x, [])
    np.testing.assert_array_equal(x, [1 + 2j, 3 - 1j])


def test_oversized_buffer_tail_untouched():
    """Only the first 2^sum(widths) elements are transformed."""
    rng = np.random.default_rng(101)
    x = random_complex_array(rng, 20)
    original = x.copy()

    multi_fft_inplace(x, (2, 2))

    assert max_error(x[:16], np.fft.fft2(original[:16].reshape(4, 4)).reshape(-1)) < 1e-12
    np.testing.assert_array_equal(x[16:], original[16:])

    inverse_multi_fft_inplace(x, (2, 2))

    assert max_error(x, original) < 1e-12
    np.testing.assert_array_equal(x[16:], original[16:])


# =============================================================================
# Plane kernels
# =============================================================================

def test_fft_plane_transforms_only_its_offsets():
    rng = np.random.default_rng(101)
    data = random_complex_array(rng, 32)
    original = data.copy()

    # Offsets 1, 5, 9, ..., 29
    fft_plane(data, 2, 1, 3)

    plane = np.arange(1, 32, 4)
    others = np.setdiff1d(np.arange(32), plane)

    assert max_error(data[plane], np.fft.fft(original[plane])) < 1e-12
    np.testing.assert_array_equal(data[others], original[others])


def test_reverse_plane():
    data = np.arange(12, dtype=np.complex128)

    # Offsets 2, 5, 8, 11 reversed
    reverse_plane(data, 2, 4, 3)

    expected = np.arange(12, dtype=np.complex128)
    expected[[2, 5, 8, 11]] = [11, 8, 5, 2]
    np.testing.assert_array_equal(data, expected)


def test_reverse_plane_short_lengths_are_noops():
    data = np.arange(4, dtype=np.complex128)

    reverse_plane(data, 1, 0, 1)
    reverse_plane(data, 1, 1, 1)

    np.testing.assert_array_equal(data, np.arange(4))


# =============================================================================
# Input types
# =============================================================================

def test_fft_on_list_writes_back():
    x = [2, 3, 5, 7, -3, -2, -5, -11]
    expected = np.fft.fft(x)

    fft_inplace(x)

    assert isinstance(x, list)
    assert len(x) == 8
    assert all(isinstance(v, complex) for v in x)
    assert max_error(x, expected) < 1e-10


def test_multi_fft_on_list_writes_back():
    rng = np.random.default_rng(101)
    x = random_complex_array(rng, 32).tolist()
    expected = np.fft.fft2(np.array(x).reshape(4, 8)).reshape(-1)

    multi_fft_inplace(x, (2, 3))

    assert max_error(x, expected) < 1e-10


def test_fft_on_complex64_array():
    rng = np.random.default_rng(101)
    x = random_complex_array(rng, 64).astype(np.complex64)
    expected = np.fft.fft(x.astype(np.complex128))

    fft_inplace(x)

    assert x.dtype == np.complex64
    assert max_error(x, expected) < 1e-4


def test_multi_fft_on_fortran_ordered_array():
    rng = np.random.default_rng(101)
    volume = random_complex_array(rng, 8 * 16).reshape(8, 16)
    x = np.asfortranarray(volume)

    multi_fft_inplace(x)

    assert max_error(x, np.fft.fft2(volume)) < 1e-10


def test_multi_fft_on_view_writes_through():
    rng = np.random.default_rng(101)
    base = random_complex_array(rng, 64)
    original = base.copy()

    multi_fft_inplace(base[:16], (2, 2))

    assert max_error(base[:16], np.fft.fft2(original[:16].reshape(4, 4)).reshape(-1)) < 1e-12
    np.testing.assert_array_equal(base[16:], original[16:])


# =============================================================================
# Preconditions
# =============================================================================

@pytest.mark.parametrize("N", [0, 3, 12, 100])
def test_fft_rejects_non_power_of_two(N):
    x = np.ones(N, dtype=np.complex128)

    with pytest.raises(ValueError):
        fft_inplace(x)
    with pytest.raises(ValueError):
        inverse_fft_inplace(x)

    np.testing.assert_array_equal(x, np.ones(N))


def test_multi_fft_rejects_short_signal_without_mutation():
    x = np.arange(15, dtype=np.complex128)

    with pytest.raises(ValueError, match="mismatch"):
        multi_fft_inplace(x, (2, 2))
    with pytest.raises(ValueError, match="mismatch"):
        inverse_multi_fft_inplace(x, (2, 2))

    np.testing.assert_array_equal(x, np.arange(15))


@pytest.mark.parametrize("widths", [(-1, 2), (33,)])
def test_multi_fft_rejects_bad_widths(widths):
    x = np.zeros(16, dtype=np.complex128)
    with pytest.raises(ValueError):
        multi_fft_inplace(x, widths)


def test_multi_fft_rejects_non_power_of_two_shape():
    with pytest.raises(ValueError):
        multi_fft_inplace(np.zeros((4, 6), dtype=np.complex128))


def test_multi_fft_requires_widths_for_lists():
    with pytest.raises(ValueError):
        multi_fft_inplace([1, 2, 3, 4])


def test_fft_rejects_real_array():
    with pytest.raises(TypeError):
        fft_inplace(np.ones(8))


def test_fft_rejects_multi_dimensional_array():
    with pytest.raises(ValueError):
        fft_inplace(np.zeros((4, 4), dtype=np.complex128))


def test_fft_rejects_nested_list():
    with pytest.raises(ValueError):
        fft_inplace([[1, 2], [3, 4]])


def test_fft_rejects_read_only_array():
    x = np.zeros(8, dtype=np.complex128)
    x.setflags(write=False)

    with pytest.raises(ValueError):
        fft_inplace(x)


def test_validate_fast_fft(capsys):
    assert validate_fast_fft(sizes=[8, 64, 256])

    output = capsys.readouterr().out
    assert "All validation tests PASSED" in output
    assert output.count("[PASS]") == 3
