"""
Bit Manipulation Helpers for the Radix-2 FFT

Integer floor(log2) and fixed-width bit reversal. The reversal is done with
a 256-entry byte table: the value is shifted into the top of a 32-bit word
and its four bytes are reversed by lookup and reassembled in reverse order.

The table is built once at import time and never modified afterwards, so
the compiled kernels can read it from any thread.
"""

import numpy as np
from numba import njit


def is_power_of_two(n: int) -> bool:
    """Check if n is a power of 2."""
    return n > 0 and (n & (n - 1)) == 0


def bit_reverse_naive(n: int, bits: int) -> int:
    """
    Reverse the bits of integer n using 'bits' bit positions, one bit
    at a time.

    Used to build the byte lookup table and as a cross-check in tests.

    Example:
        bit_reverse_naive(1, 3) = 4  # 001 -> 100
        bit_reverse_naive(3, 3) = 6  # 011 -> 110
    """
    result = 0
    for _ in range(bits):
        result = (result << 1) | (n & 1)
        n >>= 1
    return result


def _create_byte_reversals() -> np.ndarray:
    table = np.zeros(256, dtype=np.int64)
    for i in range(256):
        table[i] = bit_reverse_naive(i, 8)
    table.setflags(write=False)
    return table


# BYTE_REVERSALS[BYTE_REVERSALS[b]] == b for every byte b
BYTE_REVERSALS = _create_byte_reversals()

# floor(log2(n)) for n in [0, 16), -1 for zero
_NIBBLE_LOG2 = (-1, 0, 1, 1, 2, 2, 2, 2, 3, 3, 3, 3, 3, 3, 3, 3)


def floor_log2(value: int) -> int:
    """
    Compute floor(log2(value)).

    The bit width is narrowed by binary search (32, 16, 8, 4 bits) and the
    remaining nibble is resolved by lookup.

    Args:
        value: Non-negative integer below 2**64

    Returns:
        Index of the highest set bit, or -1 if value is zero

    Raises:
        ValueError: If value is negative or does not fit in 64 bits
    """
    n = int(value)
    if n < 0 or n >= 1 << 64:
        raise ValueError(f"floor_log2 requires 0 <= value < 2**64, got {value}")

    r = 0
    for shift in (32, 16, 8, 4):
        if n >> shift:
            r += shift
            n >>= shift

    if n == 0:
        return -1
    return r + _NIBBLE_LOG2[n]


@njit
def reverse_bits_kernel(n, bit_count):
    """Unchecked bit reversal used inside the compiled FFT kernels."""
    r = n << (32 - bit_count)
    return ((BYTE_REVERSALS[r & 0xFF] << 24)
            | (BYTE_REVERSALS[(r >> 8) & 0xFF] << 16)
            | (BYTE_REVERSALS[(r >> 16) & 0xFF] << 8)
            | BYTE_REVERSALS[(r >> 24) & 0xFF])


def reverse_bits(value: int, bit_count: int) -> int:
    """
    Reverse the 'bit_count' least significant bits of value.

    Bits above 'bit_count' are ignored and the result has none set. Only
    the low 32 bits of value are considered, so a negative value is read
    as its 32-bit two's-complement pattern.

    Args:
        value: Integer whose low bits are reversed
        bit_count: Number of bits to reverse, 0 to 32

    Returns:
        Bit-reversed integer

    Example:
        reverse_bits(0b0011, 4) = 0b1100
        reverse_bits(0x12345678, 32) = 0x1E6A2C48
    """
    if not 0 <= bit_count <= 32:
        raise ValueError(f"bit_count must be between 0 and 32, got {bit_count}")
    return int(reverse_bits_kernel(int(value) & 0xFFFFFFFF, int(bit_count)))
