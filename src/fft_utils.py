"""
Utility Functions for the FFT Project

Random signals and grids, row-major flattening, validation metrics, timing,
and benchmark result persistence.
"""

import numpy as np
import time
from typing import Callable, List, Dict, Any
import json
from datetime import datetime


# =============================================================================
# Test Signals
# =============================================================================

def random_complex_array(rng: np.random.Generator, n: int) -> np.ndarray:
    """Random complex signal with real and imaginary parts uniform in [-2, 2)."""
    return (4 * rng.random(n) - 2) + 1j * (4 * rng.random(n) - 2)


def random_complex_grid(rng: np.random.Generator, *shape: int) -> list:
    """
    Random complex grid as nested Python lists.

    random_complex_grid(rng, 8, 4, 16) gives 8 lists of 4 lists of 16
    complex values each.
    """
    if len(shape) == 1:
        return random_complex_array(rng, shape[0]).tolist()
    return [random_complex_grid(rng, *shape[1:]) for _ in range(shape[0])]


def flatten_grid(grid) -> np.ndarray:
    """
    Flatten a nested-list grid in row-major order.

    The last index varies fastest, matching the layout the in-place
    multi-dimensional FFT expects.
    """
    flat = []

    def visit(node):
        if isinstance(node, (list, tuple)):
            for child in node:
                visit(child)
        else:
            flat.append(node)

    visit(grid)
    return np.array(flat, dtype=np.complex128)


def generate_test_signal(
    N: int,
    signal_type: str = 'random',
    rng: np.random.Generator = None,
    **kwargs
) -> np.ndarray:
    """
    Generate test signals for FFT testing.

    Args:
        N: Signal length
        signal_type: One of 'random', 'zeros', 'ones', 'impulse',
                     'cosine', 'exponential', 'mixed'
        rng: Random generator for 'random' signals
        **kwargs: Additional parameters for signal generation

    Returns:
        Complex numpy array
    """
    n = np.arange(N)

    if signal_type == 'random':
        rng = rng if rng is not None else np.random.default_rng()
        return random_complex_array(rng, N)

    elif signal_type == 'zeros':
        return np.zeros(N, dtype=np.complex128)

    elif signal_type == 'ones':
        return np.ones(N, dtype=np.complex128)

    elif signal_type == 'impulse':
        position = kwargs.get('position', 0)
        x = np.zeros(N, dtype=np.complex128)
        x[position] = 1
        return x

    elif signal_type == 'cosine':
        freq = kwargs.get('freq', 8)
        return np.cos(2 * np.pi * freq * n / N).astype(np.complex128)

    elif signal_type == 'exponential':
        freq = kwargs.get('freq', 8)
        return np.exp(2j * np.pi * freq * n / N)

    elif signal_type == 'mixed':
        # Sum of multiple complex sinusoids
        freqs = kwargs.get('freqs', [4, 16, 32])
        amps = kwargs.get('amps', [1.0] * len(freqs))
        x = np.zeros(N, dtype=np.complex128)
        for f, a in zip(freqs, amps):
            x += a * np.exp(2j * np.pi * f * n / N)
        return x

    else:
        raise ValueError(f"Unknown signal type: {signal_type}")


# =============================================================================
# Validation
# =============================================================================

def max_error(result, expected) -> float:
    """Largest elementwise magnitude of result - expected."""
    diff = np.asarray(result, dtype=np.complex128) - np.asarray(expected, dtype=np.complex128)
    if diff.size == 0:
        return 0.0
    return float(np.max(np.abs(diff)))


def validate_fft_result(
    result: np.ndarray,
    expected: np.ndarray,
    tolerance: float = 1e-10
) -> Dict[str, Any]:
    """
    Validate FFT result against expected output.

    Returns:
        Dictionary with validation metrics
    """
    abs_diff = np.abs(np.asarray(result) - np.asarray(expected))

    return {
        'max_error': float(np.max(abs_diff)),
        'mean_error': float(np.mean(abs_diff)),
        'rms_error': float(np.sqrt(np.mean(abs_diff**2))),
        'passed': bool(np.max(abs_diff) < tolerance),
        'tolerance': tolerance
    }


# =============================================================================
# Timing
# =============================================================================

class Timer:
    """Context manager for timing code blocks."""

    def __init__(self, name: str = ""):
        self.name = name
        self.elapsed = 0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.elapsed = time.perf_counter() - self.start

    @property
    def ms(self) -> float:
        return self.elapsed * 1000


def benchmark_function(
    func: Callable,
    args: tuple = (),
    kwargs: dict = None,
    num_warmup: int = 3,
    num_runs: int = 10,
    setup: Callable = None
) -> Dict[str, float]:
    """
    Benchmark a function with warmup and multiple runs.

    Args:
        func: Function to benchmark
        args: Positional arguments
        kwargs: Keyword arguments
        num_warmup: Number of warmup runs
        num_runs: Number of timed runs
        setup: Optional callable returning fresh args before each run
               (in-place transforms need a new buffer every time)

    Returns:
        Dictionary with timing statistics
    """
    kwargs = kwargs or {}

    for _ in range(num_warmup):
        func(*(setup() if setup else args), **kwargs)

    times = []
    for _ in range(num_runs):
        run_args = setup() if setup else args
        start = time.perf_counter()
        func(*run_args, **kwargs)
        times.append(time.perf_counter() - start)

    times = np.array(times) * 1000  # Convert to ms

    return {
        'min_ms': float(np.min(times)),
        'max_ms': float(np.max(times)),
        'mean_ms': float(np.mean(times)),
        'median_ms': float(np.median(times)),
        'std_ms': float(np.std(times)),
        'num_runs': num_runs
    }


def compute_fft_metrics(N: int, time_ms: float) -> Dict[str, float]:
    """
    Compute FFT performance metrics.

    A radix-2 FFT of N points (in any number of dimensions) costs about
    5*N*log2(N) floating point operations.

    Args:
        N: Total number of points transformed
        time_ms: Execution time in milliseconds

    Returns:
        Dictionary with performance metrics
    """
    flops = 5 * N * np.log2(N)

    # Read + write of N complex128 values
    bytes_accessed = 2 * N * 16

    time_s = time_ms / 1000

    return {
        'N': N,
        'time_ms': time_ms,
        'gflops': float(flops / (time_s * 1e9)),
        'bandwidth_gb_s': float(bytes_accessed / (time_s * 1e9))
    }


# =============================================================================
# Result Persistence
# =============================================================================

def _to_builtin(obj):
    """Convert numpy types to Python types."""
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, dict):
        return {k: _to_builtin(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_to_builtin(v) for v in obj]
    return obj


def save_benchmark_results(
    results: Dict[str, Any],
    filename: str,
    metadata: Dict[str, Any] = None
):
    """Save benchmark results to JSON file."""
    output = {
        'timestamp': datetime.now().isoformat(),
        'metadata': metadata or {},
        'results': results
    }

    with open(filename, 'w') as f:
        json.dump(_to_builtin(output), f, indent=2)


def load_benchmark_results(filename: str) -> Dict[str, Any]:
    """Load benchmark results from JSON file."""
    with open(filename, 'r') as f:
        return json.load(f)


def print_comparison_table(
    implementations: Dict[str, List[float]],
    sizes: List[int],
    metric: str = "Time (ms)"
):
    """
    Print a comparison table for multiple implementations.

    Args:
        implementations: Dict mapping name -> list of values (None = N/A)
        sizes: List of FFT sizes
        metric: Name of the metric
    """
    names = list(implementations.keys())

    print(f"\n{metric}")

    header = f"{'Size':>12}"
    for name in names:
        header += f" {name:>14}"
    print(header)
    print("-" * len(header))

    for i, N in enumerate(sizes):
        row = f"{N:>12,}"
        for name in names:
            val = implementations[name][i]
            if val is not None:
                row += f" {val:>14.3f}"
            else:
                row += f" {'N/A':>14}"
        print(row)
