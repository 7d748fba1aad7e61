"""
Comprehensive FFT Benchmark Suite

Benchmarks the in-place 1-D and multi-dimensional FFT against NumPy
(pocketfft) and the naive O(N^2) DFT.

Usage:
    python benchmarks/benchmark_all.py
"""
import numpy as np
import sys
import os
from datetime import datetime

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from dft_naive import dft
from fft_multid import fft_inplace, multi_fft_inplace
from fft_plot import plot_benchmark_results
from fft_utils import (
    Timer,
    benchmark_function,
    compute_fft_metrics,
    print_comparison_table,
    random_complex_array,
    save_benchmark_results,
)

# Largest size the naive DFT is timed at
NAIVE_MAX_SIZE = 1024


def benchmark_implementation(
    name: str,
    fft_func,
    inputs: dict,
    in_place: bool = False,
    num_warmup: int = 3,
    num_runs: int = 10
) -> dict:
    """
    Benchmark an FFT implementation across multiple sizes.

    Args:
        name: Implementation name
        fft_func: FFT function to benchmark
        inputs: Dict mapping total size -> input array
        in_place: If True, every run gets a fresh copy of the input
        num_warmup: Warmup runs
        num_runs: Timed runs

    Returns:
        Dictionary with benchmark results
    """
    results = {
        'name': name,
        'sizes': [],
        'times_ms': [],
        'gflops': [],
        'bandwidth_gb_s': []
    }

    for N, x in inputs.items():
        if in_place:
            timing = benchmark_function(
                fft_func,
                setup=lambda: (x.copy(),),
                num_warmup=num_warmup,
                num_runs=num_runs
            )
        else:
            timing = benchmark_function(
                fft_func, (x,),
                num_warmup=num_warmup,
                num_runs=num_runs
            )

        metrics = compute_fft_metrics(N, timing['median_ms'])

        results['sizes'].append(N)
        results['times_ms'].append(timing['median_ms'])
        results['gflops'].append(metrics['gflops'])
        results['bandwidth_gb_s'].append(metrics['bandwidth_gb_s'])

    return results


def benchmark_naive_dft(inputs: dict) -> dict:
    """Time the naive DFT once per size (it is far too slow for repeats)."""
    results = {
        'name': 'Naive DFT',
        'sizes': [],
        'times_ms': [],
        'gflops': [],
        'bandwidth_gb_s': []
    }

    for N, x in inputs.items():
        if N > NAIVE_MAX_SIZE:
            continue
        with Timer("naive") as t:
            dft(x)
        metrics = compute_fft_metrics(N, t.ms)

        results['sizes'].append(N)
        results['times_ms'].append(t.ms)
        results['gflops'].append(metrics['gflops'])
        results['bandwidth_gb_s'].append(metrics['bandwidth_gb_s'])

    return results


def run_all_benchmarks(sizes_1d: list = None, cube_bits: list = None) -> dict:
    """
    Run benchmarks for all implementations.

    Args:
        sizes_1d: 1-D transform lengths
        cube_bits: log2 edge lengths of the 3-D cubes to transform
    """
    if sizes_1d is None:
        sizes_1d = [2**k for k in range(8, 19)]
    if cube_bits is None:
        cube_bits = [3, 4, 5, 6]

    rng = np.random.default_rng(101)

    print("=" * 70)
    print("In-Place FFT Benchmark Suite")
    print("=" * 70)
    print(f"1-D sizes: {sizes_1d[0]:,} to {sizes_1d[-1]:,}")
    print(f"3-D cubes: {', '.join(f'{1 << b}^3' for b in cube_bits)}")
    print(f"Date: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 70)

    inputs_1d = {N: random_complex_array(rng, N) for N in sizes_1d}
    inputs_3d = {}
    for b in cube_bits:
        n = 1 << b
        inputs_3d[n**3] = random_complex_array(rng, n**3).reshape(n, n, n)

    all_results = {
        'timestamp': datetime.now().isoformat(),
        'implementations': {}
    }

    print("\n[1/5] Benchmarking NumPy fft (reference)...")
    all_results['implementations']['numpy_fft'] = benchmark_implementation(
        "NumPy fft", np.fft.fft, inputs_1d
    )

    # First call compiles the kernels
    fft_inplace(inputs_1d[sizes_1d[0]].copy())

    print("[2/5] Benchmarking in-place FFT (1-D)...")
    all_results['implementations']['fast_fft'] = benchmark_implementation(
        "In-place FFT", fft_inplace, inputs_1d, in_place=True
    )

    print("[3/5] Benchmarking NumPy fftn (3-D reference)...")
    all_results['implementations']['numpy_fftn'] = benchmark_implementation(
        "NumPy fftn", np.fft.fftn, inputs_3d
    )

    print("[4/5] Benchmarking in-place multi-dimensional FFT (3-D)...")
    all_results['implementations']['fast_fft_3d'] = benchmark_implementation(
        "In-place FFT 3-D", multi_fft_inplace, inputs_3d, in_place=True
    )

    print("[5/5] Benchmarking naive DFT...")
    all_results['implementations']['naive_dft'] = benchmark_naive_dft(inputs_1d)

    return all_results


def print_results_table(results: dict):
    """Print 1-D and 3-D timing tables."""
    impls = results['implementations']

    for keys, title in [
        (['numpy_fft', 'fast_fft', 'naive_dft'], "1-D Execution Time (ms)"),
        (['numpy_fftn', 'fast_fft_3d'], "3-D Execution Time (ms)"),
    ]:
        sizes = impls[keys[0]]['sizes']
        table = {}
        for key in keys:
            by_size = dict(zip(impls[key]['sizes'], impls[key]['times_ms']))
            table[impls[key]['name']] = [by_size.get(N) for N in sizes]
        print_comparison_table(table, sizes, title)


def analyze_results(results: dict):
    """Analyze and summarize benchmark results."""
    print("\n" + "=" * 70)
    print("ANALYSIS SUMMARY")
    print("=" * 70)

    impls = results['implementations']

    for impl in impls.values():
        gflops = [g for g in impl['gflops'] if g is not None]
        if gflops:
            peak = max(gflops)
            peak_size = impl['sizes'][impl['gflops'].index(peak)]
            print(f"{impl['name']:20} Peak: {peak:.2f} GFLOPS @ N={peak_size:,}")

    print("\n" + "-" * 70)
    print("NumPy Speedup over In-Place FFT:")
    print("-" * 70)

    for numpy_key, fast_key in [('numpy_fft', 'fast_fft'), ('numpy_fftn', 'fast_fft_3d')]:
        numpy_times = impls[numpy_key]['times_ms']
        fast_times = impls[fast_key]['times_ms']
        N = impls[fast_key]['sizes'][-1]
        speedup = fast_times[-1] / numpy_times[-1]
        print(f"  {impls[fast_key]['name']:20} N={N:>10,}: NumPy is {speedup:.1f}x faster")

    print("=" * 70)


def main():
    """Main benchmark runner."""
    results = run_all_benchmarks()

    print_results_table(results)
    analyze_results(results)

    output_dir = os.path.join(os.path.dirname(__file__), 'results')
    os.makedirs(output_dir, exist_ok=True)

    output_file = os.path.join(output_dir, 'fft_benchmark.json')
    save_benchmark_results(results, output_file, {
        'hardware': 'CPU',
        'python_version': sys.version
    })
    print(f"\nResults saved to: {output_file}")

    plot_benchmark_results(results, os.path.join(output_dir, 'fft_benchmark.png'))


if __name__ == "__main__":
    main()
