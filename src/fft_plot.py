"""
FFT Benchmark Visualization

Creates performance comparison charts from saved benchmark results
(see benchmarks/benchmark_all.py).

Usage:
    python src/fft_plot.py benchmarks/results/fft_benchmark.json
"""

import matplotlib.pyplot as plt
import os
import sys
from typing import Any, Dict

from fft_utils import load_benchmark_results

COLORS = ['#2ecc71', '#e74c3c', '#3498db', '#9b59b6', '#f39c12', '#1abc9c']
MARKERS = ['o', 's', '^', 'D', 'v', 'P']


def _valid_points(impl: Dict[str, Any], key: str):
    points = [(n, v) for n, v in zip(impl['sizes'], impl[key]) if v is not None]
    return [p[0] for p in points], [p[1] for p in points]


def plot_benchmark_results(
    results: Dict[str, Any],
    output_path: str = None,
    title: str = 'In-Place FFT - Performance Analysis'
):
    """
    Plot execution time and GFLOPS for every benchmarked implementation.

    Args:
        results: Results dict with an 'implementations' mapping, each entry
                 holding 'name', 'sizes', 'times_ms' and 'gflops'
        output_path: PNG file to write, or None to skip saving
        title: Figure title

    Returns:
        The matplotlib Figure
    """
    impls = results['implementations']

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(16, 6))

    # =========================================================================
    # Plot 1: Execution Time (log-log)
    # =========================================================================
    for i, impl in enumerate(impls.values()):
        sizes, times = _valid_points(impl, 'times_ms')
        if not sizes:
            continue
        ax1.loglog(sizes, times, MARKERS[i % len(MARKERS)] + '-', base=2,
                   linewidth=2, markersize=7, label=impl['name'],
                   color=COLORS[i % len(COLORS)])

    ax1.set_xlabel('Transform Size (points)', fontsize=12)
    ax1.set_ylabel('Execution Time (ms)', fontsize=12)
    ax1.set_title('Execution Time Comparison', fontsize=14, fontweight='bold')
    ax1.legend(loc='upper left', fontsize=10)
    ax1.grid(True, alpha=0.3)

    # =========================================================================
    # Plot 2: GFLOPS
    # =========================================================================
    for i, impl in enumerate(impls.values()):
        sizes, gflops = _valid_points(impl, 'gflops')
        if not sizes:
            continue
        ax2.semilogx(sizes, gflops, MARKERS[i % len(MARKERS)] + '-', base=2,
                     linewidth=2, markersize=7, label=impl['name'],
                     color=COLORS[i % len(COLORS)])

    ax2.set_xlabel('Transform Size (points)', fontsize=12)
    ax2.set_ylabel('Performance (GFLOPS)', fontsize=12)
    ax2.set_title('Performance (GFLOPS)', fontsize=14, fontweight='bold')
    ax2.legend(loc='upper left', fontsize=10)
    ax2.grid(True, alpha=0.3)

    fig.suptitle(title, fontsize=16, fontweight='bold')
    fig.tight_layout()

    if output_path:
        os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)
        fig.savefig(output_path, dpi=150, bbox_inches='tight',
                    facecolor='white', edgecolor='none')
        print(f"Chart saved to: {output_path}")

    return fig


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python fft_plot.py <results.json> [output.png]")
        sys.exit(1)

    results_file = sys.argv[1]
    output_file = sys.argv[2] if len(sys.argv) > 2 else os.path.splitext(results_file)[0] + '.png'

    saved = load_benchmark_results(results_file)
    plot_benchmark_results(saved['results'], output_file)
    plt.show()
