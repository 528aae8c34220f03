"""Benchmark single-feature split scans: numba kernels vs a NumPy scan."""

import time
from typing import Any

import numpy as np

from mlx_splitkit import (
    candidate_thresholds,
    find_split_classification,
    find_split_gradient_boosted,
    find_split_regression,
    node_impurity_classification,
    node_impurity_regression,
    sort_indices_by_feature,
)


def numpy_gradient_scan(
    order: np.ndarray,
    features: np.ndarray,
    gradients: np.ndarray,
    hessians: np.ndarray,
    reg_lambda: float,
) -> tuple[float, float]:
    """Vectorized Newton-gain scan used as the reference."""
    n_left, thresholds = candidate_thresholds(order, features)
    if n_left.size == 0:
        return float(features[order[0]]), 0.0

    cum_g = np.cumsum(gradients[order])
    cum_h = np.cumsum(hessians[order])
    sum_g, sum_h = cum_g[-1], cum_h[-1]
    left_g, left_h = cum_g[n_left - 1], cum_h[n_left - 1]
    gains = (
        left_g**2 / (left_h + reg_lambda)
        + (sum_g - left_g) ** 2 / (sum_h - left_h + reg_lambda)
        - sum_g**2 / (sum_h + reg_lambda)
    )
    best = int(np.argmax(gains))
    return float(thresholds[best]), float(max(gains[best], 0.0))


def benchmark_gradient(n_samples: int, n_distinct: int) -> dict[str, Any]:
    """Benchmark the gradient-boosted scan on synthetic data."""
    print(f"\n{'=' * 60}")
    print(f"Gradient: {n_samples:,} samples, {n_distinct:,} distinct values")
    print("=" * 60)

    rng = np.random.default_rng(42)
    features = rng.integers(0, n_distinct, size=n_samples).astype(np.float64)
    gradients = rng.normal(size=n_samples)
    hessians = rng.uniform(0.1, 1.0, size=n_samples)
    order = sort_indices_by_feature(features)
    sum_g, sum_h = float(gradients.sum()), float(hessians.sum())

    results = {}

    start = time.perf_counter()
    reference = numpy_gradient_scan(order, features, gradients, hessians, 1.0)
    numpy_time = time.perf_counter() - start
    results["numpy_time"] = numpy_time
    print(f"NumPy:       {numpy_time:.4f}s")

    # Warm-up (JIT compilation)
    find_split_gradient_boosted(order, features, gradients, hessians, sum_g, sum_h, 1.0)

    start = time.perf_counter()
    record = find_split_gradient_boosted(
        order, features, gradients, hessians, sum_g, sum_h, 1.0
    )
    numba_time = time.perf_counter() - start
    results["numba_time"] = numba_time
    print(f"Numba:       {numba_time:.4f}s")
    print(f"Threshold:   {record.threshold:.2f} (reference {reference[0]:.2f})")

    speedup = numpy_time / numba_time
    results["speedup"] = speedup
    print(f"Speedup:     {speedup:.2f}x")

    return results


def benchmark_impurity_scan(
    task: str, n_samples: int, n_distinct: int
) -> dict[str, Any]:
    """Time a classification or regression scan."""
    print(f"\n{'=' * 60}")
    print(f"{task.capitalize()}: {n_samples:,} samples, {n_distinct:,} distinct values")
    print("=" * 60)

    rng = np.random.default_rng(42)
    features = rng.integers(0, n_distinct, size=n_samples).astype(np.float64)
    order = sort_indices_by_feature(features)

    if task == "classification":
        labels = rng.integers(0, 3, size=n_samples)
        whole = node_impurity_classification("gini", labels, 3)

        def scan():
            return find_split_classification("gini", whole, order, features, labels, 3)

    else:
        targets = rng.normal(size=(n_samples, 2))
        whole = node_impurity_regression("mse", targets)

        def scan():
            return find_split_regression("mse", whole, order, features, targets)

    # Warm-up (JIT compilation)
    scan()

    start = time.perf_counter()
    record = scan()
    elapsed = time.perf_counter() - start
    print(f"Numba:       {elapsed:.4f}s")
    print(f"Threshold:   {record.threshold:.2f}, gain {record.gain:.6f}")

    return {"time": elapsed}


def main() -> None:
    """Run all benchmarks."""
    print("\n" + "=" * 60)
    print("MLX-Splitkit Split Scan Benchmark")
    print("=" * 60)

    all_results = []

    configs = [
        # (n_samples, n_distinct)
        (1_000, 50),
        (10_000, 100),
        (100_000, 256),
    ]

    for n_samples, n_distinct in configs:
        grad_results = benchmark_gradient(n_samples, n_distinct)
        grad_results["n_samples"] = n_samples
        all_results.append(grad_results)

        benchmark_impurity_scan("classification", n_samples, n_distinct)
        benchmark_impurity_scan("regression", n_samples, n_distinct)

    # Summary
    print("\n" + "=" * 60)
    print("SUMMARY (gradient scan)")
    print("=" * 60)
    print(f"{'Samples':>10} {'NumPy':>10} {'Numba':>10} {'Speedup':>10}")
    print("-" * 60)

    for r in all_results:
        print(
            f"{r['n_samples']:>10,} {r['numpy_time']:>10.4f} "
            f"{r['numba_time']:>10.4f} {r['speedup']:>9.2f}x"
        )


if __name__ == "__main__":
    main()
