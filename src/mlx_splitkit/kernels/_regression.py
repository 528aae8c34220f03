"""Numba kernels for regression nodes."""

import numpy as np
from numba import njit

from mlx_splitkit.criteria import regression_impurity
from mlx_splitkit.kernels._accumulators import mean_vector, move_target, target_sum


@njit(cache=True)
def _find_split_regression(
    criterion: int,
    whole_impurity: float,
    order: np.ndarray,
    features: np.ndarray,
    targets: np.ndarray,
) -> tuple[float, float, float, float]:
    """Single sweep over ``order`` returning the best split of one feature.

    Partition impurities are measured against each side's mean-vector over
    the side's own members, which keeps MSE and MAE on one code path.
    Sum-vectors are updated incrementally, but every candidate re-reads the
    targets of both sides, so the scan costs O(n_samples * n_distinct *
    n_outputs) rather than O(n_samples * n_outputs).

    Returns:
        Tuple of (left impurity, right impurity, threshold, gain).
    """
    n_samples = order.shape[0]
    n_outputs = targets.shape[1]

    best_left_impurity = 0.0
    best_right_impurity = whole_impurity
    best_threshold = float(features[order[0]])
    best_gain = 0.0

    r_sum = target_sum(targets, order)
    l_sum = np.zeros(n_outputs, dtype=np.float64)
    l_mean = np.zeros(n_outputs, dtype=np.float64)
    r_mean = np.zeros(n_outputs, dtype=np.float64)
    n_left = 0
    n_right = n_samples

    last_value = features[order[n_samples - 1]]
    curr_value = features[order[0]]
    pos = 0
    while curr_value != last_value:
        while pos < n_samples and features[order[pos]] == curr_value:
            move_target(targets, order[pos], l_sum, r_sum)
            n_left += 1
            n_right -= 1
            pos += 1
        next_value = features[order[pos]]

        mean_vector(l_sum, n_left, l_mean)
        mean_vector(r_sum, n_right, r_mean)
        l_impurity = regression_impurity(criterion, targets, order, 0, pos, l_mean)
        r_impurity = regression_impurity(criterion, targets, order, pos, n_samples, r_mean)
        gain = whole_impurity - (n_left * l_impurity + n_right * r_impurity) / n_samples

        if gain > best_gain:
            best_left_impurity = l_impurity
            best_right_impurity = r_impurity
            best_threshold = 0.5 * (float(curr_value) + float(next_value))
            best_gain = gain

        curr_value = next_value

    return best_left_impurity, best_right_impurity, best_threshold, best_gain


@njit(cache=True)
def _node_impurity_regression(criterion: int, targets: np.ndarray) -> float:
    """Impurity of all ``targets`` taken as one node."""
    n_samples = targets.shape[0]
    order = np.arange(n_samples)
    mean = np.zeros(targets.shape[1], dtype=np.float64)
    mean_vector(target_sum(targets, order), n_samples, mean)
    return regression_impurity(criterion, targets, order, 0, n_samples, mean)


@njit(cache=True)
def _is_homogeneous_targets(targets: np.ndarray, eps: float) -> bool:
    """Whether every target row is within ``eps`` of the first, per dimension."""
    n_samples, n_outputs = targets.shape
    for i in range(1, n_samples):
        for j in range(n_outputs):
            if abs(targets[i, j] - targets[0, j]) > eps:
                return False
    return True
