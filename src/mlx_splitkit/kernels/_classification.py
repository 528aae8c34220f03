"""Numba kernels for classification nodes."""

import numpy as np
from numba import njit

from mlx_splitkit.criteria import classification_impurity
from mlx_splitkit.kernels._accumulators import class_histogram, move_label


@njit(cache=True)
def _find_split_classification(
    criterion: int,
    whole_impurity: float,
    order: np.ndarray,
    features: np.ndarray,
    labels: np.ndarray,
    n_classes: int,
) -> tuple[float, float, float, float]:
    """Single sweep over ``order`` returning the best split of one feature.

    Returns:
        Tuple of (left impurity, right impurity, threshold, gain).
    """
    n_samples = order.shape[0]

    best_left_impurity = 0.0
    best_right_impurity = whole_impurity
    best_threshold = float(features[order[0]])
    best_gain = 0.0

    r_histogram = class_histogram(labels, order, n_classes)
    l_histogram = np.zeros(n_classes, dtype=np.int64)
    n_left = 0
    n_right = n_samples

    last_value = features[order[n_samples - 1]]
    curr_value = features[order[0]]
    pos = 0
    while curr_value != last_value:
        # Move the whole group sharing curr_value to the left side
        while pos < n_samples and features[order[pos]] == curr_value:
            move_label(labels[order[pos]], l_histogram, r_histogram)
            n_left += 1
            n_right -= 1
            pos += 1
        next_value = features[order[pos]]

        l_impurity = classification_impurity(criterion, l_histogram, n_left)
        r_impurity = classification_impurity(criterion, r_histogram, n_right)
        gain = whole_impurity - (n_left * l_impurity + n_right * r_impurity) / n_samples

        if gain > best_gain:
            best_left_impurity = l_impurity
            best_right_impurity = r_impurity
            best_threshold = 0.5 * (float(curr_value) + float(next_value))
            best_gain = gain

        curr_value = next_value

    return best_left_impurity, best_right_impurity, best_threshold, best_gain


@njit(cache=True)
def _node_impurity_classification(criterion: int, labels: np.ndarray, n_classes: int) -> float:
    """Impurity of all ``labels`` taken as one node."""
    n_samples = labels.shape[0]
    histogram = class_histogram(labels, np.arange(n_samples), n_classes)
    return classification_impurity(criterion, histogram, n_samples)


@njit(cache=True)
def _is_homogeneous_labels(labels: np.ndarray) -> bool:
    """Whether every label equals the first one."""
    if labels.shape[0] == 0:
        return True
    first = labels[0]
    for i in range(1, labels.shape[0]):
        if labels[i] != first:
            return False
    return True
