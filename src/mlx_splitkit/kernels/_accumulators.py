"""Sufficient statistics moved between the two sides of a candidate split.

Each scanner owns a "left" and a "right" accumulator. The right one starts
as the aggregate over the whole node and the left one starts empty; samples
then move from right to left one at a time.
"""

import numpy as np
from numba import njit


@njit(cache=True)
def class_histogram(labels: np.ndarray, order: np.ndarray, n_classes: int) -> np.ndarray:
    """Count the labels of ``order`` per class."""
    histogram = np.zeros(n_classes, dtype=np.int64)
    for i in range(order.shape[0]):
        histogram[labels[order[i]]] += 1
    return histogram


@njit(cache=True)
def move_label(label: int, left: np.ndarray, right: np.ndarray) -> None:
    """Move one sample of class ``label`` from ``right`` to ``left``."""
    left[label] += 1
    right[label] -= 1


@njit(cache=True)
def target_sum(targets: np.ndarray, order: np.ndarray) -> np.ndarray:
    """Sum the target rows of ``order`` per output dimension."""
    n_outputs = targets.shape[1]
    sums = np.zeros(n_outputs, dtype=np.float64)
    for i in range(order.shape[0]):
        row = order[i]
        for j in range(n_outputs):
            sums[j] += targets[row, j]
    return sums


@njit(cache=True)
def move_target(targets: np.ndarray, row: int, left: np.ndarray, right: np.ndarray) -> None:
    """Move target row ``row`` from the ``right`` sum-vector to ``left``."""
    for j in range(targets.shape[1]):
        left[j] += targets[row, j]
        right[j] -= targets[row, j]


@njit(cache=True)
def mean_vector(sums: np.ndarray, n_elements: int, out: np.ndarray) -> None:
    """Write ``sums / n_elements`` into ``out``."""
    for j in range(sums.shape[0]):
        out[j] = sums[j] / n_elements


@njit(cache=True)
def gradient_sums(gradients: np.ndarray, hessians: np.ndarray, order: np.ndarray) -> tuple[float, float]:
    """Sum gradients and hessians over ``order``."""
    sum_grad = 0.0
    sum_hess = 0.0
    for i in range(order.shape[0]):
        sum_grad += gradients[order[i]]
        sum_hess += hessians[order[i]]
    return sum_grad, sum_hess
