"""Impurity criteria for split evaluation.

Criteria are selected by name. Classification supports ``"gini"`` and
``"entropy"``; regression supports ``"mse"`` and ``"mae"``. An unknown
name falls back to the default of its task (``"gini"`` or ``"mse"``)
instead of raising.

The scalar evaluators are Numba-compiled and called from inside the split
scanners. :func:`histogram_impurity` evaluates many class histograms at
once with MLX.
"""

import logging

import mlx.core as mx
import numpy as np
from numba import njit

from mlx_splitkit.utils.data import to_mlx_array

logger = logging.getLogger(__name__)

# Integer codes handed to the kernels
GINI: int = 0
ENTROPY: int = 1
MSE: int = 0
MAE: int = 1

CLASSIFICATION_CRITERIA: dict[str, int] = {"gini": GINI, "entropy": ENTROPY}
REGRESSION_CRITERIA: dict[str, int] = {"mse": MSE, "mae": MAE}

DEFAULT_CLASSIFICATION_CRITERION: str = "gini"
DEFAULT_REGRESSION_CRITERION: str = "mse"


def resolve_classification_criterion(criterion: str) -> int:
    """Map a classification criterion name to its kernel code.

    Args:
        criterion: ``"gini"`` or ``"entropy"``. Anything else selects Gini.

    Returns:
        Kernel code of the criterion.
    """
    code = CLASSIFICATION_CRITERIA.get(criterion)
    if code is None:
        logger.debug(
            "Unknown classification criterion %r, using %r.",
            criterion,
            DEFAULT_CLASSIFICATION_CRITERION,
        )
        return CLASSIFICATION_CRITERIA[DEFAULT_CLASSIFICATION_CRITERION]
    return code


def resolve_regression_criterion(criterion: str) -> int:
    """Map a regression criterion name to its kernel code.

    Args:
        criterion: ``"mse"`` or ``"mae"``. Anything else selects MSE.

    Returns:
        Kernel code of the criterion.
    """
    code = REGRESSION_CRITERIA.get(criterion)
    if code is None:
        logger.debug(
            "Unknown regression criterion %r, using %r.",
            criterion,
            DEFAULT_REGRESSION_CRITERION,
        )
        return REGRESSION_CRITERIA[DEFAULT_REGRESSION_CRITERION]
    return code


@njit(cache=True)
def gini_impurity(histogram: np.ndarray, n_elements: int) -> float:
    """Gini impurity ``1 - sum(p_c^2)`` of a class histogram."""
    gini = 0.0
    for c in range(histogram.shape[0]):
        p = histogram[c] / n_elements
        gini += p * p
    return 1.0 - gini


@njit(cache=True)
def entropy_impurity(histogram: np.ndarray, n_elements: int) -> float:
    """Bounded-log entropy ``-sum(p_c * ln(p_c + 1))`` of a class histogram.

    This is not Shannon entropy. The ``+ 1`` inside the logarithm keeps
    every term finite, and split gains are computed against it as is.
    """
    entropy = 0.0
    for c in range(histogram.shape[0]):
        p = histogram[c] / n_elements
        entropy += p * np.log(p + 1.0)
    return -entropy


@njit(cache=True)
def classification_impurity(criterion: int, histogram: np.ndarray, n_elements: int) -> float:
    """Dispatch to the classification criterion selected by ``criterion``."""
    if criterion == ENTROPY:
        return entropy_impurity(histogram, n_elements)
    return gini_impurity(histogram, n_elements)


@njit(cache=True)
def regression_impurity(
    criterion: int,
    targets: np.ndarray,
    order: np.ndarray,
    start: int,
    stop: int,
    mean: np.ndarray,
) -> float:
    """Mean deviation of ``targets[order[start:stop]]`` from ``mean``.

    Squared deviation for MSE and absolute deviation for MAE, averaged over
    output dimensions first and then over samples.
    """
    n_outputs = targets.shape[1]
    sum_err = 0.0
    for i in range(start, stop):
        row = order[i]
        err = 0.0
        for j in range(n_outputs):
            diff = targets[row, j] - mean[j]
            if criterion == MAE:
                err += abs(diff)
            else:
                err += diff * diff
        sum_err += err / n_outputs
    return sum_err / (stop - start)


def _gini_mlx(class_counts: mx.array, total_counts: mx.array) -> mx.array:
    """Compute Gini impurity of class histograms.

    Args:
        class_counts: Shape (..., n_classes).
        total_counts: Shape (...).

    Returns:
        Gini impurity values, 0 for empty histograms.
    """
    probs = class_counts / mx.maximum(total_counts[..., None], 1.0)
    gini = 1.0 - mx.sum(probs**2, axis=-1)
    return mx.where(total_counts > 0, gini, 0.0)


def _entropy_mlx(class_counts: mx.array, total_counts: mx.array) -> mx.array:
    """Compute bounded-log entropy ``-sum(p * ln(p + 1))`` of class histograms.

    Args:
        class_counts: Shape (..., n_classes).
        total_counts: Shape (...).

    Returns:
        Entropy values, 0 for empty histograms.
    """
    probs = class_counts / mx.maximum(total_counts[..., None], 1.0)
    return -mx.sum(probs * mx.log(probs + 1.0), axis=-1)


def histogram_impurity(
    criterion: str, histograms: mx.array | np.ndarray | list
) -> mx.array:
    """Compute the impurity of many class histograms at once.

    Args:
        criterion: ``"gini"`` or ``"entropy"``; unknown names select Gini.
        histograms: Class counts of shape (..., n_classes).

    Returns:
        Impurity of every histogram, shape (...). Histograms with no
        samples have impurity 0.
    """
    counts = to_mlx_array(histograms).astype(mx.float32)
    totals = mx.sum(counts, axis=-1)

    if resolve_classification_criterion(criterion) == ENTROPY:
        impurity = _entropy_mlx(counts, totals)
    else:
        impurity = _gini_mlx(counts, totals)

    mx.eval(impurity)
    return impurity
