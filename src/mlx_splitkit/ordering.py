"""Feature ordering shared by the split scanners.

A tree-growth engine sorts each candidate feature once per node and hands
the resulting ``order`` to every scanner. Sorting is usually the dominant
cost of exact split search, so engines may cache these orders across nodes.
"""

import mlx.core as mx
import numpy as np

from mlx_splitkit.utils.data import to_float_array, to_index_array
from mlx_splitkit.utils.validation import check_features, check_order


def sort_indices_by_feature(column: mx.array | np.ndarray | list) -> np.ndarray:
    """Return the sample indices that sort ``column`` ascending.

    The sort is stable, so samples with equal values keep their original
    relative order.

    Args:
        column: Feature value of every sample, shape (n_samples,).

    Returns:
        int64 permutation of ``[0, n_samples)``.

    Raises:
        ValueError: If the column is empty, not 1-D or not finite.
    """
    features = to_float_array(column)
    check_features(features)
    return np.argsort(features, kind="stable").astype(np.int64)


def candidate_thresholds(
    order: mx.array | np.ndarray | list,
    features: mx.array | np.ndarray | list,
) -> tuple[np.ndarray, np.ndarray]:
    """List the candidate splits a scanner evaluates, in scan order.

    A candidate sits between every pair of adjacent distinct values. The
    left side of candidate ``k`` holds ``order[:n_left[k]]``.

    Args:
        order: Sample indices sorting ``features`` ascending.
        features: Feature value of every sample in the node.

    Returns:
        Tuple of (n_left, thresholds): left partition sizes (int64) and
        midpoint thresholds (float64). Both are empty when every value is
        the same.

    Raises:
        ValueError: If ``order`` does not sort ``features``.
    """
    order_np = to_index_array(order)
    features_np = to_float_array(features)
    check_features(features_np)
    check_order(order_np, features_np)

    sorted_values = features_np[order_np].astype(np.float64)
    boundaries = np.flatnonzero(sorted_values[1:] != sorted_values[:-1])
    n_left = (boundaries + 1).astype(np.int64)
    thresholds = 0.5 * (sorted_values[boundaries] + sorted_values[boundaries + 1])
    return n_left, thresholds
