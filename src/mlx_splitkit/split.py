"""Single-feature split search for decision tree nodes.

This module is the entry point used by a tree-growth engine. For one node
and one feature it scans the samples once in feature order and returns the
threshold with the largest impurity (or loss) reduction.

The caller supplies ``order``, the permutation that sorts the feature
column ascending (see :func:`mlx_splitkit.ordering.sort_indices_by_feature`),
and the node's current impurity or gradient sums. Inputs may be MLX arrays,
numpy arrays or lists; they are converted once and handed to Numba kernels.

Preconditions are checked up front and violations raise ``ValueError``.
Pass ``check_input=False`` to skip those O(n) checks when the caller
already guarantees them.
"""

import logging

import mlx.core as mx
import numpy as np

from mlx_splitkit.criteria import (
    resolve_classification_criterion,
    resolve_regression_criterion,
)
from mlx_splitkit.kernels._classification import (
    _find_split_classification,
    _is_homogeneous_labels,
    _node_impurity_classification,
)
from mlx_splitkit.kernels._gradient import _find_split_gradient
from mlx_splitkit.kernels._regression import (
    _find_split_regression,
    _is_homogeneous_targets,
    _node_impurity_regression,
)
from mlx_splitkit.kernels._split_record import GradientSplitRecord, SplitRecord
from mlx_splitkit.utils.data import to_float_array, to_index_array
from mlx_splitkit.utils.validation import (
    check_features,
    check_finite,
    check_labels,
    check_node_size,
    check_order,
    check_per_sample_vector,
    check_same_length,
    check_targets,
)

logger = logging.getLogger(__name__)

ArrayLike = mx.array | np.ndarray | list

# Homogeneity tolerance for targets of every floating point width
TARGET_EPSILON: float = float(np.finfo(np.float64).eps)


def _prepare_scan(
    order: ArrayLike, features: ArrayLike, check_input: bool
) -> tuple[np.ndarray, np.ndarray]:
    """Convert ``order`` and ``features`` and check they describe one node."""
    order_np = to_index_array(order)
    features_np = to_float_array(features)
    if check_input:
        check_features(features_np)
        check_order(order_np, features_np)
    return order_np, features_np


def find_split_classification(
    criterion: str,
    whole_impurity: float,
    order: ArrayLike,
    features: ArrayLike,
    labels: ArrayLike,
    n_classes: int,
    check_input: bool = True,
) -> SplitRecord:
    """Find the best threshold on one feature of a classification node.

    Args:
        criterion: ``"gini"`` or ``"entropy"``. Unknown names select Gini.
        whole_impurity: Impurity of the node before splitting.
        order: Sample indices sorting ``features`` ascending.
        features: Feature value of every sample in the node.
        labels: Class id of every sample, in ``[0, n_classes)``.
        n_classes: Number of classes.
        check_input: Whether to validate the preconditions.

    Returns:
        SplitRecord of the best threshold. When every feature value is the
        same the gain is 0 and the threshold is that value.

    Raises:
        ValueError: If the inputs violate a precondition.
    """
    code = resolve_classification_criterion(criterion)
    order_np, features_np = _prepare_scan(order, features, check_input)
    labels_np = to_index_array(labels)
    if check_input:
        check_same_length("labels", labels_np, features_np.shape[0])
        check_labels(labels_np, n_classes)

    params = _find_split_classification(
        code, float(whole_impurity), order_np, features_np, labels_np, int(n_classes)
    )
    record = SplitRecord(*(float(p) for p in params))
    logger.debug(
        "Classification split over %d samples: threshold=%g gain=%g",
        order_np.shape[0],
        record.threshold,
        record.gain,
    )
    return record


def find_split_regression(
    criterion: str,
    whole_impurity: float,
    order: ArrayLike,
    features: ArrayLike,
    targets: ArrayLike,
    check_input: bool = True,
) -> SplitRecord:
    """Find the best threshold on one feature of a regression node.

    Args:
        criterion: ``"mse"`` or ``"mae"``. Unknown names select MSE.
        whole_impurity: Impurity of the node before splitting.
        order: Sample indices sorting ``features`` ascending.
        features: Feature value of every sample in the node.
        targets: Target values of shape (n_samples,) or (n_samples, n_outputs).
        check_input: Whether to validate the preconditions.

    Returns:
        SplitRecord of the best threshold.

    Raises:
        ValueError: If the inputs violate a precondition.
    """
    code = resolve_regression_criterion(criterion)
    order_np, features_np = _prepare_scan(order, features, check_input)
    targets_np = check_targets(to_float_array(targets))
    if check_input:
        check_same_length("targets", targets_np, features_np.shape[0])
        check_finite("targets", targets_np)

    params = _find_split_regression(
        code, float(whole_impurity), order_np, features_np, targets_np
    )
    record = SplitRecord(*(float(p) for p in params))
    logger.debug(
        "Regression split over %d samples: threshold=%g gain=%g",
        order_np.shape[0],
        record.threshold,
        record.gain,
    )
    return record


def find_split_gradient_boosted(
    order: ArrayLike,
    features: ArrayLike,
    gradients: ArrayLike,
    hessians: ArrayLike,
    sum_gradient: float,
    sum_hessian: float,
    reg_lambda: float,
    check_input: bool = True,
) -> GradientSplitRecord:
    """Find the threshold with the largest second-order gain.

    Args:
        order: Sample indices sorting ``features`` ascending.
        features: Feature value of every sample in the node.
        gradients: First-order loss derivative of every sample.
        hessians: Second-order loss derivative of every sample.
        sum_gradient: Sum of ``gradients`` over the node.
        sum_hessian: Sum of ``hessians`` over the node.
        reg_lambda: L2 regularization added to every hessian sum.
        check_input: Whether to validate the preconditions.

    Returns:
        GradientSplitRecord of the best threshold.

    Raises:
        ValueError: If the inputs violate a precondition.
    """
    order_np, features_np = _prepare_scan(order, features, check_input)
    gradients_np = to_float_array(gradients)
    hessians_np = to_float_array(hessians)
    if check_input:
        check_per_sample_vector("gradients", gradients_np, features_np.shape[0])
        check_per_sample_vector("hessians", hessians_np, features_np.shape[0])

    threshold, gain = _find_split_gradient(
        order_np,
        features_np,
        gradients_np,
        hessians_np,
        float(sum_gradient),
        float(sum_hessian),
        float(reg_lambda),
    )
    record = GradientSplitRecord(threshold=float(threshold), gain=float(gain))
    logger.debug(
        "Gradient split over %d samples: threshold=%g gain=%g",
        order_np.shape[0],
        record.threshold,
        record.gain,
    )
    return record


def node_impurity_classification(
    criterion: str, labels: ArrayLike, n_classes: int, check_input: bool = True
) -> float:
    """Impurity of a classification node.

    Args:
        criterion: ``"gini"`` or ``"entropy"``. Unknown names select Gini.
        labels: Class id of every sample in the node.
        n_classes: Number of classes.
        check_input: Whether to validate the preconditions.

    Returns:
        Impurity of the node.
    """
    code = resolve_classification_criterion(criterion)
    labels_np = to_index_array(labels)
    if check_input:
        check_labels(labels_np, n_classes)
        check_node_size(labels_np.shape[0])
    return float(_node_impurity_classification(code, labels_np, int(n_classes)))


def node_impurity_regression(
    criterion: str, targets: ArrayLike, check_input: bool = True
) -> float:
    """Impurity of a regression node.

    Args:
        criterion: ``"mse"`` or ``"mae"``. Unknown names select MSE.
        targets: Target values of shape (n_samples,) or (n_samples, n_outputs).
        check_input: Whether to validate the preconditions.

    Returns:
        Impurity of the node.
    """
    code = resolve_regression_criterion(criterion)
    targets_np = check_targets(to_float_array(targets))
    if check_input:
        check_node_size(targets_np.shape[0])
        check_finite("targets", targets_np)
    return float(_node_impurity_regression(code, targets_np))


def is_homogeneous_labels(labels: ArrayLike) -> bool:
    """Whether every sample of the node carries the same label."""
    labels_np = to_index_array(labels)
    return bool(_is_homogeneous_labels(labels_np.reshape(-1)))


def is_homogeneous_targets(targets: ArrayLike) -> bool:
    """Whether every target vector is within float64 epsilon of the first."""
    targets_np = check_targets(to_float_array(targets))
    return bool(_is_homogeneous_targets(targets_np, TARGET_EPSILON))
