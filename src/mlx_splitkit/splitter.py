"""Splitters binding the split kernels to one problem type.

Each splitter exposes ``find_split``, ``node_impurity`` and
``is_homogeneous`` for its problem type. The criterion is a constructor
argument chosen by name, so a growth engine picks behaviour by
configuration rather than by subclassing.
"""

from typing import Literal

import numpy as np

from mlx_splitkit.base import BaseSplitter
from mlx_splitkit.kernels._split_record import GradientSplitRecord, SplitRecord
from mlx_splitkit.split import (
    ArrayLike,
    find_split_classification,
    find_split_gradient_boosted,
    find_split_regression,
    is_homogeneous_labels,
    is_homogeneous_targets,
    node_impurity_classification,
    node_impurity_regression,
)
from mlx_splitkit.utils.data import to_float_array, to_index_array


class ClassificationSplitter(BaseSplitter):
    """Splitter for classification nodes.

    Args:
        criterion: Impurity measure.
            - "gini": Gini impurity (default)
            - "entropy": bounded-log entropy ``-sum(p * ln(p + 1))``
            Unknown names fall back to "gini".
        n_classes: Number of classes. When None it is inferred from the
            labels of each call as ``max(label) + 1``.
        check_input: Whether to validate inputs on every call.

    Example:
        >>> from mlx_splitkit import ClassificationSplitter
        >>> from mlx_splitkit.ordering import sort_indices_by_feature
        >>> features = [1.0, 2.0, 2.0, 3.0]
        >>> labels = [0, 0, 0, 1]
        >>> splitter = ClassificationSplitter(criterion="gini", n_classes=2)
        >>> impurity = splitter.node_impurity(labels)
        >>> record = splitter.find_split(
        ...     sort_indices_by_feature(features), features, labels, impurity
        ... )
        >>> record.threshold
        2.5
    """

    def __init__(
        self,
        criterion: Literal["gini", "entropy"] = "gini",
        n_classes: int | None = None,
        check_input: bool = True,
    ) -> None:
        self.criterion = criterion
        self.n_classes = n_classes
        self.check_input = check_input

    def find_split(
        self,
        order: ArrayLike,
        features: ArrayLike,
        labels: ArrayLike,
        whole_impurity: float | None = None,
    ) -> SplitRecord:
        """Find the best threshold on one feature.

        Args:
            order: Sample indices sorting ``features`` ascending.
            features: Feature value of every sample in the node.
            labels: Class id of every sample.
            whole_impurity: Impurity of the node. Computed when None.

        Returns:
            SplitRecord of the best threshold.
        """
        labels_np = to_index_array(labels)
        n_classes = self._resolve_n_classes(labels_np)
        if whole_impurity is None:
            whole_impurity = node_impurity_classification(
                self.criterion, labels_np, n_classes, check_input=self.check_input
            )
        return find_split_classification(
            self.criterion,
            whole_impurity,
            order,
            features,
            labels_np,
            n_classes,
            check_input=self.check_input,
        )

    def node_impurity(self, labels: ArrayLike) -> float:
        """Impurity of a node holding ``labels``."""
        labels_np = to_index_array(labels)
        return node_impurity_classification(
            self.criterion,
            labels_np,
            self._resolve_n_classes(labels_np),
            check_input=self.check_input,
        )

    def is_homogeneous(self, labels: ArrayLike) -> bool:
        """Whether every sample carries the same label."""
        return is_homogeneous_labels(labels)

    def _resolve_n_classes(self, labels: np.ndarray) -> int:
        if self.n_classes is not None:
            return int(self.n_classes)
        if labels.size == 0:
            return 1
        return int(labels.max()) + 1


class RegressionSplitter(BaseSplitter):
    """Splitter for (multi-output) regression nodes.

    Args:
        criterion: Impurity measure.
            - "mse": mean squared deviation from the node mean (default)
            - "mae": mean absolute deviation from the node mean
            Unknown names fall back to "mse".
        check_input: Whether to validate inputs on every call.
    """

    def __init__(
        self,
        criterion: Literal["mse", "mae"] = "mse",
        check_input: bool = True,
    ) -> None:
        self.criterion = criterion
        self.check_input = check_input

    def find_split(
        self,
        order: ArrayLike,
        features: ArrayLike,
        targets: ArrayLike,
        whole_impurity: float | None = None,
    ) -> SplitRecord:
        """Find the best threshold on one feature.

        Args:
            order: Sample indices sorting ``features`` ascending.
            features: Feature value of every sample in the node.
            targets: Targets of shape (n_samples,) or (n_samples, n_outputs).
            whole_impurity: Impurity of the node. Computed when None.

        Returns:
            SplitRecord of the best threshold.
        """
        targets_np = to_float_array(targets)
        if whole_impurity is None:
            whole_impurity = self.node_impurity(targets_np)
        return find_split_regression(
            self.criterion,
            whole_impurity,
            order,
            features,
            targets_np,
            check_input=self.check_input,
        )

    def node_impurity(self, targets: ArrayLike) -> float:
        """Impurity of a node holding ``targets``."""
        return node_impurity_regression(
            self.criterion, targets, check_input=self.check_input
        )

    def is_homogeneous(self, targets: ArrayLike) -> bool:
        """Whether every target vector matches the first within epsilon."""
        return is_homogeneous_targets(targets)


class GradientSplitter(BaseSplitter):
    """Splitter for gradient-boosted regression nodes.

    Split quality is the Newton gain computed from per-sample gradients and
    hessians of the boosting loss.

    Args:
        reg_lambda: L2 regularization added to every hessian sum.
        check_input: Whether to validate inputs on every call.

    Note:
        The scan enforces no minimum leaf size and no minimum gain. A growth
        engine that needs either must apply it to the returned record.
    """

    def __init__(self, reg_lambda: float = 0.0, check_input: bool = True) -> None:
        self.reg_lambda = reg_lambda
        self.check_input = check_input

    def find_split(
        self,
        order: ArrayLike,
        features: ArrayLike,
        gradients: ArrayLike,
        hessians: ArrayLike,
        sum_gradient: float | None = None,
        sum_hessian: float | None = None,
    ) -> GradientSplitRecord:
        """Find the threshold with the largest second-order gain.

        Args:
            order: Sample indices sorting ``features`` ascending.
            features: Feature value of every sample in the node.
            gradients: First-order loss derivative of every sample.
            hessians: Second-order loss derivative of every sample.
            sum_gradient: Node gradient sum. Computed when None.
            sum_hessian: Node hessian sum. Computed when None.

        Returns:
            GradientSplitRecord of the best threshold.
        """
        gradients_np = to_float_array(gradients)
        hessians_np = to_float_array(hessians)
        if sum_gradient is None:
            sum_gradient = float(np.sum(gradients_np, dtype=np.float64))
        if sum_hessian is None:
            sum_hessian = float(np.sum(hessians_np, dtype=np.float64))
        return find_split_gradient_boosted(
            order,
            features,
            gradients_np,
            hessians_np,
            sum_gradient,
            sum_hessian,
            self.reg_lambda,
            check_input=self.check_input,
        )

    def node_impurity(self, gradients: ArrayLike, hessians: ArrayLike) -> float:
        """Negative Newton score ``-G^2 / (H + lambda)`` of a node.

        Lower is better, like an impurity. The gain of a split equals the
        parent's score minus the scores of both children.
        """
        sum_gradient = float(np.sum(to_float_array(gradients), dtype=np.float64))
        sum_hessian = float(np.sum(to_float_array(hessians), dtype=np.float64))
        return -(sum_gradient * sum_gradient) / (sum_hessian + self.reg_lambda)

    def is_homogeneous(self, targets: ArrayLike) -> bool:
        """Whether every target the gradients came from is the same."""
        return is_homogeneous_targets(targets)


_SPLITTERS: dict[str, type[BaseSplitter]] = {
    "classification": ClassificationSplitter,
    "regression": RegressionSplitter,
    "gradient": GradientSplitter,
}


def get_splitter(
    task: Literal["classification", "regression", "gradient"], **params
) -> BaseSplitter:
    """Create the splitter for a problem type.

    Args:
        task: "classification", "regression" or "gradient".
        **params: Keyword arguments for the splitter's constructor.

    Returns:
        Configured splitter.

    Raises:
        ValueError: If ``task`` is unknown.
    """
    if task not in _SPLITTERS:
        raise ValueError(
            f"Unknown task {task!r}. Expected one of {sorted(_SPLITTERS)}."
        )
    return _SPLITTERS[task](**params)
