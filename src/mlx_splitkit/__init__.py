"""MLX Splitkit - single-feature split search kernels for decision trees."""

from mlx_splitkit.base import BaseSplitter
from mlx_splitkit.criteria import histogram_impurity
from mlx_splitkit.kernels import GradientSplitRecord, SplitRecord
from mlx_splitkit.ordering import candidate_thresholds, sort_indices_by_feature
from mlx_splitkit.split import (
    find_split_classification,
    find_split_gradient_boosted,
    find_split_regression,
    is_homogeneous_labels,
    is_homogeneous_targets,
    node_impurity_classification,
    node_impurity_regression,
)
from mlx_splitkit.splitter import (
    ClassificationSplitter,
    GradientSplitter,
    RegressionSplitter,
    get_splitter,
)

__version__ = "1.0.0"
__all__ = [
    "BaseSplitter",
    "ClassificationSplitter",
    "RegressionSplitter",
    "GradientSplitter",
    "get_splitter",
    "SplitRecord",
    "GradientSplitRecord",
    "find_split_classification",
    "find_split_regression",
    "find_split_gradient_boosted",
    "node_impurity_classification",
    "node_impurity_regression",
    "is_homogeneous_labels",
    "is_homogeneous_targets",
    "histogram_impurity",
    "sort_indices_by_feature",
    "candidate_thresholds",
    "__version__",
]
