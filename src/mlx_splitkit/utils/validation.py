"""Boundary checks for the split kernels.

Every check raises ``ValueError`` before any scanning starts, so the
kernels never see an input they cannot handle.
"""

import numpy as np


def check_node_size(n_samples: int) -> None:
    """Reject empty nodes.

    Raises:
        ValueError: If the node holds no samples.
    """
    if n_samples < 1:
        raise ValueError("Cannot evaluate an empty node (n_samples=0).")


def check_same_length(name: str, arr: np.ndarray, n_samples: int) -> None:
    """Check that a per-sample array has one entry per sample.

    Raises:
        ValueError: If the first dimension differs from ``n_samples``.
    """
    if arr.ndim == 0 or arr.shape[0] != n_samples:
        length = 0 if arr.ndim == 0 else arr.shape[0]
        raise ValueError(
            f"{name} has {length} entries, expected {n_samples} (one per sample)."
        )


def check_per_sample_vector(name: str, arr: np.ndarray, n_samples: int) -> None:
    """Check that a per-sample statistic is 1-D, sized and finite.

    Raises:
        ValueError: If ``arr`` is not 1-D, has the wrong length or holds
            NaN or infinity.
    """
    if arr.ndim != 1:
        raise ValueError(f"{name} must be 1-D, got shape {arr.shape}.")
    check_same_length(name, arr, n_samples)
    check_finite(name, arr)


def check_finite(name: str, arr: np.ndarray) -> None:
    """Reject NaN and infinite entries.

    Raises:
        ValueError: If any entry of ``arr`` is not finite.
    """
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must be finite (no NaN or infinity).")


def check_features(features: np.ndarray) -> None:
    """Check the feature column is 1-D, non-empty and finite.

    Raises:
        ValueError: On shape or value violations.
    """
    if features.ndim != 1:
        raise ValueError(f"features must be 1-D, got shape {features.shape}.")
    check_node_size(features.shape[0])
    if not np.all(np.isfinite(features)):
        raise ValueError("features must be finite (no NaN or infinity).")


def check_order(order: np.ndarray, features: np.ndarray) -> None:
    """Check ``order`` is a permutation sorting ``features`` ascending.

    Args:
        order: Candidate permutation of ``[0, n)``.
        features: Feature column of length ``n``.

    Raises:
        ValueError: If ``order`` is not a permutation or does not sort.
    """
    n_samples = features.shape[0]
    if order.ndim != 1:
        raise ValueError(f"order must be 1-D, got shape {order.shape}.")
    check_same_length("order", order, n_samples)
    if order.min() < 0 or order.max() >= n_samples:
        raise ValueError(f"order contains indices outside [0, {n_samples}).")
    if not np.all(np.bincount(order, minlength=n_samples) == 1):
        raise ValueError("order must be a permutation of sample indices.")
    if np.any(np.diff(features[order]) < 0):
        raise ValueError("features must be non-decreasing when read through order.")


def check_labels(labels: np.ndarray, n_classes: int) -> None:
    """Check class labels lie in ``[0, n_classes)``.

    Raises:
        ValueError: If ``n_classes`` is not positive or a label is out of range.
    """
    if n_classes < 1:
        raise ValueError(f"n_classes must be positive, got {n_classes}.")
    if labels.ndim != 1:
        raise ValueError(f"labels must be 1-D, got shape {labels.shape}.")
    if labels.size > 0 and (labels.min() < 0 or labels.max() >= n_classes):
        raise ValueError(f"labels must lie in [0, {n_classes}).")


def check_targets(targets: np.ndarray) -> np.ndarray:
    """Check targets and return them as a 2-D ``(n_samples, n_outputs)`` array.

    Raises:
        ValueError: If targets have more than two dimensions or no outputs.
    """
    if targets.ndim == 1:
        targets = targets.reshape(-1, 1)
    if targets.ndim != 2:
        raise ValueError(f"targets must be 1-D or 2-D, got shape {targets.shape}.")
    if targets.shape[1] < 1:
        raise ValueError("targets must have at least one output column.")
    return np.ascontiguousarray(targets)
