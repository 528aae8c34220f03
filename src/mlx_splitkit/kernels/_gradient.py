"""Numba kernel for gradient-boosted regression nodes."""

import numpy as np
from numba import njit


@njit(cache=True, error_model="numpy")
def _find_split_gradient(
    order: np.ndarray,
    features: np.ndarray,
    gradients: np.ndarray,
    hessians: np.ndarray,
    sum_grad: float,
    sum_hess: float,
    reg_lambda: float,
) -> tuple[float, float]:
    """Single sweep over ``order`` maximising the Newton split gain.

    gain = L_g^2 / (L_h + lambda) + R_g^2 / (R_h + lambda) - S_g^2 / (S_h + lambda)

    No minimum leaf size or minimum gain is enforced here.

    Returns:
        Tuple of (threshold, gain).
    """
    n_samples = order.shape[0]

    parent_score = (sum_grad * sum_grad) / (sum_hess + reg_lambda)

    best_threshold = float(features[order[0]])
    best_gain = 0.0

    left_grad = 0.0
    left_hess = 0.0

    last_value = features[order[n_samples - 1]]
    curr_value = features[order[0]]
    pos = 0
    while curr_value != last_value:
        while pos < n_samples and features[order[pos]] == curr_value:
            left_grad += gradients[order[pos]]
            left_hess += hessians[order[pos]]
            pos += 1
        next_value = features[order[pos]]

        right_grad = sum_grad - left_grad
        right_hess = sum_hess - left_hess
        left_score = (left_grad * left_grad) / (left_hess + reg_lambda)
        right_score = (right_grad * right_grad) / (right_hess + reg_lambda)
        gain = left_score + right_score - parent_score

        if gain > best_gain:
            best_threshold = 0.5 * (float(curr_value) + float(next_value))
            best_gain = gain

        curr_value = next_value

    return best_threshold, best_gain
