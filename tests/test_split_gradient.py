"""Tests for the gradient-boosted split scanner."""

import mlx.core as mx
import numpy as np
import pytest

from mlx_splitkit import (
    GradientSplitRecord,
    candidate_thresholds,
    find_split_gradient_boosted,
    sort_indices_by_feature,
)


def _newton_gain(left_g, left_h, sum_g, sum_h, reg_lambda):
    right_g = sum_g - left_g
    right_h = sum_h - left_h
    return (
        left_g**2 / (left_h + reg_lambda)
        + right_g**2 / (right_h + reg_lambda)
        - sum_g**2 / (sum_h + reg_lambda)
    )


class TestFindSplitGradientBoosted:
    """Tests for find_split_gradient_boosted."""

    def test_reference_node(self) -> None:
        """Test the scan picks the largest closed-form gain."""
        features = [1.0, 2.0, 3.0, 4.0]
        gradients = [1.0, -1.0, 2.0, -2.0]
        hessians = [1.0, 1.0, 1.0, 1.0]

        record = find_split_gradient_boosted(
            [0, 1, 2, 3], features, gradients, hessians, 0.0, 4.0, 1.0
        )

        # candidates 1.5, 2.5, 3.5 have gains 0.75, 0.0 and 3.0
        closed_form = [
            _newton_gain(1.0, 1.0, 0.0, 4.0, 1.0),
            _newton_gain(0.0, 2.0, 0.0, 4.0, 1.0),
            _newton_gain(2.0, 3.0, 0.0, 4.0, 1.0),
        ]
        assert closed_form == pytest.approx([0.75, 0.0, 3.0])
        assert record.gain == pytest.approx(max(closed_form))
        assert record.threshold == pytest.approx(3.5)

    def test_returns_record(self) -> None:
        """Test the result is a GradientSplitRecord of floats."""
        record = find_split_gradient_boosted([0, 1], [0.0, 1.0], [1.0, -1.0], [1.0, 1.0], 0.0, 2.0, 0.0)

        assert isinstance(record, GradientSplitRecord)
        assert type(record.threshold) is float
        assert type(record.gain) is float

    def test_all_values_equal(self) -> None:
        """Test a constant feature yields no split."""
        record = find_split_gradient_boosted(
            [0, 1, 2], [7.0, 7.0, 7.0], [1.0, -3.0, 2.0], [1.0, 1.0, 1.0], 0.0, 3.0, 1.0
        )

        assert record.gain == 0.0
        assert record.threshold == 7.0

    def test_gain_never_negative(self) -> None:
        """Test splits that lose against the parent are not reported."""
        # Regularization makes every split score below the parent
        record = find_split_gradient_boosted(
            [0, 1], [1.0, 2.0], [1.0, 1.0], [1.0, 1.0], 2.0, 2.0, 1.0
        )

        assert _newton_gain(1.0, 1.0, 2.0, 2.0, 1.0) < 0.0
        assert record.gain == 0.0
        assert record.threshold == 1.0

    def test_regularization_shrinks_gain(self) -> None:
        """Test a larger lambda lowers the best gain."""
        args = ([0, 1, 2, 3], [1.0, 2.0, 3.0, 4.0], [-2.0, -1.0, 1.0, 2.0], [1.0] * 4, 0.0, 4.0)

        weak = find_split_gradient_boosted(*args, 0.1)
        strong = find_split_gradient_boosted(*args, 10.0)

        assert weak.threshold == pytest.approx(2.5)
        assert strong.gain < weak.gain

    def test_zero_lambda(self) -> None:
        """Test lambda 0 with positive hessians."""
        record = find_split_gradient_boosted(
            [0, 1, 2], [1.0, 2.0, 3.0], [-1.0, -1.0, 4.0], [0.5, 0.5, 1.0], 2.0, 2.0, 0.0
        )

        # left (-2, 1) + right (4, 1) - parent (2, 2): 4 + 16 - 2
        assert record.threshold == pytest.approx(2.5)
        assert record.gain == pytest.approx(18.0)

    def test_mlx_input(self) -> None:
        """Test MLX arrays are accepted."""
        features = mx.array([4.0, 3.0, 2.0, 1.0])
        gradients = mx.array([-2.0, 2.0, -1.0, 1.0])
        hessians = mx.ones(4)

        record = find_split_gradient_boosted(
            sort_indices_by_feature(features), features, gradients, hessians, 0.0, 4.0, 1.0
        )

        assert record.threshold == pytest.approx(3.5)
        assert record.gain == pytest.approx(3.0)

    def test_best_gain_is_maximal(self) -> None:
        """Test the reported gain dominates every candidate on random data."""
        rng = np.random.default_rng(2)
        features = rng.integers(0, 12, size=50).astype(np.float64)
        gradients = rng.normal(size=50)
        hessians = rng.uniform(0.1, 1.0, size=50)
        order = sort_indices_by_feature(features)
        sum_g, sum_h = gradients.sum(), hessians.sum()

        record = find_split_gradient_boosted(
            order, features, gradients, hessians, sum_g, sum_h, 0.5
        )

        n_left, thresholds = candidate_thresholds(order, features)
        gains = [
            _newton_gain(gradients[order[:k]].sum(), hessians[order[:k]].sum(), sum_g, sum_h, 0.5)
            for k in n_left
        ]
        assert record.gain == pytest.approx(max(max(gains), 0.0))
        assert all(gain <= record.gain + 1e-9 for gain in gains)
        if record.gain > 0.0:
            assert record.threshold in thresholds


class TestGradientValidation:
    """Tests for precondition checks."""

    def test_gradient_length_mismatch(self) -> None:
        """Test gradients must have one entry per sample."""
        with pytest.raises(ValueError, match="gradients has 1 entries"):
            find_split_gradient_boosted([0, 1], [1.0, 2.0], [1.0], [1.0, 1.0], 1.0, 2.0, 0.0)

    def test_hessian_length_mismatch(self) -> None:
        """Test hessians must have one entry per sample."""
        with pytest.raises(ValueError, match="hessians has 3 entries"):
            find_split_gradient_boosted([0, 1], [1.0, 2.0], [1.0, 0.0], [1.0, 1.0, 1.0], 1.0, 2.0, 0.0)

    def test_order_not_sorting(self) -> None:
        """Test an order that does not sort the feature is rejected."""
        with pytest.raises(ValueError, match="non-decreasing"):
            find_split_gradient_boosted([1, 0], [1.0, 2.0], [1.0, 0.0], [1.0, 1.0], 1.0, 2.0, 0.0)

    def test_two_dimensional_gradients(self) -> None:
        """Test column-shaped gradients are rejected before scanning."""
        gradients = np.array([[1.0], [-1.0], [2.0], [-2.0]])
        with pytest.raises(ValueError, match="gradients must be 1-D"):
            find_split_gradient_boosted(
                [0, 1, 2, 3], [1.0, 2.0, 3.0, 4.0], gradients, np.ones(4), 0.0, 4.0, 1.0
            )

    def test_two_dimensional_hessians(self) -> None:
        """Test column-shaped hessians are rejected before scanning."""
        with pytest.raises(ValueError, match="hessians must be 1-D"):
            find_split_gradient_boosted(
                [0, 1, 2, 3],
                [1.0, 2.0, 3.0, 4.0],
                [1.0, -1.0, 2.0, -2.0],
                np.ones((4, 1)),
                0.0,
                4.0,
                1.0,
            )

    def test_non_finite_gradients(self) -> None:
        """Test NaN gradients and infinite hessians are rejected."""
        with pytest.raises(ValueError, match="gradients must be finite"):
            find_split_gradient_boosted(
                [0, 1, 2], [1.0, 2.0, 3.0], [1.0, np.nan, 3.0], [1.0] * 3, 0.0, 3.0, 1.0
            )
        with pytest.raises(ValueError, match="hessians must be finite"):
            find_split_gradient_boosted(
                [0, 1, 2], [1.0, 2.0, 3.0], [1.0, 0.0, 3.0], [1.0, np.inf, 1.0], 4.0, 3.0, 1.0
            )
