"""Tests for impurity criteria."""

import logging
import math

import mlx.core as mx
import numpy as np
import pytest

from mlx_splitkit import (
    histogram_impurity,
    node_impurity_classification,
    node_impurity_regression,
)
from mlx_splitkit.criteria import (
    ENTROPY,
    GINI,
    MAE,
    MSE,
    resolve_classification_criterion,
    resolve_regression_criterion,
)


class TestClassificationImpurity:
    """Tests for Gini and entropy node impurity."""

    def test_gini_balanced(self) -> None:
        """Test Gini of two equally sized classes."""
        assert node_impurity_classification("gini", [0, 0, 1, 1], 2) == pytest.approx(0.5)

    def test_gini_pure(self) -> None:
        """Test Gini of a single class is zero."""
        assert node_impurity_classification("gini", [1, 1, 1], 2) == pytest.approx(0.0)

    def test_gini_three_classes(self) -> None:
        """Test Gini against a hand computed value."""
        # counts 2, 1, 1 -> 1 - (0.25 + 0.0625 + 0.0625)
        impurity = node_impurity_classification("gini", [0, 1, 0, 2], 3)
        assert impurity == pytest.approx(0.625)

    def test_gini_unused_class(self) -> None:
        """Test classes with no samples do not change Gini."""
        assert node_impurity_classification("gini", [0, 0, 1, 1], 5) == pytest.approx(0.5)

    def test_entropy_reference_values(self) -> None:
        """Test the bounded-log entropy -sum(p * ln(p + 1))."""
        balanced = node_impurity_classification("entropy", [0, 0, 1, 1], 2)
        pure = node_impurity_classification("entropy", [0, 0, 0, 0], 2)
        thirds = node_impurity_classification("entropy", [0, 1, 1], 2)

        assert balanced == pytest.approx(-math.log(1.5))
        assert pure == pytest.approx(-math.log(2.0))
        expected = -(1 / 3 * math.log(4 / 3) + 2 / 3 * math.log(5 / 3))
        assert thirds == pytest.approx(expected)

    def test_entropy_is_not_shannon(self) -> None:
        """Test entropy of a pure node is -ln 2 rather than 0."""
        pure = node_impurity_classification("entropy", [1, 1], 2)
        assert pure != pytest.approx(0.0)
        assert pure < node_impurity_classification("entropy", [0, 1], 2)

    def test_unknown_criterion_falls_back_to_gini(self) -> None:
        """Test unknown names select Gini instead of failing."""
        labels = [0, 1, 1, 2, 2, 2]
        fallback = node_impurity_classification("bogus", labels, 3)
        assert fallback == node_impurity_classification("gini", labels, 3)

    def test_idempotent(self) -> None:
        """Test repeated calls return identical results."""
        labels = np.array([0, 2, 1, 1, 0, 2, 2])
        first = node_impurity_classification("entropy", labels, 3)
        second = node_impurity_classification("entropy", labels, 3)
        assert first == second


class TestRegressionImpurity:
    """Tests for MSE and MAE node impurity."""

    def test_mse_single_output(self) -> None:
        """Test MSE against the population variance."""
        targets = [1.0, 2.0, 3.0, 4.0]
        assert node_impurity_regression("mse", targets) == pytest.approx(1.25)

    def test_mae_single_output(self) -> None:
        """Test MAE against the mean absolute deviation."""
        targets = [1.0, 2.0, 3.0, 4.0]
        assert node_impurity_regression("mae", targets) == pytest.approx(1.0)

    def test_multi_output_averages_dimensions(self) -> None:
        """Test errors are averaged over outputs, then over samples."""
        targets = np.array([[0.0, 0.0], [2.0, 4.0]])
        # means (1, 2); squared deviations per sample: (1 + 4) / 2
        assert node_impurity_regression("mse", targets) == pytest.approx(2.5)
        # absolute deviations per sample: (1 + 2) / 2
        assert node_impurity_regression("mae", targets) == pytest.approx(1.5)

    def test_column_vector_equals_flat(self) -> None:
        """Test (n, 1) targets match 1-D targets."""
        flat = np.array([3.0, -1.0, 4.0, 1.5])
        column = flat.reshape(-1, 1)
        assert node_impurity_regression("mse", flat) == node_impurity_regression(
            "mse", column
        )

    def test_constant_targets(self) -> None:
        """Test identical targets have zero impurity."""
        assert node_impurity_regression("mae", [[2.0, 3.0]] * 5) == pytest.approx(0.0)

    def test_unknown_criterion_falls_back_to_mse(self) -> None:
        """Test unknown names select MSE instead of failing."""
        targets = [1.0, 5.0, 2.0]
        assert node_impurity_regression("huber", targets) == node_impurity_regression(
            "mse", targets
        )

    def test_matches_numpy(self) -> None:
        """Test MSE matches a direct numpy computation."""
        rng = np.random.default_rng(7)
        targets = rng.normal(size=(25, 3))
        expected = np.mean(np.mean((targets - targets.mean(axis=0)) ** 2, axis=1))
        assert node_impurity_regression("mse", targets) == pytest.approx(expected)


class TestCriterionResolution:
    """Tests for criterion name lookup."""

    def test_known_names(self) -> None:
        """Test documented names map to their codes."""
        assert resolve_classification_criterion("gini") == GINI
        assert resolve_classification_criterion("entropy") == ENTROPY
        assert resolve_regression_criterion("mse") == MSE
        assert resolve_regression_criterion("mae") == MAE

    def test_names_are_case_sensitive(self) -> None:
        """Test lookup is by exact name."""
        assert resolve_classification_criterion("ENTROPY") == GINI
        assert resolve_regression_criterion("MAE") == MSE

    def test_fallback_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test the fallback emits a debug record."""
        caplog.set_level(logging.DEBUG, logger="mlx_splitkit.criteria")
        resolve_classification_criterion("misclassification")
        assert "Unknown classification criterion" in caplog.text


class TestHistogramImpurity:
    """Tests for batched histogram impurity."""

    def test_gini_batch(self) -> None:
        """Test Gini of several histograms at once."""
        histograms = mx.array([[2, 2], [4, 0], [1, 3]])
        result = np.array(histogram_impurity("gini", histograms))
        np.testing.assert_allclose(result, [0.5, 0.0, 0.375], atol=1e-6)

    def test_entropy_batch(self) -> None:
        """Test entropy of several histograms at once."""
        result = np.array(histogram_impurity("entropy", [[2, 2], [4, 0]]))
        np.testing.assert_allclose(
            result, [-math.log(1.5), -math.log(2.0)], rtol=1e-5
        )

    def test_empty_histogram_is_zero(self) -> None:
        """Test histograms without samples have zero impurity."""
        result = np.array(histogram_impurity("gini", np.zeros((2, 3))))
        np.testing.assert_allclose(result, [0.0, 0.0])
        result = np.array(histogram_impurity("entropy", np.zeros((1, 3))))
        np.testing.assert_allclose(result, [0.0])

    def test_matches_scalar_evaluator(self) -> None:
        """Test batched values agree with node impurity."""
        rng = np.random.default_rng(3)
        label_sets = [rng.integers(0, 4, size=n) for n in (5, 12, 30)]
        histograms = np.stack([np.bincount(y, minlength=4) for y in label_sets])

        for criterion in ("gini", "entropy"):
            batched = np.array(histogram_impurity(criterion, histograms))
            scalar = [node_impurity_classification(criterion, y, 4) for y in label_sets]
            np.testing.assert_allclose(batched, scalar, rtol=1e-5, atol=1e-6)

    def test_leading_dimensions_preserved(self) -> None:
        """Test output drops only the class axis."""
        result = histogram_impurity("gini", np.ones((2, 3, 4)))
        assert result.shape == (2, 3)
