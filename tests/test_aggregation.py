"""
Tests for combining member outputs.
"""

import numpy as np
from unskewedbag.aggregation import aggregate_predictions, aggregate_probabilities, align_proba


class TestAggregateProbabilities:
    """Test classification aggregation."""

    def test_two_members(self):
        """[0.8, 0.2] and [0.4, 0.6] combine to [0.6, 0.4]."""
        probas = [np.array([[0.8, 0.2]]), np.array([[0.4, 0.6]])]

        result = aggregate_probabilities(probas)

        np.testing.assert_array_almost_equal(result, [[0.6, 0.4]])

    def test_rows_sum_to_one(self):
        """Every non-degenerate row is normalized."""
        rng = np.random.RandomState(0)
        probas = rng.rand(7, 20, 3)

        result = aggregate_probabilities(probas)

        assert result.shape == (20, 3)
        np.testing.assert_array_almost_equal(result.sum(axis=1), np.ones(20))

    def test_all_zero_is_returned_unchanged(self):
        """No confidence from any member gives a zero vector, not NaN."""
        probas = np.zeros((3, 2, 4))

        result = aggregate_probabilities(probas)

        np.testing.assert_array_equal(result, np.zeros((2, 4)))
        assert not np.any(np.isnan(result))

    def test_mixed_degenerate_rows(self):
        """Only the zero rows are left alone."""
        probas = [np.array([[0.0, 0.0], [1.0, 3.0]])]

        result = aggregate_probabilities(probas)

        np.testing.assert_array_almost_equal(result, [[0.0, 0.0], [0.25, 0.75]])


class TestAggregatePredictions:
    """Test regression aggregation."""

    def test_mean(self):
        """Members predicting 1, 2 and 3 average to 2."""
        result = aggregate_predictions([[1.0], [2.0], [3.0]])

        np.testing.assert_array_almost_equal(result, [2.0])

    def test_per_sample(self):
        result = aggregate_predictions([[1.0, 0.0], [3.0, 1.0]])

        np.testing.assert_array_almost_equal(result, [2.0, 0.5])


class TestAlignProba:
    """Test spreading member columns over all classes."""

    def test_full_width_untouched(self):
        proba = np.array([[0.3, 0.7]])

        np.testing.assert_array_equal(align_proba(proba, [0, 1], 2), proba)

    def test_missing_class(self):
        """A member that never saw class 1 gets a zero column for it."""
        proba = np.array([[0.3, 0.7], [1.0, 0.0]])

        result = align_proba(proba, [0, 2], 3)

        np.testing.assert_array_equal(result, [[0.3, 0.0, 0.7], [1.0, 0.0, 0.0]])
