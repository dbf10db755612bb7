"""
Tests for the bubble + density clustering pipeline.
"""

import numpy as np
import pytest

from similarity_metrics.core.bubbles import Bubble
from similarity_metrics.core.cluster import cluster, cluster_indices, density_labels, expand, representatives
from similarity_metrics.validation import PreconditionError


def two_groups(n_per_group: int = 50, seed: int = 0) -> np.ndarray:
    """Two dense unit squares 100 apart."""
    rng = np.random.default_rng(seed)
    a = rng.uniform(0.0, 1.0, size=(n_per_group, 2))
    b = rng.uniform(0.0, 1.0, size=(n_per_group, 2)) + 100.0
    return np.vstack([a, b])


class TestClusterEndToEnd:

    def test_two_separated_groups(self):
        """Tolerance between intra-group spacing and inter-group distance recovers both groups."""
        X = two_groups()
        groups = cluster_indices(X, k=40, tolerance=5.0, min_pts=3, random_state=0)

        assert len(groups) == 2
        assert {frozenset(g.tolist()) for g in groups} == {
            frozenset(range(50)),
            frozenset(range(50, 100)),
        }

    def test_cluster_returns_point_rows(self):
        X = two_groups()
        groups = cluster(X, k=40, tolerance=5.0, min_pts=3, random_state=0)
        indices = cluster_indices(X, k=40, tolerance=5.0, min_pts=3, random_state=0)

        assert len(groups) == len(indices)
        for rows, idx in zip(groups, indices):
            np.testing.assert_array_equal(rows, X[idx])

    def test_binary_fingerprints(self):
        """Fingerprint rows come back with their original dtype."""
        rng = np.random.default_rng(1)
        base_a = np.zeros(32, dtype=np.uint8)
        base_b = np.ones(32, dtype=np.uint8)
        X = np.vstack([np.tile(base_a, (30, 1)), np.tile(base_b, (30, 1))])
        # flip one bit per row to avoid exact duplicates
        for i in range(len(X)):
            X[i, rng.integers(32)] ^= 1

        groups = cluster(X, k=20, tolerance=3.0, min_pts=3, random_state=2)
        assert len(groups) == 2
        assert all(g.dtype == np.uint8 for g in groups)
        assert sum(len(g) for g in groups) == len(X)

    def test_infinite_tolerance_merges_everything(self):
        X = two_groups()
        groups = cluster_indices(X, k=20, min_pts=3, random_state=0)
        assert len(groups) == 1
        assert groups[0].tolist() == list(range(100))

    def test_tiny_tolerance_is_all_noise(self):
        X = two_groups()
        assert cluster_indices(X, k=20, tolerance=1e-9, min_pts=3, random_state=0) == []


class TestClusterFailures:

    def test_zero_k(self):
        with pytest.raises(PreconditionError):
            cluster(two_groups(), k=0, tolerance=1.0, min_pts=3)

    def test_k_above_n(self):
        with pytest.raises(PreconditionError):
            cluster(two_groups(n_per_group=5), k=11, tolerance=1.0, min_pts=3)

    def test_empty_representative_matrix(self):
        with pytest.raises(PreconditionError):
            representatives([])

    def test_min_pts_below_two(self):
        """A lone point cannot define density; rejected before any sampling."""
        with pytest.raises(PreconditionError, match="min_pts"):
            cluster(two_groups(), k=20, tolerance=5.0, min_pts=1, random_state=0)

    def test_clusterer_errors_propagate(self):
        """A negative radius is rejected by scikit-learn, not rewrapped."""
        with pytest.raises(ValueError) as excinfo:
            cluster(two_groups(), k=20, tolerance=-1.0, min_pts=3, random_state=0)
        assert not isinstance(excinfo.value, PreconditionError)


class TestFewerRepresentativesThanMinPts:

    def test_single_bubble(self):
        """k=1 leaves one representative, which cannot reach min_pts=5."""
        X = np.random.default_rng(0).normal(size=(50, 3))
        assert cluster_indices(X, k=1, min_pts=5, random_state=0) == []

    def test_all_duplicate_points(self):
        """Identical points collapse into one bubble; the rest are dropped as empty."""
        assert cluster_indices(np.ones((30, 2)), k=5, min_pts=3, random_state=0) == []
        assert cluster(np.ones((30, 2)), k=5, min_pts=3, random_state=0) == []

    def test_density_labels_all_noise(self):
        labels = density_labels(np.zeros((2, 4)), tolerance=1.0, min_pts=3)
        assert labels.tolist() == [-1, -1]

    def test_exactly_min_pts_rows_still_clusters(self):
        labels = density_labels(np.zeros((3, 2)), tolerance=1.0, min_pts=3)
        assert labels.tolist() == [0, 0, 0]


class TestExpand:

    def test_noise_contributes_nothing(self):
        bubbles = [
            Bubble(indices=np.array([0, 3]), points=np.zeros((2, 1))),
            Bubble(indices=np.array([1]), points=np.zeros((1, 1))),
            Bubble(indices=np.array([2, 4]), points=np.zeros((2, 1))),
        ]
        groups = expand(bubbles, np.array([0, -1, 0]))
        assert len(groups) == 1
        assert groups[0].tolist() == [0, 2, 3, 4]

    def test_label_order(self):
        bubbles = [
            Bubble(indices=np.array([5]), points=np.zeros((1, 1))),
            Bubble(indices=np.array([1]), points=np.zeros((1, 1))),
        ]
        groups = expand(bubbles, np.array([1, 0]))
        assert [g.tolist() for g in groups] == [[1], [5]]
