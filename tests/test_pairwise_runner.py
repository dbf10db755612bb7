"""
Tests for the joblib all-pairs runner and the measure registry.
"""

import threading

import numpy as np
import pytest

from similarity_metrics.core.measures import tanimoto, hamming
from similarity_metrics.core.strings import l_distance
from similarity_metrics.core.registry import (
    FINGERPRINT_MEASURES, STRING_MEASURES, get_measure, is_string_measure, list_measures,
)
from similarity_metrics.parallel import pairwise_matrix, pairwise_frame, PairwiseCancelled


def fingerprints(n: int = 12, n_bits: int = 32, seed: int = 42) -> np.ndarray:
    rng = np.random.default_rng(seed)
    fps = rng.integers(0, 2, size=(n, n_bits), dtype=np.uint8)
    fps[:, 0] = 1
    return fps


class TestRegistry:

    def test_lookup(self):
        assert get_measure('tanimoto') is tanimoto
        assert get_measure('levenshtein') is l_distance

    def test_unknown_measure(self):
        with pytest.raises(KeyError, match="Available"):
            get_measure('nope')

    def test_all_measures_listed(self):
        assert set(list_measures()) == set(FINGERPRINT_MEASURES) | set(STRING_MEASURES)
        assert len(FINGERPRINT_MEASURES) == 8

    def test_string_measure_flag(self):
        assert is_string_measure('jaro')
        assert not is_string_measure('dice')


class TestPairwiseMatrix:

    def test_matches_direct_computation(self):
        fps = fingerprints()
        matrix = pairwise_matrix(fps, tanimoto, batch_size=5)
        for i in range(len(fps)):
            for j in range(len(fps)):
                assert matrix[i, j] == pytest.approx(tanimoto(fps[i], fps[j]))

    def test_symmetric_with_unit_diagonal(self):
        matrix = pairwise_matrix(fingerprints(), 'tanimoto', batch_size=3)
        np.testing.assert_allclose(matrix, matrix.T)
        np.testing.assert_allclose(np.diag(matrix), 1.0)

    def test_strings_by_name(self):
        words = ["kitten", "sitting", "mitten"]
        matrix = pairwise_matrix(words, 'levenshtein')
        assert matrix[0, 1] == 3
        assert matrix[1, 0] == 3
        assert matrix[0, 2] == 1

    def test_nan_propagates(self):
        zeros = np.zeros((3, 8), dtype=np.uint8)
        matrix = pairwise_matrix(zeros, tanimoto)
        assert np.isnan(matrix).all()

    def test_parallel_matches_sequential(self):
        fps = fingerprints(n=20)
        sequential = pairwise_matrix(fps, hamming, n_jobs=1, batch_size=4)
        parallel = pairwise_matrix(fps, hamming, n_jobs=2, batch_size=4)
        np.testing.assert_array_equal(sequential, parallel)

    def test_empty_input(self):
        assert pairwise_matrix([], tanimoto).shape == (0, 0)


class TestPairwiseFrame:

    def test_distinct_pairs_only(self):
        fps = fingerprints(n=6)
        df = pairwise_frame(fps, 'hamming')
        assert df.columns == ['i', 'j', 'value']
        assert len(df) == 15
        assert (df['i'] < df['j']).all()

    def test_values(self):
        words = ["abc", "abd", "xyz"]
        df = pairwise_frame(words, 'hamming_strings')
        assert df['value'].to_list() == [1.0, 3.0, 3.0]


class TestCancellation:

    def test_cancelled_before_start(self):
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(PairwiseCancelled) as excinfo:
            pairwise_matrix(fingerprints(), tanimoto, cancel=cancel)
        assert excinfo.value.completed_rows == 0

    def test_cancelled_between_blocks(self):
        cancel = threading.Event()

        def cancelling(f1, f2):
            cancel.set()
            return tanimoto(f1, f2)

        with pytest.raises(PairwiseCancelled) as excinfo:
            pairwise_matrix(fingerprints(n=6), cancelling, batch_size=2, cancel=cancel)
        assert excinfo.value.completed_rows == 2
        assert excinfo.value.total_rows == 6

    def test_unset_event_runs_to_completion(self):
        matrix = pairwise_matrix(fingerprints(n=5), tanimoto, cancel=threading.Event())
        assert matrix.shape == (5, 5)
