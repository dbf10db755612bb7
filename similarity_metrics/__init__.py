"""
similarity_metrics: fingerprint and string similarity, bubble clustering.

Public API:
    from similarity_metrics import tanimoto, jaro_winkler, cluster
    tanimoto(f1, f2)
    jaro_winkler("martha", "marhta")
    cluster(points, k=100, tolerance=2.0, min_pts=5)

Layers:
    similarity_metrics.core        Measures and the clustering pipeline (pure, no I/O)
    similarity_metrics.parallel    joblib all-pairs runner
    similarity_metrics.io          Line loaders, YAML config
    similarity_metrics.validation  PreconditionError and checks

Undefined ratios (zero denominators) are returned as NaN.
"""

from similarity_metrics.core import (
    abc,
    tanimoto, dice, cosine, russell_rao, forbes, soergel, euclidean, hamming,
    l_distance, lcs, hamming_strings,
    matching, jaro, jaro_winkler, jaro_winkler_ext,
    get_measure,
    Bubble, compute_bubbles, cluster, cluster_indices,
)
from similarity_metrics.parallel import pairwise_matrix, pairwise_frame, PairwiseCancelled
from similarity_metrics.validation import PreconditionError

__version__ = "0.1.0"

__all__ = [
    # Fingerprints
    'abc',
    'tanimoto', 'dice', 'cosine', 'russell_rao', 'forbes', 'soergel', 'euclidean', 'hamming',
    # Strings
    'l_distance', 'lcs', 'hamming_strings',
    'matching', 'jaro', 'jaro_winkler', 'jaro_winkler_ext',
    'get_measure',
    # Clustering
    'Bubble', 'compute_bubbles', 'cluster', 'cluster_indices',
    # All-pairs
    'pairwise_matrix', 'pairwise_frame', 'PairwiseCancelled',
    # Errors
    'PreconditionError',
]
