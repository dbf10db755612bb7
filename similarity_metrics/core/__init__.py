"""
Similarity Core
===============

Pure pairwise measures and the bubble/density clustering pipeline.

Structure:
    statistics.py  - (a, b, c) sufficient statistics for fingerprint pairs
    measures.py    - Tanimoto, Dice, Cosine, Russell-Rao, Forbes, Soergel,
                     Euclidean, Hamming
    strings.py     - Levenshtein, LCS length, string Hamming
    jaro.py        - Jaro, Jaro-Winkler, extended-prefix Jaro-Winkler
    registry.py    - name -> measure lookup
    bubbles.py     - Bubble sampler
    cluster.py     - bubbles -> OPTICS -> point groups
"""

from similarity_metrics.core.statistics import SufficientStats, abc
from similarity_metrics.core.measures import (
    tanimoto,
    dice,
    cosine,
    russell_rao,
    forbes,
    soergel,
    euclidean,
    hamming,
)
from similarity_metrics.core.strings import l_distance, lcs, hamming_strings
from similarity_metrics.core.jaro import (
    match_locations,
    estimate_transpositions,
    matching,
    jaro,
    jaro_winkler,
    jaro_winkler_ext,
)
from similarity_metrics.core.registry import (
    FINGERPRINT_MEASURES,
    STRING_MEASURES,
    get_measure,
    list_measures,
)
from similarity_metrics.core.bubbles import Bubble, compute_bubbles, drop_empty
from similarity_metrics.core.cluster import cluster, cluster_indices, representatives

__all__ = [
    # Statistics
    'SufficientStats',
    'abc',
    # Fingerprint measures
    'tanimoto',
    'dice',
    'cosine',
    'russell_rao',
    'forbes',
    'soergel',
    'euclidean',
    'hamming',
    # String measures
    'l_distance',
    'lcs',
    'hamming_strings',
    'match_locations',
    'estimate_transpositions',
    'matching',
    'jaro',
    'jaro_winkler',
    'jaro_winkler_ext',
    # Registry
    'FINGERPRINT_MEASURES',
    'STRING_MEASURES',
    'get_measure',
    'list_measures',
    # Clustering
    'Bubble',
    'compute_bubbles',
    'drop_empty',
    'representatives',
    'cluster',
    'cluster_indices',
]
