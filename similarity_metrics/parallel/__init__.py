"""
Parallel Runners.

joblib fan-out for long all-pairs jobs.
"""

from .pairwise_runner import pairwise_matrix, pairwise_frame, PairwiseCancelled

__all__ = [
    'pairwise_matrix',
    'pairwise_frame',
    'PairwiseCancelled',
]
