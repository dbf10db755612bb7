"""
Validation Module

Precondition checks shared by the measures, the bubble sampler and the loaders.

Exports:
    - PreconditionError: Raised when inputs violate an operation's contract
    - check_same_length: Equal-length requirement for pairwise measures
    - check_bubble_count: 0 < k <= n requirement for bubble sampling
    - check_binary: 0/1 requirement for fingerprint rows
    - check_min_pts: min_pts >= 2 requirement for density clustering
"""

from .preconditions import (
    PreconditionError,
    check_same_length,
    check_bubble_count,
    check_binary,
    check_min_pts,
)

__all__ = [
    'PreconditionError',
    'check_same_length',
    'check_bubble_count',
    'check_binary',
    'check_min_pts',
]
