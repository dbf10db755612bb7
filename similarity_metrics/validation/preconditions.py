"""
Precondition Checks

Fail-fast checks for programming errors: mismatched fingerprint lengths,
invalid bubble counts, density thresholds below 2, malformed fingerprint
rows.

Data-dependent degeneracies (all-zero fingerprints, one-point bubbles) are
NOT precondition errors. Those surface as NaN from the measure itself.

Usage:
    from similarity_metrics.validation import check_same_length, PreconditionError

    check_same_length(f1, f2)
"""

from typing import Sized

import numpy as np


class PreconditionError(ValueError):
    """Raised when an operation is called with inputs it cannot accept."""

    def __init__(self, message: str, **context):
        self.context = context
        if context:
            details = ", ".join(f"{k}={v!r}" for k, v in context.items())
            message = f"{message} ({details})"
        super().__init__(message)


def check_same_length(first: Sized, second: Sized, what: str = "fingerprints") -> int:
    """
    Require two sequences to share a length.

    Returns:
        The common length
    """
    n_first, n_second = len(first), len(second)
    if n_first != n_second:
        raise PreconditionError(
            f"Expected {what} to have same length",
            left=n_first,
            right=n_second,
        )
    return n_first


def check_bubble_count(k: int, n_points: int) -> None:
    """Require 0 < k <= n_points."""
    if k <= 0:
        raise PreconditionError("Bubble count must be positive", k=k)
    if k > n_points:
        raise PreconditionError(
            "Bubble count cannot exceed number of points",
            k=k,
            n_points=n_points,
        )


def check_binary(fingerprint) -> None:
    """Require a numeric fingerprint whose entries are all 0 or 1."""
    values = np.asarray(fingerprint)
    if values.dtype.kind not in 'biuf':
        raise PreconditionError(
            "Fingerprint must be a numeric 0/1 vector",
            dtype=str(values.dtype),
        )
    valid = np.isin(values, (0, 1))
    if not valid.all():
        raise PreconditionError(
            "Fingerprint must contain only 0/1 bits",
            offending=np.unique(values[~valid])[:5].tolist(),
        )


def check_min_pts(min_pts: int) -> None:
    """Require a density threshold of at least 2 (a point plus one neighbour)."""
    if min_pts < 2:
        raise PreconditionError("min_pts must be at least 2", min_pts=min_pts)
