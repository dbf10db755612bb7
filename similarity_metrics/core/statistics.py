"""
Sufficient Statistics Engine.

One pass over two equal-length binary fingerprints, classifying every
position pair:

    (1, 1) -> c   set in both
    (1, _) -> a   set only in the first
    (_, 1) -> b   set only in the second
    (_, _) -> ignored

Every fingerprint measure is a closed-form function of (a, b, c, n) and never
revisits the raw vectors.
"""

from typing import NamedTuple, Sequence, Union

import numpy as np

from similarity_metrics.validation import check_binary, check_same_length

Fingerprint = Union[Sequence[int], np.ndarray]


class SufficientStats(NamedTuple):
    """Exclusive bit counts for a fingerprint pair. a + b + c <= n."""
    a: int
    b: int
    c: int


def as_bits(fingerprint: Fingerprint) -> np.ndarray:
    """Boolean view of a fingerprint: True where the bit equals 1."""
    return np.asarray(fingerprint).ravel() == 1


def abc(f1: Fingerprint, f2: Fingerprint) -> SufficientStats:
    """
    Count bits set only in f1 (a), only in f2 (b), and in both (c).

    Args:
        f1: First fingerprint
        f2: Second fingerprint, same length as f1

    Returns:
        SufficientStats(a, b, c)

    Raises:
        PreconditionError: if the fingerprints differ in length or are not
            numeric 0/1 vectors
    """
    check_same_length(f1, f2)
    check_binary(f1)
    check_binary(f2)

    x = as_bits(f1)
    y = as_bits(f2)

    both = x & y
    c = int(np.count_nonzero(both))
    a = int(np.count_nonzero(x)) - c
    b = int(np.count_nonzero(y)) - c

    return SufficientStats(a, b, c)
