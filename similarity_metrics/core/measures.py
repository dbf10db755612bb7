"""
Fingerprint Measures (similarity and distance)

Eight closed-form measures over the sufficient statistics (a, b, c, n) of a
fingerprint pair. The textbook formulas are written over the per-fingerprint
set-bit totals A = a + c and B = b + c:

    tanimoto     c / (A + B - c)            similarity in [0, 1]
    dice         2c / (A + B)               similarity in [0, 1]
    cosine       c / sqrt(A * B)            similarity in [0, 1]
    russell_rao  c / n                      similarity in [0, 1]
    forbes       c * n / (A * B)            similarity >= 0
    soergel      (A + B - 2c) / (A + B - c) distance in [0, 1]
    euclidean    sqrt(A + B - 2c)           distance >= 0
    hamming      A + B - 2c                 integer distance >= 0

Zero denominators (e.g. two all-zero fingerprints) return NaN. No clamping.
"""

import math

import numpy as np

from similarity_metrics.core.statistics import Fingerprint, abc


def _ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or NaN when the denominator is zero."""
    if denominator == 0:
        return np.nan
    return float(numerator) / float(denominator)


def tanimoto(f1: Fingerprint, f2: Fingerprint) -> float:
    """
    Tanimoto (Jaccard) similarity.

    Parameters
    ----------
    f1, f2 : array-like of {0, 1}
        Fingerprints of equal length

    Returns
    -------
    float
        Similarity in [0, 1]; NaN when neither fingerprint has a set bit
    """
    a, b, c = abc(f1, f2)
    return _ratio(c, a + b + c)


def dice(f1: Fingerprint, f2: Fingerprint) -> float:
    """
    Dice similarity.

    Parameters
    ----------
    f1, f2 : array-like of {0, 1}
        Fingerprints of equal length

    Returns
    -------
    float
        Similarity in [0, 1]; NaN when neither fingerprint has a set bit
    """
    a, b, c = abc(f1, f2)
    return _ratio(2 * c, a + b + 2 * c)


def cosine(f1: Fingerprint, f2: Fingerprint) -> float:
    """
    Cosine (Ochiai) similarity.

    Returns
    -------
    float
        Similarity in [0, 1]; NaN when either fingerprint is all zeros
    """
    a, b, c = abc(f1, f2)
    return _ratio(c, math.sqrt((a + c) * (b + c)))


def russell_rao(f1: Fingerprint, f2: Fingerprint) -> float:
    """
    Russell-Rao similarity: shared bits over fingerprint length.

    Returns
    -------
    float
        Similarity in [0, 1]; NaN for zero-length fingerprints
    """
    _, _, c = abc(f1, f2)
    return _ratio(c, len(f1))


def forbes(f1: Fingerprint, f2: Fingerprint) -> float:
    """
    Forbes similarity.

    Returns
    -------
    float
        Similarity >= 0 (unbounded above); NaN when either fingerprint is all zeros
    """
    a, b, c = abc(f1, f2)
    return _ratio(c * len(f1), (a + c) * (b + c))


def soergel(f1: Fingerprint, f2: Fingerprint) -> float:
    """
    Soergel distance, the complement of Tanimoto.

    Returns
    -------
    float
        Distance in [0, 1]; NaN when neither fingerprint has a set bit
    """
    a, b, c = abc(f1, f2)
    return _ratio(a + b, a + b + c)


def euclidean(f1: Fingerprint, f2: Fingerprint) -> float:
    """
    Euclidean distance between binary fingerprints.

    Returns
    -------
    float
        sqrt of the number of differing bits
    """
    a, b, _ = abc(f1, f2)
    return math.sqrt(a + b)


def hamming(f1: Fingerprint, f2: Fingerprint) -> int:
    """
    Hamming distance between binary fingerprints.

    Returns
    -------
    int
        Number of differing bits
    """
    a, b, _ = abc(f1, f2)
    return a + b
