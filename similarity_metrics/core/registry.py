"""
Measure Registry - name lookup for every pairwise measure.

Lets the pairwise runner, the config layer and the CLI refer to measures by
name instead of importing them.
"""

from typing import Callable, Dict, List

from similarity_metrics.core.jaro import jaro, jaro_winkler, jaro_winkler_ext
from similarity_metrics.core.measures import (
    tanimoto, dice, cosine, russell_rao, forbes, soergel, euclidean, hamming,
)
from similarity_metrics.core.strings import l_distance, lcs, hamming_strings


FINGERPRINT_MEASURES: Dict[str, Callable] = {
    'tanimoto': tanimoto,
    'dice': dice,
    'cosine': cosine,
    'russell_rao': russell_rao,
    'forbes': forbes,
    'soergel': soergel,
    'euclidean': euclidean,
    'hamming': hamming,
}

STRING_MEASURES: Dict[str, Callable] = {
    'levenshtein': l_distance,
    'lcs': lcs,
    'hamming_strings': hamming_strings,
    'jaro': jaro,
    'jaro_winkler': jaro_winkler,
    'jaro_winkler_ext': jaro_winkler_ext,
}


def list_measures() -> List[str]:
    """All registered measure names."""
    return sorted({**FINGERPRINT_MEASURES, **STRING_MEASURES})


def get_measure(name: str) -> Callable:
    """
    Look up a measure by name.

    Raises:
        KeyError: if no measure is registered under `name`
    """
    if name in FINGERPRINT_MEASURES:
        return FINGERPRINT_MEASURES[name]
    if name in STRING_MEASURES:
        return STRING_MEASURES[name]
    available = ", ".join(list_measures())
    raise KeyError(f"Unknown measure: '{name}'. Available: {available}")


def is_string_measure(name: str) -> bool:
    return name in STRING_MEASURES
