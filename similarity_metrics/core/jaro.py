"""
Jaro / Jaro-Winkler Engine.

Character-matching string similarity:

    1. Order the pair into (longer, shorter); on equal lengths the first argument
       is longer.
    2. r = max(floor(max(|longer|, |shorter|) / 2) - 1, 0)
    3. Each shorter[i], left to right, claims the first unclaimed equal
       character of longer inside [i - r, i + r].
    4. The claimed longer-indices, in shorter order, are the match locations.
    5. Transpositions are estimated from the rank permutation of the match
       locations and its shifted variants (see estimate_transpositions).

    jaro = (m/|a| + m/|b| + (m - t)/m) / 3      (0 when m == 0)
    jaro_winkler = jaro + l * p * (1 - jaro)

All scores are similarities in [0, 1]: 1 for identical non-empty strings.
"""

from typing import Iterator, List, Optional, Sequence, Tuple


DEFAULT_PREFIX_WEIGHT = 0.1
MAX_PREFIX_WEIGHT = 0.25
MAX_PREFIX_LENGTH = 4


def _order(a: str, b: str) -> Tuple[str, str]:
    return (a, b) if len(a) >= len(b) else (b, a)


def match_radius(a: str, b: str) -> int:
    """Half-width of the matching window."""
    return max(max(len(a), len(b)) // 2 - 1, 0)


def _find_match(ch: str, longer: str, i: int, r: int, claimed: Sequence[bool]) -> Optional[int]:
    """
    Index in longer of the first unclaimed ch within [i - r, i + r].

    When the first candidate is already claimed the search resumes just past
    it, so the window shrinks from the left while indices stay relative to
    the whole of longer.
    """
    offset = max(i - r, 0)
    stop = min(i + r, len(longer) - 1)

    while offset <= stop:
        j = longer.find(ch, offset, stop + 1)
        if j < 0:
            return None
        if not claimed[j]:
            return j
        offset = j + 1

    return None


def match_locations(a: str, b: str) -> List[int]:
    """
    Indices into the longer string matched by each character of the shorter.

    Positions of the shorter string without a match are skipped, so the
    result is ordered by shorter-string position and its length is the number
    of matching characters.
    """
    longer, shorter = _order(a, b)
    r = match_radius(longer, shorter)
    claimed = [False] * len(longer)

    locations = []
    for i, ch in enumerate(shorter):
        j = _find_match(ch, longer, i, r, claimed)
        if j is not None:
            claimed[j] = True
            locations.append(j)

    return locations


def _rank(locations: Sequence[int]) -> List[int]:
    """Replace each location by the number of locations smaller than it."""
    position = {loc: rank for rank, loc in enumerate(sorted(locations))}
    return [position[loc] for loc in locations]


def _shifted(sequence: List[int]) -> Iterator[List[int]]:
    n = len(sequence)
    # forward: k leading zeros, k = 0..n
    for k in range(n + 1):
        yield [0] * k + sequence
    # reverse: drop k leading entries, zero-fill the tail, k = 1..n-1
    for k in range(1, n):
        yield sequence[k:] + [0] * k


def _unmatched(shifted: Sequence[int]) -> int:
    return sum(1 for i, value in enumerate(shifted) if value != i)


def estimate_transpositions(locations: Sequence[int]) -> int:
    """
    Approximate transposition count for a list of match locations.

    The locations are re-ranked into a 0-based permutation. Every forward
    (left zero-padded) and reverse (head-dropped, tail zero-padded) shift of
    that permutation is scored by how many entries differ from their index.
    The estimate is half the best score, rounded half up.

    This is an approximation of the canonical half-swap count and can differ
    from it on some inputs.
    """
    sequence = _rank(locations)
    best = min(_unmatched(shifted) for shifted in _shifted(sequence))
    return (best + 1) // 2


def matching(a: str, b: str) -> Tuple[int, int]:
    """
    Matching characters and estimated transpositions between a and b.

    Returns:
        (n_matching, transpositions)
    """
    locations = match_locations(a, b)
    return len(locations), estimate_transpositions(locations)


def jaro(a: str, b: str) -> float:
    """
    Jaro similarity, in [0, 1].

    0 when no characters match (including either string being empty).
    """
    m, t = matching(a, b)
    if m == 0:
        return 0.0
    return (m / len(a) + m / len(b) + (m - t) / m) / 3.0


def common_prefix_length(a: str, b: str) -> int:
    """Length of the shared leading run of characters."""
    n = 0
    for x, y in zip(a, b):
        if x != y:
            break
        n += 1
    return n


def jaro_winkler(a: str, b: str, p: float = DEFAULT_PREFIX_WEIGHT) -> float:
    """
    Jaro-Winkler similarity, in [0, 1].

    Boosts the Jaro score by the common prefix, counting at most 4
    characters. `p` is the prefix weight; values above 0.25 are capped at
    0.25 so the result cannot exceed 1.
    """
    p = min(p, MAX_PREFIX_WEIGHT)
    score = jaro(a, b)
    prefix = min(common_prefix_length(a, b), MAX_PREFIX_LENGTH)
    return score + prefix * p * (1.0 - score)


def jaro_winkler_ext(
    a: str,
    b: str,
    p: float = DEFAULT_PREFIX_WEIGHT,
    max_l: Optional[int] = None,
) -> float:
    """
    Jaro-Winkler similarity with a configurable prefix length, in [0, 1].

    Args:
        a, b: Strings to compare
        p: Prefix weight (default 0.1)
        max_l: Longest prefix that is rewarded (default: length of the
            shorter string). When max_l * p > 1, p is lowered to 1 / max_l.

    Returns:
        Similarity score
    """
    if max_l is None:
        max_l = min(len(a), len(b))
    if max_l * p > 1.0:
        p = 1.0 / max_l

    score = jaro(a, b)
    prefix = min(common_prefix_length(a, b), max_l)
    return score + prefix * p * (1.0 - score)
