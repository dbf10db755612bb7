"""
String Alignment Measures.

Computes edit-style distances between character strings:
- l_distance        Levenshtein distance, two rolling rows
- lcs               Length of the longest common subsequence, memoized over (i, j)
- hamming_strings   Positional mismatches between equal-length strings
"""

from typing import Dict, List, Tuple

from similarity_metrics.validation import check_same_length


def l_distance(a: str, b: str) -> int:
    """
    Levenshtein distance between two strings.

    The longer string drives the outer loop so that each row only spans the
    shorter string (linear auxiliary space).

    Args:
        a: First string
        b: Second string

    Returns:
        Minimum number of single-character insertions, deletions and
        substitutions turning a into b
    """
    longer, shorter = (a, b) if len(a) >= len(b) else (b, a)

    if not shorter:
        return len(longer)

    previous = list(range(len(shorter) + 1))
    current = [0] * (len(shorter) + 1)

    for i, ch_longer in enumerate(longer, start=1):
        current[0] = i
        for j, ch_shorter in enumerate(shorter, start=1):
            if ch_longer == ch_shorter:
                current[j] = previous[j - 1]
            else:
                current[j] = 1 + min(
                    previous[j],        # delete
                    current[j - 1],     # insert
                    previous[j - 1],    # substitute
                )
        previous, current = current, previous

    return previous[len(shorter)]


def lcs(a: str, b: str) -> int:
    """
    Length of the longest common subsequence of a and b.

    Top-down evaluation of

        L(i, j) = 0                              if i == 0 or j == 0
                = L(i-1, j-1) + 1                if a[i-1] == b[j-1]
                = max(L(i-1, j), L(i, j-1))      otherwise

    memoized on the prefix lengths (i, j). An explicit stack stands in for
    the call stack so long inputs do not hit the interpreter recursion limit.
    """
    memo: Dict[Tuple[int, int], int] = {}
    stack: List[Tuple[int, int]] = [(len(a), len(b))]

    while stack:
        i, j = stack[-1]
        if (i, j) in memo:
            stack.pop()
            continue
        if i == 0 or j == 0:
            memo[(i, j)] = 0
            stack.pop()
            continue

        if a[i - 1] == b[j - 1]:
            diagonal = (i - 1, j - 1)
            if diagonal in memo:
                memo[(i, j)] = memo[diagonal] + 1
                stack.pop()
            else:
                stack.append(diagonal)
            continue

        up, left = (i - 1, j), (i, j - 1)
        pending = [key for key in (up, left) if key not in memo]
        if pending:
            stack.extend(pending)
        else:
            memo[(i, j)] = max(memo[up], memo[left])
            stack.pop()

    return memo[(len(a), len(b))]


def hamming_strings(a: str, b: str) -> int:
    """
    Number of positions at which two equal-length strings differ.

    Raises:
        PreconditionError: if the strings differ in length
    """
    check_same_length(a, b, what="strings")
    return sum(1 for x, y in zip(a, b) if x != y)
