"""
Loader: line-oriented text inputs.

    load_plain         one string per line
    load_fingerprints  one '0'/'1' fingerprint per line -> (n, n_bits) uint8

Fingerprint generation from chemical structures happens upstream; this only
reads fingerprints that were already written out as bit strings.
"""

from pathlib import Path
from typing import List, Union

import numpy as np

from similarity_metrics.validation import PreconditionError

PathLike = Union[str, Path]


def load_plain(path: PathLike) -> List[str]:
    """Read every line of a text file, without trailing newlines."""
    with open(path, encoding='utf-8') as f:
        return [line.rstrip('\r\n') for line in f]


def parse_fingerprint(line: str) -> np.ndarray:
    """
    Parse a bit string such as '0110 1001' into a uint8 vector.

    Whitespace is ignored.

    Raises:
        PreconditionError: on characters other than 0, 1 and whitespace
    """
    bits = ''.join(line.split())
    bad = set(bits) - {'0', '1'}
    if bad:
        raise PreconditionError("Fingerprint must contain only 0/1 bits", offending=sorted(bad))
    return np.frombuffer(bits.encode('ascii'), dtype=np.uint8) - ord('0')


def load_fingerprints(path: PathLike) -> np.ndarray:
    """
    Read one fingerprint per line; blank lines are skipped.

    Returns:
        uint8 matrix of shape (n_fingerprints, n_bits)

    Raises:
        PreconditionError: on malformed lines or fingerprints of different lengths
    """
    rows = []
    for lineno, line in enumerate(load_plain(path), start=1):
        if not line.strip():
            continue
        try:
            rows.append(parse_fingerprint(line))
        except PreconditionError as e:
            raise PreconditionError(f"{path}:{lineno}: {e}") from e

    if not rows:
        return np.empty((0, 0), dtype=np.uint8)

    lengths = {len(r) for r in rows}
    if len(lengths) > 1:
        raise PreconditionError(
            "Expected fingerprints to have same length",
            path=str(path),
            lengths=sorted(lengths),
        )
    return np.vstack(rows)
