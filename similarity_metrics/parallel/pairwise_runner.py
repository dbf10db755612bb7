"""
Parallel All-Pairs Runner

Computes a measure over every pair of fingerprints (or strings) using joblib.
Each task owns a contiguous block of rows and returns only those rows, so
workers never share mutable state; blocks are merged into the full matrix
afterwards.

Measures are symmetric, so each block only evaluates j >= i and the lower
triangle is mirrored during the merge.

Cancellation is cooperative: an optional threading.Event is checked before
every wave of blocks (one block per worker).
"""

import logging
import threading
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np
import polars as pl
from joblib import Parallel, delayed, effective_n_jobs

from similarity_metrics.core.registry import get_measure

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 64

Measure = Union[str, Callable]


class PairwiseCancelled(RuntimeError):
    """Raised when an all-pairs job is cancelled between blocks."""

    def __init__(self, completed_rows: int, total_rows: int):
        self.completed_rows = completed_rows
        self.total_rows = total_rows
        super().__init__(
            f"Pairwise computation cancelled after {completed_rows}/{total_rows} rows"
        )


def _upper_rows(items: Sequence, measure: Callable, start: int, stop: int) -> np.ndarray:
    """Rows start..stop-1 of the pairwise matrix, filled for j >= i only."""
    n = len(items)
    block = np.full((stop - start, n), np.nan)
    for r, i in enumerate(range(start, stop)):
        for j in range(i, n):
            block[r, j] = measure(items[i], items[j])
    return block


def _row_bounds(n: int, batch_size: int) -> List[Tuple[int, int]]:
    return [(start, min(start + batch_size, n)) for start in range(0, n, batch_size)]


def pairwise_matrix(
    items: Sequence,
    measure: Measure,
    n_jobs: int = 1,
    batch_size: int = DEFAULT_BATCH_SIZE,
    cancel: Optional[threading.Event] = None,
) -> np.ndarray:
    """
    Full symmetric matrix of measure(items[i], items[j]).

    Args:
        items: Fingerprints or strings
        measure: Registered measure name or a symmetric callable
        n_jobs: joblib worker count (-1 = all cores)
        batch_size: Rows per task
        cancel: Event checked between waves of tasks

    Returns:
        Float matrix of shape (n, n); NaN wherever the measure is undefined

    Raises:
        PairwiseCancelled: if cancel is set before all rows are computed
    """
    if isinstance(measure, str):
        measure = get_measure(measure)

    items = list(items)
    n = len(items)
    bounds = _row_bounds(n, max(int(batch_size), 1))
    wave = max(effective_n_jobs(n_jobs), 1)

    logger.debug(f"{n} items -> {len(bounds)} blocks, {wave} per wave")

    blocks: List[np.ndarray] = []
    with Parallel(n_jobs=n_jobs) as parallel:
        for w in range(0, len(bounds), wave):
            if cancel is not None and cancel.is_set():
                done = bounds[w - 1][1] if w else 0
                raise PairwiseCancelled(done, n)
            blocks.extend(parallel(
                delayed(_upper_rows)(items, measure, start, stop)
                for start, stop in bounds[w:w + wave]
            ))

    matrix = np.vstack(blocks) if blocks else np.empty((0, 0))
    lower = np.tril_indices(n, k=-1)
    matrix[lower] = matrix.T[lower]
    return matrix


def pairwise_frame(
    items: Sequence,
    measure: Measure,
    n_jobs: int = 1,
    batch_size: int = DEFAULT_BATCH_SIZE,
    cancel: Optional[threading.Event] = None,
) -> pl.DataFrame:
    """
    Every distinct pair (i < j) with its measure value.

    Returns:
        DataFrame with columns i, j, value
    """
    matrix = pairwise_matrix(items, measure, n_jobs=n_jobs, batch_size=batch_size, cancel=cancel)
    i, j = np.triu_indices(matrix.shape[0], k=1)
    return pl.DataFrame({
        'i': i.astype(np.int64),
        'j': j.astype(np.int64),
        'value': matrix[i, j].astype(np.float64),
    })
