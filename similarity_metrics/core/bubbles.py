"""
Bubble Sampler.

Compresses a large point set into k local groups ("bubbles") before density
clustering:

    1. Draw k distinct seed points uniformly at random (no replacement).
    2. Assign every point, seeds included, to its nearest seed under
       Euclidean distance. Ties go to the seed drawn first.

Assignment is a map over points against a fixed, read-only seed matrix, so
the points are split into chunks that are assigned independently and the
per-bubble memberships are merged afterwards.

A seed whose every point is closer to some other seed (duplicate points)
yields an empty bubble; drop_empty() removes those before clustering.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

import numpy as np
from scipy.spatial.distance import cdist

from similarity_metrics.validation import PreconditionError, check_bubble_count

logger = logging.getLogger(__name__)

RandomState = Optional[Union[int, np.random.Generator]]

DEFAULT_CHUNK_SIZE = 4096


@dataclass(eq=False)
class Bubble:
    """
    Points owned by one seed.

    Attributes:
        indices: Row indices of the members in the original point matrix
        points: Member rows, shape (n, d)
    """
    indices: np.ndarray
    points: np.ndarray

    @property
    def n(self) -> int:
        return int(self.points.shape[0])

    @property
    def d(self) -> int:
        return int(self.points.shape[1])

    @property
    def is_empty(self) -> bool:
        return self.n == 0

    def rep(self) -> np.ndarray:
        """Representative: coordinate-wise mean of the members."""
        if self.is_empty:
            return np.full(self.d, np.nan)
        return self.points.astype(np.float64).mean(axis=0)

    def extent(self) -> float:
        """
        Root-mean-square distance over ordered pairs of distinct members.

        sqrt( sum_{i != j} ||x_i - x_j||^2 / (n (n - 1)) ), computed through
        sum_{i,j} ||x_i - x_j||^2 = 2n * sum ||x_i||^2 - 2 ||sum x_i||^2.
        NaN for bubbles with fewer than two members.
        """
        n = self.n
        if n < 2:
            return np.nan

        X = self.points.astype(np.float64)
        total = X.sum(axis=0)
        pair_sum = 2.0 * n * float(np.sum(X * X)) - 2.0 * float(total @ total)
        return float(np.sqrt(max(pair_sum, 0.0) / (n * (n - 1))))

    def nn_dist(self, k: int) -> float:
        """Expected k-nearest-neighbour distance, (k / n) ** (1 / d)."""
        if self.n == 0 or self.d == 0:
            return np.nan
        return float((k / self.n) ** (1.0 / self.d))


def _assign_chunk(chunk: np.ndarray, seeds: np.ndarray) -> np.ndarray:
    """Nearest-seed label for every row of chunk (first seed wins ties)."""
    distances = cdist(chunk, seeds, metric='euclidean')
    return np.argmin(distances, axis=1)


def assign_to_seeds(
    X: np.ndarray,
    seeds: np.ndarray,
    n_jobs: int = 1,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> np.ndarray:
    """
    Label every row of X with the index of its nearest seed.

    Args:
        X: Points, shape (n, d)
        seeds: Seed points, shape (k, d)
        n_jobs: Worker count; 1 runs in-process
        chunk_size: Rows per independently assigned chunk

    Returns:
        Integer labels of shape (n,)
    """
    n = X.shape[0]
    bounds = [(start, min(start + chunk_size, n)) for start in range(0, n, chunk_size)]

    if n_jobs == 1 or len(bounds) <= 1:
        parts = [_assign_chunk(X[start:stop], seeds) for start, stop in bounds]
    else:
        from joblib import Parallel, delayed

        logger.debug(f"Assigning {n:,} points in {len(bounds)} chunks on {n_jobs} workers")
        parts = Parallel(n_jobs=n_jobs)(
            delayed(_assign_chunk)(X[start:stop], seeds)
            for start, stop in bounds
        )

    if not parts:
        return np.empty(0, dtype=np.intp)
    return np.concatenate(parts)


def compute_bubbles(
    points,
    k: int,
    random_state: RandomState = None,
    n_jobs: int = 1,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> List[Bubble]:
    """
    Partition points into k nearest-seed bubbles.

    Args:
        points: 2D array-like of shape (n_points, n_features)
        k: Number of seeds, 0 < k <= n_points
        random_state: Seed or Generator for seed sampling
        n_jobs: Workers for nearest-seed assignment
        chunk_size: Rows per assignment chunk

    Returns:
        k bubbles in seed-draw order. Some may be empty.

    Raises:
        PreconditionError: on non-2D input or k outside (0, n_points]
    """
    X = np.asarray(points)
    if X.ndim != 2:
        raise PreconditionError("Points must be a 2D matrix", ndim=X.ndim)

    n = X.shape[0]
    check_bubble_count(k, n)

    rng = np.random.default_rng(random_state)
    seed_idx = rng.choice(n, size=k, replace=False)

    Xf = X.astype(np.float64, copy=False)
    labels = assign_to_seeds(Xf, Xf[seed_idx], n_jobs=n_jobs, chunk_size=chunk_size)

    # merge: stable sort keeps original row order inside each bubble
    order = np.argsort(labels, kind='stable')
    counts = np.bincount(labels, minlength=k)
    members = np.split(order, np.cumsum(counts)[:-1])

    bubbles = [Bubble(indices=idx, points=X[idx]) for idx in members]
    logger.debug(f"Sampled {k} bubbles over {n:,} points")
    return bubbles


def drop_empty(bubbles: List[Bubble]) -> List[Bubble]:
    """Remove bubbles that own no points."""
    kept = [b for b in bubbles if not b.is_empty]
    dropped = len(bubbles) - len(kept)
    if dropped:
        logger.info(f"Dropped {dropped} empty bubbles ({len(kept)} remain)")
    return kept
