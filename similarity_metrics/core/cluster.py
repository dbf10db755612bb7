"""
Clustering Pipeline.

Bubble sampling followed by density clustering on the bubble
representatives:

    points --compute_bubbles--> bubbles --drop_empty--> bubbles
           --representatives--> (n_bubbles, d) matrix
           --OPTICS (dbscan extraction at eps = tolerance)--> labels
           --expand--> original point groups

Representatives labelled as noise (-1) contribute nothing to the output.
Fewer representatives than min_pts means every one is noise and the
result is empty.
Errors raised by scikit-learn are propagated as-is.
"""

import logging
from typing import List

import numpy as np
from sklearn.cluster import OPTICS

from similarity_metrics.core.bubbles import Bubble, RandomState, compute_bubbles, drop_empty
from similarity_metrics.validation import PreconditionError, check_min_pts

logger = logging.getLogger(__name__)

DEFAULT_MIN_PTS = 5


def representatives(bubbles: List[Bubble]) -> np.ndarray:
    """
    Stack bubble representatives into a matrix, one row per bubble.

    Raises:
        PreconditionError: if there are no bubbles to stack
    """
    if not bubbles:
        raise PreconditionError("Representative matrix has no rows (all bubbles empty)")
    return np.vstack([b.rep() for b in bubbles])


def density_labels(rep: np.ndarray, tolerance: float, min_pts: int) -> np.ndarray:
    """
    Density-cluster the representative matrix.

    Args:
        rep: Representative matrix, shape (n_bubbles, d)
        tolerance: Neighbourhood radius
        min_pts: Minimum neighbourhood size (including the point itself), >= 2

    Returns:
        Label per row; -1 marks noise

    Raises:
        PreconditionError: if min_pts < 2
    """
    check_min_pts(min_pts)

    n_rows = rep.shape[0]
    if n_rows < min_pts:
        # no row can be a core point
        logger.debug(f"{n_rows} representatives < min_pts={min_pts}, all noise")
        return np.full(n_rows, -1, dtype=np.int64)

    # dbscan extraction starts a cluster where reachability > eps; the first
    # point's reachability is inf, so eps itself must stay finite
    eps = min(tolerance, np.finfo(np.float64).max)
    model = OPTICS(
        min_samples=min_pts,
        max_eps=tolerance,
        eps=eps,
        metric='euclidean',
        cluster_method='dbscan',
    )
    return model.fit(rep).labels_


def expand(bubbles: List[Bubble], labels: np.ndarray) -> List[np.ndarray]:
    """
    Turn representative labels back into groups of original row indices.

    Returns:
        One sorted index array per cluster label, in label order
    """
    groups = []
    for label in np.unique(labels):
        if label < 0:
            continue
        owners = np.flatnonzero(labels == label)
        groups.append(np.sort(np.concatenate([bubbles[i].indices for i in owners])))
    return groups


def cluster_indices(
    points,
    k: int,
    tolerance: float = np.inf,
    min_pts: int = DEFAULT_MIN_PTS,
    random_state: RandomState = None,
    n_jobs: int = 1,
) -> List[np.ndarray]:
    """
    Cluster points and return the original row indices of each cluster.

    Args:
        points: 2D array-like of shape (n_points, n_features)
        k: Number of bubbles to sample, 0 < k <= n_points
        tolerance: Neighbourhood radius for density clustering
        min_pts: Minimum-points threshold for density clustering, >= 2
        random_state: Seed or Generator for bubble seed sampling
        n_jobs: Workers for nearest-seed assignment

    Returns:
        List of index arrays; unclustered points appear in none of them
    """
    check_min_pts(min_pts)
    bubbles = drop_empty(compute_bubbles(points, k, random_state=random_state, n_jobs=n_jobs))
    rep = representatives(bubbles)

    labels = density_labels(rep, tolerance, min_pts)
    groups = expand(bubbles, labels)

    n_noise = int(np.sum(labels < 0))
    logger.info(
        f"{len(groups)} clusters from {len(bubbles)} bubbles "
        f"({n_noise} noise representatives)"
    )
    return groups


def cluster(
    points,
    k: int,
    tolerance: float = np.inf,
    min_pts: int = DEFAULT_MIN_PTS,
    random_state: RandomState = None,
    n_jobs: int = 1,
) -> List[np.ndarray]:
    """
    Cluster points by bubble sampling + density clustering.

    Same arguments as cluster_indices().

    Returns:
        List of point groups, each an array of original rows
    """
    X = np.asarray(points)
    return [
        X[idx]
        for idx in cluster_indices(
            X, k, tolerance=tolerance, min_pts=min_pts,
            random_state=random_state, n_jobs=n_jobs,
        )
    ]
