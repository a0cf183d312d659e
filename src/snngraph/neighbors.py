from __future__ import annotations

import numbers
from concurrent.futures import Executor
from functools import partial

import numpy as np
from scipy.spatial import KDTree

from snngraph.config import RECOMMENDED_K_RANGE
from snngraph.errors import ConfigurationError, SearchFailure
from snngraph.models import NeighborList
from snngraph.parallel import map_chunks
from snngraph.utils.logging import get_logger

logger = get_logger(__name__)

# Relative slack when re-collecting equidistant points around the k-th distance.
_TIE_RADIUS_SLACK = 1e-9


def check_k(k: object) -> int:
    """Validate that k is a positive integer and return it as int."""
    if isinstance(k, bool) or not isinstance(k, numbers.Real):
        raise ConfigurationError("k must be an integer")
    if not isinstance(k, numbers.Integral):
        if not float(k).is_integer():
            raise ConfigurationError("k must be an integer")
    value = int(k)
    if value < 1:
        raise ConfigurationError("k must be a positive integer")
    return value


def resolve_k(k: int, n_points: int) -> tuple[int, list[str]]:
    """Clamp k to n_points - 1 and collect advisories about its value."""
    advisories: list[str] = []
    if n_points <= k:
        advisories.append(
            f"k={k} is not smaller than the number of points ({n_points}); using k={n_points - 1}"
        )
        k = n_points - 1
    low, high = RECOMMENDED_K_RANGE
    if k < low or k > high:
        advisories.append(f"k={k} is outside the recommended range [{low}, {high}]")
    return k, advisories


def as_embedding(embedding: object) -> np.ndarray:
    """Coerce input to a finite 2-D float matrix with at least two rows."""
    try:
        data = np.asarray(embedding, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise SearchFailure(f"Embedding is not numeric: {exc}") from exc
    if data.ndim != 2:
        raise SearchFailure(f"Embedding must be a 2-D matrix, got {data.ndim} dimension(s)")
    if data.shape[0] < 2:
        raise SearchFailure("Embedding needs at least two points to search for neighbors")
    if data.shape[1] < 1:
        raise SearchFailure("Embedding has no dimensions")
    if not np.isfinite(data).all():
        raise SearchFailure("Embedding contains NaN or infinite values")
    return data


def _break_boundary_tie(
    tree: KDTree, data: np.ndarray, point: int, radius: float, k: int
) -> tuple[np.ndarray, np.ndarray]:
    """Pick the k nearest among all points within radius, lowest index first on ties."""
    found = tree.query_ball_point(data[point], radius * (1 + _TIE_RADIUS_SLACK))
    members = np.asarray(found, dtype=np.int64)
    members = members[members != point]
    dists = np.linalg.norm(data[members] - data[point], axis=1)
    order = np.lexsort((members, dists))[:k]
    return members[order], dists[order]


def _search_rows(
    tree: KDTree, data: np.ndarray, start: int, stop: int, k: int, eps: float
) -> tuple[np.ndarray, np.ndarray]:
    n_points = data.shape[0]
    n_query = min(k + 2, n_points)
    dist, idx = tree.query(data[start:stop], k=n_query, eps=eps)
    rows = np.arange(start, stop)

    # Drop the point itself; if duplicates pushed it out, drop the farthest instead.
    drop = idx == rows[:, None]
    drop[~drop.any(axis=1), -1] = True
    keep = ~drop
    width = n_query - 1
    idx = idx[keep].reshape(len(rows), width).astype(np.int64)
    dist = dist[keep].reshape(len(rows), width)

    order = np.lexsort((idx, dist))
    idx = np.take_along_axis(idx, order, axis=1)
    dist = np.take_along_axis(dist, order, axis=1)

    out_idx = idx[:, :k].copy()
    out_dist = dist[:, :k].copy()
    if width > k:
        tied = np.flatnonzero(dist[:, k] <= dist[:, k - 1])
        for r in tied:
            radius = float(dist[r, k - 1])
            out_idx[r], out_dist[r] = _break_boundary_tie(tree, data, int(rows[r]), radius, k)
    return out_idx, out_dist


def find_neighbors(
    embedding: object,
    k: int,
    eps: float = 0.0,
    *,
    executor: Executor | None = None,
    chunk_size: int = 4096,
) -> NeighborList:
    """Find the k nearest other points of every point by Euclidean distance.

    eps > 0 allows approximate neighbors within a (1 + eps) factor of the true
    k-th distance. Points are searched in chunks of chunk_size rows, on the
    executor when one is given.
    """
    k = check_k(k)
    if eps < 0:
        raise ConfigurationError("eps must be >= 0")
    data = as_embedding(embedding)

    k, advisories = resolve_k(k, data.shape[0])
    for message in advisories:
        logger.warning(message)

    logger.info("Computing %d nearest neighbors for %d points", k, data.shape[0])
    try:
        tree = KDTree(data)
        parts = map_chunks(
            partial(_search_rows, tree, data, k=k, eps=eps),
            data.shape[0],
            chunk_size,
            executor,
        )
    except (ValueError, TypeError, RuntimeError, MemoryError) as exc:
        raise SearchFailure(f"Nearest-neighbor search failed: {exc}") from exc

    indices = np.concatenate([part[0] for part in parts], axis=0)
    distances = np.concatenate([part[1] for part in parts], axis=0)
    return NeighborList(indices=indices, distances=distances, k=k, advisories=advisories)
