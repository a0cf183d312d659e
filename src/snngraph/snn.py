from __future__ import annotations

from concurrent.futures import Executor
from functools import partial

import numpy as np
from scipy.sparse import coo_matrix, csr_matrix

from snngraph.config import SimilarityScope
from snngraph.errors import ConfigurationError
from snngraph.models import EdgeList
from snngraph.parallel import map_chunks
from snngraph.utils.logging import get_logger

logger = get_logger(__name__)

_Scored = tuple[np.ndarray, np.ndarray, np.ndarray]


def closed_adjacency(edges: EdgeList, n_nodes: int) -> csr_matrix:
    """Binary adjacency with self-loops, so row v is the closed neighborhood of v."""
    diagonal = np.arange(n_nodes, dtype=np.int64)
    rows = np.concatenate([edges.u, edges.v, diagonal])
    cols = np.concatenate([edges.v, edges.u, diagonal])
    data = np.ones(rows.shape[0], dtype=np.int32)
    closed = coo_matrix((data, (rows, cols)), shape=(n_nodes, n_nodes)).tocsr()
    closed.data[:] = 1
    return closed


def _score_edges(
    closed: csr_matrix, sizes: np.ndarray, u: np.ndarray, v: np.ndarray, start: int, stop: int
) -> _Scored:
    cu, cv = u[start:stop], v[start:stop]
    shared = np.asarray(closed[cu].multiply(closed[cv]).sum(axis=1)).ravel()
    union = sizes[cu] + sizes[cv] - shared
    return cu, cv, shared / union


def _score_overlapping_pairs(closed: csr_matrix, sizes: np.ndarray, start: int, stop: int) -> _Scored:
    shared = (closed[start:stop] @ closed.T).tocoo()
    rows = shared.row.astype(np.int64) + start
    cols = shared.col.astype(np.int64)
    upper = cols > rows
    rows, cols = rows[upper], cols[upper]
    overlap = shared.data[upper].astype(np.int64)
    union = sizes[rows] + sizes[cols] - overlap
    return rows, cols, overlap / union


def jaccard_scores(
    edges: EdgeList,
    n_nodes: int,
    *,
    scope: SimilarityScope = "edges",
    executor: Executor | None = None,
    chunk_size: int = 4096,
) -> EdgeList:
    """Jaccard similarity of closed neighborhoods for candidate node pairs.

    scope="edges" scores only the pairs already connected by an edge.
    scope="all" scores every pair whose closed neighborhoods overlap.
    """
    closed = closed_adjacency(edges, n_nodes)
    sizes = np.diff(closed.indptr).astype(np.int64)

    if scope == "edges":
        parts = map_chunks(
            partial(_score_edges, closed, sizes, edges.u, edges.v),
            len(edges),
            chunk_size,
            executor,
        )
    elif scope == "all":
        parts = map_chunks(
            partial(_score_overlapping_pairs, closed, sizes),
            n_nodes,
            chunk_size,
            executor,
        )
    else:
        raise ConfigurationError(f"Unsupported similarity scope: {scope}")

    if not parts:
        return EdgeList.empty(dtype=np.float64)
    scored = EdgeList(
        u=np.concatenate([p[0] for p in parts]),
        v=np.concatenate([p[1] for p in parts]),
        weight=np.concatenate([p[2] for p in parts]).astype(np.float64),
    )
    return scored.sorted()


def prune_edges(edges: EdgeList, threshold: float) -> EdgeList:
    """Keep edges whose weight is at least threshold (inclusive)."""
    keep = edges.weight >= threshold
    return EdgeList(u=edges.u[keep], v=edges.v[keep], weight=edges.weight[keep])


def refine_snn(
    edges: EdgeList,
    n_nodes: int,
    prune: float,
    *,
    scope: SimilarityScope = "edges",
    executor: Executor | None = None,
    chunk_size: int = 4096,
) -> EdgeList:
    """Re-weight a KNN graph by shared-neighbor overlap and drop weak edges.

    Input weights are ignored; only the topology of edges is used.
    """
    if not 0.0 <= prune <= 1.0:
        raise ConfigurationError("snn_prune must be within [0, 1]")

    logger.info("Converting KNN graph into SNN graph (%s scope)", scope)
    scored = jaccard_scores(edges, n_nodes, scope=scope, executor=executor, chunk_size=chunk_size)
    refined = prune_edges(scored, prune)
    logger.info(
        "SNN pruning kept %d of %d candidate pairs (threshold %.4g)",
        len(refined),
        len(scored),
        prune,
    )
    return refined
