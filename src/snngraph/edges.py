from __future__ import annotations

import numpy as np

from snngraph.models import EdgeList, NeighborList


def directed_pairs(neighbors: NeighborList) -> tuple[np.ndarray, np.ndarray]:
    """Flatten a NeighborList into (source, target) arrays, one per neighbor relation."""
    n_points, k = neighbors.indices.shape
    source = np.repeat(np.arange(n_points, dtype=np.int64), k)
    target = neighbors.indices.reshape(-1).astype(np.int64)
    return source, target


def build_edge_list(neighbors: NeighborList) -> EdgeList:
    """Collapse directed neighbor relations into canonical undirected edges.

    Each edge (u, v) with u < v is weighted by the number of directions in
    which the relation was observed: 1 for one-sided, 2 for mutual neighbors.
    Output is sorted by (u, v).
    """
    n_points = neighbors.n_points
    source, target = directed_pairs(neighbors)
    if source.size == 0:
        return EdgeList.empty()

    u = np.minimum(source, target)
    v = np.maximum(source, target)
    not_loop = u != v
    u, v = u[not_loop], v[not_loop]

    # np.unique sorts the encoded keys, which orders edges by (u, v).
    keys, counts = np.unique(u * n_points + v, return_counts=True)
    return EdgeList(
        u=keys // n_points,
        v=keys % n_points,
        weight=counts.astype(np.int64),
    )
