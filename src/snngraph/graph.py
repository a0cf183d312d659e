from __future__ import annotations

import numpy as np
from scipy.sparse import coo_matrix, csr_matrix

from snngraph.config import EdgeFile, InMemory, OutputMode
from snngraph.io.writers import write_edge_file
from snngraph.models import EdgeList, GraphHandle, GraphStats
from snngraph.utils.logging import get_logger

logger = get_logger(__name__)


def to_adjacency(edges: EdgeList, n_nodes: int) -> csr_matrix:
    """Build the symmetric N x N sparse adjacency matrix for an edge list."""
    rows = np.concatenate([edges.u, edges.v])
    cols = np.concatenate([edges.v, edges.u])
    data = np.concatenate([edges.weight, edges.weight])
    return coo_matrix((data, (rows, cols)), shape=(n_nodes, n_nodes), dtype=edges.weight.dtype).tocsr()


def assemble(
    edges: EdgeList,
    n_nodes: int,
    *,
    k: int,
    snn: bool,
    snn_prune: float,
    output: OutputMode | None = None,
    advisories: list[str] | None = None,
) -> GraphHandle:
    """Materialize the final graph as a matrix or an edge file and wrap it in a GraphHandle."""
    output = output if output is not None else InMemory()
    meta = {
        "k": k,
        "snn": snn,
        "snn_prune": snn_prune,
        "n_nodes": n_nodes,
        "n_edges": len(edges),
        "advisories": list(advisories or []),
    }

    if isinstance(output, EdgeFile):
        logger.info("Writing %d edges to %s", len(edges), output.path)
        write_edge_file(edges, output.path)
        return GraphHandle(path=output.path, **meta)

    return GraphHandle(matrix=to_adjacency(edges, n_nodes), **meta)


def graph_stats(edges: EdgeList, n_nodes: int | None = None) -> GraphStats:
    """Degree and weight summary of an edge list.

    n_nodes defaults to the largest node index seen plus one.
    """
    if n_nodes is None:
        n_nodes = int(max(edges.u.max(initial=-1), edges.v.max(initial=-1))) + 1
    elif len(edges) and max(int(edges.u.max()), int(edges.v.max())) >= n_nodes:
        raise ValueError(f"Edge list references nodes beyond n_nodes={n_nodes}")
    degree = np.bincount(np.concatenate([edges.u, edges.v]), minlength=n_nodes)
    has_edges = len(edges) > 0
    return GraphStats(
        n_nodes=n_nodes,
        n_edges=len(edges),
        n_isolated=int((degree == 0).sum()),
        mean_degree=float(degree.mean()) if n_nodes > 0 else 0.0,
        max_degree=int(degree.max(initial=0)),
        min_weight=float(edges.weight.min()) if has_edges else None,
        max_weight=float(edges.weight.max()) if has_edges else None,
        mean_weight=float(edges.weight.mean()) if has_edges else None,
    )
