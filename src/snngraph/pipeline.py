from __future__ import annotations

from concurrent.futures import Executor, ThreadPoolExecutor

import numpy as np

from snngraph.config import EdgeFile, GraphConfig, InMemory, OutputMode
from snngraph.edges import build_edge_list
from snngraph.graph import assemble
from snngraph.models import EdgeList, GraphHandle, NeighborList
from snngraph.neighbors import as_embedding, check_k, find_neighbors
from snngraph.snn import refine_snn
from snngraph.utils.logging import get_logger

logger = get_logger(__name__)


def _compute_edges(
    data: np.ndarray, config: GraphConfig, executor: Executor | None
) -> tuple[NeighborList, EdgeList]:
    neighbors = find_neighbors(
        data,
        config.k,
        config.eps,
        executor=executor,
        chunk_size=config.chunk_size,
    )
    edges = build_edge_list(neighbors)
    logger.info("KNN graph has %d edges", len(edges))

    if config.snn:
        edges = refine_snn(
            edges,
            data.shape[0],
            config.snn_prune,
            scope=config.snn_scope,
            executor=executor,
            chunk_size=config.chunk_size,
        )
    return neighbors, edges


def build_graph(
    embedding: object,
    config: GraphConfig | None = None,
    output: OutputMode | None = None,
    executor: Executor | None = None,
) -> GraphHandle:
    """Build a KNN (or SNN) graph over the rows of an embedding.

    Stages run strictly in order: neighbor search, edge list, optional SNN
    refinement, assembly. Any failure aborts the build; no partial graph is
    returned. When no executor is given and config.n_workers > 1, a thread
    pool is created for the duration of the build.
    """
    config = config if config is not None else GraphConfig()
    output = output if output is not None else InMemory()

    check_k(config.k)
    if isinstance(output, EdgeFile):
        output.prepare()
    data = as_embedding(embedding)

    if executor is None and config.n_workers > 1:
        with ThreadPoolExecutor(max_workers=config.n_workers) as pool:
            neighbors, edges = _compute_edges(data, config, pool)
    else:
        neighbors, edges = _compute_edges(data, config, executor)

    return assemble(
        edges,
        data.shape[0],
        k=neighbors.k,
        snn=config.snn,
        snn_prune=config.snn_prune,
        output=output,
        advisories=neighbors.advisories,
    )
