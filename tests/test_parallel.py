from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor

from snngraph.parallel import iter_chunks, map_chunks


def test_iter_chunks_covers_range_without_overlap() -> None:
    assert list(iter_chunks(10, 4)) == [(0, 4), (4, 8), (8, 10)]
    assert list(iter_chunks(0, 4)) == []


def test_map_chunks_keeps_chunk_order_regardless_of_completion() -> None:
    def slow_first(start: int, stop: int) -> list[int]:
        if start == 0:
            time.sleep(0.05)
        return list(range(start, stop))

    with ThreadPoolExecutor(max_workers=4) as pool:
        parts = map_chunks(slow_first, 10, 3, pool)

    assert parts == [[0, 1, 2], [3, 4, 5], [6, 7, 8], [9]]
