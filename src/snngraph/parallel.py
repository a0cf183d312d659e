from __future__ import annotations

from collections.abc import Callable, Iterator
from concurrent.futures import Executor
from typing import TypeVar

T = TypeVar("T")


def iter_chunks(n_items: int, chunk_size: int) -> Iterator[tuple[int, int]]:
    """Yield half-open (start, stop) ranges covering range(n_items)."""
    for start in range(0, n_items, chunk_size):
        yield start, min(start + chunk_size, n_items)


def map_chunks(
    func: Callable[[int, int], T],
    n_items: int,
    chunk_size: int,
    executor: Executor | None = None,
) -> list[T]:
    """Apply func to every chunk range, returning results in chunk order.

    Worker completion order never affects the output: Executor.map yields in
    submission order, so callers can concatenate the parts directly.
    """
    ranges = list(iter_chunks(n_items, chunk_size))
    if executor is None or len(ranges) <= 1:
        return [func(start, stop) for start, stop in ranges]
    starts = [start for start, _ in ranges]
    stops = [stop for _, stop in ranges]
    return list(executor.map(func, starts, stops))
