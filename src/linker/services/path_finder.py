from __future__ import annotations

from collections import deque
from typing import Deque, List, Tuple

from linker.core.errors import InvalidInputError
from linker.core.models import Graph


def validate_endpoints(source: str, target: str) -> None:
    if not source or not target:
        raise InvalidInputError("source and target addresses must be non-empty")
    if source == target:
        raise InvalidInputError(f"source and target are the same address: {source}")


def find_paths(
    graph: Graph,
    source: str,
    target: str,
    max_depth: int,
    max_results: int,
) -> List[List[str]]:
    """
    Enumerate simple paths from ``source`` to ``target``.

    Breadth-first over partial paths, so results come out shortest first;
    equal-length paths follow the graph's neighbor insertion order. A path
    is never longer than ``max_depth`` edges and at most ``max_results``
    paths are returned. An empty list means the two addresses are not
    connected within ``max_depth`` hops.
    """
    validate_endpoints(source, target)
    if max_depth < 1:
        raise InvalidInputError(f"max_depth must be >= 1, got {max_depth}")
    if max_results < 1:
        raise InvalidInputError(f"max_results must be >= 1, got {max_results}")

    paths: List[List[str]] = []
    if source not in graph or target not in graph:
        return paths

    q: Deque[Tuple[str, ...]] = deque([(source,)])

    while q:
        path = q.popleft()
        for nxt in graph.neighbors(path[-1]):
            if nxt in path:
                continue
            extended = path + (nxt,)
            if nxt == target:
                paths.append(list(extended))
                if len(paths) >= max_results:
                    return paths
                continue
            # edges = nodes - 1; only extend while another hop still fits
            if len(extended) - 1 < max_depth:
                q.append(extended)

    return paths
