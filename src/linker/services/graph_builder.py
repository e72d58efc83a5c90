from __future__ import annotations

from itertools import combinations
from typing import AbstractSet, Iterable, Iterator, Sequence, Tuple

from linker.core.dto import TransactionRecord
from linker.core.models import EdgeMode, Graph


def participant_pairs(
    participants: Sequence[str],
    edge_mode: EdgeMode = EdgeMode.ALL_PAIRS,
) -> Iterator[Tuple[str, str]]:
    """
    Yield the undirected pairs a single transaction contributes.

    ALL_PAIRS links every distinct co-participant (a clique per transaction);
    FEE_PAYER links the first account key to each of the others (a star).
    """
    accounts = [a for a in dict.fromkeys(participants) if a]
    if len(accounts) < 2:
        return iter(())
    if edge_mode == EdgeMode.FEE_PAYER:
        payer = accounts[0]
        return ((payer, other) for other in accounts[1:])
    return combinations(accounts, 2)


def build_graph(
    records_a: Iterable[TransactionRecord],
    records_b: Iterable[TransactionRecord],
    seeds: Iterable[str] = (),
    edge_mode: EdgeMode = EdgeMode.ALL_PAIRS,
    exclude: AbstractSet[str] = frozenset(),
) -> Graph:
    graph = Graph()

    # the searched addresses are nodes even when nothing touches them
    seeds = [s for s in seeds if s]
    for s in seeds:
        graph.add_node(s)
    skip = set(exclude).difference(seeds)

    for records in (records_a, records_b):
        for record in records:
            accounts = record.participants
            if skip:
                accounts = [a for a in accounts if a not in skip]
            for a, b in participant_pairs(accounts, edge_mode):
                graph.add_edge(a, b)

    return graph
