from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Optional

from linker.config import settings


class EdgeMode(str, Enum):
    ALL_PAIRS = "all-pairs"     # every co-participant pair of a transaction
    FEE_PAYER = "fee-payer"     # fee payer <-> every other account


# Configuration models

@dataclass(frozen=True)
class LinkConfig:
    """
    User input / run configuration for a link search.
    """

    source: str
    target: str
    max_depth: int = settings.DEFAULT_MAX_DEPTH
    max_results: int = settings.DEFAULT_MAX_RESULTS
    max_transactions: int = settings.DEFAULT_HISTORY_TRANSACTIONS
    edge_mode: EdgeMode = EdgeMode.ALL_PAIRS
    exclude: FrozenSet[str] = frozenset()    # accounts never used as graph nodes


@dataclass(frozen=True)
class RpcConfig:
    endpoint: str
    timeout_sec: float = settings.SOLANA_RPC_TIMEOUT_SEC
    max_retries: int = settings.SOLANA_RPC_MAX_RETRIES
    page_size: int = settings.SOLANA_RPC_PAGE_SIZE
    requests_per_sec: float = settings.SOLANA_RPC_REQUESTS_PER_SEC
    commitment: str = settings.SOLANA_RPC_COMMITMENT

    @classmethod
    def from_settings(cls, endpoint: Optional[str] = None) -> "RpcConfig":
        return cls(endpoint=endpoint or settings.SOLANA_RPC_ENDPOINT)


# Graph model

@dataclass
class Graph:
    """
    Undirected co-participation graph.

    Adjacency sets are dicts with ``None`` values so that neighbor
    iteration follows insertion order and path search stays reproducible.
    """

    adjacency: Dict[str, Dict[str, None]] = field(default_factory=dict)

    def add_node(self, address: str) -> None:
        self.adjacency.setdefault(address, {})

    def add_edge(self, a: str, b: str) -> bool:
        """Insert the edge a-b. Returns False for self-loops and existing edges."""
        if a == b:
            return False
        self.add_node(a)
        self.add_node(b)
        if b in self.adjacency[a]:
            return False
        self.adjacency[a][b] = None
        self.adjacency[b][a] = None
        return True

    def neighbors(self, address: str) -> List[str]:
        return list(self.adjacency.get(address, ()))

    def has_edge(self, a: str, b: str) -> bool:
        return b in self.adjacency.get(a, ())

    @property
    def node_count(self) -> int:
        return len(self.adjacency)

    @property
    def edge_count(self) -> int:
        return sum(len(n) for n in self.adjacency.values()) // 2

    def __contains__(self, address: object) -> bool:
        return address in self.adjacency

    def __iter__(self) -> Iterator[str]:
        return iter(self.adjacency)


# Result model

@dataclass
class LinkResult:

    source: str
    target: str
    max_depth: int
    paths: List[List[str]] = field(default_factory=list)
    node_count: int = 0
    edge_count: int = 0
    fetched: Dict[str, int] = field(default_factory=dict)

    @property
    def connected(self) -> bool:
        return bool(self.paths)

    @property
    def shortest_length(self) -> Optional[int]:
        if not self.paths:
            return None
        return min(len(p) for p in self.paths) - 1
