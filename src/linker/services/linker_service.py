from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from linker.config import settings
from linker.core.dto import TransactionRecord
from linker.core.errors import DataSourceError, FetchError, InvalidInputError, RateLimitError
from linker.core.models import LinkConfig, LinkResult
from linker.ports.history_port import HistoryPort
from linker.services.graph_builder import build_graph
from linker.services.path_finder import find_paths, validate_endpoints


ProgressFn = Callable[[str, Dict[str, Any]], None]


def _noop(event: str, data: Dict[str, Any]) -> None:
    return None


class LinkerService:
    """
    Finds how two addresses are connected through the accounts that
    co-occur in their recent transactions.

    - History: newest `max_transactions` signatures per address
    - Graph: undirected co-participation, one edge per account pair
    - Search: bounded simple paths, shortest first
    """

    def __init__(self, history: HistoryPort) -> None:
        self.history = history

    def fetch_history(
        self,
        address: str,
        limit: int,
        on_progress: Optional[ProgressFn] = None,
    ) -> List[TransactionRecord]:
        progress = on_progress or _noop
        limit = max(0, min(int(limit), settings.MAX_HISTORY_TRANSACTIONS))

        progress("fetch", {"address": address, "phase": "signatures"})
        signatures: List[str] = []
        seen = set()
        for info in self.history.iter_signatures(address, limit):
            if info.signature in seen:
                continue
            seen.add(info.signature)
            signatures.append(info.signature)
            if len(signatures) >= limit:
                break

        progress("fetch", {"address": address, "phase": "transactions", "total": len(signatures)})
        records: List[TransactionRecord] = []
        for i, sig in enumerate(signatures, start=1):
            try:
                record = self.history.get_transaction(sig)
            except RateLimitError:
                raise
            except DataSourceError as exc:
                # skipped slot or history the node no longer serves
                progress("fetch_skip", {"address": address, "signature": sig, "reason": str(exc)})
                record = None
            # pruned from the node's ledger; nothing to link
            if record is not None:
                records.append(record)
            progress("fetch_progress", {"address": address, "done": i, "total": len(signatures)})

        progress("fetch_done", {"address": address, "signatures": len(signatures), "count": len(records)})
        return records

    def link(self, cfg: LinkConfig, on_progress: Optional[ProgressFn] = None) -> LinkResult:
        progress = on_progress or _noop

        validate_endpoints(cfg.source, cfg.target)
        if cfg.max_depth < 1 or cfg.max_results < 1:
            raise InvalidInputError("max_depth and max_results must be >= 1")

        progress("start", {"source": cfg.source, "target": cfg.target})

        histories: Dict[str, List[TransactionRecord]] = {}
        for address in (cfg.source, cfg.target):
            try:
                histories[address] = self.fetch_history(address, cfg.max_transactions, progress)
            except DataSourceError as exc:
                raise FetchError(address, exc) from exc

        graph = build_graph(
            histories[cfg.source],
            histories[cfg.target],
            seeds=(cfg.source, cfg.target),
            edge_mode=cfg.edge_mode,
            exclude=cfg.exclude,
        )
        progress("build_done", {"nodes": graph.node_count, "edges": graph.edge_count})

        paths = find_paths(graph, cfg.source, cfg.target, cfg.max_depth, cfg.max_results)
        progress("search_done", {"paths": len(paths), "max_depth": cfg.max_depth})

        result = LinkResult(
            source=cfg.source,
            target=cfg.target,
            max_depth=cfg.max_depth,
            paths=paths,
            node_count=graph.node_count,
            edge_count=graph.edge_count,
            fetched={a: len(r) for a, r in histories.items()},
        )
        progress("done", {"nodes": result.node_count, "edges": result.edge_count, "paths": len(paths)})
        return result
