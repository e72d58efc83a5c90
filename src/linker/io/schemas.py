from __future__ import annotations

from typing import Any, Dict

from linker.core.models import LinkResult


def result_to_dict(r: LinkResult) -> Dict[str, Any]:
    return {
        "source": r.source,
        "target": r.target,
        "max_depth": r.max_depth,
        "connected": r.connected,
        "shortest_hops": r.shortest_length,
        "graph": {
            "nodes": r.node_count,
            "edges": r.edge_count,
        },
        "fetched_transactions": dict(r.fetched),
        "paths": [
            {
                "hops": len(p) - 1,
                "addresses": list(p),
            }
            for p in r.paths
        ],
    }
