from __future__ import annotations

import json
from pathlib import Path
from typing import List

from linker.core.models import LinkResult
from linker.io.schemas import result_to_dict


def format_path(path: List[str]) -> str:
    return " -> ".join(path)


def format_result_lines(result: LinkResult) -> List[str]:
    """
    Console rendering of a link result, one string per line.
    """
    lines = [f"Graph: {result.node_count} nodes, {result.edge_count} edges"]
    if not result.connected:
        lines.append(f"No connection found within {result.max_depth} hops")
        return lines

    lines.append(f"Found {len(result.paths)} path(s) between the addresses:")
    for i, path in enumerate(result.paths, start=1):
        lines.append(f"Path {i} ({len(path) - 1} hop(s)):")
        lines.append(f"  {format_path(path)}")
    return lines


def write_paths_json(result: LinkResult, out_dir: str, filename: str = "paths.json") -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(result_to_dict(result), f, indent=2)

    return str(out_path)


def write_summary_md(result: LinkResult, out_dir: str, filename: str = "summary.md") -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename

    def short(addr: str) -> str:
        return addr if len(addr) <= 14 else f"{addr[:6]}...{addr[-4:]}"

    # how many of the found paths run through each intermediate account
    intermediaries = {}
    for path in result.paths:
        for addr in path[1:-1]:
            intermediaries[addr] = intermediaries.get(addr, 0) + 1
    shared = sorted(intermediaries.items(), key=lambda x: (-x[1], x[0]))[:10]

    lines = []
    lines.append("# Link Summary\n")
    lines.append(f"- Source: **{result.source}**\n")
    lines.append(f"- Target: **{result.target}**\n")
    for addr, count in result.fetched.items():
        lines.append(f"- Transactions fetched for {short(addr)}: **{count}**\n")
    lines.append(f"- Nodes: **{result.node_count}**\n")
    lines.append(f"- Edges: **{result.edge_count}**\n")
    lines.append(f"- Max depth: **{result.max_depth}**\n")
    lines.append("\n")

    lines.append("## Paths\n\n")
    if not result.connected:
        lines.append(f"_No connection found within {result.max_depth} hops._\n\n")
    else:
        lines.append(f"Shortest connection: **{result.shortest_length} hop(s)**\n\n")
        for i, path in enumerate(result.paths, start=1):
            hops = len(path) - 1
            lines.append(f"{i}. ({hops} hop(s)) {' -> '.join(short(a) for a in path)}\n")
        lines.append("\n")

    lines.append("## Most Shared Intermediaries\n\n")
    if not shared:
        lines.append("_No intermediate accounts (direct link or no link)._\n\n")
    else:
        for addr, count in shared:
            lines.append(f"- **{count}/{len(result.paths)} paths** | {addr}\n")
        lines.append("\n")

    lines.append("## Limitations\n\n")
    lines.append("- Edges mean two accounts appeared in the same transaction, not that value moved between them.\n")
    lines.append("- Only the most recent transactions of each address are considered.\n")
    lines.append("- Shared program accounts create shortcuts unless excluded with --exclude-programs.\n")

    with out_path.open("w", encoding="utf-8") as f:
        f.writelines(lines)

    return str(out_path)
