from __future__ import annotations

import argparse
import datetime as dt
import re
import sys
import time

from linker.config import settings
from linker.core.errors import InvalidInputError, LinkerError
from linker.core.models import EdgeMode, LinkConfig, RpcConfig
from linker.services.linker_service import LinkerService
from linker.io.output_writer import format_result_lines, write_paths_json, write_summary_md

from linker.adapters.chain.solana_rpc_adapter import SolanaRpcAdapter
from linker.adapters.chain.static_history_adapter import StaticHistoryAdapter


# base-58 alphabet (no 0, O, I, l); 32-byte keys encode to 32..44 chars
_PUBKEY_RE = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")


def looks_like_pubkey(address: str) -> bool:
    return bool(_PUBKEY_RE.match(address or ""))


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="wallet-linker", description="Find how two Solana addresses are connected")
    p.add_argument("address1", help="Source address")
    p.add_argument("address2", help="Target address")
    p.add_argument("--max-depth", type=int, default=settings.DEFAULT_MAX_DEPTH, help="Maximum hops per path")
    p.add_argument("--max-results", type=int, default=settings.DEFAULT_MAX_RESULTS, help="Maximum number of paths to report")
    p.add_argument("--max-transactions", type=int, default=settings.DEFAULT_HISTORY_TRANSACTIONS,
                   help=f"Recent transactions to fetch per address (max {settings.MAX_HISTORY_TRANSACTIONS})")
    p.add_argument("--edge-mode", choices=[m.value for m in EdgeMode], default=EdgeMode.ALL_PAIRS.value,
                   help="all-pairs: link every co-participant; fee-payer: link the fee payer to each account")
    p.add_argument("--exclude-programs", action="store_true", help="Do not route paths through well-known program accounts")
    p.add_argument("--endpoint", help="JSON-RPC endpoint (default: $SOLANA_RPC_ENDPOINT or mainnet-beta)")
    p.add_argument("--static", metavar="FILE", help="Read transactions from a JSON fixture instead of RPC (dev/testing)")
    p.add_argument("--out", help="Also write paths.json and summary.md to this folder")
    return p


def _make_progress_reporter(cfg: LinkConfig):
    start_time = time.time()
    last_print = 0.0
    is_tty = sys.stdout.isatty()

    def _short_addr(addr: str) -> str:
        if not addr:
            return ""
        if len(addr) <= 12:
            return addr
        return f"{addr[:6]}...{addr[-4:]}"

    def _ts() -> str:
        return dt.datetime.now().strftime("%H:%M:%S")

    def _print_line(message: str) -> None:
        if is_tty:
            sys.stdout.write("\r" + message.ljust(88))
            sys.stdout.flush()
        else:
            print(message)

    def _clear_line() -> None:
        if is_tty:
            sys.stdout.write("\r" + (" " * 88) + "\r")
            sys.stdout.flush()

    def progress(event: str, data: dict) -> None:
        nonlocal last_print
        now = time.time()
        if event == "start":
            print(f"[{_ts()}] Linking {cfg.source} -> {cfg.target} • depth {cfg.max_depth}")
            return
        if event == "fetch":
            addr = _short_addr(str(data.get("address", "")))
            phase = data.get("phase", "history")
            total = data.get("total")
            suffix = f" ({total})" if total is not None else ""
            _print_line(f"Fetching {phase} for {addr}{suffix}...")
            last_print = now
            return
        if event == "fetch_progress":
            done, total = data["done"], data["total"]
            if not is_tty and done % 100 != 0:
                return
            if is_tty and now - last_print < 0.2 and done != total:
                return
            _print_line(f"Processed {done}/{total} transactions for {_short_addr(data['address'])}")
            last_print = now
            return
        if event == "fetch_done":
            _clear_line()
            print(f"[{_ts()}] Fetched {data.get('count', 0)} transactions for address {data['address']}")
            return
        if event == "fetch_skip":
            _clear_line()
            print(f"[{_ts()}] Skipped {data['signature']}: {data.get('reason', 'unavailable')}")
            return
        if event == "build_done":
            print(f"[{_ts()}] Built graph: {data['nodes']} nodes • {data['edges']} edges")
            return
        if event == "done":
            elapsed = time.time() - start_time
            print(f"[{_ts()}] Done in {elapsed:.1f}s • {data['paths']} path(s)")
            return
        if event == "error":
            _clear_line()
            print(f"[{_ts()}] Error: {data.get('message', 'Unknown error')}", file=sys.stderr)

    return progress


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)

    exclude = frozenset(settings.KNOWN_PROGRAM_ACCOUNTS) if args.exclude_programs else frozenset()
    cfg = LinkConfig(
        source=args.address1,
        target=args.address2,
        max_depth=args.max_depth,
        max_results=args.max_results,
        max_transactions=args.max_transactions,
        edge_mode=EdgeMode(args.edge_mode),
        exclude=exclude,
    )
    progress = _make_progress_reporter(cfg)

    for addr in (cfg.source, cfg.target):
        if not looks_like_pubkey(addr):
            progress("error", {"message": f"Invalid address provided: {addr!r}"})
            return 2

    try:
        # Ports
        if args.static:
            history = StaticHistoryAdapter.from_json(args.static)
            adapter_label = f"StaticHistoryAdapter ({args.static})"
        else:
            rpc = RpcConfig.from_settings(endpoint=args.endpoint)
            history = SolanaRpcAdapter(rpc)
            adapter_label = f"SolanaRpcAdapter ({rpc.endpoint})"

        svc = LinkerService(history=history)
        print(f"Adapter: {adapter_label}")
        result = svc.link(cfg, on_progress=progress)
    except InvalidInputError as exc:
        progress("error", {"message": str(exc)})
        return 2
    except LinkerError as exc:
        progress("error", {"message": f"{exc.__class__.__name__}: {exc}"})
        return 1

    for line in format_result_lines(result):
        print(line)

    if args.out:
        print(f"Wrote: {write_paths_json(result, args.out)}")
        print(f"Wrote: {write_summary_md(result, args.out)}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
