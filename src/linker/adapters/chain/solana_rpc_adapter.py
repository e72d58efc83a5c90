from typing import Any, Dict, Iterable, List, Optional
import requests

from linker.adapters.chain.rate_limiter import RequestPacer, backoff_sleep
from linker.core.errors import DataSourceError, RateLimitError
from linker.core.models import RpcConfig
from linker.ports.history_port import HistoryPort
from linker.core.dto import SignatureInfo, TransactionRecord


# JSON-RPC error codes the node uses for throttling / transient overload
_RETRYABLE_RPC_CODES = {429, -32005, -32014}


class SolanaRpcAdapter(HistoryPort):

    def __init__(self, config: RpcConfig, session: Optional[requests.Session] = None) -> None:
        self._endpoint = config.endpoint
        self._timeout = config.timeout_sec
        self._max_retries = max(1, config.max_retries)
        self._page_size = max(1, min(config.page_size, 1000))
        self._commitment = config.commitment

        self._pacer = RequestPacer(config.requests_per_sec)
        self._session = session or requests.Session()
        self._request_id = 0

        self._tx_cache: Dict[str, Optional[TransactionRecord]] = {}

    # ---------- internal ----------

    def _call(self, method: str, params: List[Any]) -> Any:
        self._request_id += 1
        body = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }

        last_err: Optional[Exception] = None

        for attempt in range(self._max_retries):
            try:
                self._pacer.wait()
                resp = self._session.post(self._endpoint, json=body, timeout=self._timeout)

                if resp.status_code == 429:
                    retry_after = _retry_after_seconds(resp)
                    last_err = RateLimitError(f"{method}: HTTP 429")
                    backoff_sleep(attempt, retry_after=retry_after)
                    continue

                resp.raise_for_status()
                data = resp.json()

            except (requests.RequestException, ValueError) as e:
                last_err = e
                backoff_sleep(attempt)
                continue

            error = data.get("error") if isinstance(data, dict) else None
            if error:
                if not isinstance(error, dict):
                    raise DataSourceError(f"{method} rejected by node: {error}")
                code = error.get("code")
                message = str(error.get("message", "unknown error"))
                if code in _RETRYABLE_RPC_CODES or "rate" in message.lower():
                    last_err = RateLimitError(f"{method}: {message}")
                    backoff_sleep(attempt)
                    continue
                raise DataSourceError(f"{method} rejected by node ({code}): {message}")

            if not isinstance(data, dict) or "result" not in data:
                raise DataSourceError(f"{method}: malformed response: {data!r}")

            return data["result"]

        if isinstance(last_err, RateLimitError):
            raise RateLimitError(f"{method} still throttled after {self._max_retries} attempts: {last_err}")
        raise DataSourceError(f"{method} failed after {self._max_retries} attempts: {last_err}")

    @staticmethod
    def _account_keys(result: Dict[str, Any]) -> List[str]:
        message = (result.get("transaction") or {}).get("message") or {}
        keys: List[str] = []
        for key in message.get("accountKeys") or []:
            # jsonParsed encoding wraps keys as {"pubkey": ..., "signer": ...}
            if isinstance(key, dict):
                key = key.get("pubkey")
            if isinstance(key, str) and key:
                keys.append(key)

        loaded = (result.get("meta") or {}).get("loadedAddresses") or {}
        for group in ("writable", "readonly"):
            keys.extend(k for k in loaded.get(group) or [] if isinstance(k, str) and k)

        return list(dict.fromkeys(keys))

    # ---------- port methods ----------

    def iter_signatures(self, address: str, limit: int) -> Iterable[SignatureInfo]:
        seen = set()
        before: Optional[str] = None

        while len(seen) < limit:
            opts: Dict[str, Any] = {
                "limit": min(self._page_size, limit - len(seen)),
                "commitment": self._commitment,
            }
            if before:
                opts["before"] = before

            rows = self._call("getSignaturesForAddress", [address, opts])
            if not isinstance(rows, list) or not rows:
                break

            for r in rows:
                info = SignatureInfo.from_rpc_item(r)
                if info.signature in seen:
                    continue
                seen.add(info.signature)
                yield info
                if len(seen) >= limit:
                    return

            last = rows[-1].get("signature")
            if len(rows) < opts["limit"] or not last or last == before:
                break
            before = last

    def get_transaction(self, signature: str) -> Optional[TransactionRecord]:
        if signature in self._tx_cache:
            return self._tx_cache[signature]

        result = self._call("getTransaction", [
            signature,
            {
                "encoding": "json",
                "commitment": self._commitment,
                "maxSupportedTransactionVersion": 0,
            },
        ])

        record = None
        if isinstance(result, dict):
            record = TransactionRecord(
                signature=signature,
                participants=tuple(self._account_keys(result)),
                slot=int(result.get("slot") or 0),
                block_time=result.get("blockTime"),
            )
        self._tx_cache[signature] = record
        return record


def _retry_after_seconds(resp: requests.Response) -> Optional[float]:
    value = resp.headers.get("Retry-After")
    try:
        return float(value) if value is not None else None
    except ValueError:
        return None
