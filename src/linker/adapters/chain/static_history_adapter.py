import json
from pathlib import Path
from typing import Iterable, List, Optional

from linker.core.dto import SignatureInfo, TransactionRecord
from linker.core.errors import DataSourceError
from linker.ports.history_port import HistoryPort


class StaticHistoryAdapter(HistoryPort):
    def __init__(self, records: Optional[Iterable[TransactionRecord]] = None):
        self._records = {}
        for r in records or []:
            self._records.setdefault(r.signature, r)

    @classmethod
    def from_json(cls, path: str) -> "StaticHistoryAdapter":
        """
        Load a fixture file shaped like
        {"transactions": [{"signature", "slot", "block_time", "accounts"}]}.
        """
        try:
            with Path(path).open("r", encoding="utf-8") as f:
                data = json.load(f)
            rows = data.get("transactions", []) if isinstance(data, dict) else data
            records = [
                TransactionRecord(
                    signature=row["signature"],
                    participants=tuple(row.get("accounts") or ()),
                    slot=int(row.get("slot") or 0),
                    block_time=row.get("block_time"),
                )
                for row in rows
            ]
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            raise DataSourceError(f"Cannot load history fixture {path}: {e}") from e
        return cls(records)

    def iter_signatures(self, address: str, limit: int) -> List[SignatureInfo]:
        items = [r for r in self._records.values() if address in r.participants]
        # newest first, like the node
        items.sort(key=lambda r: (r.slot, r.signature), reverse=True)
        return [
            SignatureInfo(signature=r.signature, slot=r.slot, block_time=r.block_time)
            for r in items[:limit]
        ]

    def get_transaction(self, signature: str) -> Optional[TransactionRecord]:
        return self._records.get(signature)
