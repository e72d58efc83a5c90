from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class SignatureInfo:
    signature: str
    slot: int
    block_time: Optional[int]     # unix seconds, None if the node has no timestamp
    err: Any = None               # None when the transaction succeeded

    @classmethod
    def from_rpc_item(cls, item: Dict[str, Any]) -> "SignatureInfo":
        return cls(
            signature=item["signature"],
            slot=int(item.get("slot") or 0),
            block_time=item.get("blockTime"),
            err=item.get("err"),
        )


@dataclass(frozen=True)
class TransactionRecord:
    signature: str
    participants: Tuple[str, ...]    # account keys, message order
    slot: int = 0
    block_time: Optional[int] = None

    @property
    def fee_payer(self) -> Optional[str]:
        return self.participants[0] if self.participants else None
