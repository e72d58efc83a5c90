from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional
from linker.core.dto import SignatureInfo, TransactionRecord

class HistoryPort(ABC):
    """
    Abstract Class for fetching an address's transaction history.
    """

    # --- Signatures (newest first, unique, at most `limit`) ---

    @abstractmethod
    def iter_signatures(self, address: str, limit: int) -> Iterable[SignatureInfo]:
        raise NotImplementedError

    # --- Transaction participants ---

    @abstractmethod
    def get_transaction(self, signature: str) -> Optional[TransactionRecord]:
        raise NotImplementedError
