# pharmapos/ledger.py
import itertools
from datetime import date, datetime, timezone
from typing import List

from .models import SaleRecord

_SEQUENCE = itertools.count(1)


def mint_sale_id(now: datetime) -> str:
    """Receipt number: commit time plus a process-wide sequence.

    The timestamp keeps ids readable and roughly ordered; the sequence
    keeps two commits within the same second distinct.
    """
    return f"{now.strftime('%Y%m%d%H%M%S')}-{next(_SEQUENCE):06d}"


class SalesLedger:
    """Append-only sale history, most recent first."""

    def __init__(self):
        self._records: List[SaleRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def append(self, record: SaleRecord) -> None:
        self._records.insert(0, record)

    def list(self) -> List[SaleRecord]:
        return list(self._records)

    def recent(self, n: int) -> List[SaleRecord]:
        if n <= 0:
            return []
        return self._records[:n]

    def sales_on(self, day: date) -> List[SaleRecord]:
        return [r for r in self._records if r.sold_at.astimezone(timezone.utc).date() == day]
