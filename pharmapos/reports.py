# pharmapos/reports.py
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from pydantic import BaseModel

from .catalog import CatalogStore
from .ledger import SalesLedger

CENT = Decimal("0.01")


def money(value: Decimal) -> str:
    """Two-digit display form. Stored amounts keep full precision."""
    return f"${Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)}"


class Overview(BaseModel):
    inventory_value: Decimal
    today_revenue: Decimal
    today_sales: int
    low_stock: int
    products_tracked: int


def overview(catalog: CatalogStore, ledger: SalesLedger, today: Optional[date] = None) -> Overview:
    today = today or datetime.now(timezone.utc).date()
    todays = ledger.sales_on(today)
    return Overview(
        inventory_value=catalog.inventory_value(),
        today_revenue=sum((s.total for s in todays), Decimal("0")),
        today_sales=len(todays),
        low_stock=len(catalog.low_stock()),
        products_tracked=len(catalog),
    )
