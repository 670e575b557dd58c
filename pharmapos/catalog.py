# pharmapos/catalog.py
import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from .models import Product, ProductCategory, SaleLine

logger = logging.getLogger(__name__)


class CatalogStore:
    """Authoritative in-memory product list.

    Stock changes only through ``restock`` and ``apply_sale_deductions``.
    Both trust the caller to have validated quantities first.
    """

    def __init__(self, products: Iterable[Product] = ()):
        self._products: Dict[str, Product] = {}
        for p in products:
            self._products[p.id] = p

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: str) -> bool:
        return product_id in self._products

    def list(self) -> List[Product]:
        return list(self._products.values())

    def get(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def search(
        self,
        term: Optional[str] = None,
        category: Optional[ProductCategory] = None,
        low_stock_only: bool = False,
    ) -> List[Product]:
        needle = (term or "").strip().lower()
        out = []
        for p in self._products.values():
            if needle and needle not in p.name.lower() and needle not in p.sku.lower():
                continue
            if category and p.category != category:
                continue
            if low_stock_only and not p.is_low_stock:
                continue
            out.append(p)
        return out

    def low_stock(self) -> List[Product]:
        return [p for p in self._products.values() if p.is_low_stock]

    def inventory_value(self) -> Decimal:
        return sum((p.price * p.stock for p in self._products.values()), Decimal("0"))

    def restock(self, product_id: str, quantity: int) -> Optional[Product]:
        p = self._products.get(product_id)
        if p is None:
            logger.debug("restock ignored for unknown product %s", product_id)
            return None
        p.stock += quantity
        return p

    def apply_sale_deductions(self, lines: Iterable[SaleLine]) -> None:
        for line in lines:
            p = self._products.get(line.product_id)
            if p is not None:
                p.stock -= line.quantity

    def snapshot(self) -> Dict[str, int]:
        return {pid: p.stock for pid, p in self._products.items()}
