# pharmapos/cart.py
from typing import Dict, List, Optional, Tuple

from .catalog import CatalogStore
from .errors import InsufficientStock, InvalidQuantity
from .models import CartItem, Product, ResolvedLine


class CartBuilder:
    """Pending line items, keyed by product id.

    Lines hold only the product id; ``resolve`` re-joins them against the
    catalog each time they are read.
    """

    def __init__(self):
        self._items: Dict[str, CartItem] = {}

    def __len__(self) -> int:
        return len(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def items(self) -> List[CartItem]:
        return list(self._items.values())

    def get(self, product_id: str) -> Optional[CartItem]:
        return self._items.get(product_id)

    def add_item(
        self,
        product: Product,
        quantity: int,
        dosage: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> CartItem:
        if quantity <= 0:
            raise InvalidQuantity()

        existing = self._items.get(product.id)
        in_cart = existing.quantity if existing else 0
        if in_cart + quantity > product.stock:
            raise InsufficientStock.for_product(product.name, product.stock - in_cart)

        if existing:
            item = existing.model_copy(update={
                "quantity": min(product.stock, existing.quantity + quantity),
                "dosage": dosage if dosage is not None else existing.dosage,
                "notes": notes if notes is not None else existing.notes,
            })
        else:
            item = CartItem(product_id=product.id, quantity=quantity, dosage=dosage, notes=notes)
        self._items[product.id] = item
        return item

    def update_quantity(self, product: Product, quantity: int) -> Tuple[Optional[CartItem], bool]:
        """Set a line's quantity, clamped to ``[1, product.stock]``.

        Returns the updated line and whether the request was clamped down to
        the stock ceiling. The line is ``None`` if the product is not in the
        cart, or if it has sold out, in which case the line is dropped.
        """
        clamped = False
        if quantity < 1:
            quantity = 1
        if quantity > product.stock:
            quantity = product.stock
            clamped = True

        existing = self._items.get(product.id)
        if existing is None:
            return None, clamped
        if quantity < 1:
            # sold out underneath the line; no quantity can stay within stock
            del self._items[product.id]
            return None, clamped
        item = existing.model_copy(update={"quantity": quantity})
        self._items[product.id] = item
        return item, clamped

    def remove_item(self, product_id: str) -> bool:
        return self._items.pop(product_id, None) is not None

    def clear(self) -> None:
        self._items.clear()

    def resolve(self, catalog: CatalogStore) -> List[ResolvedLine]:
        out = []
        for item in self._items.values():
            product = catalog.get(item.product_id)
            if product is None:
                continue
            out.append(ResolvedLine(item=item, product=product))
        return out

    def unresolved(self, catalog: CatalogStore) -> List[str]:
        return [pid for pid in self._items if pid not in catalog]

    def snapshot(self) -> List[dict]:
        return [item.model_dump() for item in self._items.values()]
