# pharmapos/database.py
import asyncio
from typing import Iterable, Optional

from .cart import CartBuilder
from .catalog import CatalogStore
from .config import Config
from .ledger import SalesLedger
from .models import Product
from .notifier import Notifier
from .seed import initial_products

# This file holds the in-memory workspace and its mutation lock.


class Workspace:
    """Catalog, cart, ledger and notifier for one POS session."""

    def __init__(self, products: Iterable[Product] = (), notifier: Optional[Notifier] = None):
        self.catalog = CatalogStore(products)
        self.cart = CartBuilder()
        self.ledger = SalesLedger()
        self.notifier = notifier or Notifier()
        self.lock = asyncio.Lock()

    @classmethod
    def seeded(cls, seed_file: Optional[str] = None) -> "Workspace":
        return cls(initial_products(seed_file if seed_file is not None else Config.SEED_FILE))


_WORKSPACE: Optional[Workspace] = None


def get_workspace() -> Workspace:
    global _WORKSPACE
    if _WORKSPACE is None:
        _WORKSPACE = Workspace.seeded()
    return _WORKSPACE


def reset_workspace(workspace: Optional[Workspace] = None) -> Workspace:
    global _WORKSPACE
    if _WORKSPACE is not None:
        _WORKSPACE.notifier.clear()
    _WORKSPACE = workspace or Workspace.seeded()
    return _WORKSPACE
