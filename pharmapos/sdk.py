# pharmapos/sdk.py
import functools
import logging
from typing import List, Optional

# Import from other modules
from .committer import commit_sale, quote
from .core import AddToCartIn, RemoveFromCartIn, RestockIn, UpdateCartIn, _optional_text
from .database import Workspace, get_workspace, reset_workspace
from .errors import InvalidQuantity, PosError, UnknownProduct
from .models import (
    CartView, Checkout, Notification, NotificationKind, Product, ProductCategory, SaleRecord,
)
from .reports import Overview, overview

logger = logging.getLogger(__name__)

# This file contains the operations the presentation layer calls into.
# Each one runs under the workspace lock, so it is applied whole or not at all.


def _surfaces_errors(fn):
    """Post rejected operations to the notifier before re-raising them."""

    @functools.wraps(fn)
    async def wrapper(*args, ws: Optional[Workspace] = None, **kwargs):
        ws = ws or get_workspace()
        try:
            return await fn(*args, ws=ws, **kwargs)
        except PosError as e:
            logger.info("%s rejected: %s", fn.__name__, e.message)
            ws.notifier.notify(NotificationKind.ERROR, e.message)
            raise

    return wrapper


def _require_product(ws: Workspace, product_id: str) -> Product:
    product = ws.catalog.get(product_id)
    if product is None:
        raise UnknownProduct(product_id)
    return product


def _cart_view(ws: Workspace) -> CartView:
    lines = ws.cart.resolve(ws.catalog)
    return CartView(lines=lines, unresolved=ws.cart.unresolved(ws.catalog), totals=quote(lines))


# Catalog
async def list_products_logic(
    search: Optional[str] = None,
    category: Optional[ProductCategory] = None,
    low_stock_only: bool = False,
    ws: Optional[Workspace] = None,
) -> List[Product]:
    ws = ws or get_workspace()
    return ws.catalog.search(search, category, low_stock_only)


async def get_product_logic(product_id: str, ws: Optional[Workspace] = None) -> Product:
    ws = ws or get_workspace()
    return _require_product(ws, product_id)


@_surfaces_errors
async def restock_logic(payload: RestockIn, ws: Workspace) -> Optional[Product]:
    if payload.quantity <= 0:
        raise InvalidQuantity("Restock quantity must be a positive whole number.")
    async with ws.lock:
        product = ws.catalog.restock(payload.product_id, payload.quantity)
    if product is None:
        return None
    logger.info("restocked %s by %d (now %d)", product.id, payload.quantity, product.stock)
    ws.notifier.notify(NotificationKind.INFO, f"Restocked {payload.quantity} units of {product.name}.")
    return product


# Cart
@_surfaces_errors
async def add_to_cart_logic(payload: AddToCartIn, ws: Workspace) -> CartView:
    async with ws.lock:
        product = _require_product(ws, payload.product_id)
        ws.cart.add_item(
            product,
            payload.quantity,
            dosage=_optional_text(payload.dosage),
            notes=_optional_text(payload.notes),
        )
        view = _cart_view(ws)
    ws.notifier.notify(NotificationKind.SUCCESS, f"{product.name} added to the cart.")
    return view


async def update_cart_quantity_logic(payload: UpdateCartIn, ws: Optional[Workspace] = None) -> CartView:
    ws = ws or get_workspace()
    async with ws.lock:
        product = ws.catalog.get(payload.product_id)
        if product is not None and ws.cart.get(product.id) is not None:
            item, clamped = ws.cart.update_quantity(product, payload.quantity)
            if item is None:
                ws.notifier.notify(NotificationKind.ERROR,
                                   f"{product.name} is out of stock and was removed from the cart.")
            elif clamped:
                ws.notifier.notify(NotificationKind.ERROR, f"Cannot exceed stock level of {product.stock}.")
        return _cart_view(ws)


async def remove_cart_item_logic(payload: RemoveFromCartIn, ws: Optional[Workspace] = None) -> CartView:
    ws = ws or get_workspace()
    async with ws.lock:
        ws.cart.remove_item(payload.product_id)
        return _cart_view(ws)


async def view_cart_logic(ws: Optional[Workspace] = None) -> CartView:
    ws = ws or get_workspace()
    return _cart_view(ws)


# Checkout
@_surfaces_errors
async def commit_sale_logic(checkout: Checkout, ws: Workspace) -> Optional[SaleRecord]:
    async with ws.lock:
        sale = commit_sale(ws.catalog, ws.cart, ws.ledger, checkout)
    if sale is not None:
        ws.notifier.notify(NotificationKind.SUCCESS, f"Sale completed. Receipt #{sale.id}")
    return sale


# Sales history
async def list_sales_logic(limit: Optional[int] = None, ws: Optional[Workspace] = None) -> List[SaleRecord]:
    ws = ws or get_workspace()
    if limit is None:
        return ws.ledger.list()
    return ws.ledger.recent(limit)


async def current_notification_logic(ws: Optional[Workspace] = None) -> Optional[Notification]:
    ws = ws or get_workspace()
    return ws.notifier.current()


async def overview_logic(ws: Optional[Workspace] = None) -> Overview:
    ws = ws or get_workspace()
    return overview(ws.catalog, ws.ledger)


# Utility: reset (for tests/demo)
async def reset_all_logic(seed_file: Optional[str] = None) -> dict:
    ws = reset_workspace(Workspace.seeded(seed_file))
    return {"status": "reset", "products": len(ws.catalog)}
