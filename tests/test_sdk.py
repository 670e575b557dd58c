# tests/test_sdk.py
import asyncio

import pytest

from pharmapos import sdk
from pharmapos.core import AddToCartIn, RemoveFromCartIn, RestockIn, UpdateCartIn
from pharmapos.errors import InsufficientStock, InvalidQuantity, PrescriptionRequired, UnknownProduct
from pharmapos.models import Checkout, NotificationKind


def run(coro):
    return asyncio.run(coro)


def test_add_to_cart_posts_success(ws):
    view = run(sdk.add_to_cart_logic(AddToCartIn(product_id="p1", quantity=2, dosage=""), ws=ws))
    assert view.lines[0].item.quantity == 2
    assert view.lines[0].item.dosage is None
    note = ws.notifier.current()
    assert note.kind == NotificationKind.SUCCESS
    assert note.message == "Product p1 added to the cart."


def test_rejection_is_posted_and_raised(ws):
    with pytest.raises(InsufficientStock):
        run(sdk.add_to_cart_logic(AddToCartIn(product_id="p1", quantity=10), ws=ws))
    note = ws.notifier.current()
    assert note.kind == NotificationKind.ERROR
    assert note.message == "Only 5 units available for Product p1."


def test_add_unknown_product(ws):
    with pytest.raises(UnknownProduct):
        run(sdk.add_to_cart_logic(AddToCartIn(product_id="zzz"), ws=ws))
    assert ws.cart.is_empty


def test_update_over_stock_clamps_and_warns(ws):
    run(sdk.add_to_cart_logic(AddToCartIn(product_id="p3", quantity=1), ws=ws))
    view = run(sdk.update_cart_quantity_logic(UpdateCartIn(product_id="p3", quantity=40), ws=ws))
    assert view.lines[0].item.quantity == 4
    assert ws.notifier.current().message == "Cannot exceed stock level of 4."


def test_update_unknown_product_is_noop(ws):
    run(sdk.add_to_cart_logic(AddToCartIn(product_id="p3", quantity=1), ws=ws))
    view = run(sdk.update_cart_quantity_logic(UpdateCartIn(product_id="zzz", quantity=3), ws=ws))
    assert [line.item.quantity for line in view.lines] == [1]


def test_remove_missing_item_is_silent(ws):
    view = run(sdk.remove_cart_item_logic(RemoveFromCartIn(product_id="p1"), ws=ws))
    assert view.lines == []
    assert ws.notifier.current() is None


def test_commit_posts_receipt_number(ws):
    run(sdk.add_to_cart_logic(AddToCartIn(product_id="p1", quantity=3), ws=ws))
    sale = run(sdk.commit_sale_logic(Checkout(customer_name="Jane Doe"), ws=ws))
    assert ws.notifier.current().message == f"Sale completed. Receipt #{sale.id}"
    assert run(sdk.list_sales_logic(ws=ws)) == [sale]
    assert run(sdk.list_sales_logic(limit=0, ws=ws)) == []


def test_commit_failure_posts_error(ws):
    run(sdk.add_to_cart_logic(AddToCartIn(product_id="p2", quantity=1), ws=ws))
    with pytest.raises(PrescriptionRequired):
        run(sdk.commit_sale_logic(Checkout(customer_name="A B"), ws=ws))
    assert ws.notifier.current().kind == NotificationKind.ERROR
    assert len(ws.cart) == 1


def test_empty_checkout_returns_none(ws):
    assert run(sdk.commit_sale_logic(Checkout(customer_name="Jane Doe"), ws=ws)) is None
    assert ws.notifier.current() is None


@pytest.mark.parametrize("qty", [0, -5])
def test_restock_rejects_non_positive(ws, qty):
    with pytest.raises(InvalidQuantity):
        run(sdk.restock_logic(RestockIn(product_id="p1", quantity=qty), ws=ws))
    assert ws.catalog.get("p1").stock == 5


def test_restock_posts_info(ws):
    product = run(sdk.restock_logic(RestockIn(product_id="p1", quantity=20), ws=ws))
    assert product.stock == 25
    note = ws.notifier.current()
    assert note.kind == NotificationKind.INFO
    assert note.message == "Restocked 20 units of Product p1."


def test_restock_unknown_is_silent(ws):
    assert run(sdk.restock_logic(RestockIn(product_id="zzz", quantity=3), ws=ws)) is None
    assert ws.notifier.current() is None


def test_update_sold_out_line_is_removed_and_reported(ws):
    run(sdk.add_to_cart_logic(AddToCartIn(product_id="p1", quantity=2), ws=ws))
    ws.catalog.get("p1").stock = 0
    view = run(sdk.update_cart_quantity_logic(UpdateCartIn(product_id="p1", quantity=1), ws=ws))
    assert view.lines == []
    assert ws.notifier.current().message == "Product p1 is out of stock and was removed from the cart."


def test_update_for_product_not_in_cart_posts_nothing(ws):
    view = run(sdk.update_cart_quantity_logic(UpdateCartIn(product_id="p3", quantity=40), ws=ws))
    assert view.lines == []
    assert ws.notifier.current() is None
