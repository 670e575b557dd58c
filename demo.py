#!/usr/bin/env python
import asyncio

from pharmapos.config import Config
from sdk.pharmapos_client import PosApiError, PosClient


def main():
    c = PosClient(base_url=Config.API_URL)

    # -----------------------------
    # Reset everything for demo
    # -----------------------------
    print("Resetting workspace...")
    print(c.reset())

    # -----------------------------
    # Browse inventory
    # -----------------------------
    print("\nLow stock items...")
    for p in c.list_products(low_stock_only=True):
        print(f"  {p['sku']:<14} {p['name']:<26} stock={p['stock']} reorder at {p['reorder_point']}")

    # -----------------------------
    # Build a cart
    # -----------------------------
    print("\nAdding items to cart...")
    c.add_to_cart("otc-ibuprofen-200", 2)
    cart = c.add_to_cart("rx-amoxicillin-500", 1, dosage="500mg three times daily", notes="Take with food")
    print(cart["totals"])

    # -----------------------------
    # Checkout without a prescription number is rejected
    # -----------------------------
    print("\nCheckout without prescription...")
    try:
        c.checkout("Jane Doe", "Card")
    except PosApiError as e:
        print(f"  rejected ({e.kind}): {e}")

    # -----------------------------
    # Checkout with one
    # -----------------------------
    print("\nCheckout with prescription...")
    sale = c.checkout("Jane Doe", "Insurance", prescription_number="RX-448812")
    print(f"  receipt #{sale['id']} total {sale['total']}")
    print("  status:", c.notification())

    # -----------------------------
    # Restock and review
    # -----------------------------
    print("\nRestocking Lisinopril...")
    print(c.restock("rx-lisinopril-10", 20))

    # -----------------------------
    # Async checkout; the raw response is inspected directly
    # -----------------------------
    print("\nAsync checkout of a vitamin...")
    c.add_to_cart("wel-vitamin-d3", 1)
    r = asyncio.run(c.checkout_async("Sam Lee", "Cash"))
    print(f"  HTTP {r.status_code}: {r.json()}")

    print("\nRecent sales...")
    print(c.list_sales(limit=5))

    print("\nOverview...")
    print(c.stats())


if __name__ == "__main__":
    main()
