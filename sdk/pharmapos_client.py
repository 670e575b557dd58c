# sdk/pharmapos_client.py
from typing import Optional

import httpx
import requests


class PosApiError(Exception):
    """Business-rule rejection returned by the API (4xx with an error body)."""

    def __init__(self, status_code: int, body: dict):
        super().__init__(body.get("detail") or f"HTTP {status_code}")
        self.status_code = status_code
        self.kind = body.get("error", "http_error")
        self.body = body


class PosClient:
    def __init__(self, base_url: str = "http://localhost:8085", timeout: int = 10,
                 async_transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout
        # lets checkout_async run against an in-process app
        self.async_transport = async_transport

    def _handle(self, r: requests.Response):
        if 400 <= r.status_code < 500:
            try:
                body = r.json()
            except ValueError:
                body = {"detail": r.text}
            if not isinstance(body, dict):
                body = {"detail": str(body)}
            raise PosApiError(r.status_code, body)
        r.raise_for_status()
        return r.json()

    def reset(self):
        return self._handle(self.session.post(f"{self.base_url}/reset", timeout=self.timeout))

    # Products
    def list_products(self, search: Optional[str] = None, category: Optional[str] = None, low_stock_only: bool = False):
        params = {}
        if search:
            params["search"] = search
        if category:
            params["category"] = category
        if low_stock_only:
            params["low_stock_only"] = "true"
        r = self.session.get(f"{self.base_url}/products", params=params, timeout=self.timeout)
        return self._handle(r)

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        return self._handle(r)

    def restock(self, product_id: str, quantity: int):
        r = self.session.post(f"{self.base_url}/inventory/restock", json={
            "product_id": product_id, "quantity": quantity
        }, timeout=self.timeout)
        return self._handle(r)

    # Cart
    def view_cart(self):
        r = self.session.get(f"{self.base_url}/cart", timeout=self.timeout)
        return self._handle(r)

    def add_to_cart(self, product_id: str, quantity: int = 1, dosage: Optional[str] = None, notes: Optional[str] = None):
        r = self.session.post(f"{self.base_url}/cart/add", json={
            "product_id": product_id, "quantity": quantity, "dosage": dosage, "notes": notes
        }, timeout=self.timeout)
        return self._handle(r)

    def update_cart_quantity(self, product_id: str, quantity: int):
        r = self.session.post(f"{self.base_url}/cart/update", json={
            "product_id": product_id, "quantity": int(quantity)
        }, timeout=self.timeout)
        return self._handle(r)

    def remove_from_cart(self, product_id: str):
        r = self.session.post(f"{self.base_url}/cart/remove", json={"product_id": product_id}, timeout=self.timeout)
        return self._handle(r)

    # Checkout
    def checkout(self, customer_name: str, payment_method: str = "Cash",
                 prescription_number: Optional[str] = None, notes: Optional[str] = None):
        payload = {
            "customer_name": customer_name,
            "payment_method": payment_method,
            "prescription_number": prescription_number,
            "notes": notes,
        }
        r = self.session.post(f"{self.base_url}/cart/checkout", json=payload, timeout=self.timeout)
        return self._handle(r)

    async def checkout_async(self, customer_name: str, payment_method: str = "Cash",
                             prescription_number: Optional[str] = None, notes: Optional[str] = None):
        payload = {
            "customer_name": customer_name,
            "payment_method": payment_method,
            "prescription_number": prescription_number,
            "notes": notes,
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.async_transport) as client:
            r = await client.post(f"{self.base_url}/cart/checkout", json=payload)
            # callers inspect 409/422 themselves
            return r

    # Sales / status
    def list_sales(self, limit: Optional[int] = None):
        params = {"limit": limit} if limit is not None else {}
        r = self.session.get(f"{self.base_url}/sales", params=params, timeout=self.timeout)
        return self._handle(r)

    def notification(self):
        r = self.session.get(f"{self.base_url}/notification", timeout=self.timeout)
        return self._handle(r)

    def stats(self):
        r = self.session.get(f"{self.base_url}/stats", timeout=self.timeout)
        return self._handle(r)
