# pharmapos/core.py
from typing import Optional

from pydantic import BaseModel

from .models import Checkout

# Request bodies accepted by the HTTP layer.


class AddToCartIn(BaseModel):
    product_id: str
    quantity: int = 1
    dosage: Optional[str] = None
    notes: Optional[str] = None


class UpdateCartIn(BaseModel):
    product_id: str
    quantity: int


class RemoveFromCartIn(BaseModel):
    product_id: str


class CheckoutIn(Checkout):
    pass


class RestockIn(BaseModel):
    product_id: str
    quantity: int


def _optional_text(value: Optional[str]) -> Optional[str]:
    # form fields arrive as "" when left empty
    if value is None:
        return None
    value = value.strip()
    return value or None
