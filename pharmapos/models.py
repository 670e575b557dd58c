# pharmapos/models.py
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictBool, computed_field


class ProductCategory(str, Enum):
    PRESCRIPTION = "Prescription"
    OTC = "OTC"
    WELLNESS = "Wellness"
    MEDICAL_SUPPLIES = "Medical Supplies"


class PaymentMethod(str, Enum):
    CASH = "Cash"
    CARD = "Card"
    INSURANCE = "Insurance"


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Product(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(min_length=1)
    sku: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    price: Decimal = Field(ge=0)
    stock: int = Field(ge=0)
    reorder_point: int = 0
    requires_prescription: StrictBool = False
    category: ProductCategory

    @computed_field
    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.reorder_point


class CartItem(BaseModel):
    product_id: str
    quantity: int = Field(gt=0)
    dosage: Optional[str] = None
    notes: Optional[str] = None


class ResolvedLine(BaseModel):
    """A cart line joined against the live catalog."""

    item: CartItem
    product: Product

    @computed_field
    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.item.quantity


class SaleLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: str
    quantity: int
    dosage: Optional[str] = None
    notes: Optional[str] = None
    unit_price: Decimal
    product_name: str

    @computed_field
    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class SaleRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    sold_at: datetime
    customer_name: str
    prescription_number: Optional[str] = None
    payment_method: PaymentMethod
    notes: Optional[str] = None
    items: Tuple[SaleLine, ...]
    subtotal: Decimal
    tax: Decimal
    total: Decimal


class Totals(BaseModel):
    subtotal: Decimal
    tax: Decimal
    total: Decimal


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: NotificationKind
    message: str
    posted_at: float


class Checkout(BaseModel):
    """Customer and payment metadata for a checkout attempt."""

    customer_name: str
    prescription_number: Optional[str] = None
    payment_method: PaymentMethod = PaymentMethod.CASH
    notes: Optional[str] = None


class CartView(BaseModel):
    lines: List[ResolvedLine]
    unresolved: List[str] = []
    totals: Totals
