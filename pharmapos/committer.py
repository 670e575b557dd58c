# pharmapos/committer.py
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, List, Optional

from .cart import CartBuilder
from .catalog import CatalogStore
from .config import Config
from .core import _optional_text
from .errors import InsufficientStock, InvalidCustomer, PrescriptionRequired
from .ledger import SalesLedger, mint_sale_id
from .models import Checkout, ResolvedLine, SaleLine, SaleRecord, Totals

logger = logging.getLogger(__name__)

MIN_CUSTOMER_NAME = 2


def quote(lines: Iterable[ResolvedLine], tax_rate: Optional[Decimal] = None) -> Totals:
    rate = Config.TAX_RATE if tax_rate is None else tax_rate
    subtotal = sum((line.item.quantity * line.product.price for line in lines), Decimal("0"))
    tax = subtotal * rate
    return Totals(subtotal=subtotal, tax=tax, total=subtotal + tax)


def normalize_checkout(checkout: Checkout) -> Checkout:
    name = (checkout.customer_name or "").strip()
    if len(name) < MIN_CUSTOMER_NAME:
        raise InvalidCustomer(
            f"Customer name must be at least {MIN_CUSTOMER_NAME} characters.",
            details={"customer_name": checkout.customer_name},
        )
    return checkout.model_copy(update={
        "customer_name": name,
        "prescription_number": _optional_text(checkout.prescription_number),
        "notes": _optional_text(checkout.notes),
    })


def _check_prescriptions(lines: List[ResolvedLine], prescription_number: Optional[str]) -> None:
    if prescription_number:
        return
    if any(line.product.requires_prescription for line in lines):
        raise PrescriptionRequired()


def _check_stock(lines: List[ResolvedLine]) -> None:
    short = [line.product.name for line in lines if line.item.quantity > line.product.stock]
    if short:
        raise InsufficientStock.for_products(short)


def commit_sale(
    catalog: CatalogStore,
    cart: CartBuilder,
    ledger: SalesLedger,
    checkout: Checkout,
    now: Optional[datetime] = None,
    tax_rate: Optional[Decimal] = None,
) -> Optional[SaleRecord]:
    """Validate the cart and turn it into a receipt.

    Returns ``None`` when no cart line resolves. Every check runs before the first
    mutation, so a raised error leaves catalog, cart and ledger untouched.
    On success the record is prepended to the ledger, stock is deducted for
    every line and the whole cart is cleared.
    """
    lines = cart.resolve(catalog)
    if not lines:
        return None

    checkout = normalize_checkout(checkout)

    _check_prescriptions(lines, checkout.prescription_number)
    _check_stock(lines)

    totals = quote(lines, tax_rate)
    now = now or datetime.now(timezone.utc)
    record = SaleRecord(
        id=mint_sale_id(now),
        sold_at=now,
        customer_name=checkout.customer_name,
        prescription_number=checkout.prescription_number,
        payment_method=checkout.payment_method,
        notes=checkout.notes,
        items=tuple(
            SaleLine(
                product_id=line.product.id,
                quantity=line.item.quantity,
                dosage=line.item.dosage,
                notes=line.item.notes,
                unit_price=line.product.price,
                product_name=line.product.name,
            )
            for line in lines
        ),
        subtotal=totals.subtotal,
        tax=totals.tax,
        total=totals.total,
    )

    ledger.append(record)
    catalog.apply_sale_deductions(record.items)
    cart.clear()

    logger.info("sale %s committed: %d line(s), total %s", record.id, len(record.items), record.total)
    return record
