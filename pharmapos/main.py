# pharmapos/main.py
from typing import List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import configure_logging
from .core import AddToCartIn, CheckoutIn, RemoveFromCartIn, RestockIn, UpdateCartIn
from .database import get_workspace
from .errors import InvalidQuantity, PosError
from .models import CartView, Notification, NotificationKind, Product, ProductCategory, SaleRecord
from .reports import Overview
from . import sdk

configure_logging()

app = FastAPI(title="PharmaPOS (in-memory workspace)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PosError)
async def pos_error_handler(request: Request, exc: PosError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # unparseable quantities report as InvalidQuantity
    if any(tuple(err.get("loc", ()))[-1:] == ("quantity",) for err in exc.errors()):
        err = InvalidQuantity("Quantity must be a whole number of at least 1.")
        get_workspace().notifier.notify(NotificationKind.ERROR, err.message)
        return JSONResponse(status_code=err.status_code, content=err.to_dict())
    return await request_validation_exception_handler(request, exc)


# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/products", response_model=List[Product])
async def list_products(
    search: Optional[str] = None,
    category: Optional[ProductCategory] = None,
    low_stock_only: bool = False,
):
    return await sdk.list_products_logic(search, category, low_stock_only)


@app.get("/products/{product_id}", response_model=Product)
async def get_product(product_id: str):
    return await sdk.get_product_logic(product_id)


@app.post("/inventory/restock", response_model=Optional[Product])
async def restock(payload: RestockIn):
    return await sdk.restock_logic(payload)


# ---------------------------
# Cart endpoints
# ---------------------------
@app.get("/cart", response_model=CartView)
async def view_cart():
    return await sdk.view_cart_logic()


@app.post("/cart/add", response_model=CartView)
async def cart_add(payload: AddToCartIn):
    return await sdk.add_to_cart_logic(payload)


@app.post("/cart/update", response_model=CartView)
async def cart_update(payload: UpdateCartIn):
    return await sdk.update_cart_quantity_logic(payload)


@app.post("/cart/remove", response_model=CartView)
async def cart_remove(payload: RemoveFromCartIn):
    return await sdk.remove_cart_item_logic(payload)


@app.post("/cart/checkout", response_model=Optional[SaleRecord])
async def cart_checkout(payload: CheckoutIn):
    return await sdk.commit_sale_logic(payload)


# ---------------------------
# Sales / status
# ---------------------------
@app.get("/sales", response_model=List[SaleRecord])
async def list_sales(limit: Optional[int] = Query(None, ge=0)):
    return await sdk.list_sales_logic(limit)


@app.get("/notification", response_model=Optional[Notification])
async def current_notification():
    return await sdk.current_notification_logic()


@app.get("/stats", response_model=Overview)
async def stats():
    return await sdk.overview_logic()


# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/reset")
async def reset_all():
    return await sdk.reset_all_logic()
