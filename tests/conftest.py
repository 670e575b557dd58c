# tests/conftest.py
from decimal import Decimal

import pytest

from pharmapos.database import Workspace
from pharmapos.models import Product, ProductCategory


def make_product(pid: str, stock: int = 5, price: str = "10.00", requires_prescription: bool = False,
                 reorder_point: int = 1, category: ProductCategory = ProductCategory.OTC, name=None) -> Product:
    return Product(
        id=pid,
        sku=f"SKU-{pid.upper()}",
        name=name or f"Product {pid}",
        price=Decimal(price),
        stock=stock,
        reorder_point=reorder_point,
        requires_prescription=requires_prescription,
        category=category,
    )


@pytest.fixture
def ws():
    return Workspace([
        make_product("p1", stock=5, price="10.00"),
        make_product("p2", stock=2, price="25.00", requires_prescription=True,
                     category=ProductCategory.PRESCRIPTION),
        make_product("p3", stock=4, price="3.50", category=ProductCategory.WELLNESS),
    ])


@pytest.fixture
def make():
    return make_product
