# pharmapos/seed.py
import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from .models import Product

logger = logging.getLogger(__name__)

# ---------------------------
# Built-in catalog
# ---------------------------
DEFAULT_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "rx-amoxicillin-500",
        "sku": "RX-AMX-500",
        "name": "Amoxicillin 500mg",
        "description": "Broad-spectrum antibiotic capsules, 30 count",
        "price": "18.50",
        "stock": 42,
        "reorder_point": 15,
        "requires_prescription": True,
        "category": "Prescription",
    },
    {
        "id": "rx-lisinopril-10",
        "sku": "RX-LSN-010",
        "name": "Lisinopril 10mg",
        "description": "ACE inhibitor tablets, 90 count",
        "price": "12.75",
        "stock": 8,
        "reorder_point": 10,
        "requires_prescription": True,
        "category": "Prescription",
    },
    {
        "id": "rx-metformin-850",
        "sku": "RX-MTF-850",
        "name": "Metformin 850mg",
        "description": "Extended-release tablets, 60 count",
        "price": "9.99",
        "stock": 55,
        "reorder_point": 20,
        "requires_prescription": True,
        "category": "Prescription",
    },
    {
        "id": "otc-ibuprofen-200",
        "sku": "OTC-IBU-200",
        "name": "Ibuprofen 200mg",
        "description": "Pain reliever and fever reducer, 100 count",
        "price": "7.49",
        "stock": 120,
        "reorder_point": 30,
        "requires_prescription": False,
        "category": "OTC",
    },
    {
        "id": "otc-loratadine-10",
        "sku": "OTC-LOR-010",
        "name": "Loratadine 10mg",
        "description": "Non-drowsy allergy relief, 30 count",
        "price": "11.29",
        "stock": 24,
        "reorder_point": 25,
        "requires_prescription": False,
        "category": "OTC",
    },
    {
        "id": "wel-vitamin-d3",
        "sku": "WEL-VD3-2000",
        "name": "Vitamin D3 2000 IU",
        "description": "Softgels, 120 count",
        "price": "14.00",
        "stock": 64,
        "reorder_point": 12,
        "requires_prescription": False,
        "category": "Wellness",
    },
    {
        "id": "wel-probiotic",
        "sku": "WEL-PRB-030",
        "name": "Daily Probiotic",
        "description": "10 billion CFU capsules, 30 count",
        "price": "21.95",
        "stock": 5,
        "reorder_point": 6,
        "requires_prescription": False,
        "category": "Wellness",
    },
    {
        "id": "med-bp-monitor",
        "sku": "MED-BPM-001",
        "name": "Blood Pressure Monitor",
        "description": "Automatic upper-arm cuff monitor",
        "price": "39.99",
        "stock": 9,
        "reorder_point": 3,
        "requires_prescription": False,
        "category": "Medical Supplies",
    },
    {
        "id": "med-gauze-pads",
        "sku": "MED-GZE-4X4",
        "name": "Sterile Gauze Pads 4x4",
        "description": "Individually wrapped, 25 count",
        "price": "6.25",
        "stock": 80,
        "reorder_point": 20,
        "requires_prescription": False,
        "category": "Medical Supplies",
    },
]


def load_products(entries: Iterable[Any]) -> List[Product]:
    """Validate raw seed entries, skipping anything malformed.

    An entry is dropped (with a warning) if it fails model validation or
    repeats an id or SKU already loaded.
    """
    products: List[Product] = []
    seen_ids = set()
    seen_skus = set()
    for index, raw in enumerate(entries):
        if not isinstance(raw, dict):
            logger.warning("seed entry %d skipped: expected an object, got %s", index, type(raw).__name__)
            continue
        try:
            product = Product.model_validate(raw)
        except ValidationError as e:
            logger.warning("seed entry %d (%s) skipped: %d validation error(s): %s",
                           index, raw.get("id", "?"), e.error_count(), e.errors()[0]["msg"])
            continue
        if product.id in seen_ids or product.sku in seen_skus:
            logger.warning("seed entry %d (%s) skipped: duplicate id or sku", index, product.id)
            continue
        seen_ids.add(product.id)
        seen_skus.add(product.sku)
        products.append(product)
    logger.info("loaded %d product(s) from seed data", len(products))
    return products


def load_seed_file(path: str) -> List[Product]:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("seed file %s unreadable (%s); loading nothing", path, e)
        return []
    if isinstance(data, dict):
        data = data.get("products", [])
    if not isinstance(data, list):
        logger.warning("seed file %s has no product list; loading nothing", path)
        return []
    return load_products(data)


def initial_products(seed_file: Optional[str] = None) -> List[Product]:
    if seed_file:
        return load_seed_file(seed_file)
    return load_products(DEFAULT_PRODUCTS)
