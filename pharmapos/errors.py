# pharmapos/errors.py
from typing import Any, Dict, List, Optional


class PosError(Exception):
    """Base class for recoverable, user-facing business rule failures."""

    kind = "pos_error"
    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.kind, "detail": self.message, **self.details}


class InvalidQuantity(PosError):
    kind = "invalid_quantity"
    status_code = 400

    def __init__(self, message: str = "Quantity must be at least 1."):
        super().__init__(message)


class InvalidCustomer(PosError):
    kind = "invalid_customer"
    status_code = 400


class InsufficientStock(PosError):
    kind = "insufficient_stock"
    status_code = 409

    @classmethod
    def for_product(cls, product_name: str, available: int) -> "InsufficientStock":
        return cls(
            f"Only {available} units available for {product_name}.",
            details={"products": [product_name], "available": available},
        )

    @classmethod
    def for_products(cls, product_names: List[str]) -> "InsufficientStock":
        return cls(
            f"Insufficient stock for: {', '.join(product_names)}",
            details={"products": list(product_names)},
        )


class PrescriptionRequired(PosError):
    kind = "prescription_required"
    status_code = 422

    def __init__(self, message: str = "Prescription number required for controlled medications."):
        super().__init__(message)


class UnknownProduct(PosError):
    kind = "unknown_product"
    status_code = 404

    def __init__(self, product_id: str):
        super().__init__(f"product not found: {product_id}", details={"product_id": product_id})
        self.product_id = product_id
