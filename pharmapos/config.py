# pharmapos/config.py
import logging
import os
from decimal import Decimal
from typing import Optional


class Config:
    # Flat sales tax applied to every line
    TAX_RATE = Decimal(os.environ.get("PHARMAPOS_TAX_RATE", "0.07"))

    # Seconds a status message stays visible
    NOTIFICATION_TTL = float(os.environ.get("PHARMAPOS_NOTIFICATION_TTL", "3.5"))

    # Optional JSON file replacing the built-in catalog
    SEED_FILE: Optional[str] = os.environ.get("PHARMAPOS_SEED_FILE") or None

    LOG_LEVEL = os.environ.get("PHARMAPOS_LOG_LEVEL", "INFO").upper()

    API_URL = os.environ.get("PHARMAPOS_API_URL", "http://127.0.0.1:8085")


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=level or Config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
