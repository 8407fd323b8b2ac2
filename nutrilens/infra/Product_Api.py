"""Open Food Facts barcode lookup client."""
import logging
import re
from typing import Optional

import httpx

from nutrilens.domain.Product import Product
from nutrilens.utilities.config import LOOKUP_TIMEOUT, OPENFOODFACTS_URL

logger = logging.getLogger(__name__)

_BARCODE_PATTERN = re.compile(r"[0-9]+")


class ProductLookupError(Exception):
    """The product database could not be reached or answered with an error."""


class ProductNotFoundError(ProductLookupError):
    """The barcode is unknown to the product database."""


class ProductApiClient:
    def __init__(self, base_url: str = OPENFOODFACTS_URL, timeout: float = LOOKUP_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def lookup(self, barcode: str) -> Product:
        barcode = (barcode or "").strip()
        if not _BARCODE_PATTERN.fullmatch(barcode):
            raise ProductNotFoundError("Product not found in database")
        url = f"{self.base_url}/{barcode}.json"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url)
                if response.status_code == 404:
                    raise ProductNotFoundError("Product not found in database")
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Product lookup failed for {barcode}: {e}")
            raise ProductLookupError("Failed to fetch product data") from e

        if not isinstance(data, dict) or data.get("status") == 0 or not isinstance(data.get("product"), dict):
            raise ProductNotFoundError("Product not found in database")
        return Product.from_api(barcode, data["product"])
