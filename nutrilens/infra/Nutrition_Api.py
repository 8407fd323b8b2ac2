"""CalorieNinjas nutrition lookup client.

Free-text query in ("100g oats", "1 boiled egg"), list of NutritionItem out.
"""
import logging
from typing import List, Optional

import httpx

from nutrilens.domain.NutritionItem import NutritionItem
from nutrilens.utilities.config import CALORIENINJAS_API_KEY, CALORIENINJAS_URL, LOOKUP_TIMEOUT

logger = logging.getLogger(__name__)


class NutritionLookupError(Exception):
    """The nutrition service could not be reached or answered with an error."""


class NutritionApiClient:
    def __init__(self, api_key: str = CALORIENINJAS_API_KEY, url: str = CALORIENINJAS_URL,
                 timeout: float = LOOKUP_TIMEOUT, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def search(self, query: str) -> List[NutritionItem]:
        query = (query or "").strip()
        if not query:
            return []
        if not self.api_key:
            logger.warning("CALORIENINJAS_API_KEY not set; nutrition search will likely be rejected.")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.url, params={"query": query},
                                            headers={"X-Api-Key": self.api_key})
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Nutrition lookup failed for {query!r}: {e}")
            raise NutritionLookupError("Failed to fetch nutrition data. Please try again.") from e

        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise NutritionLookupError("Nutrition service returned an unexpected response.")
        return [NutritionItem.from_dict(item) for item in items if isinstance(item, dict)]
