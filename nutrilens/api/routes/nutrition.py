import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from nutrilens.domain.NutritionItem import NutritionItem, compute_totals
from nutrilens.events.event_helpers import publish_lookup_failed
from nutrilens.infra.Nutrition_Api import NutritionApiClient, NutritionLookupError
from nutrilens.utilities.validators import TotalsInput

router = APIRouter(prefix="/api/nutrition")
logger = logging.getLogger(__name__)


def get_nutrition_client() -> NutritionApiClient:
    return NutritionApiClient()


@router.get("/search")
async def search_nutrition(query: str = Query("", max_length=300),
                           client: NutritionApiClient = Depends(get_nutrition_client)):
    """Look up nutrition facts for a free-text query such as '100g oats'."""
    try:
        items = await client.search(query)
    except NutritionLookupError as e:
        publish_lookup_failed("nutrition", query, str(e))
        raise HTTPException(status_code=502, detail=str(e))
    message = None
    if query.strip() and not items:
        message = "No results found. Try a different search term."
    return {"query": query, "items": [item.to_dict() for item in items], "message": message}


@router.post("/totals")
def nutrition_totals(body: TotalsInput):
    """Totals for the ingredients selected in the meal calculator."""
    items = [NutritionItem.from_dict(item.model_dump()) for item in body.items]
    return {"count": len(items), "totals": compute_totals(items)}
