import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from nutrilens.domain.RecentScan import RecentScan
from nutrilens.events.event_helpers import publish_lookup_failed
from nutrilens.infra.Product_Api import ProductApiClient, ProductLookupError, ProductNotFoundError
from nutrilens.infra.Scan_Repository import ScanRepository
from nutrilens.infra.Storage import get_storage

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


def get_product_client() -> ProductApiClient:
    return ProductApiClient()


@router.get("/scan/{barcode}")
async def scan_product(barcode: str, servings: float = Query(1, gt=0, le=10),
                       client: ProductApiClient = Depends(get_product_client),
                       storage=Depends(get_storage)):
    """Look up a decoded barcode and remember it in the recent scans."""
    try:
        product = await client.lookup(barcode)
    except ProductNotFoundError as e:
        publish_lookup_failed("product", barcode, str(e))
        raise HTTPException(status_code=404, detail=str(e))
    except ProductLookupError as e:
        publish_lookup_failed("product", barcode, str(e))
        raise HTTPException(status_code=502, detail=str(e))

    if product.product_name:
        ScanRepository(storage).record(RecentScan.from_product(product))
    else:
        logger.info(f"Product {barcode} has no name; not added to recent scans")
    return product.to_dict(serving_multiplier=servings)


@router.get("/scans/recent")
def recent_scans(storage=Depends(get_storage)):
    return [scan.to_dict() for scan in ScanRepository(storage).list()]
