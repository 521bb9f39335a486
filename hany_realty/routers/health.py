from fastapi import APIRouter, Depends

from hany_realty.dependencies import get_listing_store
from hany_realty.stores.listing_store import ListingStore

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health(store: ListingStore = Depends(get_listing_store)):
    return {"ok": True, "status": "ok", "backend": store.backend_name}
