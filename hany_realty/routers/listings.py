import logging

from fastapi import APIRouter, Depends, status

from hany_realty.core.errors import ApiError, StorageError
from hany_realty.dependencies import get_listing_store
from hany_realty.schemas.listing import (
    CompleteToggle,
    ContractToggle,
    ListingCreate,
    ListingCreatedResponse,
    ListingRead,
    ListingResponse,
    ListingsResponse,
    ListingSync,
    ListingUpdate,
    OkResponse,
    SyncResponse,
)
from hany_realty.stores.listing_store import ListingStore, normalize_sync_items

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/listings", tags=["listings"])

NOT_FOUND = "해당 매물을 찾을 수 없습니다."
TITLE_REQUIRED = "매물 제목을 입력해주세요."


def _storage_failure(message: str) -> ApiError:
    return ApiError(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


def _get_listing_or_404(listing_id: str, store: ListingStore) -> ListingRead:
    listing = store.get_listing(listing_id)
    if listing is None:
        raise ApiError(NOT_FOUND, status.HTTP_404_NOT_FOUND)
    return listing


# ---------------------------
# 조회
# ---------------------------
@router.get("", response_model=ListingsResponse)
def list_listings(store: ListingStore = Depends(get_listing_store)):
    try:
        listings = store.list_listings()
    except StorageError:
        raise _storage_failure("매물 목록 조회 중 오류가 발생했습니다.")
    return {"ok": True, "listings": listings}


@router.get("/{listing_id}", response_model=ListingResponse)
def get_listing(listing_id: str, store: ListingStore = Depends(get_listing_store)):
    try:
        listing = _get_listing_or_404(listing_id, store)
    except StorageError:
        raise _storage_failure("매물 조회 중 오류가 발생했습니다.")
    return {"ok": True, "listing": listing}


# ---------------------------
# 등록 / 수정
# ---------------------------
@router.post("", response_model=ListingCreatedResponse)
def create_listing(
    listing_in: ListingCreate,
    store: ListingStore = Depends(get_listing_store),
):
    if listing_in.id is not None:
        raise ApiError(
            "신규 등록에는 id 를 보낼 수 없습니다. 수정은 PUT /api/listings/{id} 를 사용하세요.",
            status.HTTP_422_UNPROCESSABLE_ENTITY,
        )
    if not listing_in.title.strip():
        raise ApiError(TITLE_REQUIRED)

    try:
        listing = store.create_listing(listing_in)
        listings = store.list_listings()
    except StorageError:
        raise _storage_failure("매물 저장 중 오류가 발생했습니다.")

    logger.info("Created listing %s (%s)", listing.id, listing.title)
    return {"ok": True, "listing": listing, "listings": listings}


@router.post("/sync", response_model=SyncResponse)
def sync_listings(
    payload: ListingSync,
    store: ListingStore = Depends(get_listing_store),
):
    # 관리자 페이지 localStorage 의 매물 목록으로 저장소 전체를 덮어씀
    clean = normalize_sync_items(payload.listings)
    try:
        count = store.replace_all(clean)
    except StorageError:
        raise _storage_failure("매물 동기화 중 오류가 발생했습니다.")

    logger.info("Synced %d listings (%d received)", count, len(payload.listings))
    return {"ok": True, "count": count}


@router.put("/{listing_id}", response_model=ListingResponse)
def update_listing(
    listing_id: str,
    listing_in: ListingUpdate,
    store: ListingStore = Depends(get_listing_store),
):
    # 보내지 않은(또는 null) 필드는 건드리지 않음
    changes = listing_in.model_dump(exclude_unset=True, exclude_none=True)
    if "title" in changes and not changes["title"].strip():
        raise ApiError(TITLE_REQUIRED)

    try:
        listing = store.update_listing(listing_id, changes)
    except StorageError:
        raise _storage_failure("매물 수정 중 오류가 발생했습니다.")

    if listing is None:
        raise ApiError(NOT_FOUND, status.HTTP_404_NOT_FOUND)
    return {"ok": True, "listing": listing}


# ---------------------------
# 삭제
# ---------------------------
@router.delete("/{listing_id}", response_model=OkResponse)
def delete_listing(listing_id: str, store: ListingStore = Depends(get_listing_store)):
    try:
        deleted = store.delete_listing(listing_id)
    except StorageError:
        raise _storage_failure("매물 삭제 중 오류가 발생했습니다.")

    if not deleted:
        raise ApiError("삭제할 매물을 찾을 수 없습니다.", status.HTTP_404_NOT_FOUND)
    logger.info("Deleted listing %s", listing_id)
    return {"ok": True}


# ---------------------------
# 계약완료 / 해제
# ---------------------------
def _set_completed(listing_id: str, completed: bool, store: ListingStore) -> dict:
    try:
        listing = store.set_completed(listing_id, completed)
    except StorageError:
        raise _storage_failure("계약 상태 변경 중 오류가 발생했습니다.")

    if listing is None:
        raise ApiError(NOT_FOUND, status.HTTP_404_NOT_FOUND)
    return {"ok": True, "listing": listing}


@router.patch("/{listing_id}/complete", response_model=ListingResponse)
def toggle_complete(
    listing_id: str,
    body: CompleteToggle = CompleteToggle(),
    store: ListingStore = Depends(get_listing_store),
):
    return _set_completed(listing_id, body.completed, store)


@router.post("/{listing_id}/contract", response_model=ListingResponse)
def toggle_contract(
    listing_id: str,
    body: ContractToggle = ContractToggle(),
    store: ListingStore = Depends(get_listing_store),
):
    return _set_completed(listing_id, body.contract_done, store)
