from fastapi import APIRouter, Depends, status

from hany_realty.core.errors import ApiError, StorageError
from hany_realty.dependencies import get_contact_store
from hany_realty.schemas.contact import ContactInfo, ContactInfoResponse
from hany_realty.stores.contact_store import ContactInfoStore

router = APIRouter(prefix="/api/contact-info", tags=["contact-info"])


@router.get("", response_model=ContactInfoResponse)
def get_contact_info(store: ContactInfoStore = Depends(get_contact_store)):
    return {"ok": True, "contact": store.get()}


@router.post("", response_model=ContactInfoResponse)
def set_contact_info(
    body: ContactInfo,
    store: ContactInfoStore = Depends(get_contact_store),
):
    try:
        contact = store.set(body)
    except StorageError:
        raise ApiError("연락처 저장 중 오류가 발생했습니다.", status.HTTP_500_INTERNAL_SERVER_ERROR)
    return {"ok": True, "contact": contact}
