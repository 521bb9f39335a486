from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# 프론트는 camelCase(mapUrl, createdAt ...) 로 주고받음
CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ListingRead(BaseModel):
    id: int
    title: str = ""
    price: str = ""
    location: str = ""
    map_url: str = ""
    desc: str = ""
    tags: List[str] = []
    images: List[str] = []
    lat: Optional[float] = None
    lng: Optional[float] = None
    completed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ListingCreate(BaseModel):
    """
    신규 등록 전용. 기존 매물 수정은 PUT /api/listings/{id}.

    id 는 받기만 하고 저장하지 않음 (라우터에서 PUT 안내 에러로 거절).
    completed, createdAt 같은 읽기 전용 필드는 422.
    """

    id: Optional[Any] = Field(default=None, exclude=True)
    # 빈 제목은 422 가 아니라 ok:false 로 돌려주기 위해 기본값 ""
    title: str = ""
    price: str = ""
    location: str = ""
    map_url: str = ""
    desc: str = ""
    tags: List[str] = []
    images: List[str] = []
    lat: Optional[float] = None
    lng: Optional[float] = None

    model_config = ConfigDict(**CAMEL_CONFIG, extra="forbid")


class ListingUpdate(BaseModel):
    title: Optional[str] = None
    price: Optional[str] = None
    location: Optional[str] = None
    map_url: Optional[str] = None
    desc: Optional[str] = None
    tags: Optional[List[str]] = None
    images: Optional[List[str]] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    model_config = ConfigDict(**CAMEL_CONFIG, extra="forbid")


class CompleteToggle(BaseModel):
    completed: bool = False

    model_config = ConfigDict(**CAMEL_CONFIG, extra="forbid")


class ContractToggle(BaseModel):
    contract_done: bool = False

    model_config = ConfigDict(**CAMEL_CONFIG, extra="forbid")


class ListingSync(BaseModel):
    # 항목 단위 정리는 저장소에서 (객체가 아닌 항목은 버림)
    listings: List[Any] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


# --- 응답 envelope ---

class ListingResponse(BaseModel):
    ok: bool = True
    listing: ListingRead


class ListingCreatedResponse(ListingResponse):
    listings: List[ListingRead]


class ListingsResponse(BaseModel):
    ok: bool = True
    listings: List[ListingRead]


class SyncResponse(BaseModel):
    ok: bool = True
    count: int


class OkResponse(BaseModel):
    ok: bool = True
