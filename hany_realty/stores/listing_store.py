"""
Listing persistence.

``ListingStore`` is the interface the routers depend on. Two backends
implement it: ``JsonListingStore`` (a flat ``listings.json`` file, read and
rewritten on every mutating call) and ``SqlListingStore`` in
``sql_listing_store``. Ids are compared as strings, so ``"7"`` and ``7``
address the same listing.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, List, Optional, Protocol

from pydantic import ValidationError

from hany_realty.schemas.listing import ListingCreate, ListingRead
from hany_realty.stores.json_file import JsonFile

logger = logging.getLogger(__name__)


class ListingStore(Protocol):
    backend_name: str

    def list_listings(self) -> List[ListingRead]:
        ...

    def get_listing(self, listing_id: str) -> Optional[ListingRead]:
        ...

    def create_listing(self, data: ListingCreate) -> ListingRead:
        ...

    def update_listing(self, listing_id: str, changes: dict) -> Optional[ListingRead]:
        ...

    def delete_listing(self, listing_id: str) -> bool:
        ...

    def set_completed(self, listing_id: str, completed: bool) -> Optional[ListingRead]:
        ...

    def replace_all(self, listings: List[ListingRead]) -> int:
        ...


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def next_listing_id(ids: Iterable[int]) -> int:
    return max(ids, default=0) + 1


def parse_listing_id(listing_id: str) -> Optional[int]:
    """
    경로의 id 문자열을 정수로. 저장된 id 의 문자열 표현과 정확히 같을 때만
    인정하므로 "01", " 1", "²" 는 어떤 id 와도 일치하지 않음.
    """
    text = str(listing_id)
    if not (text.isascii() and text.isdigit()):
        return None
    n = int(text)
    return n if str(n) == text else None


def newest_first(listings: Iterable[ListingRead]) -> List[ListingRead]:
    return sorted(listings, key=lambda l: l.id, reverse=True)


# ---------------------------
# sync 용 정리 함수
# ---------------------------
def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


def _number(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return None


def _positive_id(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        n = int(value.strip())
        return n if n > 0 else None
    return None


def normalize_sync_items(raw_items: List[Any]) -> List[ListingRead]:
    """
    클라이언트(localStorage)에 남아있는 매물 목록을 저장 가능한 형태로 정리.

    - 객체가 아닌 항목은 버림
    - images 가 없으면 예전 필드명 imgs 를 사용
    - id 가 없거나 중복이면 남은 id 최대값 다음 번호부터 새로 부여
    """
    now = utcnow()
    prepared: List[tuple[Optional[int], dict]] = []
    seen: set[int] = set()

    for item in raw_items:
        if not isinstance(item, dict):
            continue

        images = item.get("images")
        if not isinstance(images, list):
            images = item.get("imgs")

        listing_id = _positive_id(item.get("id"))
        if listing_id is not None and listing_id in seen:
            listing_id = None
        if listing_id is not None:
            seen.add(listing_id)

        prepared.append(
            (
                listing_id,
                {
                    "title": _text(item.get("title")),
                    "price": _text(item.get("price")),
                    "location": _text(item.get("location")),
                    "map_url": _text(item.get("mapUrl")),
                    "desc": _text(item.get("desc")),
                    "tags": _str_list(item.get("tags")),
                    "images": _str_list(images),
                    "lat": _number(item.get("lat")),
                    "lng": _number(item.get("lng")),
                    "completed": bool(item.get("completed")),
                    "created_at": item.get("createdAt"),
                    "updated_at": item.get("updatedAt"),
                },
            )
        )

    next_id = next_listing_id(seen)
    result: List[ListingRead] = []
    for listing_id, fields in prepared:
        if listing_id is None:
            listing_id = next_id
            next_id += 1
        try:
            listing = ListingRead.model_validate({"id": listing_id, **fields})
        except ValidationError:
            # 날짜 형식이 깨진 경우만 여기로 옴
            fields.update(created_at=None, updated_at=None)
            listing = ListingRead.model_validate({"id": listing_id, **fields})
        if listing.created_at is None:
            listing.created_at = now
        if listing.updated_at is None:
            listing.updated_at = now
        result.append(listing)

    return result


class JsonListingStore:
    backend_name = "file"

    def __init__(self, path: Path):
        self.file = JsonFile(path)

    def _load(self) -> List[ListingRead]:
        listings: List[ListingRead] = []
        for raw in self.file.read_list():
            if not isinstance(raw, dict):
                continue
            try:
                listings.append(ListingRead.model_validate(raw))
            except ValidationError as exc:
                logger.warning("Skipping malformed listing %r: %s", raw.get("id"), exc)
        return listings

    def _save(self, listings: List[ListingRead]) -> None:
        self.file.write([l.model_dump(mode="json", by_alias=True) for l in listings])

    @staticmethod
    def _find(listings: List[ListingRead], listing_id: str) -> Optional[ListingRead]:
        return next((l for l in listings if str(l.id) == str(listing_id)), None)

    def list_listings(self) -> List[ListingRead]:
        return newest_first(self._load())

    def get_listing(self, listing_id: str) -> Optional[ListingRead]:
        return self._find(self._load(), listing_id)

    def create_listing(self, data: ListingCreate) -> ListingRead:
        listings = self._load()
        now = utcnow()
        listing = ListingRead(
            id=next_listing_id(l.id for l in listings),
            created_at=now,
            updated_at=now,
            **data.model_dump(),
        )
        listings.append(listing)
        self._save(listings)
        return listing

    def update_listing(self, listing_id: str, changes: dict) -> Optional[ListingRead]:
        listings = self._load()
        target = self._find(listings, listing_id)
        if target is None:
            return None

        updated = target.model_copy(update={**changes, "updated_at": utcnow()})
        listings[listings.index(target)] = updated
        self._save(listings)
        return updated

    def delete_listing(self, listing_id: str) -> bool:
        listings = self._load()
        remaining = [l for l in listings if str(l.id) != str(listing_id)]
        if len(remaining) == len(listings):
            return False
        self._save(remaining)
        return True

    def set_completed(self, listing_id: str, completed: bool) -> Optional[ListingRead]:
        return self.update_listing(listing_id, {"completed": completed})

    def replace_all(self, listings: List[ListingRead]) -> int:
        self._save(listings)
        return len(listings)
