import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from hany_realty.core.errors import StorageError
from hany_realty.models.listing import Listing
from hany_realty.schemas.listing import ListingCreate, ListingRead
from hany_realty.stores.listing_store import parse_listing_id

logger = logging.getLogger(__name__)


class SqlListingStore:
    """`listings` 테이블 기반 저장소. 각 작업은 세션 하나, commit 한 번."""

    backend_name = "database"

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _session(self) -> Session:
        return self.session_factory()

    def _fail(self, action: str) -> StorageError:
        logger.exception("Listing %s failed", action)
        return StorageError(f"listing {action} failed")

    def _get_row(self, db: Session, listing_id: str) -> Optional[Listing]:
        pk = parse_listing_id(listing_id)
        if pk is None:
            return None
        return db.query(Listing).filter(Listing.id == pk).first()

    def list_listings(self) -> List[ListingRead]:
        try:
            with self._session() as db:
                rows = db.query(Listing).order_by(Listing.id.desc()).all()
                return [ListingRead.model_validate(r) for r in rows]
        except SQLAlchemyError as exc:
            raise self._fail("list") from exc

    def get_listing(self, listing_id: str) -> Optional[ListingRead]:
        try:
            with self._session() as db:
                row = self._get_row(db, listing_id)
                return ListingRead.model_validate(row) if row else None
        except SQLAlchemyError as exc:
            raise self._fail("get") from exc

    def create_listing(self, data: ListingCreate) -> ListingRead:
        try:
            with self._session() as db:
                max_id = db.query(func.max(Listing.id)).scalar()
                row = Listing(
                    id=(max_id or 0) + 1,
                    **data.model_dump(),
                )
                db.add(row)
                db.commit()
                db.refresh(row)
                return ListingRead.model_validate(row)
        except SQLAlchemyError as exc:
            raise self._fail("create") from exc

    def update_listing(self, listing_id: str, changes: dict) -> Optional[ListingRead]:
        try:
            with self._session() as db:
                row = self._get_row(db, listing_id)
                if row is None:
                    return None
                for field, value in changes.items():
                    setattr(row, field, value)
                db.commit()
                db.refresh(row)
                return ListingRead.model_validate(row)
        except SQLAlchemyError as exc:
            raise self._fail("update") from exc

    def delete_listing(self, listing_id: str) -> bool:
        try:
            with self._session() as db:
                row = self._get_row(db, listing_id)
                if row is None:
                    return False
                db.delete(row)
                db.commit()
                return True
        except SQLAlchemyError as exc:
            raise self._fail("delete") from exc

    def set_completed(self, listing_id: str, completed: bool) -> Optional[ListingRead]:
        return self.update_listing(listing_id, {"completed": completed})

    def replace_all(self, listings: List[ListingRead]) -> int:
        try:
            with self._session() as db:
                db.query(Listing).delete()
                db.add_all(
                    Listing(**l.model_dump(exclude_none=True)) for l in listings
                )
                db.commit()
                return len(listings)
        except SQLAlchemyError as exc:
            raise self._fail("sync") from exc
