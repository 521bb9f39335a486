from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    Integer,
    JSON,
    String,
    Text,
)

from hany_realty.core.database import Base


class Listing(Base):
    __tablename__ = "listings"

    # id 는 저장소에서 max(id)+1 로 직접 할당
    id = Column(Integer, primary_key=True, autoincrement=False)

    title = Column(String(255), nullable=False)
    price = Column(String(100), nullable=False, default="")
    location = Column(String(255), nullable=False, default="")
    map_url = Column(Text, nullable=False, default="")
    # 'desc' 는 SQL 예약어라 컬럼명은 description
    desc = Column("description", Text, nullable=False, default="")

    tags = Column(JSON, nullable=False, default=list)
    # 이미지 URL 또는 data URL 목록
    images = Column(JSON, nullable=False, default=list)

    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)

    # 계약완료 여부
    completed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )
