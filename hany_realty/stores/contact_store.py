import logging
from pathlib import Path

from pydantic import ValidationError

from hany_realty.schemas.contact import ContactInfo
from hany_realty.stores.json_file import JsonFile

logger = logging.getLogger(__name__)


class ContactInfoStore:
    """연락처 정보 (이름, 전화, 카카오, Zalo, 텔레그램) 단일 레코드"""

    def __init__(self, path: Path):
        self.file = JsonFile(path)

    def get(self) -> ContactInfo:
        raw = self.file.read_dict()
        known = {k: v for k, v in raw.items() if k in ContactInfo.model_fields}
        try:
            return ContactInfo.model_validate(known)
        except ValidationError:
            logger.warning("Contact info file is malformed, using empty values")
            return ContactInfo()

    def set(self, info: ContactInfo) -> ContactInfo:
        # 부분 병합 없이 전체 덮어쓰기
        self.file.write(info.model_dump())
        return info
