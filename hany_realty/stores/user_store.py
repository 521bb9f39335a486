import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from hany_realty.core.security import hash_password, verify_password
from hany_realty.schemas.user import UserRead, UserRecord
from hany_realty.stores.json_file import JsonFile

logger = logging.getLogger(__name__)

ADMIN_ID = "admin"


class DuplicateUserError(Exception):
    pass


class ReservedNicknameError(Exception):
    pass


def to_public(record: UserRecord) -> UserRead:
    return UserRead.model_validate(record.model_dump(exclude={"password", "password_hash"}))


class UserStore:
    """
    users.json 기반 회원 저장소.

    비밀번호는 PBKDF2 해시로만 저장한다. 예전 파일에 남아있는
    평문 ``password`` 는 로그인 비교에만 사용된다.
    """

    def __init__(self, path: Path):
        self.file = JsonFile(path)

    def _load(self) -> List[UserRecord]:
        users: List[UserRecord] = []
        for raw in self.file.read_list():
            if not isinstance(raw, dict):
                continue
            try:
                users.append(UserRecord.model_validate(raw))
            except ValidationError as exc:
                logger.warning("Skipping malformed user %r: %s", raw.get("id"), exc)
        return users

    def _save(self, users: List[UserRecord]) -> None:
        self.file.write(
            [u.model_dump(mode="json", by_alias=True, exclude_none=True) for u in users]
        )

    def ensure_admin(self, password: str) -> bool:
        """admin 계정이 정확히 하나 있도록 보장. 새로 만들었거나 정리했으면 True."""
        users = self._load()
        admins = [u for u in users if u.id == ADMIN_ID]

        if len(admins) == 1:
            return False

        if admins:
            # 중복 admin 은 첫 번째만 남김
            first = admins[0]
            users = [u for u in users if u.id != ADMIN_ID or u is first]
        else:
            users.append(
                UserRecord(
                    id=ADMIN_ID,
                    nickname=ADMIN_ID,
                    password_hash=hash_password(password),
                    role="admin",
                    created_at=datetime.now(timezone.utc),
                )
            )
        self._save(users)
        return True

    def list_users(self) -> List[UserRead]:
        return [to_public(u) for u in self._load()]

    def signup(self, nickname: str, phone: str, password: str) -> UserRead:
        if nickname == ADMIN_ID:
            raise ReservedNicknameError(nickname)

        users = self._load()
        for u in users:
            if u.nickname == nickname or u.id == nickname:
                raise DuplicateUserError(nickname)
            if phone and u.phone == phone:
                raise DuplicateUserError(phone)

        record = UserRecord(
            id=nickname,
            nickname=nickname,
            phone=phone,
            password_hash=hash_password(password),
            role="user",
            created_at=datetime.now(timezone.utc),
        )
        users.append(record)
        self._save(users)
        return to_public(record)

    def authenticate(self, nickname: str, password: str) -> Optional[UserRead]:
        for u in self._load():
            if u.nickname != nickname and u.id != nickname:
                continue
            if u.password_hash and verify_password(password, u.password_hash):
                return to_public(u)
            if u.password is not None and u.password == password:
                return to_public(u)
        return None
