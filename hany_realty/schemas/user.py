from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


Role = Literal["user", "admin"]


class UserRecord(BaseModel):
    """users.json 에 저장되는 한 줄"""

    id: str
    nickname: str
    phone: str = ""
    password_hash: Optional[str] = None
    # 예전 버전 파일의 평문 비밀번호 (로그인 호환용으로만 읽음)
    password: Optional[str] = None
    role: Role = "user"
    created_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        # 예전 버전은 Date.now() 숫자를 id 로 사용
        if isinstance(value, (int, float)):
            return str(int(value))
        return value


class UserRead(BaseModel):
    id: str
    nickname: str
    phone: str = ""
    role: Role = "user"
    created_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserSignup(BaseModel):
    nickname: str = ""
    phone: str = ""
    password: str = ""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class UserLogin(BaseModel):
    nickname: str = ""
    password: str = ""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class UserResponse(BaseModel):
    ok: bool = True
    user: UserRead


class UsersResponse(BaseModel):
    ok: bool = True
    users: List[UserRead]
