from pydantic import BaseModel, ConfigDict


class ContactInfo(BaseModel):
    name: str = ""
    phone: str = ""
    kakao: str = ""
    zalo: str = ""
    telegram: str = ""

    # 저장 시 모든 문자열 trim
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class ContactInfoResponse(BaseModel):
    ok: bool = True
    contact: ContactInfo
