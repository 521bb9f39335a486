from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# 프로젝트 루트 기준 BASE_DIR
BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    # 기본 앱 설정
    app_name: str = "Hany Realty"

    # 기존 Node 배포 환경의 NODE_ENV 도 그대로 받아줌
    app_env: str = Field(
        default="development",
        validation_alias=AliasChoices("app_env", "node_env"),
    )

    host: str = "0.0.0.0"
    port: int = 3000

    # DATABASE_URL 이 있으면 매물은 DB 테이블에 저장
    database_url: str | None = None

    # JSON 파일 DB 위치
    data_dir: Path = BASE_DIR / "data"
    listings_file: str = "listings.json"
    users_file: str = "users.json"
    contact_file: str = "contact-info.json"

    # 정적 파일 (관리자/사용자 페이지)
    static_dir: Path = BASE_DIR / "public"

    # 자동 생성되는 admin 계정 비밀번호
    admin_password: str = "admin1234"

    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def listings_path(self) -> Path:
        return self.data_dir / self.listings_file

    @property
    def users_path(self) -> Path:
        return self.data_dir / self.users_file

    @property
    def contact_path(self) -> Path:
        return self.data_dir / self.contact_file


@lru_cache
def get_settings() -> Settings:
    return Settings()
