import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from hany_realty.core.config import Settings, get_settings
from hany_realty.core.database import Base, create_db_engine, create_session_factory
from hany_realty.core.errors import StorageError, register_exception_handlers
from hany_realty.core.logging_config import setup_logging
from hany_realty.routers import auth, contact, health, listings, maps
from hany_realty.services.map_resolver import MapUrlResolver
from hany_realty.stores.contact_store import ContactInfoStore
from hany_realty.stores.listing_store import JsonListingStore
from hany_realty.stores.sql_listing_store import SqlListingStore
from hany_realty.stores.user_store import UserStore

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)

    # --- CORS (운영에서는 cors_origins 로 제한) ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- 저장소 구성 ---
    # DATABASE_URL 이 있으면 매물은 DB, 회원/연락처는 항상 JSON 파일
    engine = None
    if settings.database_url:
        engine = create_db_engine(settings.database_url)
        app.state.listing_store = SqlListingStore(create_session_factory(engine))
    else:
        app.state.listing_store = JsonListingStore(settings.listings_path)

    app.state.settings = settings
    app.state.user_store = UserStore(settings.users_path)
    app.state.contact_store = ContactInfoStore(settings.contact_path)
    app.state.map_resolver = MapUrlResolver()

    register_exception_handlers(app)

    @app.on_event("startup")
    def prepare_storage():
        logger.info("Listing backend: %s", app.state.listing_store.backend_name)
        if engine is not None:
            Base.metadata.create_all(bind=engine)

        try:
            if app.state.user_store.ensure_admin(settings.admin_password):
                logger.info("Seeded admin account")
        except StorageError:
            logger.error("Could not seed admin account, continuing without it")

    @app.on_event("shutdown")
    def close_storage():
        if engine is not None:
            engine.dispose()

    # --- Routers ---
    app.include_router(health.router)
    app.include_router(listings.router)
    app.include_router(auth.router)
    app.include_router(contact.router)
    app.include_router(maps.router)

    # --- 정적 파일 (API 라우터 뒤에 마운트) ---
    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    logger.info("Hany 부동산 서버가 http://localhost:%s 에서 실행 중", settings.port)
    uvicorn.run(
        "hany_realty.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )
