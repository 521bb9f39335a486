from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base


Base = declarative_base()


def normalize_database_url(db_url: str) -> str:
    # Render/Heroku 는 'postgres://' 를 주지만 SQLAlchemy 는 'postgresql://' 만 인식
    if db_url.startswith("postgres://"):
        db_url = db_url.replace("postgres://", "postgresql://", 1)
    return db_url


def create_db_engine(database_url: str) -> Engine:
    db_url = normalize_database_url(database_url)
    return create_engine(
        db_url,
        # "check_same_thread" 는 SQLite 전용
        connect_args={"check_same_thread": False} if db_url.startswith("sqlite") else {},
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
