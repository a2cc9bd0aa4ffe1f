from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from src.core.config import settings


class Base(DeclarativeBase):
    pass


def build_engine(dsn: str):
    # SQLite connections are shared across the API's worker threads.
    connect_args = {"check_same_thread": False} if dsn.startswith("sqlite") else {}
    return create_engine(dsn, pool_pre_ping=True, connect_args=connect_args)


engine = build_engine(settings.database_dsn)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_session_factory() -> sessionmaker:
    return SessionLocal
