"""Engine, session and schema setup for dailyFocus.

`DATABASE_URL` selects the store: a local SQLite file by default, or any
SQLAlchemy URL (PostgreSQL in deployments). Values come from the environment
or a `.env` file.
"""

import os
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///./dailyfocus.db"
DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)


def _is_sqlite_url(database_url: str) -> bool:
    return (database_url or "").startswith("sqlite")


def _pool_settings() -> dict:
    """Connection pool sizing for server databases, read from env."""
    return {
        "pool_size": int(os.getenv("DB_POOL_SIZE", "5")),
        "max_overflow": int(os.getenv("DB_MAX_OVERFLOW", "5")),
        "pool_timeout": int(os.getenv("DB_POOL_TIMEOUT_SEC", "30")),
    }


def get_engine_kwargs(database_url: str) -> dict:
    """create_engine keyword arguments for a URL, without connecting."""
    kwargs: dict = {
        "echo": os.getenv("DEBUG", "False").lower() == "true",
        "pool_pre_ping": True,
    }
    if _is_sqlite_url(database_url):
        # Sessions are handed across FastAPI's worker threads
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs.update(_pool_settings())
    return kwargs


def _apply_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
    finally:
        cursor.close()


def build_engine(database_url: str) -> Engine:
    """Create an engine; SQLite engines get foreign keys and WAL on connect."""
    built = create_engine(database_url, **get_engine_kwargs(database_url))
    if _is_sqlite_url(database_url):
        event.listen(built, "connect", _apply_sqlite_pragmas)
    return built


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Session:
    """FastAPI dependency yielding a session that is closed after the request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(*, engine_override: Engine = None) -> None:
    """Create any missing tables."""
    # Registers the table classes on Base.metadata
    from dailyfocus.database import models  # noqa: F401

    Base.metadata.create_all(bind=engine_override or engine)
