import os
import re

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


def normalize_database_url(raw_url: str) -> str:
    cleaned = re.sub(r"\s+", "", (raw_url or "").strip())
    if cleaned.startswith("postgres://"):
        cleaned = "postgresql://" + cleaned[len("postgres://") :]
    return cleaned


def _needs_ssl(url: str) -> bool:
    return ".rds.amazonaws.com" in url or ".aws.neon.tech" in url


def build_engine(database_url: str) -> Engine:
    url = normalize_database_url(database_url)
    engine_kwargs = {
        "pool_pre_ping": True,
    }

    if url.startswith("postgresql"):
        engine_kwargs.update(
            {
                "pool_recycle": int(os.getenv("DB_POOL_RECYCLE", "1800")),
                "pool_size": int(os.getenv("DB_POOL_SIZE", "5")),
                "max_overflow": int(os.getenv("DB_MAX_OVERFLOW", "10")),
            }
        )

        if _needs_ssl(url) and "sslmode=" not in url:
            engine_kwargs["connect_args"] = {"sslmode": "require"}
    elif url.startswith("sqlite"):
        # request handlers run in a threadpool
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if url in {"sqlite://", "sqlite:///:memory:"}:
            engine_kwargs["poolclass"] = StaticPool

    return create_engine(url, **engine_kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
