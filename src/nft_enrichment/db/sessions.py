"""Database engine and session management."""
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from nft_enrichment.config import get_settings
from nft_enrichment.db.models import (  # noqa: F401  # pylint: disable=unused-import
    Category, NftCategory, User)


def build_engine(database_url: str | None = None, echo: bool | None = None) -> Engine:
    """Create the synchronous SQLModel engine from settings (or explicit args)."""
    settings = get_settings()
    url = database_url or settings.database_url
    kwargs = {"echo": settings.sql_echo if echo is None else echo, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        # Directory lookups run in worker threads
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs.update(pool_size=5, max_overflow=10)
    return create_engine(url, **kwargs)


@contextmanager
def get_session(engine: Engine) -> Generator[Session, None, None]:
    """Yield a database session; closes and rolls back on error."""
    session = Session(engine)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(engine: Engine) -> None:
    """Create all tables. Safe to call on startup (idempotent for existing tables)."""
    SQLModel.metadata.create_all(engine)
