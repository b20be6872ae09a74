import logging
import os
from typing import Optional
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session
from resume_quiz.config import get_settings

logger = logging.getLogger(__name__)

MEMORY_URL = "sqlite://"


def sqlite_url(db_path: str) -> str:
    """File URL for the score store, creating its directory on the way."""
    db_dir = os.path.dirname(db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)
    return f"sqlite:///{db_path}"


def create_db_engine(url: str) -> Engine:
    """SQLite engine shared by request threads.

    An in-memory database lives on a single connection, so every session
    sees the same tables.
    """
    kwargs = {"echo": False, "connect_args": {"check_same_thread": False}}
    if url == MEMORY_URL:
        kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


engine = create_db_engine(sqlite_url(get_settings().db_path))


def init_db(db_engine: Optional[Engine] = None):
    db_engine = db_engine or engine
    SQLModel.metadata.create_all(db_engine)
    logger.info("Score store ready at %s", db_engine.url)


def get_session():
    with Session(engine) as session:
        yield session
