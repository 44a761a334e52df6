"""
Single place to:
- Create a SQLAlchemy Engine from a DATABASE_URL
- Create a Session factory for repository operations
- Hold the declarative Base for ORM models

Nothing connects at import time; the app only builds an engine when the
database backend is enabled.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker


class Base(DeclarativeBase):
    pass


def make_engine(database_url: str, echo: bool = False) -> Engine:
    # pool_pre_ping=True = auto-detect dead connections (helps with long-lived processes).
    kwargs = {"pool_pre_ping": True, "echo": echo}
    if database_url.startswith("sqlite"):
        # handlers run in a thread pool
        kwargs["connect_args"] = {"check_same_thread": False}
    return create_engine(database_url, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    # Each repository call gets its own short-lived session from this factory.
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
