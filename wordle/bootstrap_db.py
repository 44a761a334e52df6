"""
Dev convenience: create tables if they don't exist.
Call this at startup in local/dev only
"""

import logging

from sqlalchemy.engine import Engine

from . import models  # noqa: F401  (registers tables on Base.metadata)
from .db import Base

logger = logging.getLogger(__name__)


def create_all(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))
