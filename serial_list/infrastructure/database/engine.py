"""Engine and session helpers for the acquisitions and holdings databases."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from serial_list.exceptions import QueryError
from serial_list.infrastructure.database.models import Base, HoldingsBase
from serial_list.logging_config import get_logger

logger = get_logger("database.engine")


def create_session_factory(database_url: str, echo: bool = False) -> sessionmaker[Session]:
    try:
        engine = create_engine(database_url, echo=echo)
    except (SQLAlchemyError, ImportError) as exc:
        raise QueryError(f"Cannot create engine for {database_url}: {exc}") from exc
    logger.debug("Created engine for %s", engine.url.render_as_string(hide_password=True))
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """Read-only session scope; nothing is ever committed."""
    session = factory()
    try:
        yield session
    finally:
        session.close()


def create_tables(orders_engine: Engine | None = None, holdings_engine: Engine | None = None) -> None:
    """Create the mapped tables. Used to build fixture databases."""
    if orders_engine is not None:
        Base.metadata.create_all(orders_engine)
    if holdings_engine is not None:
        HoldingsBase.metadata.create_all(holdings_engine)
