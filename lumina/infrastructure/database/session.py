# lumina/infrastructure/database/session.py

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from lumina.config.settings import settings
from lumina.infrastructure.database.base_model import BaseModel


def _build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        # one shared connection so an in-memory database survives across sessions/threads
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=settings.debug, pool_pre_ping=True)


engine = _build_engine(settings.database_url)

_SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


@contextmanager
def db_session() -> Iterator[Session]:
    session: Session = _SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_all() -> None:
    import lumina.infrastructure.database.models  # noqa: F401

    BaseModel.metadata.create_all(engine)


def drop_all() -> None:
    import lumina.infrastructure.database.models  # noqa: F401

    BaseModel.metadata.drop_all(engine)
