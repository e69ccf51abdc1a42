"""DB engine, session and transaction scope"""
from collections.abc import Generator, Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from app.config import get_settings
from app.core.errors import ConflictError, PersistenceError

log = structlog.get_logger(__name__)

settings = get_settings()
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    echo=False,
    connect_args={"check_same_thread": False} if settings.database_url.startswith("sqlite") else {},
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Dependency: one session per request, always closed"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session, operation: str) -> Iterator[Session]:
    """All-or-nothing write scope: commit on exit, full rollback on any error.

    Integrity violations surface as ConflictError, every other DB failure as
    PersistenceError. Non-DB exceptions (e.g. validation) roll back and propagate.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as e:
        db.rollback()
        log.warning("transaction_conflict", operation=operation, error=str(e.orig))
        raise ConflictError(f"{operation}: constraint violated") from e
    except SQLAlchemyError as e:
        db.rollback()
        log.exception("transaction_failed", operation=operation)
        raise PersistenceError(f"{operation} failed") from e
    except BaseException:
        db.rollback()
        raise
