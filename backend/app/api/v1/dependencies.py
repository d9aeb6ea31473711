from collections.abc import Generator

from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.services.extraction import ExtractionPipeline
from app.services.storage import LocalFileStorage


def get_db() -> Generator[Session, None, None]:
    """Yield a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_storage() -> LocalFileStorage:
    return LocalFileStorage()


def get_pipeline() -> ExtractionPipeline:
    return ExtractionPipeline()


__all__ = ["get_db", "get_pipeline", "get_storage"]
