from __future__ import annotations

import logging
from uuid import UUID

from app.core.exceptions import ExtractionError
from app.db.session import SessionLocal
from app.services.extraction import run_extraction
from app.tasks.celery_app import celery_app

logger = logging.getLogger(__name__)


def enqueue_extraction(version_id: UUID) -> None:
    """Enqueue the Celery task for the provided contract version."""
    run_version_extraction.delay(str(version_id))


@celery_app.task(name="app.tasks.run_version_extraction")
def run_version_extraction(version_id: str) -> str:
    """Celery entry point; failures are recorded on the version, not retried."""
    session = SessionLocal()
    try:
        version = run_extraction(session, UUID(version_id))
        return version.processing_status.value
    except ExtractionError as exc:
        logger.error("Extraction task for version %s failed: %s", version_id, exc)
        raise
    finally:
        session.close()
