from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.v1.dependencies import get_db, get_pipeline
from app.core.exceptions import (
    ExtractionError,
    ExtractionInProgressError,
    VersionNotFoundError,
)
from app.schemas.extraction import ContractVersionDetail
from app.services import contracts as contract_service
from app.services.extraction import ExtractionPipeline

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{version_id}", response_model=ContractVersionDetail)
def read_version(version_id: UUID, db: Session = Depends(get_db)) -> ContractVersionDetail:
    version = contract_service.get_version(db, version_id)
    if not version:
        raise HTTPException(status_code=404, detail="Contract version not found")
    return ContractVersionDetail.model_validate(version, from_attributes=True)


@router.post("/{version_id}/extract", response_model=ContractVersionDetail)
def extract_version(
    version_id: UUID,
    db: Session = Depends(get_db),
    pipeline: ExtractionPipeline = Depends(get_pipeline),
) -> ContractVersionDetail:
    """Run extraction synchronously; a failed version can be re-submitted."""
    try:
        version = pipeline.run(db, version_id)
    except VersionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ExtractionInProgressError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ExtractionError as exc:
        logger.warning("Extraction for version %s failed: %s", version_id, exc)
        raise HTTPException(
            status_code=422,
            detail=f"Extraction failed, manual review required: {exc}",
        ) from exc
    return ContractVersionDetail.model_validate(version, from_attributes=True)
