"""
Line diff between the extracted texts of two contract versions.

The other side is either a specific version or the latest version of
another contract. Versions without extracted text compare as empty.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.api.v1.dependencies import get_db
from app.schemas.compare import CompareRead, DiffSegmentRead
from app.services import contracts as contract_service
from app.services.diff_engine import diff_lines

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{contract_id}/compare", response_model=CompareRead)
def compare_versions(
    contract_id: UUID,
    base_version: UUID | None = Query(default=None),
    other_version: UUID | None = Query(default=None),
    other_contract: UUID | None = Query(default=None),
    db: Session = Depends(get_db),
) -> CompareRead:
    if base_version is None or (other_version is None and other_contract is None):
        raise HTTPException(
            status_code=400,
            detail="Provide base_version and either other_version or other_contract",
        )

    base_text = contract_service.get_version_text(db, base_version)
    if other_version is not None:
        other_text = contract_service.get_version_text(db, other_version)
    else:
        other_text = contract_service.get_latest_version_text(db, other_contract)

    logger.info("Comparing version %s of contract %s", base_version, contract_id)
    result = diff_lines(base_text, other_text)

    return CompareRead(
        base_version_id=base_version,
        other_version_id=other_version,
        other_contract_id=other_contract,
        diff=result.unified,
        changes=[
            DiffSegmentRead(
                added=segment.added,
                removed=segment.removed,
                value=segment.text,
                count=segment.line_count,
            )
            for segment in result.segments
        ],
    )
