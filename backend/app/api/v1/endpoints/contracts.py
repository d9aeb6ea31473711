from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from app.api.v1.dependencies import get_db, get_storage
from app.core.config import settings
from app.schemas.contract import (
    ContractCreate,
    ContractFileCreate,
    ContractRead,
    ContractVersionRead,
)
from app.services import contracts as contract_service
from app.services.parsers import PdfParser
from app.services.storage import LocalFileStorage
from app.tasks.extraction import enqueue_extraction

logger = logging.getLogger(__name__)

router = APIRouter()

PDF_MIME_TYPE = "application/pdf"


async def _store_pdf(file: UploadFile, storage: LocalFileStorage) -> ContractFileCreate:
    if file.content_type != PDF_MIME_TYPE or not PdfParser().can_parse(file.filename or ""):
        raise HTTPException(status_code=400, detail="PDF file required")

    try:
        data = await file.read()
    finally:
        await file.close()

    max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    if len(data) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds maximum allowed size ({settings.MAX_UPLOAD_SIZE_MB}MB)",
        )

    storage_path = storage.save_bytes(data, file.filename)
    return ContractFileCreate(
        storage_path=storage_path,
        file_name=file.filename,
        mime_type=PDF_MIME_TYPE,
        file_size_bytes=len(data),
    )


def _contract_payload(db: Session, contract_id: UUID) -> ContractRead:
    enriched_contract, latest_version = contract_service.get_contract_with_latest_version(db, contract_id)
    if not enriched_contract:
        raise HTTPException(status_code=500, detail="Unable to load saved contract")

    contract_payload = ContractRead.model_validate(enriched_contract, from_attributes=True)
    if latest_version:
        contract_payload.latest_version = ContractVersionRead.model_validate(
            latest_version, from_attributes=True
        )
    return contract_payload


@router.post("/upload", response_model=ContractRead, status_code=201)
async def upload_contract(
    file: UploadFile = File(...),
    title: str = Form(...),
    db: Session = Depends(get_db),
    storage: LocalFileStorage = Depends(get_storage),
) -> ContractRead:
    file_in = await _store_pdf(file, storage)
    contract = contract_service.create_contract_with_file_and_version(
        db, ContractCreate(title=title, file=file_in)
    )
    db.commit()

    contract_payload = _contract_payload(db, contract.id)
    enqueue_extraction(contract_payload.latest_version.id)
    logger.info("Uploaded contract %s; extraction queued", contract.id)
    return contract_payload


@router.post("/{contract_id}/versions", response_model=ContractVersionRead, status_code=201)
async def upload_contract_version(
    contract_id: UUID,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    storage: LocalFileStorage = Depends(get_storage),
) -> ContractVersionRead:
    contract, _ = contract_service.get_contract_with_latest_version(db, contract_id)
    if not contract:
        raise HTTPException(status_code=404, detail="Contract not found")

    file_in = await _store_pdf(file, storage)
    version = contract_service.add_version_for_file(db, contract, file_in)
    db.commit()
    db.refresh(version)

    enqueue_extraction(version.id)
    logger.info("Added version %s to contract %s", version.version_number, contract_id)
    return ContractVersionRead.model_validate(version, from_attributes=True)
