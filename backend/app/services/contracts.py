from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, selectinload

from app.models.contract import Contract, ContractFile, ContractVersion, ProcessingStatus
from app.schemas.contract import ContractCreate, ContractFileCreate


def create_contract_with_file_and_version(db: Session, data: ContractCreate) -> Contract:
    """Persist a new contract, its backing file, and the initial PENDING version."""

    contract = Contract(title=data.title)

    file_entry = ContractFile(
        storage_path=data.file.storage_path,
        file_name=data.file.file_name,
        mime_type=data.file.mime_type,
        file_size_bytes=data.file.file_size_bytes,
        contract=contract,
    )

    ContractVersion(
        contract=contract,
        file=file_entry,
        version_number=1,
        is_current=True,
        processing_status=ProcessingStatus.PENDING,
    )

    db.add(contract)
    db.flush()
    return contract


def add_version_for_file(
    db: Session, contract: Contract, file_data: ContractFileCreate
) -> ContractVersion:
    """Attach a new file to ``contract`` as its next, current version."""
    latest_number = db.scalar(
        select(func.max(ContractVersion.version_number)).where(
            ContractVersion.contract_id == contract.id
        )
    )
    db.execute(
        update(ContractVersion)
        .where(ContractVersion.contract_id == contract.id)
        .values(is_current=False)
    )

    file_entry = ContractFile(
        storage_path=file_data.storage_path,
        file_name=file_data.file_name,
        mime_type=file_data.mime_type,
        file_size_bytes=file_data.file_size_bytes,
        contract=contract,
    )
    version = ContractVersion(
        contract=contract,
        file=file_entry,
        version_number=(latest_number or 0) + 1,
        is_current=True,
        processing_status=ProcessingStatus.PENDING,
    )
    db.add(version)
    db.flush()
    return version


def get_contract_with_latest_version(
    db: Session, contract_id: UUID
) -> tuple[Contract | None, ContractVersion | None]:
    stmt = (
        select(Contract)
        .options(
            selectinload(Contract.versions).selectinload(ContractVersion.file),
        )
        .where(Contract.id == contract_id)
    )
    contract = db.scalar(stmt)
    if not contract:
        return None, None

    latest = next((v for v in contract.versions if v.is_current), None)
    if latest is None and contract.versions:
        latest = max(contract.versions, key=lambda v: v.version_number)
    return contract, latest


def get_version(db: Session, version_id: UUID) -> ContractVersion | None:
    stmt = (
        select(ContractVersion)
        .options(
            selectinload(ContractVersion.file),
            selectinload(ContractVersion.clauses),
            selectinload(ContractVersion.obligations),
        )
        .where(ContractVersion.id == version_id)
    )
    return db.scalar(stmt)


def get_version_text(db: Session, version_id: UUID) -> str:
    """Extracted text of a version, or an empty string when missing or unprocessed."""
    text = db.scalar(select(ContractVersion.extracted_text).where(ContractVersion.id == version_id))
    return text or ""


def get_latest_version_text(db: Session, contract_id: UUID) -> str:
    stmt = (
        select(ContractVersion.extracted_text)
        .where(ContractVersion.contract_id == contract_id)
        .order_by(ContractVersion.version_number.desc())
        .limit(1)
    )
    return db.scalar(stmt) or ""
