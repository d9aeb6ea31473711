from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.models.contract import ProcessingStatus
from app.models.obligation import ObligationOwner, ObligationStatus


class DerivedFields(BaseModel):
    """Best-effort structured terms; ``None`` means no pattern matched."""

    effective_date: str | None = None
    expiry_date: str | None = None
    payment_terms: str | None = None
    renewal_terms: str | None = None
    termination_notice_days: int | None = None

    model_config = ConfigDict(validate_assignment=True)


class ClauseRead(BaseModel):
    id: UUID
    contract_version_id: UUID
    name: str
    category: str
    extracted_text: str
    interpretation: str | None
    risk_notes: str | None
    page_ref: str | None
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class ObligationRead(BaseModel):
    id: UUID
    contract_version_id: UUID
    obligation: str
    owner: ObligationOwner
    due_date: date | None
    status: ObligationStatus
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class ContractVersionDetail(BaseModel):
    id: UUID
    contract_id: UUID
    file_id: UUID
    version_number: int
    is_current: bool
    processing_status: ProcessingStatus
    extracted_data: DerivedFields | None = None
    page_count: int | None = None
    error_message: str | None = None
    created_at: datetime
    processed_at: datetime | None = None
    clauses: list[ClauseRead] = []
    obligations: list[ObligationRead] = []

    model_config = ConfigDict(from_attributes=True)
