from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, Field


class DiffSegmentRead(BaseModel):
    added: bool
    removed: bool
    value: str
    count: int = Field(..., description="Number of lines in the segment")


class CompareRead(BaseModel):
    base_version_id: UUID
    other_version_id: UUID | None = None
    other_contract_id: UUID | None = None
    diff: str = Field(..., description="Unified rendering with +/-/space line prefixes")
    changes: list[DiffSegmentRead]
