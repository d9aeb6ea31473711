from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base


class Clause(Base):
    """Labeled excerpt extracted from a contract version."""

    __tablename__ = "clauses"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    contract_version_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("contract_versions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(length=128), nullable=False)
    category: Mapped[str] = mapped_column(String(length=64), nullable=False)
    extracted_text: Mapped[str] = mapped_column(Text, nullable=False)
    interpretation: Mapped[str | None] = mapped_column(Text)
    risk_notes: Mapped[str | None] = mapped_column(Text)
    page_ref: Mapped[str | None] = mapped_column(String(length=64))
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False)

    contract_version: Mapped["ContractVersion"] = relationship(
        "ContractVersion", back_populates="clauses"
    )
