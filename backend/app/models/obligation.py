from __future__ import annotations

import enum
import uuid
from datetime import date

from sqlalchemy import Date, Enum, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base


class ObligationOwner(str, enum.Enum):
    SUPPLIER = "Supplier"
    CLIENT = "Client"
    BOTH = "Both"


class ObligationStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    OVERDUE = "overdue"
    AT_RISK = "at-risk"


class Obligation(Base):
    """Duty statement extracted from a contract version."""

    __tablename__ = "obligations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    contract_version_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("contract_versions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    obligation: Mapped[str] = mapped_column(Text, nullable=False)
    owner: Mapped[ObligationOwner] = mapped_column(
        Enum(
            ObligationOwner,
            name="obligation_owner",
            native_enum=False,
            length=16,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
    )
    due_date: Mapped[date | None] = mapped_column(Date)
    status: Mapped[ObligationStatus] = mapped_column(
        Enum(
            ObligationStatus,
            name="obligation_status",
            native_enum=False,
            length=16,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        default=ObligationStatus.PENDING,
        nullable=False,
    )
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False)

    contract_version: Mapped["ContractVersion"] = relationship(
        "ContractVersion", back_populates="obligations"
    )
