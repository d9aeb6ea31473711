"""Pydantic schemas package."""
from app.schemas.compare import CompareRead, DiffSegmentRead
from app.schemas.contract import (
    ContractCreate,
    ContractFileCreate,
    ContractFileRead,
    ContractRead,
    ContractVersionRead,
)
from app.schemas.extraction import (
    ClauseRead,
    ContractVersionDetail,
    DerivedFields,
    ObligationRead,
)

__all__ = [
    "ClauseRead",
    "CompareRead",
    "ContractCreate",
    "ContractFileCreate",
    "ContractFileRead",
    "ContractRead",
    "ContractVersionDetail",
    "ContractVersionRead",
    "DerivedFields",
    "DiffSegmentRead",
    "ObligationRead",
]
