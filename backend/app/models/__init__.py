"""ORM models."""

# Import all models so they are registered with SQLAlchemy
from app.models.clause import Clause  # noqa
from app.models.contract import Contract, ContractFile, ContractVersion, ProcessingStatus  # noqa
from app.models.obligation import Obligation, ObligationOwner, ObligationStatus  # noqa

__all__ = [
    "Clause",
    "Contract",
    "ContractFile",
    "ContractVersion",
    "Obligation",
    "ObligationOwner",
    "ObligationStatus",
    "ProcessingStatus",
]
