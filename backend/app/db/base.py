"""Import all models here for Alembic migrations."""
from app.db.base_class import Base  # noqa: F401
from app.models.clause import Clause  # noqa: F401
from app.models.contract import Contract, ContractFile, ContractVersion  # noqa: F401
from app.models.obligation import Obligation  # noqa: F401
