import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.models.contract import Contract, ContractFile, ContractVersion, ProcessingStatus
from app.services.parsers import BaseParser, ParseResult
from app.services.storage import LocalFileStorage

SAMPLE_CONTRACT = """MASTER SERVICES AGREEMENT
This Agreement is effective as of 2024-01-15 and expires on 2027-01-14.
Payment Terms: All invoices are payable Net 45 from the date of receipt by the Client finance team.
Termination: Either party may terminate this Agreement upon 60 days written notice to the other party.
Confidentiality: Each party shall keep the other party's confidential information secret and protected.
The Supplier shall maintain adequate insurance coverage throughout the term of this agreement. The Client shall pay all undisputed invoices within the agreed payment window. This Agreement will auto-renew for successive one year periods.
"""


def make_pdf(lines: list[str]) -> bytes:
    """Build a one-page PDF whose text layer holds ``lines``."""

    def escape(value: str) -> str:
        return value.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")

    content = "BT /F1 10 Tf 14 TL 50 760 Td " + " ".join(
        f"({escape(line)}) Tj T*" for line in lines
    ) + " ET"
    stream = f"<< /Length {len(content)} >>\nstream\n{content}\nendstream".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 5 0 R >> >> /Contents 4 0 R >>",
        stream,
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"
    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode()
    return bytes(out)


class StaticTextParser(BaseParser):
    """Parser stand-in that returns fixed text for any bytes."""

    SUPPORTED_EXTENSIONS = {".pdf"}

    def __init__(self, text: str = SAMPLE_CONTRACT, page_count: int = 2):
        self.text = text
        self.page_count = page_count
        self.calls = 0

    def parse_bytes(self, data: bytes) -> ParseResult:
        self.calls += 1
        return ParseResult(text=self.text, page_count=self.page_count)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage(tmp_path):
    return LocalFileStorage(tmp_path / "uploads")


@pytest.fixture
def make_version(db, storage):
    """Create a contract with one PENDING version backed by a stored file."""

    def _make(data: bytes = b"%PDF-1.4 placeholder", stored: bool = True) -> ContractVersion:
        storage_path = storage.save_bytes(data, "contract.pdf") if stored else "missing.pdf"
        contract = Contract(title="Master Services Agreement")
        file_entry = ContractFile(
            storage_path=storage_path,
            file_name="contract.pdf",
            mime_type="application/pdf",
            file_size_bytes=len(data),
            contract=contract,
        )
        version = ContractVersion(
            contract=contract,
            file=file_entry,
            version_number=1,
            is_current=True,
            processing_status=ProcessingStatus.PENDING,
        )
        db.add(contract)
        db.commit()
        return version

    return _make


@pytest.fixture
def sample_contract() -> str:
    return SAMPLE_CONTRACT


@pytest.fixture
def text_parser():
    """Factory for parsers that ignore the bytes and return fixed text."""
    return StaticTextParser


@pytest.fixture
def pdf_factory():
    return make_pdf
