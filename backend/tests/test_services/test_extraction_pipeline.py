"""
Tests for the extraction pipeline state machine.

Tests cover:
- PENDING -> DONE with persisted text, fields, clauses and obligations
- FAILED on unreadable source, parser errors and persistence errors
- Re-runs replacing results and recovery from FAILED
- Guard against concurrent runs on the same version
"""
import pytest
from sqlalchemy import func, select, update
from sqlalchemy.exc import OperationalError

from app.core.exceptions import (
    ExtractionError,
    ExtractionInProgressError,
    ExtractionPersistenceError,
    SourceUnavailableError,
    UnparseableContentError,
    VersionNotFoundError,
)
from app.models.clause import Clause
from app.models.contract import ContractVersion, ProcessingStatus
from app.models.obligation import Obligation, ObligationOwner
from app.services.extraction import EXTRACTED_TEXT_MAX_CHARS, ExtractionPipeline, run_extraction, scan_text


def _count(db, model, version_id) -> int:
    return db.scalar(
        select(func.count()).select_from(model).where(model.contract_version_id == version_id)
    )


class FailingParser:
    def parse_bytes(self, data: bytes):
        raise RuntimeError("xref table is corrupt")


class TestSuccessfulRun:
    """PENDING -> PROCESSING -> DONE."""

    def test_pending_version_ends_done(self, db, storage, make_version, text_parser):
        version = make_version()
        assert version.processing_status == ProcessingStatus.PENDING

        pipeline = ExtractionPipeline(storage=storage, parser=text_parser())
        result = pipeline.run(db, version.id)

        assert result.processing_status == ProcessingStatus.DONE
        assert result.extracted_text
        assert result.page_count == 2
        assert result.processed_at is not None
        assert result.error_message is None
        assert [c.name for c in result.clauses] == ["Payment Terms", "Term & Termination", "Confidentiality"]
        assert [c.sort_order for c in result.clauses] == [0, 1, 2]
        assert [o.owner for o in result.obligations] == [ObligationOwner.SUPPLIER, ObligationOwner.CLIENT]

    def test_derived_fields_are_stored(self, db, storage, make_version, text_parser):
        version = make_version()
        result = ExtractionPipeline(storage=storage, parser=text_parser()).run(db, version.id)

        assert result.extracted_data == {
            "effective_date": "2024-01-15",
            "expiry_date": "2027-01-14",
            "payment_terms": "Net 45",
            "renewal_terms": "Auto-renewal unless terminated with notice",
            "termination_notice_days": 60,
        }

    def test_extracted_text_is_truncated(self, db, storage, make_version, text_parser):
        version = make_version()
        parser = text_parser(text="x" * (EXTRACTED_TEXT_MAX_CHARS + 5000))
        result = ExtractionPipeline(storage=storage, parser=parser).run(db, version.id)

        assert len(result.extracted_text) == EXTRACTED_TEXT_MAX_CHARS

    def test_unmatched_text_stores_fallbacks(self, db, storage, make_version, text_parser):
        version = make_version()
        parser = text_parser(text="Lorem ipsum dolor sit amet.")
        result = ExtractionPipeline(storage=storage, parser=parser).run(db, version.id)

        assert result.processing_status == ProcessingStatus.DONE
        assert [c.name for c in result.clauses] == ["General Terms"]
        assert len(result.obligations) == 1
        assert result.extracted_data == {}

    def test_parallel_scans_match_sequential(self, sample_contract):
        sequential = scan_text(sample_contract, parallel=False)
        parallel = scan_text(sample_contract, parallel=True)

        assert sequential == parallel

    def test_real_pdf_bytes(self, db, storage, make_version, pdf_factory):
        pdf = pdf_factory([
            "Payment Terms: invoices are payable Net 30 from receipt of a valid invoice by Client.",
            "The Supplier shall maintain adequate insurance coverage throughout the term.",
        ])
        version = make_version(data=pdf)
        result = run_extraction(db, version.id, ExtractionPipeline(storage=storage))

        assert result.processing_status == ProcessingStatus.DONE
        assert result.page_count == 1
        assert "Net 30" in result.extracted_text
        assert result.extracted_data["payment_terms"] == "Net 30"


class TestRerun:
    """Results are replaced, never appended."""

    def test_second_run_replaces_rows(self, db, storage, make_version, text_parser):
        version = make_version()
        pipeline = ExtractionPipeline(storage=storage, parser=text_parser())
        pipeline.run(db, version.id)
        pipeline.run(db, version.id)

        assert _count(db, Clause, version.id) == 3
        assert _count(db, Obligation, version.id) == 2

    def test_failed_version_can_be_retried(self, db, storage, make_version, text_parser):
        version = make_version()
        with pytest.raises(UnparseableContentError):
            ExtractionPipeline(storage=storage, parser=FailingParser()).run(db, version.id)
        assert db.get(ContractVersion, version.id).processing_status == ProcessingStatus.FAILED

        result = ExtractionPipeline(storage=storage, parser=text_parser()).run(db, version.id)

        assert result.processing_status == ProcessingStatus.DONE
        assert result.error_message is None


class TestFailures:
    """PROCESSING -> FAILED leaves no extraction data behind."""

    def test_missing_source_fails(self, db, storage, make_version, text_parser):
        version = make_version(stored=False)
        parser = text_parser()

        with pytest.raises(SourceUnavailableError) as exc_info:
            ExtractionPipeline(storage=storage, parser=parser).run(db, version.id)

        assert exc_info.value.version_id == version.id
        assert parser.calls == 0
        failed = db.get(ContractVersion, version.id)
        db.refresh(failed)
        assert failed.processing_status == ProcessingStatus.FAILED
        assert failed.extracted_text is None
        assert failed.extracted_data is None
        assert "not found" in failed.error_message
        assert _count(db, Clause, version.id) == 0
        assert _count(db, Obligation, version.id) == 0

    def test_storage_read_error_fails(self, db, storage, make_version, text_parser, monkeypatch):
        version = make_version()

        def broken_read(storage_path):
            raise PermissionError("permission denied")

        monkeypatch.setattr(storage, "read_bytes", broken_read)

        with pytest.raises(SourceUnavailableError, match="permission denied"):
            ExtractionPipeline(storage=storage, parser=text_parser()).run(db, version.id)
        assert _count(db, Clause, version.id) == 0

    def test_parser_error_is_wrapped(self, db, storage, make_version):
        version = make_version()

        with pytest.raises(UnparseableContentError, match="xref table is corrupt"):
            ExtractionPipeline(storage=storage, parser=FailingParser()).run(db, version.id)

    def test_garbage_bytes_with_pdf_parser(self, db, storage, make_version):
        version = make_version(data=b"this is not a pdf at all")

        with pytest.raises(UnparseableContentError):
            ExtractionPipeline(storage=storage).run(db, version.id)
        assert db.get(ContractVersion, version.id).processing_status == ProcessingStatus.FAILED

    def test_persistence_error_leaves_no_partial_rows(
        self, db, storage, make_version, text_parser, monkeypatch
    ):
        version = make_version()
        original_commit = db.commit
        calls = {"count": 0}

        def commit_failing_on_results():
            calls["count"] += 1
            # First commit claims the version, second writes the results.
            if calls["count"] == 2:
                raise OperationalError("INSERT", {}, Exception("disk I/O error"))
            return original_commit()

        monkeypatch.setattr(db, "commit", commit_failing_on_results)

        with pytest.raises(ExtractionPersistenceError):
            ExtractionPipeline(storage=storage, parser=text_parser()).run(db, version.id)

        monkeypatch.setattr(db, "commit", original_commit)
        failed = db.get(ContractVersion, version.id)
        db.refresh(failed)
        assert failed.processing_status == ProcessingStatus.FAILED
        assert failed.extracted_text is None
        assert _count(db, Clause, version.id) == 0
        assert _count(db, Obligation, version.id) == 0

    def test_failure_after_done_clears_previous_results(
        self, db, storage, make_version, text_parser
    ):
        version = make_version()
        ExtractionPipeline(storage=storage, parser=text_parser()).run(db, version.id)

        with pytest.raises(ExtractionError):
            ExtractionPipeline(storage=storage, parser=FailingParser()).run(db, version.id)

        failed = db.get(ContractVersion, version.id)
        db.refresh(failed)
        assert failed.processing_status == ProcessingStatus.FAILED
        assert failed.extracted_data is None
        assert _count(db, Clause, version.id) == 0
        assert _count(db, Obligation, version.id) == 0


class TestGuards:
    """Version lookup and single-writer guard."""

    def test_unknown_version(self, db, storage, text_parser):
        import uuid

        with pytest.raises(VersionNotFoundError):
            ExtractionPipeline(storage=storage, parser=text_parser()).run(db, uuid.uuid4())

    def test_processing_version_is_not_claimed_twice(self, db, storage, make_version, text_parser):
        version = make_version()
        db.execute(
            update(ContractVersion)
            .where(ContractVersion.id == version.id)
            .values(processing_status=ProcessingStatus.PROCESSING)
        )
        db.commit()
        parser = text_parser()

        with pytest.raises(ExtractionInProgressError):
            ExtractionPipeline(storage=storage, parser=parser).run(db, version.id)

        assert parser.calls == 0
        current = db.get(ContractVersion, version.id)
        db.refresh(current)
        assert current.processing_status == ProcessingStatus.PROCESSING
