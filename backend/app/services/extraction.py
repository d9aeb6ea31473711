"""
Extraction pipeline for a single contract version.

State machine: PENDING/DONE/FAILED -> PROCESSING -> DONE | FAILED.
Results (text, derived fields, clauses, obligations) are committed in one
transaction; a failure leaves the version FAILED with no extraction data.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
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
from app.models.obligation import Obligation
from app.schemas.extraction import DerivedFields
from app.services import contracts as contract_service
from app.services.clause_segmenter import ClausePayload, segment_clauses
from app.services.field_deriver import derive_fields
from app.services.obligation_extractor import ObligationPayload, extract_obligations
from app.services.parsers import BaseParser, ParseResult, PdfParser
from app.services.storage import LocalFileStorage

logger = logging.getLogger(__name__)

EXTRACTED_TEXT_MAX_CHARS = 100_000
ERROR_MESSAGE_MAX_CHARS = 2000

ScanResult = tuple[DerivedFields, list[ClausePayload], list[ObligationPayload]]


def scan_text(text: str, parallel: bool = False) -> ScanResult:
    """Run the three heuristic scanners over the same text."""
    if not parallel:
        return derive_fields(text), segment_clauses(text), extract_obligations(text)

    with ThreadPoolExecutor(max_workers=3, thread_name_prefix="extraction-scan") as pool:
        fields_future = pool.submit(derive_fields, text)
        clauses_future = pool.submit(segment_clauses, text)
        obligations_future = pool.submit(extract_obligations, text)
        return fields_future.result(), clauses_future.result(), obligations_future.result()


class ExtractionPipeline:
    """Runs text extraction and heuristic scanning for one version at a time."""

    def __init__(
        self,
        storage: LocalFileStorage | None = None,
        parser: BaseParser | None = None,
        parallel_scans: bool | None = None,
    ) -> None:
        self.storage = storage or LocalFileStorage()
        self.parser = parser or PdfParser()
        self.parallel_scans = (
            settings.PARALLEL_HEURISTIC_SCANS if parallel_scans is None else parallel_scans
        )

    def run(self, db: Session, version_id: UUID) -> ContractVersion:
        """
        Extract and persist results for ``version_id``.

        Raises:
            VersionNotFoundError: The version does not exist.
            ExtractionInProgressError: Another run already holds the version.
            ExtractionError: Any failure after entering PROCESSING; the version
                is left FAILED before the error is re-raised.
        """
        version = db.get(ContractVersion, version_id)
        if version is None:
            raise VersionNotFoundError(f"Contract version {version_id} not found", version_id)
        storage_path = version.file.storage_path

        self._claim(db, version_id)
        logger.info("Starting extraction for contract version %s", version_id)

        try:
            data = self._read_source(storage_path, version_id)
            parsed = self._extract_text(data, version_id)
            fields, clauses, obligations = scan_text(parsed.text, parallel=self.parallel_scans)
            self._commit_results(db, version_id, parsed, fields, clauses, obligations)
        except Exception as exc:
            logger.exception("Extraction failed for contract version %s", version_id)
            db.rollback()
            self._mark_failed(db, version_id, str(exc))
            if isinstance(exc, ExtractionError):
                raise
            raise ExtractionError(f"Extraction failed: {exc}", version_id) from exc

        logger.info(
            "Extraction finished for contract version %s: %d clauses, %d obligations",
            version_id,
            len(clauses),
            len(obligations),
        )
        return contract_service.get_version(db, version_id)

    def _claim(self, db: Session, version_id: UUID) -> None:
        """Move the version into PROCESSING unless another run already did."""
        result = db.execute(
            update(ContractVersion)
            .where(
                ContractVersion.id == version_id,
                ContractVersion.processing_status != ProcessingStatus.PROCESSING,
            )
            .values(processing_status=ProcessingStatus.PROCESSING, error_message=None)
            .execution_options(synchronize_session=False)
        )
        db.commit()
        if result.rowcount == 0:
            raise ExtractionInProgressError(
                f"Contract version {version_id} is already being processed", version_id
            )

    def _read_source(self, storage_path: str, version_id: UUID) -> bytes:
        try:
            if not self.storage.exists(storage_path):
                raise SourceUnavailableError(
                    f"Source document not found: {storage_path}", version_id
                )
            return self.storage.read_bytes(storage_path)
        except SourceUnavailableError:
            raise
        except Exception as exc:
            raise SourceUnavailableError(
                f"Unable to read source document {storage_path}: {exc}", version_id
            ) from exc

    def _extract_text(self, data: bytes, version_id: UUID) -> ParseResult:
        try:
            return self.parser.parse_bytes(data)
        except UnparseableContentError as exc:
            exc.version_id = version_id
            raise
        except Exception as exc:
            raise UnparseableContentError(f"Failed to extract text: {exc}", version_id) from exc

    def _commit_results(
        self,
        db: Session,
        version_id: UUID,
        parsed: ParseResult,
        fields: DerivedFields,
        clauses: list[ClausePayload],
        obligations: list[ObligationPayload],
    ) -> None:
        try:
            version = db.get(ContractVersion, version_id)
            version.extracted_text = parsed.text[:EXTRACTED_TEXT_MAX_CHARS]
            version.extracted_data = fields.model_dump(exclude_none=True)
            version.page_count = parsed.page_count
            version.error_message = None

            db.execute(
                delete(Clause)
                .where(Clause.contract_version_id == version_id)
                .execution_options(synchronize_session=False)
            )
            db.execute(
                delete(Obligation)
                .where(Obligation.contract_version_id == version_id)
                .execution_options(synchronize_session=False)
            )

            for index, clause in enumerate(clauses):
                db.add(
                    Clause(
                        contract_version_id=version_id,
                        name=clause.name,
                        category=clause.category,
                        extracted_text=clause.extracted_text,
                        interpretation=clause.interpretation,
                        risk_notes=clause.risk_notes,
                        page_ref=clause.page_ref,
                        sort_order=index,
                    )
                )
            for index, item in enumerate(obligations):
                db.add(
                    Obligation(
                        contract_version_id=version_id,
                        obligation=item.obligation,
                        owner=item.owner,
                        due_date=item.due_date,
                        status=item.status,
                        sort_order=index,
                    )
                )

            version.processing_status = ProcessingStatus.DONE
            version.processed_at = datetime.now(timezone.utc)
            db.commit()
        except SQLAlchemyError as exc:
            raise ExtractionPersistenceError(
                f"Failed to persist extraction results: {exc}", version_id
            ) from exc

    def _mark_failed(self, db: Session, version_id: UUID, error_message: str) -> None:
        try:
            db.execute(delete(Clause).where(Clause.contract_version_id == version_id))
            db.execute(delete(Obligation).where(Obligation.contract_version_id == version_id))
            db.execute(
                update(ContractVersion)
                .where(ContractVersion.id == version_id)
                .values(
                    processing_status=ProcessingStatus.FAILED,
                    extracted_text=None,
                    extracted_data=None,
                    page_count=None,
                    error_message=error_message[:ERROR_MESSAGE_MAX_CHARS],
                    processed_at=datetime.now(timezone.utc),
                )
            )
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Unable to mark contract version %s as failed", version_id)


def run_extraction(
    db: Session, version_id: UUID, pipeline: ExtractionPipeline | None = None
) -> ContractVersion:
    """Run the extraction pipeline for one version with default collaborators."""
    return (pipeline or ExtractionPipeline()).run(db, version_id)
