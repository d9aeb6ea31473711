from uuid import UUID


class ExtractionError(Exception):
    """Raised when the extraction pipeline cannot complete for a version."""

    def __init__(self, message: str, version_id: UUID | None = None) -> None:
        super().__init__(message)
        self.version_id = version_id


class SourceUnavailableError(ExtractionError):
    """Document bytes could not be read from storage."""


class UnparseableContentError(ExtractionError):
    """Text extraction failed (malformed or encrypted PDF)."""


class ExtractionPersistenceError(ExtractionError):
    """Extracted results could not be written."""


class VersionNotFoundError(ExtractionError):
    """No contract version exists with the requested id."""


class ExtractionInProgressError(ExtractionError):
    """Another extraction run currently owns the version."""
