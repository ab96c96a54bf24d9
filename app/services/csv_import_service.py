"""
app/services/csv_import_service.py

Service layer for CSV metric import.

Each row is converted and validated on its own. A bad row is logged,
recorded in the summary and skipped; the rows after it are still imported.
Only stream-level problems (undecodable bytes, malformed CSV structure, an
unreadable upload) fail the whole request, and then no row is stored.
"""

from __future__ import annotations

import csv
import logging
import os
import tempfile
from functools import lru_cache
from typing import TextIO

from fastapi import UploadFile

from app.config import get_csv_import_settings
from app.domain.esg_metric import ImportSummary, MetricInput, MetricRecord, RowValidationError
from app.mappers.header_mapper import HeaderMapper, MappingResolution
from app.repositories.metric_store import MetricStore
from app.validators.csv_validator import CSVRowValidator
from app.validators.mapping_validator import MappingErrorDetail, SchemaMappingError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CSVImportError(Exception):
    """
    Base class for request-level CSV import failures.
    """


class CSVUploadTooLargeError(CSVImportError):
    """
    Raised when the upload exceeds the configured size limit.
    """


class CSVStreamError(CSVImportError):
    """
    Raised when the CSV stream cannot be decoded or parsed.
    """


class CSVSchemaMappingError(CSVImportError):
    """
    Raised when the header row cannot be mapped onto metric fields.
    """

    def __init__(self, *, message: str, errors: list[MappingErrorDetail]) -> None:
        super().__init__(message)
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, object]:
        return {
            "message": str(self),
            "errors": [error.to_dict() for error in self.errors],
        }


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class CSVImportService:
    """
    Coordinates CSV parsing, header mapping, row validation and store inserts.
    """

    def __init__(
        self,
        *,
        max_upload_bytes: int,
        max_validation_errors: int,
        log_validation_errors: bool,
        mapper: HeaderMapper | None = None,
        validator: CSVRowValidator | None = None,
    ) -> None:
        self._max_upload_bytes = max(1, max_upload_bytes)
        self._max_validation_errors = max(1, max_validation_errors)
        self._log_validation_errors = log_validation_errors
        self._mapper = mapper or HeaderMapper()
        self._validator = validator or CSVRowValidator()

    def import_csv(
        self,
        *,
        upload_file: UploadFile,
        store: MetricStore,
        validate_only: bool = False,
    ) -> ImportSummary:
        """
        Spool an uploaded CSV to a temporary file and import it.

        The temporary file is removed on every exit path.
        """

        temp_path = self._persist_temp_upload(upload_file)
        try:
            with open(temp_path, "r", encoding="utf-8-sig", newline="") as stream:
                summary = self.import_stream(stream, store=store, validate_only=validate_only)
        except OSError as exc:
            raise CSVStreamError("Uploaded CSV could not be read.") from exc
        finally:
            self._delete_file_quietly(temp_path)

        logger.info(
            "CSV import finished file=%r imported=%d failed=%d validate_only=%s",
            upload_file.filename,
            summary.rows_imported,
            summary.rows_failed,
            validate_only,
        )
        return summary

    def import_stream(
        self,
        stream: TextIO,
        *,
        store: MetricStore,
        validate_only: bool = False,
    ) -> ImportSummary:
        """
        Import metrics from an open text stream.

        An empty stream is a valid "nothing to import" outcome. Rows are
        validated while reading and committed only after the reader reaches
        the end of the stream; a stream-level failure stores nothing.
        """

        drafts: list[MetricInput] = []
        rows_processed = 0
        rows_failed = 0
        captured_errors: list[RowValidationError] = []

        try:
            reader = csv.DictReader(stream, strict=True)
            headers = reader.fieldnames
            if not headers:
                return ImportSummary(validate_only=validate_only)

            mapping = self._resolve_mapping(headers)

            for row_number, raw_row in enumerate(reader, start=2):
                rows_processed += 1

                if None in raw_row:
                    rows_failed += 1
                    self._record_error(
                        captured_errors,
                        RowValidationError(
                            row_number=row_number,
                            column=None,
                            message="Row has more fields than the header.",
                            value=None,
                        ),
                    )
                    continue

                if self._validator.is_completely_empty_row(raw_row):
                    rows_failed += 1
                    self._record_error(
                        captured_errors,
                        RowValidationError(
                            row_number=row_number,
                            column=None,
                            message="Completely empty rows are not allowed.",
                            value=None,
                        ),
                    )
                    continue

                mapped_row = self._mapper.map_row(raw_row=raw_row, mapping=mapping)
                parsed_row, row_errors = self._validator.validate_mapped_row(
                    mapped_row=mapped_row,
                    row_number=row_number,
                )
                if row_errors or parsed_row is None:
                    rows_failed += 1
                    for error in row_errors:
                        self._record_error(captured_errors, error)
                    continue

                drafts.append(parsed_row)

        except UnicodeDecodeError as exc:
            raise CSVStreamError("CSV must be UTF-8 encoded.") from exc
        except csv.Error as exc:
            raise CSVStreamError(f"Invalid CSV format: {exc}") from exc

        # Nothing is stored until the whole stream has parsed cleanly.
        imported: list[MetricRecord | MetricInput] = (
            list(drafts) if validate_only else [store.create(draft) for draft in drafts]
        )

        return ImportSummary(
            imported=imported,
            rows_processed=rows_processed,
            rows_failed=rows_failed,
            validation_errors=captured_errors,
            validate_only=validate_only,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve_mapping(self, headers: list[str]) -> MappingResolution:
        try:
            return self._mapper.resolve_mapping(headers)
        except SchemaMappingError as exc:
            raise CSVSchemaMappingError(message=exc.message, errors=list(exc.errors)) from exc

    def _record_error(
        self,
        captured_errors: list[RowValidationError],
        error: RowValidationError,
    ) -> None:
        if self._log_validation_errors:
            logger.warning(
                "CSV validation error row=%s column=%s message=%s value=%r",
                error.row_number,
                error.column,
                error.message,
                error.value,
            )

        if len(captured_errors) < self._max_validation_errors:
            captured_errors.append(error)

    def _persist_temp_upload(self, upload_file: UploadFile) -> str:
        upload_file.file.seek(0)
        written = 0

        with tempfile.NamedTemporaryFile(delete=False, prefix="esg_import_", suffix=".csv") as temp_file:
            temp_path = temp_file.name
            try:
                while True:
                    chunk = upload_file.file.read(_CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self._max_upload_bytes:
                        raise CSVUploadTooLargeError(
                            f"Uploaded file exceeds the {self._max_upload_bytes} byte limit."
                        )
                    temp_file.write(chunk)
            except BaseException:
                temp_file.close()
                self._delete_file_quietly(temp_path)
                raise

        return temp_path

    @staticmethod
    def _delete_file_quietly(file_path: str) -> None:
        try:
            os.remove(file_path)
        except OSError:
            return


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_csv_import_service() -> CSVImportService:
    """
    Build and cache the import service with env-driven settings.
    """

    settings = get_csv_import_settings()
    return CSVImportService(
        max_upload_bytes=settings.max_upload_bytes,
        max_validation_errors=settings.max_validation_errors,
        log_validation_errors=settings.log_validation_errors,
    )
