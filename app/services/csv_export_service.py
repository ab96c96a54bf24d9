"""
app/services/csv_export_service.py

CSV export of the full metric collection.

Columns follow the fixed order of ``METRIC_COLUMNS`` and use its
human-readable titles, which the importer maps back onto record fields.
No filtering happens here.
"""

from __future__ import annotations

import csv
import io
import os
import tempfile
from collections.abc import Sequence
from functools import lru_cache
from typing import Any, TextIO

from app.domain.esg_metric import MetricRecord
from app.mappers.header_mapper import METRIC_COLUMNS, MetricColumn

EXPORT_FILENAME = "esg-metrics.csv"


def _format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return str(value)


class CSVExportService:
    """
    Serializes metric records to CSV.
    """

    def __init__(self, *, columns: Sequence[MetricColumn] = METRIC_COLUMNS) -> None:
        self._columns = tuple(columns)

    @property
    def headers(self) -> list[str]:
        return [column.title for column in self._columns]

    def write_csv(self, metrics: Sequence[MetricRecord], stream: TextIO) -> int:
        """
        Write a header row plus one row per metric; return the number of data rows.
        """

        writer = csv.writer(stream, lineterminator="\r\n")
        writer.writerow(self.headers)
        for record in metrics:
            writer.writerow(
                [_format_cell(getattr(record, column.attribute)) for column in self._columns]
            )
        return len(metrics)

    def render(self, metrics: Sequence[MetricRecord]) -> bytes:
        """
        Return the CSV document as UTF-8 bytes.
        """

        buffer = io.StringIO()
        self.write_csv(metrics, buffer)
        return buffer.getvalue().encode("utf-8")

    def write_temp_file(self, metrics: Sequence[MetricRecord]) -> tuple[str, int]:
        """
        Write the CSV to a named temporary file and return ``(path, rows)``.

        The caller owns the file; it is removed here only if writing fails.
        """

        with tempfile.NamedTemporaryFile(
            "w",
            delete=False,
            prefix="esg_export_",
            suffix=".csv",
            encoding="utf-8",
            newline="",
        ) as handle:
            temp_path = handle.name
            try:
                rows = self.write_csv(metrics, handle)
            except BaseException:
                handle.close()
                delete_file_quietly(temp_path)
                raise
        return temp_path, rows


def delete_file_quietly(file_path: str) -> None:
    try:
        os.remove(file_path)
    except OSError:
        return


@lru_cache(maxsize=1)
def get_csv_export_service() -> CSVExportService:
    return CSVExportService()
