# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CSV transfer report exporter.

Writes closest-approach solutions with the header
mission,LOI_ISO,TLI_ISO,RAAN_deg,Apogee_km,Closest_km,TrueAnom_deg.
External dependencies (csv, file I/O) are confined to this adapter.
"""
import csv
import logging
from typing import TextIO

from translunar.domain.transfer_report import (
    REPORT_FIELDS,
    TransferReportRow,
    format_report_row,
)
from translunar.ports.export import TransferReportExporter

logger = logging.getLogger(__name__)


def write_report_csv(rows: list[TransferReportRow], stream: TextIO) -> int:
    """Write header and rows to an open text stream; returns row count."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(REPORT_FIELDS)
    for row in rows:
        writer.writerow(format_report_row(row))
    return len(rows)


class CsvTransferReportExporter(TransferReportExporter):
    """Exports transfer report rows to a CSV file."""

    def export(self, rows: list[TransferReportRow], path: str) -> int:
        if not rows:
            logger.warning("No report rows to export; writing header only to %s", path)
        with open(path, 'w', newline='', encoding='utf-8') as f:
            count = write_report_csv(rows, f)
        logger.info("Wrote %d report rows to %s", count, path)
        return count
