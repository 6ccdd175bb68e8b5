# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for transfer report export.

Adapters implement this to write batch closest-approach solutions in
various formats.
"""
from typing import Protocol, runtime_checkable

from translunar.domain.transfer_report import TransferReportRow


@runtime_checkable
class TransferReportExporter(Protocol):
    """Port for exporting transfer report rows to a file."""

    def export(self, rows: list[TransferReportRow], path: str) -> int:
        """
        Write report rows to a file.

        Args:
            rows: Report rows in output order.
            path: Output file path.

        Returns:
            Number of rows exported.
        """
        ...
