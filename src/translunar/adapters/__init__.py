# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for ephemeris sources and report export.

External dependencies (csv, file I/O, astronomy-engine) are confined to
this layer. The astronomy-engine adapter is imported on demand, not here.
"""
from translunar.adapters.csv_exporter import CsvTransferReportExporter, write_report_csv

__all__ = ["CsvTransferReportExporter", "write_report_csv"]
