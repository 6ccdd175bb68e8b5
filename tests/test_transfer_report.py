# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the closest-approach report and its CSV export."""
import csv
import io
import logging
from datetime import datetime, timezone

import pytest

from translunar.adapters.csv_exporter import CsvTransferReportExporter, write_report_csv
from translunar.domain.lunar_ephemeris import AnalyticLunarEphemeris
from translunar.domain.mission_profile import MissionWindow
from translunar.domain.transfer_optimization import (
    FAST_SETTINGS,
    TransferPlan,
    TransferSolution,
)
from translunar.domain.transfer_report import (
    REPORT_FIELDS,
    TransferReportRow,
    build_report,
    format_report_epoch,
    format_report_row,
)
from translunar.ports.export import TransferReportExporter

_HEADER = "mission,LOI_ISO,TLI_ISO,RAAN_deg,Apogee_km,Closest_km,TrueAnom_deg"


def _row() -> TransferReportRow:
    return TransferReportRow(
        mission="CY3",
        loi_epoch=datetime(2023, 8, 5, 11, 25, 58, tzinfo=timezone.utc),
        tli_epoch=datetime(2023, 7, 31, 12, 2, 41, tzinfo=timezone.utc),
        raan_deg=123.45678,
        apogee_km=378_029.04,
        closest_km=1.7234,
        true_anomaly_deg=182.0,
    )


class TestFormatting:

    def test_header_fields(self):
        assert ",".join(REPORT_FIELDS) == _HEADER

    def test_epoch_truncated_to_minutes(self):
        epoch = datetime(2023, 8, 5, 11, 25, 58, tzinfo=timezone.utc)
        assert format_report_epoch(epoch) == "2023-08-05T11:25Z"

    def test_row_values(self):
        assert format_report_row(_row()) == [
            "CY3",
            "2023-08-05T11:25Z",
            "2023-07-31T12:02Z",
            "123.457",
            "378029.0",
            "1.7",
            "182.00",
        ]

    def test_row_from_plan(self):
        loi = datetime(2023, 8, 5, 11, 25, 58, tzinfo=timezone.utc)
        tli = datetime(2023, 7, 31, 12, 0, 0, tzinfo=timezone.utc)
        plan = TransferPlan(
            loi_epoch=loi,
            tli_epoch=tli,
            solution=TransferSolution(12.5, 379_000.0, 42.0, 181.0),
            perigee_alt_km=180.0,
        )
        row = TransferReportRow.from_plan("CY2", plan)
        assert row.mission == "CY2"
        assert row.loi_epoch == loi
        assert row.tli_epoch == tli
        assert row.raan_deg == 12.5
        assert row.apogee_km == 379_000.0
        assert row.closest_km == 42.0
        assert row.true_anomaly_deg == 181.0


class TestCsvExport:

    def test_write_to_stream(self):
        buf = io.StringIO()
        count = write_report_csv([_row()], buf)
        assert count == 1
        lines = buf.getvalue().splitlines()
        assert lines[0] == _HEADER
        assert lines[1] == "CY3,2023-08-05T11:25Z,2023-07-31T12:02Z,123.457,378029.0,1.7,182.00"

    def test_export_file(self, tmp_path):
        path = str(tmp_path / "report.csv")
        count = CsvTransferReportExporter().export([_row(), _row()], path)
        assert count == 2
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 2
        assert rows[0]["mission"] == "CY3"
        assert rows[0]["Apogee_km"] == "378029.0"

    def test_empty_export_writes_header_and_warns(self, tmp_path, caplog):
        path = str(tmp_path / "empty.csv")
        with caplog.at_level(logging.WARNING, logger="translunar.adapters.csv_exporter"):
            count = CsvTransferReportExporter().export([], path)
        assert count == 0
        with open(path, encoding="utf-8") as f:
            assert f.read().strip() == _HEADER
        assert any("No report rows" in r.getMessage() for r in caplog.records)

    def test_exporter_implements_port(self):
        assert isinstance(CsvTransferReportExporter(), TransferReportExporter)


class TestBuildReport:

    @pytest.fixture(scope="class")
    def rows(self):
        window = MissionWindow(
            name="TEST",
            start=datetime(2023, 8, 1, tzinfo=timezone.utc),
            end=datetime(2023, 8, 10, tzinfo=timezone.utc),
        )
        return build_report(window, AnalyticLunarEphemeris(), settings=FAST_SETTINGS)

    def test_one_opportunity_per_crossing(self, rows):
        assert len(rows) == 1

    def test_row_contents(self, rows):
        row = rows[0]
        assert row.mission == "TEST"
        assert datetime(2023, 8, 1, tzinfo=timezone.utc) <= row.loi_epoch
        assert row.loi_epoch <= datetime(2023, 8, 10, tzinfo=timezone.utc)
        assert row.tli_epoch < row.loi_epoch
        assert 0.0 <= row.raan_deg < 360.0
        assert 150.0 <= row.true_anomaly_deg <= 210.0
