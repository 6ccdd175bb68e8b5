# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Batch closest-approach report.

For every lunar equator crossing in a mission window, optimise the
transfer and record LOI, TLI and the winning geometry as one row.
"""
import logging
from concurrent.futures import Executor
from dataclasses import dataclass
from datetime import datetime

from translunar.domain.equator_crossing import find_optimal_loi_dates
from translunar.domain.mission_profile import MissionWindow
from translunar.domain.transfer_optimization import (
    DEFAULT_SETTINGS,
    OptimizerSettings,
    TransferPlan,
    plan_transfer,
)
from translunar.ports.ephemeris import EphemerisProvider

logger = logging.getLogger(__name__)

REPORT_FIELDS: tuple[str, ...] = (
    "mission", "LOI_ISO", "TLI_ISO", "RAAN_deg", "Apogee_km", "Closest_km", "TrueAnom_deg",
)


@dataclass(frozen=True)
class TransferReportRow:
    """One optimised LOI opportunity."""
    mission: str
    loi_epoch: datetime
    tli_epoch: datetime
    raan_deg: float
    apogee_km: float
    closest_km: float
    true_anomaly_deg: float

    @classmethod
    def from_plan(cls, mission: str, plan: TransferPlan) -> "TransferReportRow":
        return cls(
            mission=mission,
            loi_epoch=plan.loi_epoch,
            tli_epoch=plan.tli_epoch,
            raan_deg=plan.solution.raan_deg,
            apogee_km=plan.solution.apogee_alt_km,
            closest_km=plan.solution.distance_km,
            true_anomaly_deg=plan.solution.true_anomaly_deg,
        )


def format_report_epoch(epoch: datetime) -> str:
    """UTC timestamp truncated to minutes: YYYY-MM-DDTHH:MMZ."""
    return epoch.strftime("%Y-%m-%dT%H:%MZ")


def format_report_row(row: TransferReportRow) -> list[str]:
    """Row values as strings in REPORT_FIELDS order."""
    return [
        row.mission,
        format_report_epoch(row.loi_epoch),
        format_report_epoch(row.tli_epoch),
        f"{row.raan_deg:.3f}",
        f"{row.apogee_km:.1f}",
        f"{row.closest_km:.1f}",
        f"{row.true_anomaly_deg:.2f}",
    ]


def build_report(
    window: MissionWindow,
    provider: EphemerisProvider,
    inclination_deg: float = 21.5,
    omega_deg: float = 178.0,
    settings: OptimizerSettings = DEFAULT_SETTINGS,
    executor: Executor | None = None,
) -> list[TransferReportRow]:
    """
    Optimise every LOI opportunity in a mission window.

    Args:
        window: Mission name and calendar range.
        provider: Ephemeris source.
        inclination_deg: Transfer orbit inclination (degrees).
        omega_deg: Transfer orbit argument of periapsis (degrees).
        settings: Optimiser configuration (perigee included).
        executor: Optional executor for the per-seed optimiser runs.

    Returns:
        Rows in chronological LOI order.
    """
    loi_dates = find_optimal_loi_dates(provider, window.start, window.end)
    logger.info("%s: %d LOI opportunities", window.name, len(loi_dates))

    rows: list[TransferReportRow] = []
    for loi in loi_dates:
        plan = plan_transfer(loi, omega_deg, inclination_deg, provider, settings, executor)
        rows.append(TransferReportRow.from_plan(window.name, plan))
        logger.info(
            "%s LOI %s: RAAN %.3f°, apogee %.1f km, closest %.1f km",
            window.name, format_report_epoch(loi),
            plan.solution.raan_deg, plan.solution.apogee_alt_km, plan.solution.distance_km,
        )
    return rows
