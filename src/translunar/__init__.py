# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Translunar

Plan Earth-to-Moon transfers for a launch-vehicle-constrained mission.
Finds lunar-orbit-insertion (LOI) opportunities at the Moon's equator
crossings, optimises the transfer ellipse's RAAN and apogee with a
multi-start Nelder–Mead search to minimise the Moon miss distance, and
derives the trans-lunar injection (TLI) epoch from Kepler's equation.
Includes an analytical lunar ephemeris, right-ascension / true-anomaly
conversions, mission windows and a CSV closest-approach report.
"""

from translunar.domain.orbital_mechanics import (
    TransferConstants,
    StateVector,
    OrbitalElements,
    orbital_period,
    format_period,
    perifocal_to_inertial,
    elements_from_state_vector,
)
from translunar.domain.anomaly import (
    KeplerSolution,
    solve_kepler,
    true_anomaly_from_time,
    time_to_true_anomaly,
    ra_from_true_anomaly,
    true_anomaly_from_ra,
)
from translunar.domain.lunar_ephemeris import (
    AnalyticLunarEphemeris,
    MoonSnapshot,
    moon_ecliptic_coordinates,
    moon_position_eci,
    moon_snapshot,
)
from translunar.domain.equator_crossing import (
    CrossingDirection,
    CrossingEvent,
    find_equator_crossings,
    find_ecliptic_node_crossings,
    find_optimal_loi_dates,
)
from translunar.domain.closest_approach import (
    ApproachResult,
    closest_approach,
)
from translunar.domain.simplex import (
    SimplexPoint,
    SimplexResult,
    nelder_mead_2d,
)
from translunar.domain.transfer_optimization import (
    OptimizerSettings,
    DEFAULT_SETTINGS,
    FAST_SETTINGS,
    TransferSolution,
    TransferPlan,
    optimize_transfer,
    tli_epoch,
    plan_transfer,
)
from translunar.domain.mission_profile import (
    MissionWindow,
    LaunchEvent,
    MISSION_WINDOWS,
    closest_allowed_inclination,
    closest_allowed_omega,
    spacecraft_elements_at,
)
from translunar.domain.transfer_report import (
    TransferReportRow,
    build_report,
)
from translunar.ports.ephemeris import EphemerisProvider

__all__ = [
    "TransferConstants",
    "StateVector",
    "OrbitalElements",
    "orbital_period",
    "format_period",
    "perifocal_to_inertial",
    "elements_from_state_vector",
    "KeplerSolution",
    "solve_kepler",
    "true_anomaly_from_time",
    "time_to_true_anomaly",
    "ra_from_true_anomaly",
    "true_anomaly_from_ra",
    "AnalyticLunarEphemeris",
    "MoonSnapshot",
    "moon_ecliptic_coordinates",
    "moon_position_eci",
    "moon_snapshot",
    "CrossingDirection",
    "CrossingEvent",
    "find_equator_crossings",
    "find_ecliptic_node_crossings",
    "find_optimal_loi_dates",
    "ApproachResult",
    "closest_approach",
    "SimplexPoint",
    "SimplexResult",
    "nelder_mead_2d",
    "OptimizerSettings",
    "DEFAULT_SETTINGS",
    "FAST_SETTINGS",
    "TransferSolution",
    "TransferPlan",
    "optimize_transfer",
    "tli_epoch",
    "plan_transfer",
    "MissionWindow",
    "LaunchEvent",
    "MISSION_WINDOWS",
    "closest_allowed_inclination",
    "closest_allowed_omega",
    "spacecraft_elements_at",
    "TransferReportRow",
    "build_report",
    "EphemerisProvider",
]
