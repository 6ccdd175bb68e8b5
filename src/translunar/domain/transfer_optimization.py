# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Multi-start RAAN / apogee search for a translunar transfer.

Minimises the closest-approach distance between the transfer ellipse and
the Moon at a fixed lunar-orbit-insertion (LOI) epoch. Miss distance is
periodic and multi-modal in RAAN, so independent Nelder–Mead runs start
from a grid of RAAN × apogee seeds and the global best is kept.

The seed runs share no state: they are mapped (optionally on a
concurrent.futures.Executor) and min-reduced in seed order.
"""
import logging
from concurrent.futures import Executor
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

import numpy as np

from translunar.domain.anomaly import normalize_angle_deg, time_to_true_anomaly
from translunar.domain.closest_approach import closest_approach_to_point
from translunar.domain.orbital_mechanics import TransferConstants
from translunar.domain.simplex import (
    Bounds,
    SimplexResult,
    initial_simplex,
    nelder_mead_2d,
)
from translunar.ports.ephemeris import EphemerisProvider

logger = logging.getLogger(__name__)

_R_E = TransferConstants.R_EARTH_KM


@dataclass(frozen=True)
class OptimizerSettings:
    """Configuration of the multi-start transfer search."""
    perigee_alt_km: float = TransferConstants.DEFAULT_PERIGEE_ALT_KM
    tolerance_km: float = 1.0
    max_iterations: int = 150
    raan_seeds_deg: tuple[float, ...] = (0.0, 45.0, 90.0, 135.0, 180.0, 225.0, 270.0, 315.0)
    apogee_factors: tuple[float, ...] = (0.85, 0.90, 0.95, 1.00, 1.05, 1.10, 1.15)
    bounds: Bounds = Bounds(x_min=0.0, x_max=360.0, y_min=180.0, y_max=600_000.0)
    raan_step_deg: float = 10.0
    apogee_step_km: float = 5000.0
    samples: int = 61
    span_deg: float = 30.0


DEFAULT_SETTINGS = OptimizerSettings()

# Reduced search used for quick interactive runs and smoke tests
FAST_SETTINGS = replace(
    DEFAULT_SETTINGS,
    tolerance_km=5.0,
    max_iterations=40,
    apogee_factors=(0.97, 1.00, 1.03),
)


@dataclass(frozen=True)
class TransferSolution:
    """Best transfer geometry found for an LOI epoch."""
    raan_deg: float
    apogee_alt_km: float
    distance_km: float
    true_anomaly_deg: float


@dataclass(frozen=True)
class TransferPlan:
    """Optimised transfer with its implied trans-lunar injection epoch."""
    loi_epoch: datetime
    tli_epoch: datetime
    solution: TransferSolution
    perigee_alt_km: float

    @property
    def time_of_flight_s(self) -> float:
        return (self.loi_epoch - self.tli_epoch).total_seconds()


def seed_grid(
    moon_distance_km: float,
    settings: OptimizerSettings = DEFAULT_SETTINGS,
) -> list[tuple[float, float]]:
    """
    Starting (RAAN, apogee altitude) pairs.

    Apogee seeds scale the Moon's geocentric range, converted to altitude
    and clamped to the search bounds. RAAN varies slowest.
    """
    b = settings.bounds
    return [
        (raan, min(b.y_max, max(b.y_min, moon_distance_km * factor - _R_E)))
        for raan in settings.raan_seeds_deg
        for factor in settings.apogee_factors
    ]


def optimize_single_start(
    moon_position_km: "tuple[float, float, float] | np.ndarray",
    omega_deg: float,
    inclination_deg: float,
    raan0_deg: float,
    apogee0_km: float,
    settings: OptimizerSettings = DEFAULT_SETTINGS,
) -> SimplexResult:
    """
    One Nelder–Mead run from a single seed.

    The objective clamps RAAN and apogee to the settings' bounds before
    evaluating, so the search never leaves physical altitudes.
    """
    target = np.asarray(moon_position_km, dtype=np.float64)

    def objective(raan: float, apogee: float) -> float:
        raan, apogee = settings.bounds.clamp(raan, apogee)
        return closest_approach_to_point(
            target, raan, apogee, settings.perigee_alt_km,
            omega_deg, inclination_deg, settings.samples, settings.span_deg,
        ).distance_km

    simplex = initial_simplex(
        objective, raan0_deg, apogee0_km, settings.raan_step_deg, settings.apogee_step_km,
    )
    return nelder_mead_2d(
        objective, simplex,
        tolerance=settings.tolerance_km,
        max_iterations=settings.max_iterations,
    )


def optimize_transfer(
    loi_epoch: datetime,
    omega_deg: float,
    inclination_deg: float,
    seed_apogee_km: float | None,
    provider: EphemerisProvider,
    settings: OptimizerSettings = DEFAULT_SETTINGS,
    executor: Executor | None = None,
) -> TransferSolution:
    """
    Multi-start search over RAAN and apogee for the minimum Moon miss distance.

    Args:
        loi_epoch: Lunar-orbit-insertion epoch (UTC).
        omega_deg: Argument of periapsis of the transfer orbit (degrees).
        inclination_deg: Inclination of the transfer orbit (degrees).
        seed_apogee_km: Caller's apogee guess. Seeds are derived from the
            Moon's range at LOI instead; kept for call-site compatibility.
        provider: Ephemeris source for the Moon's position.
        settings: Search configuration.
        executor: Optional executor to run seeds concurrently.

    Returns:
        TransferSolution with RAAN in [0, 360), apogee inside bounds, the
        closest distance and the true anomaly at which it occurs.
    """
    moon_km = np.asarray(provider.position(loi_epoch), dtype=np.float64)
    moon_distance = float(np.linalg.norm(moon_km))
    seeds = seed_grid(moon_distance, settings)

    def run(seed: tuple[float, float]) -> SimplexResult:
        return optimize_single_start(
            moon_km, omega_deg, inclination_deg, seed[0], seed[1], settings,
        )

    if executor is None:
        results = [run(seed) for seed in seeds]
    else:
        results = list(executor.map(run, seeds))

    # min() keeps the first of equal values, so ties resolve in seed order
    best = min(results, key=lambda r: r.best.value).best
    unconverged = sum(1 for r in results if not r.converged)
    logger.debug(
        "LOI %s: best %.1f km from %d seeds (%d hit the iteration cap)",
        loi_epoch.isoformat(), best.value, len(results), unconverged,
    )

    raan, apogee = settings.bounds.clamp(best.x, best.y)
    raan = normalize_angle_deg(raan)

    approach = closest_approach_to_point(
        moon_km, raan, apogee, settings.perigee_alt_km,
        omega_deg, inclination_deg, settings.samples, settings.span_deg,
    )
    return TransferSolution(
        raan_deg=raan,
        apogee_alt_km=apogee,
        distance_km=approach.distance_km,
        true_anomaly_deg=approach.true_anomaly_deg,
    )


def tli_epoch(
    loi_epoch: datetime,
    solution: TransferSolution,
    perigee_alt_km: float = TransferConstants.DEFAULT_PERIGEE_ALT_KM,
) -> datetime:
    """Trans-lunar injection epoch: LOI minus perigee-to-encounter flight time."""
    flight_s = time_to_true_anomaly(
        solution.true_anomaly_deg, perigee_alt_km, solution.apogee_alt_km,
    )
    return loi_epoch - timedelta(seconds=flight_s)


def plan_transfer(
    loi_epoch: datetime,
    omega_deg: float,
    inclination_deg: float,
    provider: EphemerisProvider,
    settings: OptimizerSettings = DEFAULT_SETTINGS,
    executor: Executor | None = None,
) -> TransferPlan:
    """Optimise the transfer for an LOI epoch and derive its TLI epoch."""
    solution = optimize_transfer(
        loi_epoch, omega_deg, inclination_deg, None, provider, settings, executor,
    )
    if solution.distance_km > TransferConstants.LUNAR_SOI_KM:
        logger.warning(
            "LOI %s: closest approach %.0f km lies outside the lunar sphere of influence",
            loi_epoch.isoformat(), solution.distance_km,
        )
    return TransferPlan(
        loi_epoch=loi_epoch,
        tli_epoch=tli_epoch(loi_epoch, solution, settings.perigee_alt_km),
        solution=solution,
        perigee_alt_km=settings.perigee_alt_km,
    )
