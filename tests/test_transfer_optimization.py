# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the multi-start RAAN / apogee transfer search."""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from translunar.domain.closest_approach import closest_approach_to_point
from translunar.domain.lunar_ephemeris import AnalyticLunarEphemeris
from translunar.domain.orbital_mechanics import TransferConstants, orbital_period
from translunar.domain.transfer_optimization import (
    DEFAULT_SETTINGS,
    FAST_SETTINGS,
    OptimizerSettings,
    TransferPlan,
    TransferSolution,
    optimize_single_start,
    optimize_transfer,
    plan_transfer,
    seed_grid,
    tli_epoch,
)

# Equator crossing used as the reference LOI (Chandrayaan-3 profile)
_LOI = datetime(2023, 8, 5, 11, 25, 58, 258000, tzinfo=timezone.utc)
_OMEGA = 178.0
_INC = 21.5


class _FixedProvider:
    """Ephemeris stub returning a constant Moon position."""

    def __init__(self, position_km):
        self._pos = position_km

    def position(self, epoch):
        return self._pos

    def position_and_velocity(self, epoch):
        return self._pos, (0.0, 0.0, 0.0)


@pytest.fixture(scope="module")
def reference_solution():
    return optimize_transfer(_LOI, _OMEGA, _INC, 378_029.0, AnalyticLunarEphemeris())


class TestSeedGrid:

    def test_default_grid_size(self):
        seeds = seed_grid(384_400.0)
        assert len(seeds) == 8 * 7

    def test_raan_varies_slowest(self):
        seeds = seed_grid(384_400.0)
        assert seeds[0][0] == 0.0
        assert seeds[6][0] == 0.0
        assert seeds[7][0] == 45.0

    def test_apogee_seeds_scale_moon_range(self):
        seeds = seed_grid(384_400.0)
        assert seeds[0][1] == pytest.approx(384_400.0 * 0.85 - TransferConstants.R_EARTH_KM)
        assert seeds[3][1] == pytest.approx(384_400.0 - TransferConstants.R_EARTH_KM)

    def test_apogee_seeds_clamped(self):
        seeds = seed_grid(2_000_000.0)
        assert all(apo == 600_000.0 for _, apo in seeds)


class TestSettings:

    def test_defaults(self):
        s = OptimizerSettings()
        assert s.perigee_alt_km == 180.0
        assert s.tolerance_km == 1.0
        assert s.max_iterations == 150
        assert s.bounds.y_min == 180.0
        assert s.bounds.y_max == 600_000.0

    def test_fast_settings_reduce_work(self):
        assert FAST_SETTINGS.max_iterations < DEFAULT_SETTINGS.max_iterations
        assert len(FAST_SETTINGS.apogee_factors) < len(DEFAULT_SETTINGS.apogee_factors)


class TestSingleStart:

    def test_result_improves_on_seed(self):
        moon = AnalyticLunarEphemeris().position(_LOI)
        result = optimize_single_start(moon, _OMEGA, _INC, 0.0, 378_000.0)
        seed_distance = closest_approach_to_point(
            moon, 0.0, 378_000.0, 180.0, _OMEGA, _INC,
        ).distance_km
        assert result.best.value <= seed_distance


class TestOptimizeTransfer:

    def test_reference_scenario_reaches_moon(self, reference_solution):
        """Multi-start search brings the apogee within capture range of the Moon."""
        assert isinstance(reference_solution, TransferSolution)
        assert reference_solution.distance_km <= 2000.0

    def test_solution_within_bounds(self, reference_solution):
        assert 0.0 <= reference_solution.raan_deg < 360.0
        assert 180.0 <= reference_solution.apogee_alt_km <= 600_000.0
        assert 150.0 <= reference_solution.true_anomaly_deg <= 210.0

    def test_deterministic(self, reference_solution):
        again = optimize_transfer(_LOI, _OMEGA, _INC, None, AnalyticLunarEphemeris())
        assert again == reference_solution

    def test_executor_matches_sequential(self):
        provider = AnalyticLunarEphemeris()
        sequential = optimize_transfer(_LOI, _OMEGA, _INC, None, provider, FAST_SETTINGS)
        with ThreadPoolExecutor(max_workers=4) as pool:
            parallel = optimize_transfer(
                _LOI, _OMEGA, _INC, None, provider, FAST_SETTINGS, executor=pool,
            )
        assert parallel == sequential

    def test_fast_settings_bounded(self):
        sol = optimize_transfer(_LOI, _OMEGA, _INC, None, AnalyticLunarEphemeris(), FAST_SETTINGS)
        assert 0.0 <= sol.raan_deg < 360.0
        assert 180.0 <= sol.apogee_alt_km <= 600_000.0


class TestTliEpoch:

    def test_apogee_encounter_half_period_before_loi(self):
        sol = TransferSolution(
            raan_deg=0.0, apogee_alt_km=380_000.0, distance_km=0.0, true_anomaly_deg=180.0,
        )
        half = orbital_period(180.0, 380_000.0) / 2.0
        expected = _LOI - timedelta(seconds=half)
        assert abs((tli_epoch(_LOI, sol) - expected).total_seconds()) < 1e-3

    def test_tli_precedes_loi_by_days(self, reference_solution):
        tli = tli_epoch(_LOI, reference_solution)
        days = (_LOI - tli).total_seconds() / 86400.0
        assert 3.0 < days < 7.0


class TestPlanTransfer:

    def test_plan_fields(self):
        plan = plan_transfer(_LOI, _OMEGA, _INC, AnalyticLunarEphemeris(), FAST_SETTINGS)
        assert isinstance(plan, TransferPlan)
        assert plan.loi_epoch == _LOI
        assert plan.tli_epoch < plan.loi_epoch
        assert plan.perigee_alt_km == FAST_SETTINGS.perigee_alt_km
        assert plan.time_of_flight_s == pytest.approx(
            (plan.loi_epoch - plan.tli_epoch).total_seconds()
        )

    def test_unreachable_moon_warns(self, caplog):
        settings = replace(FAST_SETTINGS, raan_seeds_deg=(0.0,), apogee_factors=(1.0,))
        provider = _FixedProvider((2_000_000.0, 0.0, 0.0))
        with caplog.at_level(logging.WARNING, logger="translunar.domain.transfer_optimization"):
            plan = plan_transfer(_LOI, _OMEGA, _INC, provider, settings)
        assert plan.solution.distance_km > TransferConstants.LUNAR_SOI_KM
        assert any("sphere of influence" in r.getMessage() for r in caplog.records)
