# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the closest-approach grid search around apogee."""
from datetime import datetime, timezone

import numpy as np
import pytest

from translunar.domain.closest_approach import (
    ApproachResult,
    closest_approach,
    closest_approach_to_point,
    spacecraft_position,
)
from translunar.domain.lunar_ephemeris import AnalyticLunarEphemeris

_ORBIT = dict(
    raan_deg=40.0,
    apogee_alt_km=378_000.0,
    perigee_alt_km=180.0,
    omega_deg=178.0,
    inclination_deg=21.5,
)
_LOI = datetime(2023, 8, 5, 11, 25, 58, tzinfo=timezone.utc)


class _FixedProvider:
    """Ephemeris stub returning a constant Moon position."""

    def __init__(self, position_km):
        self._pos = tuple(float(c) for c in position_km)

    def position(self, epoch):
        return self._pos

    def position_and_velocity(self, epoch):
        return self._pos, (0.0, 0.0, 0.0)


class TestClosestApproachToPoint:

    def test_target_on_orbit_at_apogee(self):
        target = spacecraft_position(180.0, **_ORBIT)
        result = closest_approach_to_point(target, **_ORBIT)
        assert isinstance(result, ApproachResult)
        assert result.distance_km < 1e-6
        assert result.true_anomaly_deg == pytest.approx(180.0)

    def test_target_on_grid_point(self):
        """61 samples over 150°–210° is a 1° grid."""
        target = spacecraft_position(165.0, **_ORBIT)
        result = closest_approach_to_point(target, **_ORBIT)
        assert result.distance_km < 1e-6
        assert result.true_anomaly_deg == pytest.approx(165.0)

    def test_true_anomaly_within_window(self):
        result = closest_approach_to_point((0.0, 0.0, 400_000.0), **_ORBIT)
        assert 150.0 <= result.true_anomaly_deg <= 210.0

    def test_target_outside_window_clamps_to_edge(self):
        """A target at perigee is found at the nearest window edge."""
        target = spacecraft_position(100.0, **_ORBIT)
        result = closest_approach_to_point(target, **_ORBIT)
        assert result.true_anomaly_deg == pytest.approx(150.0)
        assert result.distance_km > 1000.0

    def test_distance_never_below_exact_minimum(self):
        target = np.array(spacecraft_position(172.4, **_ORBIT)) + np.array([500.0, -300.0, 200.0])
        result = closest_approach_to_point(target, **_ORBIT)
        fine = [
            np.linalg.norm(np.array(spacecraft_position(nu, **_ORBIT)) - target)
            for nu in np.linspace(150.0, 210.0, 6001)
        ]
        assert result.distance_km >= min(fine) - 1e-6

    def test_custom_samples_and_span(self):
        target = spacecraft_position(185.0, **_ORBIT)
        result = closest_approach_to_point(target, **_ORBIT, samples=3, span_deg=5.0)
        assert result.true_anomaly_deg == pytest.approx(185.0)

    def test_too_few_samples_raises(self):
        with pytest.raises(ValueError):
            closest_approach_to_point((0.0, 0.0, 0.0), **_ORBIT, samples=1)


class TestClosestApproach:

    def test_uses_provider_position(self):
        moon = spacecraft_position(172.0, **_ORBIT)
        result = closest_approach(
            _ORBIT["raan_deg"], _ORBIT["apogee_alt_km"], _ORBIT["perigee_alt_km"],
            _LOI, _ORBIT["omega_deg"], _ORBIT["inclination_deg"], _FixedProvider(moon),
        )
        assert result.distance_km < 1e-6
        assert result.true_anomaly_deg == pytest.approx(172.0)

    def test_idempotent(self):
        provider = AnalyticLunarEphemeris()
        args = (
            _ORBIT["raan_deg"], _ORBIT["apogee_alt_km"], _ORBIT["perigee_alt_km"],
            _LOI, _ORBIT["omega_deg"], _ORBIT["inclination_deg"], provider,
        )
        assert closest_approach(*args) == closest_approach(*args)
