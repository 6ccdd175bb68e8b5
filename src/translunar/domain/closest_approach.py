# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Closest approach between the transfer ellipse and the Moon.

Grid search over true anomaly around apogee: the Moon's position is
fetched once at the insertion epoch and compared against evenly spaced
points of the spacecraft orbit. Results are pure functions of the inputs.

The ±30° window is a heuristic for this mission profile; a closest
approach outside it is not found.
"""
from dataclasses import dataclass
from datetime import datetime

import numpy as np

from translunar.domain.orbital_mechanics import perifocal_to_inertial
from translunar.ports.ephemeris import EphemerisProvider

_APOGEE_NU_DEG = 180.0
_DEFAULT_SAMPLES = 61
_DEFAULT_SPAN_DEG = 30.0


@dataclass(frozen=True)
class ApproachResult:
    """Minimum spacecraft–Moon distance and where it occurs."""
    distance_km: float
    true_anomaly_deg: float


def spacecraft_position(
    nu_deg: float,
    raan_deg: float,
    apogee_alt_km: float,
    perigee_alt_km: float,
    omega_deg: float,
    inclination_deg: float,
) -> tuple[float, float, float]:
    """Inertial spacecraft position (km) at true anomaly ν."""
    pos = perifocal_to_inertial(
        nu_deg, raan_deg, apogee_alt_km, perigee_alt_km, omega_deg, inclination_deg,
    )
    return (float(pos[0]), float(pos[1]), float(pos[2]))


def closest_approach_to_point(
    target_km: "tuple[float, float, float] | np.ndarray",
    raan_deg: float,
    apogee_alt_km: float,
    perigee_alt_km: float,
    omega_deg: float,
    inclination_deg: float,
    samples: int = _DEFAULT_SAMPLES,
    span_deg: float = _DEFAULT_SPAN_DEG,
) -> ApproachResult:
    """
    Minimum distance from a fixed point to the orbit near apogee.

    Samples `samples` true anomalies evenly over [180° − span, 180° + span]
    (inclusive); ties resolve to the lowest true anomaly.

    Args:
        target_km: Inertial position of the target (km).
        raan_deg: Right ascension of ascending node (degrees).
        apogee_alt_km: Apogee altitude (km).
        perigee_alt_km: Perigee altitude (km).
        omega_deg: Argument of periapsis (degrees).
        inclination_deg: Inclination (degrees).
        samples: Number of grid points (≥ 2).
        span_deg: Half-width of the window around apogee (degrees).

    Returns:
        ApproachResult with distance (km) and true anomaly (degrees).

    Raises:
        ValueError: If samples < 2.
    """
    if samples < 2:
        raise ValueError(f"samples must be >= 2, got {samples}")

    nu_grid = np.linspace(_APOGEE_NU_DEG - span_deg, _APOGEE_NU_DEG + span_deg, samples)
    positions = perifocal_to_inertial(
        nu_grid, raan_deg, apogee_alt_km, perigee_alt_km, omega_deg, inclination_deg,
    )
    distances = np.linalg.norm(positions - np.asarray(target_km, dtype=np.float64), axis=1)

    idx = int(np.argmin(distances))
    return ApproachResult(
        distance_km=float(distances[idx]),
        true_anomaly_deg=float(nu_grid[idx]),
    )


def closest_approach(
    raan_deg: float,
    apogee_alt_km: float,
    perigee_alt_km: float,
    loi_epoch: datetime,
    omega_deg: float,
    inclination_deg: float,
    provider: EphemerisProvider,
    samples: int = _DEFAULT_SAMPLES,
    span_deg: float = _DEFAULT_SPAN_DEG,
) -> ApproachResult:
    """Closest approach of the transfer orbit to the Moon at the LOI epoch."""
    moon_km = provider.position(loi_epoch)
    return closest_approach_to_point(
        moon_km, raan_deg, apogee_alt_km, perigee_alt_km,
        omega_deg, inclination_deg, samples, span_deg,
    )
