# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Anomaly and right-ascension conversions on a Keplerian ellipse.

Time ↔ true anomaly via Kepler's equation, and right ascension ↔ true
anomaly via the spherical-trigonometry relation

    RA = RAAN + atan2(cos i · sin u, cos u),   u = ω + ν

Every angle returned is normalised to [0, 360).
"""
import logging
import math
from dataclasses import dataclass

from translunar.domain.orbital_mechanics import (
    TransferConstants,
    eccentricity,
    orbital_period,
    semi_major_axis_km,
)

logger = logging.getLogger(__name__)

_TWO_PI = 2.0 * math.pi

# k = 1/√(sin²Δ + cos²Δ·cos²i) is undefined below this denominator
_RA_DEGENERATE_EPS = 1e-12


@dataclass(frozen=True)
class KeplerSolution:
    """Eccentric anomaly from a Newton–Raphson solve of Kepler's equation."""
    eccentric_anomaly_rad: float
    iterations: int
    converged: bool


def normalize_angle_deg(angle_deg: float) -> float:
    """Wrap an angle into [0, 360)."""
    wrapped = angle_deg % 360.0
    # -1e-17 % 360 rounds to 360.0
    return 0.0 if wrapped >= 360.0 else wrapped


def solve_kepler(
    mean_anomaly_rad: float,
    e: float,
    tolerance: float = 1e-12,
    max_iterations: int = 50,
) -> KeplerSolution:
    """
    Solve M = E − e·sin(E) for E by Newton–Raphson.

    Starts from E₀ = M and iterates until the correction drops below
    `tolerance` or `max_iterations` is reached. Never raises: the last
    iterate is returned with converged=False when the iteration cap is reached.

    Args:
        mean_anomaly_rad: Mean anomaly M (radians).
        e: Eccentricity, expected in [0, 1).
        tolerance: Absolute stopping tolerance on the Newton step (radians).
        max_iterations: Iteration cap.

    Returns:
        KeplerSolution with eccentric anomaly, iteration count and flag.
    """
    E = mean_anomaly_rad
    for iteration in range(1, max_iterations + 1):
        step = (E - e * math.sin(E) - mean_anomaly_rad) / (1.0 - e * math.cos(E))
        E -= step
        if abs(step) < tolerance:
            return KeplerSolution(eccentric_anomaly_rad=E, iterations=iteration, converged=True)
    return KeplerSolution(eccentric_anomaly_rad=E, iterations=max_iterations, converged=False)


def true_anomaly_from_time(
    time_since_periapsis_s: float,
    perigee_alt_km: float,
    apogee_alt_km: float,
) -> float:
    """
    True anomaly reached a given time after perigee passage.

    Args:
        time_since_periapsis_s: Elapsed time since perigee (seconds).
        perigee_alt_km: Perigee altitude (km).
        apogee_alt_km: Apogee altitude (km).

    Returns:
        True anomaly in degrees, [0, 360).
    """
    a = semi_major_axis_km(perigee_alt_km, apogee_alt_km)
    e = eccentricity(perigee_alt_km, apogee_alt_km)

    n = math.sqrt(TransferConstants.MU_EARTH_KM3_S2 / a**3)
    mean_anomaly = n * time_since_periapsis_s

    solution = solve_kepler(mean_anomaly, e)
    if not solution.converged:
        logger.warning(
            "Kepler solve did not converge after %d iterations (M=%.6f rad, e=%.6f)",
            solution.iterations, mean_anomaly, e,
        )

    E = solution.eccentric_anomaly_rad
    nu = 2.0 * math.atan2(
        math.sqrt(1.0 + e) * math.sin(E / 2.0),
        math.sqrt(1.0 - e) * math.cos(E / 2.0),
    )
    return normalize_angle_deg(math.degrees(nu))


def time_to_true_anomaly(
    true_anomaly_deg: float,
    perigee_alt_km: float,
    apogee_alt_km: float,
) -> float:
    """
    Time of flight from perigee to a given true anomaly.

    cos E = (e + cos ν)/(1 + e·cos ν), with E in the same half-plane as ν;
    M = E − e·sin E; Δt = M/(2π)·T.

    Returns:
        Elapsed time in seconds, in [0, T).
    """
    e = eccentricity(perigee_alt_km, apogee_alt_km)
    nu = math.radians(normalize_angle_deg(true_anomaly_deg))

    cos_E = (e + math.cos(nu)) / (1.0 + e * math.cos(nu))
    E = math.acos(max(-1.0, min(1.0, cos_E)))
    if nu > math.pi:
        E = _TWO_PI - E

    mean_anomaly = E - e * math.sin(E)
    return mean_anomaly / _TWO_PI * orbital_period(perigee_alt_km, apogee_alt_km)


def ra_from_true_anomaly(
    true_anomaly_deg: float,
    raan_deg: float,
    omega_deg: float,
    inclination_deg: float,
) -> float:
    """Right ascension of the point at true anomaly ν on the orbit."""
    u = math.radians(omega_deg + true_anomaly_deg)
    inc = math.radians(inclination_deg)
    ra = raan_deg + math.degrees(math.atan2(math.cos(inc) * math.sin(u), math.cos(u)))
    return normalize_angle_deg(ra)


def true_anomaly_from_ra(
    ra_deg: float,
    raan_deg: float,
    omega_deg: float,
    inclination_deg: float,
) -> float:
    """
    Invert the RA relation for the true anomaly.

    With Δ = RA − RAAN and k = 1/√(sin²Δ + cos²Δ·cos²i):
        sin u = k·sin Δ,  cos u = k·cos Δ·cos i,  ν = u − ω

    For retrograde orbits (cos i < 0) the sign of cos i moves onto sin u
    so the pair keeps the quadrant of u. k is undefined only on a polar
    orbit with sin Δ = 0; that case resolves to u = Δ.

    Returns:
        True anomaly in degrees, [0, 360).
    """
    delta = math.radians(ra_deg - raan_deg)
    inc = math.radians(inclination_deg)

    sin_d = math.sin(delta)
    cos_d = math.cos(delta)
    cos_i = math.cos(inc)

    denom = math.sqrt(sin_d**2 + cos_d**2 * cos_i**2)
    if denom < _RA_DEGENERATE_EPS:
        u = delta
    else:
        k = 1.0 / denom
        u = math.atan2(
            k * sin_d * math.copysign(1.0, cos_i),
            k * cos_d * abs(cos_i),
        )

    return normalize_angle_deg(math.degrees(u) - omega_deg)
