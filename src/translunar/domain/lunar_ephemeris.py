# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Analytical lunar ephemeris.

Truncated Meeus Ch. 47 series for the Moon's geocentric ecliptic
coordinates (the sixteen largest longitude and distance terms and the ten
largest latitude terms), referred to the J2000 equinox and rotated to the
equatorial frame. Position agrees with full ephemerides to about 0.1°,
adequate for choosing lunar-orbit-insertion windows.

Also provides declination / ecliptic-latitude helpers and an osculating
snapshot of the Moon's geocentric orbit for any EphemerisProvider.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import numpy as np

from translunar.domain.anomaly import normalize_angle_deg
from translunar.domain.orbital_mechanics import (
    OrbitalElements,
    elements_from_state_vector,
)
from translunar.ports.ephemeris import EphemerisProvider

# J2000.0 reference epoch
_J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

# Obliquity of ecliptic (J2000, degrees)
_OBLIQUITY_DEG = 23.4393

# Half-width of the central difference used for velocity
_VELOCITY_STEP_S = 60.0

# General precession in longitude (degrees per Julian century)
_PRECESSION_DEG_PER_CENTURY = 1.396971

_MEAN_DISTANCE_KM = 385000.56

# Meeus Table 47.A: multiples of D, M, M', F; longitude (deg); distance (km)
_LONGITUDE_DISTANCE_TERMS = (
    (0, 0, 1, 0, 6.288774, -20905.355),
    (2, 0, -1, 0, 1.274027, -3699.111),
    (2, 0, 0, 0, 0.658314, -2955.968),
    (0, 0, 2, 0, 0.213618, -569.925),
    (0, 1, 0, 0, -0.185116, 48.888),
    (0, 0, 0, 2, -0.114332, -3.149),
    (2, 0, -2, 0, 0.058793, 246.158),
    (2, -1, -1, 0, 0.057066, -152.138),
    (2, 0, 1, 0, 0.053322, -170.733),
    (2, -1, 0, 0, 0.045758, -204.586),
    (0, 1, -1, 0, -0.040923, -129.620),
    (1, 0, 0, 0, -0.034720, 108.743),
    (0, 1, 1, 0, -0.030383, 104.755),
    (2, 0, 0, -2, 0.015327, 10.321),
    (0, 0, 1, 2, -0.012528, 0.0),
    (0, 0, 1, -2, 0.010980, 79.661),
)

# Meeus Table 47.B: multiples of D, M, M', F; latitude (deg)
_LATITUDE_TERMS = (
    (0, 0, 0, 1, 5.128122),
    (0, 0, 1, 1, 0.280602),
    (0, 0, 1, -1, 0.277693),
    (2, 0, 0, -1, 0.173237),
    (2, 0, -1, 1, 0.055413),
    (2, 0, -1, -1, 0.046271),
    (2, 0, 0, 1, 0.032573),
    (0, 0, 2, 1, 0.017198),
    (2, 0, 1, -1, 0.009266),
    (0, 0, 2, -1, 0.008822),
)


@dataclass(frozen=True)
class MoonPosition:
    """Moon position at a given epoch."""
    position_km: tuple[float, float, float]
    right_ascension_deg: float
    declination_deg: float
    distance_km: float


@dataclass(frozen=True)
class MoonSnapshot:
    """Apparent place and osculating geocentric orbit of the Moon."""
    epoch: datetime
    right_ascension_deg: float
    declination_deg: float
    distance_km: float
    elements: OrbitalElements


def _as_utc(epoch: datetime) -> datetime:
    if epoch.tzinfo is None:
        return epoch.replace(tzinfo=timezone.utc)
    return epoch


def _julian_centuries_j2000(epoch: datetime) -> float:
    """Julian centuries since J2000.0."""
    dt_seconds = (_as_utc(epoch) - _J2000).total_seconds()
    return dt_seconds / (36525.0 * 86400.0)


def moon_ecliptic_coordinates(epoch: datetime) -> tuple[float, float, float]:
    """Geocentric ecliptic longitude, latitude (degrees, mean equinox of date)
    and distance (km) of the Moon from the leading Meeus Ch. 47 terms.

    Nutation is not applied; these are geometric mean-of-date values.
    """
    T = _julian_centuries_j2000(epoch)

    # Fundamental arguments (degrees)
    L_prime = (218.3164477 + 481267.88123421 * T) % 360.0   # mean longitude
    D = (297.8501921 + 445267.1114034 * T) % 360.0          # mean elongation
    M = (357.5291092 + 35999.0502909 * T) % 360.0           # Sun mean anomaly
    M_prime = (134.9633964 + 477198.8675055 * T) % 360.0    # Moon mean anomaly
    F = (93.2720950 + 483202.0175233 * T) % 360.0           # argument of latitude

    D_r = math.radians(D)
    M_r = math.radians(M)
    Mp_r = math.radians(M_prime)
    F_r = math.radians(F)

    lam = L_prime
    distance_km = _MEAN_DISTANCE_KM
    for d, m, mp, f, sl, sr in _LONGITUDE_DISTANCE_TERMS:
        arg = d * D_r + m * M_r + mp * Mp_r + f * F_r
        lam += sl * math.sin(arg)
        distance_km += sr * math.cos(arg)

    beta = 0.0
    for d, m, mp, f, sb in _LATITUDE_TERMS:
        beta += sb * math.sin(d * D_r + m * M_r + mp * Mp_r + f * F_r)

    return normalize_angle_deg(lam), beta, distance_km


def moon_position_eci(epoch: datetime) -> MoonPosition:
    """Analytical lunar ephemeris (Meeus Ch. 47 simplified).

    Computes geocentric ecliptic coordinates of the Moon, refers the
    longitude back to the J2000 equinox, then converts to equatorial
    inertial coordinates.

    Args:
        epoch: UTC datetime (naive values are taken as UTC).

    Returns:
        MoonPosition with position (km), RA, Dec (degrees) and distance.
    """
    lam, beta, distance_km = moon_ecliptic_coordinates(epoch)
    lam -= _PRECESSION_DEG_PER_CENTURY * _julian_centuries_j2000(epoch)

    # Ecliptic → equatorial: rotate about the equinox direction by −ε
    lam_r = math.radians(lam)
    beta_r = math.radians(beta)
    eps_r = math.radians(_OBLIQUITY_DEG)

    ecliptic = np.array([
        math.cos(beta_r) * math.cos(lam_r),
        math.cos(beta_r) * math.sin(lam_r),
        math.sin(beta_r),
    ])
    rot = np.array([
        [1.0, 0.0, 0.0],
        [0.0, math.cos(eps_r), -math.sin(eps_r)],
        [0.0, math.sin(eps_r), math.cos(eps_r)],
    ])
    unit = rot @ ecliptic

    ra_deg = normalize_angle_deg(math.degrees(math.atan2(unit[1], unit[0])))
    dec_deg = math.degrees(math.asin(float(np.clip(unit[2], -1.0, 1.0))))
    pos = unit * distance_km

    return MoonPosition(
        position_km=(float(pos[0]), float(pos[1]), float(pos[2])),
        right_ascension_deg=ra_deg,
        declination_deg=dec_deg,
        distance_km=distance_km,
    )


class AnalyticLunarEphemeris:
    """Meeus lunar ephemeris.

    Implements EphemerisProvider protocol. Velocity is a symmetric
    finite difference of the analytical position.
    """

    def position(self, epoch: datetime) -> tuple[float, float, float]:
        return moon_position_eci(epoch).position_km

    def position_and_velocity(
        self, epoch: datetime,
    ) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
        h = timedelta(seconds=_VELOCITY_STEP_S)
        ahead = np.array(self.position(epoch + h))
        behind = np.array(self.position(epoch - h))
        vel = (ahead - behind) / (2.0 * _VELOCITY_STEP_S)
        return self.position(epoch), (float(vel[0]), float(vel[1]), float(vel[2]))


def moon_declination_deg(provider: EphemerisProvider, epoch: datetime) -> float:
    """Declination of the Moon (degrees) from a provider's position."""
    x, y, z = provider.position(epoch)
    return math.degrees(math.atan2(z, math.hypot(x, y)))


def moon_ecliptic_latitude_deg(provider: EphemerisProvider, epoch: datetime) -> float:
    """Ecliptic latitude of the Moon (degrees), J2000 obliquity."""
    x, y, z = provider.position(epoch)
    eps_r = math.radians(_OBLIQUITY_DEG)
    y_ecl = y * math.cos(eps_r) + z * math.sin(eps_r)
    z_ecl = -y * math.sin(eps_r) + z * math.cos(eps_r)
    return math.degrees(math.atan2(z_ecl, math.hypot(x, y_ecl)))


def moon_snapshot(provider: EphemerisProvider, epoch: datetime) -> MoonSnapshot:
    """RA, Dec, distance and osculating geocentric elements of the Moon."""
    pos, vel = provider.position_and_velocity(epoch)
    x, y, z = pos
    distance = math.sqrt(x * x + y * y + z * z)
    return MoonSnapshot(
        epoch=epoch,
        right_ascension_deg=normalize_angle_deg(math.degrees(math.atan2(y, x))),
        declination_deg=math.degrees(math.asin(z / distance)),
        distance_km=distance,
        elements=elements_from_state_vector(pos, vel),
    )
