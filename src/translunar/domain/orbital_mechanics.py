# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbit geometry for the translunar transfer ellipse.

Scalar quantities (period, eccentricity, radius) derived from perigee and
apogee altitudes, perifocal-to-inertial rotation, and classical elements
from a Cartesian state vector. All lengths in km, velocities in km/s.
"""
import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class _TransferConstants:
    """Two-body constants used by the transfer engine (km units)."""
    MU_EARTH_KM3_S2: float = 398600.4418   # km³/s² — gravitational parameter
    R_EARTH_KM: float = 6371.0              # km — mean radius, altitude reference
    AU_KM: float = 149597870.7              # km — astronomical unit
    LUNAR_SOI_KM: float = 66100.0           # km — lunar sphere of influence
    DEFAULT_PERIGEE_ALT_KM: float = 180.0   # km — parking orbit perigee


TransferConstants: _TransferConstants = _TransferConstants()

_MU = TransferConstants.MU_EARTH_KM3_S2
_R_E = TransferConstants.R_EARTH_KM

# Below this magnitude node / eccentricity vectors are treated as zero
_DEGENERATE_EPS = 1e-10


@dataclass(frozen=True)
class StateVector:
    """Cartesian state in an Earth-centred equatorial inertial frame."""
    position_km: tuple[float, float, float]
    velocity_km_s: tuple[float, float, float]


@dataclass(frozen=True)
class OrbitalElements:
    """Classical elements with altitudes above the mean Earth radius."""
    inclination_deg: float
    raan_deg: float
    omega_deg: float
    perigee_alt_km: float
    apogee_alt_km: float
    true_anomaly_deg: float = 0.0

    @property
    def eccentricity(self) -> float:
        return eccentricity(self.perigee_alt_km, self.apogee_alt_km)

    @property
    def semi_major_axis_km(self) -> float:
        return semi_major_axis_km(self.perigee_alt_km, self.apogee_alt_km)


def semi_major_axis_km(perigee_alt_km: float, apogee_alt_km: float) -> float:
    """Semi-major axis from perigee/apogee altitudes."""
    rp = _R_E + perigee_alt_km
    ra = _R_E + apogee_alt_km
    return (rp + ra) / 2.0


def eccentricity(perigee_alt_km: float, apogee_alt_km: float) -> float:
    """e = (ra − rp) / (ra + rp) with radii measured from Earth's centre."""
    rp = _R_E + perigee_alt_km
    ra = _R_E + apogee_alt_km
    return (ra - rp) / (ra + rp)


def orbital_period(perigee_alt_km: float, apogee_alt_km: float) -> float:
    """
    Keplerian orbital period.

    T = 2π·√(a³/μ), a = (rp + ra)/2

    Args:
        perigee_alt_km: Perigee altitude (km).
        apogee_alt_km: Apogee altitude (km).

    Returns:
        Period in seconds.
    """
    a = semi_major_axis_km(perigee_alt_km, apogee_alt_km)
    return 2.0 * math.pi * math.sqrt(a**3 / _MU)


def orbit_radius_km(nu_deg: float, perigee_alt_km: float, apogee_alt_km: float) -> float:
    """Conic radius r = a(1 − e²)/(1 + e·cos ν)."""
    a = semi_major_axis_km(perigee_alt_km, apogee_alt_km)
    e = eccentricity(perigee_alt_km, apogee_alt_km)
    return a * (1.0 - e**2) / (1.0 + e * math.cos(math.radians(nu_deg)))


def format_period(seconds: float) -> str:
    """Format a duration with floored components.

    'Dd Hh Mm' beyond 24 hours, 'Hh Mm Ss' from one hour, else 'Mm Ss'.
    """
    hours = int(seconds // 3600)
    mins = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    if hours > 24:
        return f"{hours // 24}d {hours % 24}h {mins}m"
    if hours > 0:
        return f"{hours}h {mins}m {secs}s"
    return f"{mins}m {secs}s"


def rotation_313(raan_deg: float, inclination_deg: float, omega_deg: float) -> np.ndarray:
    """
    Perifocal → inertial rotation matrix.

    R = R3(−Ω) · R1(−i) · R3(−ω): rotate by the argument of periapsis in
    the orbit plane, tilt about the line of nodes, then swing the node out
    to the RAAN.
    """
    cO = math.cos(math.radians(raan_deg))
    sO = math.sin(math.radians(raan_deg))
    co = math.cos(math.radians(omega_deg))
    so = math.sin(math.radians(omega_deg))
    ci = math.cos(math.radians(inclination_deg))
    si = math.sin(math.radians(inclination_deg))

    return np.array([
        [cO * co - sO * so * ci, -cO * so - sO * co * ci, sO * si],
        [sO * co + cO * so * ci, -sO * so + cO * co * ci, -cO * si],
        [so * si, co * si, ci],
    ])


def perifocal_to_inertial(
    nu_deg: "float | np.ndarray",
    raan_deg: float,
    apogee_alt_km: float,
    perigee_alt_km: float,
    omega_deg: float,
    inclination_deg: float,
) -> np.ndarray:
    """
    Inertial position(s) on the transfer ellipse at the given true anomaly.

    Accepts a scalar or a 1-D array of true anomalies; returns shape (3,)
    or (N, 3) respectively, in km.
    """
    a = semi_major_axis_km(perigee_alt_km, apogee_alt_km)
    e = eccentricity(perigee_alt_km, apogee_alt_km)

    nu = np.radians(np.asarray(nu_deg, dtype=np.float64))
    r = a * (1.0 - e**2) / (1.0 + e * np.cos(nu))
    pos_pqw = np.stack([r * np.cos(nu), r * np.sin(nu), np.zeros_like(nu)], axis=-1)

    rotation = rotation_313(raan_deg, inclination_deg, omega_deg)
    return pos_pqw @ rotation.T


def elements_from_state_vector(
    position_km: "tuple[float, float, float] | list[float]",
    velocity_km_s: "tuple[float, float, float] | list[float]",
    mu: float | None = None,
) -> OrbitalElements:
    """Convert an inertial state vector to classical orbital elements.

    Ref: Vallado Algorithm 9 (rv2coe). Node vector n = k × h; RAAN and
    argument of periapsis fall back to 0 when n or e vanish.

    Args:
        position_km: Position [x, y, z] in km.
        velocity_km_s: Velocity [vx, vy, vz] in km/s.
        mu: Gravitational parameter (defaults to Earth, km³/s²).

    Returns:
        OrbitalElements with perigee/apogee as altitudes above R_EARTH_KM.

    Raises:
        ValueError: If the position vector has zero magnitude.
    """
    if mu is None:
        mu = _MU

    r_vec = np.array(position_km, dtype=np.float64)
    v_vec = np.array(velocity_km_s, dtype=np.float64)

    r_mag = float(np.linalg.norm(r_vec))
    if r_mag < _DEGENERATE_EPS:
        raise ValueError("position vector has zero magnitude")
    v_mag = float(np.linalg.norm(v_vec))

    h_vec = np.cross(r_vec, v_vec)
    h_mag = float(np.linalg.norm(h_vec))
    inc_deg = float(np.degrees(np.arccos(np.clip(h_vec[2] / h_mag, -1.0, 1.0)))) if h_mag > _DEGENERATE_EPS else 0.0

    nx, ny = float(-h_vec[1]), float(h_vec[0])
    n_mag = math.hypot(nx, ny)

    raan_deg = 0.0
    if n_mag > _DEGENERATE_EPS:
        raan_deg = math.degrees(math.acos(max(-1.0, min(1.0, nx / n_mag))))
        if ny < 0:
            raan_deg = 360.0 - raan_deg

    rdotv = float(np.dot(r_vec, v_vec))
    e_vec = ((v_mag**2 - mu / r_mag) * r_vec - rdotv * v_vec) / mu
    ecc = float(np.linalg.norm(e_vec))

    energy = v_mag**2 / 2.0 - mu / r_mag
    a = -mu / (2.0 * energy) if abs(energy) > _DEGENERATE_EPS else math.inf

    omega_deg = 0.0
    if n_mag > _DEGENERATE_EPS and ecc > _DEGENERATE_EPS:
        cos_omega = (nx * e_vec[0] + ny * e_vec[1]) / (n_mag * ecc)
        omega_deg = math.degrees(math.acos(max(-1.0, min(1.0, float(cos_omega)))))
        if e_vec[2] < 0:
            omega_deg = 360.0 - omega_deg

    nu_deg = 0.0
    if ecc > _DEGENERATE_EPS:
        cos_nu = float(np.dot(e_vec, r_vec)) / (ecc * r_mag)
        nu_deg = math.degrees(math.acos(max(-1.0, min(1.0, cos_nu))))
        if rdotv < 0:
            nu_deg = 360.0 - nu_deg

    return OrbitalElements(
        inclination_deg=inc_deg,
        raan_deg=raan_deg,
        omega_deg=omega_deg,
        perigee_alt_km=a * (1.0 - ecc) - _R_E,
        apogee_alt_km=a * (1.0 + ecc) - _R_E,
        true_anomaly_deg=nu_deg,
    )
