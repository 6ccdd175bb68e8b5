# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Mission profile: planning windows, launch constraints and launch events.

The launch vehicle delivers one of two lunar-resonant inclinations, each
with a fixed set of admissible arguments of periapsis. A launch event
fixes the transfer orbit at TLI; the spacecraft's true anomaly at any
later epoch follows from Kepler's equation.
"""
from dataclasses import dataclass
from datetime import datetime, timezone

from translunar.domain.anomaly import true_anomaly_from_time
from translunar.domain.orbital_mechanics import OrbitalElements, TransferConstants

ALLOWED_INCLINATIONS_DEG: tuple[float, ...] = (21.5, 41.8)

_ALLOWED_OMEGA_DEG: dict[float, tuple[float, ...]] = {
    21.5: (178.0,),
    41.8: (198.0, 203.0),
}
_DEFAULT_OMEGA_DEG: tuple[float, ...] = (178.0,)


@dataclass(frozen=True)
class MissionWindow:
    """Named calendar window searched for LOI opportunities."""
    name: str
    start: datetime
    end: datetime


CY3_WINDOW = MissionWindow(
    name="CY3",
    start=datetime(2023, 3, 1, tzinfo=timezone.utc),
    end=datetime(2023, 10, 31, 23, 59, 59, tzinfo=timezone.utc),
)
CY2_WINDOW = MissionWindow(
    name="CY2",
    start=datetime(2019, 1, 1, tzinfo=timezone.utc),
    end=datetime(2019, 9, 30, 23, 59, 59, tzinfo=timezone.utc),
)
MISSION_WINDOWS: dict[str, MissionWindow] = {
    w.name: w for w in (CY3_WINDOW, CY2_WINDOW)
}


@dataclass(frozen=True)
class LaunchEvent:
    """Transfer orbit fixed at trans-lunar injection."""
    tli_epoch: datetime
    inclination_deg: float
    raan_deg: float
    omega_deg: float
    apogee_alt_km: float
    perigee_alt_km: float = TransferConstants.DEFAULT_PERIGEE_ALT_KM


def _closest(values: tuple[float, ...], target: float) -> float:
    # first of equally distant candidates wins
    return min(values, key=lambda v: abs(v - target))


def closest_allowed_inclination(inclination_deg: float) -> float:
    """Snap an inclination to the nearest launchable value."""
    return _closest(ALLOWED_INCLINATIONS_DEG, inclination_deg)


def allowed_omega_values(inclination_deg: float) -> tuple[float, ...]:
    """Admissible arguments of periapsis for a launch inclination."""
    return _ALLOWED_OMEGA_DEG.get(inclination_deg, _DEFAULT_OMEGA_DEG)


def closest_allowed_omega(omega_deg: float, inclination_deg: float) -> float:
    """Snap ω to the nearest admissible value for the inclination."""
    return _closest(allowed_omega_values(inclination_deg), omega_deg)


def spacecraft_elements_at(event: LaunchEvent, epoch: datetime) -> OrbitalElements:
    """
    Spacecraft orbital elements at an epoch.

    The spacecraft sits at perigee (ν = 0) until TLI, then moves along
    the transfer ellipse.
    """
    elapsed_s = (epoch - event.tli_epoch).total_seconds()
    nu_deg = 0.0
    if elapsed_s >= 0:
        nu_deg = true_anomaly_from_time(elapsed_s, event.perigee_alt_km, event.apogee_alt_km)

    return OrbitalElements(
        inclination_deg=event.inclination_deg,
        raan_deg=event.raan_deg,
        omega_deg=event.omega_deg,
        perigee_alt_km=event.perigee_alt_km,
        apogee_alt_km=event.apogee_alt_km,
        true_anomaly_deg=nu_deg,
    )
