# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
astronomy-engine lunar ephemeris adapter.

Wraps astronomy.GeoMoonState (J2000 mean equator, AU and AU/day) and
converts to km and km/s.

Requires: pip install translunar[ephemeris]
"""
from datetime import datetime, timezone

import astronomy

from translunar.domain.orbital_mechanics import TransferConstants
from translunar.ports.ephemeris import EphemerisProvider

_AU_KM = TransferConstants.AU_KM
_SECONDS_PER_DAY = 86400.0


def _astro_time(epoch: datetime) -> "astronomy.Time":
    if epoch.tzinfo is None:
        epoch = epoch.replace(tzinfo=timezone.utc)
    utc = epoch.astimezone(timezone.utc)
    seconds = utc.second + utc.microsecond / 1e6
    return astronomy.Time.Make(utc.year, utc.month, utc.day, utc.hour, utc.minute, seconds)


class AstronomyEngineEphemeris(EphemerisProvider):
    """Moon state from the astronomy-engine geocentric model."""

    def position(self, epoch: datetime) -> tuple[float, float, float]:
        vec = astronomy.GeoMoon(_astro_time(epoch))
        return (vec.x * _AU_KM, vec.y * _AU_KM, vec.z * _AU_KM)

    def position_and_velocity(
        self, epoch: datetime,
    ) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
        state = astronomy.GeoMoonState(_astro_time(epoch))
        scale_v = _AU_KM / _SECONDS_PER_DAY
        return (
            (state.x * _AU_KM, state.y * _AU_KM, state.z * _AU_KM),
            (state.vx * scale_v, state.vy * scale_v, state.vz * scale_v),
        )
