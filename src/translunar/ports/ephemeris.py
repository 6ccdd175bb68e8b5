# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for lunar ephemeris sources.

Implementations return the Moon's geocentric state in an Earth-centred
equatorial inertial frame, in km and km/s.
"""
from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class EphemerisProvider(Protocol):
    """Port for Moon position/velocity at a UTC instant."""

    def position(self, epoch: datetime) -> tuple[float, float, float]:
        """Geocentric Moon position (km)."""
        ...

    def position_and_velocity(
        self, epoch: datetime,
    ) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
        """Geocentric Moon position (km) and velocity (km/s)."""
        ...
