# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Lunar equator-crossing search.

Time-sweep pattern with bisection refinement at sign changes:
1. Sample a scalar function of time (Moon declination) at fixed steps
2. When consecutive samples differ in sign, bisect the bracket
3. Record the refined instant and the crossing direction

Equatorial-plane crossings are the candidate lunar-orbit-insertion
epochs: ascending and descending crossings alternate every ~13.7 days.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable

from translunar.domain.lunar_ephemeris import (
    moon_declination_deg,
    moon_ecliptic_latitude_deg,
)
from translunar.ports.ephemeris import EphemerisProvider

_DEFAULT_STEP = timedelta(days=1)
_DEFAULT_TOLERANCE = timedelta(seconds=1)


class CrossingDirection(Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True)
class CrossingEvent:
    """An instant at which the sampled quantity passes through zero."""
    epoch: datetime
    direction: CrossingDirection


def _bisect_crossing(
    f: Callable[[float], float],
    t_a: float,
    t_b: float,
    tol_s: float,
    max_iter: int = 64,
) -> float:
    """Find root of f(t) between t_a and t_b via bisection.

    Assumes f(t_a) and f(t_b) lie on opposite sides of zero, with zero
    itself counted as non-negative.

    Args:
        f: Function f(t) -> float of seconds since the scan start.
        t_a: Left bound (seconds).
        t_b: Right bound (seconds).
        tol_s: Bracket width at which to stop (seconds).
        max_iter: Maximum bisection iterations.

    Returns:
        Approximate root time (seconds since the scan start).
    """
    negative_a = f(t_a) < 0
    for _ in range(max_iter):
        if abs(t_b - t_a) < tol_s:
            break
        t_mid = (t_a + t_b) / 2.0
        if (f(t_mid) < 0) == negative_a:
            t_a = t_mid
        else:
            t_b = t_mid
    return (t_a + t_b) / 2.0


def find_sign_changes(
    f: Callable[[datetime], float],
    start: datetime,
    end: datetime,
    step: timedelta = _DEFAULT_STEP,
    tolerance: timedelta = _DEFAULT_TOLERANCE,
) -> list[CrossingEvent]:
    """Locate zero crossings of a time function over [start, end].

    The scan advances in whole steps and stops when the next step would
    pass `end`. A crossing narrower than one step (two roots in a single
    bracket) is not detected.

    Args:
        f: Scalar function of a UTC datetime.
        start: Scan start.
        end: Scan end.
        step: Sampling step.
        tolerance: Refinement tolerance of each root.

    Returns:
        Chronologically ordered CrossingEvents; ASCENDING when f goes
        from negative to positive.

    Raises:
        ValueError: If end precedes start or step is not positive.
    """
    if end < start:
        raise ValueError(f"end ({end.isoformat()}) precedes start ({start.isoformat()})")
    step_s = step.total_seconds()
    if step_s <= 0:
        raise ValueError(f"step must be positive, got {step}")

    def f_elapsed(elapsed_s: float) -> float:
        return f(start + timedelta(seconds=elapsed_s))

    total_s = (end - start).total_seconds()
    tol_s = tolerance.total_seconds()
    events: list[CrossingEvent] = []

    t_prev = 0.0
    v_prev = f_elapsed(t_prev)
    while t_prev + step_s <= total_s + 1e-9:
        t_next = t_prev + step_s
        v_next = f_elapsed(t_next)

        if (v_prev < 0) != (v_next < 0):
            root = _bisect_crossing(f_elapsed, t_prev, t_next, tol_s)
            direction = (
                CrossingDirection.ASCENDING if v_prev < 0 else CrossingDirection.DESCENDING
            )
            events.append(CrossingEvent(
                epoch=start + timedelta(seconds=root),
                direction=direction,
            ))

        t_prev, v_prev = t_next, v_next

    return events


def find_equator_crossings(
    provider: EphemerisProvider,
    start: datetime,
    end: datetime,
    step: timedelta = _DEFAULT_STEP,
) -> list[CrossingEvent]:
    """Ascending and descending crossings of the Moon's declination."""
    return find_sign_changes(
        lambda t: moon_declination_deg(provider, t), start, end, step,
    )


def find_ecliptic_node_crossings(
    provider: EphemerisProvider,
    start: datetime,
    end: datetime,
    step: timedelta = _DEFAULT_STEP,
    ascending_only: bool = True,
) -> list[CrossingEvent]:
    """Crossings of the ecliptic plane (lunar orbital nodes).

    By default only ascending nodes (south to north) are returned,
    giving ~27-day spacing.
    """
    events = find_sign_changes(
        lambda t: moon_ecliptic_latitude_deg(provider, t), start, end, step,
    )
    if ascending_only:
        return [ev for ev in events if ev.direction is CrossingDirection.ASCENDING]
    return events


def find_optimal_loi_dates(
    provider: EphemerisProvider,
    start: datetime,
    end: datetime,
) -> list[datetime]:
    """Candidate lunar-orbit-insertion epochs (equator crossings), sorted."""
    crossings = find_equator_crossings(provider, start, end)
    return sorted(ev.epoch for ev in crossings)
