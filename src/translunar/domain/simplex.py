# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Two-parameter Nelder–Mead simplex minimiser.

Derivative-free search over (x, y) for an arbitrary scalar objective.
The simplex is three vertices ordered best-to-worst each iteration.

Coefficients: reflection α = 1, expansion γ = 2, contraction ρ = 0.5,
shrinkage σ = 0.5. The search stops when the spread of objective values
(worst − best) falls below the tolerance or the iteration cap is hit;
either way the best vertex is returned.
"""
from dataclasses import dataclass
from typing import Callable

NM_ALPHA = 1.0   # reflection
NM_GAMMA = 2.0   # expansion
NM_RHO = 0.5     # contraction
NM_SIGMA = 0.5   # shrinkage

Objective = Callable[[float, float], float]


@dataclass(frozen=True)
class SimplexPoint:
    """One simplex vertex with its cached objective value."""
    x: float
    y: float
    value: float


@dataclass(frozen=True)
class Bounds:
    """Closed box [x_min, x_max] × [y_min, y_max]."""
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def clamp(self, x: float, y: float) -> tuple[float, float]:
        return clamp(x, self.x_min, self.x_max), clamp(y, self.y_min, self.y_max)


@dataclass(frozen=True)
class SimplexResult:
    """Outcome of a Nelder–Mead run.

    `converged` is False when the iteration cap was reached before the
    objective spread dropped below tolerance; `best` is valid either way.
    """
    best: SimplexPoint
    worst: SimplexPoint
    iterations: int
    converged: bool

    @property
    def spread(self) -> float:
        return self.worst.value - self.best.value


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _evaluate(objective: Objective, x: float, y: float) -> SimplexPoint:
    return SimplexPoint(x=x, y=y, value=objective(x, y))


def _towards(
    objective: Objective,
    origin: tuple[float, float],
    target: tuple[float, float],
    coeff: float,
) -> SimplexPoint:
    """Evaluate origin + coeff·(target − origin)."""
    x = origin[0] + coeff * (target[0] - origin[0])
    y = origin[1] + coeff * (target[1] - origin[1])
    return _evaluate(objective, x, y)


def initial_simplex(
    objective: Objective,
    x0: float,
    y0: float,
    dx: float,
    dy: float,
) -> list[SimplexPoint]:
    """Start vertex plus one offset along each axis."""
    return [
        _evaluate(objective, x0, y0),
        _evaluate(objective, x0 + dx, y0),
        _evaluate(objective, x0, y0 + dy),
    ]


def nelder_mead_2d(
    objective: Objective,
    simplex: list[SimplexPoint],
    tolerance: float = 1.0,
    max_iterations: int = 150,
) -> SimplexResult:
    """
    Minimise a two-parameter objective with the Nelder–Mead method.

    Args:
        objective: f(x, y) -> float. Any domain clamping is the caller's.
        simplex: Exactly three evaluated starting vertices.
        tolerance: Stop when worst.value − best.value < tolerance.
        max_iterations: Iteration cap.

    Returns:
        SimplexResult with best/worst vertices, iterations used and
        convergence flag.

    Raises:
        ValueError: If the simplex does not have three vertices.
    """
    if len(simplex) != 3:
        raise ValueError(f"2-D simplex needs 3 vertices, got {len(simplex)}")

    pts = sorted(simplex, key=lambda p: p.value)

    for iteration in range(max_iterations):
        pts.sort(key=lambda p: p.value)
        best, second, worst = pts

        if worst.value - best.value < tolerance:
            return SimplexResult(best=best, worst=worst, iterations=iteration, converged=True)

        centroid = ((best.x + second.x) / 2.0, (best.y + second.y) / 2.0)
        reflected = _towards(objective, centroid, (worst.x, worst.y), -NM_ALPHA)

        if best.value <= reflected.value < second.value:
            pts[2] = reflected
            continue

        if reflected.value < best.value:
            expanded = _towards(objective, centroid, (reflected.x, reflected.y), NM_GAMMA)
            pts[2] = expanded if expanded.value < reflected.value else reflected
            continue

        contracted = _towards(objective, centroid, (worst.x, worst.y), NM_RHO)
        if contracted.value < worst.value:
            pts[2] = contracted
            continue

        pts[1] = _towards(objective, (best.x, best.y), (second.x, second.y), NM_SIGMA)
        pts[2] = _towards(objective, (best.x, best.y), (worst.x, worst.y), NM_SIGMA)

    pts.sort(key=lambda p: p.value)
    best, _, worst = pts
    return SimplexResult(
        best=best,
        worst=worst,
        iterations=max_iterations,
        converged=worst.value - best.value < tolerance,
    )
