"""Velocity-level constraints solved by sequential impulses.

A ``Constraint1D`` restricts one degree of freedom between two bodies:
linear along ``n`` or, with the ``ANGULAR`` flag, angular about it.
``ContactConstraints`` holds the non-penetration and friction rows of one
contact manifold.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

import numpy as np

from physecs.mathutil import Transform, quat_multiply, quat_normalize


def _vec(v) -> np.ndarray:
    return np.array(v, dtype=float)


@dataclass
class DynamicBody:
    """Mass properties and velocities of a movable rigid body."""

    inv_mass: float = 1.0
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    inv_inertia_tensor_world: np.ndarray = field(default_factory=lambda: np.eye(3))
    is_kinematic: bool = False

    def __post_init__(self) -> None:
        self.velocity = _vec(self.velocity)
        self.angular_velocity = _vec(self.angular_velocity)
        self.inv_inertia_tensor_world = np.array(self.inv_inertia_tensor_world, dtype=float)


def _active(body: DynamicBody | None) -> DynamicBody | None:
    """The body if impulses move it, otherwise None."""
    if body is not None and not body.is_kinematic:
        return body
    return None


def _mass_properties(body: DynamicBody | None) -> tuple[float, np.ndarray]:
    active = _active(body)
    if active is None:
        return 0.0, np.zeros((3, 3))
    return float(active.inv_mass), active.inv_inertia_tensor_world


def _velocities(body: DynamicBody | None) -> tuple[np.ndarray, np.ndarray]:
    active = _active(body)
    if active is None:
        return np.zeros(3), np.zeros(3)
    return active.velocity, active.angular_velocity


def _soft_lambda(relative_velocity, c, inv_eff_mass, frequency, damping_ratio, time_step):
    angular_freq = 2.0 * math.pi * frequency
    stiffness = angular_freq * angular_freq / inv_eff_mass
    damping = 2.0 * angular_freq * damping_ratio / inv_eff_mass
    gamma = 1.0 / (damping + time_step * stiffness)
    beta = time_step * stiffness / (damping + time_step * stiffness)
    return (relative_velocity + beta * c / time_step) / (inv_eff_mass + gamma / time_step)


class ConstraintFlags(enum.IntFlag):
    NONE = 0
    SOFT = 1
    ANGULAR = 1 << 1
    LIMITED = 1 << 2


@dataclass
class Constraint1D:
    """One scalar constraint row between two bodies.

    ``c`` is the position error, ``lower`` and ``upper`` bound the
    accumulated impulse when ``LIMITED`` is set. A body given as None, or a
    kinematic one, is treated as immovable.
    """

    transform0: Transform
    transform1: Transform
    dynamic0: DynamicBody | None
    dynamic1: DynamicBody | None
    n: np.ndarray
    r0xn: np.ndarray
    r1xn: np.ndarray
    target_velocity: float
    c: float
    lower: float
    upper: float
    flags: ConstraintFlags = ConstraintFlags.NONE
    total_lambda: float = 0.0
    frequency: float = 0.0
    damping_ratio: float = 0.0
    r0xnt: np.ndarray = field(default_factory=lambda: np.zeros(3))
    r1xnt: np.ndarray = field(default_factory=lambda: np.zeros(3))
    inv_eff_mass: float = 0.0

    def __post_init__(self) -> None:
        self.n = _vec(self.n)
        self.r0xn = _vec(self.r0xn)
        self.r1xn = _vec(self.r1xn)
        self.flags = ConstraintFlags(self.flags)

    @property
    def _angular(self) -> bool:
        return bool(self.flags & ConstraintFlags.ANGULAR)

    def prepare(self) -> None:
        """Compute the effective mass and apply a partial position correction."""
        inv_mass0, inv_inertia0 = _mass_properties(self.dynamic0)
        inv_mass1, inv_inertia1 = _mass_properties(self.dynamic1)

        self.r0xnt = inv_inertia0 @ self.r0xn
        self.r1xnt = inv_inertia1 @ self.r1xn

        inv_eff_mass = float(np.dot(self.r0xn, self.r0xnt) + np.dot(self.r1xn, self.r1xnt))
        if not self._angular:
            inv_eff_mass += float(np.dot(self.n, self.n)) * (inv_mass0 + inv_mass1)
        self.inv_eff_mass = inv_eff_mass

        if self.flags & ConstraintFlags.SOFT or not self.c or not self.inv_eff_mass:
            return

        lam = 0.2 * self.c / self.inv_eff_mass
        if self.flags & ConstraintFlags.LIMITED:
            lam = min(max(lam, self.lower), self.upper)

        if not self._angular:
            self.transform0.position = self.transform0.position + lam * inv_mass0 * self.n
            self.transform1.position = self.transform1.position - lam * inv_mass1 * self.n

        q0 = self.transform0.orientation
        spin0 = quat_multiply(np.concatenate(([0.0], lam * self.r0xnt)), q0)
        self.transform0.orientation = quat_normalize(q0 + 0.5 * spin0)

        q1 = self.transform1.orientation
        spin1 = quat_multiply(np.concatenate(([0.0], lam * self.r1xnt)), q1)
        self.transform1.orientation = quat_normalize(q1 - 0.5 * spin1)

    def _apply(self, lam: float) -> None:
        body0 = _active(self.dynamic0)
        if body0 is not None:
            if not self._angular:
                body0.velocity = body0.velocity + lam * body0.inv_mass * self.n
            body0.angular_velocity = body0.angular_velocity + lam * self.r0xnt
        body1 = _active(self.dynamic1)
        if body1 is not None:
            if not self._angular:
                body1.velocity = body1.velocity - lam * body1.inv_mass * self.n
            body1.angular_velocity = body1.angular_velocity - lam * self.r1xnt

    def solve(self, use_bias: bool, time_step: float = 0.0) -> None:
        """Apply one impulse that drives the constraint velocity to its target."""
        if not self.inv_eff_mass:
            return

        velocity0, angular_velocity0 = _velocities(self.dynamic0)
        velocity1, angular_velocity1 = _velocities(self.dynamic1)

        relative_velocity = float(
            np.dot(-self.r0xn, angular_velocity0) + np.dot(self.r1xn, angular_velocity1)
        )
        if not self._angular:
            relative_velocity += float(np.dot(-self.n, velocity0) + np.dot(self.n, velocity1))

        if self.flags & ConstraintFlags.SOFT:
            lam = _soft_lambda(
                relative_velocity, self.c, self.inv_eff_mass,
                self.frequency, self.damping_ratio, time_step,
            )
        else:
            bias = 0.2 * self.c / time_step if use_bias else 0.0
            lam = (relative_velocity - self.target_velocity + bias) / self.inv_eff_mass

        if self.flags & ConstraintFlags.LIMITED:
            previous = self.total_lambda
            self.total_lambda = min(max(self.total_lambda + lam, self.lower), self.upper)
            lam = self.total_lambda - previous
        else:
            self.total_lambda += lam

        self._apply(lam)

    def warm_start(self) -> None:
        """Halve the accumulated impulse and apply it again."""
        self.total_lambda *= 0.5
        self._apply(self.total_lambda)


@dataclass
class ContactPointConstraint:
    """Per-point lever arms, tangent and accumulated impulses of a contact."""

    r0: np.ndarray
    r1: np.ndarray
    r0xn: np.ndarray
    r1xn: np.ndarray
    t: np.ndarray
    r0xt: np.ndarray
    r1xt: np.ndarray
    target_velocity: float = 0.0
    c: float = 0.0
    total_lambda_n: float = 0.0
    total_lambda_t: float = 0.0

    def __post_init__(self) -> None:
        for name in ("r0", "r1", "r0xn", "r1xn", "t", "r0xt", "r1xt"):
            setattr(self, name, _vec(getattr(self, name)))


@dataclass
class ContactConstraints:
    """Non-penetration and friction rows for the points of one contact."""

    transform0: Transform
    transform1: Transform
    dynamic0: DynamicBody | None
    dynamic1: DynamicBody | None
    n: np.ndarray
    friction: float
    is_soft: bool = False
    frequency: float = 0.0
    damping_ratio: float = 0.0
    points: list[ContactPointConstraint] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.n = _vec(self.n)

    def _push(self, lam, inv_mass0, inv_inertia0, inv_mass1, inv_inertia1, direction, arm0, arm1):
        body0 = _active(self.dynamic0)
        if body0 is not None:
            body0.velocity = body0.velocity + lam * inv_mass0 * direction
            body0.angular_velocity = body0.angular_velocity + lam * (inv_inertia0 @ arm0)
        body1 = _active(self.dynamic1)
        if body1 is not None:
            body1.velocity = body1.velocity - lam * inv_mass1 * direction
            body1.angular_velocity = body1.angular_velocity - lam * (inv_inertia1 @ arm1)

    def solve(self, use_bias: bool, time_step: float = 0.0) -> None:
        """One iteration over the normal rows, then the friction rows."""
        inv_mass0, inv_inertia0 = _mass_properties(self.dynamic0)
        inv_mass1, inv_inertia1 = _mass_properties(self.dynamic1)
        n = self.n

        for point in self.points:
            velocity0, angular_velocity0 = _velocities(self.dynamic0)
            velocity1, angular_velocity1 = _velocities(self.dynamic1)
            relative_velocity = float(
                np.dot(-n, velocity0) + np.dot(-point.r0xn, angular_velocity0)
                + np.dot(n, velocity1) + np.dot(point.r1xn, angular_velocity1)
            )
            inv_eff_mass = float(
                np.dot(n, n) * (inv_mass0 + inv_mass1)
                + np.dot(point.r0xn, inv_inertia0 @ point.r0xn)
                + np.dot(point.r1xn, inv_inertia1 @ point.r1xn)
            )
            if self.is_soft:
                lam = _soft_lambda(
                    relative_velocity, point.c, inv_eff_mass,
                    self.frequency, self.damping_ratio, time_step,
                )
            else:
                bias = 0.1 * point.c / time_step if use_bias else 0.0
                lam = (relative_velocity - point.target_velocity + bias) / inv_eff_mass

            previous = point.total_lambda_n
            point.total_lambda_n = min(point.total_lambda_n + lam, 0.0)
            lam = point.total_lambda_n - previous
            self._push(lam, inv_mass0, inv_inertia0, inv_mass1, inv_inertia1, n, point.r0xn, point.r1xn)

        for point in self.points:
            t = point.t
            dtt = float(np.dot(t, t))
            if not dtt:
                continue
            velocity0, angular_velocity0 = _velocities(self.dynamic0)
            velocity1, angular_velocity1 = _velocities(self.dynamic1)
            relative_velocity = float(
                np.dot(-t, velocity0) + np.dot(-point.r0xt, angular_velocity0)
                + np.dot(t, velocity1) + np.dot(point.r1xt, angular_velocity1)
            )
            lam = relative_velocity / (
                dtt * (inv_mass0 + inv_mass1)
                + float(np.dot(point.r0xt, inv_inertia0 @ point.r0xt))
                + float(np.dot(point.r1xt, inv_inertia1 @ point.r1xt))
            )
            limit = self.friction * point.total_lambda_n
            previous = point.total_lambda_t
            point.total_lambda_t = min(max(point.total_lambda_t + lam, limit), -limit)
            lam = point.total_lambda_t - previous
            self._push(lam, inv_mass0, inv_inertia0, inv_mass1, inv_inertia1, t, point.r0xt, point.r1xt)