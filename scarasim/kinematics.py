"""Kinematics of the two-link SCARA arm and line descriptions."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum

L1 = 350.0
L2 = 250.0
MAX_ABS_THETA1_DEG = 150.0
MAX_ABS_THETA2_DEG = 170.0
SLOPE_TOL = 1.0e-5
POINT_TOL = 1.0e-8
MAX_POINTS = 50


class UnreachableError(ValueError):
    """The requested point cannot be reached.

    When the point lies inside the workspace but needs joint angles beyond the
    mechanical limits, ``theta1`` and ``theta2`` hold the angles it would need;
    otherwise they are None.
    """

    def __init__(
        self,
        message: str,
        theta1: float | None = None,
        theta2: float | None = None,
    ) -> None:
        super().__init__(message)
        self.theta1 = theta1
        self.theta2 = theta2


class ArmSolution(IntEnum):
    RIGHT = 0
    LEFT = 1

    @property
    def other(self) -> ArmSolution:
        return ArmSolution.LEFT if self is ArmSolution.RIGHT else ArmSolution.RIGHT


@dataclass
class RGBColor:
    r: int = 0
    g: int = 0
    b: int = 0


@dataclass
class LineData:
    xa: float
    ya: float
    xb: float
    yb: float
    num_points: int
    color: RGBColor = field(default_factory=RGBColor)


def forward_kinematics(theta1: float, theta2: float) -> tuple[float, float]:
    """Return the tool (x, y) for joint angles in degrees."""
    t1 = math.radians(theta1)
    t2 = math.radians(theta2)
    x = L1 * math.cos(t1) + L2 * math.cos(t1 + t2)
    y = L1 * math.sin(t1) + L2 * math.sin(t1 + t2)
    return x, y


def inverse_kinematics(x: float, y: float, arm: ArmSolution | int) -> tuple[float, float]:
    """Return joint angles in degrees that put the tool at (x, y)."""
    r = math.hypot(x, y)
    if r > L1 + L2 or r < abs(L1 - L2):
        raise UnreachableError(f"Point ({x:.2f}, {y:.2f}) is outside the workspace")

    cos_theta2 = (x * x + y * y - L1 * L1 - L2 * L2) / (2 * L1 * L2)
    cos_theta2 = max(-1.0, min(1.0, cos_theta2))

    if arm == ArmSolution.LEFT:
        t2 = -math.acos(cos_theta2)
    else:
        t2 = math.acos(cos_theta2)
    t1 = math.atan2(y, x) - math.atan2(L2 * math.sin(t2), L1 + L2 * math.cos(t2))

    theta1 = math.degrees(t1)
    theta2 = math.degrees(t2)
    if abs(theta1) > MAX_ABS_THETA1_DEG or abs(theta2) > MAX_ABS_THETA2_DEG:
        raise UnreachableError(
            f"Point ({x:.2f}, {y:.2f}) requires joint angles "
            f"({theta1:.2f}, {theta2:.2f}) that exceed mechanical limits",
            theta1,
            theta2,
        )
    return theta1, theta2


def init_line(xa: float, ya: float, xb: float, yb: float, num_points: int) -> LineData:
    """Describe a line and colour it by its slope."""
    dx = xb - xa
    dy = yb - ya
    if abs(dy) <= SLOPE_TOL:
        color = RGBColor(0, 255, 0)
    elif abs(dx) <= SLOPE_TOL:
        color = RGBColor(0, 0, 0)
    elif dy / dx > 0:
        color = RGBColor(0, 0, 255)
    else:
        color = RGBColor(255, 0, 0)
    return LineData(xa, ya, xb, yb, num_points, color)