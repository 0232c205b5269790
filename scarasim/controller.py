"""Stateful control of the SCARA simulator: joint and linear moves."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Protocol

from .kinematics import (
    ArmSolution,
    LineData,
    RGBColor,
    UnreachableError,
    inverse_kinematics,
)

_RED = "\033[31m"
_GREY = "\033[90m"
_RESET = "\033[0m"

SPEED_NAMES = {"H": "HIGH", "M": "MEDIUM", "L": "LOW"}


class _Connection(Protocol):
    def send(self, data: str) -> int: ...


@dataclass
class ArmPosition:
    """Tool coordinates, joint angles in degrees and the chosen arm solution."""

    x: float = 0.0
    y: float = 0.0
    theta1: float = 0.0
    theta2: float = 0.0
    arm: ArmSolution = ArmSolution.RIGHT


@dataclass
class ToolState:
    """Pen position ('u' or 'd') and pen colour."""

    pen: str = "u"
    color: RGBColor = field(default_factory=RGBColor)


@dataclass
class ScaraState:
    """Everything the simulator is told about the robot."""

    arm_pos: ArmPosition = field(default_factory=ArmPosition)
    tool: ToolState = field(default_factory=ToolState)
    speed: str = "H"


def _solve(x: float, y: float, arm: ArmSolution | int) -> tuple[float, float]:
    try:
        return inverse_kinematics(x, y, arm)
    except UnreachableError as exc:
        if exc.theta1 is not None:
            print(f"{_GREY}{exc}{_RESET}")
        raise


class ScaraController:
    """Sends simulator commands, skipping those that would change nothing."""

    def __init__(self, connection: _Connection) -> None:
        self.connection = connection
        self._pen: str | None = None
        self._color: tuple[int, int, int] | None = None
        self._speed: str | None = None
        self._angles: tuple[float, float] | None = None

    def set_angles(self, theta1: float, theta2: float) -> None:
        """Rotate both joints to the given angles in degrees."""
        self.connection.send(f"ROTATE_JOINT ANG1 {theta1:.2f} ANG2 {theta2:.2f}\n")

    def set_pen(self, pen: str) -> None:
        """Lower the pen for 'd' or 'D'; lift it for anything else."""
        self.connection.send("PEN_DOWN\n" if pen in ("d", "D") else "PEN_UP\n")

    def set_color(self, r: int, g: int, b: int) -> None:
        self.connection.send(f"PEN_COLOR {r} {g} {b}\n")

    def set_speed(self, speed: str) -> None:
        """Set the motor speed: H, M or L in either case."""
        name = SPEED_NAMES.get(speed.upper()) if len(speed) == 1 else None
        if name is None:
            raise ValueError(f"Invalid motor speed: {speed!r}")
        self.connection.send(f"MOTOR_SPEED {name}\n")
        print(f"Motor speed changed: {name}")

    def set_state(self, state: ScaraState) -> None:
        """Send the parts of state that differ from what was last sent."""
        if state.tool.pen != self._pen:
            self.set_pen(state.tool.pen)
            self._pen = state.tool.pen

        c = state.tool.color
        color = (c.r, c.g, c.b)
        if color != self._color:
            self.set_color(*color)
            self._color = color

        if state.speed != self._speed:
            self._speed = state.speed
            try:
                self.set_speed(state.speed)
            except ValueError as exc:
                print(f"{_RED}{exc}{_RESET}")

        angles = (state.arm_pos.theta1, state.arm_pos.theta2)
        if angles != self._angles:
            self.set_angles(*angles)
            self._angles = angles

    def move_joint(self, state: ScaraState) -> None:
        """Solve the joint angles for the state's (x, y) and move there."""
        pos = state.arm_pos
        try:
            pos.theta1, pos.theta2 = _solve(pos.x, pos.y, pos.arm)
        except UnreachableError as exc:
            if exc.theta1 is not None and exc.theta2 is not None:
                pos.theta1, pos.theta2 = exc.theta1, exc.theta2
            print(f"{_RED}move_joint() failed: invalid move operation{_RESET}")
            raise
        self.set_state(state)

    def _try_move(self, state: ScaraState) -> bool:
        try:
            self.move_joint(state)
        except UnreachableError:
            return False
        return True

    def move_linear(self, state: ScaraState, line: LineData) -> None:
        """Draw line point by point, switching arm solution where needed."""
        if line.num_points < 2:
            raise ValueError("a line needs at least two points")
        pos = state.arm_pos
        state.tool.color = replace(line.color)

        pos.x, pos.y = line.xa, line.ya
        state.tool.pen = "u"
        if line.ya >= 0 and line.yb >= 0:
            pos.arm = ArmSolution.RIGHT
        else:
            pos.arm = ArmSolution.LEFT
        self._try_move(state)
        state.tool.pen = "d"

        steps = line.num_points - 1
        for i in range(line.num_points):
            x = (line.xb - line.xa) / steps * i + line.xa
            y = (line.yb - line.ya) / steps * i + line.ya

            try:
                j1, j2 = _solve(x, y, pos.arm)
            except UnreachableError:
                pos.arm = ArmSolution(pos.arm).other
                print(f"Changed arm: {int(pos.arm)}")
                state.tool.pen = "u"
                try:
                    j1, j2 = _solve(x, y, pos.arm)
                except UnreachableError:
                    print(f"{_RED}Invalid arm solution.{_RESET}")
                    continue
                if self._try_move(state):
                    state.tool.pen = "d"
                print("Changing arm.")
            print(f"Current arm: {int(pos.arm)}")

            pos.x, pos.y, pos.theta1, pos.theta2 = x, y, j1, j2
            if self._try_move(state) or i == 0:
                state.tool.pen = "d"

        state.tool.pen = "u"
        self.set_state(state)


def init_scara_state(
    x: float, y: float, arm: ArmSolution | int, tool: ToolState, speed: str
) -> ScaraState:
    """Build a state at (x, y); joint angles fall back to zero if unreachable."""
    print("Initializing robot...")
    pos = ArmPosition(x=x, y=y, arm=ArmSolution(arm))
    state = ScaraState(pos, ToolState(tool.pen, replace(tool.color)), speed)
    print("Calculating scara angles...")
    try:
        pos.theta1, pos.theta2 = _solve(x, y, pos.arm)
    except UnreachableError:
        print(f"{_RED}scara angles failed. Using J1 = J2 = 0 deg...{_RESET}")
        pos.theta1 = pos.theta2 = 0.0
    else:
        print("Initialization complete.")
    return state


def format_state(state: ScaraState) -> str:
    """Render the state as a small text table."""
    arm = state.arm_pos
    tool = state.tool
    c = tool.color
    return "\n".join(
        [
            "|SCARA STATE|",
            "| Theta 1 | Theta 2 |    X    |    Y    |   Arm   |",
            f"|{arm.theta1:9.2f}|{arm.theta2:9.2f}|{arm.x:9.2f}|{arm.y:9.2f}"
            f"|    {int(arm.arm)}    |",
            "|Position |   RED   |  GREEN  |   BLUE  |",
            f"|    {tool.pen}    |   {c.r:3d}   |   {c.g:3d}   |   {c.b:3d}   |",
        ]
    )