"""Interactive menu that exercises the SCARA simulator."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from enum import IntEnum

from .connection import DEFAULT_HOST, DEFAULT_PORT, SEND_DELAY, SocketError, connect_to_simulator
from .controller import ScaraController, ScaraState, ToolState, format_state, init_scara_state
from .kinematics import ArmSolution, RGBColor, UnreachableError, init_line, inverse_kinematics

MENU = """

==========MAIN MENU==========

1) Task 1: Simulator Command Functions
2) Task 2: Scara State Functions
3) Task 3.1: Joint Interpolated Move
4) Task 3.2: Linear Interpolated Move
5) Quit
"""


class Menu(IntEnum):
    SIMULATOR = 1
    SCARA = 2
    JOINT = 3
    LINEAR = 4
    QUIT = 5


def _pause(prompt: str = "") -> None:
    try:
        input(prompt)
    except EOFError:
        pass


def simulator_command_test(controller: ScaraController) -> None:
    """Exercise the raw angle, pen, colour and speed commands."""
    c = controller
    c.set_speed("H")
    c.set_pen("u")
    c.set_angles(0, 0)

    c.set_pen("d")
    c.set_color(255, 0, 0)
    c.set_angles(90, -90)
    c.set_pen("u")

    c.set_speed("H")
    c.set_angles(0, 0)

    c.set_speed("M")
    c.set_pen("d")
    c.set_color(0, 255, 0)
    c.set_angles(-90, 90)
    c.set_pen("u")

    c.set_speed("H")
    c.set_angles(0, 0)
    c.set_color(0, 0, 255)
    c.set_angles(90, 90)
    c.set_pen("d")
    c.set_speed("L")
    c.set_angles(-90, -90)
    c.set_pen("u")
    c.set_speed("H")
    c.set_angles(0, 0)


def _aim(controller: ScaraController, state: ScaraState, x: float, y: float) -> None:
    pos = state.arm_pos
    try:
        pos.theta1, pos.theta2 = inverse_kinematics(x, y, pos.arm)
    except UnreachableError as exc:
        if exc.theta1 is not None and exc.theta2 is not None:
            pos.theta1, pos.theta2 = exc.theta1, exc.theta2
    controller.set_state(state)


def scara_test(controller: ScaraController) -> None:
    """Draw two squares through state updates."""
    state = init_scara_state(200, 200, ArmSolution.LEFT, ToolState("u", RGBColor(255, 0, 0)), "H")

    _aim(controller, state, 200, 200)
    state.tool.pen = "d"
    for x, y in ((200, 400), (400, 400), (400, 200), (200, 200)):
        _aim(controller, state, x, y)

    state.tool.pen = "u"
    state.tool.color.b = 255
    state.speed = "L"
    _aim(controller, state, 200, -200)

    state.tool.pen = "d"
    for x, y in ((200, -400), (400, -400), (400, -200), (200, -200)):
        _aim(controller, state, x, y)


def _move(controller: ScaraController, state: ScaraState) -> None:
    try:
        controller.move_joint(state)
    except UnreachableError:
        pass


def move_joint_test(controller: ScaraController) -> None:
    """Make a series of joint interpolated moves, showing the state after each."""
    state = init_scara_state(600, 0, ArmSolution.LEFT, ToolState("u", RGBColor(24, 0, 66)), "L")
    _move(controller, state)

    for x, y, arm, pen in (
        (300, 300, ArmSolution.RIGHT, "u"),
        (300, 0, ArmSolution.RIGHT, "d"),
        (300, -300, ArmSolution.LEFT, "d"),
    ):
        state.arm_pos.x = x
        state.arm_pos.y = y
        state.arm_pos.arm = arm
        state.tool.pen = pen
        _move(controller, state)
        print(format_state(state))
        _pause()


_LINE_SETS = (
    (
        "Easy",
        (
            (300, 0, 300, 300, 10),
            (100, 500, 300, 300, 20),
            (300, 0, 300, -300, 10),
            (100, -500, 300, -300, 20),
        ),
    ),
    (
        "Medium",
        (
            (0, 600, 600, 0, 20),
            (600, 0, 0, -600, 20),
            (300, 300, -500, 300, 10),
            (-500, 300, -300, 500, 5),
            (300, -300, -500, -300, 10),
            (-500, -300, -300, -500, 5),
        ),
    ),
    (
        "Hard",
        (
            (-500, 300, 600, 0, 20),
            (600, 0, -300, 500, 20),
            (-500, -300, 600, 0, 20),
            (600, 0, -300, -500, 20),
            (-500, -300, -300, 500, 10),
            (-500, 300, -300, -500, 10),
        ),
    ),
    (
        "Challenge",
        (
            (-500, 300, 0, -600, 20),
            (0, -600, -300, 500, 20),
            (-500, -300, 0, 600, 20),
            (0, 600, -300, -500, 20),
        ),
    ),
)


def move_linear_test(controller: ScaraController) -> None:
    """Draw the easy, medium, hard and challenge sets of lines."""
    state = init_scara_state(300, 300, ArmSolution.RIGHT, ToolState("u", RGBColor(0, 0, 255)), "H")
    _move(controller, state)

    for label, lines in _LINE_SETS:
        for xa, ya, xb, yb, n in lines:
            controller.move_linear(state, init_line(xa, ya, xb, yb, n))
        print(f"{label} Lines Complete!")
        _pause()


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="scarasim", description="Drive the SCARA robot simulator in remote mode."
    )
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument(
        "--delay", type=float, default=SEND_DELAY, help="seconds to wait after each command"
    )
    args = parser.parse_args(argv)

    print(f"Connecting to {args.host} through port {args.port}...")
    try:
        client = connect_to_simulator(args.host, args.port)
    except SocketError:
        print("\n\nSimulator must be started and placed in")
        print("remote mode before running this program.\n")
        _pause("Press ENTER to close program...")
        return 0

    client.send_delay = args.delay
    controller = ScaraController(client)
    actions = {
        Menu.SIMULATOR: simulator_command_test,
        Menu.SCARA: scara_test,
        Menu.JOINT: move_joint_test,
        Menu.LINEAR: move_linear_test,
    }

    with client:
        for command in ("PEN_UP", "HOME", "CLEAR_TRACE", "CLEAR_POSITION_LOG", "CLEAR_REMOTE_COMMAND_LOG"):
            client.send(command + "\n")

        while True:
            print(MENU)
            try:
                raw = input()
            except EOFError:
                break
            try:
                choice = int(raw.strip())
            except ValueError:
                choice = 0
            if choice == Menu.QUIT:
                break
            action = actions.get(choice)
            if action is None:
                print("\n\nPlease Select one of the Menu Items.")
                _pause()
                continue
            action(controller)

        client.send("END\n")
        _pause("\n\nPress ENTER to end the program...")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())