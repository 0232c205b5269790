# scarasim

Control a two-link SCARA robot simulator over TCP. The package provides
forward and inverse kinematics, joint moves, linear moves that switch
between arm solutions where needed, and the simulator's text commands
(`PEN_UP`, `PEN_DOWN`, `PEN_COLOR`, `ROTATE_JOINT`, `MOTOR_SPEED`, ...).

The arm has an inner link of 350 units and an outer link of 250 units.
Joint 1 is limited to ±150° and joint 2 to ±170°.

## Installation

```
pip install .
```

## Command line

Start the simulator in remote mode, then run:

```
scarasim
```

Options:

- `--host` – simulator address (default `127.0.0.1`)
- `--port` – simulator port (default `1270`)
- `--delay` – seconds to wait after each command sent (default `0.2`)

After connecting, the program lifts the pen, homes the arm and clears the
simulator's trace and logs. A menu then offers:

1. the command test (raw angle, pen, colour and speed commands),
2. the state test (two squares drawn through state updates),
3. the joint-move test,
4. the linear-move test (easy, medium, hard and challenge sets of lines),
5. quit.

On quitting it sends `END` and closes the connection. If the simulator
cannot be reached, it says so and exits.

## Library use

```python
from scarasim.kinematics import ArmSolution, forward_kinematics, init_line, inverse_kinematics
from scarasim.connection import connect_to_simulator
from scarasim.controller import ScaraController, ToolState, format_state, init_scara_state

x, y = forward_kinematics(0.0, 0.0)          # (600.0, 0.0)
theta1, theta2 = inverse_kinematics(300, 300, ArmSolution.RIGHT)

with connect_to_simulator("127.0.0.1", 1270) as conn:
    controller = ScaraController(conn)
    state = init_scara_state(300, 300, ArmSolution.RIGHT, ToolState(), "H")
    controller.move_joint(state)
    controller.move_linear(state, init_line(300, 0, 300, 300, 10))
    print(format_state(state))
```

### `scarasim.kinematics`

- `forward_kinematics(theta1, theta2)` returns the tool `(x, y)` for joint
  angles in degrees.
- `inverse_kinematics(x, y, arm)` returns joint angles in degrees for the
  given `ArmSolution` (`RIGHT` or `LEFT`). It raises `UnreachableError`
  (a `ValueError`) when the point is outside the workspace, or when it needs
  angles beyond the joint limits; in the latter case the error's `theta1`
  and `theta2` hold the angles that would be needed.
- `init_line(xa, ya, xb, yb, num_points)` returns a `LineData` whose
  `RGBColor` follows the slope: green for horizontal, black for vertical,
  blue for a positive slope, red for a negative one.

### `scarasim.controller`

- `ScaraState` holds an `ArmPosition` (`x`, `y`, `theta1`, `theta2`, `arm`),
  a `ToolState` (`pen` as `"u"` or `"d"`, `color`) and a `speed`
  (`"H"`, `"M"` or `"L"`).
- `ScaraController(connection)` wraps any object with a `send(str)` method.
  `set_angles`, `set_pen`, `set_color` and `set_speed` send single commands;
  `set_speed` raises `ValueError` for a speed other than H, M or L.
- `set_state(state)` sends only the parts of the state that differ from what
  was last sent.
- `move_joint(state)` solves the angles for the state's `(x, y)` and moves
  there; it raises `UnreachableError` if the point cannot be reached.
- `move_linear(state, line)` draws the line point by point, switching arm
  solution and lifting the pen where a point is not reachable with the
  current one. A line needs at least two points.
- `init_scara_state(x, y, arm, tool, speed)` builds a state, falling back to
  zero joint angles if the point is unreachable.
- `format_state(state)` renders the state as a small text table.

### `scarasim.connection`

- `connect_to_simulator(host, port)` opens a `RobotClient`.
- `RobotClient` has `connect`, `send` (returns the number of bytes sent and
  then pauses for `send_delay` seconds), `read`, `close`, and works as a
  context manager.
- `SocketAddress(host, port)` offers `resolve()`, `name()` and `aliases()`.
- `ServerSocket(port, queue)` listens and returns accepted connections as
  `RobotClient` objects through `bind` and `accept`.
- Network failures raise `SocketError`, with `code` and `message`.

## What it does not do

The package does not include the simulator: it only sends commands to one
that is already running in remote mode, and it does not read back or check
the simulator's replies.

## Tests

```
pip install .[test]
pytest
```