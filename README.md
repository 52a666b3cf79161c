# rmcontrol

Building blocks for the on-board software of competition robots: angle
helpers, binary packet codecs, shared robot state, a ballistic solver, a
small matrix type with a recursive least-squares estimator, and links over
SocketCAN, serial ports and UDP.

## Modules

- `rmcontrol.userlib` has the angle helpers.
  - `rad_format(ang)` wraps an angle into `[-π, π)`.
  - `RealRad` follows a continuous angle across wrap-arounds.
  - `sleep_ms(dur)` sleeps for a number of milliseconds.
- `rmcontrol.types` holds the basic value types.
  - `Vec3d` is a three-component vector.
  - The enums are `RobotMode`, `KbEvent` and `InitStatus`.
    `InitStatus.for_robot(sentry)` gives the start-up mask for a robot.
  - `ImuPacket`, `RcCtrlPacket` and `SuperCapPacket` are little-endian
    packed packets. Each has `pack()` and `unpack(data)`, and `unpack`
    raises `ValueError` on short input.
- `rmcontrol.robot` covers the shared robot state and its packets.
  - `RobotSet` holds the shared set points. `set_mode` records the
    previous mode. `mode_changed()` reports a change once and then
    acknowledges it.
  - The packets are `ReceiveGimbalPacket`, `SendGimbalPacket`,
    `AutoAimControl`, `SendAutoAimInfo`, `SendVisionControl`,
    `ReceiveNavigationInfo` and `SendNavigationInfo`. When they are
    unpacked, any missing trailing bytes read as zero.
- `rmcontrol.bullet_solver` has `BulletSolver` and `BulletSolverConfig`.
  The solver iterates the yaw and pitch needed to hit an armour plate on a
  moving, spinning target, with a drag model.
- `rmcontrol.matrix` has `Matrix`, a dense float matrix. It supports:
  - `+`, `-`, scalar `*` and `/`, and `@`;
  - `block`, `row`, `col`, `trans`, `trace`, `norm` and `inv`;
  - the constructors `zeros`, `ones`, `eye` and `diag`.

  `inv` raises `SingularMatrixError` on a zero pivot. It gives a zero
  matrix when the matrix is not square.
- `rmcontrol.rls` has `RLS`, a recursive least-squares estimator with a
  forgetting factor. Its methods are `update(sample, actual_output)`,
  `reset()`, `set_params_vector(params)`, `params_vector()` and
  `output()`.
- `rmcontrol.callbacks` has two mixins that route decoded packets to
  handlers.
  - `Callback` dispatches by the type of the value.
  - `KeyedCallback` dispatches by a key such as a CAN id or a header byte.
- `rmcontrol.log` has `log_ok`, `log_info` and `log_err`. They print
  printf-style messages in colour to standard output.
- `rmcontrol.can_bus` handles SocketCAN.
  - `CanFrame` packs and unpacks the kernel's 16-byte frame layout.
  - `CanInterface(name)` binds a raw CAN socket, which needs Linux.
  - `CanInterface.task()` reads frames and hands each one to the handler
    registered for its CAN id.
- `rmcontrol.serial_interface` reads the serial link.
  - `SerialInterface` reads frames of the form `0x55 0xAA`, packet id,
    payload. It decodes id 1 as an `ImuPacket` and id 2 as an
    `RcCtrlPacket`, then calls the handler registered for that type.
  - It uses `pyserial`.
- `rmcontrol.socket_interface` handles UDP.
  - `ServerSocketInterface` binds UDP port 11451 by default.
  - Datagrams with header `0x37` go out as `ReceiveNavigationInfo` by
    type. Every other header goes out as `AutoAimControl`, keyed by header.
  - `send(packet)` replies to the client registered for the packet's
    header byte.
- `rmcontrol.io_registry` has `IORegistry`, which keeps devices by name
  and runs each device's `task()` in a daemon thread. Registering a name
  twice raises `DuplicateDeviceError`.

## Examples

```python
from rmcontrol.userlib import RealRad, rad_format

rad_format(4.0)          # about -2.283

heading = RealRad()
heading.update(3.1)
heading.update(-3.1)     # crossed +π, so the turn count goes up
heading.now              # about 3.183
```

```python
from rmcontrol.bullet_solver import BulletSolver
from rmcontrol.types import Vec3d

solver = BulletSolver()
ok = solver.solve(
    Vec3d(3.0, 0.5, 0.2),   # target centre (m)
    Vec3d(0.0, 0.0, 0.0),   # target velocity (m/s)
    15.0,                   # bullet speed (m/s)
    0.0,                    # target yaw
    0.0,                    # target spin rate
    0.25, 0.25, 0.0,        # armour radii and height offset
    4,                      # number of armour plates
)
if ok:
    print(solver.yaw(), solver.pitch())
```

`solve` returns `False` if the iteration does not converge within 20
steps or the error becomes NaN.

```python
from rmcontrol.matrix import Matrix

identity = Matrix.eye(2, 2)
doubled = identity * 2.0
doubled.trace()                           # 4.0
(doubled @ doubled.inv()) == identity     # True
```

## What it does not do

The package gives you the parts. It does not put them together into a
running robot.

- It has no motor drivers that turn set points into CAN current commands.
- It has no PID or other feedback controllers.
- It has no per-robot configuration tables.
- It has no chassis, gimbal or shooting control loops.
- It has no command that starts a controller.

## Development

The package needs Python 3.10 or later and `pyserial`. Install the `test`
extra to run the tests with `pytest`.