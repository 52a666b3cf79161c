"""Shared value types and the binary packets exchanged with peripherals."""

from __future__ import annotations

import struct
from dataclasses import astuple, dataclass
from enum import IntEnum
from typing import ClassVar, TypeVar

_P = TypeVar("_P")


@dataclass
class Vec3d:
    """A three-dimensional vector of doubles."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class RobotMode(IntEnum):
    """Operating mode of the whole robot."""

    NO_FORCE = 0
    FINISH_INIT = 1
    FOLLOW_GIMBAL = 2
    SEARCH = 3
    IDLE = 4
    NOT_FOLLOW = 5


class KbEvent(IntEnum):
    """Keyboard events understood by the chassis."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3
    SPIN_R = 4
    SPIN_L = 5
    STOP_X = 6
    STOP_Y = 7


class InitStatus(IntEnum):
    """Bit masks that mark the end of the start-up sequence."""

    INIT_FINISH = 0x1
    SENTRY_INIT_FINISH = 0x7

    @classmethod
    def for_robot(cls, sentry: bool) -> "InitStatus":
        """Return the finished mask for a sentry or any other robot."""
        return cls.SENTRY_INIT_FINISH if sentry else cls.INIT_FINISH


def _unpack(cls: type[_P], layout: struct.Struct, data: bytes) -> _P:
    if len(data) < layout.size:
        raise ValueError(f"{cls.__name__} needs {layout.size} bytes, got {len(data)}")
    return cls(*layout.unpack_from(data))


@dataclass
class ImuPacket:
    """Attitude and angular rates reported by the IMU board."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<6f")

    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0
    yaw_v: float = 0.0
    pitch_v: float = 0.0
    roll_v: float = 0.0

    @classmethod
    def unpack(cls, data: bytes) -> "ImuPacket":
        return _unpack(cls, cls.LAYOUT, data)

    def pack(self) -> bytes:
        return self.LAYOUT.pack(*astuple(self))


@dataclass
class RcCtrlPacket:
    """Remote controller state relayed over the serial link."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<13i")

    ch0: int = 0
    ch1: int = 0
    ch2: int = 0
    ch3: int = 0
    ch4: int = 0
    s1: int = 0
    s2: int = 0
    mouse_x: int = 0
    mouse_y: int = 0
    mouse_z: int = 0
    mouse_l: int = 0
    mouse_r: int = 0
    key: int = 0

    @classmethod
    def unpack(cls, data: bytes) -> "RcCtrlPacket":
        return _unpack(cls, cls.LAYOUT, data)

    def pack(self) -> bytes:
        return self.LAYOUT.pack(*astuple(self))


@dataclass
class SuperCapPacket:
    """Status frame sent by the super capacitor module."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<BfHB")

    error_code: int = 0
    chassis_power: float = 0.0
    chassis_power_limit: int = 0
    cap_energy: int = 0

    @classmethod
    def unpack(cls, data: bytes) -> "SuperCapPacket":
        return _unpack(cls, cls.LAYOUT, data)

    def pack(self) -> bytes:
        return self.LAYOUT.pack(*astuple(self))