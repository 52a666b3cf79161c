"""Shared robot state and the binary packets exchanged with vision and navigation."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar

from rmcontrol.types import RobotMode, SuperCapPacket


def _read(layout: struct.Struct, data: bytes) -> tuple:
    """Unpack ``data``; missing trailing bytes read as zero."""
    raw = bytes(data)[: layout.size]
    return layout.unpack(raw.ljust(layout.size, b"\0"))


@dataclass
class RobotSet:
    """Set points and status shared by every control task of the robot."""

    header: int = 0
    vx_set: float = 0.0
    vy_set: float = 0.0
    wz_set: float = 0.0
    spin_state: bool = False

    gimbal1_yaw_set: float = 0.0
    gimbal1_yaw_offset: float = 0.0
    gimbal1_pitch_set: float = 0.0
    gimbal2_yaw_set: float = 0.0
    gimbal2_yaw_offset: float = 0.0
    gimbal2_pitch_set: float = 0.0
    gimbal3_yaw_set: float = 0.0
    gimbal3_yaw_offset: float = 0.0
    gimbal3_pitch_set: float = 0.0

    friction_open: bool = False
    friction_real_state: bool = False
    cv_fire: bool = False
    shoot_open: int = 0

    gimbal_t1_yaw_set: float = 0.0
    gimbal_t1_pitch_set: float = 0.0
    gimbal_t1_yaw_relative: float = 0.0
    gimbal_t2_yaw_set: float = 0.0
    gimbal_t2_pitch_set: float = 0.0
    gimbal_t2_yaw_relative: float = 0.0

    gimbal_sentry_yaw_set: float = 0.0
    gimbal_sentry_yaw: float = 0.0
    gimbal_sentry_yaw_relative: float = 0.0

    aimx: float = 0.0
    aimy: float = 0.0
    aimz: float = 0.0
    is_aiming: bool = False
    inited: int = 0
    sentry_follow_gimbal: int = 0
    auto_aim_status: bool = False

    mode: RobotMode = RobotMode.NO_FORCE
    last_mode: RobotMode = RobotMode.NO_FORCE

    super_cap_info: SuperCapPacket = field(default_factory=SuperCapPacket)

    def set_mode(self, mode: RobotMode) -> None:
        """Switch to ``mode``, remembering the previous one."""
        self.last_mode = self.mode
        self.mode = RobotMode(mode)

    def mode_changed(self) -> bool:
        """Return whether the mode changed since the last check, and acknowledge it."""
        if self.last_mode != self.mode:
            self.last_mode = self.mode
            return True
        return False


@dataclass
class ReceiveGimbalPacket:
    """Target and remote state sent by the vision computer."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<BBhhhhBBbbBBBB11f")

    header: int = 0
    tracking: bool = False
    target_id: int = 0
    armors_num: int = 0
    reserved: int = 0
    sd_yaw: int = 0
    sd_pitch: int = 0
    sd_vx: int = 0
    sd_vy: int = 0
    sd_a: int = 0
    sd_b: int = 0
    sd_mx: int = 0
    sd_my: int = 0
    sd_x: int = 0
    sd_y: int = 0
    sd_ltb: int = 0
    sd_rtb: int = 0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    yaw: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    vz: float = 0.0
    v_yaw: float = 0.0
    r1: float = 0.0
    r2: float = 0.0
    dz: float = 0.0

    @classmethod
    def unpack(cls, data: bytes) -> "ReceiveGimbalPacket":
        header, bits, *rest = _read(cls.LAYOUT, data)
        return cls(
            header,
            bool(bits & 0x1),
            (bits >> 1) & 0x7,
            (bits >> 4) & 0x7,
            (bits >> 7) & 0x1,
            *rest,
        )


@dataclass
class SendGimbalPacket:
    """Attitude and aim point reported to the vision computer."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<BB6fH")

    header: int = 0x5A
    detect_color: int = 0
    reset_tracker: bool = False
    reserved: int = 0
    roll: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0
    aim_x: float = 0.0
    aim_y: float = 0.0
    aim_z: float = 0.0
    checksum: int = 0

    def pack(self) -> bytes:
        bits = (self.detect_color & 0x1) | (int(bool(self.reset_tracker)) << 1) | ((self.reserved & 0x3F) << 2)
        return self.LAYOUT.pack(
            self.header,
            bits,
            self.roll,
            self.pitch,
            self.yaw,
            self.aim_x,
            self.aim_y,
            self.aim_z,
            self.checksum,
        )


@dataclass
class AutoAimControl:
    """Aim set points and fire command from the auto-aim process."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<Bff?i")

    header: int = 0
    yaw_set: float = 0.0
    pitch_set: float = 0.0
    fire: bool = False
    mode: RobotMode = RobotMode.NO_FORCE

    @classmethod
    def unpack(cls, data: bytes) -> "AutoAimControl":
        header, yaw_set, pitch_set, fire, mode = _read(cls.LAYOUT, data)
        return cls(header, yaw_set, pitch_set, fire, RobotMode(mode))

    def pack(self) -> bytes:
        return self.LAYOUT.pack(self.header, self.yaw_set, self.pitch_set, bool(self.fire), int(self.mode))


@dataclass
class SendAutoAimInfo:
    """Gimbal attitude and team colour sent to the auto-aim process."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<Bff?")

    header: int = 0
    yaw: float = 0.0
    pitch: float = 0.0
    red: bool = False

    def pack(self) -> bytes:
        return self.LAYOUT.pack(self.header, self.yaw, self.pitch, bool(self.red))


@dataclass
class SendVisionControl:
    """Gimbal attitude sent to the vision computer."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<B3f")

    header: int = 0xA6
    roll: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0

    def pack(self) -> bytes:
        return self.LAYOUT.pack(self.header, self.roll, self.pitch, self.yaw)


@dataclass
class ReceiveNavigationInfo:
    """Chassis velocity command from the navigation process."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<Bff")

    header: int = 0
    vx: float = 0.0
    vy: float = 0.0

    @classmethod
    def unpack(cls, data: bytes) -> "ReceiveNavigationInfo":
        return cls(*_read(cls.LAYOUT, data))


@dataclass
class SendNavigationInfo:
    """Attitude, health and game state sent to the navigation process."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<Bfff?")

    header: int = 0
    yaw: float = 0.0
    pitch: float = 0.0
    hp: float = 0.0
    start: bool = False

    def pack(self) -> bytes:
        return self.LAYOUT.pack(self.header, self.yaw, self.pitch, self.hp, bool(self.start))