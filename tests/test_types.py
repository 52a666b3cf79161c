import pytest

from rmcontrol.types import (
    ImuPacket,
    InitStatus,
    RcCtrlPacket,
    RobotMode,
    SuperCapPacket,
)


def test_imu_packet_round_trip():
    packet = ImuPacket(1.5, -2.25, 0.5, 4.0, -8.0, 0.125)
    data = packet.pack()
    assert len(data) == 24
    assert ImuPacket.unpack(data) == packet


def test_imu_packet_ignores_trailing_bytes():
    packet = ImuPacket(yaw=0.75)
    assert ImuPacket.unpack(packet.pack() + b"\xff\xff") == packet


def test_imu_packet_short_data_raises():
    with pytest.raises(ValueError):
        ImuPacket.unpack(b"\x00" * 23)


def test_rc_packet_round_trip():
    packet = RcCtrlPacket(660, -660, 12, -12, 0, 1, 3, 100, -100, 0, 1, 0, 0x8001)
    data = packet.pack()
    assert len(data) == 52
    assert RcCtrlPacket.unpack(data) == packet


def test_rc_packet_is_little_endian():
    data = RcCtrlPacket(ch0=1).pack()
    assert data[:4] == b"\x01\x00\x00\x00"


def test_rc_packet_short_data_raises():
    with pytest.raises(ValueError):
        RcCtrlPacket.unpack(b"\x00" * 10)


def test_super_cap_packet_wire_layout():
    packet = SuperCapPacket(error_code=1, chassis_power=0.0, chassis_power_limit=0x1234, cap_energy=5)
    assert packet.pack() == b"\x01\x00\x00\x00\x00\x34\x12\x05"


def test_super_cap_packet_round_trip():
    packet = SuperCapPacket(2, 45.5, 80, 200)
    assert SuperCapPacket.unpack(packet.pack()) == packet


def test_init_status_for_robot():
    assert InitStatus.for_robot(sentry=True) == 0x7
    assert InitStatus.for_robot(sentry=False) == 0x1


def test_robot_mode_from_wire_value():
    assert RobotMode(2) is RobotMode.FOLLOW_GIMBAL
    with pytest.raises(ValueError):
        RobotMode(42)