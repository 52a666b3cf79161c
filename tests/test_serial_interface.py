import io
from types import SimpleNamespace
from unittest import mock

import pytest
import serial

from rmcontrol.serial_interface import SerialInterface
from rmcontrol.types import ImuPacket, RcCtrlPacket


class FakePort:
    def __init__(self, data=b"", close_when_empty=True):
        self.buffer = io.BytesIO(data)
        self.size = len(data)
        self.written = bytearray()
        self.is_open = True
        self.close_when_empty = close_when_empty

    def read(self, n):
        chunk = self.buffer.read(n)
        if self.close_when_empty and self.buffer.tell() >= self.size:
            self.is_open = False
        return chunk

    def write(self, data):
        self.written += data
        return len(data)


class BrokenPort(FakePort):
    def read(self, n):
        raise serial.SerialException("device vanished")


def make(data=b"", **kwargs):
    return SerialInterface("/dev/ttyTEST", port=FakePort(data, **kwargs))


IMU = ImuPacket(1.5, -0.25, 0.5, 2.0, -4.0, 0.125)
RC = RcCtrlPacket(660, -660, 0, 1, 2, 1, 3, 10, -10, 0, 1, 0, 0x41)


def test_read_imu_packet():
    iface = make(b"\x55\xaa\x01" + IMU.pack(), close_when_empty=False)
    seen = []
    iface.register_callback(ImuPacket, seen.append)
    packet = iface.read_packet()
    assert packet == IMU
    assert iface.imu_pkg == IMU
    assert seen == [IMU]


def test_read_rc_packet():
    iface = make(b"\x55\xaa\x02" + RC.pack(), close_when_empty=False)
    seen = []
    iface.register_callback(RcCtrlPacket, seen.append)
    assert iface.read_packet() == RC
    assert iface.rc_pkg == RC
    assert seen == [RC]


def test_wrong_header_is_ignored():
    iface = make(b"\xaa\x55\x01" + IMU.pack(), close_when_empty=False)
    seen = []
    iface.register_callback(ImuPacket, seen.append)
    assert iface.read_packet() is None
    assert seen == []


def test_unknown_packet_id_is_ignored():
    iface = make(b"\x55\xaa\x07" + IMU.pack(), close_when_empty=False)
    assert iface.read_packet() is None
    assert iface.imu_pkg == ImuPacket()


def test_short_payload_is_ignored():
    iface = make(b"\x55\xaa\x01" + IMU.pack()[:10], close_when_empty=False)
    assert iface.read_packet() is None
    assert iface.imu_pkg == ImuPacket()


def test_send_packet_and_bytes():
    iface = make()
    assert iface.send(IMU) == ImuPacket.LAYOUT.size
    iface.send(b"\x01\x02")
    assert bytes(iface.port.written) == IMU.pack() + b"\x01\x02"


def test_task_reads_until_port_closes():
    data = b"\x55\xaa\x01" + IMU.pack() + b"\x55\xaa\x02" + RC.pack()
    iface = make(data)
    imu_seen, rc_seen = [], []
    iface.register_callback(ImuPacket, imu_seen.append)
    iface.register_callback(RcCtrlPacket, rc_seen.append)
    ports = [SimpleNamespace(device="/dev/ttyACM0", description="board", hwid="USB VID:PID=0000:0000")]
    with mock.patch("serial.tools.list_ports.comports", return_value=ports):
        iface.task()
    assert imu_seen == [IMU]
    assert rc_seen == [RC]


def test_enumerate_ports_lists_devices():
    iface = make()
    ports = [SimpleNamespace(device="/dev/ttyUSB1", description="imu", hwid="n/a")]
    with mock.patch("serial.tools.list_ports.comports", return_value=ports):
        assert iface.enumerate_ports() == [("/dev/ttyUSB1", "imu", "n/a")]


def test_task_raises_when_serial_fails():
    iface = SerialInterface("/dev/ttyTEST", port=BrokenPort())
    with pytest.raises(serial.SerialException):
        iface.task()