"""Serial link to the IMU board, which also relays the remote controller."""

from __future__ import annotations

from typing import Optional, Union

import serial
from serial.tools import list_ports

from rmcontrol.callbacks import Callback
from rmcontrol.log import log_err, log_info
from rmcontrol.types import ImuPacket, RcCtrlPacket

FRAME_HEADER = b"\x55\xaa"
IMU_PACKET_ID = 1
RC_PACKET_ID = 2

_PACKET_TYPES = {
    IMU_PACKET_ID: ImuPacket,
    RC_PACKET_ID: RcCtrlPacket,
}

Packet = Union[ImuPacket, RcCtrlPacket]


class SerialInterface(Callback):
    """Reads framed IMU and remote-controller packets and hands them to registered handlers.

    A frame is the two header bytes 0x55 0xAA, one packet id byte and the
    packet payload.
    """

    def __init__(
        self,
        port_name: str,
        baudrate: int = 115200,
        simple_timeout: int = 2000,
        port: Optional[object] = None,
    ) -> None:
        self.name = port_name
        if port is None:
            port = serial.Serial(port_name, baudrate, timeout=simple_timeout / 1000.0)
        self.port = port
        self.imu_pkg = ImuPacket()
        self.rc_pkg = RcCtrlPacket()

    def enumerate_ports(self) -> list[tuple[str, str, str]]:
        """Log and return the serial ports present as (device, description, hardware id)."""
        found = [(info.device, info.description, info.hwid) for info in list_ports.comports()]
        for device, description, hwid in found:
            log_info("(%s, %s, %s)\n", device, description, hwid)
        return found

    def read_packet(self) -> Optional[Packet]:
        """Read one frame; return the decoded packet, or None if nothing valid arrived."""
        if self.port.read(2) != FRAME_HEADER:
            return None
        pkg_id = self.port.read(1)
        if len(pkg_id) != 1:
            return None
        packet_type = _PACKET_TYPES.get(pkg_id[0])
        if packet_type is None:
            return None
        payload = self.port.read(packet_type.LAYOUT.size)
        if len(payload) < packet_type.LAYOUT.size:
            return None
        packet = packet_type.unpack(payload)
        if isinstance(packet, ImuPacket):
            self.imu_pkg = packet
        else:
            self.rc_pkg = packet
        self.callback(packet)
        return packet

    def task(self) -> None:
        """Read frames while the port is open; once it closes, list the ports and return."""
        while True:
            if not self.port.is_open:
                self.enumerate_ports()
                return
            try:
                self.read_packet()
            except serial.SerialException:
                log_err("serial offline! end program now\n")
                raise

    def send(self, packet: Union[bytes, bytearray, object]) -> int:
        """Write a packet (raw bytes or anything with ``pack()``) to the port."""
        data = bytes(packet) if isinstance(packet, (bytes, bytearray)) else packet.pack()
        written = self.port.write(data)
        return len(data) if written is None else written