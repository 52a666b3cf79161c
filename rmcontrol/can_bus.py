"""Raw SocketCAN access: frame encoding and a reader that dispatches by CAN id."""

from __future__ import annotations

import socket
import struct
from dataclasses import dataclass
from typing import ClassVar, Optional

from rmcontrol.callbacks import KeyedCallback
from rmcontrol.log import log_err

MAX_DATA_LENGTH = 8


@dataclass
class CanFrame:
    """A classic CAN frame in the kernel's ``struct can_frame`` layout."""

    LAYOUT: ClassVar[struct.Struct] = struct.Struct("<IB3x8s")

    can_id: int
    data: bytes = bytes(MAX_DATA_LENGTH)
    dlc: Optional[int] = None

    def __post_init__(self) -> None:
        self.data = bytes(self.data)
        if len(self.data) > MAX_DATA_LENGTH:
            raise ValueError(f"CAN payload holds at most {MAX_DATA_LENGTH} bytes, got {len(self.data)}")
        if self.dlc is None:
            self.dlc = len(self.data)
        if not 0 <= self.dlc <= MAX_DATA_LENGTH:
            raise ValueError(f"invalid CAN data length {self.dlc}")

    def pack(self) -> bytes:
        """Encode the frame as the 16 bytes a raw CAN socket exchanges."""
        return self.LAYOUT.pack(
            self.can_id & 0xFFFFFFFF, self.dlc, self.data.ljust(MAX_DATA_LENGTH, b"\0")
        )

    @classmethod
    def unpack(cls, data: bytes) -> "CanFrame":
        """Decode a frame read from a raw CAN socket."""
        if len(data) < cls.LAYOUT.size:
            raise ValueError(f"a CAN frame needs {cls.LAYOUT.size} bytes, got {len(data)}")
        can_id, dlc, payload = cls.LAYOUT.unpack_from(data)
        length = min(dlc, MAX_DATA_LENGTH)
        return cls(can_id, payload[:length], length)


FRAME_SIZE = CanFrame.LAYOUT.size


class CanInterface(KeyedCallback):
    """A raw CAN socket bound to one interface; received frames go to handlers keyed by CAN id."""

    def __init__(self, name: str, sock: Optional[socket.socket] = None) -> None:
        self.name = name
        if sock is None:
            try:
                sock = socket.socket(socket.AF_CAN, socket.SOCK_RAW, socket.CAN_RAW)
            except (OSError, AttributeError) as exc:
                log_err("Error while creating socket\n")
                raise OSError(f"cannot create CAN socket: {exc}") from exc
            try:
                sock.bind((name,))
            except OSError:
                sock.close()
                log_err("Error in socket bind\n")
                raise
        self.sock = sock

    def send(self, frame: CanFrame) -> bool:
        """Write one frame to the bus."""
        self.sock.send(frame.pack())
        return True

    def task(self) -> bool:
        """Read frames and dispatch them until a read fails; then return False."""
        while True:
            try:
                data = self.sock.recv(FRAME_SIZE)
            except OSError:
                log_err("Error reading CAN frame\n")
                return False
            if len(data) < FRAME_SIZE:
                log_err("Error reading CAN frame\n")
                return False
            frame = CanFrame.unpack(data)
            self.callback_key(frame.can_id, frame)

    def close(self) -> None:
        """Close the socket."""
        self.sock.close()