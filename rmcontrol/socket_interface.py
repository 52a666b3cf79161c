"""UDP endpoint that exchanges packets with the vision and navigation processes."""

from __future__ import annotations

import socket
from typing import Optional, Union

from rmcontrol.callbacks import Callback, KeyedCallback
from rmcontrol.log import log_err, log_ok
from rmcontrol.robot import AutoAimControl, ReceiveNavigationInfo

DEFAULT_PORT = 11451
NAVIGATION_HEADER = 0x37
_BUFFER_SIZE = 256

Address = tuple[str, int]


class ServerSocketInterface(Callback, KeyedCallback):
    """Receives datagrams, routes them by header byte, and replies to known clients."""

    def __init__(self, name: str, port: int = DEFAULT_PORT, sock: Optional[socket.socket] = None) -> None:
        self.name = name
        self.clients: dict[int, Address] = {}
        if sock is None:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            try:
                sock.bind(("", port))
            except OSError:
                log_err("can't bind socket fd with port number\n")
        self.sock = sock

    @property
    def port(self) -> int:
        """The local port the socket is bound to."""
        return self.sock.getsockname()[1]

    def add_client(self, header: int, ip: str, port: int) -> None:
        """Remember where to send packets with ``header``; an existing entry is kept."""
        self.clients.setdefault(header, (ip, port))

    def send(self, packet: Union[bytes, object]) -> int:
        """Send a packet to the client registered for its header byte."""
        data = bytes(packet) if isinstance(packet, (bytes, bytearray)) else packet.pack()
        if not data:
            raise ValueError("cannot send an empty packet")
        header = data[0]
        try:
            address = self.clients[header]
        except KeyError:
            raise KeyError(f"no client registered for header {header:#x}") from None
        return self.sock.sendto(data, address)

    def handle_datagram(self, data: bytes, address: Address):
        """Decode one datagram and hand it to the matching handler; return the packet."""
        if not data:
            return None
        header = data[0]
        if header not in self.clients:
            log_ok("register clients %d\n", header)
            self.clients[header] = address
        if header == NAVIGATION_HEADER:
            nav = ReceiveNavigationInfo.unpack(data)
            self.callback(nav)
            return nav
        try:
            control = AutoAimControl.unpack(data)
        except ValueError:
            log_err("malformed auto aim packet with header %d\n", header)
            return None
        self.callback_key(control.header, control)
        return control

    def task(self) -> None:
        """Receive and dispatch datagrams until the socket is closed."""
        while True:
            try:
                data, address = self.sock.recvfrom(_BUFFER_SIZE)
            except OSError:
                return
            if data:
                self.handle_datagram(data, address)

    def close(self) -> None:
        """Close the socket."""
        self.sock.close()