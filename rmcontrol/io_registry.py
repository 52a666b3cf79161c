"""Named registry of I/O devices, each served by its own background thread."""

from __future__ import annotations

import threading
from typing import Generic, Optional, Protocol, TypeVar

from rmcontrol.log import log_err


class _Device(Protocol):
    name: str

    def task(self) -> object: ...


T = TypeVar("T", bound=_Device)


class DuplicateDeviceError(RuntimeError):
    """Raised when a second device is registered under a name already in use."""


class IORegistry(Generic[T]):
    """Maps device names to devices and runs each device's ``task`` in a daemon thread."""

    def __init__(self, start_tasks: bool = True) -> None:
        self._devices: dict[str, T] = {}
        self._threads: list[threading.Thread] = []
        self._start_tasks = start_tasks

    def __getitem__(self, key: str) -> Optional[T]:
        device = self._devices.get(key)
        if device is None:
            log_err("IO error: no device named %s\n", key)
        return device

    def __contains__(self, key: object) -> bool:
        return key in self._devices

    def __len__(self) -> int:
        return len(self._devices)

    @property
    def threads(self) -> tuple[threading.Thread, ...]:
        """The threads started for the registered devices."""
        return tuple(self._threads)

    def insert(self, device: T) -> T:
        """Register ``device`` under its name and start its task."""
        if device.name in self._devices:
            log_err("IO error: double register device named %s\n", device.name)
            raise DuplicateDeviceError(f"IO error: double register device named {device.name}")
        self._devices[device.name] = device
        if self._start_tasks:
            thread = threading.Thread(target=device.task, name=f"io-{device.name}", daemon=True)
            self._threads.append(thread)
            thread.start()
        return device