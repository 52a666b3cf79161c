"""Callback mixins used by devices to hand received packets to their owners."""

from __future__ import annotations

from typing import Any, Callable, Hashable


class Callback:
    """Holds one handler per packet type and dispatches values by their type."""

    def _handlers(self) -> dict[type, Callable[[Any], Any]]:
        try:
            return self._type_callbacks
        except AttributeError:
            self._type_callbacks: dict[type, Callable[[Any], Any]] = {}
            return self._type_callbacks

    def register_callback(self, packet_type: type, fun: Callable[[Any], Any]) -> None:
        """Set the handler for values of ``packet_type``, replacing any earlier one."""
        if not callable(fun):
            raise TypeError("callback must be callable")
        self._handlers()[packet_type] = fun

    def callback(self, value: Any) -> bool:
        """Call the handler registered for the type of ``value``; return whether one ran."""
        handlers = self._handlers()
        for klass in type(value).__mro__:
            fun = handlers.get(klass)
            if fun is not None:
                fun(value)
                return True
        return False


class KeyedCallback:
    """Holds handlers indexed by a key such as a CAN id or a packet header."""

    def _key_handlers(self) -> dict[Hashable, Callable[..., Any]]:
        try:
            return self._keyed_callbacks
        except AttributeError:
            self._keyed_callbacks: dict[Hashable, Callable[..., Any]] = {}
            return self._keyed_callbacks

    def register_callback_key(self, key: Hashable, fun: Callable[..., Any]) -> None:
        """Set the handler for ``key``, replacing any earlier one."""
        if not callable(fun):
            raise TypeError("callback must be callable")
        self._key_handlers()[key] = fun

    def callback_key(self, key: Hashable, *args: Any) -> bool:
        """Call the handler registered for ``key`` with ``args``; return whether one ran."""
        fun = self._key_handlers().get(key)
        if fun is None:
            return False
        fun(*args)
        return True