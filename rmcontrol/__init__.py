"""Robot-controller building blocks: packets, ballistics, matrices, RLS and CAN/serial/UDP links."""

__version__ = "0.1.0"