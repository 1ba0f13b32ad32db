"""Exposed instrument operations for request transports."""

from dwfkit.interface.tools import InstrumentTools, decode_hex

__all__ = ["InstrumentTools", "decode_hex"]
