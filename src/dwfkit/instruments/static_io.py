"""Static digital I/O: individually addressable DIO lines."""

import logging

from dwfkit import resolver
from dwfkit.constants import PullDirection
from dwfkit.errors import FeatureNotImplemented, InvalidInput, NodeNotFound
from dwfkit.instruments.base import Instrument

logger = logging.getLogger(__name__)

DEFAULT_LINE_COUNT = 16


def rotate_left(value: int, shift: int, width: int) -> int:
    """Rotate the low ``width`` bits of ``value`` left by ``shift``."""
    mask = (1 << width) - 1
    shift %= width
    value &= mask
    return ((value << shift) | (value >> (width - shift))) & mask


def apply_line(register: int, line: int, width: int, state: bool) -> int:
    """Set or clear exactly one bit of a ``width``-bit register.

    Bits above ``width`` are left untouched.
    """
    if state:
        return register | rotate_left(1, line, width)
    keep = rotate_left((1 << width) - 2, line, width)
    return register & (keep | ~((1 << width) - 1))


class StaticIO(Instrument):
    """DIO lines driven through the output-enable and output registers."""

    @property
    def line_count(self) -> int:
        info = self.session.info
        if info is None:
            return DEFAULT_LINE_COUNT
        return min(info.digital_in_channels, info.digital_out_channels) or DEFAULT_LINE_COUNT

    def _line(self, channel: int) -> int:
        line = self.session.map_dio_channel(channel)
        if not 0 <= line < self.line_count:
            raise InvalidInput(f"DIO line {channel} is out of range on this device")
        return line

    def set_mode(self, channel: int, output: bool):
        """Make a line an output (True) or an input (False)."""
        handle = self._handle()
        line = self._line(channel)
        mask = self.driver.digital_io_output_enable_get(handle)
        mask = apply_line(mask, line, self.line_count, output)
        self.driver.digital_io_output_enable_set(handle, mask)
        logger.debug("DIO output enable mask 0x%x", mask)

    def get_state(self, channel: int) -> bool:
        handle = self._handle()
        line = self._line(channel)
        self.driver.digital_io_status(handle)
        return bool(self.driver.digital_io_input_status(handle) & (1 << line))

    def set_state(self, channel: int, value: bool):
        handle = self._handle()
        line = self._line(channel)
        mask = self.driver.digital_io_output_get(handle)
        mask = apply_line(mask, line, self.line_count, value)
        self.driver.digital_io_output_set(handle, mask)
        logger.debug("DIO output mask 0x%x", mask)

    def set_current(self, current: float):
        """Set the drive current limit of the digital supply.

        Raises:
            NodeNotFound: If the device has no VDD drive node.
        """
        handle = self._handle()
        address = resolver.find_node(self.session, ["VDD"], "Drive")
        if address is None:
            raise NodeNotFound("drive current node not found")
        self.driver.analog_io_channel_node_set(handle, address.channel, address.node, current)
        logger.debug("DIO drive current %g A", current)

    def set_pull(self, channel: int, direction: PullDirection):
        raise FeatureNotImplemented("setting pull resistors is not supported")

    def close(self):
        """Reset the digital I/O instrument."""
        self.driver.digital_io_reset(self._handle())
        logger.info("Static IO reset")
