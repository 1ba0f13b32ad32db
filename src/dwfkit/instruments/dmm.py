"""Digital multimeter, present on the Analog Discovery Pro models."""

import logging

from dwfkit import resolver
from dwfkit.constants import DMMMode
from dwfkit.errors import InstrumentUnavailable, MeasurementNodeMissing
from dwfkit.instruments.base import Instrument

logger = logging.getLogger(__name__)

DMM_LABEL = "DMM"
DMM_NODES = ("Enable", "Mode", "Range", "Meas", "Input")


class DigitalMultimeter(Instrument):
    """Multimeter located by its "DMM" analog-IO channel.

    Attributes:
        channel: Analog-IO channel of the multimeter, None until opened.
        nodes: Node indices by name, for the nodes the device exposes.
    """

    def __init__(self, session):
        super().__init__(session)
        self.channel: int | None = None
        self.nodes: dict[str, int] = {}

    def _set(self, handle: int, node_name: str, value: float):
        node = self.nodes.get(node_name)
        if node is not None:
            self.driver.analog_io_channel_node_set(handle, self.channel, node, value)

    def open(self):
        """Locate the multimeter and enable it.

        Raises:
            InstrumentUnavailable: If the device has no multimeter.
        """
        handle = self._handle()
        channel = resolver.find_channel(self.session, DMM_LABEL)
        if channel is None:
            raise InstrumentUnavailable("DMM not available on this device")
        available = resolver.channel_nodes(self.session, channel)
        self.channel = channel
        self.nodes = {name: available[name] for name in DMM_NODES if name in available}
        self._set(handle, "Enable", 1)
        logger.info("DMM opened on analog IO channel %d", channel)

    def measure(self, mode: DMMMode = DMMMode.DC_VOLTAGE, range_: float = 0.0, high_impedance: bool = False) -> float:
        """Take one reading.

        Args:
            mode: Measurement mode.
            range_: Measurement range, 0 for automatic.
            high_impedance: Select the high impedance input.

        Raises:
            InstrumentUnavailable: If open() has not succeeded.
            MeasurementNodeMissing: If the device exposes no Meas node.
        """
        handle = self._handle()
        if self.channel is None:
            raise InstrumentUnavailable("DMM is not open")
        self._set(handle, "Input", 1 if high_impedance else 0)
        self._set(handle, "Mode", int(mode))
        self._set(handle, "Range", range_)
        self.driver.analog_io_status(handle)
        node = self.nodes.get("Meas")
        if node is None:
            raise MeasurementNodeMissing("DMM measurement node not found")
        return self.driver.analog_io_channel_node_status(handle, self.channel, node)

    def close(self):
        """Disable the multimeter and reset the analog-IO instrument."""
        handle = self._handle()
        try:
            if self.channel is not None:
                self._set(handle, "Enable", 0)
        finally:
            self.channel = None
            self.nodes = {}
            self.driver.analog_io_reset(handle)
        logger.info("DMM closed")
