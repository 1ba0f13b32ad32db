"""Analog waveform generator."""

import logging

from dwfkit.config import WavegenConfig
from dwfkit.constants import ANALOG_OUT_NODE_CARRIER, WavegenFunc
from dwfkit.instruments.base import Instrument

logger = logging.getLogger(__name__)

_CARRIER = ANALOG_OUT_NODE_CARRIER


class WaveformGenerator(Instrument):
    """Analog-out channels. Channels are 1-based in this API."""

    def generate(self, config: WavegenConfig | None = None):
        """Program one channel and start generating."""
        config = config or WavegenConfig()
        handle = self._handle()
        d = self.driver
        channel = config.channel - 1
        d.analog_out_node_enable_set(handle, channel, _CARRIER, True)
        d.analog_out_node_function_set(handle, channel, _CARRIER, config.function)
        if config.function == WavegenFunc.CUSTOM and len(config.custom_data) > 0:
            d.analog_out_node_data_set(handle, channel, _CARRIER, config.custom_data)
            logger.debug("Loaded %d custom samples", len(config.custom_data))
        d.analog_out_node_frequency_set(handle, channel, _CARRIER, config.frequency)
        d.analog_out_node_amplitude_set(handle, channel, _CARRIER, config.amplitude)
        d.analog_out_node_offset_set(handle, channel, _CARRIER, config.offset)
        d.analog_out_node_symmetry_set(handle, channel, _CARRIER, config.symmetry)
        d.analog_out_run_set(handle, channel, config.run_time)
        d.analog_out_wait_set(handle, channel, config.wait)
        d.analog_out_repeat_set(handle, channel, config.repeat)
        d.analog_out_configure(handle, channel, True)
        logger.info(
            "Wavegen channel %d generating %s at %g Hz",
            config.channel,
            config.function.name,
            config.frequency,
        )

    def enable(self, channel: int = 1):
        self.driver.analog_out_configure(self._handle(), channel - 1, True)

    def disable(self, channel: int = 1):
        self.driver.analog_out_configure(self._handle(), channel - 1, False)

    def close(self, channel: int | None = None):
        """Reset one channel, or every channel when ``channel`` is None."""
        index = -1 if channel is None else channel - 1
        self.driver.analog_out_reset(self._handle(), index)
        logger.info("Wavegen reset (channel %s)", "all" if channel is None else channel)
