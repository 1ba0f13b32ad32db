"""Oscilloscope (analog-in) acquisition engine."""

import logging
import threading

import numpy as np

from dwfkit.config import ScopeConfig, TriggerConfig
from dwfkit.constants import (
    FILTER_DECIMATE,
    TRIGGER_TYPE_EDGE,
    AcquisitionState,
    EngineState,
    TriggerSlope,
    TriggerSource,
)
from dwfkit.instruments.base import Instrument
from dwfkit.wait import poll_until

logger = logging.getLogger(__name__)


def effective_buffer_size(requested: int, maximum: int) -> int:
    """Clamp a requested buffer size, 0 or oversize meaning the maximum."""
    if requested <= 0 or requested > maximum:
        return maximum
    return requested


class Oscilloscope(Instrument):
    """Analog-in channels of the device.

    Channels are 1-based in this API and converted to the driver's
    0-based indices.

    Attributes:
        buffer_size: Effective buffer size recorded by the last open().
    """

    def __init__(self, session):
        super().__init__(session)
        self.buffer_size = 0

    def open(self, config: ScopeConfig | None = None) -> int:
        """Enable all channels and program sampling.

        Returns:
            The effective buffer size.
        """
        config = config or ScopeConfig()
        handle = self._handle()
        d = self.driver
        d.analog_in_channel_enable_set(handle, -1, True)
        d.analog_in_channel_offset_set(handle, -1, config.offset_voltage)
        d.analog_in_channel_range_set(handle, -1, config.amplitude_range)
        maximum = self.session.info.max_analog_in_buffer_size if self.session.info else 0
        self.buffer_size = effective_buffer_size(config.buffer_size, maximum)
        d.analog_in_buffer_size_set(handle, self.buffer_size)
        d.analog_in_frequency_set(handle, config.sampling_frequency)
        d.analog_in_channel_filter_set(handle, -1, FILTER_DECIMATE)
        self.state = EngineState.CONFIGURED
        logger.info(
            "Scope opened: %g Hz, buffer %d samples",
            config.sampling_frequency,
            self.buffer_size,
        )
        return self.buffer_size

    def measure(self, channel: int = 1) -> float:
        """Return the instantaneous voltage of a channel."""
        handle = self._handle()
        d = self.driver
        d.analog_in_configure(handle, False, False)
        d.analog_in_status(handle, False)
        return d.analog_in_status_sample(handle, channel - 1)

    def set_trigger(self, config: TriggerConfig | None = None):
        """Program or clear the trigger.

        A disabled trigger, or one with source NONE, explicitly sets the
        source to NONE so a previously programmed trigger cannot arm.
        """
        config = config or TriggerConfig()
        handle = self._handle()
        d = self.driver
        if not config.enable or config.source == TriggerSource.NONE:
            d.analog_in_trigger_source_set(handle, TriggerSource.NONE)
            logger.debug("Scope trigger cleared")
            return

        d.analog_in_trigger_auto_timeout_set(handle, config.timeout)
        d.analog_in_trigger_source_set(handle, config.source)
        channel = config.channel
        if config.source == TriggerSource.DETECTOR_ANALOG_IN:
            channel -= 1
        d.analog_in_trigger_channel_set(handle, channel)
        d.analog_in_trigger_type_set(handle, TRIGGER_TYPE_EDGE)
        d.analog_in_trigger_level_set(handle, config.level)
        slope = TriggerSlope.RISE if config.edge_rising else TriggerSlope.FALL
        d.analog_in_trigger_condition_set(handle, slope)
        self.state = EngineState.TRIGGERED
        logger.debug(
            "Scope trigger: source %s channel %d level %g %s",
            config.source.name,
            channel,
            config.level,
            slope.name,
        )

    def record(
        self,
        channel: int = 1,
        *,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
        interval: float = 0.0,
    ) -> np.ndarray:
        """Arm, wait for the acquisition to finish and read one channel.

        Args:
            channel: 1-based channel to read out.
            timeout: Seconds to wait for completion, None waits forever.
            cancel: Event aborting the wait when set.
            interval: Sleep between status polls in seconds.

        Returns:
            ``buffer_size`` voltage samples.
        """
        handle = self._handle()
        d = self.driver
        d.analog_in_configure(handle, False, True)
        self.state = EngineState.ARMED
        poll_until(
            lambda: d.analog_in_status(handle, True),
            lambda status: status == AcquisitionState.DONE,
            timeout=timeout,
            cancel=cancel,
            interval=interval,
        )
        data = d.analog_in_status_data(handle, channel - 1, self.buffer_size)
        self.state = EngineState.DONE
        return np.asarray(data, dtype=np.float64)

    def close(self):
        """Reset the analog-in instrument."""
        self.driver.analog_in_reset(self._handle())
        self.state = EngineState.IDLE
        logger.info("Scope reset")
