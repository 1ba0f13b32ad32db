"""Logic analyzer (digital-in) acquisition engine."""

import logging
import math
import threading

import numpy as np

from dwfkit.config import LogicConfig, LogicTriggerConfig
from dwfkit.constants import (
    LOGIC_SAMPLE_FORMAT_BITS,
    AcquisitionState,
    EngineState,
    TriggerSource,
)
from dwfkit.errors import InvalidInput
from dwfkit.instruments.base import Instrument
from dwfkit.instruments.scope import effective_buffer_size
from dwfkit.wait import poll_until

logger = logging.getLogger(__name__)


def clock_divider(clock: float, frequency: float) -> int:
    """Integer divider from the internal clock down to ``frequency``."""
    if frequency <= 0:
        raise InvalidInput(f"frequency must be positive, got {frequency}")
    return math.floor(clock / frequency)


def split_prefill(position: int, buffer_size: int) -> tuple[int, int]:
    """Split a buffer around the trigger.

    Returns:
        (prefill, hardware position): the samples kept before the
        trigger, clamped into ``[0, buffer_size]``, and the samples
        recorded after it.
    """
    prefill = min(max(position, 0), buffer_size)
    return prefill, buffer_size - prefill


def extract_line(samples: np.ndarray, channel: int) -> np.ndarray:
    """Reduce raw sample words to the 0/1 level of a single line."""
    samples = np.asarray(samples, dtype=np.uint16)
    return ((samples & (1 << channel)) >> channel).astype(np.uint8)


def check_line(channel: int) -> int:
    """Reject line indices outside the sample word."""
    if not 0 <= channel < LOGIC_SAMPLE_FORMAT_BITS:
        raise InvalidInput(
            f"logic line {channel} is out of range 0..{LOGIC_SAMPLE_FORMAT_BITS - 1}"
        )
    return channel


class LogicAnalyzer(Instrument):
    """Digital-in lines of the device.

    Attributes:
        buffer_size: Effective buffer size recorded by the last open().
    """

    def __init__(self, session):
        super().__init__(session)
        self.buffer_size = 0

    def open(self, config: LogicConfig | None = None) -> int:
        """Program sampling rate, sample format and buffer size.

        Returns:
            The effective buffer size.
        """
        config = config or LogicConfig()
        handle = self._handle()
        d = self.driver
        maximum = d.digital_in_buffer_size_info(handle)
        buffer_size = effective_buffer_size(config.buffer_size, maximum)
        clock = d.digital_in_internal_clock_info(handle)
        divider = clock_divider(clock, config.sampling_frequency)
        if divider < 1:
            raise InvalidInput(
                f"sampling frequency {config.sampling_frequency} Hz exceeds the {clock} Hz internal clock"
            )
        self.buffer_size = buffer_size
        d.digital_in_divider_set(handle, divider)
        d.digital_in_sample_format_set(handle, LOGIC_SAMPLE_FORMAT_BITS)
        d.digital_in_buffer_size_set(handle, self.buffer_size)
        self.state = EngineState.CONFIGURED
        logger.debug("Logic divider %d from %g Hz clock", divider, clock)
        logger.info(
            "Logic analyzer opened: %g Hz, buffer %d samples",
            config.sampling_frequency,
            self.buffer_size,
        )
        return self.buffer_size

    def set_trigger(self, config: LogicTriggerConfig | None = None):
        """Program or clear the edge trigger on one line."""
        config = config or LogicTriggerConfig()
        if config.enable:
            check_line(config.channel)
        handle = self._handle()
        d = self.driver
        if not config.enable:
            d.digital_in_trigger_source_set(handle, TriggerSource.NONE)
            logger.debug("Logic trigger cleared")
            return

        d.digital_in_trigger_source_set(handle, TriggerSource.DETECTOR_DIGITAL_IN)
        prefill, position = split_prefill(config.position, self.buffer_size)
        d.digital_in_trigger_position_set(handle, position)
        d.digital_in_trigger_prefill_set(handle, prefill)

        mask = 1 << config.channel
        # arguments: level_low, level_high, edge_rise, edge_fall
        if config.rising_edge:
            d.digital_in_trigger_set(handle, 0, mask, 0, 0)
            d.digital_in_trigger_reset_set(handle, 0, 0, mask, 0)
        else:
            d.digital_in_trigger_set(handle, mask, 0, 0, 0)
            d.digital_in_trigger_reset_set(handle, 0, 0, 0, mask)

        d.digital_in_trigger_auto_timeout_set(handle, config.timeout)
        d.digital_in_trigger_length_set(handle, config.length_min, config.length_max, 0)
        d.digital_in_trigger_count_set(handle, config.count, 0)
        self.state = EngineState.TRIGGERED
        logger.debug(
            "Logic trigger: mask 0x%x %s, prefill %d, position %d",
            mask,
            "rising" if config.rising_edge else "falling",
            prefill,
            position,
        )

    def record(
        self,
        channel: int = 0,
        *,
        timeout: float | None = None,
        cancel: threading.Event | None = None,
        interval: float = 0.0,
    ) -> np.ndarray:
        """Arm, wait for the acquisition to finish and read one line.

        Returns:
            ``buffer_size`` samples of 0 or 1.
        """
        check_line(channel)
        handle = self._handle()
        d = self.driver
        d.digital_in_configure(handle, False, True)
        self.state = EngineState.ARMED
        poll_until(
            lambda: d.digital_in_status(handle, True),
            lambda status: status == AcquisitionState.DONE,
            timeout=timeout,
            cancel=cancel,
            interval=interval,
        )
        raw = d.digital_in_status_data(handle, self.buffer_size)
        self.state = EngineState.DONE
        return extract_line(raw, channel)

    def close(self):
        """Reset the digital-in instrument."""
        self.driver.digital_in_reset(self._handle())
        self.state = EngineState.IDLE
        logger.info("Logic analyzer reset")
