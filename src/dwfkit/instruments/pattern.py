"""Digital pattern generator."""

import logging
import math

from dwfkit.config import PatternConfig
from dwfkit.constants import DigitalOutType, TriggerSlope
from dwfkit.errors import InvalidInput
from dwfkit.instruments.base import Instrument

logger = logging.getLogger(__name__)


def pulse_counters(clock: float, frequency: float, divider: int, duty_cycle: float) -> tuple[int, int]:
    """Split one pulse period into low and high counter steps.

    Returns:
        (low, high), with ``high == round(steps * duty_cycle / 100)`` and
        ``low + high == steps``.
    """
    steps = math.floor(clock / frequency) // divider
    high = round(steps * duty_cycle / 100)
    return steps - high, high


def derived_run_time(config: PatternConfig) -> float:
    """Run time to program, deriving it from custom data when negative."""
    if config.run_time >= 0:
        return config.run_time
    if config.data:
        return len(config.data) / config.frequency
    logger.warning("Negative run time without custom data, running continuously")
    return 0.0


class PatternGenerator(Instrument):
    """Digital-out lines, addressed by user-facing DIO line numbers."""

    def generate(self, config: PatternConfig | None = None):
        """Program one line and start generating."""
        config = config or PatternConfig()
        if config.frequency <= 0:
            raise InvalidInput(f"frequency must be positive, got {config.frequency}")
        if not 0 <= config.duty_cycle <= 100:
            raise InvalidInput(f"duty cycle must be within [0, 100], got {config.duty_cycle}")
        handle = self._handle()
        d = self.driver
        channel = self.session.map_dio_channel(config.channel)
        clock = d.digital_out_internal_clock_info(handle)
        divider = math.floor(clock / config.frequency)
        if divider < 1:
            raise InvalidInput(
                f"frequency {config.frequency} Hz exceeds the {clock} Hz internal clock"
            )

        d.digital_out_enable_set(handle, channel, True)
        d.digital_out_type_set(handle, channel, config.function)
        d.digital_out_divider_set(handle, channel, divider)
        d.digital_out_idle_set(handle, channel, config.idle_state)
        d.digital_out_run_set(handle, derived_run_time(config))
        d.digital_out_wait_set(handle, config.wait)
        d.digital_out_repeat_set(handle, config.repeat)
        d.digital_out_repeat_trigger_set(handle, config.trigger_enabled)
        if config.trigger_enabled:
            d.digital_out_trigger_source_set(handle, config.trigger_source)
            slope = TriggerSlope.RISE if config.trigger_edge_rising else TriggerSlope.FALL
            d.digital_out_trigger_slope_set(handle, slope)

        if config.function == DigitalOutType.PULSE:
            low, high = pulse_counters(clock, config.frequency, divider, config.duty_cycle)
            d.digital_out_counter_set(handle, channel, low, high)
            logger.debug("Pattern divider %d, counters low %d high %d", divider, low, high)
        elif config.function == DigitalOutType.CUSTOM and config.data:
            d.digital_out_data_set(handle, channel, config.data)
            logger.debug("Pattern divider %d, %d custom bits", divider, len(config.data))

        d.digital_out_configure(handle, True)
        logger.info(
            "Pattern line %d generating %s at %g Hz",
            config.channel,
            config.function.name,
            config.frequency,
        )

    def enable(self, channel: int = 0):
        handle = self._handle()
        self.driver.digital_out_enable_set(handle, self.session.map_dio_channel(channel), True)
        self.driver.digital_out_configure(handle, True)

    def disable(self, channel: int = 0):
        handle = self._handle()
        self.driver.digital_out_enable_set(handle, self.session.map_dio_channel(channel), False)
        self.driver.digital_out_configure(handle, True)

    def close(self):
        """Reset the digital-out instrument."""
        self.driver.digital_out_reset(self._handle())
        logger.info("Pattern generator reset")
