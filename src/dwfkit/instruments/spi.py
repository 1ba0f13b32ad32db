"""SPI master engine on DIO lines."""

import logging
from contextlib import contextmanager

from dwfkit.config import SPIConfig
from dwfkit.constants import DigitalOutIdle
from dwfkit.instruments.base import Instrument

logger = logging.getLogger(__name__)

# data lines used in standard (single DQ) mode
MOSI_DQ = 0
MISO_DQ = 1
STANDARD_MODE = 1
WORD_BITS = 8


class SPI(Instrument):
    def open(self, config: SPIConfig | None = None):
        """Program the bus and leave chip select inactive."""
        config = config or SPIConfig()
        handle = self._handle()
        d = self.driver
        d.digital_spi_frequency_set(handle, config.clock_frequency)
        d.digital_spi_clock_set(handle, config.sck)
        if config.mosi >= 0:
            d.digital_spi_data_set(handle, MOSI_DQ, config.mosi)
            d.digital_spi_idle_set(handle, MOSI_DQ, DigitalOutIdle.ZET)
        if config.miso >= 0:
            d.digital_spi_data_set(handle, MISO_DQ, config.miso)
            d.digital_spi_idle_set(handle, MISO_DQ, DigitalOutIdle.ZET)
        d.digital_spi_mode_set(handle, config.mode)
        d.digital_spi_order_set(handle, 1 if config.msb_first else 0)
        d.digital_spi_select(handle, config.cs, 1)
        d.digital_spi_write_one(handle, STANDARD_MODE, 0, 0)
        logger.info(
            "SPI opened: %g Hz, mode %d, cs %d", config.clock_frequency, config.mode, config.cs
        )

    @contextmanager
    def _selected(self, handle: int, cs: int):
        """Assert chip select for the duration of a transfer."""
        self.driver.digital_spi_select(handle, cs, 0)
        try:
            yield
        finally:
            self.driver.digital_spi_select(handle, cs, 1)

    def read(self, count: int, cs: int = 0) -> bytes:
        handle = self._handle()
        with self._selected(handle, cs):
            data = self.driver.digital_spi_read(handle, STANDARD_MODE, WORD_BITS, count)
        logger.debug("SPI read %d bytes (cs %d)", len(data), cs)
        return data

    def write(self, data: bytes, cs: int = 0):
        handle = self._handle()
        with self._selected(handle, cs):
            self.driver.digital_spi_write(handle, STANDARD_MODE, WORD_BITS, bytes(data))
        logger.debug("SPI wrote %d bytes (cs %d)", len(data), cs)

    def exchange(self, data: bytes, count: int, cs: int = 0) -> bytes:
        """Write ``data`` then read ``count`` bytes under one chip select."""
        handle = self._handle()
        with self._selected(handle, cs):
            received = self.driver.digital_spi_write_read(
                handle, STANDARD_MODE, WORD_BITS, bytes(data), count
            )
        logger.debug("SPI exchanged %d/%d bytes (cs %d)", len(data), len(received), cs)
        return received

    def close(self):
        self.driver.digital_spi_reset(self._handle())
        logger.info("SPI reset")
