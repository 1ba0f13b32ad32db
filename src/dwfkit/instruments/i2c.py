"""I2C master engine on two DIO lines."""

import logging

from dwfkit.config import I2CConfig
from dwfkit.constants import I2C_SCAN_FIRST, I2C_SCAN_LAST
from dwfkit.errors import I2CBusLockup, I2CNak, InvalidInput
from dwfkit.instruments.base import Instrument

logger = logging.getLogger(__name__)


def _address_byte(address: int) -> int:
    if not 0 <= address <= 0x7F:
        raise InvalidInput(f"I2C address must be 7-bit, got {address:#x}")
    return address << 1


def _check_nak(nak: int, data: bytes = b""):
    if nak:
        raise I2CNak(f"I2C NAK at index {nak}", data=data, index=nak)


class I2C(Instrument):
    def open(self, config: I2CConfig | None = None):
        """Program the bus and make sure it is free.

        Raises:
            I2CBusLockup: If a line is held low and the bus cannot be cleared.
        """
        config = config or I2CConfig()
        handle = self._handle()
        d = self.driver
        d.digital_i2c_reset(handle)
        d.digital_i2c_stretch_set(handle, config.stretching)
        d.digital_i2c_rate_set(handle, config.clock_rate)
        d.digital_i2c_scl_set(handle, config.scl)
        d.digital_i2c_sda_set(handle, config.sda)
        if d.digital_i2c_clear(handle) == 0:
            raise I2CBusLockup("I2C bus lockup")
        # prime the engine, nobody answers the general call address
        d.digital_i2c_write(handle, 0, b"")
        logger.info(
            "I2C opened: %g Hz, sda %d, scl %d", config.clock_rate, config.sda, config.scl
        )

    def scan(self) -> list[int]:
        """Return the 7-bit addresses that acknowledge, ascending."""
        handle = self._handle()
        found = []
        for address in range(I2C_SCAN_FIRST, I2C_SCAN_LAST + 1):
            if self.driver.digital_i2c_write(handle, address << 1, b"") == 0:
                found.append(address)
        logger.info("I2C scan found %d devices", len(found))
        return found

    def read(self, count: int, address: int) -> bytes:
        handle = self._handle()
        data, nak = self.driver.digital_i2c_read(handle, _address_byte(address), count)
        _check_nak(nak, data)
        return data

    def write(self, data: bytes, address: int):
        handle = self._handle()
        nak = self.driver.digital_i2c_write(handle, _address_byte(address), bytes(data))
        _check_nak(nak)

    def exchange(self, data: bytes, count: int, address: int) -> bytes:
        """Write ``data`` then read ``count`` bytes with a repeated start."""
        handle = self._handle()
        received, nak = self.driver.digital_i2c_write_read(
            handle, _address_byte(address), bytes(data), count
        )
        _check_nak(nak, received)
        return received

    def close(self):
        self.driver.digital_i2c_reset(self._handle())
        logger.info("I2C reset")
