"""UART engine on two DIO lines."""

import logging

from dwfkit.config import UARTConfig
from dwfkit.constants import UART_DEFAULT_RX_BUFFER
from dwfkit.errors import UARTOverflow, UARTParityError
from dwfkit.instruments.base import Instrument

logger = logging.getLogger(__name__)


class UART(Instrument):
    def open(self, config: UARTConfig | None = None):
        """Program the port and flush the receive and transmit FIFOs."""
        config = config or UARTConfig()
        handle = self._handle()
        d = self.driver
        d.digital_uart_rate_set(handle, config.baud_rate)
        d.digital_uart_tx_set(handle, config.tx)
        d.digital_uart_rx_set(handle, config.rx)
        d.digital_uart_bits_set(handle, config.data_bits)
        d.digital_uart_parity_set(handle, config.parity)
        d.digital_uart_stop_set(handle, config.stop_bits)
        d.digital_uart_tx(handle, b"")
        d.digital_uart_rx(handle, 0)
        logger.info(
            "UART opened: %g baud, rx %d, tx %d", config.baud_rate, config.rx, config.tx
        )

    def read(self) -> bytes:
        """Drain the receive buffer.

        Raises:
            UARTOverflow: The buffer overflowed. ``data`` holds what was read.
            UARTParityError: A byte failed its parity check. ``index`` is
                its offset and ``data`` ends with it.
        """
        handle = self._handle()
        info = self.session.info
        size = UART_DEFAULT_RX_BUFFER
        if info is not None and info.max_analog_in_buffer_size > 0:
            size = info.max_analog_in_buffer_size
        data, indicator = self.driver.digital_uart_rx(handle, size)
        if indicator < 0:
            raise UARTOverflow("UART buffer overflow", data=data)
        if indicator > 0:
            raise UARTParityError(
                f"UART parity error at index {indicator}",
                data=data[: indicator + 1],
                index=indicator,
            )
        return data

    def write(self, data: bytes):
        self.driver.digital_uart_tx(self._handle(), bytes(data))
        logger.debug("UART sent %d bytes", len(data))

    def close(self):
        self.driver.digital_uart_reset(self._handle())
        logger.info("UART reset")
