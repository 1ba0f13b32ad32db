"""Abstract base class for WaveForms driver backends.

A driver is a thin, stateless mirror of the native WaveForms (``libdwf``)
API. Method names are the native function names without the ``FDwf``
prefix, in snake case, and every device-scoped method takes the device
handle as its first argument. Out-parameters are returned instead of
written through pointers, and a failing native call raises
:class:`dwfkit.errors.DriverError` carrying the driver's last error
message verbatim.

Concrete implementations can be found in:
- dwfkit.driver.native.CtypesDwfDriver (the real shared library)
- dwfkit.driver.mock.MockDwfDriver (simulation)
"""

from abc import ABC, abstractmethod

import numpy as np


class DwfDriver(ABC):
    """Abstract base class for WaveForms driver backends."""

    # Library, enumeration and device lifecycle

    @abstractmethod
    def get_last_error_msg(self) -> str:
        """Return the last error message reported by the driver."""
        raise NotImplementedError

    @abstractmethod
    def get_version(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def enum(self, enum_filter: int) -> int:
        """Enumerate connected devices.

        Args:
            enum_filter: Device ID to restrict the enumeration to, 0 for all.

        Returns:
            The number of devices found.
        """
        raise NotImplementedError

    @abstractmethod
    def enum_device_type(self, index: int) -> tuple[int, int]:
        """Return (device ID, revision) of an enumerated device."""
        raise NotImplementedError

    @abstractmethod
    def enum_device_name(self, index: int) -> str:
        raise NotImplementedError

    @abstractmethod
    def enum_user_name(self, index: int) -> str:
        raise NotImplementedError

    @abstractmethod
    def enum_sn(self, index: int) -> str:
        raise NotImplementedError

    @abstractmethod
    def enum_device_is_opened(self, index: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    def enum_config(self, index: int) -> int:
        """Return the number of configurations of an enumerated device."""
        raise NotImplementedError

    @abstractmethod
    def enum_config_info(self, config_index: int, info: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def device_config_open(self, index: int, config: int) -> int:
        """Open an enumerated device with a configuration.

        Returns:
            The device handle, 0 when the device could not be opened.
        """
        raise NotImplementedError

    @abstractmethod
    def device_close(self, hdwf: int):
        raise NotImplementedError

    # Analog in

    @abstractmethod
    def analog_in_channel_count(self, hdwf: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def analog_in_buffer_size_info(self, hdwf: int) -> int:
        """Return the maximum analog-in buffer size in samples."""
        raise NotImplementedError

    @abstractmethod
    def analog_in_bits_info(self, hdwf: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def analog_in_channel_enable_set(self, hdwf: int, channel: int, enable: bool):
        raise NotImplementedError

    @abstractmethod
    def analog_in_channel_offset_set(self, hdwf: int, channel: int, offset: float):
        raise NotImplementedError

    @abstractmethod
    def analog_in_channel_range_set(self, hdwf: int, channel: int, range_: float):
        raise NotImplementedError

    @abstractmethod
    def analog_in_channel_filter_set(self, hdwf: int, channel: int, filter_: int):
        raise NotImplementedError

    @abstractmethod
    def analog_in_buffer_size_set(self, hdwf: int, size: int):
        raise NotImplementedError

    @abstractmethod
    def analog_in_frequency_set(self, hdwf: int, frequency: float):
        raise NotImplementedError

    @abstractmethod
    def analog_in_configure(self, hdwf: int, reconfigure: bool, start: bool):
        raise NotImplementedError

    @abstractmethod
    def analog_in_status(self, hdwf: int, read_data: bool) -> int:
        """Poll the acquisition and return its status byte."""
        raise NotImplementedError

    @abstractmethod
    def analog_in_status_sample(self, hdwf: int, channel: int) -> float:
        raise NotImplementedError

    @abstractmethod
    def analog_in_status_data(self, hdwf: int, channel: int, count: int) -> np.ndarray:
        raise NotImplementedError

    @abstractmethod
    def analog_in_reset(self, hdwf: int):
        raise NotImplementedError

    @abstractmethod
    def analog_in_trigger_auto_timeout_set(self, hdwf: int, timeout: float):
        raise NotImplementedError

    @abstractmethod
    def analog_in_trigger_source_set(self, hdwf: int, source: int):
        raise NotImplementedError

    @abstractmethod
    def analog_in_trigger_channel_set(self, hdwf: int, channel: int):
        raise NotImplementedError

    @abstractmethod
    def analog_in_trigger_type_set(self, hdwf: int, trigger_type: int):
        raise NotImplementedError

    @abstractmethod
    def analog_in_trigger_level_set(self, hdwf: int, level: float):
        raise NotImplementedError

    @abstractmethod
    def analog_in_trigger_condition_set(self, hdwf: int, slope: int):
        raise NotImplementedError

    # Analog out

    @abstractmethod
    def analog_out_count(self, hdwf: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def analog_out_node_enable_set(self, hdwf: int, channel: int, node: int, enable: bool):
        raise NotImplementedError

    @abstractmethod
    def analog_out_node_function_set(self, hdwf: int, channel: int, node: int, function: int):
        raise NotImplementedError

    @abstractmethod
    def analog_out_node_data_set(self, hdwf: int, channel: int, node: int, data) -> None:
        raise NotImplementedError

    @abstractmethod
    def analog_out_node_frequency_set(self, hdwf: int, channel: int, node: int, frequency: float):
        raise NotImplementedError

    @abstractmethod
    def analog_out_node_amplitude_set(self, hdwf: int, channel: int, node: int, amplitude: float):
        raise NotImplementedError

    @abstractmethod
    def analog_out_node_offset_set(self, hdwf: int, channel: int, node: int, offset: float):
        raise NotImplementedError

    @abstractmethod
    def analog_out_node_symmetry_set(self, hdwf: int, channel: int, node: int, symmetry: float):
        raise NotImplementedError

    @abstractmethod
    def analog_out_run_set(self, hdwf: int, channel: int, seconds: float):
        raise NotImplementedError

    @abstractmethod
    def analog_out_wait_set(self, hdwf: int, channel: int, seconds: float):
        raise NotImplementedError

    @abstractmethod
    def analog_out_repeat_set(self, hdwf: int, channel: int, repeat: int):
        raise NotImplementedError

    @abstractmethod
    def analog_out_configure(self, hdwf: int, channel: int, start: bool):
        raise NotImplementedError

    @abstractmethod
    def analog_out_reset(self, hdwf: int, channel: int):
        raise NotImplementedError

    # Analog IO (supplies, DMM, temperature)

    @abstractmethod
    def analog_io_channel_count(self, hdwf: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def analog_io_channel_name(self, hdwf: int, channel: int) -> tuple[str, str]:
        """Return (name, label) of an analog-IO channel."""
        raise NotImplementedError

    @abstractmethod
    def analog_io_channel_info(self, hdwf: int, channel: int) -> int:
        """Return the number of nodes of an analog-IO channel."""
        raise NotImplementedError

    @abstractmethod
    def analog_io_channel_node_name(self, hdwf: int, channel: int, node: int) -> tuple[str, str]:
        """Return (name, unit) of an analog-IO node."""
        raise NotImplementedError

    @abstractmethod
    def analog_io_channel_node_set(self, hdwf: int, channel: int, node: int, value: float):
        raise NotImplementedError

    @abstractmethod
    def analog_io_channel_node_get(self, hdwf: int, channel: int, node: int) -> float:
        raise NotImplementedError

    @abstractmethod
    def analog_io_channel_node_status(self, hdwf: int, channel: int, node: int) -> float:
        raise NotImplementedError

    @abstractmethod
    def analog_io_status(self, hdwf: int):
        raise NotImplementedError

    @abstractmethod
    def analog_io_enable_set(self, hdwf: int, enable: bool):
        raise NotImplementedError

    @abstractmethod
    def analog_io_reset(self, hdwf: int):
        raise NotImplementedError

    # Digital in

    @abstractmethod
    def digital_in_bits_info(self, hdwf: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def digital_in_buffer_size_info(self, hdwf: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def digital_in_internal_clock_info(self, hdwf: int) -> float:
        raise NotImplementedError

    @abstractmethod
    def digital_in_divider_set(self, hdwf: int, divider: int):
        raise NotImplementedError

    @abstractmethod
    def digital_in_sample_format_set(self, hdwf: int, bits: int):
        raise NotImplementedError

    @abstractmethod
    def digital_in_buffer_size_set(self, hdwf: int, size: int):
        raise NotImplementedError

    @abstractmethod
    def digital_in_configure(self, hdwf: int, reconfigure: bool, start: bool):
        raise NotImplementedError

    @abstractmethod
    def digital_in_status(self, hdwf: int, read_data: bool) -> int:
        raise NotImplementedError

    @abstractmethod
    def digital_in_status_data(self, hdwf: int, count: int) -> np.ndarray:
        """Return ``count`` 16-bit samples from the last acquisition."""
        raise NotImplementedError

    @abstractmethod
    def digital_in_reset(self, hdwf: int):
        raise NotImplementedError

    @abstractmethod
    def digital_in_trigger_source_set(self, hdwf: int, source: int):
        raise NotImplementedError

    @abstractmethod
    def digital_in_trigger_position_set(self, hdwf: int, samples: int):
        raise NotImplementedError

    @abstractmethod
    def digital_in_trigger_prefill_set(self, hdwf: int, samples: int):
        raise NotImplementedError

    @abstractmethod
    def digital_in_trigger_set(self, hdwf: int, level_low: int, level_high: int, edge_rise: int, edge_fall: int):
        raise NotImplementedError

    @abstractmethod
    def digital_in_trigger_reset_set(self, hdwf: int, level_low: int, level_high: int, edge_rise: int, edge_fall: int):
        raise NotImplementedError

    @abstractmethod
    def digital_in_trigger_auto_timeout_set(self, hdwf: int, timeout: float):
        raise NotImplementedError

    @abstractmethod
    def digital_in_trigger_length_set(self, hdwf: int, minimum: float, maximum: float, sync: int):
        raise NotImplementedError

    @abstractmethod
    def digital_in_trigger_count_set(self, hdwf: int, count: int, restart: int):
        raise NotImplementedError

    # Digital out

    @abstractmethod
    def digital_out_count(self, hdwf: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def digital_out_internal_clock_info(self, hdwf: int) -> float:
        raise NotImplementedError

    @abstractmethod
    def digital_out_enable_set(self, hdwf: int, channel: int, enable: bool):
        raise NotImplementedError

    @abstractmethod
    def digital_out_type_set(self, hdwf: int, channel: int, output_type: int):
        raise NotImplementedError

    @abstractmethod
    def digital_out_divider_set(self, hdwf: int, channel: int, divider: int):
        raise NotImplementedError

    @abstractmethod
    def digital_out_idle_set(self, hdwf: int, channel: int, idle: int):
        raise NotImplementedError

    @abstractmethod
    def digital_out_counter_set(self, hdwf: int, channel: int, low: int, high: int):
        raise NotImplementedError

    @abstractmethod
    def digital_out_data_set(self, hdwf: int, channel: int, bits) -> None:
        """Load a custom bit sequence, one element per bit."""
        raise NotImplementedError

    @abstractmethod
    def digital_out_run_set(self, hdwf: int, seconds: float):
        raise NotImplementedError

    @abstractmethod
    def digital_out_wait_set(self, hdwf: int, seconds: float):
        raise NotImplementedError

    @abstractmethod
    def digital_out_repeat_set(self, hdwf: int, repeat: int):
        raise NotImplementedError

    @abstractmethod
    def digital_out_repeat_trigger_set(self, hdwf: int, enable: bool):
        raise NotImplementedError

    @abstractmethod
    def digital_out_trigger_source_set(self, hdwf: int, source: int):
        raise NotImplementedError

    @abstractmethod
    def digital_out_trigger_slope_set(self, hdwf: int, slope: int):
        raise NotImplementedError

    @abstractmethod
    def digital_out_configure(self, hdwf: int, start: bool):
        raise NotImplementedError

    @abstractmethod
    def digital_out_reset(self, hdwf: int):
        raise NotImplementedError

    # Digital IO (static lines)

    @abstractmethod
    def digital_io_output_enable_get(self, hdwf: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def digital_io_output_enable_set(self, hdwf: int, mask: int):
        raise NotImplementedError

    @abstractmethod
    def digital_io_output_get(self, hdwf: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def digital_io_output_set(self, hdwf: int, mask: int):
        raise NotImplementedError

    @abstractmethod
    def digital_io_status(self, hdwf: int):
        raise NotImplementedError

    @abstractmethod
    def digital_io_input_status(self, hdwf: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def digital_io_reset(self, hdwf: int):
        raise NotImplementedError

    # Digital UART

    @abstractmethod
    def digital_uart_rate_set(self, hdwf: int, baud_rate: float):
        raise NotImplementedError

    @abstractmethod
    def digital_uart_tx_set(self, hdwf: int, channel: int):
        raise NotImplementedError

    @abstractmethod
    def digital_uart_rx_set(self, hdwf: int, channel: int):
        raise NotImplementedError

    @abstractmethod
    def digital_uart_bits_set(self, hdwf: int, bits: int):
        raise NotImplementedError

    @abstractmethod
    def digital_uart_parity_set(self, hdwf: int, parity: int):
        raise NotImplementedError

    @abstractmethod
    def digital_uart_stop_set(self, hdwf: int, stop_bits: float):
        raise NotImplementedError

    @abstractmethod
    def digital_uart_tx(self, hdwf: int, data: bytes):
        raise NotImplementedError

    @abstractmethod
    def digital_uart_rx(self, hdwf: int, size: int) -> tuple[bytes, int]:
        """Drain up to ``size`` received bytes.

        Returns:
            The bytes read and the parity indicator: negative on buffer
            overflow, positive for the index of a parity error, else 0.
        """
        raise NotImplementedError

    @abstractmethod
    def digital_uart_reset(self, hdwf: int):
        raise NotImplementedError

    # Digital SPI

    @abstractmethod
    def digital_spi_frequency_set(self, hdwf: int, frequency: float):
        raise NotImplementedError

    @abstractmethod
    def digital_spi_clock_set(self, hdwf: int, channel: int):
        raise NotImplementedError

    @abstractmethod
    def digital_spi_data_set(self, hdwf: int, dq: int, channel: int):
        raise NotImplementedError

    @abstractmethod
    def digital_spi_idle_set(self, hdwf: int, dq: int, idle: int):
        raise NotImplementedError

    @abstractmethod
    def digital_spi_mode_set(self, hdwf: int, mode: int):
        raise NotImplementedError

    @abstractmethod
    def digital_spi_order_set(self, hdwf: int, msb_first: int):
        raise NotImplementedError

    @abstractmethod
    def digital_spi_select(self, hdwf: int, channel: int, level: int):
        raise NotImplementedError

    @abstractmethod
    def digital_spi_write_one(self, hdwf: int, dq_mode: int, bits: int, word: int):
        raise NotImplementedError

    @abstractmethod
    def digital_spi_read(self, hdwf: int, dq_mode: int, bits: int, count: int) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def digital_spi_write(self, hdwf: int, dq_mode: int, bits: int, data: bytes):
        raise NotImplementedError

    @abstractmethod
    def digital_spi_write_read(self, hdwf: int, dq_mode: int, bits: int, tx: bytes, rx_count: int) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def digital_spi_reset(self, hdwf: int):
        raise NotImplementedError

    # Digital I2C

    @abstractmethod
    def digital_i2c_reset(self, hdwf: int):
        raise NotImplementedError

    @abstractmethod
    def digital_i2c_stretch_set(self, hdwf: int, enable: bool):
        raise NotImplementedError

    @abstractmethod
    def digital_i2c_rate_set(self, hdwf: int, rate: float):
        raise NotImplementedError

    @abstractmethod
    def digital_i2c_scl_set(self, hdwf: int, channel: int):
        raise NotImplementedError

    @abstractmethod
    def digital_i2c_sda_set(self, hdwf: int, channel: int):
        raise NotImplementedError

    @abstractmethod
    def digital_i2c_clear(self, hdwf: int) -> int:
        """Try to free the bus.

        Returns:
            1 when the bus is free, 0 when a line is held low.
        """
        raise NotImplementedError

    @abstractmethod
    def digital_i2c_write(self, hdwf: int, address: int, data: bytes) -> int:
        """Write to an 8-bit (shifted) address and return the NAK indicator."""
        raise NotImplementedError

    @abstractmethod
    def digital_i2c_read(self, hdwf: int, address: int, count: int) -> tuple[bytes, int]:
        raise NotImplementedError

    @abstractmethod
    def digital_i2c_write_read(self, hdwf: int, address: int, tx: bytes, rx_count: int) -> tuple[bytes, int]:
        raise NotImplementedError
