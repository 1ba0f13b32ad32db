"""Mock driver implementation for simulation and testing.

The mock answers every driver call from :mod:`dwfkit.driver.mock_state`
devices and records each call in :attr:`MockDwfDriver.calls`, so tests
can assert on the exact sequence of native operations an instrument
issued. Failures are injected per method name with :meth:`fail_on`.
"""

import logging

import numpy as np

from dwfkit.constants import EnumConfigInfo
from dwfkit.driver.base import DwfDriver
from dwfkit.driver.mock_state import SimulatedDevice, analog_discovery_2
from dwfkit.driver.registry import DriverRegistry
from dwfkit.errors import DriverError

logger = logging.getLogger(__name__)


@DriverRegistry.register_driver("mock")
class MockDwfDriver(DwfDriver):
    """Driver backed by simulated devices.

    Args:
        config: Configuration dictionary (ignored for mock).
        devices: Simulated devices to enumerate. Defaults to a single
            Analog Discovery 2.
    """

    def __init__(self, config: dict | None = None, devices: list[SimulatedDevice] | None = None, **kwargs):
        self.devices = list(devices) if devices is not None else [analog_discovery_2()]
        self.calls: list[tuple] = []
        self.last_error = ""
        self._failures: dict[str, list] = {}
        self._enumerated: list[SimulatedDevice] = []
        self._config_device: SimulatedDevice | None = None
        self._handles: dict[int, SimulatedDevice] = {}
        self._next_handle = 1
        logger.info("MockDwfDriver initialized (simulation mode)")

    def fail_on(self, name: str, message: str = "simulated failure", times: int | None = None):
        """Make the named driver method fail.

        Args:
            name: Driver method name, e.g. ``"analog_in_configure"``.
            message: Last-error text reported by the failure.
            times: Number of calls to fail, None for every call.
        """
        self._failures[name] = [message, times]

    def clear_failures(self):
        self._failures.clear()

    def called(self, name: str) -> list[tuple]:
        """Return the argument tuples of every recorded call to ``name``."""
        return [tuple(call[1:]) for call in self.calls if call[0] == name]

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def _record(self, name: str, *args):
        self.calls.append((name, *args))
        failure = self._failures.get(name)
        if failure is None:
            return
        message, times = failure
        if times is not None:
            if times <= 1:
                del self._failures[name]
            else:
                failure[1] = times - 1
        self.last_error = message
        raise DriverError(message)

    def _device(self, hdwf: int) -> SimulatedDevice:
        device = self._handles.get(hdwf)
        if device is None:
            self.last_error = "Invalid device handle provided"
            raise DriverError(self.last_error)
        return device

    def _enumerated_device(self, index: int) -> SimulatedDevice:
        if not 0 <= index < len(self._enumerated):
            self.last_error = "Device index out of range"
            raise DriverError(self.last_error)
        return self._enumerated[index]

    def _io_node(self, hdwf, channel, node):
        device = self._device(hdwf)
        try:
            return device.analog_io[channel].nodes[node]
        except IndexError:
            self.last_error = "Analog IO channel or node index out of range"
            raise DriverError(self.last_error)

    def get_last_error_msg(self):
        return self.last_error

    def get_version(self):
        self._record("get_version")
        return self.devices[0].version if self.devices else ""

    def enum(self, enum_filter):
        self._record("enum", enum_filter)
        self._enumerated = [
            d for d in self.devices if enum_filter == 0 or d.device_id == enum_filter
        ]
        return len(self._enumerated)

    def enum_device_type(self, index):
        self._record("enum_device_type", index)
        device = self._enumerated_device(index)
        return device.device_id, device.revision

    def enum_device_name(self, index):
        self._record("enum_device_name", index)
        return self._enumerated_device(index).name

    def enum_user_name(self, index):
        self._record("enum_user_name", index)
        return self._enumerated_device(index).user_name

    def enum_sn(self, index):
        self._record("enum_sn", index)
        return self._enumerated_device(index).serial_number

    def enum_device_is_opened(self, index):
        self._record("enum_device_is_opened", index)
        return self._enumerated_device(index).is_opened

    def enum_config(self, index):
        self._record("enum_config", index)
        device = self._enumerated_device(index)
        self._config_device = device
        return len(device.configs) or 1

    def enum_config_info(self, config_index, info):
        self._record("enum_config_info", config_index, info)
        device = self._config_device or self._enumerated_device(0)
        if config_index < len(device.configs):
            return int(device.configs[config_index].get(EnumConfigInfo(info).name.lower(), 0))
        defaults = {
            EnumConfigInfo.ANALOG_IN_CHANNEL_COUNT: device.analog_in_channels,
            EnumConfigInfo.ANALOG_OUT_CHANNEL_COUNT: device.analog_out_channels,
            EnumConfigInfo.ANALOG_IO_CHANNEL_COUNT: len(device.analog_io),
            EnumConfigInfo.DIGITAL_IN_CHANNEL_COUNT: device.digital_in_bits,
            EnumConfigInfo.DIGITAL_OUT_CHANNEL_COUNT: device.digital_out_channels,
            EnumConfigInfo.DIGITAL_IO_CHANNEL_COUNT: device.digital_out_channels,
            EnumConfigInfo.ANALOG_IN_BUFFER_SIZE: device.analog_in_buffer_size,
            EnumConfigInfo.ANALOG_OUT_BUFFER_SIZE: 4096,
            EnumConfigInfo.DIGITAL_IN_BUFFER_SIZE: device.digital_in_buffer_size,
            EnumConfigInfo.DIGITAL_OUT_BUFFER_SIZE: 1024,
        }
        return defaults[EnumConfigInfo(info)]

    def device_config_open(self, index, config):
        self._record("device_config_open", index, config)
        device = self._enumerated_device(index)
        if not device.openable or device.is_opened:
            self.last_error = "Device is busy, used by another application."
            raise DriverError(self.last_error)
        handle = self._next_handle
        self._next_handle += 1
        self._handles[handle] = device
        device.is_opened = True
        return handle

    def device_close(self, hdwf):
        self._record("device_close", hdwf)
        device = self._handles.pop(hdwf, None)
        if device is not None:
            device.is_opened = False

    # Analog in

    def analog_in_channel_count(self, hdwf):
        self._record("analog_in_channel_count", hdwf)
        return self._device(hdwf).analog_in_channels

    def analog_in_buffer_size_info(self, hdwf):
        self._record("analog_in_buffer_size_info", hdwf)
        return self._device(hdwf).analog_in_buffer_size

    def analog_in_bits_info(self, hdwf):
        self._record("analog_in_bits_info", hdwf)
        return self._device(hdwf).analog_in_bits

    def analog_in_channel_enable_set(self, hdwf, channel, enable):
        self._record("analog_in_channel_enable_set", hdwf, channel, enable)

    def analog_in_channel_offset_set(self, hdwf, channel, offset):
        self._record("analog_in_channel_offset_set", hdwf, channel, offset)

    def analog_in_channel_range_set(self, hdwf, channel, range_):
        self._record("analog_in_channel_range_set", hdwf, channel, range_)

    def analog_in_channel_filter_set(self, hdwf, channel, filter_):
        self._record("analog_in_channel_filter_set", hdwf, channel, filter_)

    def analog_in_buffer_size_set(self, hdwf, size):
        self._record("analog_in_buffer_size_set", hdwf, size)

    def analog_in_frequency_set(self, hdwf, frequency):
        self._record("analog_in_frequency_set", hdwf, frequency)

    def analog_in_configure(self, hdwf, reconfigure, start):
        self._record("analog_in_configure", hdwf, reconfigure, start)

    def analog_in_status(self, hdwf, read_data):
        self._record("analog_in_status", hdwf, read_data)
        return self._device(hdwf).next_analog_in_state()

    def analog_in_status_sample(self, hdwf, channel):
        self._record("analog_in_status_sample", hdwf, channel)
        return float(self._device(hdwf).samples(channel, 1)[0])

    def analog_in_status_data(self, hdwf, channel, count):
        self._record("analog_in_status_data", hdwf, channel, count)
        return self._device(hdwf).samples(channel, count)

    def analog_in_reset(self, hdwf):
        self._record("analog_in_reset", hdwf)

    def analog_in_trigger_auto_timeout_set(self, hdwf, timeout):
        self._record("analog_in_trigger_auto_timeout_set", hdwf, timeout)

    def analog_in_trigger_source_set(self, hdwf, source):
        self._record("analog_in_trigger_source_set", hdwf, source)

    def analog_in_trigger_channel_set(self, hdwf, channel):
        self._record("analog_in_trigger_channel_set", hdwf, channel)

    def analog_in_trigger_type_set(self, hdwf, trigger_type):
        self._record("analog_in_trigger_type_set", hdwf, trigger_type)

    def analog_in_trigger_level_set(self, hdwf, level):
        self._record("analog_in_trigger_level_set", hdwf, level)

    def analog_in_trigger_condition_set(self, hdwf, slope):
        self._record("analog_in_trigger_condition_set", hdwf, slope)

    # Analog out

    def analog_out_count(self, hdwf):
        self._record("analog_out_count", hdwf)
        return self._device(hdwf).analog_out_channels

    def analog_out_node_enable_set(self, hdwf, channel, node, enable):
        self._record("analog_out_node_enable_set", hdwf, channel, node, enable)

    def analog_out_node_function_set(self, hdwf, channel, node, function):
        self._record("analog_out_node_function_set", hdwf, channel, node, function)

    def analog_out_node_data_set(self, hdwf, channel, node, data):
        self._record("analog_out_node_data_set", hdwf, channel, node, list(data))

    def analog_out_node_frequency_set(self, hdwf, channel, node, frequency):
        self._record("analog_out_node_frequency_set", hdwf, channel, node, frequency)

    def analog_out_node_amplitude_set(self, hdwf, channel, node, amplitude):
        self._record("analog_out_node_amplitude_set", hdwf, channel, node, amplitude)

    def analog_out_node_offset_set(self, hdwf, channel, node, offset):
        self._record("analog_out_node_offset_set", hdwf, channel, node, offset)

    def analog_out_node_symmetry_set(self, hdwf, channel, node, symmetry):
        self._record("analog_out_node_symmetry_set", hdwf, channel, node, symmetry)

    def analog_out_run_set(self, hdwf, channel, seconds):
        self._record("analog_out_run_set", hdwf, channel, seconds)

    def analog_out_wait_set(self, hdwf, channel, seconds):
        self._record("analog_out_wait_set", hdwf, channel, seconds)

    def analog_out_repeat_set(self, hdwf, channel, repeat):
        self._record("analog_out_repeat_set", hdwf, channel, repeat)

    def analog_out_configure(self, hdwf, channel, start):
        self._record("analog_out_configure", hdwf, channel, start)

    def analog_out_reset(self, hdwf, channel):
        self._record("analog_out_reset", hdwf, channel)

    # Analog IO

    def analog_io_channel_count(self, hdwf):
        self._record("analog_io_channel_count", hdwf)
        return len(self._device(hdwf).analog_io)

    def analog_io_channel_name(self, hdwf, channel):
        self._record("analog_io_channel_name", hdwf, channel)
        entry = self._device(hdwf).analog_io[channel]
        return entry.name, entry.label

    def analog_io_channel_info(self, hdwf, channel):
        self._record("analog_io_channel_info", hdwf, channel)
        return len(self._device(hdwf).analog_io[channel].nodes)

    def analog_io_channel_node_name(self, hdwf, channel, node):
        self._record("analog_io_channel_node_name", hdwf, channel, node)
        entry = self._io_node(hdwf, channel, node)
        return entry.name, entry.unit

    def analog_io_channel_node_set(self, hdwf, channel, node, value):
        self._record("analog_io_channel_node_set", hdwf, channel, node, value)
        self._io_node(hdwf, channel, node).value = value

    def analog_io_channel_node_get(self, hdwf, channel, node):
        self._record("analog_io_channel_node_get", hdwf, channel, node)
        return self._io_node(hdwf, channel, node).value

    def analog_io_channel_node_status(self, hdwf, channel, node):
        self._record("analog_io_channel_node_status", hdwf, channel, node)
        return self._io_node(hdwf, channel, node).value

    def analog_io_status(self, hdwf):
        self._record("analog_io_status", hdwf)

    def analog_io_enable_set(self, hdwf, enable):
        self._record("analog_io_enable_set", hdwf, enable)

    def analog_io_reset(self, hdwf):
        self._record("analog_io_reset", hdwf)

    # Digital in

    def digital_in_bits_info(self, hdwf):
        self._record("digital_in_bits_info", hdwf)
        return self._device(hdwf).digital_in_bits

    def digital_in_buffer_size_info(self, hdwf):
        self._record("digital_in_buffer_size_info", hdwf)
        return self._device(hdwf).digital_in_buffer_size

    def digital_in_internal_clock_info(self, hdwf):
        self._record("digital_in_internal_clock_info", hdwf)
        return self._device(hdwf).digital_in_clock

    def digital_in_divider_set(self, hdwf, divider):
        self._record("digital_in_divider_set", hdwf, divider)

    def digital_in_sample_format_set(self, hdwf, bits):
        self._record("digital_in_sample_format_set", hdwf, bits)

    def digital_in_buffer_size_set(self, hdwf, size):
        self._record("digital_in_buffer_size_set", hdwf, size)

    def digital_in_configure(self, hdwf, reconfigure, start):
        self._record("digital_in_configure", hdwf, reconfigure, start)

    def digital_in_status(self, hdwf, read_data):
        self._record("digital_in_status", hdwf, read_data)
        return self._device(hdwf).next_digital_in_state()

    def digital_in_status_data(self, hdwf, count):
        self._record("digital_in_status_data", hdwf, count)
        return self._device(hdwf).logic_samples(count)

    def digital_in_reset(self, hdwf):
        self._record("digital_in_reset", hdwf)

    def digital_in_trigger_source_set(self, hdwf, source):
        self._record("digital_in_trigger_source_set", hdwf, source)

    def digital_in_trigger_position_set(self, hdwf, samples):
        self._record("digital_in_trigger_position_set", hdwf, samples)

    def digital_in_trigger_prefill_set(self, hdwf, samples):
        self._record("digital_in_trigger_prefill_set", hdwf, samples)

    def digital_in_trigger_set(self, hdwf, level_low, level_high, edge_rise, edge_fall):
        self._record("digital_in_trigger_set", hdwf, level_low, level_high, edge_rise, edge_fall)

    def digital_in_trigger_reset_set(self, hdwf, level_low, level_high, edge_rise, edge_fall):
        self._record("digital_in_trigger_reset_set", hdwf, level_low, level_high, edge_rise, edge_fall)

    def digital_in_trigger_auto_timeout_set(self, hdwf, timeout):
        self._record("digital_in_trigger_auto_timeout_set", hdwf, timeout)

    def digital_in_trigger_length_set(self, hdwf, minimum, maximum, sync):
        self._record("digital_in_trigger_length_set", hdwf, minimum, maximum, sync)

    def digital_in_trigger_count_set(self, hdwf, count, restart):
        self._record("digital_in_trigger_count_set", hdwf, count, restart)

    # Digital out

    def digital_out_count(self, hdwf):
        self._record("digital_out_count", hdwf)
        return self._device(hdwf).digital_out_channels

    def digital_out_internal_clock_info(self, hdwf):
        self._record("digital_out_internal_clock_info", hdwf)
        return self._device(hdwf).digital_out_clock

    def digital_out_enable_set(self, hdwf, channel, enable):
        self._record("digital_out_enable_set", hdwf, channel, enable)

    def digital_out_type_set(self, hdwf, channel, output_type):
        self._record("digital_out_type_set", hdwf, channel, output_type)

    def digital_out_divider_set(self, hdwf, channel, divider):
        self._record("digital_out_divider_set", hdwf, channel, divider)

    def digital_out_idle_set(self, hdwf, channel, idle):
        self._record("digital_out_idle_set", hdwf, channel, idle)

    def digital_out_counter_set(self, hdwf, channel, low, high):
        self._record("digital_out_counter_set", hdwf, channel, low, high)

    def digital_out_data_set(self, hdwf, channel, bits):
        self._record("digital_out_data_set", hdwf, channel, [int(b) for b in np.asarray(bits)])

    def digital_out_run_set(self, hdwf, seconds):
        self._record("digital_out_run_set", hdwf, seconds)

    def digital_out_wait_set(self, hdwf, seconds):
        self._record("digital_out_wait_set", hdwf, seconds)

    def digital_out_repeat_set(self, hdwf, repeat):
        self._record("digital_out_repeat_set", hdwf, repeat)

    def digital_out_repeat_trigger_set(self, hdwf, enable):
        self._record("digital_out_repeat_trigger_set", hdwf, enable)

    def digital_out_trigger_source_set(self, hdwf, source):
        self._record("digital_out_trigger_source_set", hdwf, source)

    def digital_out_trigger_slope_set(self, hdwf, slope):
        self._record("digital_out_trigger_slope_set", hdwf, slope)

    def digital_out_configure(self, hdwf, start):
        self._record("digital_out_configure", hdwf, start)

    def digital_out_reset(self, hdwf):
        self._record("digital_out_reset", hdwf)

    # Digital IO

    def digital_io_output_enable_get(self, hdwf):
        self._record("digital_io_output_enable_get", hdwf)
        return self._device(hdwf).dio_output_enable

    def digital_io_output_enable_set(self, hdwf, mask):
        self._record("digital_io_output_enable_set", hdwf, mask)
        self._device(hdwf).dio_output_enable = mask

    def digital_io_output_get(self, hdwf):
        self._record("digital_io_output_get", hdwf)
        return self._device(hdwf).dio_output

    def digital_io_output_set(self, hdwf, mask):
        self._record("digital_io_output_set", hdwf, mask)
        self._device(hdwf).dio_output = mask

    def digital_io_status(self, hdwf):
        self._record("digital_io_status", hdwf)

    def digital_io_input_status(self, hdwf):
        self._record("digital_io_input_status", hdwf)
        device = self._device(hdwf)
        # lines driven as outputs read back their own level
        driven = device.dio_output & device.dio_output_enable
        return (device.dio_input & ~device.dio_output_enable) | driven

    def digital_io_reset(self, hdwf):
        self._record("digital_io_reset", hdwf)
        device = self._device(hdwf)
        device.dio_output_enable = 0
        device.dio_output = 0

    # Digital UART

    def digital_uart_rate_set(self, hdwf, baud_rate):
        self._record("digital_uart_rate_set", hdwf, baud_rate)

    def digital_uart_tx_set(self, hdwf, channel):
        self._record("digital_uart_tx_set", hdwf, channel)

    def digital_uart_rx_set(self, hdwf, channel):
        self._record("digital_uart_rx_set", hdwf, channel)

    def digital_uart_bits_set(self, hdwf, bits):
        self._record("digital_uart_bits_set", hdwf, bits)

    def digital_uart_parity_set(self, hdwf, parity):
        self._record("digital_uart_parity_set", hdwf, parity)

    def digital_uart_stop_set(self, hdwf, stop_bits):
        self._record("digital_uart_stop_set", hdwf, stop_bits)

    def digital_uart_tx(self, hdwf, data):
        self._record("digital_uart_tx", hdwf, bytes(data))
        if data:
            self._device(hdwf).uart_tx_log.append(bytes(data))

    def digital_uart_rx(self, hdwf, size):
        self._record("digital_uart_rx", hdwf, size)
        device = self._device(hdwf)
        data = bytes(device.uart_rx_queue[:size])
        del device.uart_rx_queue[:size]
        indicator = device.uart_rx_indicator if size else 0
        if size:
            device.uart_rx_indicator = 0
        return data, indicator

    def digital_uart_reset(self, hdwf):
        self._record("digital_uart_reset", hdwf)

    # Digital SPI

    def digital_spi_frequency_set(self, hdwf, frequency):
        self._record("digital_spi_frequency_set", hdwf, frequency)

    def digital_spi_clock_set(self, hdwf, channel):
        self._record("digital_spi_clock_set", hdwf, channel)

    def digital_spi_data_set(self, hdwf, dq, channel):
        self._record("digital_spi_data_set", hdwf, dq, channel)

    def digital_spi_idle_set(self, hdwf, dq, idle):
        self._record("digital_spi_idle_set", hdwf, dq, idle)

    def digital_spi_mode_set(self, hdwf, mode):
        self._record("digital_spi_mode_set", hdwf, mode)

    def digital_spi_order_set(self, hdwf, msb_first):
        self._record("digital_spi_order_set", hdwf, msb_first)

    def digital_spi_select(self, hdwf, channel, level):
        self._record("digital_spi_select", hdwf, channel, level)

    def digital_spi_write_one(self, hdwf, dq_mode, bits, word):
        self._record("digital_spi_write_one", hdwf, dq_mode, bits, word)

    def digital_spi_read(self, hdwf, dq_mode, bits, count):
        self._record("digital_spi_read", hdwf, dq_mode, bits, count)
        device = self._device(hdwf)
        data = device.pop_miso(count)
        device.spi_log.append(("read", data))
        return data

    def digital_spi_write(self, hdwf, dq_mode, bits, data):
        self._record("digital_spi_write", hdwf, dq_mode, bits, bytes(data))
        self._device(hdwf).spi_log.append(("write", bytes(data)))

    def digital_spi_write_read(self, hdwf, dq_mode, bits, tx, rx_count):
        self._record("digital_spi_write_read", hdwf, dq_mode, bits, bytes(tx), rx_count)
        device = self._device(hdwf)
        device.spi_log.append(("write", bytes(tx)))
        data = device.pop_miso(rx_count)
        device.spi_log.append(("read", data))
        return data

    def digital_spi_reset(self, hdwf):
        self._record("digital_spi_reset", hdwf)

    # Digital I2C

    def digital_i2c_reset(self, hdwf):
        self._record("digital_i2c_reset", hdwf)

    def digital_i2c_stretch_set(self, hdwf, enable):
        self._record("digital_i2c_stretch_set", hdwf, enable)

    def digital_i2c_rate_set(self, hdwf, rate):
        self._record("digital_i2c_rate_set", hdwf, rate)

    def digital_i2c_scl_set(self, hdwf, channel):
        self._record("digital_i2c_scl_set", hdwf, channel)

    def digital_i2c_sda_set(self, hdwf, channel):
        self._record("digital_i2c_sda_set", hdwf, channel)

    def digital_i2c_clear(self, hdwf):
        self._record("digital_i2c_clear", hdwf)
        return int(self._device(hdwf).i2c_bus_free)

    def _i2c_nak(self, device: SimulatedDevice, address: int) -> int:
        if device.i2c_nak_index:
            return device.i2c_nak_index
        # the address byte itself is index 1
        return 0 if (address >> 1) in device.i2c_targets else 1

    def digital_i2c_write(self, hdwf, address, data):
        self._record("digital_i2c_write", hdwf, address, bytes(data))
        device = self._device(hdwf)
        device.i2c_log.append(("write", address, bytes(data)))
        return self._i2c_nak(device, address)

    def digital_i2c_read(self, hdwf, address, count):
        self._record("digital_i2c_read", hdwf, address, count)
        device = self._device(hdwf)
        nak = self._i2c_nak(device, address)
        data = device.pop_i2c(count) if nak == 0 else b""
        device.i2c_log.append(("read", address, data))
        return data, nak

    def digital_i2c_write_read(self, hdwf, address, tx, rx_count):
        self._record("digital_i2c_write_read", hdwf, address, bytes(tx), rx_count)
        device = self._device(hdwf)
        device.i2c_log.append(("write", address, bytes(tx)))
        nak = self._i2c_nak(device, address)
        data = device.pop_i2c(rx_count) if nak == 0 else b""
        device.i2c_log.append(("read", address, data))
        return data, nak
