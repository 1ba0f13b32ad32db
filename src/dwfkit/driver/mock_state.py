"""
Simulated hardware state for the mock driver.

A :class:`SimulatedDevice` holds everything the mock driver needs to
answer queries as a real device would: identity, capability counts, the
analog-IO channel/node table, DIO registers and the serial bus
peripherals. Presets for the supported families are provided at the end
of the module.
"""

import logging
from dataclasses import dataclass, field

import numpy as np

from dwfkit.constants import AcquisitionState

logger = logging.getLogger(__name__)


@dataclass
class SimulatedNode:
    name: str
    unit: str = ""
    value: float = 0.0


@dataclass
class SimulatedChannel:
    """An analog-IO channel such as a supply rail or the DMM."""

    name: str
    label: str
    nodes: list[SimulatedNode] = field(default_factory=list)

    def node(self, name: str) -> SimulatedNode | None:
        for node in self.nodes:
            if node.name == name:
                return node
        return None


@dataclass
class SimulatedDevice:
    """
    State of one simulated device.

    The acquisition status lists are consumed one entry per status poll;
    once exhausted, the ``*_idle_state`` value is reported.
    """

    name: str = "Analog Discovery 2"
    user_name: str = "Discovery2"
    serial_number: str = "SN:210321ABCDEF"
    device_id: int = 3
    revision: int = 1
    version: str = "3.20.1"
    is_opened: bool = False
    openable: bool = True
    configs: list[dict] = field(default_factory=list)

    analog_in_channels: int = 2
    analog_in_buffer_size: int = 8192
    analog_in_bits: int = 14
    analog_out_channels: int = 2
    digital_in_bits: int = 16
    digital_in_buffer_size: int = 4096
    digital_out_channels: int = 16
    digital_in_clock: float = 100e6
    digital_out_clock: float = 100e6

    analog_io: list[SimulatedChannel] = field(default_factory=list)

    analog_in_states: list[int] = field(default_factory=list)
    analog_in_idle_state: int = AcquisitionState.DONE
    analog_in_data: dict[int, np.ndarray] = field(default_factory=dict)
    digital_in_states: list[int] = field(default_factory=list)
    digital_in_idle_state: int = AcquisitionState.DONE
    digital_in_data: np.ndarray | None = None

    dio_output_enable: int = 0
    dio_output: int = 0
    dio_input: int = 0

    uart_rx_queue: bytearray = field(default_factory=bytearray)
    uart_rx_indicator: int = 0
    uart_tx_log: list[bytes] = field(default_factory=list)

    spi_miso: bytearray = field(default_factory=bytearray)
    spi_log: list[tuple[str, bytes]] = field(default_factory=list)

    i2c_targets: set[int] = field(default_factory=set)
    i2c_bus_free: bool = True
    i2c_nak_index: int = 0
    i2c_rx_data: bytearray = field(default_factory=bytearray)
    i2c_log: list[tuple[str, int, bytes]] = field(default_factory=list)

    def channel(self, label: str) -> SimulatedChannel | None:
        for channel in self.analog_io:
            if channel.label == label:
                return channel
        return None

    def next_analog_in_state(self) -> int:
        if self.analog_in_states:
            return self.analog_in_states.pop(0)
        return self.analog_in_idle_state

    def next_digital_in_state(self) -> int:
        if self.digital_in_states:
            return self.digital_in_states.pop(0)
        return self.digital_in_idle_state

    def samples(self, channel: int, count: int) -> np.ndarray:
        data = self.analog_in_data.get(channel)
        if data is None:
            t = np.arange(count)
            return np.sin(2 * np.pi * t / max(count, 1)) * (channel + 1)
        return np.resize(np.asarray(data, dtype=np.float64), count)

    def logic_samples(self, count: int) -> np.ndarray:
        if self.digital_in_data is None:
            return (np.arange(count) & 0xFFFF).astype(np.uint16)
        return np.resize(np.asarray(self.digital_in_data, dtype=np.uint16), count)

    def pop_miso(self, count: int) -> bytes:
        data = bytes(self.spi_miso[:count]).ljust(count, b"\xff")
        del self.spi_miso[:count]
        return data

    def pop_i2c(self, count: int) -> bytes:
        data = bytes(self.i2c_rx_data[:count]).ljust(count, b"\xff")
        del self.i2c_rx_data[:count]
        return data


def _supply_rail(name: str, label: str) -> SimulatedChannel:
    return SimulatedChannel(
        name,
        label,
        [
            SimulatedNode("Enable"),
            SimulatedNode("Voltage", "V"),
            SimulatedNode("Current", "A"),
        ],
    )


def _system(temperature: float = 38.5) -> SimulatedChannel:
    return SimulatedChannel(
        "System", "System", [SimulatedNode("Temp", "degC", temperature)]
    )


def analog_discovery_2(**kwargs) -> SimulatedDevice:
    """Analog Discovery 2: V+/V- rails and a temperature sensor."""
    device = SimulatedDevice(
        analog_io=[
            _supply_rail("Positive Supply", "V+"),
            _supply_rail("Negative Supply", "V-"),
            _system(),
        ]
    )
    for key, value in kwargs.items():
        setattr(device, key, value)
    return device


def analog_discovery_pro_5250(**kwargs) -> SimulatedDevice:
    """ADP5250: ±25 V and 6 V rails plus a digital multimeter."""
    device = SimulatedDevice(
        name="Analog Discovery Pro 5250",
        user_name="ADP5250",
        serial_number="SN:5250A0000001",
        device_id=8,
        analog_in_buffer_size=32768,
        analog_io=[
            _supply_rail("Positive Supply", "p25V"),
            _supply_rail("Negative Supply", "n25V"),
            _supply_rail("Digital Supply", "p6V"),
            SimulatedChannel(
                "Digital Multimeter",
                "DMM",
                [
                    SimulatedNode("Enable"),
                    SimulatedNode("Mode"),
                    SimulatedNode("Range"),
                    SimulatedNode("Meas", "V", 3.3),
                    SimulatedNode("Input"),
                ],
            ),
            _system(41.0),
        ],
    )
    for key, value in kwargs.items():
        setattr(device, key, value)
    return device


def digital_discovery(**kwargs) -> SimulatedDevice:
    """Digital Discovery: DIO lines numbered from 24 and a VDD rail with drive."""
    device = SimulatedDevice(
        name="Digital Discovery",
        user_name="DigitalDiscovery",
        serial_number="SN:DD0000000001",
        device_id=4,
        analog_in_channels=0,
        analog_in_buffer_size=0,
        analog_out_channels=0,
        digital_in_bits=32,
        digital_out_channels=16,
        digital_in_clock=800e6,
        analog_io=[
            SimulatedChannel(
                "Digital Supply",
                "VDD",
                [
                    SimulatedNode("Enable"),
                    SimulatedNode("Voltage", "V"),
                    SimulatedNode("Drive", "A"),
                ],
            ),
            _system(35.0),
        ],
    )
    for key, value in kwargs.items():
        setattr(device, key, value)
    return device
