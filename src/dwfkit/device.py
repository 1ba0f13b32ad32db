"""DiscoveryDevice: one session plus a controller for every instrument."""

import logging
import threading

from dwfkit.config import DriverConfig
from dwfkit.driver import create_driver
from dwfkit.driver.base import DwfDriver
from dwfkit.instruments import (
    I2C,
    SPI,
    UART,
    DigitalMultimeter,
    LogicAnalyzer,
    Oscilloscope,
    PatternGenerator,
    PowerSupply,
    StaticIO,
    WaveformGenerator,
)
from dwfkit.session import DeviceConfig, DeviceInfo, DeviceSession, EnumeratedDevice

logger = logging.getLogger(__name__)


class DiscoveryDevice:
    """A Digilent test and measurement device and its instruments.

    Every instrument shares the one :class:`DeviceSession`. The device
    does not serialize calls itself; ``lock`` is provided for callers
    that drive it from several threads.

    Args:
        driver: Driver backend. Created from ``config`` when omitted.
        config: DriverConfig (or mapping) selecting the backend.

    Example:
        with DiscoveryDevice() as device:
            device.open()
            device.scope.open()
            samples = device.scope.record(1)
    """

    def __init__(self, driver: DwfDriver | None = None, config: DriverConfig | dict | None = None):
        if driver is None:
            driver = create_driver(config)
        self.driver = driver
        self.session = DeviceSession(driver)
        self.lock = threading.RLock()

        self.scope = Oscilloscope(self.session)
        self.logic = LogicAnalyzer(self.session)
        self.wavegen = WaveformGenerator(self.session)
        self.pattern = PatternGenerator(self.session)
        self.supplies = PowerSupply(self.session)
        self.dmm = DigitalMultimeter(self.session)
        self.static = StaticIO(self.session)
        self.uart = UART(self.session)
        self.spi = SPI(self.session)
        self.i2c = I2C(self.session)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def info(self) -> DeviceInfo | None:
        return self.session.info

    @property
    def is_open(self) -> bool:
        return self.session.is_open

    def enumerate(self) -> list[EnumeratedDevice]:
        return self.session.enumerate_devices()

    def configs(self, device_index: int = 0) -> list[DeviceConfig]:
        return self.session.enumerate_configs(device_index)

    def open(self, device_name: str = "", config: int = 0) -> DeviceInfo:
        return self.session.open(device_name, config)

    def close(self):
        self.session.close()

    def temperature(self) -> float:
        return self.session.temperature()
