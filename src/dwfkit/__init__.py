# flake8: noqa  (ignore unused imports)

from ._version import __version__
from .config import (
    DriverConfig,
    I2CConfig,
    LogicConfig,
    LogicTriggerConfig,
    PatternConfig,
    ScopeConfig,
    SPIConfig,
    SuppliesConfig,
    TriggerConfig,
    UARTConfig,
    WavegenConfig,
)
from .constants import (
    DeviceModel,
    DigitalOutIdle,
    DigitalOutType,
    DMMMode,
    TriggerSlope,
    TriggerSource,
    WavegenFunc,
)
from .device import DiscoveryDevice
from .driver import DriverRegistry, MockDwfDriver, create_driver
from .interface import InstrumentTools
from .session import DeviceConfig, DeviceInfo, DeviceSession, EnumeratedDevice
