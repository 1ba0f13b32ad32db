"""Enumerations and fixed values of the WaveForms driver interface.

Numeric values match the native ``dwf.h`` header so that members can be
passed straight through to the driver layer.
"""

from enum import Enum, IntEnum


class WavegenFunc(IntEnum):
    """Analog waveform generator function types."""

    DC = 0
    SINE = 1
    SQUARE = 2
    TRIANGLE = 3
    RAMP_UP = 4
    RAMP_DOWN = 5
    NOISE = 6
    PULSE = 7
    TRAPEZIUM = 8
    SINE_POWER = 9
    CUSTOM = 30


class TriggerSource(IntEnum):
    """Trigger sources shared by every instrument that can be triggered."""

    NONE = 0
    PC = 1
    DETECTOR_ANALOG_IN = 2
    DETECTOR_DIGITAL_IN = 3
    ANALOG_IN = 4
    DIGITAL_IN = 5
    DIGITAL_OUT = 6
    ANALOG_OUT1 = 7
    ANALOG_OUT2 = 8
    ANALOG_OUT3 = 9
    ANALOG_OUT4 = 10
    EXTERNAL1 = 11
    EXTERNAL2 = 12
    EXTERNAL3 = 13
    EXTERNAL4 = 14


class TriggerSlope(IntEnum):
    RISE = 0
    FALL = 1
    EITHER = 2


class DMMMode(IntEnum):
    """Digital multimeter measurement modes."""

    AC_VOLTAGE = 0
    DC_VOLTAGE = 1
    AC_CURRENT = 2
    DC_CURRENT = 3
    RESISTANCE = 4
    CONTINUITY = 5
    DIODE = 6
    TEMPERATURE = 7
    AC_LOW_CURRENT = 8
    DC_LOW_CURRENT = 9
    AC_HIGH_CURRENT = 10
    DC_HIGH_CURRENT = 11


class DigitalOutType(IntEnum):
    """Pattern generator output types."""

    PULSE = 0
    CUSTOM = 1
    RANDOM = 2


class DigitalOutIdle(IntEnum):
    INIT = 0
    LOW = 1
    HIGH = 2
    ZET = 3


class PullDirection(IntEnum):
    DOWN = 0
    UP = 1
    IDLE = -1


class AcquisitionState(IntEnum):
    """Status byte reported by the analog-in and digital-in status calls."""

    READY = 0
    ARMED = 1
    DONE = 2
    TRIGGERED = 3
    CONFIG = 4
    PREFILL = 5
    WAIT = 7


class EngineState(Enum):
    """Software state of an acquisition engine."""

    IDLE = "idle"
    CONFIGURED = "configured"
    TRIGGERED = "triggered"
    ARMED = "armed"
    DONE = "done"


class EnumConfigInfo(IntEnum):
    """Selectors for the per-configuration enumeration query."""

    ANALOG_IN_CHANNEL_COUNT = 1
    ANALOG_OUT_CHANNEL_COUNT = 2
    ANALOG_IO_CHANNEL_COUNT = 3
    DIGITAL_IN_CHANNEL_COUNT = 4
    DIGITAL_OUT_CHANNEL_COUNT = 5
    DIGITAL_IO_CHANNEL_COUNT = 6
    ANALOG_IN_BUFFER_SIZE = 7
    ANALOG_OUT_BUFFER_SIZE = 8
    DIGITAL_IN_BUFFER_SIZE = 9
    DIGITAL_OUT_BUFFER_SIZE = 10


ENUM_FILTER_ALL = 0
FILTER_DECIMATE = 0
TRIGGER_TYPE_EDGE = 0
ANALOG_OUT_NODE_CARRIER = 0
LOGIC_SAMPLE_FORMAT_BITS = 16

# 7-bit I2C addresses outside the reserved blocks
I2C_SCAN_FIRST = 0x08
I2C_SCAN_LAST = 0x77

UART_DEFAULT_RX_BUFFER = 8192


class DeviceModel(Enum):
    """Known device families.

    Each member carries the enumeration filter ID used to find it and the
    offset applied to DIO line numbers before they reach the digital
    instruments. The Digital Discovery numbers its DIO lines from 24.
    """

    ANALOG_DISCOVERY = ("Analog Discovery", 1, 0)
    ANALOG_DISCOVERY_2 = ("Analog Discovery 2", 3, 0)
    DIGITAL_DISCOVERY = ("Digital Discovery", 4, -24)
    ANALOG_DISCOVERY_PRO_3X50 = ("Analog Discovery Pro 3X50", 6, 0)
    ANALOG_DISCOVERY_PRO_5250 = ("Analog Discovery Pro 5250", 8, 0)
    UNKNOWN = ("", ENUM_FILTER_ALL, 0)

    def __init__(self, label: str, device_id: int, dio_offset: int):
        self.label = label
        self.device_id = device_id
        self.dio_offset = dio_offset

    def map_dio_channel(self, channel: int) -> int:
        """Translate a user-facing DIO line number to the driver's index."""
        return channel + self.dio_offset

    @classmethod
    def from_name(cls, name: str) -> "DeviceModel":
        """Resolve a human-readable device name, UNKNOWN when unrecognized."""
        if name == "Analog Discovery Studio":
            return cls.ANALOG_DISCOVERY_2
        for model in cls:
            if model is not cls.UNKNOWN and model.label == name:
                return model
        return cls.UNKNOWN

    @classmethod
    def from_device_id(cls, device_id: int) -> "DeviceModel":
        for model in cls:
            if model is not cls.UNKNOWN and model.device_id == device_id:
                return model
        return cls.UNKNOWN
