"""Configuration records with JSON/YAML serialization support.

Every instrument operation that takes more than a couple of scalars is
driven by one of the dataclasses below. They can be built in code, from
a plain mapping of request parameters, or from a JSON/YAML file.
"""

import json
import logging
from dataclasses import MISSING, asdict, dataclass, field, fields, is_dataclass
from enum import Enum
from typing import get_args, get_origin

import yaml

from dwfkit.constants import (
    DigitalOutIdle,
    DigitalOutType,
    TriggerSource,
    WavegenFunc,
)
from dwfkit.errors import InvalidInput

logger = logging.getLogger(__name__)


def _plain(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def _coerce_enum(enum_type, value):
    if isinstance(value, enum_type):
        return value
    try:
        if isinstance(value, str):
            return enum_type[value.upper()]
        return enum_type(value)
    except (KeyError, ValueError):
        raise InvalidInput(f"invalid {enum_type.__name__} value: {value!r}")


_SUFFIXES = (".json", ".yaml", ".yml")


def _check_suffix(filename: str) -> bool:
    """Return True for a JSON filename, False for YAML, raise otherwise."""
    if not filename.endswith(_SUFFIXES):
        raise ValueError(
            f"Unsupported config file {filename!r}, expected one of {', '.join(_SUFFIXES)}"
        )
    return filename.endswith(".json")


@dataclass
class Config:
    """Common base for the configuration records.

    Subclasses only declare fields. This base reads them from JSON/YAML
    files or request parameter mappings and writes them back out.
    """

    def __str__(self):
        lines = [f"{type(self).__name__}:"]
        lines.extend(f"  {name}: {value}" for name, value in vars(self).items())
        return "\n".join(lines) + "\n"

    @classmethod
    def from_file(cls, filename: str):
        """
        Load a record from disk.

        Parameters
        ----------
        filename : str
            Path to a ``.json``, ``.yaml`` or ``.yml`` file. Any other
            suffix raises ValueError.

        Returns
        -------
        Config
            The loaded record, with absent fields set to their defaults.
        """
        as_json = _check_suffix(filename)
        with open(filename, "r") as file:
            data = json.load(file) if as_json else yaml.safe_load(file)
        return cls._from_dict(data or {})

    @classmethod
    def from_params(cls, params: dict | None):
        """Build an instance from request parameters.

        Missing keys fall back to field defaults, enumerations are accepted
        by value or by name, and keys that are not fields are ignored.
        """
        return cls._from_dict(dict(params or {}), quiet=True)

    @classmethod
    def _field_value(cls, field_type, value, quiet):
        if is_dataclass(field_type):
            return field_type._from_dict(value, quiet) if isinstance(value, dict) else value
        if isinstance(field_type, type) and issubclass(field_type, Enum):
            return _coerce_enum(field_type, value)
        if get_origin(field_type) is list:
            item_type = (get_args(field_type) or (None,))[0]
            if item_type is not None and is_dataclass(item_type):
                return [
                    item_type._from_dict(item, quiet) if isinstance(item, dict) else item
                    for item in value
                ]
            return list(value)
        return value

    @classmethod
    def _from_dict(cls, data: dict, quiet: bool = False):
        """
        Build an instance from a mapping.

        Parameters
        ----------
        data : dict
            Field values keyed by field name. Nested records may be given
            as mappings.
        quiet : bool
            Report defaulted fields at debug level rather than info.

        Returns
        -------
        Config
        """
        if not isinstance(data, dict):
            return data

        log = logger.debug if quiet else logger.info
        values = {}
        for info in fields(cls):
            if info.name in data:
                values[info.name] = cls._field_value(info.type, data[info.name], quiet)
            elif info.default is not MISSING:
                values[info.name] = info.default
                log("%s.%s not given, defaulting to %r", cls.__name__, info.name, info.default)
            elif info.default_factory is not MISSING:
                values[info.name] = info.default_factory()
                log("%s.%s not given, defaulting to empty", cls.__name__, info.name)
            else:
                raise ValueError(f"{cls.__name__} requires field {info.name!r}")
        return cls(**values)

    def export(self, filename: str):
        """Write the record to a ``.json``, ``.yaml`` or ``.yml`` file.

        Raises ValueError for other suffixes and RuntimeError when the
        file cannot be written.
        """
        as_json = _check_suffix(filename)
        data = self.to_dict()
        try:
            with open(filename, "w") as file:
                if as_json:
                    json.dump(data, file, indent=4)
                else:
                    yaml.dump(data, file, default_flow_style=False)
        except OSError as e:
            raise RuntimeError(f"Failed to write to {filename}: {e}")

    def to_dict(self) -> dict:
        """Field values as plain JSON/YAML-friendly data, enums by value."""
        return {k: _plain(v) for k, v in asdict(self).items()}


@dataclass
class DriverConfig(Config):
    """Selects and parameterizes the native driver backend.

    Attributes:
        driver: Registered driver key, "dwf" for the native library or
            "mock" for the simulator.
        library: Explicit path to the native library. Empty means look at
            the DWFKIT_DWF_LIB environment variable, then the platform
            default locations.
    """

    driver: str = "dwf"
    library: str = ""


@dataclass
class ScopeConfig(Config):
    sampling_frequency: float = 20e6
    buffer_size: int = 0
    offset_voltage: float = 0.0
    amplitude_range: float = 5.0


@dataclass
class TriggerConfig(Config):
    """Analog-in (oscilloscope) trigger settings.

    Attributes:
        enable: Disabled, or enabled with source NONE, clears the trigger.
        source: Trigger source.
        channel: 1-based scope channel, used with the analog detector.
        timeout: Auto-trigger timeout in seconds, 0 waits forever.
        edge_rising: Rising edge when True, falling edge otherwise.
        level: Trigger level in volts.
    """

    enable: bool = True
    source: TriggerSource = TriggerSource.NONE
    channel: int = 1
    timeout: float = 0.0
    edge_rising: bool = True
    level: float = 0.0


@dataclass
class LogicConfig(Config):
    sampling_frequency: float = 100e6
    buffer_size: int = 0


@dataclass
class LogicTriggerConfig(Config):
    """Digital-in (logic analyzer) trigger settings.

    Attributes:
        position: Number of samples to keep from before the trigger.
        length_min: Minimum pulse length in seconds.
        length_max: Maximum pulse length in seconds.
        count: Number of trigger events required.
    """

    enable: bool = True
    channel: int = 0
    position: int = 0
    timeout: float = 0.0
    rising_edge: bool = True
    length_min: float = 0.0
    length_max: float = 20.0
    count: int = 1


@dataclass
class WavegenConfig(Config):
    """Analog waveform generator settings.

    Attributes:
        channel: 1-based output channel.
        function: Waveform shape. Custom data is loaded only for CUSTOM.
        symmetry: Duty cycle/symmetry in percent.
        wait: Delay before starting, in seconds.
        run_time: Run duration in seconds, 0 runs continuously.
        repeat: Repeat count, 0 repeats forever.
        custom_data: Normalized samples in [-1, 1] for CUSTOM.
    """

    channel: int = 1
    function: WavegenFunc = WavegenFunc.SINE
    offset: float = 0.0
    frequency: float = 1e3
    amplitude: float = 1.0
    symmetry: float = 50.0
    wait: float = 0.0
    run_time: float = 0.0
    repeat: int = 0
    custom_data: list[float] = field(default_factory=list)


@dataclass
class PatternConfig(Config):
    """Pattern generator settings for a single DIO line.

    Attributes:
        channel: User-facing DIO line number.
        duty_cycle: High percentage of each period, for PULSE.
        data: Bit sequence, for CUSTOM.
        run_time: Run duration in seconds, 0 runs continuously and a
            negative value is derived from the custom data length.
        idle_state: Output state while the generator is not running.
    """

    channel: int = 0
    function: DigitalOutType = DigitalOutType.PULSE
    frequency: float = 1e3
    duty_cycle: float = 50.0
    data: list[int] = field(default_factory=list)
    wait: float = 0.0
    repeat: int = 0
    run_time: float = 0.0
    idle_state: DigitalOutIdle = DigitalOutIdle.INIT
    trigger_enabled: bool = False
    trigger_source: TriggerSource = TriggerSource.NONE
    trigger_edge_rising: bool = True


@dataclass
class SuppliesConfig(Config):
    master_state: bool = False
    positive_state: bool = False
    negative_state: bool = False
    state: bool = False
    positive_voltage: float = 0.0
    negative_voltage: float = 0.0
    voltage: float = 0.0
    positive_current: float = 0.0
    negative_current: float = 0.0
    current: float = 0.0


@dataclass
class UARTConfig(Config):
    rx: int = 0
    tx: int = 1
    baud_rate: float = 9600
    parity: int = 0
    data_bits: int = 8
    stop_bits: float = 1


@dataclass
class SPIConfig(Config):
    """SPI master settings.

    Attributes:
        miso: DIO line for MISO, negative when unused.
        mosi: DIO line for MOSI, negative when unused.
        mode: Clock polarity/phase mode, 0 to 3.
    """

    cs: int = 0
    sck: int = 1
    miso: int = -1
    mosi: int = -1
    clock_frequency: float = 1e6
    mode: int = 0
    msb_first: bool = True


@dataclass
class I2CConfig(Config):
    sda: int = 0
    scl: int = 1
    clock_rate: float = 100e3
    stretching: bool = False
