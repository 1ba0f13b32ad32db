"""Device session: the single owner of the native device handle.

Every instrument borrows a :class:`DeviceSession` to reach the driver,
the open handle and the capability information cached at open time.
"""

import logging
from dataclasses import dataclass

from dwfkit.config import Config
from dwfkit.constants import ENUM_FILTER_ALL, DeviceModel, EnumConfigInfo
from dwfkit.driver.base import DwfDriver
from dwfkit.errors import DriverError, NoDeviceFound, NotConnectedError, OpenFailed
from dwfkit import resolver

logger = logging.getLogger(__name__)


@dataclass
class DeviceInfo(Config):
    """Capabilities of the open device, queried once at open time."""

    name: str = ""
    serial_number: str = ""
    sdk_version: str = ""
    analog_in_channels: int = 0
    analog_out_channels: int = 0
    digital_in_channels: int = 0
    digital_out_channels: int = 0
    max_analog_in_buffer_size: int = 0
    adc_bits: int = 0


@dataclass
class DeviceConfig(Config):
    """A hardware configuration preset of an enumerated device."""

    index: int = 0
    analog_in_channels: int = 0
    analog_out_channels: int = 0
    analog_io_channels: int = 0
    digital_in_channels: int = 0
    digital_out_channels: int = 0
    digital_io_channels: int = 0
    analog_in_buffer_size: int = 0
    analog_out_buffer_size: int = 0
    digital_in_buffer_size: int = 0
    digital_out_buffer_size: int = 0


@dataclass
class EnumeratedDevice(Config):
    index: int = 0
    device_name: str = ""
    user_name: str = ""
    serial_number: str = ""
    is_opened: bool = False


_CONFIG_FIELDS = {
    "analog_in_channels": EnumConfigInfo.ANALOG_IN_CHANNEL_COUNT,
    "analog_out_channels": EnumConfigInfo.ANALOG_OUT_CHANNEL_COUNT,
    "analog_io_channels": EnumConfigInfo.ANALOG_IO_CHANNEL_COUNT,
    "digital_in_channels": EnumConfigInfo.DIGITAL_IN_CHANNEL_COUNT,
    "digital_out_channels": EnumConfigInfo.DIGITAL_OUT_CHANNEL_COUNT,
    "digital_io_channels": EnumConfigInfo.DIGITAL_IO_CHANNEL_COUNT,
    "analog_in_buffer_size": EnumConfigInfo.ANALOG_IN_BUFFER_SIZE,
    "analog_out_buffer_size": EnumConfigInfo.ANALOG_OUT_BUFFER_SIZE,
    "digital_in_buffer_size": EnumConfigInfo.DIGITAL_IN_BUFFER_SIZE,
    "digital_out_buffer_size": EnumConfigInfo.DIGITAL_OUT_BUFFER_SIZE,
}


def _query(getter, *args, default=None):
    # single capability fields are optional, a failed query keeps the default
    try:
        return getter(*args)
    except DriverError as e:
        logger.warning("%s failed: %s", getattr(getter, "__name__", getter), e)
        return default


class DeviceSession:
    """Holds the native handle and the information cached at open time.

    Args:
        driver: Driver backend all native calls go through.

    Attributes:
        handle: Native device handle, 0 while not connected.
        info: DeviceInfo of the open device, None while not connected.
        model: Device family detected at open time.
    """

    def __init__(self, driver: DwfDriver):
        self.driver = driver
        self.handle = 0
        self.info: DeviceInfo | None = None
        self.model = DeviceModel.UNKNOWN

    @property
    def is_open(self) -> bool:
        return self.handle != 0

    def require_handle(self) -> int:
        """Return the open handle.

        Raises:
            NotConnectedError: If no device is open.
        """
        if not self.handle:
            raise NotConnectedError("device not connected")
        return self.handle

    def map_dio_channel(self, channel: int) -> int:
        return self.model.map_dio_channel(channel)

    def enumerate_devices(self) -> list[EnumeratedDevice]:
        """List the connected devices. No devices is an empty list."""
        count = self.driver.enum(ENUM_FILTER_ALL)
        devices = []
        for index in range(count):
            devices.append(
                EnumeratedDevice(
                    index=index,
                    device_name=_query(self.driver.enum_device_name, index, default=""),
                    user_name=_query(self.driver.enum_user_name, index, default=""),
                    serial_number=_query(self.driver.enum_sn, index, default=""),
                    is_opened=_query(self.driver.enum_device_is_opened, index, default=False),
                )
            )
        logger.debug("Enumerated %d devices", len(devices))
        return devices

    def enumerate_configs(self, device_index: int = 0) -> list[DeviceConfig]:
        """List the configuration presets of an enumerated device."""
        self.driver.enum(ENUM_FILTER_ALL)
        count = self.driver.enum_config(device_index)
        configs = []
        for index in range(count):
            values = {
                name: _query(self.driver.enum_config_info, index, info, default=0)
                for name, info in _CONFIG_FIELDS.items()
            }
            configs.append(DeviceConfig(index=index, **values))
        return configs

    def open(self, device_name: str = "", config: int = 0) -> DeviceInfo:
        """Open the first matching device.

        Args:
            device_name: Human-readable device name, empty for any device.
            config: Configuration index to open the device with.

        Returns:
            The DeviceInfo of the opened device.

        Raises:
            NoDeviceFound: If the enumeration found no matching device.
            OpenFailed: If every matching device refused to open.
        """
        if self.handle:
            self.close()

        model = DeviceModel.from_name(device_name)
        count = self.driver.enum(model.device_id)
        if count <= 0:
            if device_name:
                raise NoDeviceFound(f"no {device_name} connected")
            raise NoDeviceFound("no connected devices found")

        handle = 0
        last_error = None
        for index in range(count):
            try:
                handle = self.driver.device_config_open(index, config)
            except DriverError as e:
                logger.debug("Device %d could not be opened: %s", index, e)
                last_error = e
                continue
            if handle:
                break
        if not handle:
            raise OpenFailed(str(last_error) if last_error else "failed to open device")

        self.handle = handle
        device_id, _ = _query(self.driver.enum_device_type, 0, default=(0, 0))
        self.model = DeviceModel.from_device_id(device_id)
        d = self.driver
        self.info = DeviceInfo(
            name=self.model.label or _query(d.enum_device_name, 0, default=device_name),
            serial_number=_query(d.enum_sn, 0, default=""),
            sdk_version=_query(d.get_version, default=""),
            analog_in_channels=_query(d.analog_in_channel_count, handle, default=0),
            analog_out_channels=_query(d.analog_out_count, handle, default=0),
            digital_in_channels=_query(d.digital_in_bits_info, handle, default=0),
            digital_out_channels=_query(d.digital_out_count, handle, default=0),
            max_analog_in_buffer_size=_query(d.analog_in_buffer_size_info, handle, default=0),
            adc_bits=_query(d.analog_in_bits_info, handle, default=0),
        )
        logger.info(
            "Opened %s (%s), model %s",
            self.info.name,
            self.info.serial_number,
            self.model.name,
        )
        return self.info

    def close(self):
        """Release the handle. Closing a closed session does nothing."""
        if not self.handle:
            return
        handle, self.handle = self.handle, 0
        self.info = None
        self.model = DeviceModel.UNKNOWN
        self.driver.device_close(handle)
        logger.info("Closed device handle %d", handle)

    def temperature(self) -> float:
        """Read the device temperature, 0 when the device has no sensor."""
        handle = self.require_handle()
        address = resolver.find_node(self, ["System"], "Temp")
        if address is None:
            return 0.0
        self.driver.analog_io_status(handle)
        return self.driver.analog_io_channel_node_status(handle, address.channel, address.node)
