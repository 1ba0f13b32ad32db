import pytest

from dwfkit.constants import DeviceModel
from dwfkit.device import DiscoveryDevice
from dwfkit.driver.mock import MockDwfDriver
from dwfkit.driver.mock_state import (
    SimulatedDevice,
    analog_discovery_2,
    digital_discovery,
)
from dwfkit.errors import DriverError, NoDeviceFound, NotConnectedError, OpenFailed


def test_open_populates_device_info():
    device = DiscoveryDevice(driver=MockDwfDriver())
    info = device.open()

    assert device.is_open
    assert info.name == "Analog Discovery 2"
    assert info.serial_number == "SN:210321ABCDEF"
    assert info.sdk_version == "3.20.1"
    assert info.analog_in_channels == 2
    assert info.analog_out_channels == 2
    assert info.digital_in_channels == 16
    assert info.digital_out_channels == 16
    assert info.max_analog_in_buffer_size == 8192
    assert info.adc_bits == 14
    assert device.session.model is DeviceModel.ANALOG_DISCOVERY_2


def test_open_by_name_filters_enumeration():
    driver = MockDwfDriver(devices=[analog_discovery_2(), digital_discovery()])
    device = DiscoveryDevice(driver=driver)
    info = device.open("Digital Discovery")

    assert driver.called("enum") == [(4,)]
    assert info.name == "Digital Discovery"
    assert device.session.model is DeviceModel.DIGITAL_DISCOVERY


def test_device_name_follows_detected_model():
    driver = MockDwfDriver(devices=[analog_discovery_2(name="AD2 bench unit")])
    info = DiscoveryDevice(driver=driver).open()
    assert info.name == "Analog Discovery 2"


def test_unknown_model_keeps_enumerated_name():
    driver = MockDwfDriver(devices=[SimulatedDevice(name="Prototype", device_id=99)])
    device = DiscoveryDevice(driver=driver)
    info = device.open()
    assert info.name == "Prototype"
    assert device.session.model is DeviceModel.UNKNOWN


def test_unknown_name_enumerates_everything():
    driver = MockDwfDriver()
    DiscoveryDevice(driver=driver).open("Some Other Box")
    assert driver.called("enum") == [(0,)]


def test_no_device_found_messages():
    device = DiscoveryDevice(driver=MockDwfDriver(devices=[]))
    with pytest.raises(NoDeviceFound, match="no connected devices found"):
        device.open()
    with pytest.raises(NoDeviceFound, match="no Analog Discovery 2 connected"):
        device.open("Analog Discovery 2")
    assert not device.is_open


def test_open_tries_next_device():
    busy = analog_discovery_2(openable=False)
    free = analog_discovery_2(serial_number="SN:SECOND")
    driver = MockDwfDriver(devices=[busy, free])
    device = DiscoveryDevice(driver=driver)
    device.open(config=2)

    assert device.is_open
    assert driver.called("device_config_open") == [(0, 2), (1, 2)]
    assert free.is_opened


def test_open_failed_when_every_device_refuses():
    driver = MockDwfDriver(devices=[analog_discovery_2(openable=False)])
    device = DiscoveryDevice(driver=driver)
    with pytest.raises(OpenFailed, match="busy"):
        device.open()
    assert not device.is_open


def test_reopen_closes_previous_handle():
    driver = MockDwfDriver()
    device = DiscoveryDevice(driver=driver)
    device.open()
    first = device.session.handle
    device.open()

    assert driver.called("device_close") == [(first,)]
    assert device.session.handle != first


def test_close_is_idempotent():
    driver = MockDwfDriver()
    device = DiscoveryDevice(driver=driver)
    device.close()
    device.open()
    device.close()
    device.close()

    assert len(driver.called("device_close")) == 1
    assert device.info is None
    assert device.session.model is DeviceModel.UNKNOWN


def test_context_manager_closes():
    driver = MockDwfDriver()
    with DiscoveryDevice(driver=driver) as device:
        device.open()
    assert not device.is_open
    assert len(driver.called("device_close")) == 1


def test_instruments_require_open_session():
    driver = MockDwfDriver()
    device = DiscoveryDevice(driver=driver)
    with pytest.raises(NotConnectedError):
        device.scope.open()
    with pytest.raises(NotConnectedError):
        device.i2c.scan()
    with pytest.raises(NotConnectedError):
        device.temperature()
    assert driver.calls == []


def test_temperature(device, driver):
    assert device.temperature() == pytest.approx(38.5)
    assert "analog_io_status" in driver.call_names()


def test_temperature_without_sensor_is_zero():
    driver = MockDwfDriver(devices=[SimulatedDevice(analog_io=[])])
    device = DiscoveryDevice(driver=driver)
    device.open()
    assert device.temperature() == 0.0
    assert "analog_io_status" not in driver.call_names()


def test_enumerate_devices():
    driver = MockDwfDriver(devices=[analog_discovery_2(), digital_discovery()])
    devices = DiscoveryDevice(driver=driver).enumerate()

    assert [d.index for d in devices] == [0, 1]
    assert [d.device_name for d in devices] == ["Analog Discovery 2", "Digital Discovery"]
    assert devices[1].serial_number == "SN:DD0000000001"
    assert not devices[0].is_opened


def test_enumerate_without_devices_is_empty():
    assert DiscoveryDevice(driver=MockDwfDriver(devices=[])).enumerate() == []


def test_enumerate_tolerates_field_failures():
    driver = MockDwfDriver()
    driver.fail_on("enum_sn", "serial unavailable")
    devices = DiscoveryDevice(driver=driver).enumerate()

    assert devices[0].serial_number == ""
    assert devices[0].device_name == "Analog Discovery 2"


def test_enumerate_configs_defaults():
    configs = DiscoveryDevice(driver=MockDwfDriver()).configs(0)

    assert len(configs) == 1
    assert configs[0].analog_in_channels == 2
    assert configs[0].analog_in_buffer_size == 8192
    assert configs[0].digital_in_buffer_size == 4096


def test_enumerate_configs_presets():
    simulated = analog_discovery_2(
        configs=[
            {"analog_in_buffer_size": 8192, "analog_out_buffer_size": 4096},
            {"analog_in_buffer_size": 16384, "analog_out_buffer_size": 1024},
        ]
    )
    configs = DiscoveryDevice(driver=MockDwfDriver(devices=[simulated])).configs(0)

    assert [c.index for c in configs] == [0, 1]
    assert [c.analog_in_buffer_size for c in configs] == [8192, 16384]
    assert configs[1].analog_out_buffer_size == 1024
    assert configs[1].digital_in_channels == 0


def test_driver_errors_carry_driver_message(device, driver):
    driver.fail_on("analog_in_reset", "Device not opened")
    with pytest.raises(DriverError) as excinfo:
        device.scope.close()
    assert str(excinfo.value) == "Device not opened"


def test_empty_driver_message():
    assert str(DriverError("")) == "unknown DWF error"


@pytest.mark.parametrize(
    "name, model",
    [
        ("Analog Discovery", DeviceModel.ANALOG_DISCOVERY),
        ("Analog Discovery 2", DeviceModel.ANALOG_DISCOVERY_2),
        ("Analog Discovery Studio", DeviceModel.ANALOG_DISCOVERY_2),
        ("Digital Discovery", DeviceModel.DIGITAL_DISCOVERY),
        ("Analog Discovery Pro 3X50", DeviceModel.ANALOG_DISCOVERY_PRO_3X50),
        ("Analog Discovery Pro 5250", DeviceModel.ANALOG_DISCOVERY_PRO_5250),
        ("", DeviceModel.UNKNOWN),
        ("Electronics Explorer", DeviceModel.UNKNOWN),
    ],
)
def test_device_model_from_name(name, model):
    assert DeviceModel.from_name(name) is model


def test_dio_channel_mapping():
    assert DeviceModel.DIGITAL_DISCOVERY.map_dio_channel(24) == 0
    assert DeviceModel.ANALOG_DISCOVERY_2.map_dio_channel(5) == 5
    assert DeviceModel.UNKNOWN.map_dio_channel(7) == 7
    assert DeviceModel.from_device_id(99) is DeviceModel.UNKNOWN
