import pytest

from dwfkit.config import I2CConfig
from dwfkit.errors import I2CBusLockup, I2CNak, InvalidInput


@pytest.fixture
def bus(ad2):
    ad2.i2c_targets = {0x20, 0x50, 0x68}
    return ad2


def test_open(device, driver, handle):
    device.i2c.open(I2CConfig(sda=2, scl=3, clock_rate=400e3, stretching=True))

    assert driver.calls == [
        ("digital_i2c_reset", handle),
        ("digital_i2c_stretch_set", handle, True),
        ("digital_i2c_rate_set", handle, 400e3),
        ("digital_i2c_scl_set", handle, 3),
        ("digital_i2c_sda_set", handle, 2),
        ("digital_i2c_clear", handle),
        ("digital_i2c_write", handle, 0, b""),
    ]


def test_open_bus_lockup(device, driver, ad2):
    ad2.i2c_bus_free = False
    with pytest.raises(I2CBusLockup, match="I2C bus lockup"):
        device.i2c.open()
    assert driver.called("digital_i2c_write") == []


def test_scan(device, driver, bus):
    assert device.i2c.scan() == [0x20, 0x50, 0x68]
    probes = driver.called("digital_i2c_write")
    assert len(probes) == 0x77 - 0x08 + 1
    assert probes[0][1] == 0x08 << 1
    assert probes[-1][1] == 0x77 << 1


def test_scan_empty_bus(device):
    assert device.i2c.scan() == []


def test_read(device, driver, handle, bus):
    bus.i2c_rx_data.extend(b"\x12\x34")
    assert device.i2c.read(2, 0x50) == b"\x12\x34"
    assert driver.called("digital_i2c_read") == [(handle, 0xA0, 2)]


def test_write(device, bus):
    device.i2c.write(b"\x00\x10", 0x68)
    assert bus.i2c_log == [("write", 0xD0, b"\x00\x10")]


def test_exchange(device, driver, handle, bus):
    bus.i2c_rx_data.extend(b"\x5a")
    assert device.i2c.exchange(b"\x75", 1, 0x68) == b"\x5a"
    assert driver.called("digital_i2c_write_read") == [(handle, 0xD0, b"\x75", 1)]


def test_nak_on_address(device, bus):
    with pytest.raises(I2CNak, match="index 1") as excinfo:
        device.i2c.write(b"\x01", 0x30)
    assert excinfo.value.index == 1


def test_nak_on_data_byte(device, bus):
    bus.i2c_nak_index = 3
    with pytest.raises(I2CNak) as excinfo:
        device.i2c.exchange(b"\x01\x02", 2, 0x20)
    assert excinfo.value.index == 3
    assert excinfo.value.data == b""


@pytest.mark.parametrize("address", [-1, 0x80, 0x1FF])
def test_address_must_be_7_bit(device, driver, address):
    with pytest.raises(InvalidInput):
        device.i2c.read(1, address)
    assert driver.calls == []


def test_close(device, driver, handle):
    device.i2c.close()
    assert driver.calls == [("digital_i2c_reset", handle)]
