import pytest

from dwfkit.config import SPIConfig
from dwfkit.constants import DigitalOutIdle
from dwfkit.errors import DriverError


def test_open(device, driver, handle):
    device.spi.open(SPIConfig(cs=4, sck=5, miso=6, mosi=7, clock_frequency=2e6, mode=3, msb_first=False))

    assert driver.calls == [
        ("digital_spi_frequency_set", handle, 2e6),
        ("digital_spi_clock_set", handle, 5),
        ("digital_spi_data_set", handle, 0, 7),
        ("digital_spi_idle_set", handle, 0, DigitalOutIdle.ZET),
        ("digital_spi_data_set", handle, 1, 6),
        ("digital_spi_idle_set", handle, 1, DigitalOutIdle.ZET),
        ("digital_spi_mode_set", handle, 3),
        ("digital_spi_order_set", handle, 0),
        ("digital_spi_select", handle, 4, 1),
        ("digital_spi_write_one", handle, 1, 0, 0),
    ]


def test_open_without_data_lines(device, driver):
    device.spi.open()
    assert driver.called("digital_spi_data_set") == []
    assert driver.called("digital_spi_order_set")[0][1] == 1


def test_read(device, driver, handle, ad2):
    ad2.spi_miso.extend(b"\x9f\x01")
    assert device.spi.read(3, cs=2) == b"\x9f\x01\xff"
    assert driver.calls == [
        ("digital_spi_select", handle, 2, 0),
        ("digital_spi_read", handle, 1, 8, 3),
        ("digital_spi_select", handle, 2, 1),
    ]


def test_write(device, driver, handle, ad2):
    device.spi.write(b"\x06")
    assert driver.calls == [
        ("digital_spi_select", handle, 0, 0),
        ("digital_spi_write", handle, 1, 8, b"\x06"),
        ("digital_spi_select", handle, 0, 1),
    ]
    assert ad2.spi_log == [("write", b"\x06")]


def test_write_failure_still_deselects(device, driver, handle):
    driver.fail_on("digital_spi_write", "spi write failed")
    with pytest.raises(DriverError, match="spi write failed"):
        device.spi.write(b"\x00\x01", cs=1)
    assert driver.called("digital_spi_select") == [(handle, 1, 0), (handle, 1, 1)]


def test_exchange(device, driver, handle, ad2):
    ad2.spi_miso.extend(b"\xef\x40")
    assert device.spi.exchange(b"\x9f", 2) == b"\xef\x40"
    assert driver.called("digital_spi_write_read") == [(handle, 1, 8, b"\x9f", 2)]
    assert ad2.spi_log == [("write", b"\x9f"), ("read", b"\xef\x40")]
    assert driver.calls[-1] == ("digital_spi_select", handle, 0, 1)


def test_close(device, driver, handle):
    device.spi.close()
    assert driver.calls == [("digital_spi_reset", handle)]
