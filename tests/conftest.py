import pytest

from dwfkit.device import DiscoveryDevice
from dwfkit.driver.mock import MockDwfDriver
from dwfkit.driver.mock_state import (
    analog_discovery_2,
    analog_discovery_pro_5250,
    digital_discovery,
)


def _open_device(*simulated):
    """Return an opened DiscoveryDevice over the given simulated devices.

    The call log is cleared after opening so tests only see their own calls.
    """
    driver = MockDwfDriver(devices=list(simulated))
    device = DiscoveryDevice(driver=driver)
    device.open()
    driver.calls.clear()
    return device


@pytest.fixture
def ad2():
    return analog_discovery_2()


@pytest.fixture
def device(ad2):
    return _open_device(ad2)


@pytest.fixture
def driver(device):
    return device.driver


@pytest.fixture
def handle(device):
    return device.session.handle


@pytest.fixture
def adp5250():
    return analog_discovery_pro_5250()


@pytest.fixture
def pro_device(adp5250):
    return _open_device(adp5250)


@pytest.fixture
def dd():
    return digital_discovery()


@pytest.fixture
def dd_device(dd):
    return _open_device(dd)


@pytest.fixture
def open_device():
    return _open_device
