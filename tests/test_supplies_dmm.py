import pytest

from dwfkit.config import SuppliesConfig
from dwfkit.constants import DMMMode
from dwfkit.driver.mock_state import SimulatedChannel, SimulatedNode, analog_discovery_pro_5250
from dwfkit.errors import DriverError, InstrumentUnavailable, MeasurementNodeMissing


def test_switch_ad2_rails(device, driver, handle, ad2):
    rails = device.supplies.switch(
        SuppliesConfig(
            master_state=True,
            positive_state=True,
            positive_voltage=3.3,
            positive_current=0.5,
            negative_state=True,
            negative_voltage=-3.3,
            negative_current=0.2,
        )
    )

    assert rails == ["positive", "negative"]
    assert driver.called("analog_io_channel_node_set") == [
        (handle, 0, 0, 1.0),
        (handle, 0, 1, 3.3),
        (handle, 0, 2, 0.5),
        (handle, 1, 0, 1.0),
        (handle, 1, 1, -3.3),
        (handle, 1, 2, 0.2),
    ]
    assert driver.calls[-1] == ("analog_io_enable_set", handle, True)
    assert ad2.channel("V+").node("Voltage").value == 3.3


def test_switch_pro_programs_digital_rail(pro_device, adp5250):
    rails = pro_device.supplies.switch(SuppliesConfig(state=True, voltage=5.0, current=1.0))

    assert rails == ["positive", "negative", "digital"]
    rail = adp5250.channel("p6V")
    assert rail.node("Enable").value == 1.0
    assert rail.node("Voltage").value == 5.0
    assert rail.node("Current").value == 1.0


def test_switch_without_rails_still_sets_master(dd_device):
    driver = dd_device.driver
    rails = dd_device.supplies.switch(SuppliesConfig(master_state=False, state=True, voltage=1.8))

    assert rails == ["digital"]
    assert driver.called("analog_io_enable_set") == [(dd_device.session.handle, False)]


def test_switch_node_failure_propagates(device, driver):
    driver.fail_on("analog_io_channel_node_set", "node write failed")
    with pytest.raises(DriverError, match="node write failed"):
        device.supplies.switch(SuppliesConfig(master_state=True))
    assert driver.called("analog_io_enable_set") == []


def test_switch_skips_unreadable_node(device, driver, handle):
    driver.fail_on("analog_io_channel_node_name", "bad node", times=1)
    rails = device.supplies.switch(SuppliesConfig(positive_state=True, positive_voltage=5.0))

    assert rails == ["positive", "negative"]
    assert driver.called("analog_io_channel_node_set")[:2] == [
        (handle, 0, 1, 5.0),
        (handle, 0, 2, 0.0),
    ]


def test_supplies_close(device, driver, handle):
    device.supplies.close()
    assert driver.calls == [("analog_io_reset", handle)]


def test_dmm_absent(device, driver):
    with pytest.raises(InstrumentUnavailable, match="DMM not available"):
        device.dmm.open()
    assert driver.called("analog_io_channel_node_set") == []
    assert device.dmm.channel is None


def test_dmm_measure_before_open(pro_device):
    with pytest.raises(InstrumentUnavailable, match="DMM is not open"):
        pro_device.dmm.measure()


def test_dmm_open_and_measure(pro_device, adp5250):
    driver = pro_device.driver
    handle = pro_device.session.handle
    pro_device.dmm.open()

    assert pro_device.dmm.channel == 3
    assert driver.called("analog_io_channel_node_set") == [(handle, 3, 0, 1)]

    driver.calls.clear()
    value = pro_device.dmm.measure(DMMMode.RESISTANCE, 10.0, high_impedance=True)

    assert value == pytest.approx(3.3)
    assert driver.calls == [
        ("analog_io_channel_node_set", handle, 3, 4, 1),
        ("analog_io_channel_node_set", handle, 3, 1, int(DMMMode.RESISTANCE)),
        ("analog_io_channel_node_set", handle, 3, 2, 10.0),
        ("analog_io_status", handle),
        ("analog_io_channel_node_status", handle, 3, 3),
    ]


def test_dmm_without_measurement_node(open_device):
    simulated = analog_discovery_pro_5250()
    simulated.analog_io[3] = SimulatedChannel(
        "Digital Multimeter", "DMM", [SimulatedNode("Enable"), SimulatedNode("Mode")]
    )
    device = open_device(simulated)
    device.dmm.open()
    with pytest.raises(MeasurementNodeMissing):
        device.dmm.measure()


def test_dmm_close(pro_device, adp5250):
    driver = pro_device.driver
    handle = pro_device.session.handle
    pro_device.dmm.open()
    driver.calls.clear()
    pro_device.dmm.close()

    assert driver.calls == [
        ("analog_io_channel_node_set", handle, 3, 0, 0),
        ("analog_io_reset", handle),
    ]
    assert pro_device.dmm.channel is None
    assert adp5250.channel("DMM").node("Enable").value == 0


def test_dmm_close_resets_after_failure(pro_device):
    driver = pro_device.driver
    handle = pro_device.session.handle
    pro_device.dmm.open()
    driver.fail_on("analog_io_channel_node_set", "disable failed")
    with pytest.raises(DriverError):
        pro_device.dmm.close()
    assert driver.called("analog_io_reset") == [(handle,)]
