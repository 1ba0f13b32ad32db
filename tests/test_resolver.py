from dwfkit import resolver
from dwfkit.resolver import NodeAddress


def test_channel_labels(device):
    assert resolver.channel_labels(device.session) == ["V+", "V-", "System"]


def test_find_channel_priority(pro_device):
    session = pro_device.session
    assert resolver.find_channel(session, ["V+", "p25V"]) == 0
    assert resolver.find_channel(session, ["p6V", "p25V"]) == 2
    assert resolver.find_channel(session, "DMM") == 3
    assert resolver.find_channel(session, ["VDD"]) is None


def test_unreadable_channel_name_is_skipped(device, driver):
    driver.fail_on("analog_io_channel_name", "bad channel", times=1)
    assert resolver.channel_labels(device.session) == ["", "V-", "System"]


def test_channel_nodes(pro_device):
    assert resolver.channel_nodes(pro_device.session, 3) == {
        "Enable": 0,
        "Mode": 1,
        "Range": 2,
        "Meas": 3,
        "Input": 4,
    }


def test_find_node(device, dd_device):
    assert resolver.find_node(device.session, ["V-"], "Voltage") == NodeAddress(1, 1)
    assert resolver.find_node(device.session, "System", "Temp") == NodeAddress(2, 0)
    assert resolver.find_node(dd_device.session, ["VDD"], "Drive") == NodeAddress(0, 2)


def test_find_node_absent(device):
    assert resolver.find_node(device.session, ["VDD"], "Drive") is None
    assert resolver.find_node(device.session, ["V+"], "Drive") is None


def test_unreadable_node_name_is_skipped(device, driver):
    driver.fail_on("analog_io_channel_node_name", "bad node", times=1)
    assert resolver.channel_nodes(device.session, 0) == {"Voltage": 1, "Current": 2}


def test_unreadable_channel_has_no_nodes(device, driver):
    driver.fail_on("analog_io_channel_info", "bad channel", times=1)
    assert resolver.channel_nodes(device.session, 0) == {}
    assert resolver.find_node(device.session, ["V+"], "Voltage") == NodeAddress(0, 1)
