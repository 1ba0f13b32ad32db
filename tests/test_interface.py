import pytest

from dwfkit.constants import WavegenFunc
from dwfkit.device import DiscoveryDevice
from dwfkit.errors import I2CNak, InvalidInput, NotConnectedError
from dwfkit.interface import InstrumentTools, decode_hex


@pytest.fixture
def tools(device):
    return InstrumentTools(device)


def test_operations_are_listed():
    operations = InstrumentTools.operations()
    assert len(operations) == 47
    assert operations == sorted(operations)
    for name in ("device_open", "scope_record", "i2c_scan", "static_set_current", "uart_write"):
        assert name in operations
    assert "call" not in operations
    assert "operations" not in operations


def test_unknown_operation(tools):
    with pytest.raises(InvalidInput, match="unknown operation: scope_explode"):
        tools.call("scope_explode", {})


def test_device_lifecycle():
    tools = InstrumentTools(DiscoveryDevice(config={"driver": "mock"}))

    listing = tools.call("device_enumerate")
    assert listing["count"] == 1
    assert listing["devices"][0]["device_name"] == "Analog Discovery 2"

    info = tools.call("device_open", {"device": "Analog Discovery 2"})
    assert info["name"] == "Analog Discovery 2"
    assert info["model"] == "ANALOG_DISCOVERY_2"
    assert info["max_analog_in_buffer_size"] == 8192

    assert tools.call("device_temperature") == {"temperature": pytest.approx(38.5)}
    assert tools.call("device_close") == {"closed": True}
    with pytest.raises(NotConnectedError):
        tools.call("device_temperature")


def test_device_get_configs(tools):
    result = tools.call("device_get_configs", {"device_index": 0})
    assert result["device_index"] == 0
    assert result["configs"][0]["analog_in_buffer_size"] == 8192


def test_parameter_validation(tools, driver):
    with pytest.raises(InvalidInput):
        tools.call("scope_open", {"sampling_frequency": "fast"})
    with pytest.raises(InvalidInput, match="SPI mode"):
        tools.call("spi_open", {"mode": 4})
    with pytest.raises(InvalidInput):
        tools.call("static_set_current", {})
    assert driver.calls == []


def test_numbers_are_coerced(tools, driver, handle):
    result = tools.call("scope_open", {"sampling_frequency": 1000000, "buffer_size": 512.0})
    assert result == {"sampling_frequency": 1e6, "buffer_size": 512}
    assert driver.called("analog_in_buffer_size_set") == [(handle, 512)]


def test_unknown_parameters_are_ignored(tools):
    result = tools.call("wavegen_generate", {"function": 30, "custom_data": [0, 1], "colour": "red"})
    assert result == {"channel": 1, "function": WavegenFunc.CUSTOM.name, "frequency": 1e3}


def test_scope_record(tools, ad2):
    ad2.analog_in_data[0] = [0.25]
    tools.call("scope_open", {"buffer_size": 4})
    result = tools.call("scope_record", {"channel": 1, "timeout": 1})
    assert result == {"channel": 1, "samples": 4, "data": [0.25] * 4}


def test_scope_trigger_result(tools):
    assert tools.call("scope_trigger", {"enable": True}) == {"enabled": False, "source": "NONE"}
    result = tools.call("scope_trigger", {"source": 2, "level": 0.5})
    assert result == {"enabled": True, "source": "DETECTOR_ANALOG_IN"}


def test_invalid_enum_value(tools):
    with pytest.raises(InvalidInput):
        tools.call("wavegen_generate", {"function": 99})
    with pytest.raises(InvalidInput):
        tools.call("dmm_measure", {"mode": 99})


def test_logic_and_pattern(tools, ad2):
    ad2.digital_in_data = [0b10, 0b00]
    tools.call("logic_open", {"buffer_size": 2})
    assert tools.call("logic_trigger", {"channel": 1}) == {"enabled": True, "channel": 1}
    assert tools.call("logic_record", {"channel": 1})["data"] == [1, 0]

    result = tools.call("pattern_generate", {"channel": 2, "frequency": 1e3, "data": [1, 0], "function": 1})
    assert result == {"channel": 2, "function": "CUSTOM", "frequency": 1e3}


def test_static_io(tools, ad2):
    assert tools.call("static_set_mode", {"channel": 5, "output": True}) == {"channel": 5, "mode": "output"}
    assert tools.call("static_set_state", {"channel": 5, "value": True})["level"] == "HIGH"
    assert tools.call("static_get_state", {"channel": 5}) == {"channel": 5, "state": True, "level": "HIGH"}
    assert ad2.dio_output == 1 << 5


def test_supplies_and_dmm(pro_device):
    tools = InstrumentTools(pro_device)
    result = tools.call("supplies_switch", {"master_state": True, "state": True, "voltage": 3.3})
    assert result == {"master_state": True, "rails": ["positive", "negative", "digital"]}

    assert tools.call("dmm_open") == {"channel": 3, "nodes": ["Enable", "Input", "Meas", "Mode", "Range"]}
    result = tools.call("dmm_measure", {"mode": 1, "range": 10})
    assert result == {"mode": "DC_VOLTAGE", "value": pytest.approx(3.3)}


def test_uart(tools, ad2):
    tools.call("uart_open", {"baud_rate": 115200})
    assert tools.call("uart_write", {"data": "AT\r\n"}) == {"bytes": 4}
    assert ad2.uart_tx_log == [b"AT\r\n"]

    ad2.uart_rx_queue.extend(b"OK")
    assert tools.call("uart_read") == {"bytes": 2, "data": "4f4b", "text": "OK"}


def test_spi(tools, ad2):
    ad2.spi_miso.extend(b"\xef\x40\x18")
    tools.call("spi_open", {"mode": 0})
    assert tools.call("spi_write", {"data": "9f"}) == {"cs": 0, "bytes": 1}
    assert tools.call("spi_exchange", {"data": "9f", "count": 3}) == {
        "cs": 0,
        "bytes": 3,
        "data": "ef4018",
    }
    assert tools.call("spi_read", {"count": 1, "cs": 1}) == {"cs": 1, "bytes": 1, "data": "ff"}


def test_i2c(tools, ad2):
    ad2.i2c_targets = {0x20, 0x50, 0x68}
    ad2.i2c_rx_data.extend(b"\x12\x34")
    tools.call("i2c_open")
    assert tools.call("i2c_scan") == {"count": 3, "addresses": ["0x20", "0x50", "0x68"]}
    assert tools.call("i2c_write", {"data": "0010", "address": 0x50}) == {"address": "0x50", "bytes": 2}
    assert tools.call("i2c_read", {"count": 2, "address": 0x50}) == {
        "address": "0x50",
        "bytes": 2,
        "data": "1234",
    }
    with pytest.raises(I2CNak):
        tools.call("i2c_exchange", {"data": "00", "count": 1, "address": 0x10})


def test_bad_hex(tools):
    with pytest.raises(InvalidInput, match="invalid hex data"):
        tools.call("i2c_write", {"data": "zz", "address": 0x50})


def test_decode_hex():
    assert decode_hex("") == b""
    assert decode_hex("de ad") == b"\xde\xad"


@pytest.mark.parametrize(
    "name",
    ["scope_close", "supplies_close", "logic_close", "pattern_close", "static_close", "uart_close", "spi_close", "i2c_close"],
)
def test_close_operations(tools, name):
    assert tools.call(name) == {"reset": True}


def test_wavegen_channel_operations(tools, driver, handle):
    assert tools.call("wavegen_enable", {"channel": 2}) == {"channel": 2, "enabled": True}
    assert tools.call("wavegen_disable") == {"channel": 1, "enabled": False}
    assert tools.call("wavegen_close") == {"channel": None, "reset": True}
    assert driver.called("analog_out_reset") == [(handle, -1)]


def test_operations_hold_the_device_lock(tools, device):
    acquired = []

    class RecordingLock:
        def __enter__(self):
            acquired.append(True)

        def __exit__(self, *exc):
            return False

    device.lock = RecordingLock()
    tools.call("device_temperature")
    assert acquired == [True]


def test_logic_record_line_out_of_range(tools, driver):
    with pytest.raises(InvalidInput, match="out of range"):
        tools.call("logic_record", {"channel": 16})
    assert driver.called("digital_in_configure") == []


@pytest.mark.parametrize("channel", [True, 1.7, "1"])
def test_integer_parameters_reject_other_types(tools, driver, channel):
    with pytest.raises(InvalidInput):
        tools.call("wavegen_enable", {"channel": channel})
    assert driver.calls == []


def test_integral_float_is_accepted_as_int(tools):
    assert tools.call("wavegen_enable", {"channel": 2.0}) == {"channel": 2, "enabled": True}
