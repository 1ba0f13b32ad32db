import numpy as np
import pytest
from hypothesis import given
import hypothesis.strategies as hst

from dwfkit.config import LogicConfig, LogicTriggerConfig
from dwfkit.constants import AcquisitionState, EngineState, TriggerSource
from dwfkit.errors import InvalidInput
from dwfkit.instruments.logic import clock_divider, extract_line, split_prefill


@given(hst.integers(1, 10**9), hst.integers(1, 10**9))
def test_clock_divider_is_floor(clock, frequency):
    assert clock_divider(clock, frequency) == clock // frequency


def test_clock_divider_rejects_non_positive():
    with pytest.raises(InvalidInput):
        clock_divider(100e6, 0)


@given(hst.integers(-10**6, 10**6), hst.integers(0, 10**5))
def test_split_prefill(position, buffer_size):
    prefill, remaining = split_prefill(position, buffer_size)
    assert 0 <= prefill <= buffer_size
    assert prefill + remaining == buffer_size
    if 0 <= position <= buffer_size:
        assert prefill == position


def test_extract_line():
    assert extract_line(np.array([0b1010]), 1).tolist() == [1]
    assert extract_line(np.array([0b1010]), 0).tolist() == [0]
    assert extract_line(np.array([0x8000, 0x7FFF]), 15).tolist() == [1, 0]


def test_open(device, driver, handle):
    size = device.logic.open(LogicConfig(sampling_frequency=30e6, buffer_size=100))

    assert size == 100
    assert driver.calls == [
        ("digital_in_buffer_size_info", handle),
        ("digital_in_internal_clock_info", handle),
        ("digital_in_divider_set", handle, 3),
        ("digital_in_sample_format_set", handle, 16),
        ("digital_in_buffer_size_set", handle, 100),
    ]
    assert device.logic.state is EngineState.CONFIGURED


def test_open_clamps_buffer(device):
    assert device.logic.open(LogicConfig(buffer_size=0)) == 4096
    assert device.logic.open(LogicConfig(buffer_size=5000)) == 4096


def test_trigger_disabled(device, driver, handle):
    device.logic.set_trigger(LogicTriggerConfig(enable=False))
    assert driver.calls == [("digital_in_trigger_source_set", handle, TriggerSource.NONE)]


def test_trigger_rising_edge(device, driver, handle):
    device.logic.open(LogicConfig(buffer_size=1000))
    driver.calls.clear()
    device.logic.set_trigger(LogicTriggerConfig(channel=3, position=200, timeout=1.0, count=2))

    assert driver.calls == [
        ("digital_in_trigger_source_set", handle, TriggerSource.DETECTOR_DIGITAL_IN),
        ("digital_in_trigger_position_set", handle, 800),
        ("digital_in_trigger_prefill_set", handle, 200),
        ("digital_in_trigger_set", handle, 0, 0b1000, 0, 0),
        ("digital_in_trigger_reset_set", handle, 0, 0, 0b1000, 0),
        ("digital_in_trigger_auto_timeout_set", handle, 1.0),
        ("digital_in_trigger_length_set", handle, 0.0, 20.0, 0),
        ("digital_in_trigger_count_set", handle, 2, 0),
    ]
    assert device.logic.state is EngineState.TRIGGERED


def test_trigger_falling_edge_and_prefill_clamp(device, driver, handle):
    device.logic.open(LogicConfig(buffer_size=1000))
    driver.calls.clear()
    device.logic.set_trigger(LogicTriggerConfig(channel=0, position=5000, rising_edge=False))

    assert driver.called("digital_in_trigger_position_set") == [(handle, 0)]
    assert driver.called("digital_in_trigger_prefill_set") == [(handle, 1000)]
    assert driver.called("digital_in_trigger_set") == [(handle, 1, 0, 0, 0)]
    assert driver.called("digital_in_trigger_reset_set") == [(handle, 0, 0, 0, 1)]


def test_record(device, driver, handle, ad2):
    ad2.digital_in_states = [AcquisitionState.PREFILL]
    ad2.digital_in_data = np.array([0b0000, 0b0010, 0b0011, 0b1010], dtype=np.uint16)
    device.logic.open(LogicConfig(buffer_size=4))
    driver.calls.clear()

    data = device.logic.record(1)

    assert data.tolist() == [0, 1, 1, 1]
    assert driver.called("digital_in_configure") == [(handle, False, True)]
    assert driver.called("digital_in_status_data") == [(handle, 4)]
    assert device.logic.state is EngineState.DONE


def test_close(device, driver, handle):
    device.logic.close()
    assert driver.calls == [("digital_in_reset", handle)]
    assert device.logic.state is EngineState.IDLE


@pytest.mark.parametrize("channel", [16, -1])
def test_record_rejects_line_outside_sample_word(device, driver, channel):
    with pytest.raises(InvalidInput, match="out of range"):
        device.logic.record(channel)
    assert driver.calls == []


@pytest.mark.parametrize("channel", [16, -1])
def test_trigger_rejects_line_outside_sample_word(device, driver, channel):
    with pytest.raises(InvalidInput, match="out of range"):
        device.logic.set_trigger(LogicTriggerConfig(channel=channel))
    assert driver.calls == []


def test_disabled_trigger_ignores_channel(device, driver, handle):
    device.logic.set_trigger(LogicTriggerConfig(enable=False, channel=99))
    assert driver.calls == [("digital_in_trigger_source_set", handle, TriggerSource.NONE)]


def test_open_rejects_frequency_above_clock(device, driver):
    with pytest.raises(InvalidInput, match="exceeds"):
        device.logic.open(LogicConfig(sampling_frequency=500e6))
    assert driver.called("digital_in_divider_set") == []
    assert driver.called("digital_in_buffer_size_set") == []
