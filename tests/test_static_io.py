import pytest
from hypothesis import given
import hypothesis.strategies as hst

from dwfkit.constants import PullDirection
from dwfkit.errors import FeatureNotImplemented, InvalidInput, NodeNotFound
from dwfkit.instruments.static_io import apply_line, rotate_left


@given(hst.integers(0, 2**16 - 1), hst.integers(0, 15), hst.booleans())
def test_apply_line_changes_one_bit(register, line, state):
    result = apply_line(register, line, 16, state)
    assert bool(result & (1 << line)) == state
    assert (result ^ register) & ~(1 << line) == 0


@given(hst.integers(0, 2**32 - 1), hst.integers(0, 15), hst.booleans())
def test_apply_line_keeps_bits_above_width(register, line, state):
    result = apply_line(register, line, 16, state)
    assert result >> 16 == register >> 16


@given(hst.integers(0, 2**16 - 1), hst.integers(0, 64))
def test_rotate_left_preserves_bits(value, shift):
    rotated = rotate_left(value, shift, 16)
    assert bin(rotated).count("1") == bin(value).count("1")
    assert rotate_left(rotated, 16 - shift % 16, 16) == value


def test_rotate_left_wraps():
    assert rotate_left(0x8001, 1, 16) == 0x0003
    assert rotate_left(1, 15, 16) == 0x8000


def test_set_mode_and_state(device, driver, handle, ad2):
    ad2.dio_output_enable = 0b0001
    device.static.set_mode(3, True)
    device.static.set_mode(0, False)
    device.static.set_state(3, True)

    assert ad2.dio_output_enable == 0b1000
    assert ad2.dio_output == 0b1000
    assert driver.called("digital_io_output_enable_set") == [(handle, 0b1001), (handle, 0b1000)]
    assert device.static.get_state(3) is True
    assert device.static.get_state(2) is False


def test_get_state_reads_inputs(device, ad2):
    ad2.dio_input = 0b100
    assert device.static.get_state(2) is True
    assert device.static.get_state(1) is False


def test_set_state_clears_only_one_line(device, ad2):
    ad2.dio_output = 0xFFFF
    device.static.set_state(7, False)
    assert ad2.dio_output == 0xFF7F


def test_digital_discovery_line_offset(dd_device, dd):
    dd_device.static.set_mode(24, True)
    dd_device.static.set_state(24, True)
    assert dd.dio_output_enable == 1
    assert dd.dio_output == 1


@pytest.mark.parametrize("channel", [-1, 16, 40])
def test_out_of_range_line(device, driver, channel):
    with pytest.raises(InvalidInput):
        device.static.set_state(channel, True)
    assert driver.calls == []


def test_line_below_digital_discovery_offset(dd_device):
    with pytest.raises(InvalidInput):
        dd_device.static.set_mode(3, True)


def test_set_current(dd_device, dd):
    dd_device.static.set_current(0.016)
    assert dd.channel("VDD").node("Drive").value == 0.016


def test_set_current_without_drive_node(device):
    with pytest.raises(NodeNotFound, match="drive current node not found"):
        device.static.set_current(0.01)


def test_set_pull_not_implemented(device):
    with pytest.raises(FeatureNotImplemented):
        device.static.set_pull(0, PullDirection.UP)
    with pytest.raises(NotImplementedError):
        device.static.set_pull(0, PullDirection.DOWN)


def test_close(device, driver, handle, ad2):
    ad2.dio_output_enable = 0xFF
    device.static.close()
    assert driver.calls == [("digital_io_reset", handle)]
    assert ad2.dio_output_enable == 0
