"""WaveForms driver backed by the native ``dwf`` shared library via ctypes."""

import ctypes
import logging
import os
import sys
from ctypes import (
    POINTER,
    byref,
    c_char,
    c_double,
    c_int,
    c_ubyte,
    c_uint,
    c_void_p,
    create_string_buffer,
)
from ctypes.util import find_library

import numpy as np

from dwfkit.driver.base import DwfDriver
from dwfkit.driver.registry import DriverRegistry
from dwfkit.errors import DriverError, FeatureNotImplemented

logger = logging.getLogger(__name__)

LIBRARY_ENV_VAR = "DWFKIT_DWF_LIB"

_H = c_int
_PI = POINTER(c_int)
_PU = POINTER(c_uint)
_PD = POINTER(c_double)
_PC = POINTER(c_char)
_PB = POINTER(c_ubyte)

# Native argument types, keyed by function name. Every function returns BOOL.
_SIGNATURES = {
    "FDwfGetLastErrorMsg": [_PC],
    "FDwfGetVersion": [_PC],
    "FDwfEnum": [c_int, _PI],
    "FDwfEnumDeviceType": [c_int, _PI, _PI],
    "FDwfEnumDeviceName": [c_int, _PC],
    "FDwfEnumUserName": [c_int, _PC],
    "FDwfEnumSN": [c_int, _PC],
    "FDwfEnumDeviceIsOpened": [c_int, _PI],
    "FDwfEnumConfig": [c_int, _PI],
    "FDwfEnumConfigInfo": [c_int, c_int, _PI],
    "FDwfDeviceConfigOpen": [c_int, c_int, _PI],
    "FDwfDeviceClose": [_H],
    "FDwfAnalogInChannelCount": [_H, _PI],
    "FDwfAnalogInBufferSizeInfo": [_H, _PI, _PI],
    "FDwfAnalogInBitsInfo": [_H, _PI],
    "FDwfAnalogInChannelEnableSet": [_H, c_int, c_int],
    "FDwfAnalogInChannelOffsetSet": [_H, c_int, c_double],
    "FDwfAnalogInChannelRangeSet": [_H, c_int, c_double],
    "FDwfAnalogInChannelFilterSet": [_H, c_int, c_int],
    "FDwfAnalogInBufferSizeSet": [_H, c_int],
    "FDwfAnalogInFrequencySet": [_H, c_double],
    "FDwfAnalogInConfigure": [_H, c_int, c_int],
    "FDwfAnalogInStatus": [_H, c_int, _PB],
    "FDwfAnalogInStatusSample": [_H, c_int, _PD],
    "FDwfAnalogInStatusData": [_H, c_int, _PD, c_int],
    "FDwfAnalogInReset": [_H],
    "FDwfAnalogInTriggerAutoTimeoutSet": [_H, c_double],
    "FDwfAnalogInTriggerSourceSet": [_H, c_ubyte],
    "FDwfAnalogInTriggerChannelSet": [_H, c_int],
    "FDwfAnalogInTriggerTypeSet": [_H, c_int],
    "FDwfAnalogInTriggerLevelSet": [_H, c_double],
    "FDwfAnalogInTriggerConditionSet": [_H, c_int],
    "FDwfAnalogOutCount": [_H, _PI],
    "FDwfAnalogOutNodeEnableSet": [_H, c_int, c_int, c_int],
    "FDwfAnalogOutNodeFunctionSet": [_H, c_int, c_int, c_ubyte],
    "FDwfAnalogOutNodeDataSet": [_H, c_int, c_int, _PD, c_int],
    "FDwfAnalogOutNodeFrequencySet": [_H, c_int, c_int, c_double],
    "FDwfAnalogOutNodeAmplitudeSet": [_H, c_int, c_int, c_double],
    "FDwfAnalogOutNodeOffsetSet": [_H, c_int, c_int, c_double],
    "FDwfAnalogOutNodeSymmetrySet": [_H, c_int, c_int, c_double],
    "FDwfAnalogOutRunSet": [_H, c_int, c_double],
    "FDwfAnalogOutWaitSet": [_H, c_int, c_double],
    "FDwfAnalogOutRepeatSet": [_H, c_int, c_int],
    "FDwfAnalogOutConfigure": [_H, c_int, c_int],
    "FDwfAnalogOutReset": [_H, c_int],
    "FDwfAnalogIOChannelCount": [_H, _PI],
    "FDwfAnalogIOChannelName": [_H, c_int, _PC, _PC],
    "FDwfAnalogIOChannelInfo": [_H, c_int, _PI],
    "FDwfAnalogIOChannelNodeName": [_H, c_int, c_int, _PC, _PC],
    "FDwfAnalogIOChannelNodeSet": [_H, c_int, c_int, c_double],
    "FDwfAnalogIOChannelNodeGet": [_H, c_int, c_int, _PD],
    "FDwfAnalogIOChannelNodeStatus": [_H, c_int, c_int, _PD],
    "FDwfAnalogIOStatus": [_H],
    "FDwfAnalogIOEnableSet": [_H, c_int],
    "FDwfAnalogIOReset": [_H],
    "FDwfDigitalInBitsInfo": [_H, _PI],
    "FDwfDigitalInBufferSizeInfo": [_H, _PI],
    "FDwfDigitalInInternalClockInfo": [_H, _PD],
    "FDwfDigitalInDividerSet": [_H, c_uint],
    "FDwfDigitalInSampleFormatSet": [_H, c_int],
    "FDwfDigitalInBufferSizeSet": [_H, c_int],
    "FDwfDigitalInConfigure": [_H, c_int, c_int],
    "FDwfDigitalInStatus": [_H, c_int, _PB],
    "FDwfDigitalInStatusData": [_H, c_void_p, c_int],
    "FDwfDigitalInReset": [_H],
    "FDwfDigitalInTriggerSourceSet": [_H, c_ubyte],
    "FDwfDigitalInTriggerPositionSet": [_H, c_uint],
    "FDwfDigitalInTriggerPrefillSet": [_H, c_uint],
    "FDwfDigitalInTriggerSet": [_H, c_uint, c_uint, c_uint, c_uint],
    "FDwfDigitalInTriggerResetSet": [_H, c_uint, c_uint, c_uint, c_uint],
    "FDwfDigitalInTriggerAutoTimeoutSet": [_H, c_double],
    "FDwfDigitalInTriggerLengthSet": [_H, c_double, c_double, c_int],
    "FDwfDigitalInTriggerCountSet": [_H, c_int, c_int],
    "FDwfDigitalOutCount": [_H, _PI],
    "FDwfDigitalOutInternalClockInfo": [_H, _PD],
    "FDwfDigitalOutEnableSet": [_H, c_int, c_int],
    "FDwfDigitalOutTypeSet": [_H, c_int, c_int],
    "FDwfDigitalOutDividerSet": [_H, c_int, c_uint],
    "FDwfDigitalOutIdleSet": [_H, c_int, c_int],
    "FDwfDigitalOutCounterSet": [_H, c_int, c_uint, c_uint],
    "FDwfDigitalOutDataSet": [_H, c_int, c_void_p, c_uint],
    "FDwfDigitalOutRunSet": [_H, c_double],
    "FDwfDigitalOutWaitSet": [_H, c_double],
    "FDwfDigitalOutRepeatSet": [_H, c_uint],
    "FDwfDigitalOutRepeatTriggerSet": [_H, c_int],
    "FDwfDigitalOutTriggerSourceSet": [_H, c_ubyte],
    "FDwfDigitalOutTriggerSlopeSet": [_H, c_int],
    "FDwfDigitalOutConfigure": [_H, c_int],
    "FDwfDigitalOutReset": [_H],
    "FDwfDigitalIOOutputEnableGet": [_H, _PU],
    "FDwfDigitalIOOutputEnableSet": [_H, c_uint],
    "FDwfDigitalIOOutputGet": [_H, _PU],
    "FDwfDigitalIOOutputSet": [_H, c_uint],
    "FDwfDigitalIOStatus": [_H],
    "FDwfDigitalIOInputStatus": [_H, _PU],
    "FDwfDigitalIOReset": [_H],
    "FDwfDigitalUartRateSet": [_H, c_double],
    "FDwfDigitalUartTxSet": [_H, c_int],
    "FDwfDigitalUartRxSet": [_H, c_int],
    "FDwfDigitalUartBitsSet": [_H, c_int],
    "FDwfDigitalUartParitySet": [_H, c_int],
    "FDwfDigitalUartStopSet": [_H, c_double],
    "FDwfDigitalUartTx": [_H, _PC, c_int],
    "FDwfDigitalUartRx": [_H, _PC, c_int, _PI, _PI],
    "FDwfDigitalUartReset": [_H],
    "FDwfDigitalSpiFrequencySet": [_H, c_double],
    "FDwfDigitalSpiClockSet": [_H, c_int],
    "FDwfDigitalSpiDataSet": [_H, c_int, c_int],
    "FDwfDigitalSpiIdleSet": [_H, c_int, c_int],
    "FDwfDigitalSpiModeSet": [_H, c_int],
    "FDwfDigitalSpiOrderSet": [_H, c_int],
    "FDwfDigitalSpiSelect": [_H, c_int, c_int],
    "FDwfDigitalSpiWriteOne": [_H, c_int, c_int, c_uint],
    "FDwfDigitalSpiRead": [_H, c_int, c_int, _PB, c_int],
    "FDwfDigitalSpiWrite": [_H, c_int, c_int, _PB, c_int],
    "FDwfDigitalSpiWriteRead": [_H, c_int, c_int, _PB, c_int, _PB, c_int],
    "FDwfDigitalSpiReset": [_H],
    "FDwfDigitalI2cReset": [_H],
    "FDwfDigitalI2cStretchSet": [_H, c_int],
    "FDwfDigitalI2cRateSet": [_H, c_double],
    "FDwfDigitalI2cSclSet": [_H, c_int],
    "FDwfDigitalI2cSdaSet": [_H, c_int],
    "FDwfDigitalI2cClear": [_H, _PI],
    "FDwfDigitalI2cWrite": [_H, c_ubyte, _PB, c_int, _PI],
    "FDwfDigitalI2cRead": [_H, c_ubyte, _PB, c_int, _PI],
    "FDwfDigitalI2cWriteRead": [_H, c_ubyte, _PB, c_int, _PB, c_int, _PI],
}


def library_candidates(explicit: str = "") -> list[str]:
    """Return the library paths to try, most specific first."""
    candidates = [explicit, os.environ.get(LIBRARY_ENV_VAR, "").strip()]
    if sys.platform.startswith("win"):
        candidates += ["dwf.dll"]
    elif sys.platform == "darwin":
        candidates += [
            "/Library/Frameworks/dwf.framework/dwf",
            find_library("dwf"),
            "/usr/local/lib/libdwf.dylib",
            "libdwf.dylib",
        ]
    else:
        candidates += [find_library("dwf"), "libdwf.so"]
    return [c for c in candidates if c]


def load_library(explicit: str = ""):
    """Load the native library from the first candidate that works.

    Raises:
        DriverError: If no candidate could be loaded.
    """
    tried = library_candidates(explicit)
    for path in tried:
        try:
            lib = ctypes.cdll.LoadLibrary(path)
        except OSError as e:
            logger.debug("Failed DWF runtime candidate %s: %s", path, e)
            continue
        logger.info("Loaded DWF runtime: %s", path)
        return lib
    raise DriverError(f"DWF runtime library not found (tried: {', '.join(tried)})")


def _bytes(data: bytes):
    return (c_ubyte * len(data)).from_buffer_copy(bytes(data))


@DriverRegistry.register_driver("dwf")
class CtypesDwfDriver(DwfDriver):
    """Driver calling into the installed WaveForms runtime.

    Args:
        config: Configuration dictionary. The optional ``library`` key
            overrides the library location.
        library: Already loaded library object, mainly for tests.
    """

    def __init__(self, config: dict | None = None, library=None, **kwargs):
        config = config or {}
        self._lib = library if library is not None else load_library(config.get("library", ""))
        self._functions = {}
        for name, argtypes in _SIGNATURES.items():
            try:
                function = getattr(self._lib, name)
            except AttributeError:
                logger.debug("DWF runtime does not export %s", name)
                continue
            function.argtypes = argtypes
            function.restype = c_int
            self._functions[name] = function

    def _call(self, name: str, *args):
        function = self._functions.get(name)
        if function is None:
            raise FeatureNotImplemented(f"{name} is not available in the loaded DWF runtime")
        if not function(*args):
            raise DriverError(self.get_last_error_msg())

    def _get_int(self, name, *args) -> int:
        value = c_int()
        self._call(name, *args, byref(value))
        return value.value

    def _get_uint(self, name, *args) -> int:
        value = c_uint()
        self._call(name, *args, byref(value))
        return value.value

    def _get_double(self, name, *args) -> float:
        value = c_double()
        self._call(name, *args, byref(value))
        return value.value

    def _get_string(self, name, *args, size: int = 32) -> str:
        buf = create_string_buffer(size)
        self._call(name, *args, buf)
        return buf.value.decode(errors="ignore")

    def get_last_error_msg(self) -> str:
        function = self._functions.get("FDwfGetLastErrorMsg")
        if function is None:
            return ""
        buf = create_string_buffer(512)
        function(buf)
        return buf.value.decode(errors="ignore").strip()

    def get_version(self) -> str:
        return self._get_string("FDwfGetVersion")

    def enum(self, enum_filter):
        return self._get_int("FDwfEnum", enum_filter)

    def enum_device_type(self, index):
        device_id, revision = c_int(), c_int()
        self._call("FDwfEnumDeviceType", index, byref(device_id), byref(revision))
        return device_id.value, revision.value

    def enum_device_name(self, index):
        return self._get_string("FDwfEnumDeviceName", index)

    def enum_user_name(self, index):
        return self._get_string("FDwfEnumUserName", index)

    def enum_sn(self, index):
        return self._get_string("FDwfEnumSN", index)

    def enum_device_is_opened(self, index):
        return bool(self._get_int("FDwfEnumDeviceIsOpened", index))

    def enum_config(self, index):
        return self._get_int("FDwfEnumConfig", index)

    def enum_config_info(self, config_index, info):
        return self._get_int("FDwfEnumConfigInfo", config_index, int(info))

    def device_config_open(self, index, config):
        return self._get_int("FDwfDeviceConfigOpen", index, config)

    def device_close(self, hdwf):
        self._call("FDwfDeviceClose", hdwf)

    # Analog in

    def analog_in_channel_count(self, hdwf):
        return self._get_int("FDwfAnalogInChannelCount", hdwf)

    def analog_in_buffer_size_info(self, hdwf):
        minimum, maximum = c_int(), c_int()
        self._call("FDwfAnalogInBufferSizeInfo", hdwf, byref(minimum), byref(maximum))
        return maximum.value

    def analog_in_bits_info(self, hdwf):
        return self._get_int("FDwfAnalogInBitsInfo", hdwf)

    def analog_in_channel_enable_set(self, hdwf, channel, enable):
        self._call("FDwfAnalogInChannelEnableSet", hdwf, channel, int(enable))

    def analog_in_channel_offset_set(self, hdwf, channel, offset):
        self._call("FDwfAnalogInChannelOffsetSet", hdwf, channel, offset)

    def analog_in_channel_range_set(self, hdwf, channel, range_):
        self._call("FDwfAnalogInChannelRangeSet", hdwf, channel, range_)

    def analog_in_channel_filter_set(self, hdwf, channel, filter_):
        self._call("FDwfAnalogInChannelFilterSet", hdwf, channel, int(filter_))

    def analog_in_buffer_size_set(self, hdwf, size):
        self._call("FDwfAnalogInBufferSizeSet", hdwf, size)

    def analog_in_frequency_set(self, hdwf, frequency):
        self._call("FDwfAnalogInFrequencySet", hdwf, frequency)

    def analog_in_configure(self, hdwf, reconfigure, start):
        self._call("FDwfAnalogInConfigure", hdwf, int(reconfigure), int(start))

    def analog_in_status(self, hdwf, read_data):
        status = c_ubyte()
        self._call("FDwfAnalogInStatus", hdwf, int(read_data), byref(status))
        return status.value

    def analog_in_status_sample(self, hdwf, channel):
        return self._get_double("FDwfAnalogInStatusSample", hdwf, channel)

    def analog_in_status_data(self, hdwf, channel, count):
        buf = (c_double * count)()
        self._call("FDwfAnalogInStatusData", hdwf, channel, buf, count)
        return np.frombuffer(buf, dtype=np.float64).copy()

    def analog_in_reset(self, hdwf):
        self._call("FDwfAnalogInReset", hdwf)

    def analog_in_trigger_auto_timeout_set(self, hdwf, timeout):
        self._call("FDwfAnalogInTriggerAutoTimeoutSet", hdwf, timeout)

    def analog_in_trigger_source_set(self, hdwf, source):
        self._call("FDwfAnalogInTriggerSourceSet", hdwf, int(source))

    def analog_in_trigger_channel_set(self, hdwf, channel):
        self._call("FDwfAnalogInTriggerChannelSet", hdwf, channel)

    def analog_in_trigger_type_set(self, hdwf, trigger_type):
        self._call("FDwfAnalogInTriggerTypeSet", hdwf, int(trigger_type))

    def analog_in_trigger_level_set(self, hdwf, level):
        self._call("FDwfAnalogInTriggerLevelSet", hdwf, level)

    def analog_in_trigger_condition_set(self, hdwf, slope):
        self._call("FDwfAnalogInTriggerConditionSet", hdwf, int(slope))

    # Analog out

    def analog_out_count(self, hdwf):
        return self._get_int("FDwfAnalogOutCount", hdwf)

    def analog_out_node_enable_set(self, hdwf, channel, node, enable):
        self._call("FDwfAnalogOutNodeEnableSet", hdwf, channel, node, int(enable))

    def analog_out_node_function_set(self, hdwf, channel, node, function):
        self._call("FDwfAnalogOutNodeFunctionSet", hdwf, channel, node, int(function))

    def analog_out_node_data_set(self, hdwf, channel, node, data):
        samples = np.ascontiguousarray(data, dtype=np.float64)
        buf = (c_double * len(samples))(*samples)
        self._call("FDwfAnalogOutNodeDataSet", hdwf, channel, node, buf, len(samples))

    def analog_out_node_frequency_set(self, hdwf, channel, node, frequency):
        self._call("FDwfAnalogOutNodeFrequencySet", hdwf, channel, node, frequency)

    def analog_out_node_amplitude_set(self, hdwf, channel, node, amplitude):
        self._call("FDwfAnalogOutNodeAmplitudeSet", hdwf, channel, node, amplitude)

    def analog_out_node_offset_set(self, hdwf, channel, node, offset):
        self._call("FDwfAnalogOutNodeOffsetSet", hdwf, channel, node, offset)

    def analog_out_node_symmetry_set(self, hdwf, channel, node, symmetry):
        self._call("FDwfAnalogOutNodeSymmetrySet", hdwf, channel, node, symmetry)

    def analog_out_run_set(self, hdwf, channel, seconds):
        self._call("FDwfAnalogOutRunSet", hdwf, channel, seconds)

    def analog_out_wait_set(self, hdwf, channel, seconds):
        self._call("FDwfAnalogOutWaitSet", hdwf, channel, seconds)

    def analog_out_repeat_set(self, hdwf, channel, repeat):
        self._call("FDwfAnalogOutRepeatSet", hdwf, channel, repeat)

    def analog_out_configure(self, hdwf, channel, start):
        self._call("FDwfAnalogOutConfigure", hdwf, channel, int(start))

    def analog_out_reset(self, hdwf, channel):
        self._call("FDwfAnalogOutReset", hdwf, channel)

    # Analog IO

    def analog_io_channel_count(self, hdwf):
        return self._get_int("FDwfAnalogIOChannelCount", hdwf)

    def analog_io_channel_name(self, hdwf, channel):
        name, label = create_string_buffer(32), create_string_buffer(16)
        self._call("FDwfAnalogIOChannelName", hdwf, channel, name, label)
        return name.value.decode(errors="ignore"), label.value.decode(errors="ignore")

    def analog_io_channel_info(self, hdwf, channel):
        return self._get_int("FDwfAnalogIOChannelInfo", hdwf, channel)

    def analog_io_channel_node_name(self, hdwf, channel, node):
        name, unit = create_string_buffer(32), create_string_buffer(16)
        self._call("FDwfAnalogIOChannelNodeName", hdwf, channel, node, name, unit)
        return name.value.decode(errors="ignore"), unit.value.decode(errors="ignore")

    def analog_io_channel_node_set(self, hdwf, channel, node, value):
        self._call("FDwfAnalogIOChannelNodeSet", hdwf, channel, node, value)

    def analog_io_channel_node_get(self, hdwf, channel, node):
        return self._get_double("FDwfAnalogIOChannelNodeGet", hdwf, channel, node)

    def analog_io_channel_node_status(self, hdwf, channel, node):
        return self._get_double("FDwfAnalogIOChannelNodeStatus", hdwf, channel, node)

    def analog_io_status(self, hdwf):
        self._call("FDwfAnalogIOStatus", hdwf)

    def analog_io_enable_set(self, hdwf, enable):
        self._call("FDwfAnalogIOEnableSet", hdwf, int(enable))

    def analog_io_reset(self, hdwf):
        self._call("FDwfAnalogIOReset", hdwf)

    # Digital in

    def digital_in_bits_info(self, hdwf):
        return self._get_int("FDwfDigitalInBitsInfo", hdwf)

    def digital_in_buffer_size_info(self, hdwf):
        return self._get_int("FDwfDigitalInBufferSizeInfo", hdwf)

    def digital_in_internal_clock_info(self, hdwf):
        return self._get_double("FDwfDigitalInInternalClockInfo", hdwf)

    def digital_in_divider_set(self, hdwf, divider):
        self._call("FDwfDigitalInDividerSet", hdwf, divider)

    def digital_in_sample_format_set(self, hdwf, bits):
        self._call("FDwfDigitalInSampleFormatSet", hdwf, bits)

    def digital_in_buffer_size_set(self, hdwf, size):
        self._call("FDwfDigitalInBufferSizeSet", hdwf, size)

    def digital_in_configure(self, hdwf, reconfigure, start):
        self._call("FDwfDigitalInConfigure", hdwf, int(reconfigure), int(start))

    def digital_in_status(self, hdwf, read_data):
        status = c_ubyte()
        self._call("FDwfDigitalInStatus", hdwf, int(read_data), byref(status))
        return status.value

    def digital_in_status_data(self, hdwf, count):
        buf = (ctypes.c_uint16 * count)()
        self._call("FDwfDigitalInStatusData", hdwf, ctypes.cast(buf, c_void_p), 2 * count)
        return np.frombuffer(buf, dtype=np.uint16).copy()

    def digital_in_reset(self, hdwf):
        self._call("FDwfDigitalInReset", hdwf)

    def digital_in_trigger_source_set(self, hdwf, source):
        self._call("FDwfDigitalInTriggerSourceSet", hdwf, int(source))

    def digital_in_trigger_position_set(self, hdwf, samples):
        self._call("FDwfDigitalInTriggerPositionSet", hdwf, samples)

    def digital_in_trigger_prefill_set(self, hdwf, samples):
        self._call("FDwfDigitalInTriggerPrefillSet", hdwf, samples)

    def digital_in_trigger_set(self, hdwf, level_low, level_high, edge_rise, edge_fall):
        self._call("FDwfDigitalInTriggerSet", hdwf, level_low, level_high, edge_rise, edge_fall)

    def digital_in_trigger_reset_set(self, hdwf, level_low, level_high, edge_rise, edge_fall):
        self._call("FDwfDigitalInTriggerResetSet", hdwf, level_low, level_high, edge_rise, edge_fall)

    def digital_in_trigger_auto_timeout_set(self, hdwf, timeout):
        self._call("FDwfDigitalInTriggerAutoTimeoutSet", hdwf, timeout)

    def digital_in_trigger_length_set(self, hdwf, minimum, maximum, sync):
        self._call("FDwfDigitalInTriggerLengthSet", hdwf, minimum, maximum, sync)

    def digital_in_trigger_count_set(self, hdwf, count, restart):
        self._call("FDwfDigitalInTriggerCountSet", hdwf, count, restart)

    # Digital out

    def digital_out_count(self, hdwf):
        return self._get_int("FDwfDigitalOutCount", hdwf)

    def digital_out_internal_clock_info(self, hdwf):
        return self._get_double("FDwfDigitalOutInternalClockInfo", hdwf)

    def digital_out_enable_set(self, hdwf, channel, enable):
        self._call("FDwfDigitalOutEnableSet", hdwf, channel, int(enable))

    def digital_out_type_set(self, hdwf, channel, output_type):
        self._call("FDwfDigitalOutTypeSet", hdwf, channel, int(output_type))

    def digital_out_divider_set(self, hdwf, channel, divider):
        self._call("FDwfDigitalOutDividerSet", hdwf, channel, divider)

    def digital_out_idle_set(self, hdwf, channel, idle):
        self._call("FDwfDigitalOutIdleSet", hdwf, channel, int(idle))

    def digital_out_counter_set(self, hdwf, channel, low, high):
        self._call("FDwfDigitalOutCounterSet", hdwf, channel, low, high)

    def digital_out_data_set(self, hdwf, channel, bits):
        # the runtime expects the bits packed LSB first
        bits = np.asarray(bits, dtype=np.uint8) != 0
        packed = np.packbits(bits, bitorder="little").tobytes()
        buf = _bytes(packed)
        self._call("FDwfDigitalOutDataSet", hdwf, channel, ctypes.cast(buf, c_void_p), len(bits))

    def digital_out_run_set(self, hdwf, seconds):
        self._call("FDwfDigitalOutRunSet", hdwf, seconds)

    def digital_out_wait_set(self, hdwf, seconds):
        self._call("FDwfDigitalOutWaitSet", hdwf, seconds)

    def digital_out_repeat_set(self, hdwf, repeat):
        self._call("FDwfDigitalOutRepeatSet", hdwf, repeat)

    def digital_out_repeat_trigger_set(self, hdwf, enable):
        self._call("FDwfDigitalOutRepeatTriggerSet", hdwf, int(enable))

    def digital_out_trigger_source_set(self, hdwf, source):
        self._call("FDwfDigitalOutTriggerSourceSet", hdwf, int(source))

    def digital_out_trigger_slope_set(self, hdwf, slope):
        self._call("FDwfDigitalOutTriggerSlopeSet", hdwf, int(slope))

    def digital_out_configure(self, hdwf, start):
        self._call("FDwfDigitalOutConfigure", hdwf, int(start))

    def digital_out_reset(self, hdwf):
        self._call("FDwfDigitalOutReset", hdwf)

    # Digital IO

    def digital_io_output_enable_get(self, hdwf):
        return self._get_uint("FDwfDigitalIOOutputEnableGet", hdwf)

    def digital_io_output_enable_set(self, hdwf, mask):
        self._call("FDwfDigitalIOOutputEnableSet", hdwf, mask)

    def digital_io_output_get(self, hdwf):
        return self._get_uint("FDwfDigitalIOOutputGet", hdwf)

    def digital_io_output_set(self, hdwf, mask):
        self._call("FDwfDigitalIOOutputSet", hdwf, mask)

    def digital_io_status(self, hdwf):
        self._call("FDwfDigitalIOStatus", hdwf)

    def digital_io_input_status(self, hdwf):
        return self._get_uint("FDwfDigitalIOInputStatus", hdwf)

    def digital_io_reset(self, hdwf):
        self._call("FDwfDigitalIOReset", hdwf)

    # Digital UART

    def digital_uart_rate_set(self, hdwf, baud_rate):
        self._call("FDwfDigitalUartRateSet", hdwf, baud_rate)

    def digital_uart_tx_set(self, hdwf, channel):
        self._call("FDwfDigitalUartTxSet", hdwf, channel)

    def digital_uart_rx_set(self, hdwf, channel):
        self._call("FDwfDigitalUartRxSet", hdwf, channel)

    def digital_uart_bits_set(self, hdwf, bits):
        self._call("FDwfDigitalUartBitsSet", hdwf, bits)

    def digital_uart_parity_set(self, hdwf, parity):
        self._call("FDwfDigitalUartParitySet", hdwf, parity)

    def digital_uart_stop_set(self, hdwf, stop_bits):
        self._call("FDwfDigitalUartStopSet", hdwf, stop_bits)

    def digital_uart_tx(self, hdwf, data):
        buf = create_string_buffer(bytes(data), max(len(data), 1))
        self._call("FDwfDigitalUartTx", hdwf, buf, len(data))

    def digital_uart_rx(self, hdwf, size):
        buf = create_string_buffer(max(size, 1))
        received, parity = c_int(), c_int()
        self._call("FDwfDigitalUartRx", hdwf, buf, size, byref(received), byref(parity))
        return buf.raw[: received.value], parity.value

    def digital_uart_reset(self, hdwf):
        self._call("FDwfDigitalUartReset", hdwf)

    # Digital SPI

    def digital_spi_frequency_set(self, hdwf, frequency):
        self._call("FDwfDigitalSpiFrequencySet", hdwf, frequency)

    def digital_spi_clock_set(self, hdwf, channel):
        self._call("FDwfDigitalSpiClockSet", hdwf, channel)

    def digital_spi_data_set(self, hdwf, dq, channel):
        self._call("FDwfDigitalSpiDataSet", hdwf, dq, channel)

    def digital_spi_idle_set(self, hdwf, dq, idle):
        self._call("FDwfDigitalSpiIdleSet", hdwf, dq, int(idle))

    def digital_spi_mode_set(self, hdwf, mode):
        self._call("FDwfDigitalSpiModeSet", hdwf, mode)

    def digital_spi_order_set(self, hdwf, msb_first):
        self._call("FDwfDigitalSpiOrderSet", hdwf, int(msb_first))

    def digital_spi_select(self, hdwf, channel, level):
        self._call("FDwfDigitalSpiSelect", hdwf, channel, level)

    def digital_spi_write_one(self, hdwf, dq_mode, bits, word):
        self._call("FDwfDigitalSpiWriteOne", hdwf, dq_mode, bits, word)

    def digital_spi_read(self, hdwf, dq_mode, bits, count):
        buf = (c_ubyte * count)()
        self._call("FDwfDigitalSpiRead", hdwf, dq_mode, bits, buf, count)
        return bytes(buf)

    def digital_spi_write(self, hdwf, dq_mode, bits, data):
        self._call("FDwfDigitalSpiWrite", hdwf, dq_mode, bits, _bytes(data), len(data))

    def digital_spi_write_read(self, hdwf, dq_mode, bits, tx, rx_count):
        rx = (c_ubyte * rx_count)()
        self._call("FDwfDigitalSpiWriteRead", hdwf, dq_mode, bits, _bytes(tx), len(tx), rx, rx_count)
        return bytes(rx)

    def digital_spi_reset(self, hdwf):
        self._call("FDwfDigitalSpiReset", hdwf)

    # Digital I2C

    def digital_i2c_reset(self, hdwf):
        self._call("FDwfDigitalI2cReset", hdwf)

    def digital_i2c_stretch_set(self, hdwf, enable):
        self._call("FDwfDigitalI2cStretchSet", hdwf, int(enable))

    def digital_i2c_rate_set(self, hdwf, rate):
        self._call("FDwfDigitalI2cRateSet", hdwf, rate)

    def digital_i2c_scl_set(self, hdwf, channel):
        self._call("FDwfDigitalI2cSclSet", hdwf, channel)

    def digital_i2c_sda_set(self, hdwf, channel):
        self._call("FDwfDigitalI2cSdaSet", hdwf, channel)

    def digital_i2c_clear(self, hdwf):
        return self._get_int("FDwfDigitalI2cClear", hdwf)

    def digital_i2c_write(self, hdwf, address, data):
        return self._get_int("FDwfDigitalI2cWrite", hdwf, address, _bytes(data), len(data))

    def digital_i2c_read(self, hdwf, address, count):
        buf = (c_ubyte * count)()
        nak = self._get_int("FDwfDigitalI2cRead", hdwf, address, buf, count)
        return bytes(buf), nak

    def digital_i2c_write_read(self, hdwf, address, tx, rx_count):
        rx = (c_ubyte * rx_count)()
        nak = self._get_int("FDwfDigitalI2cWriteRead", hdwf, address, _bytes(tx), len(tx), rx, rx_count)
        return bytes(rx), nak
