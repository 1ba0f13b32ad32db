"""Instrument operations exposed to a request transport.

:class:`InstrumentTools` turns flat named-parameter mappings into
instrument calls and returns JSON-friendly result dictionaries. All
operations on one device are serialized by the device lock.
"""

import functools
import logging

from schema import Schema, SchemaError

from dwfkit.config import (
    I2CConfig,
    LogicConfig,
    LogicTriggerConfig,
    PatternConfig,
    ScopeConfig,
    SPIConfig,
    SuppliesConfig,
    TriggerConfig,
    UARTConfig,
    WavegenConfig,
)
from dwfkit.constants import DMMMode, TriggerSource
from dwfkit.device import DiscoveryDevice
from dwfkit.errors import InvalidInput
from dwfkit.interface import params as p

logger = logging.getLogger(__name__)


def operation(schema: Schema):
    """Mark a method as an exposed operation validated by ``schema``."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, **params):
            try:
                params = schema.validate(params)
            except SchemaError as e:
                raise InvalidInput(f"{func.__name__}: {e}") from e
            with self.device.lock:
                logger.debug("Running %s with %s", func.__name__, params)
                return func(self, params)

        wrapper.schema = schema
        return wrapper

    return decorator


def decode_hex(text: str) -> bytes:
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise InvalidInput(f"invalid hex data: {e}") from e


class InstrumentTools:
    """Named operations over a :class:`DiscoveryDevice`.

    Example:
        tools = InstrumentTools(DiscoveryDevice(config={"driver": "mock"}))
        tools.call("device_open", {})
        tools.call("scope_record", {"channel": 1})
    """

    def __init__(self, device: DiscoveryDevice):
        self.device = device

    @classmethod
    def operations(cls) -> list[str]:
        """Return the names of every exposed operation."""
        return sorted(
            name for name, value in vars(cls).items() if hasattr(value, "schema")
        )

    def call(self, name: str, params: dict | None = None) -> dict:
        """Run an operation by name.

        Raises:
            InvalidInput: If the operation does not exist or the
                parameters do not validate.
        """
        if name not in self.operations():
            raise InvalidInput(f"unknown operation: {name}")
        return getattr(self, name)(**(params or {}))

    # Device

    @operation(p.EMPTY)
    def device_enumerate(self, params):
        devices = self.device.enumerate()
        return {"count": len(devices), "devices": [d.to_dict() for d in devices]}

    @operation(p.DEVICE_CONFIGS)
    def device_get_configs(self, params):
        index = params.get("device_index", 0)
        configs = self.device.configs(index)
        return {"device_index": index, "configs": [c.to_dict() for c in configs]}

    @operation(p.DEVICE_OPEN)
    def device_open(self, params):
        info = self.device.open(params.get("device", ""), params.get("config", 0))
        result = info.to_dict()
        result["model"] = self.device.session.model.name
        return result

    @operation(p.EMPTY)
    def device_close(self, params):
        self.device.close()
        return {"closed": True}

    @operation(p.EMPTY)
    def device_temperature(self, params):
        return {"temperature": self.device.temperature()}

    # Oscilloscope

    @operation(p.SCOPE_OPEN)
    def scope_open(self, params):
        config = ScopeConfig.from_params(params)
        buffer_size = self.device.scope.open(config)
        return {"sampling_frequency": config.sampling_frequency, "buffer_size": buffer_size}

    @operation(p.CHANNEL)
    def scope_measure(self, params):
        channel = params.get("channel", 1)
        return {"channel": channel, "voltage": self.device.scope.measure(channel)}

    @operation(p.SCOPE_TRIGGER)
    def scope_trigger(self, params):
        config = TriggerConfig.from_params(params)
        self.device.scope.set_trigger(config)
        enabled = config.enable and config.source != TriggerSource.NONE
        return {"enabled": enabled, "source": config.source.name}

    @operation(p.RECORD)
    def scope_record(self, params):
        channel = params.get("channel", 1)
        data = self.device.scope.record(
            channel, timeout=params.get("timeout"), interval=params.get("interval", 0.0)
        )
        return {"channel": channel, "samples": len(data), "data": data.tolist()}

    @operation(p.EMPTY)
    def scope_close(self, params):
        self.device.scope.close()
        return {"reset": True}

    # Waveform generator

    @operation(p.WAVEGEN_GENERATE)
    def wavegen_generate(self, params):
        config = WavegenConfig.from_params(params)
        self.device.wavegen.generate(config)
        return {
            "channel": config.channel,
            "function": config.function.name,
            "frequency": config.frequency,
        }

    @operation(p.CHANNEL)
    def wavegen_enable(self, params):
        channel = params.get("channel", 1)
        self.device.wavegen.enable(channel)
        return {"channel": channel, "enabled": True}

    @operation(p.CHANNEL)
    def wavegen_disable(self, params):
        channel = params.get("channel", 1)
        self.device.wavegen.disable(channel)
        return {"channel": channel, "enabled": False}

    @operation(p.CHANNEL)
    def wavegen_close(self, params):
        channel = params.get("channel")
        self.device.wavegen.close(channel)
        return {"channel": channel, "reset": True}

    # Power supplies

    @operation(p.SUPPLIES_SWITCH)
    def supplies_switch(self, params):
        config = SuppliesConfig.from_params(params)
        rails = self.device.supplies.switch(config)
        return {"master_state": config.master_state, "rails": rails}

    @operation(p.EMPTY)
    def supplies_close(self, params):
        self.device.supplies.close()
        return {"reset": True}

    # Multimeter

    @operation(p.EMPTY)
    def dmm_open(self, params):
        self.device.dmm.open()
        return {"channel": self.device.dmm.channel, "nodes": sorted(self.device.dmm.nodes)}

    @operation(p.DMM_MEASURE)
    def dmm_measure(self, params):
        try:
            mode = DMMMode(params.get("mode", DMMMode.DC_VOLTAGE))
        except ValueError as e:
            raise InvalidInput(str(e)) from e
        value = self.device.dmm.measure(
            mode, params.get("range", 0.0), params.get("high_impedance", False)
        )
        return {"mode": mode.name, "value": value}

    @operation(p.EMPTY)
    def dmm_close(self, params):
        self.device.dmm.close()
        return {"reset": True}

    # Logic analyzer

    @operation(p.LOGIC_OPEN)
    def logic_open(self, params):
        config = LogicConfig.from_params(params)
        buffer_size = self.device.logic.open(config)
        return {"sampling_frequency": config.sampling_frequency, "buffer_size": buffer_size}

    @operation(p.LOGIC_TRIGGER)
    def logic_trigger(self, params):
        config = LogicTriggerConfig.from_params(params)
        self.device.logic.set_trigger(config)
        return {"enabled": config.enable, "channel": config.channel}

    @operation(p.RECORD)
    def logic_record(self, params):
        channel = params.get("channel", 0)
        data = self.device.logic.record(
            channel, timeout=params.get("timeout"), interval=params.get("interval", 0.0)
        )
        return {"channel": channel, "samples": len(data), "data": data.tolist()}

    @operation(p.EMPTY)
    def logic_close(self, params):
        self.device.logic.close()
        return {"reset": True}

    # Pattern generator

    @operation(p.PATTERN_GENERATE)
    def pattern_generate(self, params):
        config = PatternConfig.from_params(params)
        self.device.pattern.generate(config)
        return {
            "channel": config.channel,
            "function": config.function.name,
            "frequency": config.frequency,
        }

    @operation(p.CHANNEL)
    def pattern_enable(self, params):
        channel = params.get("channel", 0)
        self.device.pattern.enable(channel)
        return {"channel": channel, "enabled": True}

    @operation(p.CHANNEL)
    def pattern_disable(self, params):
        channel = params.get("channel", 0)
        self.device.pattern.disable(channel)
        return {"channel": channel, "enabled": False}

    @operation(p.EMPTY)
    def pattern_close(self, params):
        self.device.pattern.close()
        return {"reset": True}

    # Static I/O

    @operation(p.STATIC_SET_MODE)
    def static_set_mode(self, params):
        channel = params.get("channel", 0)
        output = params.get("output", False)
        self.device.static.set_mode(channel, output)
        return {"channel": channel, "mode": "output" if output else "input"}

    @operation(p.CHANNEL)
    def static_get_state(self, params):
        channel = params.get("channel", 0)
        state = self.device.static.get_state(channel)
        return {"channel": channel, "state": state, "level": "HIGH" if state else "LOW"}

    @operation(p.STATIC_SET_STATE)
    def static_set_state(self, params):
        channel = params.get("channel", 0)
        value = params.get("value", False)
        self.device.static.set_state(channel, value)
        return {"channel": channel, "value": value, "level": "HIGH" if value else "LOW"}

    @operation(p.STATIC_SET_CURRENT)
    def static_set_current(self, params):
        self.device.static.set_current(params["current"])
        return {"current": params["current"]}

    @operation(p.EMPTY)
    def static_close(self, params):
        self.device.static.close()
        return {"reset": True}

    # UART

    @operation(p.UART_OPEN)
    def uart_open(self, params):
        config = UARTConfig.from_params(params)
        self.device.uart.open(config)
        return {"baud_rate": config.baud_rate, "rx": config.rx, "tx": config.tx}

    @operation(p.EMPTY)
    def uart_read(self, params):
        data = self.device.uart.read()
        return {
            "bytes": len(data),
            "data": data.hex(),
            "text": data.decode("utf-8", errors="replace"),
        }

    @operation(p.UART_WRITE)
    def uart_write(self, params):
        data = params.get("data", "").encode("utf-8")
        self.device.uart.write(data)
        return {"bytes": len(data)}

    @operation(p.EMPTY)
    def uart_close(self, params):
        self.device.uart.close()
        return {"reset": True}

    # SPI

    @operation(p.SPI_OPEN)
    def spi_open(self, params):
        config = SPIConfig.from_params(params)
        self.device.spi.open(config)
        return {"clock_frequency": config.clock_frequency, "mode": config.mode, "cs": config.cs}

    @operation(p.SPI_READ)
    def spi_read(self, params):
        cs = params.get("cs", 0)
        data = self.device.spi.read(params.get("count", 1), cs)
        return {"cs": cs, "bytes": len(data), "data": data.hex()}

    @operation(p.SPI_WRITE)
    def spi_write(self, params):
        data = decode_hex(params.get("data", ""))
        cs = params.get("cs", 0)
        self.device.spi.write(data, cs)
        return {"cs": cs, "bytes": len(data)}

    @operation(p.SPI_EXCHANGE)
    def spi_exchange(self, params):
        data = decode_hex(params.get("data", ""))
        cs = params.get("cs", 0)
        received = self.device.spi.exchange(data, params.get("count", 1), cs)
        return {"cs": cs, "bytes": len(received), "data": received.hex()}

    @operation(p.EMPTY)
    def spi_close(self, params):
        self.device.spi.close()
        return {"reset": True}

    # I2C

    @operation(p.I2C_OPEN)
    def i2c_open(self, params):
        config = I2CConfig.from_params(params)
        self.device.i2c.open(config)
        return {"clock_rate": config.clock_rate, "sda": config.sda, "scl": config.scl}

    @operation(p.EMPTY)
    def i2c_scan(self, params):
        addresses = self.device.i2c.scan()
        return {"count": len(addresses), "addresses": [f"0x{a:02X}" for a in addresses]}

    @operation(p.I2C_READ)
    def i2c_read(self, params):
        address = params.get("address", 0)
        data = self.device.i2c.read(params.get("count", 1), address)
        return {"address": f"0x{address:02X}", "bytes": len(data), "data": data.hex()}

    @operation(p.I2C_WRITE)
    def i2c_write(self, params):
        data = decode_hex(params.get("data", ""))
        address = params.get("address", 0)
        self.device.i2c.write(data, address)
        return {"address": f"0x{address:02X}", "bytes": len(data)}

    @operation(p.I2C_EXCHANGE)
    def i2c_exchange(self, params):
        data = decode_hex(params.get("data", ""))
        address = params.get("address", 0)
        received = self.device.i2c.exchange(data, params.get("count", 1), address)
        return {"address": f"0x{address:02X}", "bytes": len(received), "data": received.hex()}

    @operation(p.EMPTY)
    def i2c_close(self, params):
        self.device.i2c.close()
        return {"reset": True}
