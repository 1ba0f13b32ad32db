from dwfkit.instruments.base import Instrument
from dwfkit.instruments.dmm import DigitalMultimeter
from dwfkit.instruments.i2c import I2C
from dwfkit.instruments.logic import LogicAnalyzer
from dwfkit.instruments.pattern import PatternGenerator
from dwfkit.instruments.scope import Oscilloscope
from dwfkit.instruments.spi import SPI
from dwfkit.instruments.static_io import StaticIO
from dwfkit.instruments.supplies import PowerSupply
from dwfkit.instruments.uart import UART
from dwfkit.instruments.wavegen import WaveformGenerator

__all__ = [
    "DigitalMultimeter",
    "I2C",
    "Instrument",
    "LogicAnalyzer",
    "Oscilloscope",
    "PatternGenerator",
    "PowerSupply",
    "SPI",
    "StaticIO",
    "UART",
    "WaveformGenerator",
]
