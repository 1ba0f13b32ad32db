"""Parameter schemas for the exposed instrument operations.

Every operation takes a flat mapping of optional named parameters.
Numbers arrive as int or float (JSON does not distinguish them) and are
converted to the type the instruments expect. Booleans are not numbers
here, and an integer field only takes a float with no fractional part.
Missing parameters are filled in later from the config record defaults.
"""

from schema import And, Optional, Or, Schema, Use


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integral(value) -> bool:
    return float(value).is_integer()


Int = And(_is_number, _is_integral, Use(int), error="expected an integer")
Float = And(_is_number, Use(float), error="expected a number")
Bool = bool
Text = str


def params_schema(**fields) -> Schema:
    """Build a schema where every field is optional and extra keys are ignored."""
    return Schema({Optional(name): value for name, value in fields.items()}, ignore_extra_keys=True)


EMPTY = params_schema()

DEVICE_OPEN = params_schema(device=Text, config=Int)
DEVICE_CONFIGS = params_schema(device_index=Int)

CHANNEL = params_schema(channel=Int)
RECORD = params_schema(
    channel=Int,
    timeout=Or(None, Float),
    interval=Float,
)

SCOPE_OPEN = params_schema(
    sampling_frequency=Float,
    buffer_size=Int,
    offset_voltage=Float,
    amplitude_range=Float,
)
SCOPE_TRIGGER = params_schema(
    enable=Bool,
    source=Int,
    channel=Int,
    timeout=Float,
    edge_rising=Bool,
    level=Float,
)

WAVEGEN_GENERATE = params_schema(
    channel=Int,
    function=Int,
    offset=Float,
    frequency=Float,
    amplitude=Float,
    symmetry=Float,
    wait=Float,
    run_time=Float,
    repeat=Int,
    custom_data=[Float],
)

SUPPLIES_SWITCH = params_schema(
    master_state=Bool,
    positive_state=Bool,
    negative_state=Bool,
    state=Bool,
    positive_voltage=Float,
    negative_voltage=Float,
    voltage=Float,
    positive_current=Float,
    negative_current=Float,
    current=Float,
)

DMM_MEASURE = params_schema(mode=Int, range=Float, high_impedance=Bool)

LOGIC_OPEN = params_schema(sampling_frequency=Float, buffer_size=Int)
LOGIC_TRIGGER = params_schema(
    enable=Bool,
    channel=Int,
    position=Int,
    timeout=Float,
    rising_edge=Bool,
    length_min=Float,
    length_max=Float,
    count=Int,
)

PATTERN_GENERATE = params_schema(
    channel=Int,
    function=Int,
    frequency=Float,
    duty_cycle=Float,
    data=[Int],
    wait=Float,
    repeat=Int,
    run_time=Float,
    idle_state=Int,
    trigger_enabled=Bool,
    trigger_source=Int,
    trigger_edge_rising=Bool,
)

STATIC_SET_MODE = params_schema(channel=Int, output=Bool)
STATIC_SET_STATE = params_schema(channel=Int, value=Bool)
STATIC_SET_CURRENT = Schema({"current": Float}, ignore_extra_keys=True)

UART_OPEN = params_schema(
    rx=Int,
    tx=Int,
    baud_rate=Float,
    parity=Int,
    data_bits=Int,
    stop_bits=Float,
)
UART_WRITE = params_schema(data=Text)

SPI_OPEN = params_schema(
    cs=Int,
    sck=Int,
    miso=Int,
    mosi=Int,
    clock_frequency=Float,
    mode=And(Int, lambda m: 0 <= m <= 3, error="SPI mode must be 0 to 3"),
    msb_first=Bool,
)
SPI_READ = params_schema(count=And(Int, lambda n: n >= 0), cs=Int)
SPI_WRITE = params_schema(data=Text, cs=Int)
SPI_EXCHANGE = params_schema(data=Text, count=And(Int, lambda n: n >= 0), cs=Int)

I2C_OPEN = params_schema(sda=Int, scl=Int, clock_rate=Float, stretching=Bool)
I2C_READ = params_schema(count=And(Int, lambda n: n >= 0), address=Int)
I2C_WRITE = params_schema(data=Text, address=Int)
I2C_EXCHANGE = params_schema(data=Text, count=And(Int, lambda n: n >= 0), address=Int)
