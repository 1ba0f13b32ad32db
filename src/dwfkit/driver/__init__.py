"""Driver backends for the WaveForms runtime.

Importing this package registers the native ("dwf") and simulated
("mock") backends with :class:`DriverRegistry`.
"""

from dwfkit.config import DriverConfig
from dwfkit.driver.base import DwfDriver
from dwfkit.driver.registry import DriverKind, DriverRegistry

# Import implementations to trigger registration with DriverRegistry
from dwfkit.driver.mock import MockDwfDriver
from dwfkit.driver.native import CtypesDwfDriver


def create_driver(config: DriverConfig | dict | None = None, **kwargs) -> DwfDriver:
    """Create the driver selected by a configuration.

    Args:
        config: DriverConfig or mapping with ``driver`` and ``library``
            keys. Defaults to the native driver.
        **kwargs: Passed to the driver constructor.
    """
    if config is None:
        config = DriverConfig()
    elif isinstance(config, dict):
        config = DriverConfig.from_params(config)
    return DriverRegistry.create_driver(config.driver, config.to_dict(), **kwargs)


__all__ = [
    "CtypesDwfDriver",
    "DriverKind",
    "DriverRegistry",
    "DwfDriver",
    "MockDwfDriver",
    "create_driver",
]
