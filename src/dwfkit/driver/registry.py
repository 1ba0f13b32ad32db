"""Lookup table from driver keys to :class:`DwfDriver` backends.

A backend module decorates its class with
``DriverRegistry.register_driver(key)``; importing :mod:`dwfkit.driver`
imports every bundled backend, after which ``create_driver(key)`` builds
one without the caller touching ctypes or the simulator directly.
"""

import logging
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class DriverKind(Enum):
    """Keys of the bundled backends."""

    NATIVE = "dwf"
    MOCK = "mock"


class DriverRegistry:
    """Class-level map of driver key to implementation class.

    Example:
        @DriverRegistry.register_driver("recording")
        class RecordingDriver(MockDwfDriver):
            ...

        driver = DriverRegistry.create_driver("recording")
    """

    _driver_registry: dict[str, type] = {}

    @classmethod
    def register_driver(cls, driver_key: str):
        """Class decorator storing ``impl_class`` under ``driver_key``.

        A second registration under the same key replaces the first and
        logs a warning.
        """

        def decorator(impl_class: type) -> type:
            previous = cls._driver_registry.get(driver_key)
            if previous is not None:
                logger.warning(
                    "Driver key '%s' moved from %s to %s",
                    driver_key,
                    previous.__name__,
                    impl_class.__name__,
                )
            cls._driver_registry[driver_key] = impl_class
            logger.debug("Driver key '%s' bound to %s", driver_key, impl_class.__name__)
            return impl_class

        return decorator

    @classmethod
    def create_driver(cls, driver_key: str, config: dict | None = None, **kwargs) -> Any:
        """Instantiate the backend registered under ``driver_key``.

        Args:
            driver_key: A registered key such as ``"dwf"`` or ``"mock"``.
            config: Backend settings, handed to the constructor as ``config``.
            **kwargs: Extra constructor arguments.

        Raises:
            ValueError: Nothing is registered under ``driver_key``.
        """
        try:
            impl_class = cls._driver_registry[driver_key]
        except KeyError:
            known = ", ".join(sorted(cls._driver_registry)) or "none"
            raise ValueError(f"No driver registered as '{driver_key}' (known: {known})")
        logger.info("Starting %s driver (%s)", driver_key, impl_class.__name__)
        return impl_class(config=config or {}, **kwargs)

    @classmethod
    def get_registered_drivers(cls) -> list[str]:
        return list(cls._driver_registry)

    @classmethod
    def is_mock_driver(cls, driver_key: str) -> bool:
        return driver_key == DriverKind.MOCK.value
