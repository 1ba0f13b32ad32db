"""Base class shared by every instrument controller."""

import logging

from dwfkit.constants import EngineState
from dwfkit.session import DeviceSession

logger = logging.getLogger(__name__)


class Instrument:
    """An instrument facade borrowing a device session.

    Instruments never own the native handle. Each call fetches it from
    the session, so an instrument used after the session closed fails
    with NotConnectedError before touching the driver.
    """

    def __init__(self, session: DeviceSession):
        self.session = session
        self.state = EngineState.IDLE

    @property
    def driver(self):
        return self.session.driver

    def _handle(self) -> int:
        return self.session.require_handle()
