"""Exception hierarchy for dwfkit.

Failures fall in four families: the native driver rejected a call, the
connected device lacks a capability, a serial bus reported a protocol
fault, or the caller supplied malformed input.
"""


class DwfError(Exception):
    """Base class for every error raised by dwfkit."""


class DriverError(DwfError):
    """A native driver call returned failure.

    The message is the driver's last-error text, unchanged.
    """

    def __init__(self, message: str = ""):
        super().__init__(message or "unknown DWF error")


class NotConnectedError(DwfError):
    pass


class NoDeviceFound(DwfError):
    pass


class OpenFailed(DwfError):
    pass


class CapabilityError(DwfError):
    """The connected device model does not expose a named capability."""


class InstrumentUnavailable(CapabilityError):
    pass


class NodeNotFound(CapabilityError):
    pass


class MeasurementNodeMissing(NodeNotFound):
    pass


class FeatureNotImplemented(DwfError, NotImplementedError):
    pass


class ProtocolError(DwfError):
    """A serial protocol fault.

    Attributes:
        data: Bytes received before (and including) the fault, if any.
        index: Byte offset the fault refers to, or None.
    """

    def __init__(self, message: str, data: bytes = b"", index: int | None = None):
        super().__init__(message)
        self.data = data
        self.index = index


class UARTOverflow(ProtocolError):
    pass


class UARTParityError(ProtocolError):
    pass


class I2CNak(ProtocolError):
    pass


class I2CBusLockup(ProtocolError):
    pass


class AcquisitionTimeout(DwfError):
    pass


class AcquisitionCancelled(DwfError):
    pass


class InvalidInput(DwfError, ValueError):
    pass
