from __future__ import annotations


class PrintError(RuntimeError):
    """Base class for every failure raised by the print pipeline."""


class InvalidInput(PrintError, ValueError):
    """Malformed or zero-sized buffers, or a protocol field overflow."""


class CaptureInvalid(InvalidInput):
    """The capture source produced an image with no area."""


class DeviceUnavailable(PrintError):
    """No transport library/backend present, or no device selected."""


class DeviceUnsupported(PrintError):
    """The selected device has no usable OUT endpoint."""


class TransportFailure(PrintError):
    """A write, transfer or connection error while delivering bytes."""
