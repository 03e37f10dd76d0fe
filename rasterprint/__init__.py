from .errors import (
    CaptureInvalid,
    DeviceUnavailable,
    DeviceUnsupported,
    InvalidInput,
    PrintError,
    TransportFailure,
)
from .printing import PrintJobBuilder, PrintSettings, print_capture

__version__ = "0.1.0"

__all__ = [
    "CaptureInvalid",
    "DeviceUnavailable",
    "DeviceUnsupported",
    "InvalidInput",
    "PrintError",
    "PrintJobBuilder",
    "PrintSettings",
    "TransportFailure",
    "print_capture",
]
