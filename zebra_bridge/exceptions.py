"""
Zebra Bridge Exceptions
=======================

Exception Hierarchy:
    BridgeError (base)
    ├── ConnectError              - stream to the printer could not be opened
    │   └── PrinterNotConfiguredError - no printer address configured
    ├── WriteError                - established stream failed mid-write
    └── DispatcherClosedError     - job submitted after shutdown

Printer and transport errors never reach the HTTP caller of /print; they are
logged by the dispatcher.
"""

from typing import Optional, Dict, Any


class BridgeError(Exception):
    """Base exception for all bridge errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConnectError(BridgeError):
    """Transport could not establish a stream to the configured address."""

    def __init__(self, address: Optional[str], reason: str = ''):
        message = f"Failed to connect to printer {address}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.address = address


class PrinterNotConfiguredError(ConnectError):
    """No printer address configured."""

    def __init__(self):
        BridgeError.__init__(self, "No printer configured")
        self.address = None


class WriteError(BridgeError):
    """Established stream failed while writing or flushing."""

    def __init__(self, address: Optional[str], bytes_attempted: int, reason: str = ''):
        message = f"Failed to write {bytes_attempted} bytes to printer {address}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.address = address
        self.bytes_attempted = bytes_attempted


class DispatcherClosedError(BridgeError):
    """Print job submitted after the dispatcher was shut down."""

    def __init__(self):
        super().__init__("Print dispatcher is shut down")
