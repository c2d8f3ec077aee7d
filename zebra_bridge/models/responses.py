"""
Response Models
===============

One dataclass per endpoint body. Field names follow the Browser Print wire
format (camelCase); fields set to None are left out of the JSON.
"""

from dataclasses import dataclass, fields
from typing import Optional, Dict, Any

from .printer import PrinterStatus


@dataclass
class _Response:

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, _Response):
                value = value.to_dict()
            data[f.name] = value
        return data


@dataclass
class StatusResponse(_Response):
    connected: bool
    printerAddress: str
    isReadyToPrint: bool

    @classmethod
    def from_status(cls, status: PrinterStatus) -> 'StatusResponse':
        return cls(
            connected=status.connected,
            printerAddress=status.address or '',
            isReadyToPrint=status.connected,
        )


@dataclass
class PrintAcceptedResponse(_Response):
    success: bool = True
    message: str = 'Print job submitted'


@dataclass
class FailureResponse(_Response):
    error: str
    success: bool = False


@dataclass
class PrinterInfo(_Response):
    address: str
    type: str = 'bluetooth'


@dataclass
class AvailableResponse(_Response):
    available: bool
    printer: Optional[PrinterInfo] = None


@dataclass
class DefaultPrinterResponse(_Response):
    available: bool
    name: Optional[str] = None
    address: Optional[str] = None
    connection: Optional[str] = None
    error: Optional[str] = None


@dataclass
class HealthResponse(_Response):
    service: str
    version: str
    port: int
    status: str = 'ok'


@dataclass
class ErrorResponse(_Response):
    error: str
