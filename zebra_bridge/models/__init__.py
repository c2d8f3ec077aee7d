"""
Zebra Bridge Models
"""

from .printer import ConnectionState, PrinterStatus
from .job import PrintJob
from .responses import (
    StatusResponse,
    PrintAcceptedResponse,
    FailureResponse,
    PrinterInfo,
    AvailableResponse,
    DefaultPrinterResponse,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    'ConnectionState', 'PrinterStatus', 'PrintJob',
    'StatusResponse', 'PrintAcceptedResponse', 'FailureResponse',
    'PrinterInfo', 'AvailableResponse', 'DefaultPrinterResponse',
    'HealthResponse', 'ErrorResponse',
]
