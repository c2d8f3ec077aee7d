"""
Printer Model
=============

Connection state of the bridged printer.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


class ConnectionState(str, Enum):
    """State of the single printer stream."""

    DISCONNECTED = 'disconnected'
    CONNECTING = 'connecting'
    CONNECTED = 'connected'
    FAILED = 'failed'


@dataclass(frozen=True)
class PrinterStatus:
    """Point-in-time snapshot of the printer link."""

    state: ConnectionState = ConnectionState.DISCONNECTED
    address: Optional[str] = None

    @property
    def connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED
