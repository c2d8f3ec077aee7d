"""
Zebra Bridge Transports
=======================

Byte-stream providers for the different ways a printer can be reached.
"""

from .base import BaseStream, BaseTransport
from .bluetooth import BluetoothTransport, SocketStream
from .network import NetworkTransport
from .serial_port import SerialTransport, SerialStream

__all__ = [
    'BaseStream', 'BaseTransport', 'BluetoothTransport', 'SocketStream',
    'NetworkTransport', 'SerialTransport', 'SerialStream',
]

# Transport registry
TRANSPORTS = {
    'bluetooth': BluetoothTransport,
    'network': NetworkTransport,
    'serial': SerialTransport,
}


def get_transport(transport_type: str) -> type:
    """Get transport class by type."""
    return TRANSPORTS.get(transport_type)
