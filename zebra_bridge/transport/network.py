"""
Network Transport
=================

Raw TCP streams (port 9100) for printers or emulators reachable over IP.
"""

import socket
from typing import Tuple

from .base import BaseTransport
from .bluetooth import SocketStream
from ..config import NETWORK_PORT, CONNECT_TIMEOUT, WRITE_TIMEOUT


class NetworkTransport(BaseTransport):
    """TCP transport, address is ``host`` or ``host:port``."""

    name = 'network'

    def __init__(self, connect_timeout: float = CONNECT_TIMEOUT,
                 write_timeout: float = WRITE_TIMEOUT):
        self.connect_timeout = connect_timeout
        self.write_timeout = write_timeout

    @staticmethod
    def parse_address(address: str) -> Tuple[str, int]:
        """Split ``host:port``, falling back to the raw printing port."""
        host, sep, port = address.rpartition(':')
        if sep and host and port.isdigit():
            return host.strip('[]'), int(port)
        return address, NETWORK_PORT

    def connect(self, address: str) -> SocketStream:
        host, port = self.parse_address(address)
        sock = socket.create_connection((host, port), timeout=self.connect_timeout)
        sock.settimeout(self.write_timeout)
        return SocketStream(sock)
