"""
Bluetooth Transport
===================

RFCOMM (Serial Port Profile) sockets to paired Bluetooth printers.
Requires a Python build with AF_BLUETOOTH support (Linux/BlueZ).
"""

import errno
import logging
import socket

from .base import BaseStream, BaseTransport
from ..config import RFCOMM_CHANNEL, CONNECT_TIMEOUT, WRITE_TIMEOUT

logger = logging.getLogger(__name__)


class SocketStream(BaseStream):
    """Stream over a connected socket."""

    def __init__(self, sock: socket.socket):
        self._sock = sock
        self._closed = False

    def write(self, data: bytes) -> None:
        self._sock.sendall(data)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self._sock.close()

    @property
    def is_open(self) -> bool:
        return not self._closed and self._sock.fileno() != -1


class BluetoothTransport(BaseTransport):
    """RFCOMM transport, address is the printer MAC (AA:BB:CC:DD:EE:FF)."""

    name = 'bluetooth'

    def __init__(self, channel: int = RFCOMM_CHANNEL,
                 connect_timeout: float = CONNECT_TIMEOUT,
                 write_timeout: float = WRITE_TIMEOUT):
        self.channel = channel
        self.connect_timeout = connect_timeout
        self.write_timeout = write_timeout

    @staticmethod
    def is_supported() -> bool:
        return hasattr(socket, 'AF_BLUETOOTH') and hasattr(socket, 'BTPROTO_RFCOMM')

    def connect(self, address: str) -> SocketStream:
        if not self.is_supported():
            raise OSError(errno.EAFNOSUPPORT, 'Bluetooth RFCOMM sockets are not supported on this platform')

        sock = socket.socket(socket.AF_BLUETOOTH, socket.SOCK_STREAM, socket.BTPROTO_RFCOMM)
        sock.settimeout(self.connect_timeout)
        try:
            sock.connect((address, self.channel))
        except OSError as e:
            sock.close()
            if e.errno == errno.EHOSTDOWN:
                raise ConnectionError(
                    f"Bluetooth device {address} is down: check it is powered on, "
                    f"in range and paired"
                ) from e
            if e.errno == errno.ECONNREFUSED:
                raise ConnectionError(
                    f"Connection refused by {address}: the printer may be busy "
                    f"with another host"
                ) from e
            raise

        sock.settimeout(self.write_timeout)
        logger.debug("RFCOMM socket open to %s channel %s", address, self.channel)
        return SocketStream(sock)
