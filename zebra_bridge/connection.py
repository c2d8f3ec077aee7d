"""
Printer Connection
==================

StreamConnection holds the single live stream and its state machine.
PrinterLink owns one StreamConnection for the lifetime of the bridge and
serializes every connect, write and disconnect behind one lock.

State transitions:

    DISCONNECTED/FAILED --ensure_connected--> CONNECTING --ok--> CONNECTED
                                                         --err-> FAILED
    CONNECTED --write error / disconnect--> DISCONNECTED

Connecting is lazy: nothing is opened until the first print job arrives, and
a dead stream is only noticed when the next write fails.
"""

import logging
import threading
from typing import Optional

from .exceptions import ConnectError, PrinterNotConfiguredError, WriteError
from .models import ConnectionState, PrinterStatus
from .transport import BaseStream, BaseTransport
from .config import SHUTDOWN_TIMEOUT

logger = logging.getLogger(__name__)

SHUT_DOWN_REASON = "link is shut down"


class StreamConnection:
    """One printer stream plus its connection state. Not thread-safe."""

    def __init__(self, transport: BaseTransport, address: Optional[str]):
        self.transport = transport
        self.address = address
        self._stream: Optional[BaseStream] = None
        self._status = PrinterStatus(ConnectionState.DISCONNECTED, address)
        self.shut_down = False

    @property
    def status(self) -> PrinterStatus:
        return self._status

    @property
    def state(self) -> ConnectionState:
        return self._status.state

    @property
    def is_live(self) -> bool:
        return (
            self.state is ConnectionState.CONNECTED
            and self._stream is not None
            and self._stream.is_open
        )

    def _set_state(self, state: ConnectionState):
        # Single reference swap
        self._status = PrinterStatus(state, self.address)

    def open(self):
        """Open a fresh stream, replacing any stale one."""
        if not self.address:
            raise PrinterNotConfiguredError()
        if self.shut_down:
            raise ConnectError(self.address, SHUT_DOWN_REASON)

        if self._stream is not None:
            self.close()

        self._set_state(ConnectionState.CONNECTING)
        try:
            self._stream = self.transport.connect(self.address)
        except Exception as e:
            self._stream = None
            self._set_state(ConnectionState.FAILED)
            raise ConnectError(self.address, str(e)) from e

        self._set_state(ConnectionState.CONNECTED)
        # disconnect() may have run while connect() was blocking
        if self.shut_down:
            self.close()
            raise ConnectError(self.address, SHUT_DOWN_REASON)
        logger.info("Connected to printer: %s", self.address)

    def write(self, data: bytes):
        """Write and flush; any failure tears the stream down."""
        stream = self._stream
        if stream is None:
            raise WriteError(self.address, len(data), 'not connected')
        try:
            stream.write(data)
            stream.flush()
        except Exception as e:
            self.close()
            raise WriteError(self.address, len(data), str(e)) from e

    def close(self):
        """Close the stream if present. Idempotent."""
        stream, self._stream = self._stream, None
        was_connected = self.state is ConnectionState.CONNECTED
        self._set_state(ConnectionState.DISCONNECTED)
        if stream is None:
            return
        try:
            stream.close()
        except Exception as e:
            logger.warning("Error closing printer stream: %s", e)
        if was_connected:
            logger.info("Disconnected from printer: %s", self.address)


class PrinterLink:
    """Shared, thread-safe access to the printer."""

    def __init__(self, address: Optional[str], transport: BaseTransport):
        self._lock = threading.Lock()
        self._connection = StreamConnection(transport, address)

    @property
    def address(self) -> Optional[str]:
        return self._connection.address

    @property
    def is_configured(self) -> bool:
        return bool(self.address)

    def current_state(self) -> PrinterStatus:
        """Snapshot of the link state. Never blocks."""
        return self._connection.status

    def ensure_connected(self):
        """
        Connect unless a live stream already exists.

        Raises:
            PrinterNotConfiguredError: No address configured
            ConnectError: The transport could not open a stream
        """
        with self._lock:
            self._ensure_connected_locked()

    def _ensure_connected_locked(self):
        if self._connection.is_live:
            return
        self._connection.open()

    def send_bytes(self, payload: bytes):
        """
        Connect if needed, then write and flush the payload in one critical section.

        A failed write leaves the link DISCONNECTED so the next call reconnects.

        Raises:
            ConnectError: Could not connect
            WriteError: The stream failed mid-write
        """
        with self._lock:
            self._ensure_connected_locked()
            self._connection.write(payload)
            logger.info("Sent %d bytes to printer %s", len(payload), self.address)

    def disconnect(self, timeout: float = SHUTDOWN_TIMEOUT):
        """
        Close the stream. Safe to call when never connected.

        If a write holds the lock longer than ``timeout`` the stream is closed
        underneath it and the write is abandoned.
        The link stays shut down: later connects fail with ConnectError.
        """
        self._connection.shut_down = True
        acquired = self._lock.acquire(timeout=timeout)
        try:
            if not acquired:
                logger.warning("Printer busy after %ss, abandoning in-flight write", timeout)
            self._connection.close()
        finally:
            if acquired:
                self._lock.release()
