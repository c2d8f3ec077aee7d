"""
Bridge Core
===========

Composition root: configured address -> PrinterLink -> JobDispatcher ->
Flask app, served by a threaded werkzeug server on a background thread.
The process host only calls ``start(address)`` and ``stop()``.
"""

import logging
import threading
from typing import Optional

from werkzeug.serving import make_server

from .app import create_app
from .config import HOST, PORT, TRANSPORT, DISPATCH_WORKERS, SHUTDOWN_TIMEOUT
from .connection import PrinterLink
from .dispatcher import JobDispatcher
from .exceptions import BridgeError
from .transport import BaseTransport, get_transport

logger = logging.getLogger(__name__)


class BridgeCore:
    """Owns the HTTP listener, the dispatcher and the printer link."""

    def __init__(self, transport: Optional[BaseTransport] = None, host: str = HOST,
                 port: int = PORT, printer_name: Optional[str] = None,
                 max_workers: int = DISPATCH_WORKERS):
        if transport is None:
            transport_class = get_transport(TRANSPORT)
            if transport_class is None:
                raise BridgeError(f"Unknown transport: {TRANSPORT}")
            transport = transport_class()
        self.transport = transport
        self.host = host
        self.printer_name = printer_name
        self.max_workers = max_workers
        self._port = port

        self.address: Optional[str] = None
        self.link: Optional[PrinterLink] = None
        self.dispatcher: Optional[JobDispatcher] = None
        self.app = None
        self._server = None
        self._thread: Optional[threading.Thread] = None
        self._lifecycle_lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._server is not None

    @property
    def port(self) -> int:
        """Bound port once started (resolves port 0), configured port otherwise."""
        if self._server is not None:
            return self._server.server_port
        return self._port

    def start(self, address: Optional[str]):
        """
        Start serving for the given printer address.

        The printer is not contacted here; the first print job connects.

        Raises:
            BridgeError: Already running
            OSError: The HTTP port could not be bound
        """
        with self._lifecycle_lock:
            if self._server is not None:
                raise BridgeError("Bridge is already running")

            self.address = address or None
            self.link = PrinterLink(self.address, self.transport)
            self.dispatcher = JobDispatcher(self.link, max_workers=self.max_workers)
            self.app = create_app(self.link, self.dispatcher, port=self._port,
                                  printer_name=self.printer_name)

            try:
                server = make_server(self.host, self._port, self.app, threaded=True)
            except (OSError, SystemExit) as e:
                # werkzeug exits instead of raising when the port is taken
                self.dispatcher.shutdown()
                raise OSError(f"Failed to start HTTP server on {self.host}:{self._port}: {e}") from e

            self._server = server
            self.app.config['BRIDGE_PORT'] = server.server_port
            self._thread = threading.Thread(target=server.serve_forever, name='http-server', daemon=True)
            self._thread.start()

        if self.address:
            logger.info("Bridge listening on %s:%s for printer %s (%s)",
                        self.host, self.port, self.address, self.transport.name)
        else:
            logger.warning("Bridge listening on %s:%s with no printer configured", self.host, self.port)

    def stop(self):
        """Stop the listener, cancel queued jobs and disconnect. Safe to call anytime."""
        with self._lifecycle_lock:
            server, self._server = self._server, None
            thread, self._thread = self._thread, None

            if server is not None:
                server.shutdown()
                server.server_close()
                if thread is not None:
                    thread.join(timeout=SHUTDOWN_TIMEOUT)
                logger.info("HTTP server stopped")

            if self.dispatcher is not None:
                self.dispatcher.shutdown(wait=False)
            if self.link is not None:
                self.link.disconnect()
