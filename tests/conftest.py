"""
Shared fixtures: an in-memory transport standing in for the Bluetooth link.
"""

import threading
import time

import pytest

from zebra_bridge.app import create_app
from zebra_bridge.connection import PrinterLink
from zebra_bridge.dispatcher import JobDispatcher
from zebra_bridge.transport import BaseStream, BaseTransport

PRINTER_ADDRESS = "AA:BB:CC:DD:EE:FF"


class FakeStream(BaseStream):
    """Records writes on its transport."""

    def __init__(self, transport: "FakeTransport"):
        self.transport = transport
        self._open = True
        self.flushes = 0

    def write(self, data: bytes) -> None:
        if self.transport.gate is not None:
            self.transport.gate.wait(timeout=5)
        if self.transport.fail_writes:
            raise OSError("Broken pipe")
        if self.transport.chunked:
            # Byte by byte with thread switches, to expose interleaving
            for b in data:
                self.transport.wire.append(b)
                time.sleep(0)
        else:
            self.transport.wire.extend(data)
        self.transport.writes.append(bytes(data))

    def flush(self) -> None:
        self.flushes += 1

    def close(self) -> None:
        if self._open:
            self._open = False
            self.transport.closes += 1

    @property
    def is_open(self) -> bool:
        return self._open


class FakeTransport(BaseTransport):
    """Transport that never touches a radio."""

    name = "fake"

    def __init__(self):
        self.connects = []
        self.writes = []
        self.wire = bytearray()
        self.streams = []
        self.closes = 0
        self.fail_connect = False
        self.fail_writes = False
        self.chunked = False
        self.gate = None  # threading.Event blocking writes until set
        self.connect_gate = None  # threading.Event blocking connect until set

    def connect(self, address: str) -> FakeStream:
        self.connects.append(address)
        if self.connect_gate is not None:
            self.connect_gate.wait(timeout=5)
        if self.fail_connect:
            raise OSError(112, "Host is down")
        stream = FakeStream(self)
        self.streams.append(stream)
        return stream


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def link(transport):
    return PrinterLink(PRINTER_ADDRESS, transport)


@pytest.fixture
def unconfigured_link(transport):
    return PrinterLink(None, transport)


@pytest.fixture
def dispatcher(link):
    dispatcher = JobDispatcher(link, max_workers=2)
    yield dispatcher
    dispatcher.shutdown(wait=True)


@pytest.fixture
def app(link, dispatcher):
    return create_app(link, dispatcher, port=9100)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def unconfigured_client(unconfigured_link):
    dispatcher = JobDispatcher(unconfigured_link, max_workers=1)
    app = create_app(unconfigured_link, dispatcher, port=9100)
    yield app.test_client(), dispatcher
    dispatcher.shutdown(wait=True)


@pytest.fixture
def gate():
    """Closed gate; set() it to let blocked writes through."""
    event = threading.Event()
    yield event
    event.set()
