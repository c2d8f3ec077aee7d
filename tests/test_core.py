"""
End-to-end tests: BridgeCore serving real HTTP on an ephemeral port.
"""

import pytest

from zebra_bridge.client import BridgeClient
from zebra_bridge.core import BridgeCore
from zebra_bridge.exceptions import BridgeError
from zebra_bridge.models import ConnectionState

from conftest import PRINTER_ADDRESS, FakeTransport


@pytest.fixture
def core(transport):
    core = BridgeCore(transport=transport, host="127.0.0.1", port=0)
    yield core
    core.stop()


@pytest.fixture
def running_core(core):
    core.start(PRINTER_ADDRESS)
    return core


@pytest.fixture
def bridge_client(running_core):
    return BridgeClient(f"http://127.0.0.1:{running_core.port}", timeout=5)


class TestLifecycle:

    def test_stop_without_start(self, core):
        core.stop()
        core.stop()
        assert core.running is False

    def test_start_does_not_connect_printer(self, running_core, transport):
        assert running_core.running is True
        assert running_core.port != 0
        assert transport.connects == []
        assert running_core.link.current_state().state is ConnectionState.DISCONNECTED

    def test_start_twice_raises(self, running_core):
        with pytest.raises(BridgeError):
            running_core.start(PRINTER_ADDRESS)

    def test_stop_disconnects_printer(self, running_core, transport):
        running_core.link.ensure_connected()

        running_core.stop()

        assert running_core.running is False
        assert running_core.link.current_state().state is ConnectionState.DISCONNECTED
        assert transport.closes == 1
        assert running_core.dispatcher.closed is True

    def test_stop_closes_listener(self, running_core):
        client = BridgeClient(f"http://127.0.0.1:{running_core.port}", timeout=2)
        assert client.is_online() is True

        running_core.stop()

        assert client.is_online() is False

    def test_restart_after_stop(self, core):
        core.start(PRINTER_ADDRESS)
        core.stop()
        core.start("11:22:33:44:55:66")
        assert core.link.address == "11:22:33:44:55:66"

    def test_port_in_use(self, running_core):
        other = BridgeCore(transport=FakeTransport(), host="127.0.0.1", port=running_core.port)
        try:
            with pytest.raises(OSError):
                other.start(PRINTER_ADDRESS)
            assert other.running is False
        finally:
            other.stop()

    def test_unknown_transport(self, monkeypatch):
        monkeypatch.setattr("zebra_bridge.core.TRANSPORT", "carrier-pigeon")
        with pytest.raises(BridgeError):
            BridgeCore()


class TestOverHttp:

    def test_health_reports_bound_port(self, running_core, bridge_client):
        health = bridge_client.health()
        assert health["status"] == "ok"
        assert health["port"] == running_core.port

    def test_print_reaches_transport(self, running_core, bridge_client, transport):
        result = bridge_client.print_label("! 0 200 200 1\r\nPRINT\r\n")

        assert result == {"success": True, "message": "Print job submitted"}
        assert running_core.dispatcher.join(timeout=5)
        assert transport.writes == [b"! 0 200 200 1\r\nPRINT\r\n"]
        assert bridge_client.is_connected() is True

    def test_raw_print_reaches_transport(self, running_core, bridge_client, transport):
        bridge_client.print_raw(b"^XA^FDraw^FS^XZ")
        assert running_core.dispatcher.join(timeout=5)
        assert transport.writes == [b"^XA^FDraw^FS^XZ"]

    def test_default_printer(self, bridge_client):
        assert bridge_client.default_printer()["address"] == PRINTER_ADDRESS

    def test_unconfigured_bridge(self, core):
        core.start(None)
        client = BridgeClient(f"http://127.0.0.1:{core.port}", timeout=5)

        assert client.default_printer() is None
        assert client.available() == {"available": False}
        assert client.print_label("label")["success"] is True
