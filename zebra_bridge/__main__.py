"""
Zebra Bridge - Service Entry Point

Run: python -m zebra_bridge
"""

import signal
import threading

from . import __version__
from .config import HOST, PORT, TRANSPORT, DATA_DIR, LOG_LEVEL, LOG_FILE, DEBUG, PrinterConfigStore
from .core import BridgeCore
from .logging_config import setup_logging


def main():
    """Run the bridge until SIGINT/SIGTERM."""
    setup_logging('DEBUG' if DEBUG else LOG_LEVEL, LOG_FILE)

    store = PrinterConfigStore()
    address = store.get_configured_address()

    print("=" * 60)
    print("  Zebra Bridge")
    print("=" * 60)
    print(f"  Version: {__version__}")
    print(f"  Listen: http://{HOST}:{PORT}")
    print(f"  Transport: {TRANSPORT}")
    print(f"  Printer: {address or '(not configured)'}")
    print(f"  Data: {DATA_DIR}")
    print("=" * 60)
    print("  API Endpoints:")
    print("    GET  /status, /api/status        - Printer status")
    print("    POST /print, /api/print          - Submit print job")
    print("    GET  /available, /api/available  - Printer configured?")
    print("    GET  /default, /api/default      - Default printer")
    print("    GET  /health, /                  - Health check")
    print("=" * 60)

    core = BridgeCore(printer_name=store.get_printer_name())
    stopped = threading.Event()

    def _request_stop(signum, frame):
        stopped.set()

    signal.signal(signal.SIGINT, _request_stop)
    signal.signal(signal.SIGTERM, _request_stop)

    core.start(address)
    try:
        stopped.wait()
    finally:
        core.stop()


if __name__ == '__main__':
    main()
