"""
Zebra Bridge Configuration
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)

# =============================================================================
# Server Configuration
# =============================================================================

PORT = int(os.environ.get('ZEBRA_BRIDGE_PORT', 9100))
HOST = os.environ.get('ZEBRA_BRIDGE_HOST', '127.0.0.1')
DEBUG = os.environ.get('ZEBRA_BRIDGE_DEBUG', 'false').lower() == 'true'

SERVICE_NAME = 'ZebraBridge'

# =============================================================================
# Printer Defaults
# =============================================================================

# Transport used to reach the printer: bluetooth, serial or network
TRANSPORT = os.environ.get('ZEBRA_BRIDGE_TRANSPORT', 'bluetooth')

DEFAULT_PRINTER_NAME = 'Zebra Bluetooth Printer'
CONNECTION_TYPE = 'bluetooth'

CONNECT_TIMEOUT = float(os.environ.get('ZEBRA_BRIDGE_CONNECT_TIMEOUT', 30))  # seconds
WRITE_TIMEOUT = float(os.environ.get('ZEBRA_BRIDGE_WRITE_TIMEOUT', 30))  # seconds

# Standard Serial Port Profile channel
RFCOMM_CHANNEL = int(os.environ.get('ZEBRA_BRIDGE_RFCOMM_CHANNEL', 1))

# Serial transport (bound /dev/rfcomm* device)
SERIAL_BAUDRATE = int(os.environ.get('ZEBRA_BRIDGE_SERIAL_BAUDRATE', 9600))

# Network transport default port (raw ZPL/CPCL)
NETWORK_PORT = 9100

# =============================================================================
# Job Dispatch
# =============================================================================

DISPATCH_WORKERS = int(os.environ.get('ZEBRA_BRIDGE_DISPATCH_WORKERS', 2))

# How long stop() waits for an in-flight write before abandoning it
SHUTDOWN_TIMEOUT = 5  # seconds

# =============================================================================
# Storage Configuration
# =============================================================================

DATA_DIR = os.environ.get('ZEBRA_BRIDGE_DATA_DIR', os.path.expanduser('~/.zebra_bridge'))

LOG_LEVEL = os.environ.get('ZEBRA_BRIDGE_LOG_LEVEL', 'INFO').upper()
LOG_FILE = os.environ.get('ZEBRA_BRIDGE_LOG_FILE')


class PrinterConfigStore:
    """Persisted printer selection (address and display name)."""

    FILENAME = 'printer.json'

    def __init__(self, data_dir: Optional[str] = None, env_address: Optional[str] = None):
        self.data_dir = Path(data_dir or DATA_DIR)
        if env_address is None:
            env_address = os.environ.get('ZEBRA_BRIDGE_PRINTER_ADDRESS')
        self.env_address = env_address or None

    @property
    def path(self) -> Path:
        return self.data_dir / self.FILENAME

    def load(self) -> Dict[str, Any]:
        """Load stored printer settings, empty dict if none."""
        try:
            if self.path.exists():
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return data
                logger.warning("Ignoring malformed printer config in %s", self.path)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load printer config: %s", e)
        return {}

    def save(self, address: str, name: Optional[str] = None):
        """Save printer address and display name."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        data = {
            'printer_address': address,
            'printer_name': name or DEFAULT_PRINTER_NAME,
        }
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        logger.info("Saved printer address %s to %s", address, self.path)

    def get_configured_address(self) -> Optional[str]:
        """
        Resolve the printer address.

        The environment variable wins and is remembered for later starts.
        """
        if self.env_address:
            stored = self.load()
            if stored.get('printer_address') != self.env_address:
                try:
                    self.save(self.env_address, stored.get('printer_name'))
                except OSError as e:
                    logger.warning("Could not persist printer address: %s", e)
            return self.env_address
        return self.load().get('printer_address') or None

    def get_printer_name(self) -> str:
        return self.load().get('printer_name') or DEFAULT_PRINTER_NAME
