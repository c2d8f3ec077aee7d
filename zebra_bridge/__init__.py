"""
Zebra Bridge
============

HTTP-to-Bluetooth relay for label printers without a network interface.

Emulates the Browser Print discovery API so browser clients can print to a
single Bluetooth (RFCOMM/SPP) printer through a local HTTP endpoint.

Usage:
    python -m zebra_bridge

API Endpoints:
    GET  /status, /api/status        - Printer connection status
    POST /print, /api/print          - Submit print job (fire-and-forget)
    GET  /available, /api/available  - Is a printer configured
    GET  /default, /api/default      - Default printer (Browser Print)
    GET  /health, /                  - Health check
"""

__version__ = '1.0.0'
__author__ = 'Wohnmanufactur'
