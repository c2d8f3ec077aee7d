#!/usr/bin/env python
"""
Zebra Bridge - Standalone Entry Point

Run directly:
    python main.py

Or with environment variables:
    ZEBRA_BRIDGE_PRINTER_ADDRESS=AA:BB:CC:DD:EE:FF ZEBRA_BRIDGE_PORT=9100 python main.py
"""

import os
import sys

# Ensure package is importable when running directly
if __name__ == '__main__':
    package_dir = os.path.dirname(os.path.abspath(__file__))
    if package_dir not in sys.path:
        sys.path.insert(0, package_dir)

from zebra_bridge.__main__ import main


if __name__ == '__main__':
    main()
