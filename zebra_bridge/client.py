"""
Zebra Bridge Client
===================

Python SDK for talking to a running bridge.

Usage:
    from zebra_bridge.client import BridgeClient

    client = BridgeClient('http://localhost:9100')

    # Is a printer configured / connected?
    client.default_printer()
    client.status()

    # Print raw CPCL/ZPL (fire-and-forget)
    client.print_raw('! 0 200 200 1\\r\\nPRINT\\r\\n')
"""

import requests
from typing import Dict, Any, Optional, Union


class BridgeClient:
    """Client for the bridge HTTP API."""

    def __init__(self, base_url: str = 'http://localhost:9100', timeout: float = 10):
        """
        Initialize client.

        Args:
            base_url: Base URL of the bridge
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def _request(self, method: str, endpoint: str, json: Dict = None,
                 data: Optional[bytes] = None) -> Dict[str, Any]:
        """Make API request."""
        if method not in ('GET', 'POST'):
            raise ValueError(f'Unknown method: {method}')
        url = f'{self.base_url}{endpoint}'

        try:
            if method == 'GET':
                response = requests.get(url, headers={'Accept': 'application/json'}, timeout=self.timeout)
            else:
                response = requests.post(url, json=json, data=data, timeout=self.timeout)

            return response.json()

        except requests.exceptions.Timeout:
            return {'success': False, 'error': 'Request timeout'}
        except requests.exceptions.ConnectionError:
            return {'success': False, 'error': f'Cannot connect to {self.base_url}'}
        except ValueError as e:
            return {'success': False, 'error': f'Invalid response: {e}'}

    # =========================================================================
    # Health
    # =========================================================================

    def health(self) -> Dict[str, Any]:
        """Check service health."""
        return self._request('GET', '/health')

    def is_online(self) -> bool:
        """Check if the bridge is reachable."""
        return self.health().get('status') == 'ok'

    # =========================================================================
    # Printer
    # =========================================================================

    def status(self) -> Dict[str, Any]:
        """Printer connection status."""
        return self._request('GET', '/api/status')

    def is_connected(self) -> bool:
        return bool(self.status().get('connected'))

    def available(self) -> Dict[str, Any]:
        """Whether a printer is configured."""
        return self._request('GET', '/api/available')

    def default_printer(self) -> Optional[Dict[str, Any]]:
        """Default printer, or None if none is configured."""
        result = self._request('GET', '/api/default')
        return result if result.get('available') else None

    # =========================================================================
    # Printing
    # =========================================================================

    def print_label(self, data: str) -> Dict[str, Any]:
        """Submit CPCL/ZPL wrapped as ``{"data": ...}``."""
        return self._request('POST', '/api/print', json={'data': data})

    def print_raw(self, data: Union[str, bytes]) -> Dict[str, Any]:
        """Submit raw CPCL/ZPL as the request body."""
        if isinstance(data, str):
            data = data.encode('utf-8')
        return self._request('POST', '/api/print', data=data)
