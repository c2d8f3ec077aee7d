"""
Serial Transport
================

Bluetooth printers bound to a tty (``rfcomm bind`` -> /dev/rfcomm0) or any
other serial device, opened with pyserial.
"""

import serial

from .base import BaseStream, BaseTransport
from ..config import SERIAL_BAUDRATE, WRITE_TIMEOUT


class SerialStream(BaseStream):
    """Stream over an open pyserial port."""

    def __init__(self, port: serial.Serial):
        self._port = port

    def write(self, data: bytes) -> None:
        written = self._port.write(data)
        if written is not None and written != len(data):
            raise OSError(f"Short write: {written} of {len(data)} bytes")

    def flush(self) -> None:
        self._port.flush()

    def close(self) -> None:
        self._port.close()

    @property
    def is_open(self) -> bool:
        return self._port.is_open


class SerialTransport(BaseTransport):
    """Serial transport, address is the device path."""

    name = 'serial'

    def __init__(self, baudrate: int = SERIAL_BAUDRATE, write_timeout: float = WRITE_TIMEOUT):
        self.baudrate = baudrate
        self.write_timeout = write_timeout

    def connect(self, address: str) -> SerialStream:
        try:
            port = serial.Serial(
                address,
                self.baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=1,
                write_timeout=self.write_timeout,
            )
        except serial.SerialException as e:
            raise ConnectionError(f"Cannot open serial device {address}: {e}") from e
        return SerialStream(port)
