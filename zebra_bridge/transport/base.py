"""
Base Transport
==============

Abstract byte-stream providers for reaching the printer.
"""

from abc import ABC, abstractmethod


class BaseStream(ABC):
    """An open byte stream to the printer."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """
        Write the full payload.

        Raises:
            OSError: If the stream fails mid-write
        """
        pass

    def flush(self) -> None:
        """Flush buffered output (no-op for unbuffered streams)."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the stream. Must be safe to call more than once."""
        pass

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Whether the stream still looks usable."""
        pass


class BaseTransport(ABC):
    """Abstract base class for printer transports."""

    name = 'base'

    @abstractmethod
    def connect(self, address: str) -> BaseStream:
        """
        Open a new stream to the printer.

        Args:
            address: Transport-specific printer address

        Returns:
            Open stream

        Raises:
            OSError: If the printer cannot be reached
        """
        pass
