"""Abstract base class for the HID transport layer.

The HidTransport interface is the only path between the controller and the
hardware. It mirrors the small report-based API of hidapi: enumerate, open a
single device, write one report, read one report with a timeout.

Key principles:
- Result codes, not exceptions, for per-report I/O failures
- One open device per transport instance
- No protocol knowledge (frames are opaque bytes)
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from ..models import DeviceInfo


class HidTransport(ABC):
    """Abstract HID device service.

    Transports are responsible for:
    1. Enumerating devices by vendor/product ID
    2. Managing the lifecycle of one open device
    3. Moving raw report bytes in and out

    Transports should NOT interpret frames or apply locking. The controller
    owns both.
    """

    @abstractmethod
    def enumerate(self, vendor_id: int, product_id: int) -> List[DeviceInfo]:
        """List attached devices matching the given IDs.

        Returns:
            DeviceInfo for each match, in enumeration order
        """
        pass

    @abstractmethod
    def open(self, info: DeviceInfo) -> None:
        """Open the given device.

        Raises:
            OSError: If the device cannot be opened
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the open device.

        Should be safe to call multiple times.
        """
        pass

    @abstractmethod
    def is_open(self) -> bool:
        """Check if a device is currently open."""
        pass

    @abstractmethod
    def write(self, report: bytes) -> int:
        """Write one report.

        Returns:
            Number of bytes written, negative on error
        """
        pass

    @abstractmethod
    def read(self, length: int, timeout_ms: int) -> bytes:
        """Read one report, blocking for at most ``timeout_ms``.

        Args:
            length: Maximum number of bytes to read
            timeout_ms: Read timeout in milliseconds

        Returns:
            Bytes read; empty on timeout or error
        """
        pass

    def __enter__(self) -> HidTransport:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager support - close on exit."""
        self.close()
