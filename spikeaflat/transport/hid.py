"""hidapi transport for the Spike-A-Flat dimmer.

Wraps ``hid.device`` from the ``hidapi`` distribution (cython-hidapi). hidapi
signals I/O failures by raising; this layer turns them back into the result
codes of the HidTransport contract and logs them.

hidapi expects the report ID as the first byte of every write. The dimmer has
a single unnumbered report, so each command frame goes out behind ID 0x00.
"""
from __future__ import annotations

import logging
from typing import List, Optional

import hid

from ..models import DeviceInfo
from .base import HidTransport

logger = logging.getLogger(__name__)

REPORT_ID = 0x00


def _hid_to_info(d: dict) -> DeviceInfo:
    """Convert an hid.enumerate() entry to DeviceInfo."""
    return DeviceInfo(
        path=d["path"],
        vid=d["vendor_id"],
        pid=d["product_id"],
        manufacturer=d.get("manufacturer_string") or None,
        product=d.get("product_string") or None,
        serial_number=d.get("serial_number") or None,
    )


class HidApiTransport(HidTransport):
    """HidTransport backed by hidapi.

    The device is opened in blocking mode; reads are bounded by the timeout
    passed to read().
    """

    def __init__(self):
        self._device: Optional[hid.device] = None
        self._info: Optional[DeviceInfo] = None

    def enumerate(self, vendor_id: int, product_id: int) -> List[DeviceInfo]:
        return [_hid_to_info(d) for d in hid.enumerate(vendor_id, product_id)]

    def open(self, info: DeviceInfo) -> None:
        if self._device is not None:
            logger.warning("Already open")
            return

        device = hid.device()
        path = info.path if isinstance(info.path, (bytes, bytearray)) else str(info.path).encode()
        device.open_path(path)
        try:
            device.set_nonblocking(False)
        except (OSError, ValueError):
            device.close()
            raise

        self._device = device
        self._info = info
        logger.info(f"Opened HID device {info.device_id} ({info.vid:04x}:{info.pid:04x})")

    def close(self) -> None:
        if self._device is None:
            return

        try:
            self._device.close()
        except (OSError, ValueError) as e:
            logger.error(f"Error closing HID device: {e}")
        finally:
            self._device = None
            logger.info("Closed HID device")

    def is_open(self) -> bool:
        return self._device is not None

    def write(self, report: bytes) -> int:
        if self._device is None:
            logger.warning("Cannot write, device not open")
            return -1

        try:
            return self._device.write(bytes([REPORT_ID]) + bytes(report))
        except (OSError, ValueError) as e:
            logger.error(f"HID write error: {e}")
            return -1

    def read(self, length: int, timeout_ms: int) -> bytes:
        if self._device is None:
            logger.warning("Cannot read, device not open")
            return b""

        try:
            data = self._device.read(length, timeout_ms)
        except (OSError, ValueError) as e:
            logger.error(f"HID read error: {e}")
            return b""
        return bytes(data)
