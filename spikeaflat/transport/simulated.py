"""In-memory simulated dimmer.

Implements the device side of the command protocol so the controller can be
exercised without hardware. Every transport call is recorded in ``calls`` so
callers can check exactly what went over the wire and in which order.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import List, Optional, Tuple

from ..models import DeviceInfo
from ..protocol import MAX_BRIGHTNESS, Opcode, STATE_COMMIT, USBD_PID, USBD_VID
from .base import HidTransport

logger = logging.getLogger(__name__)

# Raw state bytes reported by the simulator
STATE_OFF = 1
STATE_READY = 3


class SimulatedDimmerTransport(HidTransport):
    """HidTransport that behaves like a responsive Spike-A-Flat.

    SET_INTENSITY only stages a value; it becomes visible to GET_INTENSITY
    after a SET_STATE commit, as on the real device.

    Fault injection:
        present: When False, enumeration finds nothing.
        fail_open: open() raises OSError.
        fail_writes: write() returns -1.
        fail_after_writes: Writes succeed this many times, then fail.
        response_length: Truncate every reply to this many bytes.
        unresponsive: Reads time out (return empty).
        io_delay: Seconds to sleep inside each write and read.
    """

    def __init__(
        self,
        present: bool = True,
        serial_number: str = "SIM0001",
        io_delay: float = 0.0,
    ):
        self.present = present
        self.serial_number = serial_number
        self.io_delay = io_delay

        self.fail_open = False
        self.fail_writes = False
        self.fail_after_writes: Optional[int] = None
        self.response_length: Optional[int] = None
        self.unresponsive = False

        self.pending_intensity = 0
        self.intensity = 0
        self.state = STATE_OFF

        self.calls: List[Tuple[str, bytes]] = []
        self._open = False
        self._reply: Optional[bytes] = None
        self._writes = 0
        self._lock = threading.Lock()

    # HidTransport interface

    def enumerate(self, vendor_id: int, product_id: int) -> List[DeviceInfo]:
        if not self.present:
            return []
        if (vendor_id, product_id) != (USBD_VID, USBD_PID):
            return []
        return [
            DeviceInfo(
                path=b"sim:0",
                vid=USBD_VID,
                pid=USBD_PID,
                manufacturer="Simulated",
                product="Spike-A-Flat",
                serial_number=self.serial_number,
            )
        ]

    def open(self, info: DeviceInfo) -> None:
        self._record("open", b"")
        if self.fail_open:
            raise OSError("open failed")
        self._open = True

    def close(self) -> None:
        self._record("close", b"")
        self._open = False
        self._reply = None

    def is_open(self) -> bool:
        return self._open

    def write(self, report: bytes) -> int:
        report = bytes(report)
        self._record("write", report)
        self._sleep()

        if not self._open or self.fail_writes:
            return -1
        if self.fail_after_writes is not None and self._writes >= self.fail_after_writes:
            return -1
        self._writes += 1

        self._reply = self._handle(report)
        return len(report)

    def read(self, length: int, timeout_ms: int) -> bytes:
        self._sleep()
        reply, self._reply = self._reply, None

        if not self._open or self.unresponsive or reply is None:
            reply = b""
        else:
            reply = reply[:length]
            if self.response_length is not None:
                reply = reply[:self.response_length]

        self._record("read", reply)
        return reply

    # Inspection helpers

    def writes(self) -> List[bytes]:
        """All reports written so far, in order."""
        with self._lock:
            return [data for kind, data in self.calls if kind == "write"]

    def reset_calls(self) -> None:
        with self._lock:
            self.calls.clear()

    # Internal methods

    def _handle(self, report: bytes) -> Optional[bytes]:
        """Apply a command and build the reply the firmware would send."""
        opcode = report[0]

        if opcode == Opcode.SET_INTENSITY:
            value = report[1] + 256 * report[2]
            self.pending_intensity = min(value, MAX_BRIGHTNESS)
            return bytes([opcode, report[1], report[2], 0, 0])

        if opcode == Opcode.GET_INTENSITY:
            return bytes([opcode]) + self.intensity.to_bytes(2, "little") + b"\x00\x00"

        if opcode == Opcode.SET_STATE:
            if report[1] == STATE_COMMIT:
                self.intensity = self.pending_intensity
                self.state = STATE_READY if self.intensity else STATE_OFF
            return bytes([opcode, self.state, 0, 0, 0])

        if opcode == Opcode.GET_STATE:
            return bytes([opcode, self.state, 0, 0, 0])

        logger.debug(f"Simulator ignoring unknown opcode 0x{opcode:02x}")
        return None

    def _record(self, kind: str, data: bytes) -> None:
        with self._lock:
            self.calls.append((kind, data))

    def _sleep(self) -> None:
        if self.io_delay:
            time.sleep(self.io_delay)
