"""Controller for the Spike-A-Flat USB HID flat-field dimmer.

The dimmer is a dimmable light panel driven over USB HID
(VID=0x04D8, PID=0xF5D1). Each operation is one or two request/response
exchanges of small fixed-size reports.

This module handles:
- Device discovery and session lifecycle
- Exclusive, timeout-bounded access to the device handle
- Mapping transport failures to typed errors

Note: The controller keeps no cached device state. get_state() and
      get_brightness() always ask the device.
"""
from __future__ import annotations

import asyncio
import logging
import threading
from typing import Optional

from .device_finder import USBD_PID, USBD_VID, find_first_device
from .errors import (
    DimmerError,
    InvalidValueError,
    LockTimeoutError,
    NotConnectedError,
)
from .models import DeviceInfo
from .protocol import (
    MAX_BRIGHTNESS,
    MIN_BRIGHTNESS,
    RESPONSE_LENGTH,
    decode_intensity,
    decode_state,
    get_intensity_frame,
    get_state_frame,
    is_ack,
    set_intensity_frame,
    set_state_frame,
)
from .transport.base import HidTransport
from .transport.hid import HidApiTransport

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 3.0  # seconds
DEFAULT_READ_TIMEOUT_MS = 1000


class DimmerController:
    """Owns the HID session to one dimmer and speaks its command protocol.

    All protocol operations take a per-instance lock before touching the
    transport and release it before returning, including on error. Lock
    acquisition and each read have separate timeouts.

    Example:
        >>> with DimmerController(turn_off_on_disconnect=True) as dimmer:
        ...     dimmer.set_brightness(512)
        ...     dimmer.get_brightness()
        512
    """

    def __init__(self,
                 turn_off_on_disconnect: bool = False,
                 transport: Optional[HidTransport] = None,
                 lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
                 read_timeout_ms: int = DEFAULT_READ_TIMEOUT_MS):
        """Discover the dimmer. The transport is not opened.

        Args:
            turn_off_on_disconnect: Set brightness to 0 before closing
            transport: HID transport, or None for hidapi
            lock_timeout: Seconds to wait for exclusive access
            read_timeout_ms: Timeout for each response read

        Raises:
            DeviceNotFoundError: If no dimmer is attached
        """
        if transport is None:
            transport = HidApiTransport()

        self.turn_off_on_disconnect = turn_off_on_disconnect
        self._lock_timeout = lock_timeout
        self._read_timeout_ms = read_timeout_ms
        self._transport = transport
        self._lock = threading.Lock()

        self._device: Optional[DeviceInfo] = find_first_device(
            transport, vendor_id=USBD_VID, product_id=USBD_PID
        )
        logger.info(f"Found dimmer {self._device.device_id}")

    @property
    def device_info(self) -> Optional[DeviceInfo]:
        """The discovered device, or None once disposed."""
        return self._device

    @property
    def is_connected(self) -> bool:
        return self._device is not None and self._transport.is_open()

    # Lifecycle

    def connect(self) -> None:
        """Open the HID session. No protocol traffic is sent.

        Raises:
            NotConnectedError: If disposed or the device cannot be opened
        """
        if self._device is None:
            raise NotConnectedError("Dimmer has been disposed")

        try:
            self._transport.open(self._device)
        except OSError as e:
            logger.error(f"Failed to open dimmer {self._device.device_id}: {e}")
            raise NotConnectedError(f"Failed to open dimmer: {e}") from e

        logger.info("Connected to dimmer")

    def disconnect(self) -> None:
        """Close the HID session.

        With turn_off_on_disconnect set, brightness is set to 0 first. A
        failure of that write is logged and does not prevent the close.
        """
        try:
            if self.turn_off_on_disconnect and self.is_connected:
                try:
                    self.set_brightness(0)
                except DimmerError as e:
                    logger.warning(f"Failed to turn off dimmer before disconnect: {e}")
        finally:
            self._transport.close()
            logger.info("Disconnected from dimmer")

    def dispose(self) -> None:
        """Disconnect if connected and release the session. Safe to call repeatedly."""
        if self._device is None:
            return

        try:
            if self._transport.is_open():
                self.disconnect()
        finally:
            self._device = None

    close = dispose

    def __enter__(self) -> DimmerController:
        """Context manager support - connect on enter."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager support - dispose on exit."""
        self.dispose()

    # Protocol operations

    def get_brightness(self) -> int:
        """Read the committed intensity (0-1023) from the device.

        Raises:
            NotConnectedError: Session closed, write failed or short reply
            LockTimeoutError: Exclusive access not obtained in time
        """
        self._require_connected()

        with self._exclusive():
            response = self._exchange(get_intensity_frame())

        value = decode_intensity(response)
        if value is None:
            raise NotConnectedError(f"Short intensity reply ({len(response)} bytes)")
        return value

    def set_brightness(self, value: int) -> None:
        """Set and commit a new intensity.

        The value is staged with SET_INTENSITY and applied with a SET_STATE
        commit, both under one hold of the lock. If this raises, the device
        brightness is indeterminate, not unchanged.

        Raises:
            InvalidValueError: Value outside 0-1023 (no I/O performed)
            NotConnectedError: Session closed or an exchange failed
            LockTimeoutError: Exclusive access not obtained in time
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidValueError(f"Brightness must be an integer, got {value!r}", value)
        if not MIN_BRIGHTNESS <= value <= MAX_BRIGHTNESS:
            raise InvalidValueError(
                f"Brightness {value} outside {MIN_BRIGHTNESS}-{MAX_BRIGHTNESS}", value
            )

        self._require_connected()

        with self._exclusive():
            if not is_ack(self._exchange(set_intensity_frame(value))):
                raise NotConnectedError("Timeout reading intensity acknowledgement")
            if not is_ack(self._exchange(set_state_frame())):
                raise NotConnectedError("Timeout reading commit acknowledgement")

        logger.debug(f"Brightness set to {value}")

    async def set_brightness_async(self, value: int) -> None:
        """Awaitable set_brightness, run in a worker thread.

        Device access is still serialized with every other operation.
        """
        await asyncio.to_thread(self.set_brightness, value)

    def get_state(self) -> int:
        """Query the raw calibrator state byte from the device.

        Raises:
            NotConnectedError: Session closed, write failed or no reply
            LockTimeoutError: Exclusive access not obtained in time
        """
        self._require_connected()

        with self._exclusive():
            response = self._exchange(get_state_frame())

        state = decode_state(response)
        if state is None:
            raise NotConnectedError(f"Short state reply ({len(response)} bytes)")
        return state

    # Internal methods

    def _require_connected(self) -> None:
        if not self.is_connected:
            raise NotConnectedError("Spike-A-Flat not connected")

    def _exclusive(self) -> _Exclusive:
        return _Exclusive(self._lock, self._lock_timeout)

    def _exchange(self, frame: bytes) -> bytes:
        """Write one command frame and read its reply. Caller holds the lock.

        Returns:
            The reply, possibly empty on read timeout

        Raises:
            NotConnectedError: If the write fails
        """
        logger.debug(f"> {frame.hex()}")
        try:
            result = self._transport.write(frame)
        except OSError as e:
            raise NotConnectedError(f"Error writing: {e}") from e
        if result < 0:
            raise NotConnectedError("Error writing")

        try:
            response = self._transport.read(RESPONSE_LENGTH, self._read_timeout_ms)
        except OSError as e:
            raise NotConnectedError(f"Error reading: {e}") from e
        logger.debug(f"< {response.hex()}")
        return response


class _Exclusive:
    """Acquire a lock with a timeout for the duration of a with-block."""

    def __init__(self, lock: threading.Lock, timeout: float):
        self._lock = lock
        self._timeout = timeout

    def __enter__(self) -> None:
        if not self._lock.acquire(timeout=self._timeout):
            raise LockTimeoutError(
                f"Could not acquire dimmer within {self._timeout}s", self._timeout
            )

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._lock.release()
