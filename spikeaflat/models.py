"""Immutable data models shared by the transport, finder and controller layers.

All models are frozen dataclasses (or enums) so they can be handed across
threads without copying.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Generic, Optional, TypeVar

from .errors import DimmerError

T = TypeVar("T")


@dataclass(frozen=True)
class DeviceInfo:
    """
    Representation of one HID device as reported by enumeration.

    Attributes:
        path: Platform path to open the device with (bytes on most hidapi backends).
        vid: USB Vendor ID.
        pid: USB Product ID.
        manufacturer: USB manufacturer string, if available.
        product: USB product string, if available.
        serial_number: USB serial string, if available.
    """
    path: bytes
    vid: int
    pid: int
    manufacturer: Optional[str] = None
    product: Optional[str] = None
    serial_number: Optional[str] = None

    @property
    def device_id(self) -> str:
        """
        Identifier for the device.

        Prefer the USB serial number; fall back to the path if it is missing.
        """
        if self.serial_number:
            return self.serial_number
        if isinstance(self.path, bytes):
            return self.path.decode("utf-8", errors="replace")
        return str(self.path)


class CalibratorStatus(IntEnum):
    """Standardized calibrator states, for adapters translating raw state bytes."""
    NOT_PRESENT = 0
    OFF = 1
    NOT_READY = 2
    READY = 3
    UNKNOWN = 4
    ERROR = 5

    @classmethod
    def from_raw(cls, raw: int) -> CalibratorStatus:
        """Map a raw state byte to a status; unrecognised codes become UNKNOWN."""
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a controller operation: either a value or a DimmerError.

    Example:
        >>> result = Result.capture(dimmer.get_brightness)
        >>> if result.ok:
        ...     print(result.value)
        ... else:
        ...     print(type(result.error).__name__)
    """
    value: Optional[T] = None
    error: Optional[DimmerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or re-raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def capture(cls, func: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
        """Run ``func`` and capture any DimmerError it raises.

        Errors that are not DimmerErrors propagate unchanged.
        """
        try:
            return cls(value=func(*args, **kwargs))
        except DimmerError as e:
            return cls(error=e)
