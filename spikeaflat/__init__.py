"""Spike-A-Flat SDK - USB HID flat-field dimmer control."""

from .controller import DimmerController
from .device_finder import (
    USBD_PID,
    USBD_VID,
    find_devices,
    find_first_device,
    is_device_available,
)
from .errors import (
    DeviceNotFoundError,
    DimmerError,
    InvalidValueError,
    LockTimeoutError,
    NotConnectedError,
)
from .models import CalibratorStatus, DeviceInfo, Result
from .protocol import MAX_BRIGHTNESS
from .transport import HidApiTransport, HidTransport, SimulatedDimmerTransport

__all__ = [
    "DimmerController",
    "USBD_PID",
    "USBD_VID",
    "find_devices",
    "find_first_device",
    "is_device_available",
    "DeviceNotFoundError",
    "DimmerError",
    "InvalidValueError",
    "LockTimeoutError",
    "NotConnectedError",
    "CalibratorStatus",
    "DeviceInfo",
    "Result",
    "MAX_BRIGHTNESS",
    "HidApiTransport",
    "HidTransport",
    "SimulatedDimmerTransport",
]
