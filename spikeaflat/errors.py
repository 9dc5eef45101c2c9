"""Error taxonomy for the dimmer SDK.

Every failure of a controller operation surfaces as one of these types.
"""


class DimmerError(RuntimeError):
    """Base class for all dimmer errors."""
    pass


class DeviceNotFoundError(DimmerError):
    """Raised when no HID device with the dimmer's VID/PID is present."""
    pass


class NotConnectedError(DimmerError):
    """Raised when the session is closed or an exchange with the device fails."""
    pass


class LockTimeoutError(DimmerError):
    """Raised when exclusive access to the device is not obtained in time."""
    def __init__(self, message, timeout):
        super().__init__(message)
        self.timeout = timeout


class InvalidValueError(DimmerError, ValueError):
    """Raised when a brightness value is outside the supported range."""
    def __init__(self, message, value):
        super().__init__(message)
        self.value = value
