"""Binary HID command protocol for the Spike-A-Flat dimmer."""

from .opcodes import (
    FRAME_SIZE,
    MAX_BRIGHTNESS,
    MIN_BRIGHTNESS,
    MIN_INTENSITY_RESPONSE,
    Opcode,
    RESPONSE_LENGTH,
    STATE_COMMIT,
    USBD_PID,
    USBD_VID,
)
from .parser import decode_intensity, decode_state, is_ack
from .serializer import (
    build_frame,
    get_intensity_frame,
    get_state_frame,
    set_intensity_frame,
    set_state_frame,
)

__all__ = [
    "FRAME_SIZE",
    "MAX_BRIGHTNESS",
    "MIN_BRIGHTNESS",
    "MIN_INTENSITY_RESPONSE",
    "Opcode",
    "RESPONSE_LENGTH",
    "STATE_COMMIT",
    "USBD_PID",
    "USBD_VID",
    "build_frame",
    "decode_intensity",
    "decode_state",
    "get_intensity_frame",
    "get_state_frame",
    "is_ack",
    "set_intensity_frame",
    "set_state_frame",
]
