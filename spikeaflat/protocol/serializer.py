"""Command frame construction for the dimmer protocol.

Pure functions with no side effects.
"""
from __future__ import annotations

from .opcodes import (
    FRAME_SIZE,
    MAX_BRIGHTNESS,
    MIN_BRIGHTNESS,
    Opcode,
    STATE_COMMIT,
)


def build_frame(opcode: Opcode, payload: bytes = b"") -> bytes:
    """Build a zero-padded command frame.

    Args:
        opcode: Command opcode for byte 0
        payload: Operand bytes placed from byte 1 onwards

    Returns:
        FRAME_SIZE bytes ready to write to the device

    Raises:
        ValueError: If the payload does not fit in the frame
    """
    if len(payload) > FRAME_SIZE - 1:
        raise ValueError(
            f"Payload too long for frame ({len(payload)} > {FRAME_SIZE - 1})"
        )
    frame = bytearray(FRAME_SIZE)
    frame[0] = int(opcode)
    frame[1:1 + len(payload)] = payload
    return bytes(frame)


def set_intensity_frame(value: int) -> bytes:
    """SET_INTENSITY with the value split into low and high bytes.

    Examples:
        >>> set_intensity_frame(1023).hex()
        '20ff030000000000'
    """
    if not MIN_BRIGHTNESS <= value <= MAX_BRIGHTNESS:
        raise ValueError(f"Intensity out of range: {value}")
    return build_frame(Opcode.SET_INTENSITY, value.to_bytes(2, "little"))


def get_intensity_frame() -> bytes:
    return build_frame(Opcode.GET_INTENSITY)


def set_state_frame(state: int = STATE_COMMIT) -> bytes:
    """SET_STATE with a one-byte sub-command (default: commit)."""
    return build_frame(Opcode.SET_STATE, bytes([state & 0xFF]))


def get_state_frame() -> bytes:
    return build_frame(Opcode.GET_STATE)
