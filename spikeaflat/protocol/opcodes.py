"""Spike-A-Flat HID command protocol constants.

Every exchange is one fixed-size command report from the host followed by one
response report from the device. Byte 0 of a command is the opcode; the
following bytes carry either a little-endian operand or a sub-command.
"""
from __future__ import annotations

from enum import IntEnum

USBD_VID = 0x04D8
USBD_PID = 0xF5D1


class Opcode(IntEnum):
    """Command opcodes understood by the dimmer firmware."""
    SET_STATE = 0x10
    GET_STATE = 0x11
    SET_INTENSITY = 0x20
    GET_INTENSITY = 0x21


# SET_STATE sub-command that applies the pending intensity
STATE_COMMIT = 3

FRAME_SIZE = 8  # bytes per command report
RESPONSE_LENGTH = 5  # bytes requested per response read

# Intensity replies carry opcode + low + high
MIN_INTENSITY_RESPONSE = 3

MIN_BRIGHTNESS = 0
MAX_BRIGHTNESS = 1023
