"""Response frame decoding for the dimmer protocol.

Decoders return None for replies too short to carry their payload; the
controller decides which error that becomes.
"""
from __future__ import annotations

from typing import Optional

from .opcodes import MIN_INTENSITY_RESPONSE


def decode_intensity(response: bytes) -> Optional[int]:
    """Decode a GET_INTENSITY reply.

    Examples:
        >>> decode_intensity(bytes([0x21, 0xFF, 0x03]))
        1023
        >>> decode_intensity(bytes([0x21, 0xFF])) is None
        True
    """
    if len(response) < MIN_INTENSITY_RESPONSE:
        return None
    return response[1] + 256 * response[2]


def decode_state(response: bytes) -> Optional[int]:
    """Decode a GET_STATE reply into the raw state byte."""
    if len(response) < 2:
        return None
    return response[1]


def is_ack(response: bytes) -> bool:
    """Any non-empty reply acknowledges a SET command."""
    return len(response) > 0
