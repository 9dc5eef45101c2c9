"""Discovery of the dimmer among attached HID devices."""
from __future__ import annotations

import logging
from typing import List, Optional

from .errors import DeviceNotFoundError
from .models import DeviceInfo
from .protocol import USBD_PID, USBD_VID
from .transport.base import HidTransport
from .transport.hid import HidApiTransport

logger = logging.getLogger(__name__)


def is_matching_device(
    info: DeviceInfo,
    *,
    expected_vid: int = USBD_VID,
    expected_pid: int = USBD_PID,
) -> bool:
    """Decide whether a DeviceInfo describes our dimmer."""
    return info.vid == expected_vid and info.pid == expected_pid


def find_devices(
    transport: HidTransport,
    *,
    vendor_id: int = USBD_VID,
    product_id: int = USBD_PID,
) -> List[DeviceInfo]:
    """
    Find all dimmers connected to this machine.

    Some hidapi backends ignore the enumeration filter, so results are
    matched again here.

    Returns:
        List of DeviceInfo objects, in enumeration order.
    """
    return [
        info for info in transport.enumerate(vendor_id, product_id)
        if is_matching_device(info, expected_vid=vendor_id, expected_pid=product_id)
    ]


def find_first_device(
    transport: HidTransport,
    *,
    vendor_id: int = USBD_VID,
    product_id: int = USBD_PID,
) -> DeviceInfo:
    """
    Find the dimmer to use.

    Behaviour:
        - 0 matches  -> DeviceNotFoundError
        - 1+ matches -> return the first one

    There is no disambiguation by serial number.
    """
    matches = find_devices(transport, vendor_id=vendor_id, product_id=product_id)

    if not matches:
        raise DeviceNotFoundError(
            f"No HID device found with VID:PID {vendor_id:04x}:{product_id:04x}"
        )

    if len(matches) > 1:
        logger.debug(
            "Multiple matching dimmers found, using the first. Devices: %s",
            matches,
        )

    return matches[0]


def is_device_available(transport: Optional[HidTransport] = None) -> bool:
    """Check if a dimmer is attached, without opening it."""
    if transport is None:
        transport = HidApiTransport()

    try:
        find_first_device(transport)
        return True
    except DeviceNotFoundError:
        return False
