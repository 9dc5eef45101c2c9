"""Transport layer for dimmer communication."""

from .base import HidTransport
from .hid import HidApiTransport
from .simulated import SimulatedDimmerTransport

__all__ = ["HidTransport", "HidApiTransport", "SimulatedDimmerTransport"]
