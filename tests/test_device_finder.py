"""Unit tests for dimmer discovery."""

import unittest
from unittest.mock import MagicMock, patch

from spikeaflat.device_finder import (
    USBD_PID,
    USBD_VID,
    find_devices,
    find_first_device,
    is_device_available,
    is_matching_device,
)
from spikeaflat.errors import DeviceNotFoundError
from spikeaflat.models import DeviceInfo
from spikeaflat.transport.simulated import SimulatedDimmerTransport


def make_info(path, vid=USBD_VID, pid=USBD_PID, serial=None):
    return DeviceInfo(path=path, vid=vid, pid=pid, serial_number=serial)


class TestMatching(unittest.TestCase):

    def test_matching_ids(self):
        self.assertTrue(is_matching_device(make_info(b"a")))
        self.assertFalse(is_matching_device(make_info(b"a", vid=0x1234)))
        self.assertFalse(is_matching_device(make_info(b"a", pid=0x1234)))


class TestFindDevices(unittest.TestCase):

    def setUp(self):
        self.transport = MagicMock()

    def test_enumerates_with_ids(self):
        self.transport.enumerate.return_value = []
        find_devices(self.transport)
        self.transport.enumerate.assert_called_once_with(0x04D8, 0xF5D1)

    def test_filters_foreign_devices(self):
        self.transport.enumerate.return_value = [
            make_info(b"kbd", vid=0x046D, pid=0xC31C),
            make_info(b"dimmer"),
        ]
        devices = find_devices(self.transport)
        self.assertEqual([d.path for d in devices], [b"dimmer"])

    def test_first_device_no_match(self):
        self.transport.enumerate.return_value = []
        with self.assertRaises(DeviceNotFoundError):
            find_first_device(self.transport)

    def test_first_device_picks_first(self):
        self.transport.enumerate.return_value = [
            make_info(b"one", serial="S1"),
            make_info(b"two", serial="S2"),
        ]
        self.assertEqual(find_first_device(self.transport).serial_number, "S1")


class TestAvailability(unittest.TestCase):

    def test_available_with_simulator(self):
        self.assertTrue(is_device_available(SimulatedDimmerTransport()))

    def test_not_available(self):
        self.assertFalse(is_device_available(SimulatedDimmerTransport(present=False)))

    def test_simulator_uses_dimmer_ids(self):
        info = find_first_device(SimulatedDimmerTransport())

        self.assertEqual((info.vid, info.pid), (USBD_VID, USBD_PID))
        self.assertEqual((USBD_VID, USBD_PID), (0x04D8, 0xF5D1))

    @patch('spikeaflat.device_finder.HidApiTransport')
    def test_default_transport(self, mock_transport_class):
        mock_transport_class.return_value.enumerate.return_value = [make_info(b"x")]
        self.assertTrue(is_device_available())
        mock_transport_class.assert_called_once_with()


if __name__ == '__main__':
    unittest.main()
