#!/usr/bin/env python3
"""
Interactive Dimmer Test Script.

Connects to the Spike-A-Flat, steps the brightness, polls the calibrator
state until it reports ready, and disconnects (turning the panel off).

Run with --simulate to use the in-memory device instead of hardware.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add SDK to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from spikeaflat import (
    CalibratorStatus,
    DeviceNotFoundError,
    DimmerController,
    DimmerError,
    Result,
    SimulatedDimmerTransport,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)

POLL_INTERVAL = 0.2  # seconds
READY_TIMEOUT = 10.0  # seconds


def wait_until_ready(dimmer: DimmerController) -> None:
    start = time.time()
    while time.time() - start < READY_TIMEOUT:
        status = CalibratorStatus.from_raw(dimmer.get_state())
        if status == CalibratorStatus.READY:
            return
        print(f"  State: {status.name}")
        time.sleep(POLL_INTERVAL)
    print("  Calibrator did not become ready")


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--simulate", action="store_true", help="use a simulated dimmer")
    parser.add_argument("levels", nargs="*", type=int, default=[20, 1000])
    args = parser.parse_args()

    transport = SimulatedDimmerTransport() if args.simulate else None

    print("Looking for Spike-A-Flat...")
    try:
        dimmer = DimmerController(turn_off_on_disconnect=True, transport=transport)
    except DeviceNotFoundError as e:
        print(f"✗ {e}")
        print("  Make sure the dimmer is plugged in")
        return 1

    info = dimmer.device_info
    print(f"✓ Found {info.product or 'dimmer'} (serial {info.serial_number or '?'})")

    try:
        dimmer.connect()

        result = Result.capture(dimmer.get_brightness)
        if result.ok:
            print(f"Brightness: {result.value}")
        else:
            print(f"Brightness unavailable: {result.error}")

        for level in args.levels:
            print(f"\nSetting brightness to {level}...")
            dimmer.set_brightness(level)
            wait_until_ready(dimmer)
            print(f"Brightness: {dimmer.get_brightness()}")

    except DimmerError as e:
        print(f"✗ {type(e).__name__}: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        print("\nDisconnecting...")
        dimmer.dispose()
        print("Done.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
