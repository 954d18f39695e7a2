"""
Pytest configuration and shared fixtures for AirScan tests
"""
import os
import sys
from pathlib import Path

import pytest

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "backend"))

from models import AccessPoint

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


def ap(name, frequency_mhz, signal_strength_dbm=-60, hardware_id=""):
    return AccessPoint(
        name=name,
        hardware_id=hardware_id or f"02:00:00:00:{frequency_mhz % 256:02x}:{abs(signal_strength_dbm):02x}",
        frequency_mhz=frequency_mhz,
        signal_strength_dbm=signal_strength_dbm,
    )


@pytest.fixture
def scan_file():
    return FIXTURES_DIR / "wifi_scan.json"


@pytest.fixture
def crowded_channel_6():
    """Five named networks on channel 6 and one on channel 1."""
    return [
        ap("a", 2437, -50),
        ap("b", 2437, -55),
        ap("c", 2437, -60),
        ap("d", 2437, -65),
        ap("e", 2437, -70),
        ap("f", 2412, -75),
    ]
