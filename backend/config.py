"""
AirScan - Configuration Module

Settings are read from the environment (and a local .env file, if present).
"""

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

# ===========================
# Scanner Settings
# ===========================

# auto | nmcli | macos | static
SCANNER = os.getenv("AIRSCAN_SCANNER", "auto").lower()

# snapshot used by the static scanner
SCAN_FILE = Path(os.getenv("AIRSCAN_SCAN_FILE", str(BASE_DIR / "wifi_scan.json")))

# seconds before a platform scan command is abandoned
SCAN_TIMEOUT = int(os.getenv("AIRSCAN_SCAN_TIMEOUT", 30))

# ===========================
# Server Settings
# ===========================

HOST = os.getenv("AIRSCAN_HOST", "0.0.0.0")
PORT = int(os.getenv("AIRSCAN_PORT", 8787))

CORS_ORIGINS = [
    o.strip() for o in os.getenv("AIRSCAN_CORS_ORIGINS", "*").split(",") if o.strip()
]

# ===========================
# Logging Settings
# ===========================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level=None):
    logging.basicConfig(
        level=getattr(logging, level or LOG_LEVEL, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
