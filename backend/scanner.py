import argparse, json, logging, platform, re, subprocess
from pathlib import Path

from pydantic import ValidationError

import config
from analyze_scan import aggregate, channel_usage
from channels import frequency_of
from models import AccessPoint, ChannelUsageOut, NetworkOut, ScanReport
from optimizer import suggest

logger = logging.getLogger(__name__)


class ScanError(RuntimeError):
    """The platform could not produce scan data."""


def run_cmd(cmd, timeout=None):
    timeout = timeout or config.SCAN_TIMEOUT
    logger.debug("running %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError as e:
        raise ScanError(f"{cmd[0]} not found") from e
    except subprocess.TimeoutExpired as e:
        raise ScanError(f"{cmd[0]} timed out after {timeout}s") from e
    if proc.returncode != 0:
        raise ScanError(f"{cmd[0]} exited with {proc.returncode}: {proc.stderr.strip()}")
    return proc.stdout


def _int(value, default=0):
    m = re.search(r"-?\d+", str(value or ""))
    return int(m.group(0)) if m else default


def parse_signal_noise(s):
    # expected like "-56 dBm / -91 dBm"
    m = re.findall(r"(-?\d+)\s*dBm", s or "")
    if len(m) >= 2:
        return int(m[0]), int(m[1])
    if len(m) == 1:
        return int(m[0]), None
    return None, None


def parse_channel_frequency(ch_str):
    """
    Frequency for a macOS channel description such as "36 (5GHz, 80MHz)".

    Bare channel numbers are taken as 2.4 GHz for 1-14 and 5 GHz otherwise.
    """
    ch = _int(ch_str, default=None)
    if ch is None:
        return 0
    band = re.search(r"(2|5|6)(?:\.4)?\s*GHz", str(ch_str))
    if band:
        return frequency_of(ch, "2.4" if band.group(1) == "2" else band.group(1))
    return frequency_of(ch, "2.4" if 1 <= ch <= 14 else "5")


def split_terse(line):
    # nmcli -t separates with ':' and escapes literal colons as '\:'
    return [f.replace("\\:", ":").replace("\\\\", "\\") for f in re.split(r"(?<!\\):", line)]


def pct_to_dbm(pct):
    # NetworkManager derives its percentage as 2 * (dBm + 100)
    return pct // 2 - 100


# ============================================================
# Scanners
# ============================================================

class WifiScanner:
    """Source of access point snapshots."""

    def scan(self):
        raise NotImplementedError

    def current_connection(self):
        raise NotImplementedError


class NmcliScanner(WifiScanner):
    COMMAND = ["nmcli", "-t", "-f", "IN-USE,SSID,BSSID,FREQ,SIGNAL", "device", "wifi", "list"]

    def _rows(self):
        out = run_cmd(self.COMMAND)
        rows = []
        for line in out.splitlines():
            if not line.strip():
                continue
            parts = split_terse(line)
            if len(parts) < 5:
                logger.warning("skipping malformed nmcli line: %r", line)
                continue
            in_use, ssid, bssid, freq, signal = parts[:5]
            ap = AccessPoint(
                name=ssid,
                hardware_id=bssid,
                frequency_mhz=max(_int(freq), 0),
                signal_strength_dbm=pct_to_dbm(_int(signal)),
            )
            rows.append((in_use.strip() == "*", ap))
        return rows

    def scan(self):
        return tuple(ap for _, ap in self._rows())

    def current_connection(self):
        for in_use, ap in self._rows():
            if in_use:
                return ap
        return None


class MacScanner(WifiScanner):
    COMMAND = ["system_profiler", "SPAirPortDataType", "-json"]

    def _interface(self):
        out = run_cmd(self.COMMAND)
        try:
            data = json.loads(out)
            return data["SPAirPortDataType"][0]["spairport_airport_interfaces"][0]
        except (ValueError, KeyError, IndexError) as e:
            raise ScanError(f"unexpected system_profiler output: {e}") from e

    @staticmethod
    def _to_access_point(n):
        rssi, _noise = parse_signal_noise(n.get("spairport_signal_noise", ""))
        return AccessPoint(
            name=n.get("_name") or "",
            hardware_id=n.get("spairport_network_bssid") or "",
            frequency_mhz=parse_channel_frequency(n.get("spairport_network_channel")),
            signal_strength_dbm=rssi or 0,
        )

    def scan(self):
        iface = self._interface()
        others = iface.get("spairport_airport_other_local_wireless_networks", [])
        return tuple(self._to_access_point(n) for n in others)

    def current_connection(self):
        current = self._interface().get("spairport_current_network_information")
        if not current:
            return None
        return self._to_access_point(current)


class StaticScanner(WifiScanner):
    """
    Serves a saved snapshot: {"current": {...}, "networks": [{...}, ...]}.

    Records use the AccessPoint field names.
    """

    def __init__(self, path):
        self.path = Path(path)

    def _load(self):
        try:
            return json.loads(self.path.read_text())
        except (OSError, ValueError) as e:
            raise ScanError(f"cannot read snapshot {self.path}: {e}") from e

    def scan(self):
        data = self._load()
        try:
            return tuple(AccessPoint.model_validate(n) for n in data.get("networks") or [])
        except ValidationError as e:
            raise ScanError(f"invalid network in {self.path}: {e}") from e

    def current_connection(self):
        current = self._load().get("current")
        if not current:
            return None
        try:
            return AccessPoint.model_validate(current)
        except ValidationError as e:
            raise ScanError(f"invalid current network in {self.path}: {e}") from e


SCANNERS = {
    "nmcli": NmcliScanner,
    "macos": MacScanner,
}


def get_scanner(kind=None, scan_file=None):
    kind = (kind or config.SCANNER).lower()
    if kind == "static":
        return StaticScanner(scan_file or config.SCAN_FILE)
    if kind == "auto":
        kind = "macos" if "darwin" in platform.system().lower() else "nmcli"
    if kind not in SCANNERS:
        raise ValueError(f"unknown scanner {kind!r}, expected one of auto, static, {', '.join(SCANNERS)}")
    return SCANNERS[kind]()


# ============================================================
# Pipeline
# ============================================================

def take_snapshot(scanner):
    """
    Current network and nearby networks, or "no data" for whichever part the
    platform could not provide.
    """
    try:
        current = scanner.current_connection()
    except ScanError as e:
        logger.warning("could not read current connection: %s", e)
        current = None

    try:
        networks = tuple(scanner.scan())
    except ScanError as e:
        logger.warning("scan failed: %s", e)
        networks = ()

    return current, networks


def build_report(current, networks):
    summary = aggregate(networks)
    current_freq = current.frequency_mhz if current else 0

    return ScanReport(
        current=NetworkOut.from_access_point(current) if current else None,
        current_channel=current.channel if current else 0,
        networks=[NetworkOut.from_access_point(ap) for ap in summary.networks],
        histogram=dict(summary.histogram),
        has_5ghz_present=summary.has_5ghz_present,
        channel_usage=[ChannelUsageOut(**vars(row)) for row in channel_usage(summary.histogram)],
        suggestion=suggest(current_freq, networks),
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description="Scan nearby Wi-Fi networks and suggest a channel")
    parser.add_argument("--scanner", choices=["auto", "nmcli", "macos", "static"], default=None,
                        help="Scan backend (default: AIRSCAN_SCANNER or auto)")
    parser.add_argument("--file", default=None, help="Snapshot file for the static scanner")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent")
    args = parser.parse_args(argv)

    config.configure_logging()

    scanner = get_scanner(args.scanner, args.file)
    current, networks = take_snapshot(scanner)
    report = build_report(current, networks)

    print(report.model_dump_json(indent=args.indent))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
