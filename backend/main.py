from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime, timezone
from typing import List

import config
from analyze_scan import aggregate, channel_usage
from models import ChannelUsageOut, NetworkOut, ScanReport, SuggestRequest
from optimizer import suggest
from scanner import build_report, get_scanner, take_snapshot


# ============================================================
# FastAPI App
# ============================================================

app = FastAPI(title="AirScan Backend (FastAPI)")

app.add_middleware(
  CORSMiddleware,
  allow_origins=config.CORS_ORIGINS,
  allow_credentials=True,
  allow_methods=["*"],
  allow_headers=["*"],
)


def scanner_dependency():
  return get_scanner()


@app.get("/health")
def health():
  return {"ok": True, "ts": datetime.now(timezone.utc).isoformat()}


# ============================================================
# Scan Endpoints
# ============================================================

@app.get("/current-network")
def current_network(scanner=Depends(scanner_dependency)):
  current, _ = take_snapshot(scanner)
  if current is None:
    return {}
  return NetworkOut.from_access_point(current)


@app.get("/scan", response_model=ScanReport)
def scan(scanner=Depends(scanner_dependency)):
  """
  Full pipeline for one snapshot: the named networks strongest first, the
  per-channel histogram, bar chart rows and the channel suggestion.
  """
  current, networks = take_snapshot(scanner)
  return build_report(current, networks)


@app.get("/channel-usage", response_model=List[ChannelUsageOut])
def channel_usage_view(scanner=Depends(scanner_dependency)):
  _, networks = take_snapshot(scanner)
  rows = channel_usage(aggregate(networks).histogram)
  return [ChannelUsageOut(**vars(row)) for row in rows]


@app.post("/suggest")
def suggest_endpoint(payload: SuggestRequest):
  """
  Suggestion for a client that scans by itself.

  Body:
    {
      "current_frequency_mhz": 2437,
      "networks": [{"name": "...", "hardware_id": "...", "frequency_mhz": 2462, "signal_strength_dbm": -60}]
    }
  """
  return {"suggestion": suggest(payload.current_frequency_mhz, payload.networks)}


def run():
  import uvicorn

  config.configure_logging()
  uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
  run()
