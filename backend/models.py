from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from channels import channel_of


# ============================================================
# Scan records
# ============================================================

class AccessPoint(BaseModel):
  """One observed (or the currently connected) wireless network."""

  model_config = ConfigDict(frozen=True)

  name: str = ""
  hardware_id: str = ""
  frequency_mhz: int = Field(default=0, ge=0)
  signal_strength_dbm: int = 0

  @property
  def channel(self) -> int:
    return channel_of(self.frequency_mhz)


@dataclass(frozen=True)
class ScanSummary:
  # retained networks, strongest first
  networks: Tuple[AccessPoint, ...]
  histogram: Mapping[int, int]
  has_5ghz_present: bool


@dataclass(frozen=True)
class ChannelUsage:
  channel: int
  count: int
  ratio: float
  congested: bool


# ============================================================
# Report / API payloads
# ============================================================

class NetworkOut(BaseModel):
  name: str
  hardware_id: str
  frequency_mhz: int
  signal_strength_dbm: int
  channel: int

  @classmethod
  def from_access_point(cls, ap: AccessPoint) -> "NetworkOut":
    return cls(**ap.model_dump(), channel=ap.channel)


class ChannelUsageOut(BaseModel):
  channel: int
  count: int
  ratio: float
  congested: bool


class ScanReport(BaseModel):
  current: Optional[NetworkOut] = None
  current_channel: int = 0
  networks: List[NetworkOut] = []
  histogram: Dict[int, int] = {}
  has_5ghz_present: bool = False
  channel_usage: List[ChannelUsageOut] = []
  suggestion: str = ""


class SuggestRequest(BaseModel):
  current_frequency_mhz: int
  networks: List[AccessPoint] = []
