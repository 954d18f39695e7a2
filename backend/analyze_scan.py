from collections import Counter
from types import MappingProxyType

from channels import channel_of
from models import ChannelUsage, ScanSummary

# above this share of the busiest channel's count a channel is shown as congested
CONGESTED_RATIO = 0.5


def retained(access_points):
    # hidden networks broadcast an empty name
    return [ap for ap in access_points if ap.name]


def aggregate(access_points):
    """
    Build the per-channel histogram for one scan.

    Returns a ScanSummary with the named networks sorted strongest first
    (stable, so equal signals keep their scan order), a read-only
    channel -> count mapping in ascending channel order, and whether any
    named network sits at 5000 MHz or above.
    """
    nets = sorted(retained(access_points), key=lambda ap: ap.signal_strength_dbm, reverse=True)

    counts = Counter(channel_of(ap.frequency_mhz) for ap in nets)
    histogram = MappingProxyType(dict(sorted(counts.items())))

    has_5ghz = any(ap.frequency_mhz >= 5000 for ap in nets)

    return ScanSummary(networks=tuple(nets), histogram=histogram, has_5ghz_present=has_5ghz)


def channel_usage(histogram):
    """Rows for a networks-per-channel bar chart, ordered by channel."""
    if not histogram:
        return []
    busiest = max(histogram.values())
    rows = []
    for ch in sorted(histogram):
        ratio = histogram[ch] / busiest
        rows.append(ChannelUsage(
            channel=ch,
            count=histogram[ch],
            ratio=round(ratio, 4),
            congested=ratio > CONGESTED_RATIO,
        ))
    return rows
