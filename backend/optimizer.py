from analyze_scan import aggregate
from channels import UNKNOWN_CHANNEL, channel_of

# more peers than this on the current channel counts as congestion
CONGESTION_PEER_LIMIT = 3

CONGESTED_MSG = (
    "Your current channel {current} is congested by multiple nearby networks. "
    "Consider changing to channel {best} for better performance."
)
FREE_MSG = "Your current channel {current} looks relatively free. No immediate changes required."
FIVE_GHZ_HINT = (
    "There are also 5 GHz networks available. "
    "Switching to a 5 GHz network can reduce interference if your router supports it."
)


def best_channel(histogram, current_channel):
    """
    Least used recognized channel, starting from the current one.

    Channels are visited in ascending order and only a strictly lower count
    replaces the candidate, so ties go to the lowest channel number.
    """
    best = current_channel
    best_count = histogram.get(current_channel, 0)
    for ch in sorted(histogram):
        if ch == UNKNOWN_CHANNEL:
            continue
        if histogram[ch] < best_count:
            best = ch
            best_count = histogram[ch]
    return best


def suggest(current_frequency_mhz, scanned_access_points):
    """
    Channel advice for the connected network given a scan of its neighbours.

    Returns "" when there is nothing to reason about (not connected, or an
    empty scan).
    """
    if current_frequency_mhz == 0 or not scanned_access_points:
        return ""

    current_channel = channel_of(current_frequency_mhz)
    summary = aggregate(scanned_access_points)

    peers = sum(1 for ap in summary.networks if channel_of(ap.frequency_mhz) == current_channel)
    best = best_channel(summary.histogram, current_channel)

    if peers > CONGESTION_PEER_LIMIT and best != current_channel:
        text = CONGESTED_MSG.format(current=current_channel, best=best)
    else:
        text = FREE_MSG.format(current=current_channel)

    if current_frequency_mhz < 5000 and summary.has_5ghz_present:
        text += "\n" + FIVE_GHZ_HINT

    return text
