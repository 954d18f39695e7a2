"""Frequency <-> channel conversion for the 2.4 GHz and 5 GHz bands."""

# channel reported for anything outside the recognized bands
UNKNOWN_CHANNEL = 0


def channel_of(frequency_mhz: int) -> int:
    # 2484 lands on 15 here, not the canonical 14
    if 2412 <= frequency_mhz <= 2484:
        return (frequency_mhz - 2407) // 5
    if 5000 <= frequency_mhz <= 5900:
        return (frequency_mhz - 5000) // 5
    return UNKNOWN_CHANNEL


def frequency_of(channel: int, band: str) -> int:
    """
    Centre frequency of a channel number within a band ("2.4", "5" or "6").

    Used where a platform reports channels instead of frequencies.
    Returns 0 for an unknown band.
    """
    if band == "2.4":
        if channel == 14:
            return 2484
        return 2407 + 5 * channel
    if band == "5":
        return 5000 + 5 * channel
    if band == "6":
        return 5950 + 5 * channel
    return 0
