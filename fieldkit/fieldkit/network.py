from __future__ import annotations

from enum import Enum
from typing import Optional


class NetworkQuality(str, Enum):
    MAXIMUM = "MAXIMUM"
    STRONG = "STRONG"
    MEDIUM = "MEDIUM"
    WEAK = "WEAK"
    LOST = "LOST"


def quality_from_downlink(downlink: Optional[float], online: bool = True) -> NetworkQuality:
    """Bucket a reported downlink in Mbit/s. Without a reading, an online host counts as STRONG."""
    if not online:
        return NetworkQuality.LOST
    if downlink is None:
        return NetworkQuality.STRONG
    if downlink > 5:
        return NetworkQuality.MAXIMUM
    if downlink > 0.2:
        return NetworkQuality.STRONG
    if downlink > 0.05:
        return NetworkQuality.MEDIUM
    return NetworkQuality.WEAK


def is_offline(quality: NetworkQuality) -> bool:
    return quality is NetworkQuality.LOST
