from __future__ import annotations

import random
import re
from typing import Optional

from .offline_db import FALLBACK_TIPS_BY_WEATHER

DEFAULT_TEMP = 20

_RAIN = ("lluvi", "tormenta", "nieve", "rain")
_HEAT = ("sol", "calor", "sun")
_COLD = ("frio", "helada", "cold")


def parse_temp(temp: Optional[str]) -> int:
    """Leading integer of a temperature string ("31°C" -> 31); 20 when absent or zero."""
    m = re.match(r"\s*([+-]?\d+)", temp or "")
    if not m:
        return DEFAULT_TEMP
    return int(m.group(1)) or DEFAULT_TEMP


def weather_category(temp: Optional[str], condition: Optional[str]) -> str:
    t = parse_temp(temp)
    cond = (condition or "").lower()
    if any(k in cond for k in _RAIN):
        return "RAIN"
    if t > 28 or any(k in cond for k in _HEAT):
        return "HEAT"
    if t < 12 or any(k in cond for k in _COLD):
        return "COLD"
    return "GENERAL"


def weather_based_tip(temp: Optional[str], condition: Optional[str], rng: Optional[random.Random] = None) -> str:
    tips = FALLBACK_TIPS_BY_WEATHER[weather_category(temp, condition)]
    return (rng or random).choice(tips)
