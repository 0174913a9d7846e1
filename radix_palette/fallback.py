"""
Deterministic 12-step ramps used whenever a live swatch read is missing.
"""

from functools import lru_cache
from typing import Tuple

from .colors import HSL, hsl_to_hex
from .models import STEPS_PER_RAMP, Family

ACCENT_FALLBACK_HUE = 217
GRAY_FALLBACK_HUE = 220


def _clamp_lightness(value: float) -> float:
    return max(5, min(95, value))


def _accent_step(step: int) -> HSL:
    if step <= 6:
        lightness = 95 - (step - 1) * 8
    else:
        lightness = 80 - (step - 7) * 12
    saturation = 91 if step == 9 else max(10, 90 - abs(step - 9) * 8)
    return HSL(ACCENT_FALLBACK_HUE, saturation, _clamp_lightness(lightness))


def _gray_step(step: int) -> HSL:
    return HSL(GRAY_FALLBACK_HUE, 5, _clamp_lightness(95 - (step - 1) * 7))


@lru_cache(maxsize=None)
def fallback_ramp(family: Family) -> Tuple[str, ...]:
    builder = _accent_step if family is Family.ACCENT else _gray_step
    return tuple(hsl_to_hex(builder(step)) for step in range(1, STEPS_PER_RAMP + 1))


def fallback_step(family: Family, index: int) -> str:
    """Fallback hex for the zero-based step ``index`` of ``family``."""
    return fallback_ramp(family)[index]
