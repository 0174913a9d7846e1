"""
Hex and HSL conversion primitives shared by the harmony generator,
the fallback ramps and the palette assembly.
"""

import re
from typing import NamedTuple, Optional

DEFAULT_SEED = "#3B82F6"

HEX_PATTERN = re.compile(r"^#?([0-9A-F]{3}|[0-9A-F]{6})$", re.IGNORECASE)


class HSL(NamedTuple):
    h: float
    s: float
    l: float


def normalize_hex(raw: Optional[str]) -> Optional[str]:
    if not raw:
        return None
    cleaned = raw.strip().upper()
    if cleaned.startswith("#"):
        cleaned = cleaned[1:]
    if re.fullmatch(r"[0-9A-F]{6}", cleaned):
        return f"#{cleaned}"
    if re.fullmatch(r"[0-9A-F]{3}", cleaned):
        r, g, b = cleaned
        return f"#{r * 2}{g * 2}{b * 2}"
    return None


def is_valid_hex(value: Optional[str]) -> bool:
    if not isinstance(value, str):
        return False
    return bool(HEX_PATTERN.match(value.strip()))


def rgb_to_hsl(r: float, g: float, b: float) -> HSL:
    r /= 255.0
    g /= 255.0
    b /= 255.0
    maxc = max(r, g, b)
    minc = min(r, g, b)
    l = (minc + maxc) / 2.0
    if minc == maxc:
        return HSL(0.0, 0.0, l * 100.0)
    if l <= 0.5:
        s = (maxc - minc) / (maxc + minc)
    else:
        s = (maxc - minc) / (2.0 - maxc - minc)
    rc = (maxc - r) / (maxc - minc)
    gc = (maxc - g) / (maxc - minc)
    bc = (maxc - b) / (maxc - minc)
    if r == maxc:
        h = bc - gc
    elif g == maxc:
        h = 2.0 + rc - bc
    else:
        h = 4.0 + gc - rc
    h = (h / 6.0) % 1.0
    return HSL(h * 360.0, s * 100.0, l * 100.0)


def hex_to_hsl(value: str) -> HSL:
    """Integer-rounded HSL for a hex color; invalid input maps to the default seed."""
    hex_value = normalize_hex(value) or DEFAULT_SEED
    r = int(hex_value[1:3], 16)
    g = int(hex_value[3:5], 16)
    b = int(hex_value[5:7], 16)
    h, s, l = rgb_to_hsl(r, g, b)
    return HSL(round(h) % 360, round(s), round(l))


def hsl_to_hex(color: HSL) -> str:
    h = color.h % 360
    s = min(100.0, max(0.0, color.s)) / 100.0
    l = min(100.0, max(0.0, color.l)) / 100.0
    a = s * min(l, 1.0 - l)

    def channel(n: int) -> int:
        k = (n + h / 30.0) % 12
        value = l - a * max(-1.0, min(k - 3.0, 9.0 - k, 1.0))
        return int(round(value * 255.0))

    return "#{:02X}{:02X}{:02X}".format(channel(0), channel(8), channel(4))


def hex_to_hsl_string(value: str) -> str:
    h, s, l = hex_to_hsl(value)
    return f"hsl({h}, {s}%, {l}%)"
