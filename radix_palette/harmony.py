"""
Seed color harmony: one brand color plus a scheme becomes the four seed
colors (accent, gray, light background, dark background) fed to the
Radix custom color generator.
"""

import logging
from enum import Enum
from typing import Dict, Optional, Union

from .colors import DEFAULT_SEED, HSL, hex_to_hsl, hsl_to_hex, normalize_hex
from .errors import InvalidSeed
from .models import SeedPalette

logger = logging.getLogger(__name__)


class Scheme(str, Enum):
    ANALOGOUS = "analogous"
    COMPLEMENTARY = "complementary"
    TRIADIC = "triadic"
    MONOCHROMATIC = "monochromatic"

    @classmethod
    def parse(cls, value: Optional[Union[str, "Scheme"]]) -> "Scheme":
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.ANALOGOUS
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.ANALOGOUS


# role -> (hue offset from seed, saturation); the accent keeps the seed hue with a saturation floor
SCHEME_RULES = {
    Scheme.ANALOGOUS: {"accent_sat": 70, "gray": (30, 8), "light_bg": (15, 20), "dark_bg": (15, 15)},
    Scheme.COMPLEMENTARY: {"accent_sat": 80, "gray": (180, 6), "light_bg": (0, 25), "dark_bg": (180, 20)},
    Scheme.TRIADIC: {"accent_sat": 75, "gray": (120, 10), "light_bg": (240, 15), "dark_bg": (240, 12)},
    Scheme.MONOCHROMATIC: {"accent_sat": 85, "gray": (0, 5), "light_bg": (0, 20), "dark_bg": (0, 15)},
}

ACCENT_LIGHTNESS = 55
GRAY_LIGHTNESS = 50
LIGHT_BG_LIGHTNESS = 98
DARK_BG_LIGHTNESS = 8


def parse_seed(raw: Optional[str]) -> str:
    seed = normalize_hex(raw)
    if seed is None:
        raise InvalidSeed(raw)
    return seed


def harmony_targets(seed: HSL, scheme: Union[str, Scheme]) -> Dict[str, HSL]:
    """HSL values for each seed role before hex conversion."""
    rules = SCHEME_RULES[Scheme.parse(scheme)]
    gray_offset, gray_sat = rules["gray"]
    light_offset, light_sat = rules["light_bg"]
    dark_offset, dark_sat = rules["dark_bg"]
    return {
        "accent": HSL(seed.h, max(rules["accent_sat"], seed.s), ACCENT_LIGHTNESS),
        "gray": HSL((seed.h + gray_offset) % 360, gray_sat, GRAY_LIGHTNESS),
        "light_background": HSL((seed.h + light_offset) % 360, light_sat, LIGHT_BG_LIGHTNESS),
        "dark_background": HSL((seed.h + dark_offset) % 360, dark_sat, DARK_BG_LIGHTNESS),
    }


def generate_base_colors(
    brand_color: Optional[str],
    scheme: Union[str, Scheme] = Scheme.ANALOGOUS,
    harmonized: bool = False,
) -> SeedPalette:
    """Derive the four seed colors for ``brand_color``.

    Never fails: a missing or malformed brand color is replaced by the
    default blue. With ``harmonized`` the accent is the scheme-adjusted
    color rather than the seed itself.
    """
    try:
        seed = parse_seed(brand_color)
    except InvalidSeed as exc:
        logger.debug("%s, using %s", exc, DEFAULT_SEED)
        seed = DEFAULT_SEED

    targets = harmony_targets(hex_to_hsl(seed), scheme)
    colors = {role: hsl_to_hex(value) for role, value in targets.items()}
    return SeedPalette(
        accent=colors["accent"] if harmonized else seed,
        gray=colors["gray"],
        light_background=colors["light_background"],
        dark_background=colors["dark_background"],
    )
