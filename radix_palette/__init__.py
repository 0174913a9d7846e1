"""
Radix palette generator: seed color harmony plus live extraction of the
12-step Radix custom color scales through Playwright.
"""

__version__ = "1.0.0"

from .errors import BrowserLaunchError, InvalidSeed, PaletteError, RequestTimeout, SessionUnavailable, SwatchReadFailure
from .harmony import Scheme, generate_base_colors
from .models import ColorScale, Family, Mode, Palette, SeedPalette
from .service import PaletteService

__all__ = [
    "BrowserLaunchError",
    "ColorScale",
    "Family",
    "InvalidSeed",
    "Mode",
    "Palette",
    "PaletteError",
    "PaletteService",
    "RequestTimeout",
    "Scheme",
    "SeedPalette",
    "SessionUnavailable",
    "SwatchReadFailure",
    "generate_base_colors",
]
