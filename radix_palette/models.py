"""
Data carried through a palette request: seed colors in, ramps out.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from .colors import hex_to_hsl_string

STEPS_PER_RAMP = 12


class Mode(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class Family(str, Enum):
    ACCENT = "accent"
    GRAY = "gray"


@dataclass(frozen=True)
class SeedPalette:
    accent: str
    gray: str
    light_background: str
    dark_background: str

    def background_for(self, mode: Mode) -> str:
        return self.dark_background if mode is Mode.DARK else self.light_background


@dataclass
class ModeResult:
    mode: Mode
    accent: List[str]
    gray: List[str]
    fallback_indices: Dict[Family, List[int]] = field(default_factory=dict)

    def steps(self, family: Family) -> List[str]:
        return self.accent if family is Family.ACCENT else self.gray

    @property
    def fallback_count(self) -> int:
        return sum(len(v) for v in self.fallback_indices.values())


@dataclass
class ColorScale:
    name: str
    light_steps: List[str]
    dark_steps: List[str]
    light_hsl_steps: List[str] = field(default_factory=list)
    dark_hsl_steps: List[str] = field(default_factory=list)

    @classmethod
    def assemble(cls, family: Family, light: ModeResult, dark: ModeResult) -> "ColorScale":
        light_steps = list(light.steps(family))
        dark_steps = list(dark.steps(family))
        return cls(
            name=family.value,
            light_steps=light_steps,
            dark_steps=dark_steps,
            light_hsl_steps=[hex_to_hsl_string(h) for h in light_steps],
            dark_hsl_steps=[hex_to_hsl_string(h) for h in dark_steps],
        )


@dataclass
class Palette:
    seeds: SeedPalette
    accent_scale: ColorScale
    gray_scale: ColorScale
    fallback_steps: Dict[str, int] = field(default_factory=dict)

    @property
    def degraded(self) -> bool:
        return any(self.fallback_steps.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accent": self.seeds.accent,
            "gray": self.seeds.gray,
            "lightBackground": self.seeds.light_background,
            "darkBackground": self.seeds.dark_background,
            "accentScale": {
                "light": self.accent_scale.light_steps,
                "dark": self.accent_scale.dark_steps,
            },
            "grayScale": {
                "light": self.gray_scale.light_steps,
                "dark": self.gray_scale.dark_steps,
            },
        }
