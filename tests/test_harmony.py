"""
Seed harmony: hue offsets, saturation floors and seed handling per scheme.
Run from project root: python -m pytest tests/ -v
"""
import re
import unittest

from radix_palette.colors import HSL, hex_to_hsl, hsl_to_hex
from radix_palette.harmony import Scheme, generate_base_colors, harmony_targets

HEX_RE = re.compile(r"^#[0-9A-F]{6}$")


class TestHarmonyTargets(unittest.TestCase):
    def test_analogous_blue_seed(self):
        """#3B82F6 (hue 217) under analogous: gray 247, backgrounds 232."""
        targets = harmony_targets(hex_to_hsl("#3B82F6"), Scheme.ANALOGOUS)
        self.assertEqual(targets["accent"], HSL(217, 91, 55))
        self.assertEqual(targets["gray"], HSL(247, 8, 50))
        self.assertEqual(targets["light_background"], HSL(232, 20, 98))
        self.assertEqual(targets["dark_background"], HSL(232, 15, 8))

    def test_hue_offsets_wrap_for_every_scheme(self):
        offsets = {
            Scheme.ANALOGOUS: (30, 15, 15),
            Scheme.COMPLEMENTARY: (180, 0, 180),
            Scheme.TRIADIC: (120, 240, 240),
            Scheme.MONOCHROMATIC: (0, 0, 0),
        }
        for scheme, (gray, light_bg, dark_bg) in offsets.items():
            for hue in [0, 90, 217, 330, 345, 359]:
                with self.subTest(scheme=scheme, hue=hue):
                    targets = harmony_targets(HSL(hue, 50, 50), scheme)
                    self.assertEqual(targets["gray"].h, (hue + gray) % 360)
                    self.assertEqual(targets["light_background"].h, (hue + light_bg) % 360)
                    self.assertEqual(targets["dark_background"].h, (hue + dark_bg) % 360)
                    self.assertEqual(targets["accent"].h, hue)

    def test_saturation_and_lightness_per_scheme(self):
        expected = {
            Scheme.ANALOGOUS: (70, 8, 20, 15),
            Scheme.COMPLEMENTARY: (80, 6, 25, 20),
            Scheme.TRIADIC: (75, 10, 15, 12),
            Scheme.MONOCHROMATIC: (85, 5, 20, 15),
        }
        for scheme, (accent_floor, gray_s, light_s, dark_s) in expected.items():
            with self.subTest(scheme=scheme):
                targets = harmony_targets(HSL(10, 20, 40), scheme)
                self.assertEqual(targets["accent"], HSL(10, accent_floor, 55))
                self.assertEqual(targets["gray"].s, gray_s)
                self.assertEqual(targets["gray"].l, 50)
                self.assertEqual(targets["light_background"][1:], (light_s, 98))
                self.assertEqual(targets["dark_background"][1:], (dark_s, 8))

    def test_accent_keeps_seed_saturation_above_floor(self):
        targets = harmony_targets(HSL(200, 95, 40), Scheme.ANALOGOUS)
        self.assertEqual(targets["accent"].s, 95)


class TestGenerateBaseColors(unittest.TestCase):
    def test_seed_passes_through_by_default(self):
        seeds = generate_base_colors("#3b82f6", Scheme.ANALOGOUS)
        self.assertEqual(seeds.accent, "#3B82F6")
        self.assertEqual(seeds.gray, hsl_to_hex(HSL(247, 8, 50)))
        self.assertEqual(seeds.light_background, hsl_to_hex(HSL(232, 20, 98)))
        self.assertEqual(seeds.dark_background, hsl_to_hex(HSL(232, 15, 8)))

    def test_harmonized_uses_scheme_accent(self):
        seeds = generate_base_colors("#3B82F6", Scheme.ANALOGOUS, harmonized=True)
        self.assertEqual(seeds.accent, hsl_to_hex(HSL(217, 91, 55)))

    def test_shorthand_seed_is_expanded(self):
        self.assertEqual(generate_base_colors("#f80").accent, "#FF8800")

    def test_invalid_seed_falls_back_to_default(self):
        expected = generate_base_colors("#3B82F6", Scheme.TRIADIC)
        for raw in [None, "", "#12345", "zzzzzz"]:
            with self.subTest(raw=raw):
                self.assertEqual(generate_base_colors(raw, Scheme.TRIADIC), expected)

    def test_all_outputs_are_normalized_hex(self):
        for scheme in Scheme:
            seeds = generate_base_colors("#e11d48", scheme)
            for value in (seeds.accent, seeds.gray, seeds.light_background, seeds.dark_background):
                self.assertRegex(value, HEX_RE)

    def test_scheme_parse_is_lenient(self):
        self.assertIs(Scheme.parse("Triadic"), Scheme.TRIADIC)
        self.assertIs(Scheme.parse("neon"), Scheme.ANALOGOUS)
        self.assertIs(Scheme.parse(None), Scheme.ANALOGOUS)
        self.assertIs(Scheme.parse(3), Scheme.ANALOGOUS)
        self.assertEqual(generate_base_colors("#3B82F6", "bogus"), generate_base_colors("#3B82F6"))


if __name__ == "__main__":
    unittest.main()
