"""
Extraction orchestrator: drives one session per mode through the Radix
custom color page and assembles the accent and gray scales.

Light and dark run as independent pipelines, each in its own browser
context. Anything that goes wrong inside a pipeline is absorbed there:
an unreadable swatch takes its fallback value, an unusable session makes
the whole mode fall back. The returned ramps are always 12 steps long.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Tuple

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from .errors import SessionUnavailable
from .fallback import fallback_ramp, fallback_step
from .models import STEPS_PER_RAMP, ColorScale, Family, Mode, ModeResult, SeedPalette
from .retry import attempt_or_default
from .session import Session, SessionManager
from .swatch import SwatchReader, swatch_locator

logger = logging.getLogger(__name__)

EXPECTED_SWATCHES = STEPS_PER_RAMP * 2

INPUT_SELECTORS = {"accent": "#accent", "gray": "#gray", "background": "#bg"}
MODE_TOGGLE_SELECTORS = {
    Mode.LIGHT: 'button:has-text("Light")',
    Mode.DARK: 'button:has-text("Dark")',
}

TOGGLE_TIMEOUT_MS = 5000
FILL_TIMEOUT_MS = 5000
TOGGLE_SETTLE_MS = 300
CLEAR_SETTLE_MS = 100
FILL_SETTLE_MS = {"accent": 120, "gray": 120, "background": 200}
SWATCH_WAIT_MS = 10000
SWATCH_POLL_MS = 100
INTER_SWATCH_DELAY_MS = 30


def fallback_mode_result(mode: Mode) -> ModeResult:
    return ModeResult(
        mode=mode,
        accent=list(fallback_ramp(Family.ACCENT)),
        gray=list(fallback_ramp(Family.GRAY)),
        fallback_indices={family: list(range(STEPS_PER_RAMP)) for family in Family},
    )


def family_source_indices(family: Family, count: int) -> List[int]:
    """Swatch indices read for ``family`` when the page shows ``count`` swatches.

    Accent owns indices 0-11 and gray 12-23 regardless of how many swatches
    rendered; whatever a family is short of is padded with its own fallback.
    """
    start = 0 if family is Family.ACCENT else STEPS_PER_RAMP
    stop = min(start + STEPS_PER_RAMP, count)
    return list(range(start, stop))


class ExtractionOrchestrator:
    def __init__(
        self,
        sessions: SessionManager,
        reader: Optional[SwatchReader] = None,
        parallel: bool = True,
        settle_scale: float = 1.0,
    ):
        self.sessions = sessions
        self.reader = reader or SwatchReader()
        self.parallel = parallel
        self.settle_scale = settle_scale

    async def extract(self, seeds: SeedPalette) -> Tuple[ColorScale, ColorScale, Dict[Mode, ModeResult]]:
        if self.parallel:
            tasks = [asyncio.ensure_future(self.extract_mode(mode, seeds)) for mode in (Mode.LIGHT, Mode.DARK)]
            try:
                light, dark = await asyncio.gather(*tasks)
            except BaseException:
                # no mode pipeline outlives extract(); the sibling is cancelled and its session released
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise
        else:
            light = await self.extract_mode(Mode.LIGHT, seeds)
            dark = await self.extract_mode(Mode.DARK, seeds)

        accent = ColorScale.assemble(Family.ACCENT, light, dark)
        gray = ColorScale.assemble(Family.GRAY, light, dark)
        return accent, gray, {Mode.LIGHT: light, Mode.DARK: dark}

    async def extract_mode(self, mode: Mode, seeds: SeedPalette) -> ModeResult:
        """Full pipeline for one mode; falls back entirely if the session is unusable."""
        return await attempt_or_default(
            lambda: self.run_mode(mode, seeds),
            attempts=1,
            default=fallback_mode_result(mode),
            retry_on=(SessionUnavailable, PlaywrightError),
            label=f"{mode.value} mode extraction",
        )

    async def run_mode(self, mode: Mode, seeds: SeedPalette) -> ModeResult:
        session = await self.sessions.acquire_session(mode)
        try:
            await self.ensure_mode(session.page, mode)
            await self.fill_inputs(session.page, seeds, mode)
            count = await self.wait_for_swatches(session.page)
            return await self.read_ramps(session, count)
        finally:
            await self.sessions.release(session)

    async def ensure_mode(self, page: Page, mode: Mode) -> None:
        toggle = page.locator(MODE_TOGGLE_SELECTORS[mode]).first
        try:
            if await toggle.get_attribute("data-state", timeout=TOGGLE_TIMEOUT_MS) == "off":
                await toggle.click(timeout=TOGGLE_TIMEOUT_MS)
                await self.settle(page, TOGGLE_SETTLE_MS)
                if await toggle.get_attribute("data-state", timeout=TOGGLE_TIMEOUT_MS) == "off":
                    logger.warning("%s mode toggle still off after click", mode.value.capitalize())
        except PlaywrightError as exc:
            logger.warning("Could not verify %s mode toggle: %s", mode.value, exc)

    async def fill_inputs(self, page: Page, seeds: SeedPalette, mode: Mode) -> None:
        values = {
            "accent": seeds.accent,
            "gray": seeds.gray,
            "background": seeds.background_for(mode),
        }
        for selector in INPUT_SELECTORS.values():
            await page.fill(selector, "", timeout=FILL_TIMEOUT_MS)
        await self.settle(page, CLEAR_SETTLE_MS)

        for name, selector in INPUT_SELECTORS.items():
            await page.fill(selector, values[name].lstrip("#"), timeout=FILL_TIMEOUT_MS)
            await self.settle(page, FILL_SETTLE_MS[name])

    async def wait_for_swatches(self, page: Page) -> int:
        swatches = swatch_locator(page)
        waited = 0
        count = await swatches.count()
        while count < EXPECTED_SWATCHES and waited < SWATCH_WAIT_MS:
            await page.wait_for_timeout(SWATCH_POLL_MS)
            waited += SWATCH_POLL_MS
            count = await swatches.count()
        if count < EXPECTED_SWATCHES:
            logger.warning("Expected %d swatches, found %d. Continuing with what we have.", EXPECTED_SWATCHES, count)
        return count

    async def read_ramps(self, session: Session, count: int) -> ModeResult:
        logger.info("Extracting %s colors...", session.mode.value)
        ramps: Dict[Family, List[str]] = {}
        fallbacks: Dict[Family, List[int]] = {}

        for family in Family:
            steps: List[Optional[str]] = [None] * STEPS_PER_RAMP
            for source_index in family_source_indices(family, count):
                steps[source_index % STEPS_PER_RAMP] = await self.reader.read(session, source_index)
                await self.settle(session.page, INTER_SWATCH_DELAY_MS)

            fallbacks[family] = [i for i, value in enumerate(steps) if value is None]
            ramps[family] = [value or fallback_step(family, i) for i, value in enumerate(steps)]

        missing = sum(len(v) for v in fallbacks.values())
        if missing:
            logger.warning("%s mode: %d of %d steps use fallback values", session.mode.value, missing, EXPECTED_SWATCHES)

        return ModeResult(
            mode=session.mode,
            accent=ramps[Family.ACCENT],
            gray=ramps[Family.GRAY],
            fallback_indices=fallbacks,
        )

    async def settle(self, page: Page, ms: int) -> None:
        if self.settle_scale > 0:
            await page.wait_for_timeout(ms * self.settle_scale)
