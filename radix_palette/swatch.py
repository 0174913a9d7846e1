"""
Reading one swatch value out of the Radix custom color page.

Each swatch opens a dialog whose hex button holds the step's value. The
page may render more than one dialog-like node, so every lookup is scoped
to the last dialog container and takes the first hex-looking button in it.
"""

import logging
import re
from typing import Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from .colors import normalize_hex
from .errors import SwatchReadFailure
from .models import STEPS_PER_RAMP, Family
from .retry import attempt_or_default
from .session import Session

logger = logging.getLogger(__name__)

SWATCH_SELECTOR = "button.rt-reset.CustomSwatch_CustomSwatchTrigger__jlBrx"
HEX_BUTTON_NAME = re.compile(r"^#[0-9A-F]{3,6}$", re.IGNORECASE)

DIALOG_VISIBLE_TIMEOUT_MS = 2000
HEX_VISIBLE_TIMEOUT_MS = 1500
DIALOG_DETACH_TIMEOUT_MS = 1000


def describe_swatch(index: int) -> str:
    family = Family.ACCENT if index < STEPS_PER_RAMP else Family.GRAY
    return f"{family.value} step {index % STEPS_PER_RAMP + 1}"


def swatch_locator(page: Page) -> Locator:
    return page.locator(SWATCH_SELECTOR)


def dialog_locator(page: Page) -> Locator:
    return page.get_by_role("dialog").last


class SwatchReader:
    def __init__(self, attempts: int = 3, retry_delay: float = 0.12):
        self.attempts = attempts
        self.retry_delay = retry_delay

    async def read(self, session: Session, index: int) -> Optional[str]:
        """Hex value of swatch ``index`` (0-23), or None once every attempt failed."""
        page = session.page

        async def dismiss_after_failure(attempt: int, exc: BaseException) -> None:
            await self.dismiss_open_dialog(page)

        return await attempt_or_default(
            lambda: self.read_once(page, index),
            attempts=self.attempts,
            default=None,
            retry_on=(PlaywrightError, SwatchReadFailure),
            backoff=self.retry_delay,
            on_failure=dismiss_after_failure,
            label=f"{session.mode.value} {describe_swatch(index)}",
        )

    async def read_once(self, page: Page, index: int) -> str:
        await self.dismiss_open_dialog(page)

        swatch = swatch_locator(page).nth(index)
        await swatch.scroll_into_view_if_needed()
        await swatch.click()

        dialog = dialog_locator(page)
        await dialog.wait_for(state="visible", timeout=DIALOG_VISIBLE_TIMEOUT_MS)

        hex_button = dialog.get_by_role("button", name=HEX_BUTTON_NAME).first
        await hex_button.wait_for(state="visible", timeout=HEX_VISIBLE_TIMEOUT_MS)
        text = (await hex_button.inner_text()).strip().upper()

        await page.keyboard.press("Escape")
        await self.wait_detached(dialog)

        value = normalize_hex(text)
        if value is None:
            raise SwatchReadFailure(index, f"unexpected value {text!r}")
        return value

    async def dismiss_open_dialog(self, page: Page) -> None:
        """Close a dialog left open by an earlier read, if there is one."""
        dialog = dialog_locator(page)
        try:
            if not await dialog.is_visible():
                return
            await page.keyboard.press("Escape")
        except PlaywrightError as exc:
            logger.debug("Could not dismiss stale dialog: %s", exc)
            return
        await self.wait_detached(dialog)

    async def wait_detached(self, dialog: Locator) -> None:
        try:
            await dialog.wait_for(state="detached", timeout=DIALOG_DETACH_TIMEOUT_MS)
        except PlaywrightError:
            logger.debug("Dialog still attached after %dms", DIALOG_DETACH_TIMEOUT_MS)
