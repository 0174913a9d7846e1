"""
Palette service: seed harmony plus live extraction under a request timeout.
"""

import asyncio
import logging
from typing import Optional, Union

from .config import Settings
from .errors import RequestTimeout
from .harmony import Scheme, generate_base_colors
from .orchestrator import ExtractionOrchestrator
from .models import Palette
from .session import SessionManager
from .swatch import SwatchReader

logger = logging.getLogger(__name__)


class PaletteService:
    def __init__(self, settings: Optional[Settings] = None, reader: Optional[SwatchReader] = None):
        self.settings = settings or Settings()
        self.reader = reader or SwatchReader()
        self._warm_sessions: Optional[SessionManager] = None

    def new_session_manager(self) -> SessionManager:
        return SessionManager(
            url=self.settings.oracle_url,
            debug=self.settings.debug_browser,
            keep_warm=self.settings.keep_browser_alive,
        )

    def session_manager(self) -> SessionManager:
        """Shared manager under the keep-warm policy, otherwise a fresh one per request."""
        if not self.settings.keep_browser_alive:
            return self.new_session_manager()
        if self._warm_sessions is None:
            self._warm_sessions = self.new_session_manager()
        return self._warm_sessions

    async def generate_palette(
        self,
        hex_color: Optional[str],
        scheme: Union[str, Scheme] = Scheme.ANALOGOUS,
        harmonized: bool = False,
    ) -> Palette:
        timeout_s = self.settings.request_timeout_s
        try:
            return await asyncio.wait_for(self._generate(hex_color, scheme, harmonized), timeout=timeout_s)
        except asyncio.TimeoutError as exc:
            logger.error("Palette generation exceeded %.1fs", timeout_s)
            raise RequestTimeout(timeout_s) from exc

    async def _generate(self, hex_color: Optional[str], scheme: Union[str, Scheme], harmonized: bool) -> Palette:
        logger.info("Generating base colors...")
        seeds = generate_base_colors(hex_color, scheme, harmonized=harmonized)

        sessions = self.session_manager()
        try:
            await sessions.start()
            logger.info("Generating Radix scales (%s)...", "parallel" if self.settings.parallel else "sequential")
            orchestrator = ExtractionOrchestrator(sessions, reader=self.reader, parallel=self.settings.parallel)
            accent, gray, results = await orchestrator.extract(seeds)
        finally:
            await sessions.finish()

        logger.info("Palette generation complete")
        return Palette(
            seeds=seeds,
            accent_scale=accent,
            gray_scale=gray,
            fallback_steps={mode.value: result.fallback_count for mode, result in results.items()},
        )

    async def health_check(self) -> bool:
        return True

    async def shutdown(self) -> None:
        if self._warm_sessions is not None:
            await self._warm_sessions.shutdown()
            self._warm_sessions = None
