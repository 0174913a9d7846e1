import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from playwright.async_api import Error as PlaywrightError

from radix_palette.errors import BrowserLaunchError, SessionUnavailable
from radix_palette.models import Mode
from radix_palette.session import VIEWPORT, SessionManager


def fake_browser(goto_error=None):
    page = MagicMock()
    page.goto = AsyncMock(side_effect=goto_error)
    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    context.close = AsyncMock()
    browser = MagicMock()
    browser.is_connected = MagicMock(return_value=True)
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()
    return browser, context, page


def with_browser(manager, browser):
    manager._browser = browser
    manager._playwright = MagicMock(stop=AsyncMock())
    return manager


class TestSessionManager(unittest.IsolatedAsyncioTestCase):
    async def test_acquire_navigates_fresh_context(self):
        browser, context, page = fake_browser()
        manager = with_browser(SessionManager(url="https://example.test/custom"), browser)

        session = await manager.acquire_session(Mode.DARK)

        self.assertIs(session.mode, Mode.DARK)
        self.assertIs(session.page, page)
        browser.new_context.assert_awaited_once_with(viewport=VIEWPORT)
        page.goto.assert_awaited_once_with("https://example.test/custom", wait_until="networkidle", timeout=30000)

    async def test_navigation_failure_raises_session_unavailable_and_closes_context(self):
        browser, context, _ = fake_browser(goto_error=PlaywrightError("Timeout 30000ms exceeded"))
        manager = with_browser(SessionManager(), browser)

        with self.assertRaises(SessionUnavailable) as ctx:
            await manager.acquire_session(Mode.LIGHT)
        self.assertEqual(ctx.exception.mode, "light")
        context.close.assert_awaited_once()

    async def test_release_closes_context(self):
        browser, context, _ = fake_browser()
        manager = with_browser(SessionManager(), browser)
        session = await manager.acquire_session(Mode.LIGHT)
        await manager.release(session)
        context.close.assert_awaited_once()

    async def test_shutdown_closes_everything_and_is_idempotent(self):
        browser, context, _ = fake_browser()
        manager = with_browser(SessionManager(), browser)
        driver = manager._playwright
        await manager.acquire_session(Mode.LIGHT)

        await manager.shutdown()
        await manager.shutdown()

        context.close.assert_awaited_once()
        browser.close.assert_awaited_once()
        driver.stop.assert_awaited_once()
        self.assertFalse(manager.running)

    async def test_finish_keeps_warm_browser(self):
        browser, _, _ = fake_browser()
        manager = with_browser(SessionManager(keep_warm=True), browser)
        await manager.finish()
        browser.close.assert_not_awaited()
        self.assertTrue(manager.running)

    async def test_finish_shuts_down_cold_browser(self):
        browser, _, _ = fake_browser()
        manager = with_browser(SessionManager(keep_warm=False), browser)
        await manager.finish()
        browser.close.assert_awaited_once()

    async def test_launch_failure(self):
        driver = MagicMock(stop=AsyncMock())
        driver.chromium.launch = AsyncMock(side_effect=PlaywrightError("Executable doesn't exist"))
        starter = MagicMock()
        starter.start = AsyncMock(return_value=driver)

        with patch("radix_palette.session.async_playwright", return_value=starter):
            with self.assertRaises(BrowserLaunchError):
                await SessionManager().start()
        driver.stop.assert_awaited_once()

    async def test_debug_launch_is_headed_and_slowed(self):
        driver = MagicMock(stop=AsyncMock())
        driver.chromium.launch = AsyncMock(return_value=MagicMock())
        starter = MagicMock()
        starter.start = AsyncMock(return_value=driver)

        with patch("radix_palette.session.async_playwright", return_value=starter):
            manager = SessionManager(debug=True)
            await manager.start()
            await manager.start()

        driver.chromium.launch.assert_awaited_once()
        kwargs = driver.chromium.launch.await_args.kwargs
        self.assertFalse(kwargs["headless"])
        self.assertEqual(kwargs["slow_mo"], 100)

    async def test_disconnected_warm_browser_is_relaunched(self):
        stale, stale_context, _ = fake_browser()
        stale.is_connected.return_value = False
        stale.new_context.side_effect = PlaywrightError("Target page, context or browser has been closed")
        manager = with_browser(SessionManager(keep_warm=True), stale)
        stale_driver = manager._playwright
        manager._contexts.add(stale_context)

        fresh, _, page = fake_browser()
        driver = MagicMock(stop=AsyncMock())
        driver.chromium.launch = AsyncMock(return_value=fresh)
        starter = MagicMock()
        starter.start = AsyncMock(return_value=driver)

        with patch("radix_palette.session.async_playwright", return_value=starter):
            session = await manager.acquire_session(Mode.LIGHT)

        driver.chromium.launch.assert_awaited_once()
        stale_driver.stop.assert_awaited_once()
        stale.new_context.assert_not_awaited()
        self.assertIs(manager._browser, fresh)
        self.assertIs(session.page, page)
        self.assertNotIn(stale_context, manager._contexts)

    async def test_connected_warm_browser_is_reused(self):
        browser, _, _ = fake_browser()
        manager = with_browser(SessionManager(keep_warm=True), browser)

        with patch("radix_palette.session.async_playwright") as starter:
            await manager.start()

        starter.assert_not_called()
        self.assertIs(manager._browser, browser)


if __name__ == "__main__":
    unittest.main()
