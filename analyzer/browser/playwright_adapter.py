from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from playwright.sync_api import Browser, Page, Playwright, sync_playwright
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from analyzer.browser.base import BasePageDriver, PageHandle
from analyzer.browser.exceptions import BrowserError, NavigationTimeoutError
from analyzer.browser.slots import BrowserSlots
from analyzer.logging.logger import Log


@contextmanager
def _translated(action: str) -> Generator[None, None, None]:
    """Re-raise Playwright errors as browser errors of our own taxonomy."""
    try:
        yield
    except PlaywrightTimeoutError as exc:
        raise NavigationTimeoutError(f"Timed out trying to {action}: {exc}") from exc
    except PlaywrightError as exc:
        raise BrowserError(f"Browser failed to {action}: {exc}") from exc


class PlaywrightPageHandle(PageHandle):
    """PageHandle backed by a Playwright sync ``Page``."""

    def __init__(self, page: Page) -> None:
        self._page = page

    @property
    def url(self) -> str:
        return self._page.url

    def title(self) -> str:
        with _translated("read the page title"):
            return self._page.title()

    def inject_script(self, path: Path) -> None:
        with _translated(f"inject script {path.name}"):
            self._page.add_script_tag(path=str(path))

    def evaluate(self, expression: str, arg: Any = None) -> Any:
        with _translated("evaluate script in page"):
            return self._page.evaluate(expression, arg)


class PlaywrightPageDriver(BasePageDriver):
    """Launches one headless browser per call with a fresh, non-persistent context."""

    ENGINES = ("chromium", "firefox", "webkit")

    def __init__(
        self,
        *,
        slots: BrowserSlots,
        engine: str = "chromium",
        headless: bool = True,
        navigation_timeout_ms: int = 30000,
        dom_ready_timeout_ms: int = 15000,
    ) -> None:
        if engine not in self.ENGINES:
            raise ValueError(f"Unknown browser engine '{engine}'. Choose from: {list(self.ENGINES)}")
        self._slots = slots
        self._engine = engine
        self._headless = headless
        self._navigation_timeout_ms = navigation_timeout_ms
        self._dom_ready_timeout_ms = dom_ready_timeout_ms

    @contextmanager
    def open(self, url: str, wait_time_ms: int | None = None) -> Generator[PageHandle, None, None]:
        timeout_ms = wait_time_ms or self._navigation_timeout_ms
        with self._slots.acquire():
            with _translated("start playwright"):
                playwright = sync_playwright().start()
            try:
                browser = self._launch(playwright)
                try:
                    page = self._navigate(browser, url, timeout_ms)
                    yield PlaywrightPageHandle(page)
                finally:
                    self._close(browser)
            finally:
                playwright.stop()

    def _launch(self, playwright: Playwright) -> Browser:
        with _translated(f"launch {self._engine}"):
            browser_type = getattr(playwright, self._engine)
            return browser_type.launch(headless=self._headless)

    def _navigate(self, browser: Browser, url: str, timeout_ms: int) -> Page:
        with _translated(f"load {url}"):
            context = browser.new_context()
            page = context.new_page()
            page.goto(url, wait_until="networkidle", timeout=timeout_ms)
            page.wait_for_selector("body", state="attached", timeout=self._dom_ready_timeout_ms)
        Log.debug(f"Loaded {url} in {self._engine}")
        return page

    @staticmethod
    def _close(browser: Browser) -> None:
        try:
            browser.close()
        except PlaywrightError as exc:
            Log.warning(f"Browser did not close cleanly: {exc}")
