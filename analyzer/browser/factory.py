from analyzer.browser.base import BasePageDriver
from analyzer.browser.playwright_adapter import PlaywrightPageDriver
from analyzer.browser.slots import BrowserSlots
from analyzer.config.settings import Settings


class PageDriverFactory:
    """Creates the correct page driver based on settings."""

    ADAPTERS: dict[str, type[PlaywrightPageDriver]] = {
        "playwright": PlaywrightPageDriver,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePageDriver:
        driver = settings.page_driver.lower()
        adapter_cls = cls.ADAPTERS.get(driver)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown page driver '{driver}'. Choose from: {list(cls.ADAPTERS)}"
            )
        slots = BrowserSlots(
            max_concurrent=settings.max_concurrent_analyses,
            queue_timeout_seconds=settings.analysis_queue_timeout_seconds,
        )
        return adapter_cls(
            slots=slots,
            engine=settings.browser_engine.lower(),
            headless=settings.browser_headless,
            navigation_timeout_ms=settings.navigation_timeout_ms,
            dom_ready_timeout_ms=settings.dom_ready_timeout_ms,
        )
