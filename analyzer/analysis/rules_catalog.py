import threading
from typing import Any

from analyzer.auditor.base import BaseAuditor
from analyzer.browser.base import BasePageDriver
from analyzer.logging.logger import Log

BLANK_PAGE = "about:blank"


class RulesCatalog:
    """Lists the engine's rules, loaded once from a blank page and cached."""

    def __init__(self, page_driver: BasePageDriver, auditor: BaseAuditor) -> None:
        self._page_driver = page_driver
        self._auditor = auditor
        self._rules: list[dict[str, Any]] | None = None
        self._lock = threading.Lock()

    def list_rules(self) -> list[dict[str, Any]]:
        with self._lock:
            if self._rules is None:
                with self._page_driver.open(BLANK_PAGE) as page:
                    self._rules = self._auditor.list_rules(page)
                Log.info(f"Loaded {len(self._rules)} engine rules")
            return list(self._rules)
