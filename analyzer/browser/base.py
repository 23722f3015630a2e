from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Any


class PageHandle(ABC):
    """A loaded document inside an isolated browsing context."""

    @property
    @abstractmethod
    def url(self) -> str:
        """Final URL after redirects."""

    @abstractmethod
    def title(self) -> str:
        """Document title."""

    @abstractmethod
    def inject_script(self, path: Path) -> None:
        """Add a script tag with the file's content to the document.

        Raises:
            BrowserError: if the script could not be injected.
        """

    @abstractmethod
    def evaluate(self, expression: str, arg: Any = None) -> Any:
        """Evaluate a JavaScript function in the page and return its JSON result.

        Raises:
            BrowserError: if evaluation throws in the page.
            NavigationTimeoutError: if evaluation timed out.
        """


class BasePageDriver(ABC):
    """Contract for all page driver adapters."""

    @abstractmethod
    def open(self, url: str, wait_time_ms: int | None = None) -> AbstractContextManager[PageHandle]:
        """Open a fresh browsing context, navigate to ``url`` and yield the page.

        The context and browser process are released when the ``with`` block
        exits, whatever the outcome.

        Raises:
            NavigationTimeoutError: if the page or DOM did not become ready in time.
            BrowserError: if the browser failed to launch or navigate.
            BrowserCapacityError: if no browser slot became free in time.
        """
