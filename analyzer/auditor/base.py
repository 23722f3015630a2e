from abc import ABC, abstractmethod
from typing import Any

from analyzer.analysis.models import RawAuditResult, RuleSelection
from analyzer.browser.base import PageHandle


class BaseAuditor(ABC):
    """Contract for all rule engine adapters."""

    @abstractmethod
    def audit(self, page: PageHandle, selection: RuleSelection) -> RawAuditResult:
        """Run the rule engine against a loaded page.

        Args:
            page: Loaded document to audit.
            selection: Rule ids or tags to evaluate.

        Returns:
            RawAuditResult with the engine's findings passed through unchanged.

        Raises:
            EngineNotLoadedError: if the engine is absent after injection.
            AuditError: if the engine run failed.
        """

    @abstractmethod
    def list_rules(self, page: PageHandle) -> list[dict[str, Any]]:
        """Describe every rule the engine knows: ruleId, description, help, helpUrl, tags."""
