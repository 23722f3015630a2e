"""axe-core rule engine adapter."""

from pathlib import Path
from typing import Any

from analyzer.analysis.models import RawAuditResult, RuleSelection
from analyzer.auditor.base import BaseAuditor
from analyzer.auditor.exceptions import AuditError, AuditTimeoutError, EngineNotLoadedError
from analyzer.auditor.script_loader import ensure_engine_script
from analyzer.browser.base import PageHandle
from analyzer.logging.logger import Log

_IS_LOADED_JS = "() => typeof window.axe !== 'undefined' && typeof window.axe.run === 'function'"

_VERSION_JS = "() => window.axe.version"

_RUN_JS = """
async ({ rules, tags, timeoutMs }) => {
    const runOnly = rules && rules.length
        ? { type: 'rule', values: rules }
        : { type: 'tag', values: tags };
    let timer;
    const expired = new Promise((resolve) => {
        timer = setTimeout(() => resolve({ timedOut: true }), timeoutMs);
    });
    try {
        const results = await Promise.race([window.axe.run(document, { runOnly }), expired]);
        if (results.timedOut) {
            return results;
        }
        return {
            violations: results.violations,
            passes: results.passes,
            incomplete: results.incomplete,
            inapplicable: results.inapplicable,
        };
    } finally {
        clearTimeout(timer);
    }
}
"""

_RULES_JS = """
() => window.axe.getRules().map((rule) => ({
    ruleId: rule.ruleId,
    description: rule.description,
    help: rule.help,
    helpUrl: rule.helpUrl,
    tags: rule.tags,
}))
"""

_RESULT_KEYS = ("violations", "passes", "incomplete", "inapplicable")


class AxeAuditor(BaseAuditor):
    """Injects axe-core into the page and runs it with the requested selection."""

    def __init__(
        self,
        *,
        script_path: Path,
        script_url: str,
        download_timeout_seconds: int = 30,
        audit_timeout_ms: int = 60000,
    ) -> None:
        self._script_path = script_path
        self._script_url = script_url
        self._download_timeout_seconds = download_timeout_seconds
        self._audit_timeout_ms = audit_timeout_ms

    def audit(self, page: PageHandle, selection: RuleSelection) -> RawAuditResult:
        version = self._load(page)
        arg = {
            "rules": list(selection.rules) if selection.rules else None,
            "tags": list(selection.tags),
            "timeoutMs": self._audit_timeout_ms,
        }
        raw = page.evaluate(_RUN_JS, arg)
        if isinstance(raw, dict) and raw.get("timedOut"):
            raise AuditTimeoutError(
                f"axe-core did not finish within {self._audit_timeout_ms}ms on {page.url}"
            )
        if not isinstance(raw, dict) or any(not isinstance(raw.get(k), list) for k in _RESULT_KEYS):
            raise AuditError("axe-core returned an unexpected result shape")

        result = RawAuditResult(
            violations=raw["violations"],
            passes=raw["passes"],
            incomplete=raw["incomplete"],
            inapplicable=raw["inapplicable"],
            engine_version=version,
        )
        Log.info(
            f"axe-core {version} found {len(result.violations)} violations, "
            f"{len(result.passes)} passes on {page.url}"
        )
        return result

    def list_rules(self, page: PageHandle) -> list[dict[str, Any]]:
        self._load(page)
        rules = page.evaluate(_RULES_JS)
        if not isinstance(rules, list):
            raise AuditError("axe-core returned an unexpected rule list")
        return rules

    def _load(self, page: PageHandle) -> str:
        """Inject the engine and return its version.

        Raises:
            EngineNotLoadedError: if ``window.axe`` is missing after injection.
        """
        script = ensure_engine_script(
            self._script_path,
            self._script_url,
            self._download_timeout_seconds,
        )
        page.inject_script(script)
        if not page.evaluate(_IS_LOADED_JS):
            raise EngineNotLoadedError("Axe-core not loaded.")
        return str(page.evaluate(_VERSION_JS))
