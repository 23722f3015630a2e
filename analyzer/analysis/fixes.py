"""Rule-keyed before/after code suggestions.

These are illustrative templates, not an HTML rewriter: each one does a
single textual substitution on the first affected node's markup.
"""

from collections.abc import Callable, Sequence
from typing import Any

from analyzer.analysis.models import CodeExample

FixTemplate = Callable[[str], str]

FALLBACK_COMMENT = " <!-- Add appropriate accessibility attributes -->"


def _replace_first(old: str, new: str) -> FixTemplate:
    return lambda html: html.replace(old, new, 1)


FIX_TEMPLATES: dict[str, FixTemplate] = {
    "color-contrast": _replace_first("text-gray-400 bg-gray-300", "text-gray-800 bg-white"),
    "image-alt": _replace_first("<img src=", '<img alt="Descriptive text" src='),
    "label": _replace_first("<input", '<input aria-label="Input description"'),
    "heading-order": _replace_first("<h3>", "<h2>"),
}


def _fallback(html: str) -> str:
    return html + FALLBACK_COMMENT


def build_code_example(rule_id: str, nodes: Sequence[dict[str, Any]] | None) -> CodeExample:
    before = ""
    if nodes:
        before = nodes[0].get("html") or ""
    template = FIX_TEMPLATES.get(rule_id, _fallback)
    return CodeExample(before=before, after=template(before))
