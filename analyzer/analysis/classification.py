"""Pure classification helpers for violation findings."""

import re
from collections.abc import Iterable

COLOR_CONTRAST = "Color & Contrast"
IMAGES_MEDIA = "Images & Media"
FORMS_CONTROLS = "Forms & Controls"
STRUCTURE_NAVIGATION = "Structure & Navigation"
KEYBOARD_FOCUS = "Keyboard & Focus"
WCAG_COMPLIANCE = "WCAG Compliance"
GENERAL = "General Accessibility"

CATEGORIES: tuple[str, ...] = (
    COLOR_CONTRAST,
    IMAGES_MEDIA,
    FORMS_CONTROLS,
    STRUCTURE_NAVIGATION,
    KEYBOARD_FOCUS,
    WCAG_COMPLIANCE,
    GENERAL,
)

# Checked in order; first rule id substring match wins.
_RULE_ID_CATEGORIES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("color", "contrast"), COLOR_CONTRAST),
    (("image", "alt"), IMAGES_MEDIA),
    (("form", "label", "input"), FORMS_CONTROLS),
    (("heading", "structure", "landmark"), STRUCTURE_NAVIGATION),
    (("keyboard", "focus", "tabindex"), KEYBOARD_FOCUS),
)

_WCAG_COMPLIANCE_TAGS = frozenset({"wcag2a", "wcag2aa"})

_SEVERITY_BY_IMPACT = {
    "critical": "critical",
    "serious": "high",
    "moderate": "medium",
    "minor": "low",
}
_DEFAULT_SEVERITY = "medium"

_AFFECTED_USERS_BY_IMPACT = {
    "critical": "15% of users with disabilities",
    "serious": "10% of users with disabilities",
    "moderate": "5% of users",
    "minor": "2% of users",
}
_DEFAULT_AFFECTED_USERS = "Some users"

_WCAG_LEVEL_TAG = re.compile(r"wcag\d+a{1,3}", re.IGNORECASE)

# Checked in order against every level tag; first hit wins.
_WCAG_LEVEL_PRECEDENCE: tuple[tuple[str, str], ...] = (
    ("wcag2aaa", "AAA"),
    ("wcag21aa", "AA (2.1)"),
    ("wcag2aa", "AA"),
    ("wcag2a", "A"),
)


def categorize(rule_id: str, tags: Iterable[str]) -> str:
    """Map a rule id and its tags to one category of the fixed taxonomy."""
    rule_id = rule_id.lower()
    for needles, category in _RULE_ID_CATEGORIES:
        if any(needle in rule_id for needle in needles):
            return category
    if _WCAG_COMPLIANCE_TAGS.intersection(tags):
        return WCAG_COMPLIANCE
    return GENERAL


def map_impact_to_severity(impact: str | None) -> str:
    return _SEVERITY_BY_IMPACT.get(impact or "", _DEFAULT_SEVERITY)


def estimate_affected_users(impact: str | None) -> str:
    return _AFFECTED_USERS_BY_IMPACT.get(impact or "", _DEFAULT_AFFECTED_USERS)


def extract_wcag_level(tags: Iterable[str]) -> str:
    """Derive the WCAG conformance level from a finding's tags.

    Only level tags (``wcag2a``, ``wcag21aa``, ``wcag2aaa``...) count. The
    strictest level wins, so ``wcag2a`` + ``wcag2aaa`` is ``AAA``. A level
    tag outside the known set is returned upper-cased.
    """
    level_tags = [tag.lower() for tag in tags if _WCAG_LEVEL_TAG.fullmatch(tag)]
    if not level_tags:
        return "N/A"
    for needle, level in _WCAG_LEVEL_PRECEDENCE:
        if any(needle in tag for tag in level_tags):
            return level
    return level_tags[0].upper()


def category_status(score: int) -> str:
    if score >= 90:
        return "success"
    if score >= 70:
        return "warning"
    return "error"
