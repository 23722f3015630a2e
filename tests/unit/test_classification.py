import pytest

from analyzer.analysis.classification import (
    CATEGORIES,
    COLOR_CONTRAST,
    FORMS_CONTROLS,
    GENERAL,
    IMAGES_MEDIA,
    KEYBOARD_FOCUS,
    STRUCTURE_NAVIGATION,
    WCAG_COMPLIANCE,
    categorize,
    category_status,
    estimate_affected_users,
    extract_wcag_level,
    map_impact_to_severity,
)


class TestCategorize:
    @pytest.mark.parametrize(
        ("rule_id", "expected"),
        [
            ("color-contrast", COLOR_CONTRAST),
            ("image-alt", IMAGES_MEDIA),
            ("input-image-alt", IMAGES_MEDIA),
            ("label", FORMS_CONTROLS),
            ("select-name-form", FORMS_CONTROLS),
            ("heading-order", STRUCTURE_NAVIGATION),
            ("landmark-one-main", STRUCTURE_NAVIGATION),
            ("tabindex", KEYBOARD_FOCUS),
            ("focus-order-semantics", KEYBOARD_FOCUS),
        ],
    )
    def test_rule_id_substrings(self, rule_id: str, expected: str) -> None:
        assert categorize(rule_id, []) == expected

    def test_rule_id_match_is_case_insensitive(self) -> None:
        assert categorize("Color-Contrast", []) == COLOR_CONTRAST

    def test_rule_id_checked_before_tags(self) -> None:
        assert categorize("image-alt", ["wcag2a"]) == IMAGES_MEDIA

    def test_wcag_tag_fallback(self) -> None:
        assert categorize("duplicate-id", ["wcag2a", "wcag411"]) == WCAG_COMPLIANCE
        assert categorize("duplicate-id", ["wcag2aa"]) == WCAG_COMPLIANCE

    def test_other_wcag_tags_do_not_count_as_compliance(self) -> None:
        assert categorize("duplicate-id", ["wcag21aa"]) == GENERAL

    def test_general_fallback(self) -> None:
        assert categorize("region", ["best-practice"]) == GENERAL

    def test_every_result_is_in_taxonomy(self) -> None:
        for rule_id in ("color-contrast", "region", "document-title", "tabindex"):
            assert categorize(rule_id, []) in CATEGORIES


class TestSeverityAndAffectedUsers:
    @pytest.mark.parametrize(
        ("impact", "severity"),
        [("critical", "critical"), ("serious", "high"), ("moderate", "medium"), ("minor", "low")],
    )
    def test_severity_mapping(self, impact: str, severity: str) -> None:
        assert map_impact_to_severity(impact) == severity

    def test_severity_defaults_to_medium(self) -> None:
        assert map_impact_to_severity(None) == "medium"
        assert map_impact_to_severity("unknown") == "medium"

    def test_affected_users_mapping(self) -> None:
        assert estimate_affected_users("critical") == "15% of users with disabilities"
        assert estimate_affected_users("serious") == "10% of users with disabilities"
        assert estimate_affected_users("moderate") == "5% of users"
        assert estimate_affected_users("minor") == "2% of users"

    def test_affected_users_default(self) -> None:
        assert estimate_affected_users(None) == "Some users"


class TestExtractWcagLevel:
    def test_single_level_a(self) -> None:
        assert extract_wcag_level(["cat.forms", "wcag2a", "wcag412"]) == "A"

    def test_level_aa(self) -> None:
        assert extract_wcag_level(["wcag2aa", "wcag143"]) == "AA"

    def test_level_aa_21(self) -> None:
        assert extract_wcag_level(["wcag21aa", "wcag1411"]) == "AA (2.1)"

    def test_strictest_level_wins(self) -> None:
        assert extract_wcag_level(["wcag2a", "wcag2aaa"]) == "AAA"
        assert extract_wcag_level(["wcag2a", "wcag2aa"]) == "AA"

    def test_criterion_tags_are_ignored(self) -> None:
        assert extract_wcag_level(["wcag111", "best-practice"]) == "N/A"

    def test_no_tags(self) -> None:
        assert extract_wcag_level([]) == "N/A"

    def test_unknown_level_tag_is_upper_cased(self) -> None:
        assert extract_wcag_level(["wcag22aa"]) == "WCAG22AA"


class TestCategoryStatus:
    @pytest.mark.parametrize(
        ("score", "status"),
        [(100, "success"), (90, "success"), (89, "warning"), (70, "warning"), (69, "error"), (0, "error")],
    )
    def test_thresholds(self, score: int, status: str) -> None:
        assert category_status(score) == status
