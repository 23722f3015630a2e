from collections import Counter
from collections.abc import Callable
from datetime import datetime, timezone

from analyzer.analysis.classification import (
    CATEGORIES,
    categorize,
    category_status,
    estimate_affected_users,
    extract_wcag_level,
    map_impact_to_severity,
)
from analyzer.analysis.fixes import build_code_example
from analyzer.analysis.models import (
    AnalysisOptions,
    AnalysisReport,
    CategoryScore,
    EnrichedViolation,
    Finding,
    PageInfo,
    RawAuditResult,
    ReportMetadata,
    ReportSummary,
)

_CATEGORY_PENALTY = 20


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def compute_score(passed: int, total: int) -> int:
    """Percentage of checks passed, rounded half up. Zero when nothing ran."""
    if total <= 0:
        return 0
    return (200 * passed + total) // (2 * total)


class ReportBuilder:
    """Turns raw audit findings into an AnalysisReport. No I/O."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock

    def build(
        self,
        raw: RawAuditResult,
        page_info: PageInfo,
        options: AnalysisOptions,
    ) -> AnalysisReport:
        total_checks = len(raw.violations) + len(raw.passes) + len(raw.incomplete)
        passed_checks = len(raw.passes)
        score = compute_score(passed_checks, total_checks)
        violations = [self.enrich(finding) for finding in raw.violations]

        impacts = Counter(v.impact for v in violations)
        summary = ReportSummary(
            total_violations=len(raw.violations),
            total_passes=len(raw.passes),
            total_incomplete=len(raw.incomplete),
            total_inapplicable=len(raw.inapplicable),
            total_checks=total_checks,
            passed_checks=passed_checks,
            score=score,
            critical_issues=impacts["critical"],
            warning_issues=impacts["serious"],
            info_issues=impacts["moderate"] + impacts["minor"],
        )
        metadata = ReportMetadata(
            engine_version=raw.engine_version,
            analysis_time=self._clock().isoformat(),
            rules_run=total_checks,
            options=options.to_dict(),
        )
        return AnalysisReport(
            url=page_info.url,
            score=score,
            summary=summary,
            categories=self.category_breakdown(violations),
            page_info=page_info,
            violations=violations,
            passes=list(raw.passes),
            incomplete=list(raw.incomplete),
            inapplicable=list(raw.inapplicable),
            metadata=metadata,
        )

    @staticmethod
    def enrich(finding: Finding) -> EnrichedViolation:
        rule_id = str(finding.get("id", ""))
        tags = finding.get("tags") or []
        impact = finding.get("impact")
        return EnrichedViolation(
            finding=finding,
            category=categorize(rule_id, tags),
            severity=map_impact_to_severity(impact),
            wcag_level=extract_wcag_level(tags),
            affected_users=estimate_affected_users(impact),
            code_example=build_code_example(rule_id, finding.get("nodes")),
        )

    @staticmethod
    def category_breakdown(violations: list[EnrichedViolation]) -> dict[str, CategoryScore]:
        counts = Counter(v.category for v in violations)
        breakdown: dict[str, CategoryScore] = {}
        for category in CATEGORIES:
            issues = counts[category]
            score = max(0, 100 - issues * _CATEGORY_PENALTY)
            breakdown[category] = CategoryScore(
                issues=issues, score=score, status=category_status(score)
            )
        return breakdown
