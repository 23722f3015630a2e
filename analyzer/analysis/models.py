from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

DEFAULT_TAGS: tuple[str, ...] = ("wcag2a", "wcag2aa", "wcag21aa", "best-practice")

Finding = dict[str, Any]


@dataclass(frozen=True)
class AnalysisOptions:
    """Caller-supplied analysis options, echoed into report metadata."""

    rules: list[str] | None = None
    tags: list[str] | None = None
    wait_time_ms: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.rules is not None:
            data["rules"] = list(self.rules)
        if self.tags is not None:
            data["tags"] = list(self.tags)
        if self.wait_time_ms is not None:
            data["waitTime"] = self.wait_time_ms
        return data


@dataclass(frozen=True)
class RuleSelection:
    """Rule ids or tags the audit engine should evaluate."""

    rules: tuple[str, ...] | None = None
    tags: tuple[str, ...] = DEFAULT_TAGS

    @classmethod
    def from_options(cls, options: AnalysisOptions) -> "RuleSelection":
        rules = tuple(options.rules) if options.rules else None
        tags = tuple(options.tags) if options.tags else DEFAULT_TAGS
        return cls(rules=rules, tags=tags)


@dataclass(frozen=True)
class Subject:
    """An authenticated account. The password hash never leaves the auth layer."""

    id: int
    username: str
    created_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class AnalysisRequest:
    """One analysis run: what to audit, for whom, and how long to wait."""

    url: str
    selection: RuleSelection
    owner_id: int
    wait_time_ms: int | None = None


@dataclass(frozen=True)
class RawAuditResult:
    """Findings as returned by the audit engine, unmodified."""

    violations: list[Finding] = field(default_factory=list)
    passes: list[Finding] = field(default_factory=list)
    incomplete: list[Finding] = field(default_factory=list)
    inapplicable: list[Finding] = field(default_factory=list)
    engine_version: str = "unknown"


@dataclass(frozen=True)
class PageInfo:
    url: str
    title: str

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "title": self.title}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PageInfo":
        return cls(url=data.get("url", ""), title=data.get("title", ""))


@dataclass(frozen=True)
class CodeExample:
    before: str
    after: str

    def to_dict(self) -> dict[str, str]:
        return {"before": self.before, "after": self.after}


_ENRICHMENT_KEYS = frozenset(
    {"category", "severity", "wcagLevel", "affectedUsers", "codeExample"}
)


@dataclass(frozen=True)
class EnrichedViolation:
    """A violation finding plus classification and a suggested fix."""

    finding: Finding
    category: str
    severity: str
    wcag_level: str
    affected_users: str
    code_example: CodeExample

    @property
    def rule_id(self) -> str:
        return str(self.finding.get("id", ""))

    @property
    def impact(self) -> str | None:
        return self.finding.get("impact")

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.finding,
            "category": self.category,
            "severity": self.severity,
            "wcagLevel": self.wcag_level,
            "affectedUsers": self.affected_users,
            "codeExample": self.code_example.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EnrichedViolation":
        example = data.get("codeExample") or {}
        return cls(
            finding={k: v for k, v in data.items() if k not in _ENRICHMENT_KEYS},
            category=data.get("category", ""),
            severity=data.get("severity", ""),
            wcag_level=data.get("wcagLevel", ""),
            affected_users=data.get("affectedUsers", ""),
            code_example=CodeExample(
                before=example.get("before", ""),
                after=example.get("after", ""),
            ),
        )


@dataclass(frozen=True)
class ReportSummary:
    total_violations: int
    total_passes: int
    total_incomplete: int
    total_inapplicable: int
    total_checks: int
    passed_checks: int
    score: int
    critical_issues: int = 0
    warning_issues: int = 0
    info_issues: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalViolations": self.total_violations,
            "totalPasses": self.total_passes,
            "totalIncomplete": self.total_incomplete,
            "totalInapplicable": self.total_inapplicable,
            "totalChecks": self.total_checks,
            "passedChecks": self.passed_checks,
            "score": self.score,
            "criticalIssues": self.critical_issues,
            "warningIssues": self.warning_issues,
            "infoIssues": self.info_issues,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReportSummary":
        return cls(
            total_violations=data.get("totalViolations", 0),
            total_passes=data.get("totalPasses", 0),
            total_incomplete=data.get("totalIncomplete", 0),
            total_inapplicable=data.get("totalInapplicable", 0),
            total_checks=data.get("totalChecks", 0),
            passed_checks=data.get("passedChecks", 0),
            score=data.get("score", 0),
            critical_issues=data.get("criticalIssues", 0),
            warning_issues=data.get("warningIssues", 0),
            info_issues=data.get("infoIssues", 0),
        )


@dataclass(frozen=True)
class CategoryScore:
    issues: int
    score: int
    status: str

    def to_dict(self) -> dict[str, Any]:
        return {"issues": self.issues, "score": self.score, "status": self.status}


@dataclass(frozen=True)
class ReportMetadata:
    engine_version: str
    analysis_time: str
    rules_run: int
    options: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "engineVersion": self.engine_version,
            "analysisTime": self.analysis_time,
            "rulesRun": self.rules_run,
            "options": dict(self.options),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReportMetadata":
        return cls(
            engine_version=data.get("engineVersion", "unknown"),
            analysis_time=data.get("analysisTime", ""),
            rules_run=data.get("rulesRun", 0),
            options=dict(data.get("options") or {}),
        )


@dataclass(frozen=True)
class AnalysisReport:
    """Outcome of one analysis. Never mutated once built.

    ``id``, ``owner_id`` and ``created_at`` are set when the report is stored.
    """

    url: str
    score: int
    summary: ReportSummary
    categories: dict[str, CategoryScore]
    page_info: PageInfo
    violations: list[EnrichedViolation]
    passes: list[Finding]
    incomplete: list[Finding]
    inapplicable: list[Finding]
    metadata: ReportMetadata
    owner_id: int | None = None
    id: int | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "score": self.score,
            "summary": self.summary.to_dict(),
            "categories": {name: c.to_dict() for name, c in self.categories.items()},
            "pageInfo": self.page_info.to_dict(),
            "violations": [v.to_dict() for v in self.violations],
            "passes": list(self.passes),
            "incomplete": list(self.incomplete),
            "inapplicable": list(self.inapplicable),
            "metadata": self.metadata.to_dict(),
            "userId": self.owner_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
