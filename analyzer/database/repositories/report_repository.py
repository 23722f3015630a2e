from dataclasses import replace
from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from analyzer.analysis.models import (
    AnalysisReport,
    CategoryScore,
    EnrichedViolation,
    PageInfo,
    ReportMetadata,
    ReportSummary,
    Subject,
)
from analyzer.database.connection import get_connection, storage_errors
from analyzer.database.models import ReportRecord

MAX_HISTORY = 50

_COLUMNS = (
    "id, user_id, url, score, summary, categories, page_info, violations, "
    "passes, incomplete, inapplicable, metadata, created_at"
)


class ReportRepository:
    """Entry point to the analysis_reports table.

    Reports are only reachable through an owner-bound OwnerReports, so every
    read and write is scoped to one subject.
    """

    def for_owner(self, owner: Subject) -> "OwnerReports":
        return OwnerReports(owner.id)


class OwnerReports:
    """Append-only report history of a single subject."""

    def __init__(self, owner_id: int) -> None:
        self._owner_id = owner_id

    @property
    def owner_id(self) -> int:
        return self._owner_id

    def save(self, report: AnalysisReport) -> AnalysisReport:
        """Insert the report and return it with id, owner and creation time set.

        Raises:
            PersistenceFailureError: if the insert failed.
        """
        with storage_errors("save analysis report"), get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    INSERT INTO analysis_reports
                    (user_id, url, score, summary, categories, page_info, violations,
                     passes, incomplete, inapplicable, metadata)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING id, created_at
                    """,
                    (
                        self._owner_id,
                        report.url,
                        report.score,
                        Jsonb(report.summary.to_dict()),
                        Jsonb({name: c.to_dict() for name, c in report.categories.items()}),
                        Jsonb(report.page_info.to_dict()),
                        Jsonb([v.to_dict() for v in report.violations]),
                        Jsonb(report.passes),
                        Jsonb(report.incomplete),
                        Jsonb(report.inapplicable),
                        Jsonb(report.metadata.to_dict()),
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT INTO analysis_reports returned no row")
        return replace(
            report,
            id=row["id"],
            owner_id=self._owner_id,
            created_at=row["created_at"],
        )

    def list_recent(self, limit: int = MAX_HISTORY) -> list[AnalysisReport]:
        """Return this owner's reports, newest first, at most 50.

        Raises:
            PersistenceFailureError: if the query failed.
        """
        limit = max(0, min(limit, MAX_HISTORY))
        with storage_errors("load analysis history"), get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM analysis_reports
                    WHERE user_id = %s
                    ORDER BY created_at DESC, id DESC
                    LIMIT %s
                    """,
                    (self._owner_id, limit),
                )
                rows = cur.fetchall()

        return [_to_report(_to_record(row)) for row in rows]


def _to_record(row: dict[str, Any]) -> ReportRecord:
    return ReportRecord(
        id=row["id"],
        user_id=row["user_id"],
        url=row["url"],
        score=row["score"],
        summary=row["summary"],
        categories=row["categories"] or {},
        page_info=row["page_info"],
        violations=row["violations"],
        passes=row["passes"],
        incomplete=row["incomplete"],
        inapplicable=row["inapplicable"],
        metadata=row["metadata"],
        created_at=row["created_at"],
    )


def _to_report(record: ReportRecord) -> AnalysisReport:
    return AnalysisReport(
        id=record.id,
        owner_id=record.user_id,
        url=record.url,
        score=record.score,
        summary=ReportSummary.from_dict(record.summary),
        categories={
            name: CategoryScore(
                issues=data.get("issues", 0),
                score=data.get("score", 100),
                status=data.get("status", "success"),
            )
            for name, data in record.categories.items()
        },
        page_info=PageInfo.from_dict(record.page_info),
        violations=[EnrichedViolation.from_dict(v) for v in record.violations],
        passes=record.passes,
        incomplete=record.incomplete,
        inapplicable=record.inapplicable,
        metadata=ReportMetadata.from_dict(record.metadata),
        created_at=record.created_at,
    )
