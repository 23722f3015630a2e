from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import psycopg
import pytest
from psycopg.types.json import Jsonb

from analyzer.analysis.exceptions import PersistenceFailureError
from analyzer.analysis.models import AnalysisOptions, PageInfo, RawAuditResult, Subject
from analyzer.analysis.report_builder import ReportBuilder
from analyzer.database.repositories.report_repository import MAX_HISTORY, ReportRepository

SUBJECT = Subject(id=4, username="dora")
CREATED_AT = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


def _report(raw_result: RawAuditResult):
    return ReportBuilder(clock=lambda: CREATED_AT).build(
        raw_result,
        PageInfo(url="https://example.com/", title="Example Domain"),
        AnalysisOptions(),
    )


def _stored_row(report_id: int, raw_result: RawAuditResult) -> dict:
    data = _report(raw_result).to_dict()
    return {
        "id": report_id,
        "user_id": SUBJECT.id,
        "url": data["url"],
        "score": data["score"],
        "summary": data["summary"],
        "categories": data["categories"],
        "page_info": data["pageInfo"],
        "violations": data["violations"],
        "passes": data["passes"],
        "incomplete": data["incomplete"],
        "inapplicable": data["inapplicable"],
        "metadata": data["metadata"],
        "created_at": CREATED_AT,
    }


class TestOwnerReportsSave:
    @patch("analyzer.database.repositories.report_repository.get_connection")
    def test_insert_sets_identity(self, mock_get_conn: MagicMock, raw_result: RawAuditResult) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = {"id": 12, "created_at": CREATED_AT}
        report = _report(raw_result)

        saved = ReportRepository().for_owner(SUBJECT).save(report)

        assert saved.id == 12
        assert saved.owner_id == 4
        assert saved.created_at == CREATED_AT
        assert saved.score == report.score
        assert report.id is None
        mock_conn.commit.assert_called_once()

    @patch("analyzer.database.repositories.report_repository.get_connection")
    def test_insert_binds_owner_and_json(self, mock_get_conn: MagicMock, raw_result: RawAuditResult) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = {"id": 12, "created_at": CREATED_AT}

        ReportRepository().for_owner(SUBJECT).save(_report(raw_result))

        sql, params = mock_cursor.execute.call_args.args
        assert "INSERT INTO analysis_reports" in sql
        assert params[0] == 4
        assert params[1] == "https://example.com/"
        assert all(isinstance(p, Jsonb) for p in params[3:])

    @patch("analyzer.database.repositories.report_repository.get_connection")
    def test_database_error_becomes_persistence_failure(
        self, mock_get_conn: MagicMock, raw_result: RawAuditResult
    ) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.execute.side_effect = psycopg.OperationalError("connection refused")

        with pytest.raises(PersistenceFailureError):
            ReportRepository().for_owner(SUBJECT).save(_report(raw_result))

        mock_conn.commit.assert_not_called()


class TestOwnerReportsListRecent:
    @patch("analyzer.database.repositories.report_repository.get_connection")
    def test_scoped_to_owner_newest_first(self, mock_get_conn: MagicMock, raw_result: RawAuditResult) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = [_stored_row(2, raw_result), _stored_row(1, raw_result)]

        reports = ReportRepository().for_owner(SUBJECT).list_recent()

        assert [r.id for r in reports] == [2, 1]
        sql, params = mock_cursor.execute.call_args.args
        assert "WHERE user_id = %s" in sql
        assert "ORDER BY created_at DESC, id DESC" in sql
        assert params == (4, MAX_HISTORY)

    @patch("analyzer.database.repositories.report_repository.get_connection")
    def test_limit_is_capped(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = []

        ReportRepository().for_owner(SUBJECT).list_recent(limit=500)

        assert mock_cursor.execute.call_args.args[1] == (4, 50)

    @patch("analyzer.database.repositories.report_repository.get_connection")
    def test_rows_rebuild_full_report(self, mock_get_conn: MagicMock, raw_result: RawAuditResult) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = [_stored_row(2, raw_result)]

        (report,) = ReportRepository().for_owner(SUBJECT).list_recent()
        original = _report(raw_result).to_dict()
        data = report.to_dict()

        assert data["userId"] == 4
        assert data["createdAt"] == CREATED_AT.isoformat()
        for key in ("url", "score", "summary", "categories", "pageInfo", "violations",
                    "passes", "incomplete", "inapplicable", "metadata"):
            assert data[key] == original[key]

    @patch("analyzer.database.repositories.report_repository.get_connection")
    def test_empty_history(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = []

        assert ReportRepository().for_owner(SUBJECT).list_recent() == []
