from collections.abc import Callable

import pytest

from analyzer.analysis.models import AnalysisReport, Subject
from analyzer.database.repositories.report_repository import ReportRepository


@pytest.mark.integration
class TestReportHistory:
    def test_save_and_read_back(
        self,
        make_subject: Callable[[], Subject],
        make_report: Callable[..., AnalysisReport],
    ) -> None:
        subject = make_subject()
        owner_reports = ReportRepository().for_owner(subject)
        report = make_report()

        saved = owner_reports.save(report)
        (loaded,) = owner_reports.list_recent()

        assert saved.id is not None
        assert saved.owner_id == subject.id
        assert loaded.id == saved.id
        assert loaded.created_at == saved.created_at
        expected = report.to_dict()
        actual = loaded.to_dict()
        for key in ("url", "score", "summary", "categories", "pageInfo", "violations",
                    "passes", "incomplete", "inapplicable", "metadata"):
            assert actual[key] == expected[key]

    def test_history_is_isolated_per_subject(
        self,
        make_subject: Callable[[], Subject],
        make_report: Callable[..., AnalysisReport],
    ) -> None:
        alice = make_subject()
        bob = make_subject()
        repo = ReportRepository()
        repo.for_owner(alice).save(make_report("https://alice.example/"))

        assert repo.for_owner(bob).list_recent() == []
        assert [r.url for r in repo.for_owner(alice).list_recent()] == ["https://alice.example/"]

    def test_newest_first_capped_at_fifty(
        self,
        make_subject: Callable[[], Subject],
        make_report: Callable[..., AnalysisReport],
    ) -> None:
        subject = make_subject()
        owner_reports = ReportRepository().for_owner(subject)
        saved_ids = [owner_reports.save(make_report(f"https://example.com/{i}")).id for i in range(55)]

        history = owner_reports.list_recent(limit=100)

        assert len(history) == 50
        assert [r.id for r in history] == list(reversed(saved_ids))[:50]
        assert history[0].url == "https://example.com/54"
