import os
import uuid
from collections.abc import Callable, Generator

import psycopg
import pytest

from analyzer.analysis.models import AnalysisOptions, AnalysisReport, PageInfo, RawAuditResult, Subject
from analyzer.analysis.report_builder import ReportBuilder
from analyzer.config.settings import Settings
from analyzer.database.connection import apply_schema, close_pool, get_connection, init_pool
from analyzer.database.repositories.user_repository import UserRepository
from tests.fakes import make_finding


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "accessibility_analyzer_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        psycopg.connect(
            host=test_settings.db_host,
            port=test_settings.db_port,
            dbname=test_settings.db_database,
            user=test_settings.db_username,
            password=test_settings.db_password,
            connect_timeout=3,
        ).close()
    except psycopg.Error as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run integration tests")
    init_pool(test_settings)
    try:
        apply_schema()
        yield
    finally:
        close_pool()


@pytest.fixture
def created_users(integration_pool: None) -> Generator[list[int], None, None]:
    user_ids: list[int] = []
    yield user_ids
    if not user_ids:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            # analysis_reports rows go with their owner (ON DELETE CASCADE)
            cur.execute("DELETE FROM users WHERE id = ANY(%s)", (user_ids,))
        conn.commit()


@pytest.fixture
def make_subject(created_users: list[int]) -> Callable[[], Subject]:
    def _make() -> Subject:
        user = UserRepository().create(f"it-{uuid.uuid4().hex[:12]}", "pbkdf2_sha256$1000$00$00")
        created_users.append(user.id)
        return Subject(id=user.id, username=user.username, created_at=user.created_at)

    return _make


@pytest.fixture
def make_report() -> Callable[[str], AnalysisReport]:
    def _make(url: str = "https://example.com/") -> AnalysisReport:
        raw = RawAuditResult(
            violations=[make_finding("image-alt", "critical", ["wcag2a"], '<img src="a.png">')],
            passes=[make_finding("document-title", None)],
            engine_version="4.10.2",
        )
        return ReportBuilder().build(raw, PageInfo(url=url, title="Example"), AnalysisOptions())

    return _make
