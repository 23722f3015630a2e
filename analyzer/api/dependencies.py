"""Service wiring and FastAPI dependencies."""

from dataclasses import dataclass

from fastapi import Depends, Request

from analyzer.analysis.models import Subject
from analyzer.analysis.orchestrator import AnalysisOrchestrator, build_auditor, build_orchestrator
from analyzer.analysis.rules_catalog import RulesCatalog
from analyzer.auth.service import AuthService
from analyzer.auth.tokens import TokenIssuer
from analyzer.browser.factory import PageDriverFactory
from analyzer.config.settings import Settings
from analyzer.database.repositories.report_repository import ReportRepository
from analyzer.database.repositories.user_repository import UserRepository


@dataclass
class AppServices:
    """Everything the routes need, built once per process."""

    auth: AuthService
    orchestrator: AnalysisOrchestrator
    reports: ReportRepository
    rules: RulesCatalog


def build_services(settings: Settings) -> AppServices:
    # One driver for analyses and the rule catalog so both share the browser slots.
    page_driver = PageDriverFactory.create(settings)
    auditor = build_auditor(settings)
    tokens = TokenIssuer(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl_minutes=settings.token_ttl_minutes,
    )
    return AppServices(
        auth=AuthService(
            UserRepository(),
            tokens,
            username_min_length=settings.username_min_length,
            password_min_length=settings.password_min_length,
        ),
        orchestrator=build_orchestrator(settings, page_driver=page_driver, auditor=auditor),
        reports=ReportRepository(),
        rules=RulesCatalog(page_driver, auditor),
    )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_services(request: Request) -> AppServices:
    return request.app.state.services


def get_current_subject(
    request: Request,
    services: AppServices = Depends(get_services),
    settings: Settings = Depends(get_settings),
) -> Subject:
    """Resolve the auth header to a subject or fail with 401 before any work."""
    token = request.headers.get(settings.auth_header_name)
    return services.auth.authenticate(token)
