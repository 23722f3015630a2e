from typing import Any

from fastapi import APIRouter, Depends

from analyzer.analysis.models import Subject
from analyzer.api.dependencies import AppServices, get_current_subject, get_services, get_settings
from analyzer.api.schemas import AnalyzeBody
from analyzer.config.settings import Settings

router = APIRouter(tags=["analysis"])


# Sync handlers: FastAPI runs them in its threadpool, one browser per request.
@router.post("/analyze")
def analyze(
    body: AnalyzeBody,
    subject: Subject = Depends(get_current_subject),
    services: AppServices = Depends(get_services),
) -> dict[str, Any]:
    report = services.orchestrator.analyze(subject, body.url, body.to_options())
    return report.to_dict()


@router.get("/history")
def history(
    subject: Subject = Depends(get_current_subject),
    services: AppServices = Depends(get_services),
    settings: Settings = Depends(get_settings),
) -> list[dict[str, Any]]:
    reports = services.reports.for_owner(subject).list_recent(settings.history_limit)
    return [report.to_dict() for report in reports]
