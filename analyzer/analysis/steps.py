from analyzer.analysis.exceptions import PersistenceFailureError, UnauthorizedError
from analyzer.analysis.models import AnalysisRequest, PageInfo, RuleSelection
from analyzer.analysis.pipeline import AnalysisContext, AnalysisState, PipelineStep
from analyzer.analysis.report_builder import ReportBuilder
from analyzer.analysis.url import normalize_url
from analyzer.auditor.base import BaseAuditor
from analyzer.browser.base import BasePageDriver
from analyzer.database.repositories.report_repository import ReportRepository
from analyzer.logging.logger import Log


class AuthenticateStep(PipelineStep):
    def run(self, context: AnalysisContext) -> AnalysisContext:
        if context.subject is None:
            raise UnauthorizedError("No authenticated subject for analysis")
        context.advance(AnalysisState.AUTHENTICATED)
        return context


class ValidateUrlStep(PipelineStep):
    def run(self, context: AnalysisContext) -> AnalysisContext:
        if context.subject is None:
            raise ValueError("AnalysisContext.subject must be set before validation")
        url = normalize_url(context.raw_url)
        context.request = AnalysisRequest(
            url=url,
            selection=RuleSelection.from_options(context.options),
            owner_id=context.subject.id,
            wait_time_ms=context.options.wait_time_ms,
        )
        context.advance(AnalysisState.VALIDATED)
        Log.info(f"Analysis of {url} requested by user {context.subject.id}")
        return context


class AuditPageStep(PipelineStep):
    """Navigate and audit inside one browsing context, released on every exit path."""

    def __init__(self, page_driver: BasePageDriver, auditor: BaseAuditor) -> None:
        self._page_driver = page_driver
        self._auditor = auditor

    def run(self, context: AnalysisContext) -> AnalysisContext:
        request = context.request
        if request is None:
            raise ValueError("AnalysisContext.request must be set before auditing")

        context.advance(AnalysisState.NAVIGATING)
        with self._page_driver.open(request.url, request.wait_time_ms) as page:
            context.advance(AnalysisState.AUDITING)
            context.raw_result = self._auditor.audit(page, request.selection)
            context.page_info = PageInfo(url=page.url, title=page.title())
        return context


class BuildReportStep(PipelineStep):
    def __init__(self, builder: ReportBuilder) -> None:
        self._builder = builder

    def run(self, context: AnalysisContext) -> AnalysisContext:
        if context.raw_result is None or context.page_info is None:
            raise ValueError("AnalysisContext.raw_result must be set before building")
        context.report = self._builder.build(
            context.raw_result,
            context.page_info,
            context.options,
        )
        context.advance(AnalysisState.BUILT)
        Log.info(f"Built report for {context.report.url}: score {context.report.score}")
        return context


class PersistReportStep(PipelineStep):
    """Store the report. A failed write is logged and the unsaved report kept."""

    def __init__(self, reports: ReportRepository) -> None:
        self._reports = reports

    def run(self, context: AnalysisContext) -> AnalysisContext:
        if context.report is None or context.subject is None:
            raise ValueError("AnalysisContext.report must be set before persist")
        try:
            context.report = self._reports.for_owner(context.subject).save(context.report)
        except PersistenceFailureError as exc:
            Log.error(
                f"Report for {context.report.url} not saved for user "
                f"{context.subject.id}, returning it unsaved: {exc}"
            )
            return context
        context.advance(AnalysisState.PERSISTED)
        Log.info(f"Saved report {context.report.id} for user {context.subject.id}")
        return context
