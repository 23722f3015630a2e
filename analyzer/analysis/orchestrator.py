from pathlib import Path

from analyzer.analysis.exceptions import (
    AnalysisFailedError,
    AnalyzerError,
    InternalError,
    UpstreamFailureError,
    UpstreamTimeoutError,
)
from analyzer.analysis.models import AnalysisOptions, AnalysisReport, Subject
from analyzer.analysis.pipeline import AnalysisContext, AnalysisState, PipelineStep
from analyzer.analysis.report_builder import ReportBuilder
from analyzer.analysis.steps import (
    AuditPageStep,
    AuthenticateStep,
    BuildReportStep,
    PersistReportStep,
    ValidateUrlStep,
)
from analyzer.auditor.axe_adapter import AxeAuditor
from analyzer.auditor.base import BaseAuditor
from analyzer.browser.base import BasePageDriver
from analyzer.browser.factory import PageDriverFactory
from analyzer.config.settings import Settings
from analyzer.database.repositories.report_repository import ReportRepository
from analyzer.logging.logger import Log


class AnalysisOrchestrator:
    """Runs one analysis request through the pipeline.

    Pipeline: authenticate -> validate -> navigate + audit -> build -> persist.
    Stages run strictly in order; the first failure moves the request to
    FAILED and is re-raised as an AnalyzerError.
    """

    def __init__(
        self,
        page_driver: BasePageDriver,
        auditor: BaseAuditor,
        builder: ReportBuilder,
        reports: ReportRepository,
    ) -> None:
        self._steps: list[PipelineStep] = [
            AuthenticateStep(),
            ValidateUrlStep(),
            AuditPageStep(page_driver, auditor),
            BuildReportStep(builder),
            PersistReportStep(reports),
        ]

    def analyze(
        self,
        subject: Subject | None,
        url: str | None,
        options: AnalysisOptions | None = None,
    ) -> AnalysisReport:
        context = AnalysisContext(
            raw_url=url,
            options=options or AnalysisOptions(),
            subject=subject,
        )
        try:
            for step in self._steps:
                context = step.run(context)
        except (UpstreamTimeoutError, UpstreamFailureError) as exc:
            self._fail(context, exc)
            Log.exception(f"Analysis of {url!r} failed in the browser or engine: {exc.message}")
            raise AnalysisFailedError(exc) from exc
        except AnalyzerError as exc:
            self._fail(context, exc)
            Log.warning(f"Analysis of {url!r} rejected: {exc.message}")
            raise
        except Exception as exc:
            self._fail(context, exc)
            Log.exception(f"Analysis of {url!r} failed unexpectedly: {exc}")
            raise InternalError(f"Unexpected analysis failure: {exc}") from exc

        if context.report is None:
            raise InternalError("Pipeline finished without a report")
        context.advance(AnalysisState.COMPLETED)
        return context.report

    @staticmethod
    def _fail(context: AnalysisContext, exc: Exception) -> None:
        context.failure = exc.kind if isinstance(exc, AnalyzerError) else "InternalError"
        Log.debug(f"Analysis failed in state {context.state.value}: {context.failure}")
        context.advance(AnalysisState.FAILED)


def build_auditor(settings: Settings) -> AxeAuditor:
    return AxeAuditor(
        script_path=Path(settings.axe_script_path).expanduser(),
        script_url=settings.axe_script_url,
        download_timeout_seconds=settings.axe_download_timeout_seconds,
        audit_timeout_ms=settings.audit_timeout_ms,
    )


def build_orchestrator(
    settings: Settings,
    page_driver: BasePageDriver | None = None,
    auditor: BaseAuditor | None = None,
) -> AnalysisOrchestrator:
    """Build an AnalysisOrchestrator with all required adapters."""
    return AnalysisOrchestrator(
        page_driver=page_driver or PageDriverFactory.create(settings),
        auditor=auditor or build_auditor(settings),
        builder=ReportBuilder(),
        reports=ReportRepository(),
    )
