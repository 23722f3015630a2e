from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from analyzer.analysis.models import (
    AnalysisOptions,
    AnalysisReport,
    AnalysisRequest,
    PageInfo,
    RawAuditResult,
    Subject,
)
from analyzer.logging.logger import Log


class AnalysisState(str, Enum):
    RECEIVED = "received"
    AUTHENTICATED = "authenticated"
    VALIDATED = "validated"
    NAVIGATING = "navigating"
    AUDITING = "auditing"
    BUILT = "built"
    PERSISTED = "persisted"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True)
class AnalysisContext:
    raw_url: str | None
    options: AnalysisOptions
    subject: Subject | None
    state: AnalysisState = AnalysisState.RECEIVED
    request: AnalysisRequest | None = None
    page_info: PageInfo | None = None
    raw_result: RawAuditResult | None = None
    report: AnalysisReport | None = None
    failure: str = ""

    def advance(self, state: AnalysisState) -> None:
        Log.debug(f"Analysis of {self.raw_url!r}: {self.state.value} -> {state.value}")
        self.state = state


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: AnalysisContext) -> AnalysisContext:
        raise NotImplementedError
