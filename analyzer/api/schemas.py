from pydantic import BaseModel, ConfigDict, Field

from analyzer.analysis.models import AnalysisOptions


class CredentialsBody(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    token: str


class AnalyzeOptionsBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rules: list[str] | None = None
    tags: list[str] | None = None
    wait_time: int | None = Field(default=None, alias="waitTime", gt=0, le=120_000)


class AnalyzeBody(BaseModel):
    url: str | None = None
    options: AnalyzeOptionsBody = Field(default_factory=AnalyzeOptionsBody)

    def to_options(self) -> AnalysisOptions:
        return AnalysisOptions(
            rules=self.options.rules,
            tags=self.options.tags,
            wait_time_ms=self.options.wait_time,
        )
