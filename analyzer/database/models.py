from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class UserRecord:
    """Represents a row from the users table."""

    id: int
    username: str
    password_hash: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class ReportRecord:
    """Represents a row from the analysis_reports table."""

    id: int
    user_id: int
    url: str
    score: int
    summary: dict[str, Any]
    categories: dict[str, Any]
    page_info: dict[str, Any]
    violations: list[dict[str, Any]]
    passes: list[dict[str, Any]]
    incomplete: list[dict[str, Any]]
    inapplicable: list[dict[str, Any]]
    metadata: dict[str, Any]
    created_at: datetime | None = None
