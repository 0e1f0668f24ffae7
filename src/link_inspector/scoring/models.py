"""Analysis result structures."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from link_inspector.domain.url.models import UrlCandidate

FALLBACK_LABEL = "Unable to analyze"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def label(self) -> str:
        return f"{self.value.capitalize()} Risk"


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    risk_score: int = Field(ge=0, le=100)
    risk_level: RiskLevel
    reasons: tuple[str, ...] = ()
    is_https: bool = False
    domain: str = "unknown"
    scheme: str = "unknown"
    analyzable: bool = True

    @property
    def label(self) -> str:
        return self.risk_level.label if self.analyzable else FALLBACK_LABEL


class AnalyzedCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    candidate: UrlCandidate
    analysis: AnalysisResult


class Summary(BaseModel):
    total: int = 0
    low_risk: int = 0
    medium_risk: int = 0
    high_risk: int = 0
    https_count: int = 0
    http_count: int = 0


class DomainGroup(BaseModel):
    domain: str
    display_name: str
    members: list[AnalysisResult] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.members)
