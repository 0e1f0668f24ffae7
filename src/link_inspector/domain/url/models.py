"""URL domain-level models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Origin(str, Enum):
    HYPERLINK = "hyperlink"
    PLAIN_TEXT = "plain_text"


class UrlCandidate(BaseModel):
    """A raw URL-like string observed on a page, tagged with where it came from."""

    model_config = ConfigDict(frozen=True)

    raw_text: str
    origin: Origin
    text: str = ""


class NormalizedUrl(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw: str
    scheme: str
    host: str
    path: str = ""
    query: str = ""
    fragment: str = ""

    @property
    def is_http(self) -> bool:
        return self.scheme in {"http", "https"}


class PageMetadata(BaseModel):
    page_title: str = ""
    page_url: str = ""
    timestamp: float | None = None


class ScanSnapshot(BaseModel):
    """Candidates from one collection cycle plus the page they came from."""

    candidates: list[UrlCandidate] = Field(default_factory=list)
    metadata: PageMetadata = Field(default_factory=PageMetadata)
