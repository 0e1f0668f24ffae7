"""Typed request/response contracts exposed to collaborators."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from link_inspector.core.errors import ContractError
from link_inspector.domain.url.models import PageMetadata, UrlCandidate
from link_inspector.scoring.models import AnalysisResult, AnalyzedCandidate, DomainGroup, Summary


class AnalyzeRequest(BaseModel):
    type: Literal["analyze"] = "analyze"
    candidates: list[UrlCandidate] = Field(default_factory=list)


class GroupRequest(BaseModel):
    type: Literal["group"] = "group"
    results: list[AnalysisResult] = Field(default_factory=list)


class ExportRequest(BaseModel):
    type: Literal["export"] = "export"
    format: Literal["csv", "json"]
    results: list[AnalyzedCandidate] = Field(default_factory=list)
    metadata: PageMetadata = Field(default_factory=PageMetadata)


Request = Annotated[Union[AnalyzeRequest, GroupRequest, ExportRequest], Field(discriminator="type")]


class AnalyzeResponse(BaseModel):
    type: Literal["analyze"] = "analyze"
    results: list[AnalyzedCandidate] = Field(default_factory=list)
    summary: Summary = Field(default_factory=Summary)
    trace: list[dict[str, Any]] = Field(default_factory=list)


class GroupResponse(BaseModel):
    type: Literal["group"] = "group"
    groups: list[DomainGroup] = Field(default_factory=list)
    trace: list[dict[str, Any]] = Field(default_factory=list)


class ExportResponse(BaseModel):
    type: Literal["export"] = "export"
    filename: str
    mime_type: str
    content: str
    trace: list[dict[str, Any]] = Field(default_factory=list)


Response = Union[AnalyzeResponse, GroupResponse, ExportResponse]

_REQUEST_ADAPTER = TypeAdapter(Request)


def parse_request(payload: Any) -> Request:
    """Validate a raw payload into one of the request variants."""

    if isinstance(payload, (AnalyzeRequest, GroupRequest, ExportRequest)):
        return payload
    try:
        return _REQUEST_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(item) for item in first.get("loc", ()))
        raise ContractError(f"invalid request at {location or 'payload'}: {first.get('msg', 'invalid')}") from exc
