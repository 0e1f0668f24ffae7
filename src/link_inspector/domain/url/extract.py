"""Candidate collection: validation, merge, deduplication and external filtering."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from pydantic import ValidationError

from link_inspector.core.errors import CandidateError
from link_inspector.domain.url.models import Origin, UrlCandidate
from link_inspector.domain.url.normalize import is_valid_url, normalize, same_domain

logger = logging.getLogger(__name__)


def validate_candidates(items: Iterable[object], *, expected_origin: Origin | None = None) -> list[UrlCandidate]:
    """Reject collaborator data that is not a well-typed candidate list."""

    if isinstance(items, (str, bytes)):
        raise CandidateError("candidates must be a sequence of UrlCandidate, not a string")
    validated: list[UrlCandidate] = []
    for index, item in enumerate(items):
        if isinstance(item, dict):
            try:
                item = UrlCandidate.model_validate(item)
            except ValidationError as exc:
                raise CandidateError(f"candidate #{index} is malformed: {exc.errors()[0]['msg']}") from exc
        if not isinstance(item, UrlCandidate):
            raise CandidateError(f"candidate #{index} is {type(item).__name__}, expected UrlCandidate")
        if not isinstance(item.raw_text, str):
            raise CandidateError(f"candidate #{index} has non-string raw_text")
        if expected_origin is not None and item.origin is not expected_origin:
            raise CandidateError(
                f"candidate #{index} has origin {item.origin.value}, expected {expected_origin.value}"
            )
        validated.append(item)
    return validated


def dedupe(candidates: Iterable[UrlCandidate]) -> list[UrlCandidate]:
    """Drop repeated raw strings; the first occurrence and its origin win."""

    seen: set[str] = set()
    unique: list[UrlCandidate] = []
    for item in candidates:
        if item.raw_text in seen:
            continue
        seen.add(item.raw_text)
        unique.append(item)
    return unique


def is_same_page_anchor(raw: str, reference_url: str) -> bool:
    target = normalize(raw)
    page = normalize(reference_url)
    if target is None or page is None:
        return False
    return (
        target.host == page.host
        and target.path == page.path
        and target.query == page.query
        and target.fragment != ""
    )


def is_external(raw: str, reference_url: str) -> bool:
    target = normalize(raw)
    page = normalize(reference_url)
    if target is None or page is None:
        return False
    return not same_domain(target.host, page.host)


def filter_external(candidates: Iterable[UrlCandidate], reference_url: str) -> list[UrlCandidate]:
    """Keep candidates pointing away from ``reference_url``'s host."""

    page = normalize(reference_url)
    if page is None or not page.host:
        logger.debug("reference url %r has no usable host, external set is empty", reference_url)
        return []
    return [
        item
        for item in candidates
        if not is_same_page_anchor(item.raw_text, reference_url) and is_external(item.raw_text, reference_url)
    ]


def collect(
    hyperlink_candidates: Sequence[UrlCandidate],
    plain_text_candidates: Sequence[UrlCandidate],
    *,
    reference_url: str | None = None,
    external_only: bool = False,
) -> list[UrlCandidate]:
    """Merge both origins into one ordered, duplicate-free candidate list.

    Hyperlink candidates come first, then plain-text ones, each keeping its
    own order. Strings that are not http(s) URLs are dropped before
    deduplication. With ``external_only`` the result is further restricted to
    hosts other than ``reference_url``'s.
    """

    links = validate_candidates(hyperlink_candidates, expected_origin=Origin.HYPERLINK)
    texts = validate_candidates(plain_text_candidates, expected_origin=Origin.PLAIN_TEXT)
    if external_only and not reference_url:
        raise CandidateError("external-only collection requires a reference page url")

    combined = [item for item in [*links, *texts] if is_valid_url(item.raw_text)]
    unique = dedupe(combined)
    if external_only:
        unique = filter_external(unique, str(reference_url))
    logger.debug(
        "collected %d candidates (%d links, %d text, external_only=%s)",
        len(unique),
        len(links),
        len(texts),
        external_only,
    )
    return unique
