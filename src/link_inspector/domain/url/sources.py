"""Candidate sources: hyperlink and free-text walkers over a static page."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from html.parser import HTMLParser
import re
from urllib.parse import urljoin

from link_inspector.domain.url.models import Origin, UrlCandidate
from link_inspector.domain.url.normalize import is_valid_url

URL_TEXT_PATTERN = re.compile(
    r"https?://(?:www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b(?:[-a-zA-Z0-9()@:%_+.~#?&/=]*)",
    re.IGNORECASE,
)
_SKIP_TEXT_TAGS = {"script", "style"}


class CandidateSource(ABC):
    name: str
    origin: Origin

    @abstractmethod
    def candidates(self) -> list[UrlCandidate]:
        """Return candidates in document order."""


class TextCandidateSource(CandidateSource):
    name = "text"
    origin = Origin.PLAIN_TEXT

    def __init__(self, fragments: str | Iterable[str]) -> None:
        self._fragments = [fragments] if isinstance(fragments, str) else list(fragments)

    def candidates(self) -> list[UrlCandidate]:
        found: list[UrlCandidate] = []
        for fragment in self._fragments:
            for match in URL_TEXT_PATTERN.finditer(fragment or ""):
                url = match.group(0)
                if is_valid_url(url):
                    found.append(UrlCandidate(raw_text=url, origin=self.origin, text=url))
        return found


class LinkCandidateSource(CandidateSource):
    name = "links"
    origin = Origin.HYPERLINK

    def __init__(self, links: Iterable[tuple[str, str]], *, base_url: str | None = None) -> None:
        self._links = list(links)
        self._base_url = base_url

    def _resolve(self, href: str) -> str:
        if self._base_url:
            return urljoin(self._base_url, href)
        return href

    def candidates(self) -> list[UrlCandidate]:
        found: list[UrlCandidate] = []
        for href, text in self._links:
            url = self._resolve((href or "").strip())
            if not is_valid_url(url):
                continue
            label = " ".join((text or "").split()) or url
            found.append(UrlCandidate(raw_text=url, origin=self.origin, text=label))
        return found


class _PageScanner(HTMLParser):
    def __init__(self) -> None:
        super().__init__()
        self._skip_text_depth = 0
        self._in_title = False
        self._open_anchor: dict[str, object] | None = None
        self.title = ""
        self.links: list[tuple[str, str]] = []
        self.text_fragments: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        lower = tag.lower()
        attr_map = {k.lower(): (v or "") for k, v in attrs}
        if lower == "title":
            self._in_title = True
        elif lower in _SKIP_TEXT_TAGS:
            self._skip_text_depth += 1
        elif lower == "a" and "href" in attr_map:
            self._close_anchor()
            self._open_anchor = {"href": attr_map["href"], "text": []}

    def handle_endtag(self, tag: str) -> None:
        lower = tag.lower()
        if lower == "title":
            self._in_title = False
        elif lower in _SKIP_TEXT_TAGS and self._skip_text_depth > 0:
            self._skip_text_depth -= 1
        elif lower == "a":
            self._close_anchor()

    def handle_data(self, data: str) -> None:
        if self._in_title:
            if not self.title:
                self.title = " ".join(data.split())
            return
        if self._skip_text_depth > 0:
            return
        if self._open_anchor is not None:
            self._open_anchor["text"].append(data)  # type: ignore[union-attr]
        if data.strip():
            self.text_fragments.append(data)

    def _close_anchor(self) -> None:
        if self._open_anchor is None:
            return
        text = "".join(self._open_anchor["text"])  # type: ignore[arg-type]
        self.links.append((str(self._open_anchor["href"]), text.strip()))
        self._open_anchor = None

    def close(self) -> None:
        super().close()
        self._close_anchor()


@dataclass
class PageScan:
    title: str
    base_url: str | None
    links: LinkCandidateSource
    text: TextCandidateSource
    sources: list[CandidateSource] = field(default_factory=list)


def scan_html(html: str, *, base_url: str | None = None) -> PageScan:
    """Walk a static HTML document the way the page scanner walks a live one."""

    scanner = _PageScanner()
    scanner.feed(html or "")
    scanner.close()
    links = LinkCandidateSource(scanner.links, base_url=base_url)
    text = TextCandidateSource(scanner.text_fragments)
    return PageScan(title=scanner.title, base_url=base_url, links=links, text=text, sources=[links, text])
