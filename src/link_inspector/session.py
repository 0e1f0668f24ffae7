"""Caller-owned scan state: last collection cache and debounced re-collection."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
import logging
import threading
import time
from typing import Any

from link_inspector.domain.url.extract import collect
from link_inspector.domain.url.models import Origin, PageMetadata, ScanSnapshot, UrlCandidate
from link_inspector.domain.url.sources import CandidateSource
from link_inspector.orchestrator.contracts import AnalyzeRequest, AnalyzeResponse
from link_inspector.orchestrator.dispatch import run_analyze
from link_inspector.scoring.rules import RuleSet

logger = logging.getLogger(__name__)

DEFAULT_QUIESCENCE_S = 0.5
HISTORY_LIMIT = 20


class CoalescingTimer:
    """Single pending timer; every ``notify`` restarts the quiescence window.

    The callback fires once, only after ``delay_s`` passes with no further
    notifications.
    """

    def __init__(
        self,
        delay_s: float,
        callback: Callable[[], Any],
        *,
        timer_factory: Callable[[float, Callable[[], Any]], Any] = threading.Timer,
    ) -> None:
        if delay_s <= 0:
            raise ValueError("delay_s must be positive")
        self.delay_s = delay_s
        self._callback = callback
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._pending: Any | None = None
        self._token: object | None = None
        self.fired = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def notify(self) -> None:
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
            token = object()
            timer = self._timer_factory(self.delay_s, lambda: self._fire(token))
            if hasattr(timer, "daemon"):
                timer.daemon = True
            self._pending = timer
            self._token = token
        timer.start()

    def _fire(self, token: object) -> None:
        with self._lock:
            # A superseded timer may still run after cancel().
            if token is not self._token:
                return
            self._pending = None
            self._token = None
            self.fired += 1
        self._callback()

    def cancel(self) -> None:
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
            self._pending = None
            self._token = None


@dataclass
class ScanSession:
    """Holds the last scan for one page; passed explicitly into each collection cycle."""

    rules: RuleSet | None = None
    external_only: bool = False
    last_scan: ScanSnapshot | None = None
    history: deque[AnalyzeResponse] = field(default_factory=lambda: deque(maxlen=HISTORY_LIMIT))

    def collect(
        self,
        sources: Sequence[CandidateSource],
        metadata: PageMetadata | None = None,
    ) -> list[UrlCandidate]:
        meta = metadata or PageMetadata()
        links: list[UrlCandidate] = []
        texts: list[UrlCandidate] = []
        for source in sources:
            found = source.candidates()
            (links if source.origin is Origin.HYPERLINK else texts).extend(found)
        candidates = collect(
            links,
            texts,
            reference_url=meta.page_url or None,
            external_only=self.external_only,
        )
        if meta.timestamp is None:
            meta = meta.model_copy(update={"timestamp": time.time()})
        self.last_scan = ScanSnapshot(candidates=candidates, metadata=meta)
        return candidates

    def cached_candidates(self) -> list[UrlCandidate]:
        return list(self.last_scan.candidates) if self.last_scan else []

    def analyze(self) -> AnalyzeResponse:
        response = run_analyze(AnalyzeRequest(candidates=self.cached_candidates()), self.rules)
        self.history.append(response)
        return response

    def watch(
        self,
        rescan: Callable[[], Sequence[CandidateSource]],
        on_update: Callable[[list[UrlCandidate]], Any],
        *,
        delay_s: float = DEFAULT_QUIESCENCE_S,
        metadata: PageMetadata | None = None,
        timer_factory: Callable[[float, Callable[[], Any]], Any] = threading.Timer,
    ) -> CoalescingTimer:
        """Return a timer whose ``notify`` debounces page-change notifications into one re-collection."""

        def _recollect() -> None:
            candidates = self.collect(rescan(), metadata)
            logger.debug("live update collected %d candidates", len(candidates))
            on_update(candidates)

        return CoalescingTimer(delay_s, _recollect, timer_factory=timer_factory)
