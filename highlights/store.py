# highlights/store.py

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from .errors import DuplicateSpan, InvalidRange, NotFound
from .models import Span

logger = logging.getLogger(__name__)

Clock = Callable[[], str]


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def check_range(text: str, start: int, end: int) -> None:
    if not (0 <= start < end <= len(text)):
        raise InvalidRange(start, end, len(text))


def make_span(
    text: str,
    start: int,
    end: int,
    tag_id: str,
    span_id: Optional[str] = None,
    now: Optional[str] = None,
) -> Span:
    """
    Build a span over text[start:end], caching the covered text.
    """
    check_range(text, start, end)
    stamp = now or utc_now()
    return Span(
        id=span_id or uuid.uuid4().hex,
        start=start,
        end=end,
        tag_id=tag_id,
        text=text[start:end],
        created_at=stamp,
        updated_at=stamp,
    )


def stale_spans(text: str, spans: Iterable[Span]) -> List[Span]:
    """
    Spans whose range no longer fits text or whose cached text differs
    from text[start:end]. Nothing is repaired.
    """
    stale: List[Span] = []
    for span in spans:
        if span.end > len(text) or text[span.start:span.end] != span.text:
            stale.append(span)
    return stale


class SpanStore:
    """
    Annotation spans of one document, kept in insertion order.

    Mutations are serialized by a per-store lock. A failed mutation leaves
    the store untouched. Spans are copied in and out, so offsets cannot be
    changed behind the store.
    """

    def __init__(self, text: str, clock: Clock = utc_now):
        self.text = text
        self._clock = clock
        self._spans: List[Span] = []
        self._by_id: Dict[str, Span] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._spans)

    def insert(self, span: Span) -> None:
        with self._lock:
            check_range(self.text, span.start, span.end)
            if span.id in self._by_id:
                raise DuplicateSpan(span.id)
            stored = replace(span)
            self._spans.append(stored)
            self._by_id[span.id] = stored
        logger.debug("Inserted span %s [%d, %d)", span.id, span.start, span.end)

    def load(self, spans: Iterable[Span]) -> None:
        """
        Add externally stored spans, all or nothing. Tombstones are kept
        without range checks.
        """
        incoming = list(spans)
        with self._lock:
            seen = set(self._by_id)
            for span in incoming:
                if span.is_live:
                    check_range(self.text, span.start, span.end)
                if span.id in seen:
                    raise DuplicateSpan(span.id)
                seen.add(span.id)
            for span in incoming:
                stored = replace(span)
                self._spans.append(stored)
                self._by_id[span.id] = stored
        logger.debug("Loaded %d span(s)", len(incoming))

    def set_text(self, text: str) -> None:
        """Swap the canonical text. Span offsets are left as they are."""
        with self._lock:
            self.text = text

    def get(self, span_id: str) -> Optional[Span]:
        with self._lock:
            span = self._by_id.get(span_id)
            return replace(span) if span is not None else None

    def _live(self, span_id: str) -> Span:
        span = self._by_id.get(span_id)
        if span is None or not span.is_live:
            raise NotFound(span_id)
        return span

    def soft_delete(self, span_id: str) -> None:
        with self._lock:
            span = self._live(span_id)
            span.deleted_at = self._clock()
        logger.debug("Soft-deleted span %s", span_id)

    def retag(self, span_id: str, tag_id: str) -> None:
        with self._lock:
            span = self._live(span_id)
            span.tag_id = tag_id
            span.updated_at = self._clock()
        logger.debug("Retagged span %s -> %s", span_id, tag_id)

    def live_spans(self) -> List[Span]:
        """Live spans by start offset; equal starts keep insertion order."""
        with self._lock:
            live = [replace(s) for s in self._spans if s.is_live]
        return sorted(live, key=lambda s: s.start)

    def deleted_spans(self) -> List[Span]:
        with self._lock:
            return [replace(s) for s in self._spans if not s.is_live]
