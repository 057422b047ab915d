# highlights/pipeline.py

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .config import HighlightConfig
from .models import RenderedPosition, Segment, Span, Tag
from .offsets import resolve_selection
from .segments import build_segments, render_html
from .store import Clock, SpanStore, make_span, stale_spans, utc_now

logger = logging.getLogger(__name__)


class HighlightDocument:
    """
    One document's canonical text and its highlights.

    Segments are recomputed on demand from the live spans; the host decides
    when to refresh.
    """

    def __init__(
        self,
        text: str,
        spans: Optional[Iterable[Span]] = None,
        config: Optional[HighlightConfig] = None,
        clock: Clock = utc_now,
    ):
        self.config = config or HighlightConfig()
        self._clock = clock
        self.store = SpanStore(text, clock=clock)
        if spans:
            self.store.load(spans)

    @property
    def text(self) -> str:
        return self.store.text

    def segments(self) -> List[Segment]:
        return build_segments(self.text, self.store.live_spans())

    def annotate(
        self,
        start: RenderedPosition,
        end: RenderedPosition,
        tag_id: str,
        span_id: Optional[str] = None,
    ) -> Optional[Span]:
        """
        Highlight the text between two rendered positions.

        Returns the new span, or None if the selection is collapsed.
        """
        selection = resolve_selection(self.segments(), start, end)
        if selection is None:
            logger.debug("Ignoring collapsed selection %s..%s", start, end)
            return None

        span = make_span(
            self.text, selection[0], selection[1], tag_id,
            span_id=span_id, now=self._clock(),
        )
        self.store.insert(span)
        return span

    def remove(self, span_id: str) -> None:
        self.store.soft_delete(span_id)

    def change_tag(self, span_id: str, tag_id: str) -> None:
        self.store.retag(span_id, tag_id)

    def replace_text(self, text: str) -> List[Span]:
        """
        Swap the canonical text. Existing spans keep their offsets; the
        live spans that no longer match are returned.
        """
        self.store.set_text(text)
        stale = stale_spans(text, self.store.live_spans())
        if stale:
            logger.warning("%d highlight(s) no longer match the edited text", len(stale))
        return stale

    def render(self, tags: Dict[str, Tag]) -> str:
        return render_html(self.segments(), tags, self.config.render)
