# highlights/segments.py

from __future__ import annotations

from html import escape
from typing import Dict, Iterable, List, Optional

from .config import RenderConfig
from .models import Segment, Span, Tag


def build_segments(text: str, spans: Iterable[Span]) -> List[Segment]:
    """
    Split text into plain and highlighted segments.

    spans must be sorted by start. Where spans overlap, the earlier-starting
    span keeps the contested characters and a later span only contributes
    what lies past the cursor; a span entirely behind the cursor produces
    no segment at all.
    """
    segments: List[Segment] = []
    cursor = 0
    length = len(text)

    for span in spans:
        # spans left behind by a shorter text are clipped to its end
        span_start = min(span.start, length)
        span_end = min(span.end, length)
        if span_start >= span_end:
            continue

        if span_start > cursor:
            segments.append(Segment.plain(text[cursor:span_start]))

        if span_end > cursor:
            start = max(span_start, cursor)
            segments.append(
                Segment.highlighted(text[start:span_end], span.tag_id, span.id)
            )
            cursor = span_end

    if cursor < len(text):
        segments.append(Segment.plain(text[cursor:]))

    return segments


def render_html(
    segments: Iterable[Segment],
    tags: Dict[str, Tag],
    config: Optional[RenderConfig] = None,
) -> str:
    """Render segments as HTML, colouring highlights by their tag."""
    config = config or RenderConfig()
    parts = []
    for seg in segments:
        if not seg.is_highlighted:
            parts.append(escape(seg.text))
            continue

        tag = tags.get(seg.tag_id)
        color = tag.color if tag else config.default_color
        title = f" title='{escape(tag.label)}'" if tag else ""
        parts.append(
            f"<span class='{config.css_class}' style='background-color:{escape(color)};'"
            f"{title} data-span-id='{escape(seg.span_id)}'>{escape(seg.text)}</span>"
        )
    return "".join(parts)
