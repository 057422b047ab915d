# highlights/offsets.py

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .errors import OutOfBounds, UnknownSegment
from .models import RenderedPosition, Segment


def segment_starts(segments: Sequence[Segment]) -> List[int]:
    """Absolute start offset of every segment in the canonical text."""
    starts = []
    total = 0
    for seg in segments:
        starts.append(total)
        total += len(seg.text)
    return starts


def resolve(segments: Sequence[Segment], position: RenderedPosition) -> int:
    """
    Map a rendered position back to an offset in the canonical text.

    Offsets may equal the segment length (caret after its last character).
    """
    if not 0 <= position.segment < len(segments):
        raise UnknownSegment(position.segment, len(segments))

    seg = segments[position.segment]
    if not 0 <= position.offset <= len(seg.text):
        raise OutOfBounds(position.segment, position.offset, len(seg.text))

    return segment_starts(segments)[position.segment] + position.offset


def resolve_selection(
    segments: Sequence[Segment],
    start: RenderedPosition,
    end: RenderedPosition,
) -> Optional[Tuple[int, int]]:
    """
    Resolve both ends of a selection. Returns None when the selection is
    collapsed or reversed, in which case no span should be created.
    """
    first = resolve(segments, start)
    last = resolve(segments, end)
    if first >= last:
        return None
    return first, last
