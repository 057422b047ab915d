# tests/test_offsets.py

import pytest

from highlights.errors import OutOfBounds, UnknownSegment
from highlights.models import RenderedPosition, Segment
from highlights.offsets import resolve, resolve_selection, segment_starts

# "The results were significant." with "results" highlighted
SEGMENTS = [
    Segment.plain("The "),
    Segment.highlighted("results", "res", "a"),
    Segment.plain(" were significant."),
]


def test_segment_starts():
    assert segment_starts(SEGMENTS) == [0, 4, 11]
    assert segment_starts([]) == []


@pytest.mark.parametrize(
    "segment,offset,expected",
    [(0, 0, 0), (0, 4, 4), (1, 0, 4), (1, 3, 7), (1, 7, 11), (2, 6, 17), (2, 18, 29)],
)
def test_resolve(segment, offset, expected):
    assert resolve(SEGMENTS, RenderedPosition(segment, offset)) == expected


def test_resolve_unknown_segment():
    with pytest.raises(UnknownSegment):
        resolve(SEGMENTS, RenderedPosition(3, 0))
    with pytest.raises(UnknownSegment):
        resolve(SEGMENTS, RenderedPosition(-1, 0))
    with pytest.raises(UnknownSegment):
        resolve([], RenderedPosition(0, 0))


def test_resolve_offset_out_of_bounds():
    with pytest.raises(OutOfBounds):
        resolve(SEGMENTS, RenderedPosition(1, 8))
    with pytest.raises(OutOfBounds):
        resolve(SEGMENTS, RenderedPosition(0, -1))


def test_selection_across_highlight():
    assert resolve_selection(
        SEGMENTS, RenderedPosition(0, 1), RenderedPosition(2, 5)
    ) == (1, 16)


def test_collapsed_or_reversed_selection_is_none():
    # end of segment 0 and start of segment 1 are the same character boundary
    assert resolve_selection(SEGMENTS, RenderedPosition(0, 4), RenderedPosition(1, 0)) is None
    assert resolve_selection(SEGMENTS, RenderedPosition(2, 3), RenderedPosition(1, 2)) is None
