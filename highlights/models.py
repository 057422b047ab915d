# highlights/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass
class Span:
    id: str
    start: int
    end: int
    tag_id: str
    text: str
    created_at: str
    updated_at: str
    deleted_at: Optional[str] = None

    @property
    def is_live(self) -> bool:
        return self.deleted_at is None


@dataclass
class Tag:
    id: str
    label: str
    color: str
    order: int = 0


class SegmentKind(str, Enum):
    PLAIN = "plain"
    HIGHLIGHTED = "highlighted"


@dataclass(frozen=True)
class Segment:
    text: str
    kind: SegmentKind = SegmentKind.PLAIN
    tag_id: Optional[str] = None
    span_id: Optional[str] = None

    @classmethod
    def plain(cls, text: str) -> "Segment":
        return cls(text=text)

    @classmethod
    def highlighted(cls, text: str, tag_id: str, span_id: str) -> "Segment":
        return cls(
            text=text,
            kind=SegmentKind.HIGHLIGHTED,
            tag_id=tag_id,
            span_id=span_id,
        )

    @property
    def is_highlighted(self) -> bool:
        return self.kind is SegmentKind.HIGHLIGHTED


@dataclass(frozen=True)
class RenderedPosition:
    """A caret position inside the rendered view: segment index + char offset."""

    segment: int
    offset: int


@dataclass
class TagGroup:
    name: str
    members: List[str] = field(default_factory=list)
