# highlights/errors.py


class SpanError(ValueError):
    """Base class for span store failures."""


class InvalidRange(SpanError):
    def __init__(self, start: int, end: int, text_length: int):
        self.start = start
        self.end = end
        self.text_length = text_length
        super().__init__(
            f"Invalid span [{start}, {end}) for text of length {text_length}"
        )


class NotFound(SpanError):
    def __init__(self, span_id: str):
        self.span_id = span_id
        super().__init__(f"No live span with id {span_id!r}")


class OffsetError(ValueError):
    """Base class for rendered-position resolution failures."""


class UnknownSegment(OffsetError):
    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        super().__init__(f"Segment {index} does not exist ({count} segments)")


class OutOfBounds(OffsetError):
    def __init__(self, index: int, offset: int, length: int):
        self.index = index
        self.offset = offset
        self.length = length
        super().__init__(
            f"Offset {offset} outside segment {index} of length {length}"
        )


class DuplicateSpan(SpanError):
    def __init__(self, span_id: str):
        self.span_id = span_id
        super().__init__(f"Span id {span_id!r} already exists")
