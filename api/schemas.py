# api/schemas.py

from typing import List, Optional
from pydantic import BaseModel, Field


class SpanSchema(BaseModel):
    id: str
    start: int
    end: int
    tag_id: str
    text: str = ""
    created_at: str = ""
    updated_at: str = ""
    deleted_at: Optional[str] = None


class TagSchema(BaseModel):
    id: str
    label: str
    color: str = "#ddd"
    order: int = 0


class SegmentSchema(BaseModel):
    text: str
    kind: str
    tag_id: Optional[str] = None
    span_id: Optional[str] = None


class PositionSchema(BaseModel):
    segment: int
    offset: int


class SegmentsRequest(BaseModel):
    text: str
    spans: List[SpanSchema] = []


class SegmentsResponse(BaseModel):
    segments: List[SegmentSchema]


class SelectionRequest(BaseModel):
    text: str
    spans: List[SpanSchema] = []
    start: PositionSchema
    end: PositionSchema


class SelectionSchema(BaseModel):
    start: int
    end: int
    text: str


class SelectionResponse(BaseModel):
    selection: Optional[SelectionSchema] = None


class GroupTagsRequest(BaseModel):
    tags: List[str]
    threshold: Optional[int] = Field(default=None, ge=0)


class GroupSchema(BaseModel):
    name: str
    tags: List[str]


class GroupTagsResponse(BaseModel):
    groups: List[GroupSchema]


class TagReportRequest(BaseModel):
    tags: List[TagSchema]
    spans: List[SpanSchema] = []
    threshold: Optional[int] = Field(default=None, ge=0)


class GroupCountSchema(BaseModel):
    name: str
    value: int
    tags: List[str]


class TagReportResponse(BaseModel):
    groups: List[GroupCountSchema]
