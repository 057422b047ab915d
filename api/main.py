import os
import logging
import logging.config
from typing import List

import yaml
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import (
    GroupCountSchema,
    GroupSchema,
    GroupTagsRequest,
    GroupTagsResponse,
    SegmentSchema,
    SegmentsRequest,
    SegmentsResponse,
    SelectionRequest,
    SelectionResponse,
    SelectionSchema,
    SpanSchema,
    TagReportRequest,
    TagReportResponse,
)
from highlights.config import load_config_or_default
from highlights.errors import OffsetError, SpanError
from highlights.grouping import cluster_tags, group_counts
from highlights.models import RenderedPosition, Span, Tag
from highlights.offsets import resolve_selection
from highlights.pipeline import HighlightDocument


def setup_logging():
    cfg_path = os.path.join("configs", "logging.yaml")
    if os.path.exists(cfg_path):
        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
            os.makedirs("logs", exist_ok=True)
            logging.config.dictConfig(config)
        except Exception as e:
            print(f"[logging] Failed to load logging.yaml: {e}")
            logging.basicConfig(level=logging.INFO)
    else:
        logging.basicConfig(level=logging.INFO)


setup_logging()
logger = logging.getLogger("api")
config = load_config_or_default(os.environ.get("HIGHLIGHTS_CONFIG", "configs/highlights.yaml"))

app = FastAPI(
    title="Highlights",
    version="0.1.0",
    description="Text highlight segmentation and tag grouping.",
)

origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SpanError)
@app.exception_handler(OffsetError)
async def core_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.info("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "kind": type(exc).__name__},
    )


def _to_span(s: SpanSchema) -> Span:
    return Span(
        id=s.id,
        start=s.start,
        end=s.end,
        tag_id=s.tag_id,
        text=s.text,
        created_at=s.created_at,
        updated_at=s.updated_at,
        deleted_at=s.deleted_at,
    )


def _document(text: str, spans: List[SpanSchema]) -> HighlightDocument:
    return HighlightDocument(text, [_to_span(s) for s in spans], config=config)


def _threshold(requested):
    return config.grouping.threshold if requested is None else requested


@app.post("/segments", response_model=SegmentsResponse)
def segments(req: SegmentsRequest) -> SegmentsResponse:
    logger.info("Received /segments request (%d spans)", len(req.spans))
    doc = _document(req.text, req.spans)
    return SegmentsResponse(
        segments=[
            SegmentSchema(
                text=seg.text,
                kind=seg.kind.value,
                tag_id=seg.tag_id,
                span_id=seg.span_id,
            )
            for seg in doc.segments()
        ]
    )


@app.post("/selection", response_model=SelectionResponse)
def selection(req: SelectionRequest) -> SelectionResponse:
    logger.info("Received /selection request")
    doc = _document(req.text, req.spans)
    resolved = resolve_selection(
        doc.segments(),
        RenderedPosition(req.start.segment, req.start.offset),
        RenderedPosition(req.end.segment, req.end.offset),
    )
    if resolved is None:
        return SelectionResponse(selection=None)
    start, end = resolved
    return SelectionResponse(
        selection=SelectionSchema(start=start, end=end, text=req.text[start:end])
    )


@app.post("/group-tags", response_model=GroupTagsResponse)
def group_tags(req: GroupTagsRequest) -> GroupTagsResponse:
    logger.info("Received /group-tags request (%d tags)", len(req.tags))
    groups = cluster_tags(
        req.tags,
        threshold=_threshold(req.threshold),
        skip_empty=config.grouping.skip_empty_labels,
    )
    return GroupTagsResponse(
        groups=[GroupSchema(name=g.name, tags=g.members) for g in groups]
    )


@app.post("/tag-report", response_model=TagReportResponse)
def tag_report(req: TagReportRequest) -> TagReportResponse:
    logger.info("Received /tag-report request")
    tags = [Tag(id=t.id, label=t.label, color=t.color, order=t.order) for t in req.tags]
    groups = cluster_tags(
        [t.label for t in tags],
        threshold=_threshold(req.threshold),
        skip_empty=config.grouping.skip_empty_labels,
    )
    counts = group_counts(groups, tags, [_to_span(s) for s in req.spans])
    return TagReportResponse(
        groups=[GroupCountSchema(name=c.name, value=c.value, tags=c.members) for c in counts]
    )
