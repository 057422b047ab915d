# tests/test_api.py

from fastapi.testclient import TestClient

from api.main import app

client = TestClient(app)

TEXT = "0123456789"


def _span(span_id, start, end, tag_id, **extra):
    return {"id": span_id, "start": start, "end": end, "tag_id": tag_id, **extra}


def test_segments_endpoint():
    resp = client.post("/segments", json={
        "text": TEXT,
        "spans": [
            _span("a", 0, 10, "tagA"),
            _span("b", 5, 8, "tagB"),
            _span("c", 2, 3, "tagC", deleted_at="2024-01-01"),
        ],
    })
    assert resp.status_code == 200
    assert resp.json()["segments"] == [
        {"text": TEXT, "kind": "highlighted", "tag_id": "tagA", "span_id": "a"},
    ]


def test_segments_invalid_span_is_422():
    resp = client.post("/segments", json={"text": TEXT, "spans": [_span("a", 4, 4, "t")]})
    assert resp.status_code == 422
    assert resp.json()["kind"] == "InvalidRange"


def test_selection_endpoint():
    resp = client.post("/selection", json={
        "text": TEXT,
        "spans": [_span("a", 2, 4, "t")],
        "start": {"segment": 1, "offset": 1},
        "end": {"segment": 2, "offset": 3},
    })
    assert resp.status_code == 200
    assert resp.json()["selection"] == {"start": 3, "end": 7, "text": "3456"}


def test_selection_collapsed_is_null():
    resp = client.post("/selection", json={
        "text": TEXT,
        "start": {"segment": 0, "offset": 2},
        "end": {"segment": 0, "offset": 2},
    })
    assert resp.status_code == 200
    assert resp.json()["selection"] is None


def test_selection_unknown_segment_is_422():
    resp = client.post("/selection", json={
        "text": TEXT,
        "start": {"segment": 0, "offset": 0},
        "end": {"segment": 5, "offset": 0},
    })
    assert resp.status_code == 422
    assert resp.json()["kind"] == "UnknownSegment"


def test_group_tags_endpoint():
    resp = client.post("/group-tags", json={"tags": ["Result", "Methods", "Method"]})
    assert resp.status_code == 200
    assert resp.json()["groups"] == [
        {"name": "Method", "tags": ["Method", "Methods"]},
        {"name": "Result", "tags": ["Result"]},
    ]


def test_group_tags_custom_threshold():
    resp = client.post("/group-tags", json={"tags": ["Method", "Result"], "threshold": 5})
    assert resp.json()["groups"] == [{"name": "Method", "tags": ["Method", "Result"]}]


def test_tag_report_endpoint():
    resp = client.post("/tag-report", json={
        "tags": [
            {"id": "t1", "label": "Result"},
            {"id": "t2", "label": "Method"},
            {"id": "t3", "label": "methods"},
        ],
        "spans": [
            _span("a", 0, 1, "t1"),
            _span("b", 1, 2, "t2"),
            _span("c", 2, 3, "t3"),
            _span("d", 3, 4, "t3", deleted_at="2024-01-01"),
        ],
    })
    assert resp.status_code == 200
    assert resp.json()["groups"] == [
        {"name": "Method", "value": 2, "tags": ["Method", "methods"]},
        {"name": "Result", "value": 1, "tags": ["Result"]},
    ]
