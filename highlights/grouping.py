# highlights/grouping.py

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

import regex as re

from .models import Span, Tag, TagGroup
from .similarity import tags_similar

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 3

FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)

# An external classifier takes distinct labels and returns groups.
Classifier = Callable[[List[str]], List[TagGroup]]


@dataclass
class GroupCount:
    name: str
    value: int
    members: List[str]


def cluster_tags(
    labels: Iterable[str],
    threshold: int = DEFAULT_THRESHOLD,
    skip_empty: bool = False,
) -> List[TagGroup]:
    """
    Greedy single-pass clustering of tag labels.

    Labels are deduplicated and sorted so the output is reproducible. Each
    unvisited label opens a group named after itself and pulls in every
    later unvisited label that is case-insensitively equal, a substring
    match, or within `threshold` edits of it.
    """
    distinct = set(labels)
    if skip_empty:
        distinct = {label for label in distinct if label.strip()}
    ordered = sorted(distinct)

    groups: List[TagGroup] = []
    visited = set()

    for label in ordered:
        if label in visited:
            continue
        visited.add(label)
        group = TagGroup(name=label, members=[label])

        for other in ordered:
            if other in visited:
                continue
            if tags_similar(label, other, threshold):
                group.members.append(other)
                visited.add(other)

        groups.append(group)

    return groups


def parse_classifier_groups(reply: str) -> List[TagGroup]:
    """
    Parse a classifier reply of the form {"groups": [{"name", "tags"}]}.

    Markdown code fences around the JSON are tolerated.
    """
    cleaned = FENCE_RE.sub("", reply).strip()
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Classifier reply is not JSON: {exc}") from exc

    if not isinstance(payload, dict) or not isinstance(payload.get("groups"), list):
        raise ValueError("Classifier reply has no 'groups' list")

    groups: List[TagGroup] = []
    for raw in payload["groups"]:
        if not isinstance(raw, dict) or "name" not in raw:
            raise ValueError(f"Malformed group entry: {raw!r}")
        members = raw.get("tags") or []
        groups.append(TagGroup(name=str(raw["name"]), members=[str(m) for m in members]))
    return groups


def group_tags(
    labels: Iterable[str],
    classifier: Optional[Classifier] = None,
    threshold: int = DEFAULT_THRESHOLD,
    skip_empty: bool = False,
) -> List[TagGroup]:
    """
    Group labels with the external classifier when one is given, otherwise
    (or when it fails or returns nothing) with cluster_tags.
    """
    distinct = sorted(set(labels))
    if skip_empty:
        distinct = [label for label in distinct if label.strip()]

    if classifier is not None:
        try:
            groups = classifier(distinct)
        except Exception as exc:
            logger.warning("Tag classifier failed (%s), using local clustering", exc)
        else:
            if groups:
                return groups
            logger.warning("Tag classifier returned no groups, using local clustering")

    return cluster_tags(distinct, threshold=threshold, skip_empty=skip_empty)


def group_counts(
    groups: List[TagGroup],
    tags: Iterable[Tag],
    spans: Iterable[Span],
) -> List[GroupCount]:
    """
    Count live spans per group, matching spans to groups through tag labels.

    Sorted by count descending; equal counts keep group order.
    """
    ids_by_label: Dict[str, set] = {}
    for tag in tags:
        ids_by_label.setdefault(tag.label, set()).add(tag.id)

    per_tag: Dict[str, int] = {}
    for span in spans:
        if span.is_live:
            per_tag[span.tag_id] = per_tag.get(span.tag_id, 0) + 1

    counts: List[GroupCount] = []
    for group in groups:
        value = 0
        for label in group.members:
            for tag_id in ids_by_label.get(label, ()):
                value += per_tag.get(tag_id, 0)
        counts.append(GroupCount(name=group.name, value=value, members=list(group.members)))

    counts.sort(key=lambda c: -c.value)
    return counts
