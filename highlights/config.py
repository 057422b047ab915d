# highlights/config.py

from __future__ import annotations

import os
from dataclasses import dataclass, field

import yaml

DEFAULT_CONFIG_PATH = os.path.join("configs", "highlights.yaml")


@dataclass
class GroupingConfig:
    threshold: int = 3
    skip_empty_labels: bool = True


@dataclass
class RenderConfig:
    default_color: str = "#ddd"
    css_class: str = "highlight"


@dataclass
class HighlightConfig:
    grouping: GroupingConfig = field(default_factory=GroupingConfig)
    render: RenderConfig = field(default_factory=RenderConfig)


def load_config(path: str = DEFAULT_CONFIG_PATH) -> HighlightConfig:
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}

    grouping_cfg = cfg.get("grouping", {}) or {}
    render_cfg = cfg.get("render", {}) or {}

    threshold = int(grouping_cfg.get("threshold", 3))
    if threshold < 0:
        raise ValueError(f"grouping.threshold must be >= 0, got {threshold}")

    return HighlightConfig(
        grouping=GroupingConfig(
            threshold=threshold,
            skip_empty_labels=bool(grouping_cfg.get("skip_empty_labels", True)),
        ),
        render=RenderConfig(
            default_color=str(render_cfg.get("default_color", "#ddd")),
            css_class=str(render_cfg.get("css_class", "highlight")),
        ),
    )


def load_config_or_default(path: str = DEFAULT_CONFIG_PATH) -> HighlightConfig:
    if not os.path.exists(path):
        return HighlightConfig()
    return load_config(path)
