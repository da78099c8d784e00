"""Config loader — parse and validate podembed.yaml."""

from __future__ import annotations

from pathlib import Path

import yaml

from contracts.config import ProjectConfig


def load_config(path: str) -> ProjectConfig:
    """Load a podembed.yaml file and return a validated ProjectConfig."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    raw = p.read_text(encoding="utf-8")
    data = yaml.safe_load(raw)
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a YAML mapping, got {type(data).__name__}")

    return ProjectConfig(**data)
