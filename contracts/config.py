"""Project configuration (podembed.yaml) schema — Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# ── Sections ─────────────────────────────────────────────────────────


class EmbeddingConfig(BaseModel):
    backend: str = "runpod"
    # Serialized adapter config, as produced by ``get_config``
    config: dict[str, Any] = {}


class VectorConfig(BaseModel):
    backend: str = "chroma"
    path: str = ".podembed/vector_db"
    default_top_k: int = 10
    space: str | None = None       # falls back to the adapter's default


class LoggingConfig(BaseModel):
    level: LogLevel = LogLevel.INFO


# ── Root ─────────────────────────────────────────────────────────────


class ProjectConfig(BaseModel):
    embedding: EmbeddingConfig
    vector_db: VectorConfig = VectorConfig()
    logging: LoggingConfig = LoggingConfig()
