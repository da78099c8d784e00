"""Shared contracts — source of truth for all podembed interfaces."""

from contracts.config import EmbeddingConfig, LoggingConfig, ProjectConfig, VectorConfig
from contracts.embedding import EmbeddingAdapter, EmbeddingResult, Space
from contracts.errors import EmbeddingError, InvalidConfig, MissingCredential, RemoteCallFailed
from contracts.vector_db import Document, SearchResult, VectorDBAdapter

__all__ = [
    # config
    "EmbeddingConfig",
    "LoggingConfig",
    "ProjectConfig",
    "VectorConfig",
    # embedding
    "EmbeddingAdapter",
    "EmbeddingResult",
    "Space",
    # errors
    "EmbeddingError",
    "InvalidConfig",
    "MissingCredential",
    "RemoteCallFailed",
    # vector db
    "Document",
    "SearchResult",
    "VectorDBAdapter",
]
