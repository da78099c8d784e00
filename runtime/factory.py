"""Build adapters and the embedding index from a loaded ProjectConfig."""

from __future__ import annotations

from collections.abc import Callable

from contracts.config import ProjectConfig
from contracts.embedding import EmbeddingAdapter
from contracts.vector_db import VectorDBAdapter
from runtime.embedding_adapters.registry import EmbeddingRegistry, create_default_registry
from runtime.indexer import EmbeddingIndex


def create_embedding_adapter(
    config: ProjectConfig,
    registry: EmbeddingRegistry | None = None,
    key_resolver: Callable[[str], str | None] | None = None,
) -> EmbeddingAdapter:
    """Create an embedding adapter from the ``embedding`` section."""
    registry = registry or create_default_registry()
    backend = config.embedding.backend
    try:
        registry.get(backend)
    except KeyError:
        raise ValueError(
            f"Unknown embedding backend {backend!r}; "
            f"available: {', '.join(registry.list_adapters())}"
        ) from None
    return registry.build(backend, config.embedding.config, key_resolver=key_resolver)


def create_vector_adapter(config: ProjectConfig) -> VectorDBAdapter:
    """Create a vector DB adapter from the ``vector_db`` section."""
    backend = config.vector_db.backend
    if backend == "chroma":
        from runtime.vector_adapters.chroma import ChromaVectorAdapter
        return ChromaVectorAdapter(persist_path=config.vector_db.path)
    raise ValueError(f"Unknown vector_db backend {backend!r}; available: chroma")


def create_index(
    config: ProjectConfig,
    embedding: EmbeddingAdapter | None = None,
    vector: VectorDBAdapter | None = None,
) -> EmbeddingIndex:
    return EmbeddingIndex(
        embedding=embedding or create_embedding_adapter(config),
        vector=vector or create_vector_adapter(config),
        space=config.vector_db.space,
        default_top_k=config.vector_db.default_top_k,
    )
