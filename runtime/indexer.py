"""Embedding index — pairs an embedding adapter with a vector store.

Text goes in, vectors are produced by the adapter, and the store only ever
sees documents that already carry an embedding.
"""

from __future__ import annotations

import logging
from typing import Any

from contracts.embedding import EmbeddingAdapter
from contracts.errors import InvalidConfig
from contracts.vector_db import Document, SearchResult, VectorDBAdapter

logger = logging.getLogger(__name__)


class EmbeddingIndex:
    """Embed-on-write, embed-on-query facade over a ``VectorDBAdapter``."""

    def __init__(
        self,
        embedding: EmbeddingAdapter,
        vector: VectorDBAdapter,
        space: str | None = None,
        default_top_k: int = 10,
    ) -> None:
        space = space or embedding.default_space()
        if space not in embedding.supported_spaces():
            raise InvalidConfig(
                f"Space {space!r} is not supported by {embedding.name}; "
                f"expected one of {embedding.supported_spaces()}"
            )
        self._embedding = embedding
        self._vector = vector
        self._space = space
        self._default_top_k = default_top_k

    @property
    def space(self) -> str:
        return self._space

    async def _auto_embed(self, documents: list[Document]) -> list[Document]:
        """Embed documents that don't already have embeddings."""
        texts_to_embed: list[str] = []
        indices: list[int] = []
        for i, doc in enumerate(documents):
            if doc.embedding is None:
                texts_to_embed.append(doc.text)
                indices.append(i)

        if not texts_to_embed:
            return documents

        embeddings = await self._embedding.generate(texts_to_embed)
        out = list(documents)
        for idx, emb in zip(indices, embeddings):
            out[idx] = out[idx].model_copy(update={"embedding": emb})
        return out

    async def add(self, collection: str, documents: list[Document]) -> list[str]:
        """Embed and insert documents. Returns assigned IDs."""
        if not documents:
            return []
        await self._vector.ensure_collection(collection, self._space)
        documents = await self._auto_embed(documents)
        ids = await self._vector.insert(collection, documents)
        logger.info("Indexed %d documents into %s", len(ids), collection)
        return ids

    async def update(
        self, collection: str, ids: list[str], documents: list[Document]
    ) -> None:
        if len(ids) != len(documents):
            raise ValueError(
                f"Got {len(ids)} ids for {len(documents)} documents"
            )
        if not ids:
            return
        documents = await self._auto_embed(documents)
        await self._vector.update(collection, ids, documents)

    async def query(
        self,
        collection: str,
        text: str,
        top_k: int | None = None,
        filters: dict[str, Any] | None = None,
    ) -> list[SearchResult]:
        """Embed *text* and return its nearest neighbours."""
        vectors = await self._embedding.generate([text])
        return await self._vector.search(
            collection=collection,
            query_vector=vectors[0],
            top_k=top_k or self._default_top_k,
            filters=filters,
        )

    async def delete(self, collection: str, ids: list[str]) -> None:
        if ids:
            await self._vector.delete(collection, ids)
