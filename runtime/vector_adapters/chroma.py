"""ChromaDB vector adapter.

Wraps chromadb.PersistentClient for local persistent vector storage.
Embeddings are always supplied by the caller; Chroma's own embedding
functions are never invoked.
"""

from __future__ import annotations

import asyncio
import uuid
from typing import Any

import chromadb
from chromadb.errors import NotFoundError

from contracts.vector_db import Document, SearchResult, VectorDBAdapter

_SPACE_KEY = "hnsw:space"


class ChromaVectorAdapter(VectorDBAdapter):
    """Vector adapter backed by ChromaDB with on-disk persistence."""

    def __init__(self, persist_path: str) -> None:
        self._client = chromadb.PersistentClient(path=persist_path)

    def _get_collection(self, name: str) -> chromadb.Collection:
        try:
            return self._client.get_collection(name=name)
        except NotFoundError as exc:
            raise ValueError(f"Collection {name!r} does not exist") from exc

    # ── ensure_collection ─────────────────────────────────────────────

    async def ensure_collection(self, collection: str, space: str) -> None:
        def _ensure() -> None:
            col = self._client.get_or_create_collection(
                name=collection, metadata={_SPACE_KEY: space}
            )
            existing = (col.metadata or {}).get(_SPACE_KEY, "l2")
            if existing != space:
                raise ValueError(
                    f"Collection {collection!r} uses space {existing!r}, not {space!r}"
                )

        await asyncio.to_thread(_ensure)

    # ── search ────────────────────────────────────────────────────────

    async def search(
        self,
        collection: str,
        query_vector: list[float],
        top_k: int = 10,
        filters: dict[str, Any] | None = None,
    ) -> list[SearchResult]:
        def _search() -> list[SearchResult]:
            col = self._get_collection(collection)
            result = col.query(
                query_embeddings=[query_vector],
                n_results=top_k,
                where=filters or None,
            )
            ids = (result.get("ids") or [[]])[0]
            documents = (result.get("documents") or [[]])[0]
            metadatas = (result.get("metadatas") or [[]])[0]
            distances = (result.get("distances") or [[]])[0]
            results: list[SearchResult] = []
            for i, doc_id in enumerate(ids):
                distance = distances[i] if i < len(distances) else 0.0
                results.append(
                    SearchResult(
                        id=doc_id,
                        text=documents[i] if i < len(documents) else "",
                        metadata=(metadatas[i] if i < len(metadatas) else None) or {},
                        distance=distance,
                        score=1.0 / (1.0 + distance),
                    )
                )
            return results

        return await asyncio.to_thread(_search)

    # ── insert / update ───────────────────────────────────────────────

    @staticmethod
    def _unpack(
        documents: list[Document],
    ) -> tuple[list[str], list[dict[str, Any] | None], list[list[float]]]:
        texts: list[str] = []
        metadatas: list[dict[str, Any] | None] = []
        embeddings: list[list[float]] = []
        for doc in documents:
            if doc.embedding is None:
                raise ValueError(f"Document {doc.id or doc.text[:30]!r} has no embedding")
            texts.append(doc.text)
            # Chroma rejects empty metadata dicts
            metadatas.append(doc.metadata or None)
            embeddings.append(doc.embedding)
        return texts, metadatas, embeddings

    async def insert(
        self, collection: str, documents: list[Document]
    ) -> list[str]:
        def _insert() -> list[str]:
            col = self._get_collection(collection)
            ids = [doc.id or str(uuid.uuid4()) for doc in documents]
            texts, metadatas, embeddings = self._unpack(documents)
            col.add(
                ids=ids,
                documents=texts,
                embeddings=embeddings,
                metadatas=metadatas if any(metadatas) else None,
            )
            return ids

        return await asyncio.to_thread(_insert)

    async def update(
        self, collection: str, ids: list[str], documents: list[Document]
    ) -> None:
        def _update() -> None:
            col = self._get_collection(collection)
            texts, metadatas, embeddings = self._unpack(documents)
            col.update(
                ids=ids,
                documents=texts,
                embeddings=embeddings,
                metadatas=metadatas if any(metadatas) else None,
            )

        await asyncio.to_thread(_update)

    # ── delete ────────────────────────────────────────────────────────

    async def delete(self, collection: str, ids: list[str]) -> None:
        def _delete() -> None:
            self._get_collection(collection).delete(ids=ids)

        await asyncio.to_thread(_delete)

    # ── list_collections ──────────────────────────────────────────────

    async def list_collections(self) -> list[str]:
        def _list() -> list[str]:
            return [getattr(c, "name", c) for c in self._client.list_collections()]

        return await asyncio.to_thread(_list)
