"""Unit tests for the ChromaDB vector adapter (client mocked)."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from chromadb.errors import NotFoundError

from contracts.vector_db import Document
from runtime.vector_adapters.chroma import ChromaVectorAdapter

PATCH_TARGET = "runtime.vector_adapters.chroma.chromadb.PersistentClient"


def _adapter(client: MagicMock) -> ChromaVectorAdapter:
    with patch(PATCH_TARGET, return_value=client):
        return ChromaVectorAdapter(persist_path="/tmp/unused")


class TestChromaVectorAdapter:
    @pytest.mark.asyncio
    async def test_ensure_collection_sets_space(self) -> None:
        client = MagicMock()
        client.get_or_create_collection.return_value.metadata = {"hnsw:space": "cosine"}
        adapter = _adapter(client)

        await adapter.ensure_collection("docs", "cosine")

        client.get_or_create_collection.assert_called_once_with(
            name="docs", metadata={"hnsw:space": "cosine"}
        )

    @pytest.mark.asyncio
    async def test_ensure_collection_space_mismatch(self) -> None:
        client = MagicMock()
        client.get_or_create_collection.return_value.metadata = None
        adapter = _adapter(client)

        with pytest.raises(ValueError, match="uses space 'l2'"):
            await adapter.ensure_collection("docs", "ip")

    @pytest.mark.asyncio
    async def test_insert_passes_embeddings(self) -> None:
        client = MagicMock()
        col = client.get_collection.return_value
        adapter = _adapter(client)

        ids = await adapter.insert("docs", [
            Document(id="a", text="alpha", metadata={"k": "v"}, embedding=[0.1, 0.2]),
            Document(text="beta", embedding=[0.3, 0.4]),
        ])

        assert ids[0] == "a"
        assert len(ids) == 2
        kwargs = col.add.call_args.kwargs
        assert kwargs["ids"] == ids
        assert kwargs["documents"] == ["alpha", "beta"]
        assert kwargs["embeddings"] == [[0.1, 0.2], [0.3, 0.4]]
        assert kwargs["metadatas"] == [{"k": "v"}, None]

    @pytest.mark.asyncio
    async def test_insert_without_metadata(self) -> None:
        client = MagicMock()
        col = client.get_collection.return_value
        adapter = _adapter(client)

        await adapter.insert("docs", [Document(id="a", text="alpha", embedding=[0.1])])

        assert col.add.call_args.kwargs["metadatas"] is None

    @pytest.mark.asyncio
    async def test_insert_requires_embedding(self) -> None:
        adapter = _adapter(MagicMock())
        with pytest.raises(ValueError, match="has no embedding"):
            await adapter.insert("docs", [Document(id="a", text="alpha")])

    @pytest.mark.asyncio
    async def test_search_maps_results(self) -> None:
        client = MagicMock()
        client.get_collection.return_value.query.return_value = {
            "ids": [["a", "b"]],
            "documents": [["alpha", "beta"]],
            "metadatas": [[{"k": "v"}, None]],
            "distances": [[0.0, 1.0]],
        }
        adapter = _adapter(client)

        results = await adapter.search("docs", [0.1, 0.2], top_k=2)

        assert [r.id for r in results] == ["a", "b"]
        assert results[0].score == 1.0
        assert results[1].score == 0.5
        assert results[1].distance == 1.0
        assert results[1].metadata == {}

    @pytest.mark.asyncio
    async def test_delete_and_list(self) -> None:
        client = MagicMock()
        listed = MagicMock()
        listed.name = "docs"
        client.list_collections.return_value = [listed]
        adapter = _adapter(client)

        await adapter.delete("docs", ["a"])

        client.get_collection.return_value.delete.assert_called_once_with(ids=["a"])
        assert await adapter.list_collections() == ["docs"]

    @pytest.mark.asyncio
    async def test_search_missing_collection(self) -> None:
        client = MagicMock()
        client.get_collection.side_effect = NotFoundError("Collection [missing] does not exist")
        adapter = _adapter(client)

        with pytest.raises(ValueError, match="'missing' does not exist"):
            await adapter.search("missing", [0.1, 0.2])
