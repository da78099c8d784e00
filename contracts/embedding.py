"""Embedding adapter contracts.

Defines the abstract interface a vector-database client uses to plug in
an embedding provider, plus the similarity spaces vectors may be used with.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel


class Space(str, Enum):
    """Similarity metrics understood by the vector store."""

    COSINE = "cosine"
    L2 = "l2"
    IP = "ip"


class EmbeddingResult(BaseModel):
    """Result from an embedding operation."""

    embeddings: list[list[float]]
    model: str


class EmbeddingAdapter(ABC):
    """Abstract base class for embedding generation backends."""

    name: str = ""

    @abstractmethod
    async def generate(self, texts: list[str]) -> list[list[float]]:
        """Return one vector per input text, in input order."""
        ...

    @abstractmethod
    def default_space(self) -> str:
        """Return the metric collections should use by default."""
        ...

    @abstractmethod
    def supported_spaces(self) -> list[str]:
        """Return every metric the produced vectors are valid for."""
        ...

    @abstractmethod
    def get_config(self) -> dict[str, Any]:
        """Return the serializable configuration, without secrets."""
        ...

    @classmethod
    @abstractmethod
    def build_from_config(
        cls, config: Mapping[str, Any], **kwargs: Any
    ) -> EmbeddingAdapter:
        """Rebuild an adapter from the output of ``get_config``."""
        ...

    @staticmethod
    @abstractmethod
    def validate_config(config: Mapping[str, Any]) -> None:
        """Check a stored configuration without resolving credentials."""
        ...
