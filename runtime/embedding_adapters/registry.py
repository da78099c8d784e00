"""Embedding adapter registry — look up providers by name and rebuild them
from stored configuration."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from contracts.embedding import EmbeddingAdapter


class EmbeddingRegistry:
    """In-memory registry of embedding adapter classes."""

    def __init__(self) -> None:
        self._adapters: dict[str, type[EmbeddingAdapter]] = {}

    def register(self, adapter_cls: type[EmbeddingAdapter]) -> None:
        """Register an adapter class.  Overwrites if name already exists."""
        if not adapter_cls.name:
            raise ValueError(f"{adapter_cls.__name__} has no name")
        self._adapters[adapter_cls.name] = adapter_cls

    def get(self, name: str) -> type[EmbeddingAdapter]:
        """Return a registered adapter class by name, or raise ``KeyError``."""
        return self._adapters[name]

    def list_adapters(self) -> list[str]:
        """Return sorted list of registered adapter names."""
        return sorted(self._adapters)

    def validate(self, name: str, config: Mapping[str, Any]) -> None:
        self.get(name).validate_config(config)

    def build(
        self, name: str, config: Mapping[str, Any], **kwargs: Any
    ) -> EmbeddingAdapter:
        """Validate *config* offline, then construct the adapter."""
        adapter_cls = self.get(name)
        adapter_cls.validate_config(config)
        return adapter_cls.build_from_config(config, **kwargs)


def create_default_registry() -> EmbeddingRegistry:
    """Create a registry pre-loaded with all built-in adapters."""
    from runtime.embedding_adapters.runpod import RunPodEmbeddingAdapter

    registry = EmbeddingRegistry()
    registry.register(RunPodEmbeddingAdapter)
    return registry
