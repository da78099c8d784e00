"""Unit tests for the embedding adapter registry and factory."""

from __future__ import annotations

import pytest

from contracts.config import ProjectConfig
from contracts.errors import InvalidConfig, MissingCredential
from runtime.embedding_adapters.registry import EmbeddingRegistry, create_default_registry
from runtime.embedding_adapters.runpod import RunPodEmbeddingAdapter
from runtime.factory import create_embedding_adapter, create_vector_adapter

RUNPOD_CONFIG = {
    "api_key_env_var": "RUNPOD_API_KEY",
    "endpoint_id": "ep1",
    "model_name": "m1",
    "timeout": 60,
}


class TestEmbeddingRegistry:
    def test_default_registry_has_runpod(self) -> None:
        registry = create_default_registry()
        assert registry.list_adapters() == ["runpod"]
        assert registry.get("runpod") is RunPodEmbeddingAdapter

    def test_unknown_adapter(self) -> None:
        with pytest.raises(KeyError):
            EmbeddingRegistry().get("nope")

    def test_build_round_trips_config(self) -> None:
        registry = create_default_registry()
        adapter = registry.build(
            "runpod", RUNPOD_CONFIG, key_resolver={"RUNPOD_API_KEY": "k"}.get
        )
        assert adapter.get_config() == RUNPOD_CONFIG

    def test_build_validates_offline_first(self) -> None:
        registry = create_default_registry()
        config = dict(RUNPOD_CONFIG, api_key_env_var="")
        with pytest.raises(InvalidConfig, match="api_key_env_var"):
            registry.build("runpod", config, key_resolver={}.get)

    def test_validate_does_not_need_credentials(self) -> None:
        create_default_registry().validate("runpod", RUNPOD_CONFIG)

    def test_register_requires_name(self) -> None:
        class Nameless(RunPodEmbeddingAdapter):
            name = ""

        with pytest.raises(ValueError, match="no name"):
            EmbeddingRegistry().register(Nameless)


class TestFactory:
    def test_create_embedding_adapter(self) -> None:
        config = ProjectConfig(embedding={"backend": "runpod", "config": RUNPOD_CONFIG})
        adapter = create_embedding_adapter(config, key_resolver={"RUNPOD_API_KEY": "k"}.get)
        assert isinstance(adapter, RunPodEmbeddingAdapter)

    def test_create_embedding_adapter_missing_key(self) -> None:
        config = ProjectConfig(embedding={"backend": "runpod", "config": RUNPOD_CONFIG})
        with pytest.raises(MissingCredential):
            create_embedding_adapter(config, key_resolver={}.get)

    def test_unknown_embedding_backend(self) -> None:
        config = ProjectConfig(embedding={"backend": "nope", "config": {}})
        with pytest.raises(ValueError, match="Unknown embedding backend"):
            create_embedding_adapter(config)

    def test_unknown_vector_backend(self) -> None:
        config = ProjectConfig(
            embedding={"backend": "runpod", "config": RUNPOD_CONFIG},
            vector_db={"backend": "nope"},
        )
        with pytest.raises(ValueError, match="Unknown vector_db backend"):
            create_vector_adapter(config)
