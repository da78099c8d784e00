"""RunPod embedding adapter.

Sends embedding batches to a RunPod serverless endpoint via httpx and maps
the returned vectors back onto the input order.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Mapping
from numbers import Real
from typing import Any

import httpx

from contracts.embedding import EmbeddingAdapter, Space
from contracts.errors import InvalidConfig, MissingCredential, RemoteCallFailed

logger = logging.getLogger(__name__)

RUNPOD_API_BASE = "https://api.runpod.ai/v2"
DEFAULT_API_KEY_ENV_VAR = "RUNPOD_API_KEY"
DEFAULT_TIMEOUT = 300

KeyResolver = Callable[[str], str | None]


def _require_text(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidConfig(message)
    return value


def _check_timeout(timeout: Any) -> float:
    if isinstance(timeout, bool) or not isinstance(timeout, Real) or timeout <= 0:
        raise InvalidConfig(f"RunPod timeout must be a positive number, got {timeout!r}.")
    return timeout


class RunPodEmbeddingAdapter(EmbeddingAdapter):
    """Async adapter for the RunPod serverless /runsync endpoint."""

    name = "runpod"

    def __init__(
        self,
        endpoint_id: str,
        model_name: str,
        api_key: str | None = None,
        api_key_env_var: str = DEFAULT_API_KEY_ENV_VAR,
        timeout: float = DEFAULT_TIMEOUT,
        key_resolver: KeyResolver | None = None,
    ) -> None:
        self._endpoint_id = _require_text(
            endpoint_id, "RunPod endpoint ID is required and cannot be empty."
        )
        self._model_name = _require_text(
            model_name, "RunPod model name is required and cannot be empty."
        )
        self._api_key_env_var = _require_text(
            api_key_env_var, "RunPod API key environment variable name cannot be empty."
        )
        self._timeout = _check_timeout(timeout)

        resolve = key_resolver or os.getenv
        key = api_key if api_key and api_key.strip() else resolve(api_key_env_var)
        if not key or not key.strip():
            raise MissingCredential(api_key_env_var)
        # Sent in an HTTP header
        if not key.isascii():
            raise InvalidConfig("RunPod API key must contain only ASCII characters.")
        self._api_key = key

    @property
    def url(self) -> str:
        return f"{RUNPOD_API_BASE}/{self._endpoint_id}/runsync"

    async def generate(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of texts with a single RunPod request."""
        if not texts:
            return []

        payload = {"input": {"model": self._model_name, "input": list(texts)}}
        headers = {"Authorization": f"Bearer {self._api_key}"}

        logger.debug(
            "RunPod embed request: endpoint=%s model=%s batch=%d",
            self._endpoint_id, self._model_name, len(texts),
        )
        started = time.monotonic()

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(self.url, json=payload, headers=headers)
        except httpx.TimeoutException as exc:
            logger.warning("RunPod endpoint %s timed out", self._endpoint_id)
            raise RemoteCallFailed(
                f"RunPod request timed out after {self._timeout}s: {exc}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("RunPod endpoint %s unreachable: %s", self._endpoint_id, exc)
            raise RemoteCallFailed(
                f"Cannot connect to RunPod endpoint {self._endpoint_id}: {exc}"
            ) from exc

        if not 200 <= resp.status_code < 300:
            logger.warning(
                "RunPod endpoint %s returned HTTP %d", self._endpoint_id, resp.status_code
            )
            raise RemoteCallFailed(
                f"RunPod embed request failed: {resp.text}", status=resp.status_code
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise RemoteCallFailed(
                "RunPod returned a non-JSON response body", status=resp.status_code
            ) from exc

        vectors = self._parse_response(data, expected=len(texts))
        logger.debug(
            "RunPod embed finished: endpoint=%s vectors=%d elapsed=%.3fs",
            self._endpoint_id, len(vectors), time.monotonic() - started,
        )
        return vectors

    # ── response parsing ─────────────────────────────────────────────

    @staticmethod
    def _parse_response(data: Any, expected: int) -> list[list[float]]:
        """Extract ordered vectors from a /runsync response envelope."""
        if not isinstance(data, dict):
            raise RemoteCallFailed("RunPod response is not a JSON object")

        status = data.get("status")
        if status != "COMPLETED":
            detail = data.get("error") or "job did not complete"
            raise RemoteCallFailed(f"RunPod job {data.get('id', '?')}: {detail}", status=status)

        output = data.get("output")
        # Some workers wrap the result in a single-element list
        if isinstance(output, list) and len(output) == 1 and isinstance(output[0], dict):
            output = output[0]
        if not isinstance(output, dict):
            raise RemoteCallFailed("RunPod response has no output object")

        if isinstance(output.get("data"), list):
            items = output["data"]
            if any(isinstance(item, dict) and "index" in item for item in items):
                items = RunPodEmbeddingAdapter._order_by_index(items, expected)
            raw = [item.get("embedding") if isinstance(item, dict) else None for item in items]
        elif isinstance(output.get("embeddings"), list):
            raw = output["embeddings"]
        else:
            raise RemoteCallFailed("RunPod output contains no embeddings")

        if len(raw) != expected:
            raise RemoteCallFailed(
                f"RunPod returned {len(raw)} embeddings for {expected} inputs"
            )

        vectors: list[list[float]] = []
        for i, vec in enumerate(raw):
            if (
                not isinstance(vec, list)
                or not vec
                or not all(isinstance(v, Real) and not isinstance(v, bool) for v in vec)
            ):
                raise RemoteCallFailed(f"RunPod embedding {i} is not a numeric vector")
            vectors.append([float(v) for v in vec])
        return vectors

    @staticmethod
    def _order_by_index(items: list[Any], expected: int) -> list[dict[str, Any]]:
        """Sort ``data`` items by ``index``; indices must be exactly 0..expected-1."""
        indices = [item.get("index") if isinstance(item, dict) else None for item in items]
        if not all(isinstance(i, int) and not isinstance(i, bool) for i in indices):
            raise RemoteCallFailed("RunPod embedding indices are malformed")
        if sorted(indices) != list(range(expected)):
            raise RemoteCallFailed(
                f"RunPod embedding indices {sorted(indices)} do not cover "
                f"{expected} inputs"
            )
        return sorted(items, key=lambda item: item["index"])

    # ── metadata ─────────────────────────────────────────────────────

    def default_space(self) -> str:
        return Space.COSINE.value

    def supported_spaces(self) -> list[str]:
        return [Space.COSINE.value, Space.L2.value, Space.IP.value]

    # ── config round-trip ────────────────────────────────────────────

    def get_config(self) -> dict[str, Any]:
        return {
            "api_key_env_var": self._api_key_env_var,
            "endpoint_id": self._endpoint_id,
            "model_name": self._model_name,
            "timeout": self._timeout,
        }

    @classmethod
    def build_from_config(
        cls,
        config: Mapping[str, Any],
        key_resolver: KeyResolver | None = None,
    ) -> RunPodEmbeddingAdapter:
        timeout = config.get("timeout")
        return cls(
            endpoint_id=config.get("endpoint_id", ""),
            model_name=config.get("model_name", ""),
            api_key_env_var=config.get("api_key_env_var", DEFAULT_API_KEY_ENV_VAR),
            timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
            key_resolver=key_resolver,
        )

    @staticmethod
    def validate_config(config: Mapping[str, Any]) -> None:
        for field in ("endpoint_id", "model_name", "api_key_env_var"):
            value = config.get(field)
            if not isinstance(value, str) or not value.strip():
                raise InvalidConfig(f"{field} is required")
        if config.get("timeout") is not None:
            _check_timeout(config["timeout"])
