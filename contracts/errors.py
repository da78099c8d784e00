"""Embedding adapter error taxonomy.

All adapter failures surface as one of these; none are retried internally.
"""

from __future__ import annotations


class EmbeddingError(RuntimeError):
    """Base class for embedding adapter failures."""


class InvalidConfig(EmbeddingError, ValueError):
    """A required configuration field is missing, blank, or out of range."""


class MissingCredential(EmbeddingError):
    """No API key could be resolved at construction time."""

    def __init__(self, env_var: str, provider: str = "RunPod") -> None:
        self.env_var = env_var
        super().__init__(
            f"{provider} API key is required. Please provide it in the "
            f"constructor or set the environment variable {env_var}."
        )


class RemoteCallFailed(EmbeddingError):
    """The remote embedding call failed as a whole."""

    def __init__(self, message: str, status: int | str | None = None) -> None:
        self.message = message
        self.status = status
        if status is not None:
            message = f"{message} (status: {status})"
        super().__init__(message)
