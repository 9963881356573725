"""LiteLLM provider configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from semquiz.providers.litellm.client import DEFAULT_API_BASE, DEFAULT_MODEL_PREFIX

if TYPE_CHECKING:
    from semquiz.embedder import Embedder
    from semquiz.settings import Settings


@dataclass(frozen=True)
class LiteLLMProvider:
    """Provider configuration using LiteLLM for embedding calls.

    Defaults target a local Ollama daemon serving nomic-embed-text,
    all-minilm and mxbai-embed-large.

    Args:
        api_base: Base URL of the embedding service.
                  Example: "http://ollama:11434"
        model_prefix: LiteLLM provider prefix for bare model names.
                      Default: "ollama/"

    Example:
        provider = LiteLLMProvider(api_base="http://localhost:11434")
    """

    api_base: str | None = DEFAULT_API_BASE
    model_prefix: str = DEFAULT_MODEL_PREFIX

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build a ClientEmbedder using the LiteLLM embedding client.

        Args:
            settings: Settings containing embedding_timeout and num_retries.
        """
        from semquiz.embedder import ClientEmbedder
        from semquiz.providers.litellm import LiteLLMEmbeddingClient

        embedding_client = LiteLLMEmbeddingClient(
            api_base=self.api_base,
            model_prefix=self.model_prefix,
            timeout=settings.embedding_timeout,
            num_retries=settings.num_retries,
        )
        return ClientEmbedder(embedding_client=embedding_client)
