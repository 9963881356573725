"""LiteLLM provider clients for semquiz.

This module contains LiteLLM-based client implementations:
- LiteLLMEmbeddingClient: Embeddings using LiteLLM (local Ollama by default)
- EmbeddingModels: Embedding model name constants

Usage:
    from semquiz.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

    client = LiteLLMEmbeddingClient(api_base="http://localhost:11434")
"""

from semquiz.providers.litellm.client import LiteLLMEmbeddingClient
from semquiz.providers.litellm.models import EmbeddingModels

__all__ = [
    "EmbeddingModels",
    "LiteLLMEmbeddingClient",
]
