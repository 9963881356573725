"""Provider implementations for semquiz.

- EmbeddingClient: Abstract base class for embedding providers
- LiteLLM implementation (local Ollama daemon by default)

Usage:
    from semquiz.providers import EmbeddingClient
    from semquiz.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels
"""

from semquiz.providers.base import EmbeddingClient
from semquiz.providers.litellm import EmbeddingModels, LiteLLMEmbeddingClient

__all__ = [
    "EmbeddingClient",
    "EmbeddingModels",
    "LiteLLMEmbeddingClient",
]
