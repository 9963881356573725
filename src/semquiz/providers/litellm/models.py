"""Embedding model constants for the LiteLLM provider.

Model names are the local inference daemon's names. LiteLLMEmbeddingClient
adds the provider prefix ("ollama/" by default) when calling LiteLLM.

Example:
    from semquiz.providers.litellm import EmbeddingModels, LiteLLMEmbeddingClient

    client = LiteLLMEmbeddingClient()
    vectors = client.embed(["Paris"], model=EmbeddingModels.ALL_MINILM)
"""


class EmbeddingModels:
    """Embedding models with precomputed reference vectors."""

    NOMIC_EMBED_TEXT = "nomic-embed-text"  # 768 dimensions
    ALL_MINILM = "all-minilm"  # 384 dimensions
    MXBAI_EMBED_LARGE = "mxbai-embed-large"  # 1024 dimensions
