# src/semquiz/providers/litellm/client.py
"""LiteLLM client implementation for embedding APIs."""

import litellm

from semquiz.providers.base import EmbeddingClient

DEFAULT_API_BASE = "http://localhost:11434"
DEFAULT_MODEL_PREFIX = "ollama/"


class LiteLLMEmbeddingClient(EmbeddingClient):
    """LiteLLM-based embedding client.

    Defaults to a local Ollama daemon, but any embedding model available
    through LiteLLM works. Model names without a provider prefix get
    ``model_prefix`` prepended.

    Example:
        from semquiz.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

        client = LiteLLMEmbeddingClient(api_base="http://ollama:11434", timeout=5.0)
        embeddings = client.embed(["Paris"], model=EmbeddingModels.NOMIC_EMBED_TEXT)
    """

    def __init__(
        self,
        api_base: str | None = DEFAULT_API_BASE,
        model_prefix: str = DEFAULT_MODEL_PREFIX,
        timeout: float = 10.0,
        num_retries: int = 1,
    ) -> None:
        """Initialize the LiteLLM embedding client.

        Args:
            api_base: Base URL of the embedding service. None lets LiteLLM
                      use the provider's default endpoint.
            model_prefix: LiteLLM provider prefix for bare model names.
            timeout: Seconds before a request is abandoned.
            num_retries: Number of retries on transient errors.
        """
        self.api_base = api_base
        self.model_prefix = model_prefix
        self.timeout = timeout
        self.num_retries = num_retries

    def litellm_model(self, model: str) -> str:
        """Return the LiteLLM model identifier for a model name."""
        if "/" in model:
            return model
        return f"{self.model_prefix}{model}"

    def _embedding_kwargs(self, texts: list[str], model: str) -> dict:
        kwargs = {
            "model": self.litellm_model(model),
            "input": texts,
            "timeout": self.timeout,
            "num_retries": self.num_retries,
        }
        if self.api_base:
            kwargs["api_base"] = self.api_base
        return kwargs

    @staticmethod
    def _parse(response, expected: int) -> list[list[float]]:
        data = getattr(response, "data", None)
        if data is None or len(data) != expected:
            raise ValueError("Embedding response is missing vectors")
        # Sort by index to maintain order
        sorted_data = sorted(data, key=lambda x: x["index"])
        return [[float(v) for v in (item["embedding"] or [])] for item in sorted_data]

    def embed(self, texts: list[str], model: str) -> list[list[float]]:
        """Generate embeddings using LiteLLM."""
        if not texts:
            return []

        response = litellm.embedding(**self._embedding_kwargs(texts, model))
        return self._parse(response, len(texts))

    async def aembed(self, texts: list[str], model: str) -> list[list[float]]:
        """Generate embeddings using LiteLLM (async)."""
        if not texts:
            return []

        response = await litellm.aembedding(**self._embedding_kwargs(texts, model))
        return self._parse(response, len(texts))
