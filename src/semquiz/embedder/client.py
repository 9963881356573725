# src/semquiz/embedder/client.py
"""Client-based embedder implementation."""

from semquiz.embedder.base import Embedder
from semquiz.exceptions import EmbeddingUnavailableError
from semquiz.logging import get_logger
from semquiz.providers.base import EmbeddingClient

logger = get_logger(__name__)


class ClientEmbedder(Embedder):
    """Embedder that uses an EmbeddingClient for generating embeddings.

    Any exception from the client is re-raised as EmbeddingUnavailableError.

    Example:
        from semquiz.providers.litellm import LiteLLMEmbeddingClient
        from semquiz.embedder import ClientEmbedder

        client = LiteLLMEmbeddingClient(api_base="http://localhost:11434")
        embedder = ClientEmbedder(embedding_client=client)
    """

    def __init__(self, embedding_client: EmbeddingClient) -> None:
        """Initialize the embedder.

        Args:
            embedding_client: Any EmbeddingClient implementation
        """
        self._client = embedding_client

    def embed_text(self, text: str, model: str) -> list[float]:
        """Generate an embedding vector for a single text."""
        result = self.embed_texts([text], model)
        return result[0] if result else []

    def embed_texts(self, texts: list[str], model: str) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (batched)."""
        if not texts:
            return []
        try:
            return self._client.embed(texts, model)
        except Exception as e:
            logger.warning("embedding_failed", model=model, error=str(e))
            raise EmbeddingUnavailableError(
                f"Embedding request failed for model {model}: {e}", model=model, cause=e
            ) from e

    async def aembed_text(self, text: str, model: str) -> list[float]:
        """Generate an embedding vector for a single text (async)."""
        try:
            result = await self._client.aembed([text], model)
        except Exception as e:
            logger.warning("embedding_failed", model=model, error=str(e))
            raise EmbeddingUnavailableError(
                f"Embedding request failed for model {model}: {e}", model=model, cause=e
            ) from e
        return result[0] if result else []
