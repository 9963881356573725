# src/semquiz/providers/base.py
"""Abstract base class for embedding providers."""

from abc import ABC, abstractmethod


class EmbeddingClient(ABC):
    """Abstract base class for embedding providers.

    Implementations turn text into fixed-length vectors for a named model.
    They raise on failure (timeout, non-2xx response, malformed body); an
    empty vector in the result is a successful but unusable answer.

    Implementations must bound every request with their own timeout.
    AnswerEvaluator.evaluate() adds none, so a client without one can block
    the synchronous path indefinitely. The async path is additionally bounded
    by AnswerEvaluator.timeout.

    Example:
        class MyEmbeddingClient(EmbeddingClient):
            def embed(self, texts, model):
                return my_api.embed_batch(texts, model=model)
    """

    @abstractmethod
    def embed(self, texts: list[str], model: str) -> list[list[float]]:
        """Generate embedding vectors for multiple texts.

        Args:
            texts: List of texts to embed.
            model: Embedding model name (e.g. "nomic-embed-text").

        Returns:
            List of embedding vectors, one per input text.
            Order is preserved (result[i] corresponds to texts[i]).
        """
        ...

    async def aembed(self, texts: list[str], model: str) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (async).

        Default implementation calls sync embed(). Override in subclasses for
        true async behavior.
        """
        return self.embed(texts, model)
