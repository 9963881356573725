# src/semquiz/embedder/base.py
"""Embedder abstract base class."""

from abc import ABC, abstractmethod

from semquiz.models import Question


class Embedder(ABC):
    """Abstract base class for embedding generation.

    ``embed_text`` returns an empty list when the provider answered without a
    usable vector and raises EmbeddingUnavailableError when the provider call
    itself failed, so callers can tell the two apart.

    Subclasses must implement embed_text and embed_texts.
    """

    @abstractmethod
    def embed_text(self, text: str, model: str) -> list[float]:
        """Generate an embedding vector for a single text."""
        ...

    @abstractmethod
    def embed_texts(self, texts: list[str], model: str) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (batched)."""
        ...

    async def aembed_text(self, text: str, model: str) -> list[float]:
        """Generate an embedding vector for a single text (async)."""
        return self.embed_text(text, model)

    def embed_answer(self, question: Question, model: str) -> list[float]:
        """Embed a question's trimmed canonical answer."""
        return self.embed_text(question.answer.strip(), model)

    async def aembed_answer(self, question: Question, model: str) -> list[float]:
        """Embed a question's trimmed canonical answer (async)."""
        return await self.aembed_text(question.answer.strip(), model)
