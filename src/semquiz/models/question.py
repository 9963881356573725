# src/semquiz/models/question.py
"""Question data model."""

from typing import Literal, get_args

from pydantic import BaseModel, Field, field_validator

Topic = Literal["biology", "geography", "history", "music"]
TOPICS: tuple[str, ...] = get_args(Topic)

TOPIC_NAMES: dict[str, str] = {
    "biology": "Biology",
    "geography": "Geography",
    "history": "History",
    "music": "Music",
}

# Embedding models with precomputed reference vectors, and their dimensions.
EMBEDDING_DIMENSIONS: dict[str, int] = {
    "nomic-embed-text": 768,
    "all-minilm": 384,
    "mxbai-embed-large": 1024,
}
DEFAULT_EMBEDDING_MODEL = "nomic-embed-text"


def topic_name(topic: str) -> str:
    """Display name for a topic, falling back to the raw value."""
    return TOPIC_NAMES.get(topic, topic)


class Question(BaseModel):
    """A quiz question with its canonical answer.

    ``embeddings`` holds precomputed reference embeddings of the canonical
    answer, keyed by embedding model name. A missing model is valid and means
    the reference is generated on demand.
    """

    id: int
    topic: Topic
    text: str
    answer: str
    embeddings: dict[str, list[float]] = Field(default_factory=dict)

    @field_validator("embeddings")
    @classmethod
    def _check_dimensions(cls, value: dict[str, list[float]]) -> dict[str, list[float]]:
        for model, vector in value.items():
            expected = EMBEDDING_DIMENSIONS.get(model)
            # Empty vectors are treated as missing, not as a dimension error
            if expected is not None and vector and len(vector) != expected:
                raise ValueError(
                    f"Embedding for model '{model}' has {len(vector)} dimensions, "
                    f"expected {expected}"
                )
        return value

    def reference_embedding(self, model: str) -> list[float] | None:
        """Return the stored embedding for ``model``, or None if missing or empty."""
        vector = self.embeddings.get(model)
        return vector if vector else None
