# tests/providers/test_litellm_client.py
"""Tests for the LiteLLM embedding client."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from semquiz.providers import EmbeddingClient
from semquiz.providers.litellm import EmbeddingModels, LiteLLMEmbeddingClient


def mock_embedding_response(embeddings: list[list[float]]):
    """Create a mock LiteLLM embedding response."""
    mock_response = MagicMock()
    mock_response.data = [{"index": i, "embedding": emb} for i, emb in enumerate(embeddings)]
    return mock_response


@pytest.fixture
def client():
    return LiteLLMEmbeddingClient()


class TestLiteLLMEmbeddingClient:
    def test_is_embedding_client(self, client):
        assert isinstance(client, EmbeddingClient)

    def test_defaults_to_local_ollama(self, client):
        assert client.api_base == "http://localhost:11434"
        assert client.litellm_model("nomic-embed-text") == "ollama/nomic-embed-text"

    def test_prefixed_model_unchanged(self, client):
        assert client.litellm_model("openai/text-embedding-3-small") == "openai/text-embedding-3-small"

    @patch("semquiz.providers.litellm.client.litellm.embedding")
    def test_embed(self, mock_embedding, client):
        mock_embedding.return_value = mock_embedding_response([[0.1, 0.2, 0.3]])

        result = client.embed(["Paris"], EmbeddingModels.NOMIC_EMBED_TEXT)

        assert result == [[0.1, 0.2, 0.3]]
        mock_embedding.assert_called_once_with(
            model="ollama/nomic-embed-text",
            input=["Paris"],
            timeout=10.0,
            num_retries=1,
            api_base="http://localhost:11434",
        )

    @patch("semquiz.providers.litellm.client.litellm.embedding")
    def test_no_api_base(self, mock_embedding):
        mock_embedding.return_value = mock_embedding_response([[1.0]])
        client = LiteLLMEmbeddingClient(api_base=None, timeout=2.5, num_retries=0)

        client.embed(["x"], "openai/text-embedding-3-small")

        kwargs = mock_embedding.call_args.kwargs
        assert "api_base" not in kwargs
        assert kwargs["timeout"] == 2.5
        assert kwargs["num_retries"] == 0

    @patch("semquiz.providers.litellm.client.litellm.embedding")
    def test_preserves_order(self, mock_embedding, client):
        mock_response = MagicMock()
        mock_response.data = [
            {"index": 1, "embedding": [0.0, 1.0]},
            {"index": 0, "embedding": [1.0, 0.0]},
        ]
        mock_embedding.return_value = mock_response

        result = client.embed(["a", "b"], "all-minilm")

        assert result == [[1.0, 0.0], [0.0, 1.0]]

    @patch("semquiz.providers.litellm.client.litellm.embedding")
    def test_empty_input(self, mock_embedding, client):
        assert client.embed([], "all-minilm") == []
        mock_embedding.assert_not_called()

    @patch("semquiz.providers.litellm.client.litellm.embedding")
    def test_missing_vectors_raise(self, mock_embedding, client):
        mock_embedding.return_value = mock_embedding_response([])

        with pytest.raises(ValueError, match="missing vectors"):
            client.embed(["Paris"], "all-minilm")

    @patch("semquiz.providers.litellm.client.litellm.embedding")
    def test_null_embedding_becomes_empty_vector(self, mock_embedding, client):
        mock_response = MagicMock()
        mock_response.data = [{"index": 0, "embedding": None}]
        mock_embedding.return_value = mock_response

        assert client.embed(["Paris"], "all-minilm") == [[]]

    @patch("semquiz.providers.litellm.client.litellm.embedding")
    def test_provider_errors_propagate(self, mock_embedding, client):
        mock_embedding.side_effect = ConnectionError("connection refused")

        with pytest.raises(ConnectionError):
            client.embed(["Paris"], "all-minilm")

    @pytest.mark.asyncio
    @patch("semquiz.providers.litellm.client.litellm.aembedding", new_callable=AsyncMock)
    async def test_aembed(self, mock_aembedding, client):
        mock_aembedding.return_value = mock_embedding_response([[0.5, 0.5]])

        result = await client.aembed(["Tokyo"], "mxbai-embed-large")

        assert result == [[0.5, 0.5]]
        assert mock_aembedding.call_args.kwargs["model"] == "ollama/mxbai-embed-large"


class TestEmbeddingModels:
    def test_model_names(self):
        assert EmbeddingModels.NOMIC_EMBED_TEXT == "nomic-embed-text"
        assert EmbeddingModels.ALL_MINILM == "all-minilm"
        assert EmbeddingModels.MXBAI_EMBED_LARGE == "mxbai-embed-large"
