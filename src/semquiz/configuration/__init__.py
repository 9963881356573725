"""Configuration objects for semquiz.

Instead of factory methods, you pass configuration objects that know how to
build their components.

Provider configurations (build the embedder):
- LiteLLMProvider: Uses LiteLLM, defaulting to a local Ollama daemon

Storage configurations (build data stores):
- LocalStorage: SQLite files in a data directory
- MemoryStorage: Non-persistent, for tests and embedding in other apps

Example:
    from semquiz import SemQuiz, LiteLLMProvider, LocalStorage

    sq = SemQuiz(
        provider=LiteLLMProvider(api_base="http://localhost:11434"),
        storage=LocalStorage("./semquiz_data"),
    )
"""

from semquiz.configuration.base import ProviderConfig, StorageConfig
from semquiz.configuration.providers import LiteLLMProvider
from semquiz.configuration.storage import LocalStorage, MemoryStorage

__all__ = [
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
    "MemoryStorage",
]
