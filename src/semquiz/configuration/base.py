"""Protocol definitions for configuration objects.

These protocols define the interfaces for provider and storage configurations.
Implementations use @dataclass(frozen=True) and satisfy the protocols
structurally, without inheriting from them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from semquiz.embedder import Embedder
    from semquiz.settings import Settings
    from semquiz.stores import QuestionRepository, SessionStore


@runtime_checkable
class ProviderConfig(Protocol):
    """Protocol for provider configurations.

    Provider configurations build the embedder used for user answers and
    for reference embeddings missing from the question bank.

    Example implementation:
        @dataclass(frozen=True)
        class LiteLLMProvider:
            api_base: str

            def build_embedder(self, settings: Settings) -> Embedder: ...
    """

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build an embedder.

        Args:
            settings: Settings containing embedding_timeout and num_retries.
        """
        ...


@runtime_checkable
class StorageConfig(Protocol):
    """Protocol for storage configurations.

    Storage configurations build the data stores:
    - QuestionRepository: Questions and their reference embeddings
    - SessionStore: Per-user quiz sessions

    Example implementation:
        @dataclass(frozen=True)
        class LocalStorage:
            data_dir: str

            def build_stores(self, settings: Settings) -> tuple[QuestionRepository, SessionStore]:
                ...
    """

    def build_stores(self, settings: Settings) -> tuple[QuestionRepository, SessionStore]:
        """Build both storage components.

        Returns:
            Tuple of (question_repository, session_store)
        """
        ...
