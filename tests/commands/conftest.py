"""Fixtures for commands-layer tests."""

import random
from dataclasses import dataclass

import pytest

from semquiz import SemQuiz
from semquiz.configuration import MemoryStorage


@dataclass(frozen=True)
class StaticProvider:
    """Provider config that hands out a prepared embedder."""

    embedder: object

    def build_embedder(self, settings):
        return self.embedder


@pytest.fixture
def sq(embedder, geography_questions, music_questions):
    return SemQuiz(
        provider=StaticProvider(embedder),
        storage=MemoryStorage(questions=geography_questions + music_questions),
        rng=random.Random(7),
    )


@pytest.fixture
def provider_factory():
    """The StaticProvider class, for tests that build their own SemQuiz."""
    return StaticProvider
