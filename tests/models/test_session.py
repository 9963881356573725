# tests/models/test_session.py
"""Tests for the QuizSession state machine."""

import random

import pytest
from pydantic import ValidationError

from semquiz.exceptions import InsufficientContentError, InvalidSessionStateError
from semquiz.models import QuizSession, QuizState, choose_questions
from semquiz.similarity import SimilarityMetric

POOL = list(range(1, 16))


@pytest.fixture
def session():
    return QuizSession.start("geography", POOL, 3, rng=random.Random(1))


class TestChooseQuestions:
    def test_distinct_ids_from_pool(self):
        chosen = choose_questions(POOL, 5, random.Random(3))
        assert len(chosen) == 5
        assert len(set(chosen)) == 5
        assert set(chosen) <= set(POOL)

    def test_does_not_mutate_pool(self):
        pool = list(POOL)
        choose_questions(pool, 5, random.Random(3))
        assert pool == POOL

    def test_deterministic_with_seed(self):
        assert choose_questions(POOL, 4, random.Random(9)) == choose_questions(
            POOL, 4, random.Random(9)
        )

    def test_whole_pool(self):
        assert sorted(choose_questions(POOL, 15, random.Random(0))) == POOL


class TestStart:
    def test_initial_state(self, session):
        assert session.state is QuizState.IN_PROGRESS
        assert session.index == 0
        assert session.score == 0
        assert session.credited == set()
        assert session.total == 3
        assert session.topic == "geography"

    def test_metric_name_is_parsed(self):
        session = QuizSession.start("music", [1, 2], 1, metric="l2")
        assert session.metric is SimilarityMetric.L2

    def test_insufficient_pool(self):
        with pytest.raises(InsufficientContentError, match="insufficient questions"):
            QuizSession.start("geography", POOL, 50)

    @pytest.mark.parametrize("count", [0, -1])
    def test_non_positive_count(self, count):
        with pytest.raises(ValueError):
            QuizSession.start("geography", POOL, count)

    def test_default_session_is_not_started(self):
        session = QuizSession()
        assert session.state is QuizState.NOT_STARTED
        with pytest.raises(InvalidSessionStateError, match="not been started"):
            session.current()


class TestProgress:
    def test_current_is_first_id(self, session):
        assert session.current() == session.question_ids[0]

    def test_correct_answer_credits_once(self, session):
        assert session.record_attempt(True) is True
        assert session.record_attempt(True) is False
        assert session.score == 1
        assert session.credited == {0}
        assert session.attempts == {0: 2}

    def test_incorrect_then_correct(self, session):
        assert session.record_attempt(False) is False
        assert session.record_attempt(True) is True
        assert session.score == 1

    def test_advance_requires_answer(self, session):
        with pytest.raises(InvalidSessionStateError, match="before answering"):
            session.advance()
        assert session.index == 0

    def test_advance_moves_to_next_id(self, session):
        session.record_attempt(False)
        assert session.advance() == session.question_ids[1]
        assert session.index == 1
        assert session.score == 0

    def test_advance_past_last_completes(self, session):
        for _ in range(3):
            session.record_attempt(True)
            session.advance()

        assert session.state is QuizState.COMPLETE
        assert session.index == session.total
        assert session.score == 3
        assert session.current() is None

    def test_retry_keeps_progress(self, session):
        session.record_attempt(True)
        assert session.retry() == session.question_ids[0]
        assert session.index == 0
        assert session.score == 1

    def test_explicit_complete(self, session):
        session.record_attempt(True)
        session.complete()
        assert session.is_complete
        assert session.score == 1

    def test_complete_requires_start(self):
        with pytest.raises(InvalidSessionStateError):
            QuizSession().complete()


class TestAfterCompletion:
    @pytest.fixture
    def finished(self, session):
        session.complete()
        return session

    def test_submit_rejected(self, finished):
        with pytest.raises(InvalidSessionStateError, match="please restart the quiz"):
            finished.record_attempt(True)

    def test_advance_rejected(self, finished):
        with pytest.raises(InvalidSessionStateError):
            finished.advance()

    def test_retry_rejected(self, finished):
        with pytest.raises(InvalidSessionStateError):
            finished.retry()


class TestInvariants:
    def test_index_out_of_range(self):
        with pytest.raises(ValidationError):
            QuizSession(question_ids=[1, 2], index=3)

    def test_score_above_total(self):
        with pytest.raises(ValidationError):
            QuizSession(question_ids=[1], score=2, credited={0})

    def test_score_above_credited(self):
        with pytest.raises(ValidationError):
            QuizSession(question_ids=[1, 2], index=1, score=1)

    def test_credit_ahead_of_index(self):
        with pytest.raises(ValidationError):
            QuizSession(question_ids=[1, 2], index=0, score=1, credited={1})

    def test_json_round_trip(self, session):
        session.record_attempt(True)
        restored = QuizSession.model_validate_json(session.model_dump_json())
        assert restored == session
        assert restored.credited == {0}
        assert restored.attempts == {0: 1}
