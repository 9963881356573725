# tests/test_quiz.py
"""Tests for quiz progression against the session store."""

import random

import pytest

from semquiz.evaluator import AnswerEvaluator
from semquiz.exceptions import InsufficientContentError, InvalidSessionStateError
from semquiz.models import DEFAULT_EMBEDDING_MODEL, QuizState
from semquiz.quiz import Quiz
from semquiz.similarity import SimilarityMetric


def answer_current(quiz, key, correct=True):
    question = quiz.current(key)
    return quiz.submit(key, question.answer if correct else "definitely wrong")


class TestStart:
    def test_start_saves_session(self, quiz, session_store):
        session = quiz.start("alice", "geography", 3)

        assert "alice" in session_store
        assert session.state is QuizState.IN_PROGRESS
        assert session.total == 3
        assert session.model == DEFAULT_EMBEDDING_MODEL
        assert session.metric is SimilarityMetric.COSINE

    def test_questions_come_from_topic(self, quiz, question_repository):
        session = quiz.start("alice", "geography", 5)

        for question_id in session.question_ids:
            assert question_repository.get(question_id).topic == "geography"
        assert len(set(session.question_ids)) == 5

    def test_insufficient_pool_creates_no_session(self, quiz, session_store):
        with pytest.raises(InsufficientContentError) as exc_info:
            quiz.start("alice", "geography", 50)

        assert exc_info.value.available == 15
        assert exc_info.value.requested == 50
        assert "alice" not in session_store

    def test_invalid_count_creates_no_session(self, quiz, session_store):
        with pytest.raises(ValueError):
            quiz.start("alice", "geography", 0)
        assert "alice" not in session_store

    def test_restart_replaces_previous_session(self, quiz):
        quiz.start("alice", "geography", 3)
        answer_current(quiz, "alice")

        session = quiz.start("alice", "music", 2)

        assert session.topic == "music"
        assert quiz.session("alice").score == 0

    def test_unknown_model_falls_back_to_default(self, quiz):
        session = quiz.start("alice", "geography", 1, model="gpt-embed-9000")
        assert session.model == DEFAULT_EMBEDDING_MODEL

    def test_selected_model_and_metric(self, quiz):
        session = quiz.start("alice", "geography", 1, model="all-minilm", metric="l2")
        assert session.model == "all-minilm"
        assert session.metric is SimilarityMetric.L2

    def test_unknown_metric_falls_back_to_cosine(self, quiz):
        session = quiz.start("alice", "geography", 1, metric="jaccard")
        assert session.metric is SimilarityMetric.COSINE

    def test_seeded_selection_is_reproducible(self, question_repository, session_store, embedder):
        def make():
            return Quiz(
                question_repository,
                session_store,
                AnswerEvaluator(embedder),
                rng=random.Random(5),
            )

        first = make().start("a", "geography", 4).question_ids
        second = make().start("b", "geography", 4).question_ids
        assert first == second


class TestEndToEnd:
    def test_three_correct_answers(self, quiz):
        quiz.start("alice", "geography", 3)

        for _ in range(3):
            result = answer_current(quiz, "alice")
            assert result.is_correct
            quiz.advance("alice")

        session = quiz.session("alice")
        assert session.state is QuizState.COMPLETE
        assert session.score == 3
        assert quiz.current("alice") is None

    def test_mixed_answers(self, quiz):
        quiz.start("alice", "geography", 3)

        answer_current(quiz, "alice", correct=True)
        quiz.advance("alice")
        answer_current(quiz, "alice", correct=False)
        quiz.advance("alice")
        answer_current(quiz, "alice", correct=True)
        assert quiz.advance("alice") is None

        assert quiz.session("alice").score == 2

    def test_advance_returns_next_question(self, quiz):
        session = quiz.start("alice", "geography", 2)
        answer_current(quiz, "alice")

        question = quiz.advance("alice")

        assert question.id == session.question_ids[1]
        assert quiz.current("alice").id == question.id

    def test_answer_matching_is_case_insensitive(self, quiz):
        quiz.start("alice", "geography", 1)
        question = quiz.current("alice")

        result = quiz.submit("alice", f"  {question.answer.upper()} ")

        assert result.is_correct


class TestIdempotence:
    def test_resubmitting_correct_answer_scores_once(self, quiz):
        quiz.start("alice", "geography", 3)

        answer_current(quiz, "alice")
        answer_current(quiz, "alice")
        answer_current(quiz, "alice")

        session = quiz.session("alice")
        assert session.score == 1
        assert session.attempts == {0: 3}

    def test_retry_then_correct_answer(self, quiz):
        quiz.start("alice", "geography", 2)
        answer_current(quiz, "alice", correct=False)

        question = quiz.retry("alice")
        quiz.submit("alice", question.answer)

        assert quiz.session("alice").score == 1

    def test_retry_does_not_change_progress(self, quiz):
        quiz.start("alice", "geography", 2)
        answer_current(quiz, "alice")
        before = quiz.session("alice")

        quiz.retry("alice")

        assert quiz.session("alice") == before


class TestSessionErrors:
    def test_missing_session(self, quiz):
        with pytest.raises(InvalidSessionStateError, match="please restart the quiz"):
            quiz.submit("nobody", "Paris")

    def test_advance_before_answer_keeps_session(self, quiz, session_store):
        quiz.start("alice", "geography", 2)

        with pytest.raises(InvalidSessionStateError):
            quiz.advance("alice")

        assert "alice" in session_store
        assert quiz.session("alice").index == 0

    def test_submit_after_completion_clears_session(self, quiz, session_store):
        quiz.start("alice", "geography", 1)
        answer_current(quiz, "alice")
        quiz.advance("alice")

        with pytest.raises(InvalidSessionStateError, match="please restart the quiz"):
            quiz.submit("alice", "Paris")

        assert "alice" not in session_store

    def test_score_readable_after_completion(self, quiz):
        quiz.start("alice", "geography", 1)
        answer_current(quiz, "alice")
        quiz.complete("alice")

        assert quiz.session("alice").score == 1

    def test_missing_question_clears_session(self, quiz, session_store, question_repository):
        session = quiz.start("alice", "geography", 2)
        # Simulate a question removed from the bank after the quiz started
        del question_repository._questions[session.question_ids[0]]

        with pytest.raises(InvalidSessionStateError, match="not found"):
            quiz.current("alice")

        assert "alice" not in session_store

    def test_sessions_are_isolated_by_key(self, quiz):
        quiz.start("alice", "geography", 2)
        quiz.start("bob", "geography", 2)

        answer_current(quiz, "alice")

        assert quiz.session("alice").score == 1
        assert quiz.session("bob").score == 0


class TestAllOrNothing:
    def test_returned_session_is_a_copy(self, quiz):
        quiz.start("alice", "geography", 2)

        session = quiz.session("alice")
        session.score = 2
        session.credited = {0, 1}

        assert quiz.session("alice").score == 0

    def test_rejected_advance_leaves_state_unchanged(self, quiz, session_store):
        quiz.start("alice", "geography", 2)
        answer_current(quiz, "alice")
        quiz.advance("alice")
        before = session_store.load("alice")

        with pytest.raises(InvalidSessionStateError):
            quiz.advance("alice")

        assert session_store.load("alice") == before


class TestFinish:
    def test_finish_clears_and_returns_summary(self, quiz, session_store):
        quiz.start("alice", "geography", 2)
        answer_current(quiz, "alice")

        session = quiz.finish("alice")

        assert session.score == 1
        assert "alice" not in session_store

    def test_finish_without_session(self, quiz):
        assert quiz.finish("nobody") is None


class TestAsyncSubmit:
    @pytest.mark.asyncio
    async def test_asubmit_credits_once(self, quiz):
        quiz.start("alice", "geography", 1)
        question = quiz.current("alice")

        first = await quiz.asubmit("alice", question.answer)
        second = await quiz.asubmit("alice", question.answer)

        assert first.is_correct and second.is_correct
        assert quiz.session("alice").score == 1


class TestProviderOutage:
    def test_fallback_still_scores(self, quiz, embedder):
        quiz.start("alice", "geography", 1)
        embedder.fail = True
        question = quiz.current("alice")

        result = quiz.submit("alice", question.answer.lower())

        assert result.used_fallback
        assert result.is_correct
        assert quiz.session("alice").score == 1
