# tests/commands/test_quiz_commands.py
"""Tests for the quiz commands."""

from semquiz.commands import quiz


def current_answer(sq, key="default"):
    return sq.quiz().current(key).answer


class TestStart:
    def test_start_returns_first_question(self, sq):
        result = quiz.start("geography", count=3, sq=sq)

        assert result.success
        assert result.topic == "geography"
        assert result.model == "nomic-embed-text"
        assert result.metric == "cosine"
        assert result.question.number == 1
        assert result.question.total == 3
        assert not hasattr(result.question, "answer")

    def test_default_count_from_settings(self, sq):
        result = quiz.start("geography", sq=sq)
        assert result.question.total == sq.settings.default_question_count

    def test_unknown_topic(self, sq):
        result = quiz.start("astrology", sq=sq)

        assert not result.success
        assert "Unknown topic" in result.error

    def test_not_enough_questions(self, sq):
        result = quiz.start("music", count=5, sq=sq)

        assert not result.success
        assert "music" in result.error

    def test_invalid_count(self, sq):
        result = quiz.start("geography", count=0, sq=sq)
        assert not result.success

    def test_model_and_metric(self, sq):
        result = quiz.start("geography", count=1, model="all-minilm", metric="l2", sq=sq)

        assert result.model == "all-minilm"
        assert result.metric == "l2"


class TestAnswerFlow:
    def test_correct_answer(self, sq):
        quiz.start("geography", count=2, sq=sq)

        result = quiz.answer(current_answer(sq), sq=sq)

        assert result.success
        assert result.is_correct
        assert result.score == 1
        assert result.total == 2
        assert result.similarity == 1.0

    def test_wrong_answer_shows_canonical(self, sq):
        quiz.start("geography", count=2, sq=sq)
        expected = current_answer(sq)

        result = quiz.answer("Atlantis", sq=sq)

        assert result.success
        assert not result.is_correct
        assert result.canonical_answer == expected
        assert result.score == 0

    def test_answer_without_session(self, sq):
        result = quiz.answer("Paris", sq=sq)

        assert not result.success
        assert "restart" in result.error

    def test_full_quiz(self, sq):
        quiz.start("geography", count=2, sq=sq)

        quiz.answer(current_answer(sq), sq=sq)
        second = quiz.next_question(sq=sq)
        assert second.question.number == 2

        quiz.answer(current_answer(sq), sq=sq)
        done = quiz.next_question(sq=sq)

        assert done.success
        assert done.complete
        assert done.question is None
        assert done.score == 2

    def test_next_before_answer(self, sq):
        quiz.start("geography", count=2, sq=sq)

        result = quiz.next_question(sq=sq)

        assert not result.success
        assert quiz.retry(sq=sq).question.number == 1

    def test_retry_shows_same_question(self, sq):
        first = quiz.start("geography", count=2, sq=sq)
        quiz.answer("Atlantis", sq=sq)

        result = quiz.retry(sq=sq)

        assert result.success
        assert result.question.id == first.question.id

    def test_separate_keys(self, sq):
        quiz.start("geography", count=2, key="alice", sq=sq)
        quiz.start("music", count=2, key="bob", sq=sq)

        quiz.answer(current_answer(sq, "alice"), key="alice", sq=sq)

        assert quiz.status(key="alice", sq=sq).session.score == 1
        assert quiz.status(key="bob", sq=sq).session.score == 0


class TestFinish:
    def test_finish_reports_score(self, sq):
        quiz.start("geography", count=2, sq=sq)
        quiz.answer(current_answer(sq), sq=sq)

        result = quiz.finish(sq=sq)

        assert result.had_session
        assert result.score == 1
        assert result.total == 2
        assert result.topic == "geography"
        assert quiz.status(sq=sq).session is None

    def test_finish_without_session(self, sq):
        result = quiz.finish(sq=sq)

        assert result.success
        assert not result.had_session


class TestStatus:
    def test_topic_counts(self, sq):
        result = quiz.status(sq=sq)

        assert result.success
        assert result.total_questions == 17
        counts = {t.topic: t.question_count for t in result.topics}
        assert counts == {"geography": 15, "music": 2}
        assert {t.name for t in result.topics} == {"Geography", "Music"}

    def test_session_progress(self, sq):
        quiz.start("geography", count=3, sq=sq)

        info = quiz.status(sq=sq).session

        assert info.state == "in_progress"
        assert info.number == 1
        assert info.total == 3
        assert info.metric == "cosine"

    def test_provider_check_ok(self, sq):
        result = quiz.status(check=True, sq=sq)

        assert result.provider_checked
        assert result.provider_ok
        assert result.provider_error is None

    def test_provider_check_failure(self, sq, embedder):
        embedder.fail = True

        result = quiz.status(check=True, sq=sq)

        assert result.provider_checked
        assert not result.provider_ok
        assert "provider down" in result.provider_error

    def test_check_provider_empty_vector(self, sq, embedder):
        embedder.vectors["ping"] = []
        assert "empty embedding" in quiz.check_provider(sq)


class TestOpenStorage:
    def test_bad_config_file(self, temp_dir):
        bad = f"{temp_dir}/semquiz.yaml"
        with open(bad, "w") as f:
            f.write("settings: [unclosed\n")

        result = quiz.status(data_dir=temp_dir, config_path=bad)

        assert not result.success
        assert result.error
