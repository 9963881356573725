# src/semquiz/stores/sqlite_question.py
"""SQLite question repository implementation."""

import json
import sqlite3
from pathlib import Path

from semquiz.models import Question
from semquiz.stores.base import QuestionRepository


class SQLiteQuestionRepository(QuestionRepository):
    """SQLite-based question repository.

    Reference embeddings live in their own table, one row per
    (question, model) pair, stored as JSON arrays.
    """

    def __init__(self, db_path: str) -> None:
        """Initialize the SQLite store."""
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _init_db(self) -> None:
        """Create tables if they don't exist."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS questions (
                    id INTEGER PRIMARY KEY,
                    topic TEXT NOT NULL,
                    text TEXT NOT NULL,
                    answer TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS question_embeddings (
                    question_id INTEGER NOT NULL
                        REFERENCES questions(id) ON DELETE CASCADE,
                    model TEXT NOT NULL,
                    embedding TEXT NOT NULL,
                    PRIMARY KEY (question_id, model)
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_topic ON questions(topic)")
            conn.commit()

    def _embeddings_for(
        self, conn: sqlite3.Connection, question_ids: list[int]
    ) -> dict[int, dict[str, list[float]]]:
        if not question_ids:
            return {}
        placeholders = ",".join("?" * len(question_ids))
        cursor = conn.execute(
            "SELECT question_id, model, embedding FROM question_embeddings "
            f"WHERE question_id IN ({placeholders})",
            question_ids,
        )
        result: dict[int, dict[str, list[float]]] = {}
        for question_id, model, embedding in cursor.fetchall():
            result.setdefault(question_id, {})[model] = json.loads(embedding)
        return result

    def _build(
        self, rows: list[tuple], embeddings: dict[int, dict[str, list[float]]]
    ) -> list[Question]:
        return [
            Question(
                id=row[0],
                topic=row[1],
                text=row[2],
                answer=row[3],
                embeddings=embeddings.get(row[0], {}),
            )
            for row in rows
        ]

    def get(self, question_id: int) -> Question | None:
        """Retrieve a question by ID."""
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT id, topic, text, answer FROM questions WHERE id = ?",
                (question_id,),
            )
            row = cursor.fetchone()
            if row is None:
                return None
            return self._build([row], self._embeddings_for(conn, [row[0]]))[0]

    def find_by_topic(self, topic: str) -> list[Question]:
        """Return all questions for a topic, ordered by ID."""
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT id, topic, text, answer FROM questions WHERE topic = ? ORDER BY id",
                (topic,),
            )
            rows = cursor.fetchall()
            return self._build(rows, self._embeddings_for(conn, [r[0] for r in rows]))

    def put(self, question: Question) -> None:
        """Store a question, overwriting if exists."""
        self.put_many([question])

    def put_many(self, questions: list[Question]) -> None:
        """Store multiple questions and their embeddings in one transaction."""
        if not questions:
            return
        with self._connect() as conn:
            conn.executemany(
                """
                INSERT INTO questions (id, topic, text, answer) VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    topic = excluded.topic, text = excluded.text, answer = excluded.answer
                """,
                [(q.id, q.topic, q.text, q.answer) for q in questions],
            )
            conn.executemany(
                """
                INSERT OR REPLACE INTO question_embeddings (question_id, model, embedding)
                VALUES (?, ?, ?)
                """,
                [
                    (q.id, model, json.dumps(vector))
                    for q in questions
                    for model, vector in q.embeddings.items()
                    if vector
                ],
            )
            conn.commit()

    def set_embedding(self, question_id: int, model: str, embedding: list[float]) -> None:
        """Store one reference embedding, replacing any previous vector.

        Raises:
            KeyError: If the question does not exist.
            ValueError: If the vector length does not match the model's dimension.
        """
        question = self.get(question_id)
        if question is None:
            raise KeyError(f"Question {question_id} not found")
        # Raises ValidationError on a dimension mismatch
        Question.model_validate(
            {**question.model_dump(), "embeddings": {**question.embeddings, model: list(embedding)}}
        )

        with self._connect() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO question_embeddings (question_id, model, embedding)
                VALUES (?, ?, ?)
                """,
                (question_id, model, json.dumps(embedding)),
            )
            conn.commit()

    def list_topics(self) -> list[str]:
        """List all topics in alphabetical order."""
        with self._connect() as conn:
            cursor = conn.execute("SELECT DISTINCT topic FROM questions ORDER BY topic")
            return [row[0] for row in cursor.fetchall()]

    def count_questions(self, topic: str | None = None) -> int:
        """Count questions, optionally for one topic."""
        with self._connect() as conn:
            if topic is None:
                cursor = conn.execute("SELECT COUNT(id) FROM questions")
            else:
                cursor = conn.execute("SELECT COUNT(id) FROM questions WHERE topic = ?", (topic,))
            count = cursor.fetchone()
            return count[0] if count else 0
