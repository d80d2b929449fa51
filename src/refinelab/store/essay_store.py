"""SQLite-backed essay storage."""

from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path

from refinelab.models.essay import Essay, TrendPoint
from refinelab.models.feedback import RUBRIC_METRICS, EssayAnalysis, EssayComparison
from refinelab.models.grading import GradingPattern

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".refinelab" / "essays.db"

_ESSAY_COLUMNS = "id, title, content, assignment_name, created_at, updated_at, analysis_json"


class EssayStore:
    """Essays, their AI analyses and version comparisons in one SQLite file."""

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        metric_columns = ",\n".join(f"{m} REAL" for m in RUBRIC_METRICS)
        with self._connect() as conn:
            conn.execute(f"""
                CREATE TABLE IF NOT EXISTS essays (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    content TEXT NOT NULL,
                    assignment_name TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    analysis_json TEXT,
                    {metric_columns}
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS comparisons (
                    id TEXT PRIMARY KEY,
                    before_essay_id TEXT NOT NULL,
                    after_essay_id TEXT NOT NULL,
                    comparison_json TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS grading_patterns (
                    id TEXT PRIMARY KEY,
                    assignment_name TEXT NOT NULL,
                    grade TEXT NOT NULL,
                    rubric_json TEXT,
                    penalty_areas_json TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

    # --- essays ---

    def create(self, title: str, content: str, assignment_name: str | None = None) -> Essay:
        """Insert a new essay. Title and content are required."""
        if not title or not title.strip() or not content or not content.strip():
            raise ValueError("Title and content are required")
        essay = Essay(title=title.strip(), content=content, assignment_name=assignment_name)
        with self._connect() as conn:
            conn.execute(
                """INSERT INTO essays
                   (id, title, content, assignment_name, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    essay.id,
                    essay.title,
                    essay.content,
                    essay.assignment_name,
                    essay.created_at.isoformat(),
                    essay.updated_at.isoformat(),
                ),
            )
        logger.info("Created essay %s (%d words)", essay.id, essay.word_count)
        return essay

    def get(self, essay_id: str) -> Essay | None:
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {_ESSAY_COLUMNS} FROM essays WHERE id = ?", (essay_id,)
            ).fetchone()
        return self._row_to_essay(row) if row else None

    def list_essays(self, limit: int = 50) -> list[Essay]:
        """Most recently created first."""
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {_ESSAY_COLUMNS} FROM essays ORDER BY created_at DESC, rowid DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [self._row_to_essay(row) for row in rows]

    def update(self, essay_id: str, title: str | None = None, content: str | None = None) -> bool:
        """Update title and/or content. Returns False if the essay does not exist."""
        fields: dict[str, str] = {}
        if title is not None:
            fields["title"] = title
        if content is not None:
            fields["content"] = content
        fields["updated_at"] = datetime.now().isoformat()

        assignments = ", ".join(f"{name} = ?" for name in fields)
        with self._connect() as conn:
            cursor = conn.execute(
                f"UPDATE essays SET {assignments} WHERE id = ?",
                (*fields.values(), essay_id),
            )
        return cursor.rowcount > 0

    def delete(self, essay_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM essays WHERE id = ?", (essay_id,))
            conn.execute(
                "DELETE FROM comparisons WHERE before_essay_id = ? OR after_essay_id = ?",
                (essay_id, essay_id),
            )
        return cursor.rowcount > 0

    def save_analysis(self, essay_id: str, analysis: EssayAnalysis) -> bool:
        """Attach an AI analysis; rubric metrics are also kept in their own columns."""
        metrics = analysis.metrics.model_dump()
        assignments = ", ".join(f"{m} = ?" for m in RUBRIC_METRICS)
        with self._connect() as conn:
            cursor = conn.execute(
                f"UPDATE essays SET analysis_json = ?, {assignments} WHERE id = ?",
                (
                    analysis.model_dump_json(),
                    *(metrics[m] for m in RUBRIC_METRICS),
                    essay_id,
                ),
            )
        return cursor.rowcount > 0

    def metric_trend(self, limit: int = 50) -> list[TrendPoint]:
        """Analysed essays oldest first, for tracking metrics across drafts."""
        with self._connect() as conn:
            rows = conn.execute(
                f"""SELECT id, title, created_at, {", ".join(RUBRIC_METRICS)}
                    FROM essays WHERE analysis_json IS NOT NULL
                    ORDER BY created_at DESC, rowid DESC LIMIT ?""",
                (limit,),
            ).fetchall()
        points = [
            TrendPoint(
                essay_id=row[0],
                title=row[1],
                created_at=datetime.fromisoformat(row[2]),
                metrics=dict(zip(RUBRIC_METRICS, row[3:])),
            )
            for row in rows
        ]
        points.reverse()
        return points

    # --- comparisons ---

    def save_comparison(self, comparison: EssayComparison) -> EssayComparison:
        if not comparison.before_essay_id or not comparison.after_essay_id:
            raise ValueError("Both essay IDs are required")
        saved = comparison.model_copy(update={"id": comparison.id or str(uuid.uuid4())})
        with self._connect() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO comparisons
                   (id, before_essay_id, after_essay_id, comparison_json, created_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (
                    saved.id,
                    saved.before_essay_id,
                    saved.after_essay_id,
                    saved.model_dump_json(),
                    datetime.now().isoformat(),
                ),
            )
        return saved

    def list_comparisons(self, essay_id: str | None = None) -> list[EssayComparison]:
        with self._connect() as conn:
            if essay_id is not None:
                rows = conn.execute(
                    """SELECT comparison_json FROM comparisons
                       WHERE before_essay_id = ? OR after_essay_id = ?
                       ORDER BY created_at DESC""",
                    (essay_id, essay_id),
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT comparison_json FROM comparisons ORDER BY created_at DESC"
                ).fetchall()
        return [EssayComparison.model_validate_json(row[0]) for row in rows]

    # --- grading patterns ---

    def add_grading_pattern(
        self,
        assignment_name: str,
        grade: str,
        rubric_data: dict | None = None,
        penalty_areas: list[str] | None = None,
    ) -> GradingPattern:
        """Record a grade received for a past assignment."""
        if not assignment_name or not assignment_name.strip() or not grade or not grade.strip():
            raise ValueError("Assignment name and grade are required")
        pattern = GradingPattern(
            assignment_name=assignment_name.strip(),
            grade=grade.strip(),
            rubric_data=rubric_data,
            penalty_areas=penalty_areas or [],
        )
        with self._connect() as conn:
            conn.execute(
                """INSERT INTO grading_patterns
                   (id, assignment_name, grade, rubric_json, penalty_areas_json, created_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    pattern.id,
                    pattern.assignment_name,
                    pattern.grade,
                    json.dumps(pattern.rubric_data) if pattern.rubric_data is not None else None,
                    json.dumps(pattern.penalty_areas),
                    pattern.created_at.isoformat(),
                ),
            )
        logger.info("Recorded grade %s for %s", pattern.grade, pattern.assignment_name)
        return pattern

    def list_grading_patterns(self, limit: int = 50) -> list[GradingPattern]:
        """Most recently recorded first."""
        with self._connect() as conn:
            rows = conn.execute(
                """SELECT id, assignment_name, grade, rubric_json, penalty_areas_json, created_at
                   FROM grading_patterns ORDER BY created_at DESC, rowid DESC LIMIT ?""",
                (limit,),
            ).fetchall()
        return [
            GradingPattern(
                id=row[0],
                assignment_name=row[1],
                grade=row[2],
                rubric_data=json.loads(row[3]) if row[3] else None,
                penalty_areas=json.loads(row[4]),
                created_at=datetime.fromisoformat(row[5]),
            )
            for row in rows
        ]

    def delete_grading_pattern(self, pattern_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM grading_patterns WHERE id = ?", (pattern_id,))
        return cursor.rowcount > 0

    def stats(self) -> dict:
        with self._connect() as conn:
            total = conn.execute("SELECT COUNT(*) FROM essays").fetchone()[0]
            analysed = conn.execute(
                "SELECT COUNT(*) FROM essays WHERE analysis_json IS NOT NULL"
            ).fetchone()[0]
            comparisons = conn.execute("SELECT COUNT(*) FROM comparisons").fetchone()[0]
            patterns = conn.execute("SELECT COUNT(*) FROM grading_patterns").fetchone()[0]
        return {
            "total": total,
            "analysed": analysed,
            "comparisons": comparisons,
            "grading_patterns": patterns,
        }

    @staticmethod
    def _row_to_essay(row: tuple) -> Essay:
        return Essay(
            id=row[0],
            title=row[1],
            content=row[2],
            assignment_name=row[3],
            created_at=datetime.fromisoformat(row[4]),
            updated_at=datetime.fromisoformat(row[5]),
            analysis=EssayAnalysis.model_validate_json(row[6]) if row[6] else None,
        )
