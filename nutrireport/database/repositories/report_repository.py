import psycopg
from psycopg.rows import dict_row

from nutrireport.database.connection import get_connection
from nutrireport.database.models import ReportRecord
from nutrireport.ingestion.exceptions import PersistError
from nutrireport.ingestion.models import ExtractionResult


class ReportRepository:
    """Append-only operations for the reports table."""

    def insert(self, result: ExtractionResult) -> int:
        """Insert one report row and return its id.

        Re-running the pipeline for the same user adds another row.

        Raises:
            PersistError: if the insert fails.
        """
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO reports (auth_uid, extracted_text, artifact_path)
                        VALUES (%s, %s, %s)
                        RETURNING id
                        """,
                        (result.user_id, result.text, result.artifact.path),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as exc:
            raise PersistError(f"Insert failed: {exc}") from exc

        if row is None:
            raise PersistError("Insert failed: no id returned")
        return int(row[0])

    def find_by_user(self, user_id: str) -> list[ReportRecord]:
        """List a user's reports, oldest first.

        Raises:
            PersistError: if the reports table cannot be read.
        """
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        """
                        SELECT id, auth_uid, extracted_text, artifact_path, created_at
                        FROM reports
                        WHERE auth_uid = %s
                        ORDER BY id
                        """,
                        (user_id,),
                    )
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise PersistError(f"Report lookup failed: {exc}") from exc

        return [
            ReportRecord(
                id=row["id"],
                user_id=row["auth_uid"],
                extracted_text=row["extracted_text"],
                artifact_path=row["artifact_path"],
                created_at=row["created_at"],
            )
            for row in rows
        ]
