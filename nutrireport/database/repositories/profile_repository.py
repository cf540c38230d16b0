import psycopg
from psycopg.rows import dict_row

from nutrireport.database.connection import get_connection
from nutrireport.database.models import UserProfile
from nutrireport.ingestion.exceptions import ProfileFetchError, ProfileWriteError


class ProfileRepository:
    """Database operations for the user_profiles table."""

    def find_by_user(self, user_id: str) -> UserProfile:
        """Fetch the profile row of a user.

        Raises:
            ProfileFetchError: if the row does not exist or the query fails.
        """
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        "SELECT auth_uid, notes FROM user_profiles WHERE auth_uid = %s",
                        (user_id,),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise ProfileFetchError(f"Failed to fetch user data: {exc}") from exc

        if row is None:
            raise ProfileFetchError(f"Failed to fetch user data: profile {user_id} not found")

        return UserProfile(user_id=row["auth_uid"], notes=list(row["notes"] or []))

    def update_notes(self, user_id: str, notes: list[str]) -> None:
        """Replace the notes of a user's profile.

        Raises:
            ProfileWriteError: if no row was updated or the query fails.
        """
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "UPDATE user_profiles SET notes = %s WHERE auth_uid = %s",
                        (notes, user_id),
                    )
                    updated = cur.rowcount
                conn.commit()
        except psycopg.Error as exc:
            raise ProfileWriteError(f"Failed to update notes: {exc}") from exc

        if updated == 0:
            raise ProfileWriteError(f"Failed to update notes: profile {user_id} not found")
