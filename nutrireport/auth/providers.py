from supabase import Client

from nutrireport.auth.base import AuthenticatedUser, BaseAuthProvider
from nutrireport.ingestion.exceptions import AuthError

AUTH_ERROR_MESSAGE = "Authentication error. Please log in again."


class StaticAuthProvider(BaseAuthProvider):
    """Identity supplied up front by a trusted operator (CLI, batch imports)."""

    def __init__(self, user_id: str) -> None:
        self._user_id = user_id.strip()

    def get_current_user(self) -> AuthenticatedUser:
        if not self._user_id:
            raise AuthError(AUTH_ERROR_MESSAGE)
        return AuthenticatedUser(id=self._user_id)


class SupabaseAuthProvider(BaseAuthProvider):
    """Resolves the user owning a Supabase session access token."""

    def __init__(self, client: Client, access_token: str) -> None:
        self._client = client
        self._access_token = access_token

    def get_current_user(self) -> AuthenticatedUser:
        try:
            response = self._client.auth.get_user(self._access_token)
        except Exception as exc:
            raise AuthError(AUTH_ERROR_MESSAGE) from exc
        user = response.user if response is not None else None
        if user is None or not user.id:
            raise AuthError(AUTH_ERROR_MESSAGE)
        return AuthenticatedUser(id=str(user.id))
