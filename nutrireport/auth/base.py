from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str


class BaseAuthProvider(ABC):
    """Contract for resolving the identity behind an upload."""

    @abstractmethod
    def get_current_user(self) -> AuthenticatedUser:
        """Return the authenticated user.

        Raises:
            AuthError: if no user can be resolved.
        """
