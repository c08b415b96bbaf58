"""Identity provider port (abstract interface).

Authentication and session management are handled upstream. Both storefront
contexts only need the already-resolved current user: who is shopping or
reviewing, and the contact details that go on an order.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CurrentUser:
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class IdentityProvider(ABC):
    """Abstract identity provider interface."""

    @abstractmethod
    def current_user(self) -> CurrentUser | None:
        """Return the authenticated user, or None for anonymous requests."""
        ...
