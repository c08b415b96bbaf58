"""Static identity provider for development and testing.

Returns whichever user was last signed in with ``sign_in``.
"""

from shared.accounts.port import CurrentUser, IdentityProvider


class StaticIdentityProvider(IdentityProvider):
    """Identity provider that always returns a configured user."""

    def __init__(self, user: CurrentUser | None = None) -> None:
        self.user = user

    def sign_in(self, user_id: str, email: str, first_name: str, last_name: str) -> CurrentUser:
        self.user = CurrentUser(id=user_id, email=email, first_name=first_name, last_name=last_name)
        return self.user

    def sign_out(self) -> None:
        self.user = None

    def current_user(self) -> CurrentUser | None:
        return self.user
