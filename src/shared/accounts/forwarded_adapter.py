"""Identity provider backed by headers set by the upstream auth gateway.

The gateway authenticates the session and forwards the resolved user as
``X-Customer-Id``, ``X-Customer-Email``, ``X-Customer-First-Name`` and
``X-Customer-Last-Name``. The web app binds those headers for the duration of
each request.
"""

from collections.abc import Mapping
from contextvars import ContextVar, Token

from shared.accounts.port import CurrentUser, IdentityProvider

_forwarded_user: ContextVar[CurrentUser | None] = ContextVar("forwarded_user", default=None)

HEADER_PREFIX = "x-customer-"


class ForwardedIdentityProvider(IdentityProvider):
    """Reads the current user from gateway-forwarded request headers."""

    def bind(self, headers: Mapping[str, str]) -> Token:
        customer_id = headers.get(f"{HEADER_PREFIX}id")
        user = None
        if customer_id:
            user = CurrentUser(
                id=customer_id,
                email=headers.get(f"{HEADER_PREFIX}email"),
                first_name=headers.get(f"{HEADER_PREFIX}first-name"),
                last_name=headers.get(f"{HEADER_PREFIX}last-name"),
            )
        return _forwarded_user.set(user)

    def release(self, token: Token) -> None:
        _forwarded_user.reset(token)

    def current_user(self) -> CurrentUser | None:
        return _forwarded_user.get()
