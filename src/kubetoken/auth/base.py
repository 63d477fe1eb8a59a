"""Abstract base class for token providers.

This module defines the two foundational types of the auth subsystem:

- :class:`AuthResult` -- a plain container for the HTTP headers a provider
  contributes to an outgoing request.
- :class:`TokenProvider` -- the abstract base class every credential source
  extends.

To implement a new source, subclass :class:`TokenProvider` and implement
:meth:`~TokenProvider.get_token`.  Override :meth:`~TokenProvider.invalidate`
only if the source caches a session that can go stale.

See Also:
    :class:`~kubetoken.auth.provider.KubeConfigTokenProvider` for the
    kubeconfig/service-account implementation.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Optional


class AuthResult:
    """Container for authentication headers to inject into HTTP requests.

    Args:
        headers: HTTP headers to add (e.g. ``{"Authorization": "Bearer ..."}``).

    Example::

        result = AuthResult(headers={"Authorization": "Bearer tok123"})
        assert result.headers["Authorization"] == "Bearer tok123"
    """

    def __init__(self, headers: dict[str, str] | None = None):
        self.headers = headers or {}

    def __bool__(self) -> bool:
        return bool(self.headers)


class TokenProvider(ABC):
    """Abstract source of ``Authorization`` tokens for a connection.

    ``connection_context`` identifies the API connection a token is wanted
    for.  Providers that serve every connection with the same credential
    may ignore it.
    """

    @abstractmethod
    def get_token(self, connection_context: Any = None) -> Optional[str]:
        """Return a token for *connection_context*, or ``None`` if unavailable.

        Implementations must not raise for a missing or unusable credential;
        absence is reported as ``None``.
        """
        ...

    async def get_token_async(self, connection_context: Any = None) -> Optional[str]:
        """Deferred form of :meth:`get_token`, run in a worker thread."""
        return await asyncio.to_thread(self.get_token, connection_context)

    def invalidate(self, connection_context: Any = None) -> None:
        """Discard any cached credential for *connection_context*.

        The default implementation is a no-op for providers without a
        session.
        """
