"""httpx integration for kubeconfig tokens.

:class:`KubeTokenAuth` plugs a :class:`~kubetoken.auth.provider.KubeConfigTokenProvider`
into :class:`httpx.Client` and :class:`httpx.AsyncClient`::

    import httpx
    from kubetoken.auth import KubeTokenAuth

    with httpx.Client(auth=KubeTokenAuth()) as client:
        client.get("https://api.example.com/v2/info")

The token is resolved for every request.  Raw service-account tokens are
sent with a ``Bearer`` prefix.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Generator
from typing import Optional

import httpx

from kubetoken.auth.provider import KubeConfigTokenProvider
from kubetoken.models import EnvironmentSnapshot, ResolvedToken


class KubeTokenAuth(httpx.Auth):
    """httpx auth flow that sets ``Authorization`` from a kubeconfig token.

    A request that already carries an ``Authorization`` header is sent
    unchanged, and so is every request when no token is available.

    Args:
        provider: The token provider.  Defaults to a new
            :class:`KubeConfigTokenProvider`.
        env: Environment snapshot passed to the provider on every request.
            ``None`` snapshots ``os.environ`` each time.
    """

    def __init__(
        self,
        provider: Optional[KubeConfigTokenProvider] = None,
        env: Optional[EnvironmentSnapshot] = None,
    ) -> None:
        self._provider = provider or KubeConfigTokenProvider()
        self._env = env

    def sync_auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        if "Authorization" not in request.headers:
            self._apply(request, self._provider.resolve(self._env))
        yield request

    async def async_auth_flow(
        self, request: httpx.Request
    ) -> AsyncGenerator[httpx.Request, httpx.Response]:
        if "Authorization" not in request.headers:
            self._apply(request, await self._provider.resolve_async(self._env))
        yield request

    @staticmethod
    def _apply(request: httpx.Request, resolved: ResolvedToken) -> None:
        header = resolved.as_header()
        if header is not None:
            request.headers["Authorization"] = header
