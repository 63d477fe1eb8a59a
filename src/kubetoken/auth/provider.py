"""Kubeconfig token provider -- the public entry point of kubetoken.

:class:`KubeConfigTokenProvider` resolves a token on every call by walking
the following decision tree:

1. Locate a kubeconfig (``$KUBECONFIG``, then ``~/.kube/config``).
2. If one is found, parse it.  A token from the current context's user is
   returned as ``"Bearer <token>"``.  A config without a token, or one that
   cannot be read or parsed, yields no token; the service-account mount is
   **not** consulted in that case.
3. If no kubeconfig exists, read the in-cluster service-account token and
   return its content unmodified (no ``Bearer`` prefix).
4. Otherwise there is no token.

Nothing is cached and nothing raises past :meth:`~KubeConfigTokenProvider.get_token`;
failures are logged and reported as an absent token.  Token values are
masked in every log record.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Optional

from kubetoken.auth.base import AuthResult, TokenProvider
from kubetoken.config import load_environment
from kubetoken.exceptions import KubetokenError, SourceUnavailableError
from kubetoken.locator import DEFAULT_RESOLVERS, Resolver, locate_config
from kubetoken.models import (
    CandidatePath,
    ConfigSource,
    EnvironmentSnapshot,
    ResolvedToken,
    normalize_token,
)
from kubetoken.parser import parse
from kubetoken.paths import fallback_token_path, resolve_home_directory
from kubetoken.redact import mask_token

logger = logging.getLogger(__name__)


class KubeConfigTokenProvider(TokenProvider):
    """Resolve a bearer token from a kubeconfig or the service-account mount.

    The provider holds no mutable state and is safe to share between
    threads and tasks.

    Args:
        context: Kubeconfig context to use instead of ``current-context``.
        token_path: Service-account token file.  Defaults to
            :func:`~kubetoken.paths.fallback_token_path`.
        resolvers: Kubeconfig precedence chain.  Defaults to
            :data:`~kubetoken.locator.DEFAULT_RESOLVERS`.

    Example::

        provider = KubeConfigTokenProvider()
        token = provider.get_token()
        if token is not None:
            headers["Authorization"] = token
    """

    def __init__(
        self,
        context: Optional[str] = None,
        token_path: Optional[Path] = None,
        resolvers: Iterable[Resolver] = DEFAULT_RESOLVERS,
    ) -> None:
        self._context = context
        self._token_path = token_path if token_path is not None else fallback_token_path()
        self._resolvers = tuple(resolvers)

    @property
    def token_path(self) -> Path:
        """The service-account token file consulted when no kubeconfig exists."""
        return self._token_path

    # ------------------------------------------------------------------
    # Public contract
    # ------------------------------------------------------------------

    def get_token(
        self,
        connection_context: Any = None,
        env: Optional[EnvironmentSnapshot] = None,
    ) -> Optional[str]:
        """Return ``"Bearer <token>"``, a raw service-account token, or ``None``.

        Args:
            connection_context: Ignored; every connection gets the same token.
            env: Environment to resolve against.  Defaults to a fresh
                snapshot of ``os.environ``.
        """
        return self.resolve(env).value

    async def get_token_async(
        self,
        connection_context: Any = None,
        env: Optional[EnvironmentSnapshot] = None,
    ) -> Optional[str]:
        resolved = await self.resolve_async(env)
        return resolved.value

    def invalidate(self, connection_context: Any = None) -> None:
        """No-op: every call re-reads from disk, so there is nothing to invalidate."""

    def authenticate(self, env: Optional[EnvironmentSnapshot] = None) -> AuthResult:
        """Return an ``Authorization`` header, or an empty result when absent."""
        header = self.resolve(env).as_header()
        if header is None:
            return AuthResult()
        return AuthResult(headers={"Authorization": header})

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, env: Optional[EnvironmentSnapshot] = None) -> ResolvedToken:
        """Run the full discovery and return a :class:`ResolvedToken`.

        Never raises: missing, unreadable or malformed sources and any
        unexpected failure are logged and reported as an absent token.
        """
        if env is None:
            env = load_environment()

        try:
            located = locate_config(env, self._resolvers)
            if located is not None:
                resolved = self._from_kubeconfig(located, env)
            else:
                resolved = self._from_service_account()
        except Exception as exc:
            logger.error("Token resolution failed: %s", exc)
            return ResolvedToken.absent(f"Token resolution failed: {exc}")

        if resolved.is_present:
            logger.debug("Resolved %s", resolved)
        return resolved

    async def resolve_async(self, env: Optional[EnvironmentSnapshot] = None) -> ResolvedToken:
        return await asyncio.to_thread(self.resolve, env)

    def _from_kubeconfig(self, located: CandidatePath, env: EnvironmentSnapshot) -> ResolvedToken:
        try:
            parsed = parse(
                located.path, context=self._context, home=resolve_home_directory(env)
            )
        except SourceUnavailableError as exc:
            logger.debug("%s", exc)
            return ResolvedToken.absent(str(exc), source=located.source)
        except KubetokenError as exc:
            logger.error("%s", exc)
            return ResolvedToken.absent(str(exc), source=located.source)

        if parsed.access_token is not None:
            logger.info(
                "Using token for user %r from %s: %s",
                parsed.user_name,
                located.path,
                mask_token(parsed.access_token),
            )
            return ResolvedToken.bearer(parsed.access_token, located.source)

        # Client-certificate and exec credentials would be returned here.
        logger.warning("No token found in kubeconfig %s", located.path)
        return ResolvedToken.absent(
            f"No token in kubeconfig {located.path}", source=located.source
        )

    def _from_service_account(self) -> ResolvedToken:
        path = self._token_path
        if not path.exists():
            return ResolvedToken.absent("No kubeconfig or service-account token found")

        try:
            content = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Cannot read service-account token %s: %s", path, exc)
            return ResolvedToken.absent(
                f"Cannot read service-account token {path}: {exc}",
                source=ConfigSource.SERVICE_ACCOUNT,
            )

        if normalize_token(content) is None:
            return ResolvedToken.absent(
                f"Service-account token {path} is empty",
                source=ConfigSource.SERVICE_ACCOUNT,
            )
        return ResolvedToken.raw(content)
