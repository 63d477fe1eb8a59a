"""Token providers for API clients.

The main entry points are:

- :class:`TokenProvider` -- abstract base class for credential sources.
- :class:`KubeConfigTokenProvider` -- resolves a token from a kubeconfig or
  the in-cluster service-account mount.
- :class:`KubeTokenAuth` -- :class:`httpx.Auth` adapter around the provider.

Typical usage::

    from kubetoken.auth import KubeConfigTokenProvider

    provider = KubeConfigTokenProvider()
    token = provider.get_token()   # "Bearer ...", a raw token, or None
"""

from kubetoken.auth.base import AuthResult, TokenProvider
from kubetoken.auth.httpx_auth import KubeTokenAuth
from kubetoken.auth.provider import KubeConfigTokenProvider

__all__ = [
    "AuthResult",
    "KubeConfigTokenProvider",
    "KubeTokenAuth",
    "TokenProvider",
]
