"""kubetoken -- Resolve API bearer tokens from kubeconfig files.

This package finds the credential a client should present to an API that
sits behind Kubernetes authentication.  It looks, in order, at:

1. the kubeconfig named by ``$KUBECONFIG`` (first entry only),
2. ``~/.kube/config``,
3. the in-cluster service-account token mount.

Typical usage::

    from kubetoken import KubeConfigTokenProvider

    token = KubeConfigTokenProvider().get_token()

Modules:
    auth: Token providers and the httpx adapter.
    models: Pydantic models shared across the package.
    config: Environment variable names, well-known paths, snapshots.
    paths: Candidate path computation.
    locator: Kubeconfig precedence chain.
    parser: Kubeconfig loading and token extraction.
    exceptions: Exception hierarchy.
"""

from kubetoken.auth import KubeConfigTokenProvider, KubeTokenAuth, TokenProvider
from kubetoken.models import ResolvedToken, TokenKind

__version__ = "0.1.0"

__all__ = [
    "KubeConfigTokenProvider",
    "KubeTokenAuth",
    "ResolvedToken",
    "TokenKind",
    "TokenProvider",
]
