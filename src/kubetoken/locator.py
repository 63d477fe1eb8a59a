"""Kubeconfig location with fixed precedence.

Sources are tried in order and the first existing file wins:

    1. ``$KUBECONFIG`` (first entry only)
    2. ``<home>/.kube/config``

The in-cluster service-account token is *not* part of this chain; it is a
plain token file rather than a kubeconfig and is consulted by
:class:`~kubetoken.auth.provider.KubeConfigTokenProvider` only when
:func:`locate_config` finds nothing.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Optional, TypeVar

from kubetoken.models import CandidatePath, EnvironmentSnapshot
from kubetoken.paths import resolve_home_config_path, resolve_override_path

T = TypeVar("T")

Resolver = Callable[[EnvironmentSnapshot], Optional[CandidatePath]]

DEFAULT_RESOLVERS: tuple[Resolver, ...] = (
    resolve_override_path,
    resolve_home_config_path,
)


def first_match(
    resolvers: Iterable[Callable[[EnvironmentSnapshot], Optional[T]]],
    env: EnvironmentSnapshot,
) -> Optional[T]:
    """Call each resolver in turn and return the first non-``None`` result.

    Later resolvers are not called once one succeeds.
    """
    for resolver in resolvers:
        result = resolver(env)
        if result is not None:
            return result
    return None


def locate_config(
    env: EnvironmentSnapshot,
    resolvers: Iterable[Resolver] = DEFAULT_RESOLVERS,
) -> Optional[CandidatePath]:
    """Return the highest-precedence existing kubeconfig, or ``None``.

    Args:
        env: The environment snapshot to resolve against.
        resolvers: The precedence chain.  Defaults to :data:`DEFAULT_RESOLVERS`.
    """
    return first_match(resolvers, env)
