"""Extract bearer credentials from a decoded kubeconfig.

This module is the second stage of the parser pipeline.  It receives the raw
dict produced by :func:`~kubetoken.parser.loader.load_kubeconfig`, validates
it into a :class:`~kubetoken.models.KubeConfig`, follows
``current-context`` to its user entry, and pulls out the access token.

Token sources are tried in order and the first non-blank value wins:

1. ``user.token``
2. ``user.tokenFile`` (relative paths are resolved against the kubeconfig's
   directory; a leading ``~`` expands to the caller-supplied home directory,
   never the process environment)
3. ``user.auth-provider.config.access-token``, then ``id-token``

Auth-provider tokens are used as cached; nothing is refreshed.  Client
certificates and exec plugins are left on the returned
:attr:`~kubetoken.models.ParsedCredentialConfig.user` but never turned into
a token.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from kubetoken.exceptions import MalformedConfigError
from kubetoken.models import KubeConfig, ParsedCredentialConfig, User, normalize_token

logger = logging.getLogger(__name__)

_AUTH_PROVIDER_TOKEN_KEYS = ("access-token", "id-token")


def extract_credentials(
    data: dict[str, Any],
    path: Path,
    context: Optional[str] = None,
    home: Optional[Path] = None,
) -> ParsedCredentialConfig:
    """Build a :class:`ParsedCredentialConfig` from a decoded kubeconfig.

    A missing context, user entry or token is not an error: the result simply
    carries ``access_token=None``.

    Args:
        data: The decoded kubeconfig document.
        path: Location of the kubeconfig, used for ``tokenFile`` resolution
            and diagnostics.
        context: Context to use instead of ``current-context``.
        home: Home directory for ``~`` in ``tokenFile``.

    Returns:
        The credential view of the kubeconfig.

    Raises:
        MalformedConfigError: If *data* does not match the kubeconfig schema.
    """
    try:
        kubeconfig = KubeConfig.model_validate(data)
    except ValidationError as exc:
        raise MalformedConfigError(
            f"Kubeconfig {path} has an invalid structure: {exc}", path
        ) from exc

    context_name = context or kubeconfig.current_context
    user_name: Optional[str] = None
    user: Optional[User] = None

    if context_name:
        ctx = kubeconfig.find_context(context_name)
        if ctx is None:
            logger.debug("Context %r not found in %s", context_name, path)
        else:
            user_name = ctx.user
    if user_name:
        user = kubeconfig.find_user(user_name)
        if user is None:
            logger.debug("User %r not found in %s", user_name, path)

    token = extract_access_token(user, path.parent, home) if user is not None else None
    if token is None and user is not None and user.has_non_bearer_credential:
        logger.debug(
            "User %r in %s uses a non-bearer credential, which is not supported",
            user_name,
            path,
        )

    return ParsedCredentialConfig(
        path=path,
        current_context=context_name,
        user_name=user_name,
        user=user,
        access_token=token,
        raw=kubeconfig,
    )


def extract_access_token(
    user: User, base_dir: Path, home: Optional[Path] = None
) -> Optional[str]:
    """Return the first non-blank bearer token configured for *user*."""
    token = normalize_token(user.token)
    if token is not None:
        return token

    if user.token_file:
        token = _read_token_file(user.token_file, base_dir, home)
        if token is not None:
            return token

    if user.auth_provider is not None:
        for key in _AUTH_PROVIDER_TOKEN_KEYS:
            value = user.auth_provider.config.get(key)
            if isinstance(value, str):
                token = normalize_token(value)
                if token is not None:
                    return token
    return None


def _read_token_file(
    token_file: str, base_dir: Path, home: Optional[Path]
) -> Optional[str]:
    try:
        path = _expand_home(token_file, home)
        if not path.is_absolute():
            path = base_dir / path
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError, ValueError, RuntimeError) as exc:
        # ValueError: embedded NUL.  RuntimeError: unknown ``~user``.
        logger.error("Cannot read tokenFile %r: %s", token_file, exc)
        return None
    return normalize_token(content.strip())


def _expand_home(token_file: str, home: Optional[Path]) -> Path:
    """Expand a leading ``~`` or ``~/`` against *home*.

    ``~user`` forms are left to :meth:`pathlib.Path.expanduser`.
    """
    if token_file == "~" or token_file.startswith(("~/", "~" + os.sep)):
        if home is None:
            raise RuntimeError("Could not determine home directory.")
        return home / token_file[2:]
    return Path(token_file).expanduser()
