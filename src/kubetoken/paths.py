"""Candidate path computation for kubeconfig discovery.

Every function here takes an explicit
:class:`~kubetoken.models.EnvironmentSnapshot` and only queries the
filesystem for existence; nothing is created, modified or deleted.

Home-directory discovery differs per OS family and is expressed as a
:class:`HomeStrategy` chosen by :func:`home_strategy_for`, so that Windows
behaviour can be exercised on any host by passing a synthetic
:attr:`~kubetoken.models.OSFamily.WINDOWS` snapshot.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from kubetoken.config import (
    ENV_HOME,
    ENV_HOMEDRIVE,
    ENV_HOMEPATH,
    ENV_KUBECONFIG,
    ENV_USERPROFILE,
    KUBECONFIG,
    KUBEDIR,
    SERVICEACCOUNT_TOKEN_PATH,
)
from kubetoken.models import CandidatePath, ConfigSource, EnvironmentSnapshot, OSFamily

logger = logging.getLogger(__name__)


# --- Override variable ---


def parse_kubeconfig_env(value: Optional[str], separator: str = os.pathsep) -> Optional[str]:
    """Return the first entry of a ``KUBECONFIG`` value.

    Additional entries are discarded with a warning; kubeconfig merging is
    not supported.

    Args:
        value: The raw variable value, or ``None`` when unset.
        separator: Path-list separator.  Defaults to :data:`os.pathsep`.

    Returns:
        The first path entry, or ``None`` when *value* is unset or empty.
    """
    if not value:
        return None
    entries = value.split(separator)
    first = entries[0]
    if len(entries) > 1:
        logger.warning(
            "Found %d kubeconfig files in $%s, using first: %s",
            len(entries),
            ENV_KUBECONFIG,
            first,
        )
    return first or None


def resolve_override_path(env: EnvironmentSnapshot) -> Optional[CandidatePath]:
    """Return the file named by ``$KUBECONFIG`` if it exists."""
    first = parse_kubeconfig_env(env.get(ENV_KUBECONFIG))
    if first is None:
        return None
    path = Path(first)
    if not path.exists():
        logger.debug("Could not find file specified in $%s: %s", ENV_KUBECONFIG, path)
        return None
    return CandidatePath(path=path, source=ConfigSource.OVERRIDE)


# --- Home directory ---


def _existing_dir(value: Optional[str]) -> Optional[Path]:
    if not value:
        return None
    path = Path(value)
    return path if path.is_dir() else None


class HomeStrategy(ABC):
    """OS-specific home-directory fallback, consulted when ``$HOME`` is unusable."""

    @abstractmethod
    def find_home(self, env: EnvironmentSnapshot) -> Optional[Path]:
        ...


class PosixHomeStrategy(HomeStrategy):
    """POSIX systems have no fallback beyond ``$HOME``."""

    def find_home(self, env: EnvironmentSnapshot) -> Optional[Path]:
        return None


class WindowsHomeStrategy(HomeStrategy):
    """Try ``%HOMEDRIVE%%HOMEPATH%``, then ``%USERPROFILE%``."""

    def find_home(self, env: EnvironmentSnapshot) -> Optional[Path]:
        drive = env.get(ENV_HOMEDRIVE)
        home_path = env.get(ENV_HOMEPATH)
        if drive and home_path:
            candidate = _existing_dir(_join_drive(drive, home_path))
            if candidate is not None:
                return candidate
        return _existing_dir(env.get(ENV_USERPROFILE))


def _join_drive(drive: str, home_path: str) -> str:
    # "C:" + "\Users\me" -> "C:\Users\me"
    if drive.endswith(("/", "\\")) or home_path.startswith(("/", "\\")):
        return drive + home_path
    return drive + os.sep + home_path


_HOME_STRATEGIES: dict[OSFamily, HomeStrategy] = {
    OSFamily.POSIX: PosixHomeStrategy(),
    OSFamily.WINDOWS: WindowsHomeStrategy(),
}


def home_strategy_for(os_family: OSFamily) -> HomeStrategy:
    """Return the home-directory strategy registered for *os_family*."""
    return _HOME_STRATEGIES[os_family]


def resolve_home_directory(env: EnvironmentSnapshot) -> Optional[Path]:
    """Return the user's home directory, or ``None`` if none can be found.

    ``$HOME`` wins when it names an existing directory.  Otherwise the
    strategy for ``env.os_family`` is consulted.
    """
    home = _existing_dir(env.get(ENV_HOME))
    if home is not None:
        return home
    return home_strategy_for(env.os_family).find_home(env)


def resolve_home_config_path(env: EnvironmentSnapshot) -> Optional[CandidatePath]:
    """Return ``<home>/.kube/config`` if it exists."""
    home = resolve_home_directory(env)
    if home is not None:
        config = home / KUBEDIR / KUBECONFIG
        if config.exists():
            return CandidatePath(path=config, source=ConfigSource.HOME)
    logger.debug("Could not find ~/%s/%s", KUBEDIR, KUBECONFIG)
    return None


# --- Service-account mount ---


def fallback_token_path() -> Path:
    """Return the in-cluster service-account token path (existence not checked)."""
    return Path(SERVICEACCOUNT_TOKEN_PATH)
