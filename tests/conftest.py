"""Shared test fixtures for kubetoken.

Provides builders for synthetic environment snapshots and kubeconfig files
so that tests never read the real ``$HOME``, ``$KUBECONFIG`` or the
in-cluster service-account mount.
"""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Optional

import pytest

from kubetoken.models import EnvironmentSnapshot, OSFamily


def _kubeconfig_yaml(
    token: Optional[str] = "xyz",
    user: str = "alice",
    context: str = "dev",
    current_context: Optional[str] = "dev",
) -> str:
    """Return a minimal kubeconfig with one cluster, context and user."""
    token_line = f'    token: "{token}"' if token is not None else "    client-certificate-data: Q0VSVA=="
    current = f"current-context: {current_context}\n" if current_context else ""
    return textwrap.dedent(
        f"""\
        apiVersion: v1
        kind: Config
        clusters:
        - name: local
          cluster:
            server: https://127.0.0.1:6443
        contexts:
        - name: {context}
          context:
            cluster: local
            user: {user}
        users:
        - name: {user}
          user:
        """
    ) + token_line + "\n" + current


@pytest.fixture
def make_kubeconfig() -> Callable[..., str]:
    """Factory for kubeconfig YAML text, see :func:`_kubeconfig_yaml`."""
    return _kubeconfig_yaml


# ---------------------------------------------------------------------------
# Environment fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_env() -> Callable[..., EnvironmentSnapshot]:
    """Factory for EnvironmentSnapshot instances.

    Keyword arguments become environment variables; ``os_family`` selects
    the home-directory strategy.
    """

    def _make(os_family: OSFamily = OSFamily.POSIX, **variables: str) -> EnvironmentSnapshot:
        return EnvironmentSnapshot(variables=variables, os_family=os_family)

    return _make


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """An empty home directory under tmp_path."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def write_kubeconfig() -> Callable[[Path, str], Path]:
    """Write kubeconfig content to a path, creating parent directories."""

    def _write(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def home_kubeconfig(home_dir: Path, write_kubeconfig: Callable[[Path, str], Path]) -> Path:
    """A ``<home>/.kube/config`` holding a token for user ``home-user``."""
    return write_kubeconfig(
        home_dir / ".kube" / "config", _kubeconfig_yaml(token="home-token", user="home-user")
    )


@pytest.fixture
def missing_token_path(tmp_path: Path) -> Path:
    """A service-account token path that does not exist."""
    return tmp_path / "serviceaccount" / "token"


@pytest.fixture
def sa_token_path(tmp_path: Path) -> Path:
    """A service-account token file containing ``abc123``."""
    path = tmp_path / "serviceaccount" / "token"
    path.parent.mkdir(parents=True)
    path.write_text("abc123", encoding="utf-8")
    return path


@pytest.fixture
def isolated_environ(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the real process environment at an empty temporary home.

    Clears ``KUBECONFIG`` and the Windows home variables and sets ``HOME`` to
    an empty directory, for tests that resolve without an explicit snapshot.
    """
    home = tmp_path / "isolated-home"
    home.mkdir()
    for var in ["KUBECONFIG", "HOMEDRIVE", "HOMEPATH", "USERPROFILE"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(home))
    return home
