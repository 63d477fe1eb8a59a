"""Tests for kubetoken.paths."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from kubetoken.models import ConfigSource, OSFamily
from kubetoken.paths import (
    PosixHomeStrategy,
    WindowsHomeStrategy,
    fallback_token_path,
    home_strategy_for,
    parse_kubeconfig_env,
    resolve_home_config_path,
    resolve_home_directory,
    resolve_override_path,
)


# ---------------------------------------------------------------------------
# parse_kubeconfig_env
# ---------------------------------------------------------------------------


class TestParseKubeconfigEnv:
    def test_unset_returns_none(self) -> None:
        assert parse_kubeconfig_env(None) is None

    def test_empty_returns_none(self) -> None:
        assert parse_kubeconfig_env("") is None

    def test_single_entry(self) -> None:
        assert parse_kubeconfig_env("/etc/kube/config") == "/etc/kube/config"

    def test_multiple_entries_uses_first(self, caplog: pytest.LogCaptureFixture) -> None:
        value = os.pathsep.join(["/a/config", "/b/config", "/c/config"])
        with caplog.at_level(logging.WARNING, logger="kubetoken.paths"):
            assert parse_kubeconfig_env(value) == "/a/config"
        assert "using first: /a/config" in caplog.text

    def test_custom_separator(self) -> None:
        assert parse_kubeconfig_env("C:\\a;C:\\b", separator=";") == "C:\\a"

    def test_single_entry_does_not_warn(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="kubetoken.paths"):
            parse_kubeconfig_env("/only/config")
        assert caplog.records == []


# ---------------------------------------------------------------------------
# resolve_override_path
# ---------------------------------------------------------------------------


class TestResolveOverridePath:
    def test_unset(self, make_env) -> None:
        assert resolve_override_path(make_env()) is None

    def test_existing_file(self, make_env, tmp_path: Path) -> None:
        config = tmp_path / "kc"
        config.write_text("{}")
        result = resolve_override_path(make_env(KUBECONFIG=str(config)))
        assert result is not None
        assert result.path == config
        assert result.source is ConfigSource.OVERRIDE

    def test_missing_file(self, make_env, tmp_path: Path) -> None:
        assert resolve_override_path(make_env(KUBECONFIG=str(tmp_path / "nope"))) is None

    def test_first_of_several_entries(self, make_env, tmp_path: Path) -> None:
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.write_text("{}")
        second.write_text("{}")
        env = make_env(KUBECONFIG=os.pathsep.join([str(first), str(second)]))
        result = resolve_override_path(env)
        assert result is not None
        assert result.path == first

    def test_missing_first_entry_ignores_later_entries(self, make_env, tmp_path: Path) -> None:
        second = tmp_path / "second"
        second.write_text("{}")
        env = make_env(KUBECONFIG=os.pathsep.join([str(tmp_path / "gone"), str(second)]))
        assert resolve_override_path(env) is None


# ---------------------------------------------------------------------------
# resolve_home_directory
# ---------------------------------------------------------------------------


class TestResolveHomeDirectory:
    def test_home_variable(self, make_env, home_dir: Path) -> None:
        assert resolve_home_directory(make_env(HOME=str(home_dir))) == home_dir

    def test_empty_home_on_posix(self, make_env) -> None:
        assert resolve_home_directory(make_env(HOME="")) is None

    def test_missing_home_dir_on_posix(self, make_env, tmp_path: Path) -> None:
        assert resolve_home_directory(make_env(HOME=str(tmp_path / "nope"))) is None

    def test_posix_ignores_windows_variables(self, make_env, tmp_path: Path) -> None:
        env = make_env(USERPROFILE=str(tmp_path))
        assert resolve_home_directory(env) is None

    def test_windows_homedrive_homepath(self, make_env, tmp_path: Path) -> None:
        profile = tmp_path / "Users" / "me"
        profile.mkdir(parents=True)
        env = make_env(
            os_family=OSFamily.WINDOWS,
            HOMEDRIVE=str(tmp_path),
            HOMEPATH=os.sep + os.path.join("Users", "me"),
        )
        assert resolve_home_directory(env) == profile

    def test_windows_homepath_without_leading_separator(self, make_env, tmp_path: Path) -> None:
        profile = tmp_path / "me"
        profile.mkdir()
        env = make_env(os_family=OSFamily.WINDOWS, HOMEDRIVE=str(tmp_path), HOMEPATH="me")
        assert resolve_home_directory(env) == profile

    def test_windows_userprofile_fallback(self, make_env, tmp_path: Path) -> None:
        profile = tmp_path / "profile"
        profile.mkdir()
        env = make_env(
            os_family=OSFamily.WINDOWS,
            HOMEDRIVE=str(tmp_path),
            HOMEPATH=os.sep + "missing",
            USERPROFILE=str(profile),
        )
        assert resolve_home_directory(env) == profile

    def test_windows_requires_both_drive_and_path(self, make_env, tmp_path: Path) -> None:
        env = make_env(os_family=OSFamily.WINDOWS, HOMEDRIVE=str(tmp_path))
        assert resolve_home_directory(env) is None

    def test_windows_home_variable_wins(self, make_env, home_dir: Path, tmp_path: Path) -> None:
        profile = tmp_path / "profile"
        profile.mkdir()
        env = make_env(
            os_family=OSFamily.WINDOWS, HOME=str(home_dir), USERPROFILE=str(profile)
        )
        assert resolve_home_directory(env) == home_dir

    def test_windows_nothing_resolves(self, make_env) -> None:
        assert resolve_home_directory(make_env(os_family=OSFamily.WINDOWS)) is None


class TestHomeStrategyFor:
    def test_posix(self) -> None:
        assert isinstance(home_strategy_for(OSFamily.POSIX), PosixHomeStrategy)

    def test_windows(self) -> None:
        assert isinstance(home_strategy_for(OSFamily.WINDOWS), WindowsHomeStrategy)


# ---------------------------------------------------------------------------
# resolve_home_config_path
# ---------------------------------------------------------------------------


class TestResolveHomeConfigPath:
    def test_existing_config(self, make_env, home_dir: Path, home_kubeconfig: Path) -> None:
        result = resolve_home_config_path(make_env(HOME=str(home_dir)))
        assert result is not None
        assert result.path == home_dir / ".kube" / "config"
        assert result.source is ConfigSource.HOME

    def test_home_without_kube_dir(self, make_env, home_dir: Path) -> None:
        assert resolve_home_config_path(make_env(HOME=str(home_dir))) is None

    def test_no_home(self, make_env) -> None:
        assert resolve_home_config_path(make_env()) is None

    def test_does_not_create_anything(self, make_env, home_dir: Path) -> None:
        resolve_home_config_path(make_env(HOME=str(home_dir)))
        assert list(home_dir.iterdir()) == []


def test_fallback_token_path_is_service_account_mount() -> None:
    assert fallback_token_path() == Path("/var/run/secrets/kubernetes.io/serviceaccount/token")
