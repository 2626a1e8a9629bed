"""Tests for default path resolution and directory creation."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath, PureWindowsPath
from types import SimpleNamespace

import pytest

from burncloud_db.errors import DirectoryCreationError, PathResolutionError
from burncloud_db.paths import (
    DATABASE_FILENAME,
    SystemEnvironment,
    default_database_path,
    ensure_parent_dir,
)


class TestDefaultDatabasePath:
    def test_posix_layout(self, make_env):
        env = make_env(os_name="posix", home=Path("/home/alice"))
        path = default_database_path(env)
        assert path == PurePosixPath("/home/alice/.burncloud/data.db")

    def test_windows_layout(self, make_env):
        env = make_env(os_name="nt", variables={"USERPROFILE": r"C:\Users\alice"})
        path = default_database_path(env)
        assert PureWindowsPath(path) == PureWindowsPath(
            r"C:\Users\alice\AppData\Local\BurnCloud\data.db"
        )

    @pytest.mark.parametrize(
        "env_kwargs",
        [
            {"os_name": "posix", "home": Path("/root")},
            {"os_name": "nt", "variables": {"USERPROFILE": r"D:\profiles\bob"}},
        ],
        ids=["posix", "windows"],
    )
    def test_absolute_and_ends_with_filename(self, make_env, env_kwargs):
        path = default_database_path(make_env(**env_kwargs))
        assert path.name == DATABASE_FILENAME
        assert path.is_absolute()

    def test_missing_userprofile(self, make_env):
        env = make_env(os_name="nt", variables={})
        with pytest.raises(PathResolutionError) as exc_info:
            default_database_path(env)
        assert "USERPROFILE" in str(exc_info.value)

    def test_empty_userprofile(self, make_env):
        env = make_env(os_name="nt", variables={"USERPROFILE": ""})
        with pytest.raises(PathResolutionError):
            default_database_path(env)

    def test_missing_home(self, make_env):
        env = make_env(os_name="posix", home=None)
        with pytest.raises(PathResolutionError) as exc_info:
            default_database_path(env)
        assert "Home directory not found" in str(exc_info.value)

    def test_no_filesystem_side_effects(self, posix_env):
        default_database_path(posix_env)
        assert not posix_env.home.exists()

    def test_recomputed_on_each_call(self, make_env):
        env = make_env(os_name="posix", home=Path("/home/a"))
        first = default_database_path(env)
        env.home = Path("/home/b")
        second = default_database_path(env)
        assert first != second
        assert second.parent == PurePosixPath("/home/b/.burncloud")

    def test_system_environment(self):
        env = SystemEnvironment()
        assert env.os_name == os.name
        assert env.get("BURNCLOUD_SURELY_UNSET_VARIABLE") is None


class TestEnsureParentDir:
    def test_creates_missing_ancestors(self, tmp_path):
        target = tmp_path / "a" / "b" / "c" / "data.db"
        parent = ensure_parent_dir(target)
        assert parent == target.parent
        assert parent.is_dir()
        assert not target.exists()

    def test_idempotent(self, tmp_path):
        target = tmp_path / "x" / "data.db"
        ensure_parent_dir(target)
        ensure_parent_dir(target)
        assert target.parent.is_dir()

    def test_failure_wraps_os_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(DirectoryCreationError) as exc_info:
            ensure_parent_dir(blocker / "sub" / "data.db")
        assert isinstance(exc_info.value.cause, OSError)
        assert str(exc_info.value).startswith("Failed to create database directory:")


@pytest.mark.skipif(os.name == "nt", reason="HOME lookup is POSIX only")
class TestSystemEnvironmentHome:
    def test_home_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert SystemEnvironment().home_dir() == tmp_path
        assert default_database_path() == tmp_path / ".burncloud" / DATABASE_FILENAME

    def test_empty_home_falls_back_to_passwd(self, monkeypatch, tmp_path):
        import pwd

        monkeypatch.setenv("HOME", "")
        monkeypatch.setattr(
            pwd, "getpwuid", lambda uid: SimpleNamespace(pw_dir=str(tmp_path))
        )
        path = default_database_path(SystemEnvironment())
        assert path == tmp_path / ".burncloud" / DATABASE_FILENAME

    def test_empty_home_without_passwd_entry(self, monkeypatch):
        import pwd

        def missing(uid):
            raise KeyError(uid)

        monkeypatch.setenv("HOME", "")
        monkeypatch.setattr(pwd, "getpwuid", missing)
        assert SystemEnvironment().home_dir() is None
        with pytest.raises(PathResolutionError):
            default_database_path(SystemEnvironment())

    def test_unset_home_with_empty_passwd_dir(self, monkeypatch):
        import pwd

        monkeypatch.delenv("HOME", raising=False)
        monkeypatch.setattr(pwd, "getpwuid", lambda uid: SimpleNamespace(pw_dir=""))
        with pytest.raises(PathResolutionError):
            default_database_path(SystemEnvironment())
