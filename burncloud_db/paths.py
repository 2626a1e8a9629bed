"""Default database location and parent-directory creation.

Resolution reads the host environment through an ``Environment`` provider so
tests can substitute a fake one instead of mutating ``os.environ``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePath, PurePosixPath, PureWindowsPath
from typing import Protocol

from burncloud_db.errors import DirectoryCreationError, PathResolutionError

logger = logging.getLogger(__name__)

APP_NAME = "BurnCloud"
DATABASE_FILENAME = "data.db"
WINDOWS_PROFILE_VAR = "USERPROFILE"


class Environment(Protocol):
    """Read-only view of the host environment used for path resolution."""

    @property
    def os_name(self) -> str: ...

    def get(self, name: str) -> str | None: ...

    def home_dir(self) -> Path | None: ...


class SystemEnvironment:
    """Environment backed by the running process."""

    @property
    def os_name(self) -> str:
        return os.name

    def get(self, name: str) -> str | None:
        return os.environ.get(name)

    def home_dir(self) -> Path | None:
        if self.os_name == "nt":
            try:
                return Path.home()
            except RuntimeError:
                return None

        # an empty HOME counts as unset
        home = os.environ.get("HOME")
        if home:
            return Path(home)
        import pwd

        try:
            pw_dir = pwd.getpwuid(os.getuid()).pw_dir
        except KeyError:
            return None
        return Path(pw_dir) if pw_dir else None


def _path_type(env: Environment) -> type[PurePath]:
    """Concrete ``Path`` for the host flavour, a pure path for a foreign one."""
    if env.os_name == os.name:
        return Path
    return PureWindowsPath if env.os_name == "nt" else PurePosixPath


def default_database_path(env: Environment | None = None) -> PurePath:
    """Compute the platform default location of the database file.

    Windows: ``%USERPROFILE%\\AppData\\Local\\BurnCloud\\data.db``.
    Elsewhere: ``~/.burncloud/data.db``.

    Nothing is created on disk and nothing is cached. When ``env`` reports the
    running platform the result is a ``Path``; a provider describing another
    platform gets the matching pure path back.

    Raises:
        PathResolutionError: the profile variable or home directory is missing.
    """
    env = env or SystemEnvironment()
    path_type = _path_type(env)

    if env.os_name == "nt":
        profile = env.get(WINDOWS_PROFILE_VAR)
        if not profile:
            raise PathResolutionError(f"{WINDOWS_PROFILE_VAR} environment variable not found")
        path = path_type(profile) / "AppData" / "Local" / APP_NAME / DATABASE_FILENAME
    else:
        home = env.home_dir()
        if home is None or not str(home):
            raise PathResolutionError("Home directory not found")
        path = path_type(home) / f".{APP_NAME.lower()}" / DATABASE_FILENAME

    if isinstance(path, Path):
        return path.absolute()
    return path


def ensure_parent_dir(path: str | os.PathLike[str]) -> Path:
    """Create the parent directory of ``path`` (and any missing ancestors).

    Existing directories are left alone. Returns the parent directory.
    """
    parent = Path(path).parent
    if parent.is_dir():
        return parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationError(f"{parent}: {exc}", exc) from exc
    logger.info("Created database directory %s", parent)
    return parent
