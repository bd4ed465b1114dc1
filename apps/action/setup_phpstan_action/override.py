"""Adopt a caller-provided phpstan executable instead of downloading one."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from setup_phpstan_core.config import ActionConfig
from setup_phpstan_core.errors import CopyFailed, NotAnExecutable, NotExecutable, NotReadable, OverrideError


@dataclass(frozen=True)
class OverrideAccepted:
    path: Path


@dataclass(frozen=True)
class OverrideRejected:
    error: OverrideError | None = None

    @property
    def provided(self) -> bool:
        return self.error is not None


OverrideResult = Union[OverrideAccepted, OverrideRejected]


def looks_executable(config: ActionConfig, path: str) -> bool:
    # Only the final segment is inspected: "*.phar" or exactly "phpstan".
    name = os.path.basename(path.rstrip("/\\"))
    if not name:
        return False
    if name.endswith(config.archive_extension) and name != config.archive_extension:
        return True
    return name == config.executable_name


def copy_executable(config: ActionConfig, path: str, install_dir: Path) -> Path:
    if not looks_executable(config, path):
        raise NotAnExecutable(path)
    if not os.access(path, os.R_OK):
        raise NotReadable(path)
    if not os.access(path, os.X_OK):
        raise NotExecutable(path)

    destination = install_dir / config.asset_name
    staging = install_dir / f".{config.asset_name}.part"
    try:
        shutil.copy2(path, staging)
        os.replace(staging, destination)
    except OSError as exc:
        raise CopyFailed(path, str(destination), str(exc)) from exc
    finally:
        if staging.exists():
            staging.unlink()
    return destination


def try_local_override(config: ActionConfig, path: str, install_dir: Path) -> OverrideResult:
    if not path:
        return OverrideRejected()
    try:
        return OverrideAccepted(copy_executable(config, path, install_dir))
    except OverrideError as exc:
        return OverrideRejected(exc)
