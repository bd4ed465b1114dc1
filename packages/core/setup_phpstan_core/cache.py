"""Key-addressed local content cache for installed file sets.

An entry is a directory ``<root>/<key>/`` holding ``manifest.json`` with the
saved paths and one copy of each path under ``files/<index>``.
"""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Sequence

from .errors import CacheKeyInvalid, CacheRestoreFailed, CacheSaveFailed
from .logging_setup import get_logger


MAX_KEY_LENGTH = 512
_MANIFEST = "manifest.json"


def validate_key(key: str) -> None:
    if not key:
        raise CacheKeyInvalid("Cache key must not be empty")
    if len(key) > MAX_KEY_LENGTH:
        raise CacheKeyInvalid(f"Key Validation Error: {key} cannot be larger than {MAX_KEY_LENGTH} characters.")
    if "," in key:
        raise CacheKeyInvalid(f"Key Validation Error: {key} cannot contain commas.")
    if "/" in key or "\\" in key or key in (".", ".."):
        raise CacheKeyInvalid(f"Key Validation Error: {key} cannot contain path separators.")


def _normalize_paths(paths: Sequence[str | os.PathLike[str]]) -> list[str]:
    if not paths:
        raise ValueError("Path Validation Error: At least one directory or file path is required")
    return [os.path.normpath(os.path.abspath(str(p))) for p in paths]


class LocalCache:
    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self.logger = get_logger()

    def entry_dir(self, key: str) -> Path:
        validate_key(key)
        return self.root / key

    def restore_cache(self, paths: Sequence[str | os.PathLike[str]], key: str) -> str | None:
        """Copy a cached file set back to ``paths``; return the hit key or None."""
        wanted = _normalize_paths(paths)
        entry = self.entry_dir(key)
        manifest = entry / _MANIFEST
        if not manifest.is_file():
            self.logger.debug(f"cache entry {key} not found under {self.root}")
            return None

        try:
            saved = json.loads(manifest.read_text(encoding="utf-8")).get("paths", [])
        except (OSError, ValueError) as exc:
            raise CacheRestoreFailed(f"Unreadable cache manifest for {key}: {exc}") from exc
        if saved != wanted:
            self.logger.debug(f"cache entry {key} was saved for different paths")
            return None

        try:
            for index, target in enumerate(wanted):
                source = entry / "files" / str(index)
                target_path = Path(target)
                if source.is_dir():
                    shutil.copytree(source, target_path, dirs_exist_ok=True)
                else:
                    target_path.parent.mkdir(parents=True, exist_ok=True)
                    shutil.copy2(source, target_path)
        except OSError as exc:
            raise CacheRestoreFailed(f"Could not restore cache entry {key}: {exc}") from exc

        return key

    def save_cache(self, paths: Sequence[str | os.PathLike[str]], key: str) -> None:
        sources = _normalize_paths(paths)
        entry = self.entry_dir(key)
        if entry.exists():
            raise CacheSaveFailed(f"Unable to reserve cache with key {key}, an entry already exists")

        for source in sources:
            if not os.path.exists(source):
                raise CacheSaveFailed(f"Path Validation Error: {source} does not exist")

        try:
            self.root.mkdir(parents=True, exist_ok=True)
            staging = Path(tempfile.mkdtemp(prefix=".staging-", dir=self.root))
        except OSError as exc:
            raise CacheSaveFailed(f"Could not prepare cache root {self.root}: {exc}") from exc

        try:
            files = staging / "files"
            files.mkdir()
            for index, source in enumerate(sources):
                if os.path.isdir(source):
                    shutil.copytree(source, files / str(index))
                else:
                    shutil.copy2(source, files / str(index))
            (staging / _MANIFEST).write_text(json.dumps({"key": key, "paths": sources}, indent=2), encoding="utf-8")
            os.replace(staging, entry)
        except OSError as exc:
            shutil.rmtree(staging, ignore_errors=True)
            raise CacheSaveFailed(f"Could not save cache entry {key}: {exc}") from exc
