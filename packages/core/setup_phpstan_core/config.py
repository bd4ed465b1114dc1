"""Action constants, job inputs and derived values."""

from __future__ import annotations

import hashlib
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


ACTION_VERSION = "1"


@dataclass(frozen=True)
class ActionConfig:
    action_name: str = "Setup PHPStan"
    action_version: str = ACTION_VERSION
    repo_owner: str = "phpstan"
    repo_name: str = "phpstan"
    asset_name: str = "phpstan.phar"
    executable_name: str = "phpstan"
    archive_extension: str = ".phar"
    output_name: str = "phpstan"
    cache_namespace: str = "setup-phpstan"

    @property
    def out_prefix(self) -> str:
        return f"[{self.action_name}]"

    @property
    def repo_slug(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}"


DEFAULT_CONFIG = ActionConfig()


@dataclass(frozen=True)
class ActionInputs:
    version: str = "latest"
    install_path: Path = Path(tempfile.gettempdir()) / "setup-phpstan"
    path: str = ""
    github_token: str = ""

    @property
    def has_override(self) -> bool:
        return bool(self.path)


def get_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    key = "INPUT_" + name.replace(" ", "_").upper()
    return (env.get(key) or "").strip()


def normalize_install_path(raw: str | os.PathLike[str]) -> Path:
    return Path(os.path.normpath(os.path.abspath(os.path.expanduser(str(raw)))))


def default_install_path(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    base = env.get("RUNNER_TEMP") or tempfile.gettempdir()
    return normalize_install_path(Path(base) / "setup-phpstan")


def default_cache_root(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    override = (env.get("SETUP_PHPSTAN_CACHE_DIR") or "").strip()
    if override:
        return Path(override).expanduser()
    tool_cache = (env.get("RUNNER_TOOL_CACHE") or "").strip()
    if tool_cache:
        return Path(tool_cache) / "setup-phpstan"
    return Path.home() / ".cache" / "setup-phpstan"


def load_inputs(environ: Mapping[str, str] | None = None, **overrides: str | None) -> ActionInputs:
    """Read job inputs from the runner environment.

    Keyword overrides (from CLI flags) win over the environment when they are
    not None.
    """
    env = os.environ if environ is None else environ

    def _pick(name: str, key: str) -> str:
        value = overrides.get(key)
        if value is not None:
            return value.strip()
        return get_input(name, env)

    version = _pick("version", "version") or "latest"
    raw_install = _pick("install-path", "install_path")
    install_path = normalize_install_path(raw_install) if raw_install else default_install_path(env)
    override = _pick("path", "path")
    token = overrides.get("github_token")
    if token is None:
        token = env.get("GITHUB_TOKEN") or ""

    return ActionInputs(
        version=version,
        install_path=install_path,
        path=override,
        github_token=token.strip(),
    )


def cache_key(config: ActionConfig, tag: str, asset_id: int, install_path: str | os.PathLike[str]) -> str:
    # Separator substitution is lossy ("/a-b" vs "/a/b"); the path digest is not.
    raw_path = str(install_path)
    safe_path = raw_path.replace("/", "-").replace("\\", "-")
    digest = hashlib.sha256(raw_path.encode("utf-8")).hexdigest()[:12]
    return (
        f"{config.cache_namespace}-v{config.action_version}-{tag}-{asset_id}"
        f"-{safe_path}-{digest}-{config.asset_name}"
    )
