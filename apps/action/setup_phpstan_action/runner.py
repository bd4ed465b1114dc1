"""Setup flow: resolve the release, adopt or install the executable, publish its path."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from setup_phpstan_core.config import ActionConfig, ActionInputs, cache_key
from setup_phpstan_core.errors import DirectoryCreateFailed
from setup_phpstan_core.logging_setup import get_logger
from setup_phpstan_github.resolver import ReleaseService, find_asset, find_version

from .installer import ContentCache, DownloadFn, install
from .override import OverrideAccepted, try_local_override


class Publisher(Protocol):
    def set_output(self, name: str, value: str) -> None: ...

    def add_path(self, directory: str) -> None: ...


def ensure_directory(path: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreateFailed(f"Could not create install directory {path}. {exc}") from exc
    return path


def run(
    config: ActionConfig,
    inputs: ActionInputs,
    *,
    service: ReleaseService,
    cache: ContentCache,
    download: DownloadFn,
    host: Publisher,
) -> Path:
    logger = get_logger()

    release = find_version(service, config, inputs.version)
    logger.info(
        f"Resolved {config.repo_slug} {release.tag_name} released @ {release.published_at}",
        extra={"event": "version_resolved"},
    )
    asset = find_asset(release, config.asset_name)

    install_dir = ensure_directory(inputs.install_path)

    outcome = try_local_override(config, inputs.path, install_dir)
    if isinstance(outcome, OverrideAccepted):
        executable = outcome.path
        logger.info(
            f"Using provided phpstan executable '{inputs.path}'",
            extra={"event": "override_accepted"},
        )
    else:
        if outcome.provided:
            logger.info(
                f"Provided executable could not be used ({outcome.error.message}), falling back to "
                f"target version {release.tag_name} released @ {release.published_at}",
                extra={"event": "override_rejected"},
            )
        else:
            logger.info(
                f"Using target version {release.tag_name} released @ {release.published_at}",
                extra={"event": "override_skipped"},
            )
        key = cache_key(config, release.tag_name, asset.id, install_dir)
        executable = install(config, release.id, asset, install_dir, key, cache, download) / config.asset_name

    host.set_output(config.output_name, str(executable))
    host.add_path(str(executable.parent))
    logger.info(f"{config.asset_name} available at {executable}", extra={"event": "published"})
    return executable
