"""Cache-backed install of the release asset."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Protocol, Sequence

from setup_phpstan_core.config import ActionConfig
from setup_phpstan_core.errors import CacheRestoreFailed, CacheSaveFailed, DownloadFailed, SetupError
from setup_phpstan_core.logging_setup import get_logger
from setup_phpstan_github.models import Asset, AssetSelector, ReleaseSelector


class ContentCache(Protocol):
    def restore_cache(self, paths: Sequence[str], key: str) -> str | None: ...

    def save_cache(self, paths: Sequence[str], key: str) -> None: ...


# (owner, repo, destination, release selector, asset selector) -> written paths
DownloadFn = Callable[[str, str, Path, ReleaseSelector, AssetSelector], object]


def install(
    config: ActionConfig,
    release_id: int,
    asset: Asset,
    install_dir: Path,
    key: str,
    cache: ContentCache,
    download: DownloadFn,
) -> Path:
    """Restore ``install_dir`` from the cache, or download the asset and cache it.

    Returns ``install_dir``; the caller appends the asset name.
    """
    logger = get_logger()
    paths = [str(install_dir)]

    try:
        hit_key = cache.restore_cache(paths, key)
    except CacheRestoreFailed as exc:
        logger.warning(f"Cache restore failed, downloading instead: {exc.message}")
        hit_key = None

    if hit_key is not None:
        logger.info(
            f"Using cached {config.asset_name}, restored to {install_dir}",
            extra={"event": "cache_hit"},
        )
        return install_dir

    logger.info(f"No cached {config.asset_name} for key {key}", extra={"event": "cache_miss"})
    try:
        download(
            config.repo_owner,
            config.repo_name,
            install_dir,
            ReleaseSelector(release_id),
            AssetSelector(asset.id),
        )
    except DownloadFailed:
        raise
    except (SetupError, OSError) as exc:
        raise DownloadFailed(f"Could not download {config.asset_name}: {exc}") from exc

    logger.info(f"Downloaded {config.asset_name} to {install_dir}", extra={"event": "downloaded"})

    try:
        cache.save_cache(paths, key)
    except CacheSaveFailed as exc:
        logger.warning(f"Failed to save {config.asset_name} to the cache: {exc.message}")
    else:
        logger.debug(f"cache saved under {key}", extra={"event": "cache_saved"})

    return install_dir
