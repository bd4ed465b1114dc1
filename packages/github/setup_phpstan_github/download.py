"""Download selected release assets into a directory."""

from __future__ import annotations

import os
import tempfile
import zipfile
from pathlib import Path
from typing import Iterator, Protocol

from setup_phpstan_core.errors import DownloadFailed, SetupError
from setup_phpstan_core.logging_setup import get_logger

from .models import ApiResponse, Asset, AssetSelector, Release, ReleaseSelector


_PER_PAGE = 100


class ReleaseDownloader(Protocol):
    def list_releases(self, owner: str, repo: str, page: int = 1, per_page: int = 100) -> ApiResponse: ...

    def download_asset(self, asset: Asset, destination: Path) -> Path: ...


def iter_releases(client: ReleaseDownloader, owner: str, repo: str) -> Iterator[Release]:
    page = 1
    while True:
        response = client.list_releases(owner, repo, page=page, per_page=_PER_PAGE)
        if response.status != 200:
            raise DownloadFailed(f"Could not list {owner}/{repo} releases (HTTP {response.status})")
        items = response.data or []
        for item in items:
            yield Release.from_payload(item)
        if len(items) < _PER_PAGE:
            return
        page += 1


def make_executable(path: Path) -> None:
    path.chmod(path.stat().st_mode | 0o111)


def _fetch(client: ReleaseDownloader, asset: Asset, destination: Path, leave_zipped: bool) -> list[Path]:
    target = destination / asset.name
    fd, tmp_name = tempfile.mkstemp(prefix=f".{asset.name}.", suffix=".part", dir=destination)
    os.close(fd)
    tmp_path = Path(tmp_name)
    try:
        client.download_asset(asset, tmp_path)
        os.replace(tmp_path, target)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()

    if leave_zipped or not asset.name.lower().endswith(".zip"):
        make_executable(target)
        return [target]

    with zipfile.ZipFile(target) as zf:
        names = zf.namelist()
        zf.extractall(destination)
    target.unlink()
    return [destination / name for name in names]


def download_release(
    client: ReleaseDownloader,
    owner: str,
    repo: str,
    destination: Path,
    release_selector: ReleaseSelector,
    asset_selector: AssetSelector,
    leave_zipped: bool = False,
) -> list[Path]:
    """Materialize the assets picked by the selectors under ``destination``.

    Only the first release matching ``release_selector`` is considered.
    Zip archives are unpacked unless ``leave_zipped`` is set.
    """
    logger = get_logger()
    destination = Path(destination)

    try:
        release = next((r for r in iter_releases(client, owner, repo) if release_selector.matches(r)), None)
        if release is None:
            raise DownloadFailed(f"No {owner}/{repo} release with id {release_selector.release_id}")

        assets = [a for a in release.assets if asset_selector.matches(a)]
        if not assets:
            raise DownloadFailed(f"Release {release.tag_name} has no asset with id {asset_selector.asset_id}")

        destination.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for asset in assets:
            logger.debug(f"downloading {asset.name} from {asset.url}")
            written.extend(_fetch(client, asset, destination, leave_zipped))
    except DownloadFailed:
        raise
    except SetupError as exc:
        raise DownloadFailed(exc.message) from exc
    except (OSError, zipfile.BadZipFile) as exc:
        raise DownloadFailed(f"Could not download {owner}/{repo} release asset: {exc}") from exc

    return written
