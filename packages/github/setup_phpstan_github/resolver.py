"""Version target and asset resolution against the release service."""

from __future__ import annotations

import re
from typing import Iterable, Protocol

from setup_phpstan_core.config import ActionConfig
from setup_phpstan_core.errors import AssetNotFound, InvalidVersionTarget, ReleaseNotFound

from .models import ApiResponse, Asset, Release


_TAG_RE = re.compile(r"^[0-9]+\.[0-9]+\.[0-9]+")


class ReleaseService(Protocol):
    def get_release_by_tag(self, owner: str, repo: str, tag: str) -> ApiResponse: ...

    def get_latest_release(self, owner: str, repo: str) -> ApiResponse: ...


def is_tag_target(target: str) -> bool:
    return _TAG_RE.match(target) is not None


def find_version(service: ReleaseService, config: ActionConfig, target: str) -> Release:
    """Map ``latest`` or a numeric tag to a single release."""
    if is_tag_target(target):
        response = service.get_release_by_tag(config.repo_owner, config.repo_name, target)
        if response.status != 200:
            raise ReleaseNotFound(f"Could not find a {config.repo_slug} release with tag '{target}'")
        return Release.from_payload(response.data)

    if target.lower() == "latest":
        response = service.get_latest_release(config.repo_owner, config.repo_name)
        if response.status != 200:
            raise ReleaseNotFound(f"Could not find latest {config.repo_slug} release")
        return Release.from_payload(response.data)

    raise InvalidVersionTarget(target)


def find_asset(release: Release, name: str) -> Asset:
    asset = first_named(release.assets, name)
    if asset is None:
        raise AssetNotFound(name, release.tag_name)
    return asset


def first_named(assets: Iterable[Asset], name: str) -> Asset | None:
    for asset in assets:
        if asset.name == name:
            return asset
    return None
