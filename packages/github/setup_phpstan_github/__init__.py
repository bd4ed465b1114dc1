"""GitHub release lookup and asset download."""

from .client import GitHubClient
from .download import download_release, iter_releases
from .models import ApiResponse, Asset, AssetSelector, Release, ReleaseSelector
from .resolver import find_asset, find_version, is_tag_target

__all__ = [
    "ApiResponse",
    "Asset",
    "AssetSelector",
    "GitHubClient",
    "Release",
    "ReleaseSelector",
    "download_release",
    "find_asset",
    "find_version",
    "is_tag_target",
    "iter_releases",
]
