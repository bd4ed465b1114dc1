"""Release records and id selectors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Asset:
    id: int
    name: str
    url: str
    api_url: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Asset":
        return cls(
            id=int(payload["id"]),
            name=str(payload["name"]),
            url=str(payload.get("browser_download_url") or ""),
            api_url=str(payload.get("url") or ""),
        )


@dataclass(frozen=True)
class Release:
    id: int
    tag_name: str
    published_at: str | None
    assets: tuple[Asset, ...] = ()

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Release":
        return cls(
            id=int(payload["id"]),
            tag_name=str(payload["tag_name"]),
            published_at=payload.get("published_at"),
            assets=tuple(Asset.from_payload(item) for item in payload.get("assets", []) or []),
        )


@dataclass(frozen=True)
class ApiResponse:
    status: int
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.status == 200


@dataclass(frozen=True)
class ReleaseSelector:
    release_id: int

    def matches(self, release: Release) -> bool:
        return release.id == self.release_id


@dataclass(frozen=True)
class AssetSelector:
    asset_id: int

    def matches(self, asset: Asset) -> bool:
        return asset.id == self.asset_id
