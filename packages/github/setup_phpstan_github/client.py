"""GitHub REST client for release metadata and asset downloads."""

from __future__ import annotations

import json
import os
import ssl
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path
from typing import Mapping

import certifi

from setup_phpstan_core.errors import UpstreamUnavailable
from setup_phpstan_core.logging_setup import get_logger

from .models import ApiResponse, Asset


DEFAULT_API_URL = "https://api.github.com"
USER_AGENT = "setup-phpstan/1 (+https://github.com/phpstan/phpstan)"
_CHUNK_SIZE = 1024 * 1024


def _build_ssl_context(environ: Mapping[str, str] | None = None) -> ssl.SSLContext:
    """Create TLS context for API calls with explicit CA handling."""
    env = os.environ if environ is None else environ
    ca_bundle = (env.get("SETUP_PHPSTAN_CA_BUNDLE") or "").strip()
    if ca_bundle:
        return ssl.create_default_context(cafile=ca_bundle)
    return ssl.create_default_context(cafile=certifi.where())


class GitHubClient:
    def __init__(
        self,
        token: str = "",
        api_url: str | None = None,
        timeout_s: int = 30,
        download_timeout_s: int = 180,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        env = os.environ if environ is None else environ
        self.token = token
        self.api_url = (api_url or env.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/")
        self.timeout_s = timeout_s
        self.download_timeout_s = download_timeout_s
        self._environ = env
        self.logger = get_logger()

    def _urlopen(self, url: str, timeout: int, accept: str = "*/*", auth: bool = True):
        headers = {"User-Agent": USER_AGENT, "Accept": accept}
        if auth and self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        request = urllib.request.Request(url, headers=headers)
        return urllib.request.urlopen(request, timeout=timeout, context=_build_ssl_context(self._environ))

    def _get_json(self, path: str, query: Mapping[str, object] | None = None) -> ApiResponse:
        url = f"{self.api_url}{path}"
        if query:
            url = f"{url}?{urllib.parse.urlencode(query)}"
        self.logger.debug(f"GET {url}")
        try:
            with self._urlopen(url, timeout=self.timeout_s, accept="application/vnd.github+json") as response:
                status = getattr(response, "status", 200)
                payload = json.loads(response.read().decode("utf-8"))
        except urllib.error.HTTPError as exc:
            self.logger.debug(f"GET {url} returned HTTP {exc.code}")
            return ApiResponse(status=exc.code, data=None)
        except urllib.error.URLError as exc:
            raise UpstreamUnavailable(f"Could not reach {self.api_url}: {exc.reason}") from exc
        return ApiResponse(status=status, data=payload)

    def get_release_by_tag(self, owner: str, repo: str, tag: str) -> ApiResponse:
        quoted = urllib.parse.quote(tag, safe="")
        return self._get_json(f"/repos/{owner}/{repo}/releases/tags/{quoted}")

    def get_latest_release(self, owner: str, repo: str) -> ApiResponse:
        return self._get_json(f"/repos/{owner}/{repo}/releases/latest")

    def list_releases(self, owner: str, repo: str, page: int = 1, per_page: int = 100) -> ApiResponse:
        return self._get_json(f"/repos/{owner}/{repo}/releases", {"per_page": per_page, "page": page})

    def download_asset(self, asset: Asset, destination: Path) -> Path:
        """Stream an asset's bytes to ``destination``."""
        with self._urlopen(asset.url, timeout=self.download_timeout_s, auth=False) as response:
            with destination.open("wb") as fh:
                for chunk in iter(lambda: response.read(_CHUNK_SIZE), b""):
                    fh.write(chunk)
        return destination
