"""Core services for the setup action: configuration, logging, host publication and caching."""

from .cache import LocalCache
from .config import (
    DEFAULT_CONFIG,
    ActionConfig,
    ActionInputs,
    cache_key,
    default_cache_root,
    default_install_path,
    load_inputs,
)
from .errors import (
    AssetNotFound,
    CacheKeyInvalid,
    CacheRestoreFailed,
    CacheSaveFailed,
    CopyFailed,
    DirectoryCreateFailed,
    DownloadFailed,
    InvalidVersionTarget,
    NotAnExecutable,
    NotExecutable,
    NotReadable,
    OverrideError,
    ReleaseNotFound,
    SetupError,
    UpstreamUnavailable,
)
from .host import ActionsHost

__all__ = [
    "ActionConfig",
    "ActionInputs",
    "ActionsHost",
    "AssetNotFound",
    "CacheKeyInvalid",
    "CacheRestoreFailed",
    "CacheSaveFailed",
    "CopyFailed",
    "DEFAULT_CONFIG",
    "DirectoryCreateFailed",
    "DownloadFailed",
    "InvalidVersionTarget",
    "LocalCache",
    "NotAnExecutable",
    "NotExecutable",
    "NotReadable",
    "OverrideError",
    "ReleaseNotFound",
    "SetupError",
    "UpstreamUnavailable",
    "cache_key",
    "default_cache_root",
    "default_install_path",
    "load_inputs",
]
