"""Error taxonomy for the setup flow.

Each error carries the stage it was raised in so the failure reported to the
job identifies where the run stopped.
"""

from __future__ import annotations


class SetupError(Exception):
    stage = "setup"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def describe(self) -> str:
        return f"{self.stage}: {self.message}"


class InvalidVersionTarget(SetupError):
    stage = "resolve-version"

    def __init__(self, target: str) -> None:
        super().__init__(f"Invalid version target '{target}'")
        self.target = target


class ReleaseNotFound(SetupError):
    stage = "resolve-version"


class UpstreamUnavailable(SetupError):
    stage = "resolve-version"


class AssetNotFound(SetupError):
    stage = "locate-asset"

    def __init__(self, asset_name: str, tag: str) -> None:
        super().__init__(f"Could not find {asset_name} asset in release {tag}")
        self.asset_name = asset_name
        self.tag = tag


class DirectoryCreateFailed(SetupError):
    stage = "prepare-directory"


class OverrideError(SetupError):
    """Local override rejection; recovered by falling back to a download."""

    stage = "local-override"

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path


class NotAnExecutable(OverrideError):
    def __init__(self, path: str) -> None:
        super().__init__(path, f"{path} does not appear to be a phpstan executable")


class NotReadable(OverrideError):
    def __init__(self, path: str) -> None:
        super().__init__(path, f"{path} is not readable")


class NotExecutable(OverrideError):
    def __init__(self, path: str) -> None:
        super().__init__(path, f"{path} is not executable")


class CopyFailed(OverrideError):
    def __init__(self, path: str, destination: str, reason: str) -> None:
        super().__init__(path, f"Could not copy '{path}' to '{destination}'. {reason}")
        self.destination = destination


class DownloadFailed(SetupError):
    stage = "download"


class CacheKeyInvalid(SetupError):
    stage = "cache"


class CacheRestoreFailed(SetupError):
    stage = "cache"


class CacheSaveFailed(SetupError):
    stage = "cache"
