"""Setup action: provision phpstan.phar for a CI job."""

from .installer import install
from .override import OverrideAccepted, OverrideRejected, try_local_override
from .runner import ensure_directory, run

__all__ = [
    "OverrideAccepted",
    "OverrideRejected",
    "ensure_directory",
    "install",
    "run",
    "try_local_override",
]
