"""Exception hierarchy for kubetoken.

All exceptions inherit from :class:`KubetokenError` and carry the ``path``
of the file that could not be used.  They are raised by the locator and
parser layers and absorbed by
:class:`~kubetoken.auth.provider.KubeConfigTokenProvider`, which turns
every failure into an absent token.  Callers of ``get_token`` never see
them.

Subclass hierarchy::

    KubetokenError
    +-- SourceUnavailableError   (file does not exist)
    +-- IOFailureError           (file exists but cannot be read)
    +-- MalformedConfigError     (file read but not a valid kubeconfig)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class KubetokenError(Exception):
    """Base exception for all kubetoken errors.

    Args:
        message: Human-readable error description.
        path: The file the error relates to, if any.
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class SourceUnavailableError(KubetokenError):
    """Raised when a credential source does not exist (e.g. it vanished after location)."""


class IOFailureError(KubetokenError):
    """Raised when a credential file exists but cannot be read."""


class MalformedConfigError(KubetokenError):
    """Raised when a kubeconfig cannot be decoded into the expected structure."""
