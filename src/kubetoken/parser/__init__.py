"""Kubeconfig parsing pipeline.

Two stages turn a located file into a credential record:

1. :func:`~kubetoken.parser.loader.load_kubeconfig` -- read and decode YAML.
2. :func:`~kubetoken.parser.extractor.extract_credentials` -- validate the
   document and extract the current user's access token.

:func:`parse` runs both.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from kubetoken.models import ParsedCredentialConfig
from kubetoken.parser.extractor import extract_access_token, extract_credentials
from kubetoken.parser.loader import load_kubeconfig


def parse(
    path: Path,
    context: Optional[str] = None,
    home: Optional[Path] = None,
) -> ParsedCredentialConfig:
    """Load the kubeconfig at *path* and extract its credentials.

    *home* is the directory a leading ``~`` in ``tokenFile`` expands to.

    Raises:
        SourceUnavailableError: If the file vanished after it was located.
        IOFailureError: If the file cannot be read.
        MalformedConfigError: If the file is not a valid kubeconfig.
    """
    return extract_credentials(load_kubeconfig(path), path, context=context, home=home)


__all__ = [
    "extract_access_token",
    "extract_credentials",
    "load_kubeconfig",
    "parse",
]
