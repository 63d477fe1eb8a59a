"""Read a kubeconfig file from disk and decode it into a dictionary.

Kubeconfigs are YAML documents; JSON kubeconfigs are accepted as well since
JSON is a subset of YAML.  After loading, the raw dict should be passed to
:func:`~kubetoken.parser.extractor.extract_credentials`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from kubetoken.exceptions import IOFailureError, MalformedConfigError, SourceUnavailableError


def load_kubeconfig(path: Path) -> dict[str, Any]:
    """Load and decode the kubeconfig at *path*.

    Args:
        path: Path to the kubeconfig file.

    Returns:
        The decoded document.  An empty file yields an empty dict.

    Raises:
        SourceUnavailableError: If the file no longer exists.
        IOFailureError: If the file exists but cannot be read or is not UTF-8.
        MalformedConfigError: If the content is not a YAML mapping.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SourceUnavailableError(f"Kubeconfig not found: {path}", path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise IOFailureError(f"Failed to read kubeconfig {path}: {exc}", path) from exc

    return _parse_content(content, path)


def _parse_content(content: str, path: Path) -> dict[str, Any]:
    """Parse YAML content, rejecting anything but a mapping.

    Raises:
        MalformedConfigError: If the content is not valid YAML or not a mapping.
    """
    try:
        result = yaml.safe_load(content)
    except (yaml.YAMLError, ValueError) as exc:
        # Implicit scalars such as an out-of-range timestamp raise ValueError.
        raise MalformedConfigError(f"Invalid YAML in kubeconfig {path}: {exc}", path) from exc

    if result is None:
        return {}
    if not isinstance(result, dict):
        raise MalformedConfigError(
            f"Kubeconfig {path} must be a YAML mapping (got {type(result).__name__})",
            path,
        )
    return result
