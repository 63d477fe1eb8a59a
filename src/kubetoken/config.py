"""Environment variable names, well-known paths, and environment snapshots.

This module holds every fixed name the resolver depends on:

* **Environment variables** -- ``KUBECONFIG`` (override, list separated by
  :data:`os.pathsep`), ``HOME``, and the Windows-only ``HOMEDRIVE``,
  ``HOMEPATH`` and ``USERPROFILE``.
* **File layout** -- ``<home>/.kube/config`` and the in-cluster
  service-account token mount.
* **Snapshots** -- :func:`load_environment` captures ``os.environ`` and the
  OS family into an immutable :class:`~kubetoken.models.EnvironmentSnapshot`
  so the rest of the package never reads process state directly.
"""

from __future__ import annotations

import os
import platform
from collections.abc import Mapping
from typing import Optional

from kubetoken.models import EnvironmentSnapshot, OSFamily

ENV_KUBECONFIG = "KUBECONFIG"
ENV_HOME = "HOME"
ENV_HOMEDRIVE = "HOMEDRIVE"
ENV_HOMEPATH = "HOMEPATH"
ENV_USERPROFILE = "USERPROFILE"

KUBEDIR = ".kube"
KUBECONFIG = "config"

SERVICEACCOUNT_ROOT = "/var/run/secrets/kubernetes.io/serviceaccount"
SERVICEACCOUNT_TOKEN_PATH = SERVICEACCOUNT_ROOT + "/token"


def detect_os_family(system: Optional[str] = None) -> OSFamily:
    """Map a ``platform.system()`` name to an :class:`OSFamily`.

    Args:
        system: The OS name to classify.  Defaults to ``platform.system()``.
    """
    name = platform.system() if system is None else system
    if name.lower().startswith("windows"):
        return OSFamily.WINDOWS
    return OSFamily.POSIX


def load_environment(
    environ: Optional[Mapping[str, str]] = None,
    system: Optional[str] = None,
) -> EnvironmentSnapshot:
    """Capture the process environment as an :class:`EnvironmentSnapshot`.

    Args:
        environ: Variables to snapshot.  Defaults to ``os.environ``.
        system: OS name override, see :func:`detect_os_family`.

    Returns:
        A frozen snapshot; later changes to ``os.environ`` do not affect it.
    """
    variables = dict(os.environ if environ is None else environ)
    return EnvironmentSnapshot(variables=variables, os_family=detect_os_family(system))
