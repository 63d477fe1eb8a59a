"""Canonical Pydantic models shared across all kubetoken modules.

The models fall into three groups:

**Environment models** -- the read-only inputs of a resolution call:
    :class:`OSFamily`, :class:`EnvironmentSnapshot`, :class:`ConfigSource`
    and :class:`CandidatePath`.

**Kubeconfig document models** -- the decoded YAML file:
    :class:`Context`, :class:`NamedContext`, :class:`AuthProviderConfig`,
    :class:`User`, :class:`NamedUser` and :class:`KubeConfig`.  They use
    ``extra="allow"`` so that fields this package does not consume survive a
    round trip.  Only the fields on the token path (``current-context``, the
    context's ``user``, user names and bearer fields) are strictly typed;
    everything else is typed ``Any`` so that an odd value elsewhere never
    makes a config unusable.

**Resolution output models**:
    :class:`ParsedCredentialConfig`, :class:`TokenKind` and
    :class:`ResolvedToken`.

All models use Pydantic v2.  Kubeconfig keys are hyphenated or camelCase
(``current-context``, ``tokenFile``), so fields declare aliases and
``populate_by_name`` is enabled.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from kubetoken.redact import mask_token

BEARER_PREFIX = "Bearer "


def normalize_token(value: Optional[str]) -> Optional[str]:
    """Return *value* unless it is ``None``, empty, or whitespace-only."""
    if value is None or not value.strip():
        return None
    return value


# --- Environment ---


class OSFamily(str, enum.Enum):
    """Operating system family, used to pick a home-directory strategy."""

    POSIX = "posix"
    WINDOWS = "windows"


class EnvironmentSnapshot(BaseModel):
    """Immutable view of the process environment for one resolution call.

    Example::

        env = EnvironmentSnapshot(
            variables={"KUBECONFIG": "/tmp/kc"},
            os_family=OSFamily.POSIX,
        )
        assert env.get("KUBECONFIG") == "/tmp/kc"
    """

    model_config = ConfigDict(frozen=True)

    variables: dict[str, str] = Field(default_factory=dict)
    os_family: OSFamily = OSFamily.POSIX

    def get(self, name: str) -> Optional[str]:
        """Return the value of *name*, or ``None`` when unset."""
        return self.variables.get(name)


class ConfigSource(str, enum.Enum):
    """Where a credential came from, in precedence order."""

    OVERRIDE = "override"
    HOME = "home"
    SERVICE_ACCOUNT = "service_account"


class CandidatePath(BaseModel):
    """A filesystem path together with the source that produced it."""

    model_config = ConfigDict(frozen=True)

    path: Path
    source: ConfigSource


# --- Kubeconfig document ---


class Context(BaseModel):
    model_config = ConfigDict(extra="allow")

    cluster: Any = None
    user: Optional[str] = None
    namespace: Any = None


class NamedContext(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    context: Context = Field(default_factory=Context)

    @field_validator("context", mode="before")
    @classmethod
    def null_context_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class AuthProviderConfig(BaseModel):
    """An ``auth-provider`` block (gcp, oidc, azure, ...).

    Only the cached ``access-token`` and ``id-token`` values are read.  They
    are never refreshed.
    """

    model_config = ConfigDict(extra="allow")

    name: Any = None
    config: dict[str, Any] = Field(default_factory=dict)


class User(BaseModel):
    """Credentials of a kubeconfig user entry.

    Only bearer material (``token``, ``tokenFile`` and the cached tokens of an
    ``auth-provider``) is consumed.  Client certificates, keys, exec plugins
    and basic-auth fields are kept for forward compatibility.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    token: Optional[str] = None
    token_file: Optional[str] = Field(default=None, alias="tokenFile")
    auth_provider: Optional[AuthProviderConfig] = Field(
        default=None, alias="auth-provider"
    )
    exec_: Any = Field(default=None, alias="exec")
    client_certificate: Any = Field(default=None, alias="client-certificate")
    client_certificate_data: Any = Field(default=None, alias="client-certificate-data")
    client_key: Any = Field(default=None, alias="client-key")
    client_key_data: Any = Field(default=None, alias="client-key-data")
    username: Any = None
    password: Any = None

    @property
    def has_non_bearer_credential(self) -> bool:
        """True when a certificate, exec plugin, or basic-auth credential is configured."""
        return any(
            (
                self.client_certificate,
                self.client_certificate_data,
                self.client_key,
                self.client_key_data,
                self.exec_,
                self.username,
            )
        )


class NamedUser(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    user: User = Field(default_factory=User)

    @field_validator("user", mode="before")
    @classmethod
    def null_user_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class KubeConfig(BaseModel):
    """A decoded kubeconfig document.

    ``null`` lists (as written by some tools) are accepted as empty lists.
    ``clusters`` and ``preferences`` are never read and are kept as decoded.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    api_version: Any = Field(default=None, alias="apiVersion")
    kind: Any = None
    current_context: Optional[str] = Field(default=None, alias="current-context")
    clusters: Any = Field(default_factory=list)
    contexts: list[NamedContext] = Field(default_factory=list)
    users: list[NamedUser] = Field(default_factory=list)
    preferences: Any = Field(default_factory=dict)

    @field_validator("clusters", "contexts", "users", "preferences", mode="before")
    @classmethod
    def null_lists_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return {} if info.field_name == "preferences" else []
        return value

    def find_context(self, name: str) -> Optional[Context]:
        """Return the context called *name*, or ``None``."""
        for entry in self.contexts:
            if entry.name == name:
                return entry.context
        return None

    def find_user(self, name: str) -> Optional[User]:
        """Return the user entry called *name*, or ``None``."""
        for entry in self.users:
            if entry.name == name:
                return entry.user
        return None


# --- Resolution output ---


class ParsedCredentialConfig(BaseModel):
    """The credential-relevant view of a located kubeconfig.

    ``access_token`` is either ``None`` or a non-blank string; a blank token
    is indistinguishable from a missing one.
    """

    path: Path
    current_context: Optional[str] = None
    user_name: Optional[str] = None
    user: Optional[User] = None
    access_token: Optional[str] = Field(default=None, repr=False)
    raw: KubeConfig = Field(default_factory=KubeConfig, repr=False)

    @field_validator("access_token")
    @classmethod
    def blank_token_is_absent(cls, value: Optional[str]) -> Optional[str]:
        return normalize_token(value)


class TokenKind(str, enum.Enum):
    """The three terminal outcomes of a resolution."""

    BEARER = "bearer"
    RAW = "raw"
    ABSENT = "absent"


class ResolvedToken(BaseModel):
    """Outcome of one resolution call.

    ``value`` is ``"Bearer <token>"`` for a kubeconfig token, the unmodified
    file content for a service-account token, and ``None`` when nothing was
    found.  ``diagnostic`` explains an absent result.  The token value is
    masked in ``repr()`` and ``str()``.
    """

    model_config = ConfigDict(frozen=True)

    value: Optional[str] = Field(default=None, repr=False)
    kind: TokenKind = TokenKind.ABSENT
    source: Optional[ConfigSource] = None
    diagnostic: Optional[str] = None

    @classmethod
    def bearer(cls, token: str, source: ConfigSource) -> ResolvedToken:
        return cls(value=BEARER_PREFIX + token, kind=TokenKind.BEARER, source=source)

    @classmethod
    def raw(cls, token: str) -> ResolvedToken:
        return cls(value=token, kind=TokenKind.RAW, source=ConfigSource.SERVICE_ACCOUNT)

    @classmethod
    def absent(
        cls,
        diagnostic: Optional[str] = None,
        source: Optional[ConfigSource] = None,
    ) -> ResolvedToken:
        return cls(kind=TokenKind.ABSENT, source=source, diagnostic=diagnostic)

    @property
    def is_present(self) -> bool:
        return self.value is not None

    def as_header(self) -> Optional[str]:
        """Return an ``Authorization`` header value, or ``None`` when absent.

        Raw service-account tokens are stripped and given the ``Bearer``
        prefix; kubeconfig tokens already carry it.
        """
        if self.value is None:
            return None
        if self.kind is TokenKind.RAW:
            return BEARER_PREFIX + self.value.strip()
        return self.value

    def __str__(self) -> str:
        if self.value is None:
            return f"<absent token: {self.diagnostic or 'no credential found'}>"
        return f"<{self.kind.value} token from {self.source.value}: {mask_token(self.value)}>"
