"""Core value types for install plan steps and resource identities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, order=True)
class NamespacedName:
    """A namespace and name pair identifying a resource."""

    namespace: str = ""
    name: str = ""

    @classmethod
    def parse(cls, key: str) -> NamespacedName:
        """Parse a ``namespace/name`` or bare ``name`` key."""
        parts = key.split("/")
        if len(parts) == 1:
            return cls("", parts[0])
        if len(parts) == 2:
            return cls(parts[0], parts[1])
        raise ValueError(f"unexpected key format: {key!r}")

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


class StepStatus(str, Enum):
    """Progress of a single install plan step."""

    UNKNOWN = "Unknown"
    NOT_PRESENT = "NotPresent"
    PRESENT = "Present"
    CREATED = "Created"
    WAITING_FOR_API = "WaitingForApi"
    UNSUPPORTED_RESOURCE = "UnsupportedResource"


@dataclass
class StepResource:
    """The resource a step installs."""

    name: str = ""
    kind: str = ""
    group: str = ""
    version: str = ""
    manifest: str = ""
    catalog_source: str = ""
    catalog_source_namespace: str = ""


@dataclass
class Step:
    """One step of an install plan."""

    resolving: str = ""
    resource: StepResource | None = None
    status: StepStatus = StepStatus.UNKNOWN

    def __post_init__(self) -> None:
        if self.resource is None:
            self.resource = StepResource()


@dataclass(frozen=True)
class GroupVersionKind:
    """An API group, version and kind."""

    group: str = ""
    version: str = ""
    kind: str = ""

    def group_version(self) -> str:
        """Return ``group/version``, or just the version for the core group."""
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"

    def __str__(self) -> str:
        return f"{self.group}/{self.version}, Kind={self.kind}"