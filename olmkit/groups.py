"""Namespace sets, operator groups and provided-API reconciliation."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import IntEnum


class NamespaceSet:
    """A set of namespaces where a lone empty name means every namespace."""

    __slots__ = ("_namespaces",)

    def __init__(self, namespaces: Iterable[str] = ()) -> None:
        self._namespaces = frozenset(namespaces)

    @classmethod
    def from_string(cls, namespaces: str) -> NamespaceSet:
        """Build a set from a comma-delimited list of namespaces."""
        return cls(namespaces.split(","))

    def __iter__(self) -> Iterator[str]:
        return iter(self._namespaces)

    def __len__(self) -> int:
        return len(self._namespaces)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, NamespaceSet):
            return self._namespaces == other._namespaces
        if isinstance(other, (set, frozenset)):
            return self._namespaces == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._namespaces)

    def __repr__(self) -> str:
        return f"NamespaceSet({sorted(self._namespaces)!r})"

    def peek(self) -> str:
        """Return any member, or an empty string when the set is empty."""
        return next(iter(self._namespaces), "")

    def is_all_namespaces(self) -> bool:
        return len(self._namespaces) == 1 and self.peek() == ""

    def intersection(self, other: NamespaceSet) -> NamespaceSet:
        other = _as_namespace_set(other)
        if self.is_all_namespaces():
            return NamespaceSet(other)
        if other.is_all_namespaces():
            return NamespaceSet(self)
        return NamespaceSet(self._namespaces & other._namespaces)

    def union(self, other: NamespaceSet) -> NamespaceSet:
        other = _as_namespace_set(other)
        if self.is_all_namespaces():
            return self
        if other.is_all_namespaces():
            return other
        return NamespaceSet(self._namespaces | other._namespaces)

    def __contains__(self, namespace: object) -> bool:
        if self.is_all_namespaces():
            return True
        return namespace in self._namespaces


def _as_namespace_set(value: Iterable[str]) -> NamespaceSet:
    return value if isinstance(value, NamespaceSet) else NamespaceSet(value)


@dataclass(frozen=True)
class OperatorGroup:
    """The targeting surface of an operator group."""

    namespace: str
    name: str
    targets: NamespaceSet = field(default_factory=NamespaceSet)
    provided_apis: frozenset = field(default_factory=frozenset)

    @classmethod
    def from_status(
        cls,
        namespace: str,
        name: str,
        status_namespaces: Iterable[str],
        provided_apis: Iterable[Hashable] = (),
    ) -> OperatorGroup:
        """Build a group from its status namespaces, adding its own namespace
        unless it targets every namespace."""
        namespaces = list(status_namespaces)
        if namespaces and namespaces[0] != "":
            namespaces.append(namespace)
        return cls(
            namespace=namespace,
            name=name,
            targets=NamespaceSet(namespaces),
            provided_apis=frozenset(provided_apis),
        )

    def identifier(self) -> str:
        return f"{self.name}/{self.namespace}"

    def group_intersection(self, *groups: OperatorGroup) -> list[OperatorGroup]:
        """Return the other groups whose targets overlap this group's."""
        return [
            group
            for group in groups
            if group.identifier() != self.identifier()
            and len(self.targets.intersection(group.targets)) > 0
        ]


class APIReconciliationResult(IntEnum):
    REMOVE_APIS = 0
    ADD_APIS = 1
    API_CONFLICT = 2
    NO_API_CONFLICT = 3


def reconcile_api_intersection(
    add: Iterable[Hashable], group: OperatorGroup, *other_groups: OperatorGroup
) -> APIReconciliationResult:
    """Decide how a group's provided APIs should change to include ``add``."""
    provided_by_others: set = set()
    for other in group.group_intersection(*other_groups):
        provided_by_others |= set(other.provided_apis)

    wanted = set(add)
    intersecting = bool(wanted & provided_by_others)
    subset = wanted <= set(group.provided_apis)

    if subset and intersecting:
        return APIReconciliationResult.REMOVE_APIS
    if intersecting:
        return APIReconciliationResult.API_CONFLICT
    if not subset:
        return APIReconciliationResult.ADD_APIS
    return APIReconciliationResult.NO_API_CONFLICT