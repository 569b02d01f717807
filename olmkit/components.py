"""The resource list types whose items can be adopted as operator components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

_CORE_V1 = "v1"
_APPS_V1 = "apps/v1"
_RBAC_V1 = "rbac.authorization.k8s.io/v1"
_APIREGISTRATION_V1 = "apiregistration.k8s.io/v1"
_APIEXTENSIONS_V1 = "apiextensions.k8s.io/v1"
_OPERATORS_V1ALPHA1 = "operators.coreos.com/v1alpha1"
_OPERATORS_V2 = "operators.coreos.com/v2"


@dataclass
class ComponentList:
    """A list of one kind of resource.

    ``metadata_only`` lists carry object metadata rather than full objects.
    """

    api_version: str
    kind: str
    metadata_only: bool = False
    items: list[Any] = field(default_factory=list)

    @property
    def item_kind(self) -> str:
        """The kind of the listed items."""
        return self.kind.removesuffix("List")


def component_lists() -> list[ComponentList]:
    """Return fresh, empty lists for every kind of adoptable component."""
    full = [
        (_APPS_V1, "DeploymentList"),
        (_CORE_V1, "ServiceList"),
        (_CORE_V1, "NamespaceList"),
        (_APIREGISTRATION_V1, "APIServiceList"),
        (_APIEXTENSIONS_V1, "CustomResourceDefinitionList"),
        (_OPERATORS_V1ALPHA1, "SubscriptionList"),
        (_OPERATORS_V1ALPHA1, "InstallPlanList"),
        (_OPERATORS_V1ALPHA1, "ClusterServiceVersionList"),
        (_OPERATORS_V2, "OperatorConditionList"),
    ]
    metadata_only = [
        (_CORE_V1, "SecretList"),
        (_CORE_V1, "ConfigMapList"),
        (_CORE_V1, "ServiceAccountList"),
        (_RBAC_V1, "RoleList"),
        (_RBAC_V1, "RoleBindingList"),
        (_RBAC_V1, "ClusterRoleList"),
        (_RBAC_V1, "ClusterRoleBindingList"),
    ]
    return [ComponentList(api_version, kind) for api_version, kind in full] + [
        ComponentList(api_version, kind, metadata_only=True)
        for api_version, kind in metadata_only
    ]