from olmkit.components import ComponentList, component_lists


def test_kinds_in_order():
    kinds = [lst.kind for lst in component_lists()]
    assert kinds == [
        "DeploymentList",
        "ServiceList",
        "NamespaceList",
        "APIServiceList",
        "CustomResourceDefinitionList",
        "SubscriptionList",
        "InstallPlanList",
        "ClusterServiceVersionList",
        "OperatorConditionList",
        "SecretList",
        "ConfigMapList",
        "ServiceAccountList",
        "RoleList",
        "RoleBindingList",
        "ClusterRoleList",
        "ClusterRoleBindingList",
    ]


def test_metadata_only_kinds():
    metadata_only = {lst.kind for lst in component_lists() if lst.metadata_only}
    assert metadata_only == {
        "SecretList",
        "ConfigMapList",
        "ServiceAccountList",
        "RoleList",
        "RoleBindingList",
        "ClusterRoleList",
        "ClusterRoleBindingList",
    }


def test_lists_start_empty_and_are_fresh():
    first = component_lists()
    second = component_lists()
    assert all(lst.items == [] for lst in first)
    first[0].items.append("deployment")
    assert second[0].items == []


def test_kinds_are_unique():
    kinds = [lst.kind for lst in component_lists()]
    assert len(kinds) == len(set(kinds))


def test_secret_list_is_core_group():
    secrets = next(lst for lst in component_lists() if lst.kind == "SecretList")
    assert secrets.api_version == "v1"


def test_rbac_lists_share_group_version():
    rbac = {lst.api_version for lst in component_lists() if "Role" in lst.kind}
    assert rbac == {"rbac.authorization.k8s.io/v1"}


def test_item_kind_strips_list_suffix():
    assert ComponentList("v1", "ConfigMapList").item_kind == "ConfigMap"
    assert all(not lst.item_kind.endswith("List") for lst in component_lists())