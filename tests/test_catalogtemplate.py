import pytest

from olmkit.catalogtemplate import (
    CONDITION_FALSE,
    CONDITION_TRUE,
    REASON_ALL_TEMPLATES_RESOLVED,
    REASON_UNABLE_TO_RESOLVE,
    STATUS_TYPE_RESOLVED_IMAGE,
    STATUS_TYPE_TEMPLATES_HAVE_RESOLVED,
    CatalogTemplateOperator,
    Condition,
    unresolved_message,
)

ANNOTATION = "example.com/catalog-image-template"


class FakeClient:
    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def _record(self, name, source, args):
        if self.fail:
            raise RuntimeError("update failed")
        self.calls.append((name, source, args))

    def remove_status_conditions(self, catalog_source, *condition_types):
        self._record("remove", catalog_source, condition_types)

    def update_spec_and_status_conditions(self, catalog_source, *conditions):
        self._record("spec", catalog_source, conditions)

    def update_status_with_conditions(self, catalog_source, *conditions):
        self._record("status", catalog_source, conditions)


def get_template(source):
    return (source.get("metadata", {}).get("annotations") or {}).get(ANNOTATION, "")


def make_source(template=None, image="quay.io/example/catalog:old"):
    annotations = {ANNOTATION: template} if template is not None else {}
    return {
        "metadata": {"name": "cat", "namespace": "olm", "annotations": annotations},
        "spec": {"image": image},
    }


def make_operator(client, processed, unresolved=(), **kwargs):
    return CatalogTemplateOperator(
        client, lambda template: (processed, list(unresolved)), get_template, **kwargs
    )


def test_source_without_template_removes_conditions():
    client = FakeClient()
    make_operator(client, "unused").sync_catalog_source(make_source())
    assert len(client.calls) == 1
    name, _, args = client.calls[0]
    assert name == "remove"
    assert args == (STATUS_TYPE_TEMPLATES_HAVE_RESOLVED, STATUS_TYPE_RESOLVED_IMAGE)


def test_resolved_template_updates_image_and_spec():
    client = FakeClient()
    processed = "quay.io/example/catalog:v1.25"
    source = make_source("quay.io/example/catalog:v{kube_major_version}")
    make_operator(client, processed).sync_catalog_source(source)
    name, updated, conditions = client.calls[0]
    assert name == "spec"
    assert updated["spec"]["image"] == processed
    assert conditions == (
        Condition(
            STATUS_TYPE_TEMPLATES_HAVE_RESOLVED,
            CONDITION_TRUE,
            REASON_ALL_TEMPLATES_RESOLVED,
            "catalog image reference was successfully resolved",
        ),
        Condition(STATUS_TYPE_RESOLVED_IMAGE, CONDITION_TRUE, REASON_ALL_TEMPLATES_RESOLVED, processed),
    )


def test_input_catalog_source_is_not_mutated():
    client = FakeClient()
    source = make_source("quay.io/example/catalog:{x}")
    make_operator(client, "quay.io/example/catalog:new").sync_catalog_source(source)
    assert source["spec"]["image"] == "quay.io/example/catalog:old"
    assert client.calls[0][1] is not source


def test_unchanged_image_updates_status_only():
    client = FakeClient()
    image = "quay.io/example/catalog:same"
    make_operator(client, image).sync_catalog_source(make_source("t", image=image))
    assert [call[0] for call in client.calls] == ["status"]
    assert client.calls[0][2][1].message == image


def test_digest_reference_is_valid():
    client = FakeClient()
    image = "quay.io/example/catalog@sha256:" + "a" * 64
    make_operator(client, image).sync_catalog_source(make_source("t"))
    assert client.calls[0][0] == "spec"
    assert client.calls[0][2][0].status == CONDITION_TRUE


def test_unresolved_variables_reported():
    client = FakeClient()
    processed = "quay.io/example/catalog:v"
    make_operator(client, processed, ["kube_major_version"]).sync_catalog_source(make_source("t"))
    name, updated, conditions = client.calls[0]
    assert name == "status"
    assert updated["spec"]["image"] == "quay.io/example/catalog:old"
    assert conditions[0] == Condition(
        STATUS_TYPE_TEMPLATES_HAVE_RESOLVED,
        CONDITION_FALSE,
        REASON_UNABLE_TO_RESOLVE,
        unresolved_message(False, ["kube_major_version"]),
    )
    assert conditions[1] == Condition(
        STATUS_TYPE_RESOLVED_IMAGE, CONDITION_FALSE, REASON_UNABLE_TO_RESOLVE, processed
    )


def test_curly_braces_are_improper_syntax():
    client = FakeClient()
    make_operator(client, "quay.io/example/catalog:{oops").sync_catalog_source(make_source("t"))
    conditions = client.calls[0][2]
    assert conditions[0].status == CONDITION_FALSE
    assert conditions[0].message == (
        "cannot construct catalog image reference, because one or more template(s) "
        "has improper syntax"
    )


def test_empty_processed_reference_is_invalid():
    client = FakeClient()
    make_operator(client, "").sync_catalog_source(make_source("t"))
    assert client.calls[0][2][0].message == unresolved_message(True, [])


def test_custom_parser_is_used():
    client = FakeClient()

    def reject(image):
        raise ValueError("bad")

    make_operator(client, "quay.io/example/catalog:ok", parse_reference=reject).sync_catalog_source(
        make_source("t")
    )
    assert client.calls[0][2][0].reason == REASON_UNABLE_TO_RESOLVE


def test_non_mapping_input_is_ignored():
    client = FakeClient()
    versions = []
    operator = make_operator(client, "x", update_server_version=lambda: versions.append(1))
    operator.sync_catalog_source(["not", "a", "catalog"])
    assert client.calls == []
    assert versions == [1]


def test_server_version_failure_is_ignored():
    client = FakeClient()

    def broken():
        raise RuntimeError("discovery down")

    make_operator(client, "x", update_server_version=broken).sync_catalog_source(make_source())
    assert client.calls[0][0] == "remove"


def test_client_errors_propagate():
    operator = make_operator(FakeClient(fail=True), "quay.io/example/catalog:v2")
    with pytest.raises(RuntimeError, match="update failed"):
        operator.sync_catalog_source(make_source("t"))


@pytest.mark.parametrize(
    "invalid, unresolved, expected",
    [
        (False, [], "cannot construct catalog image reference"),
        (
            True,
            [],
            "cannot construct catalog image reference, because one or more template(s) "
            "has improper syntax",
        ),
        (
            False,
            ["a", "b"],
            'cannot construct catalog image reference, because variable(s) "a", "b" '
            "could not be resolved",
        ),
        (
            True,
            ["a"],
            'cannot construct catalog image reference, because variable(s) "a" could not '
            "be resolved and one or more template(s) has improper syntax",
        ),
    ],
)
def test_unresolved_message(invalid, unresolved, expected):
    assert unresolved_message(invalid, unresolved) == expected