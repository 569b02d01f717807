# olmkit

Building blocks for managing the lifecycle of cluster operators. The package
holds the pieces a controller needs to decide where operators are installed,
how their pods are adjusted and which manifests get applied, without tying you
to any cluster client: every piece that would talk to a cluster takes the
client, getter or callable you hand it. Resources such as pod specs and
catalog sources are plain Kubernetes-shaped dicts.

The package has no dependencies outside the standard library.

## What is inside

- `olmkit.model` — value types: `NamespacedName` (with `parse` for
  `namespace/name` keys), `StepStatus`, `StepResource`, `Step` and
  `GroupVersionKind` (with `group_version()`).
- `olmkit.groups` — `NamespaceSet`, `OperatorGroup` and
  `reconcile_api_intersection`, which decides whether APIs can be added to a
  group or would clash with a group whose targets overlap. The result is an
  `APIReconciliationResult`: `REMOVE_APIS`, `ADD_APIS`, `API_CONFLICT` or
  `NO_API_CONFLICT`.
- `olmkit.inject` — functions that apply overrides to a pod spec dict in place:
  `inject_env_into_deployment`, `inject_volumes_into_deployment`,
  `inject_volume_mounts_into_deployment`, `inject_tolerations_into_deployment`,
  `inject_resources_into_deployment` and `inject_node_selector_into_deployment`.
  Env vars, volumes and volume mounts with an existing name are replaced in
  place; new ones are appended in the order given. Tolerations are appended
  only if not already present. Each raises `ValueError` when the pod spec is
  `None`.
- `olmkit.synctracker` — `SyncTracker` reads sync results from a
  `queue.Queue` (`None` for success, anything else for a failure, and
  `SyncTracker.CLOSED` to stop), counts `total_syncs()` and
  `successful_syncs()`, and puts the cluster operator object on its
  `events()` queue after each sync. `start()` runs until the queue closes or
  the given `threading.Event` is set; only the first call does any work.
- `olmkit.olm_config` — `OperatorConfig`, `default_operator_config(**overrides)`
  and `resync_with_jitter(period, factor)`. `validate()` raises
  `InvalidConfigError` for the first field that is missing or not allowed. The
  defaults leave the clients, strategy resolver, API labeler and REST config
  unset, so those must be supplied.
- `olmkit.subscription_config` — `SyncerConfig`,
  `default_syncer_config(**overrides)` and `append_reconcilers(*reconcilers)`,
  which skips `None`. `validate()` raises `InvalidSyncerConfigError`.
- `olmkit.manifests` — `ref_for_step` recognises a step whose manifest is a
  JSON `UnpackedBundleReference` to a config map; `ManifestResolver` turns such
  a step into the real manifest, caching each bundle's steps. It raises
  `LookupError` when the bundle has no matching step and `RuntimeError` when
  the config map cannot be fetched or loaded.
- `olmkit.catalogtemplate` — `CatalogTemplateOperator.sync_catalog_source`
  expands a catalog source's image template, checks the result is a valid
  image reference, updates `spec.image` when it changed and records two
  `Condition`s through the client you provide. `unresolved_message` builds the
  explanation used when resolution fails.
- `olmkit.components` — `component_lists()` returns a fresh, empty
  `ComponentList` for every kind of resource that may be adopted as an
  operator component; some of them are `metadata_only`.

## Namespace sets

A set holding only the empty string stands for every namespace:

```python
from olmkit.groups import NamespaceSet

watched = NamespaceSet.from_string("team-a,team-b")
everything = NamespaceSet.from_string("")

assert "team-a" in watched
assert "team-c" not in watched
assert everything.is_all_namespaces()
assert "anything" in everything

# Intersecting with "all namespaces" keeps the other side unchanged.
assert watched.intersection(everything) == watched
```

## Pod spec overrides

```python
from olmkit.inject import inject_env_into_deployment

pod_spec = {"containers": [{"name": "app", "env": [{"name": "A", "value": "1"}]}]}
inject_env_into_deployment(pod_spec, [{"name": "B", "value": "2"}, {"name": "A", "value": "3"}])
assert pod_spec["containers"][0]["env"] == [
    {"name": "A", "value": "3"},
    {"name": "B", "value": "2"},
]
```

## What this package does not do

It has no command line, no cluster client and no running controller. It does
not create or update custom resource definitions, run a subscription
reconciliation loop, or label and adopt operator components on a cluster;
`component_lists()` only names the kinds such work would cover. Talking to a
cluster is left to the callables and clients you pass in.