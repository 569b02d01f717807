"""Inject overrides into a pod spec given as a Kubernetes-shaped dict."""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from typing import Any

PodSpec = dict


def _require(pod_spec: PodSpec | None) -> PodSpec:
    if pod_spec is None:
        raise ValueError("no pod spec provided")
    return pod_spec


def _merge_env_vars(existing: Sequence[dict], new: Sequence[dict]) -> list[dict]:
    # Existing names keep their position; new values win; new names follow in order.
    merged: dict[str, dict] = {}
    for env_var in existing:
        merged[env_var["name"]] = env_var
    for env_var in new:
        merged[env_var["name"]] = env_var
    return list(merged.values())


def _merge_by_name(existing: Sequence[dict], new: Sequence[dict]) -> list[dict]:
    merged = list(existing)
    original_count = len(merged)
    for item in new:
        for index in range(original_count):
            if merged[index]["name"] == item["name"]:
                merged[index] = item
                break
        else:
            merged.append(item)
    return merged


def inject_env_into_deployment(pod_spec: PodSpec | None, env_vars: Sequence[dict]) -> None:
    """Merge env vars into every container; given values override existing ones."""
    pod_spec = _require(pod_spec)
    for container in pod_spec.get("containers", []):
        container["env"] = _merge_env_vars(container.get("env") or [], env_vars or [])


def inject_volumes_into_deployment(pod_spec: PodSpec | None, volumes: Sequence[dict]) -> None:
    """Add volumes to the pod, replacing any with the same name."""
    pod_spec = _require(pod_spec)
    pod_spec["volumes"] = _merge_by_name(pod_spec.get("volumes") or [], volumes or [])


def inject_volume_mounts_into_deployment(
    pod_spec: PodSpec | None, volume_mounts: Sequence[dict]
) -> None:
    """Add volume mounts to every container, replacing any with the same name."""
    pod_spec = _require(pod_spec)
    for container in pod_spec.get("containers", []):
        container["volumeMounts"] = _merge_by_name(
            container.get("volumeMounts") or [], volume_mounts or []
        )


def inject_tolerations_into_deployment(
    pod_spec: PodSpec | None, tolerations: Sequence[dict]
) -> None:
    """Append tolerations the pod does not already have."""
    pod_spec = _require(pod_spec)
    existing = list(pod_spec.get("tolerations") or [])
    merged = list(existing)
    for toleration in tolerations or []:
        if toleration not in existing:
            merged.append(toleration)
    pod_spec["tolerations"] = merged


def inject_resources_into_deployment(
    pod_spec: PodSpec | None, resources: Mapping[str, Any] | None
) -> None:
    """Overwrite every container's resource requirements."""
    pod_spec = _require(pod_spec)
    if resources is None:
        return
    for container in pod_spec.get("containers", []):
        container["resources"] = copy.deepcopy(dict(resources))


def inject_node_selector_into_deployment(
    pod_spec: PodSpec | None, node_selector: Mapping[str, str] | None
) -> None:
    """Overwrite the pod's node selector when one is given."""
    pod_spec = _require(pod_spec)
    if node_selector is not None:
        pod_spec["nodeSelector"] = node_selector