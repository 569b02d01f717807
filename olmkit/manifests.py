"""Resolve the manifest an install plan step should apply.

A step either embeds its manifest directly or holds a JSON reference to a
config map that carries an unpacked bundle.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from olmkit.model import Step, StepResource

_log = logging.getLogger(__name__)

_REFERENCE_FIELDS = {
    "kind": "kind",
    "name": "name",
    "namespace": "namespace",
    "replaces": "replaces",
    "catalogSourceName": "catalog_source_name",
    "catalogSourceNamespace": "catalog_source_namespace",
    "properties": "properties",
}


@dataclass(frozen=True)
class UnpackedBundleReference:
    """Points at the config map holding an unpacked bundle."""

    kind: str = ""
    name: str = ""
    namespace: str = ""
    replaces: str = ""
    catalog_source_name: str = ""
    catalog_source_namespace: str = ""
    properties: str = ""


def _parse_reference(manifest: str) -> UnpackedBundleReference | None:
    try:
        data = json.loads(manifest)
    except (TypeError, ValueError):
        return None
    if data is None:
        return UnpackedBundleReference()
    if not isinstance(data, dict):
        return None
    values: dict[str, str] = {}
    for key, attribute in _REFERENCE_FIELDS.items():
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            return None
        values[attribute] = value
    return UnpackedBundleReference(**values)


def ref_for_step(step: Step) -> UnpackedBundleReference | None:
    """Return the bundle reference a step's manifest holds, or None."""
    ref = _parse_reference(step.resource.manifest)
    if ref is None or (
        ref.kind != "ConfigMap"
        or not ref.name
        or not ref.namespace
        or not ref.catalog_source_name
        or not ref.catalog_source_namespace
    ):
        _log.debug(
            "step %s resolving %s is not a reference to an unpacked bundle",
            step.resource.name,
            step.resolving,
        )
        return None
    return ref


ConfigMapGetter = Callable[[str, str], Any]
StepsFromConfigMap = Callable[[Any, str, UnpackedBundleReference], Sequence[StepResource]]


class ManifestResolver:
    """Dereferences step manifests, caching the steps of unpacked bundles.

    ``config_map_getter(namespace, name)`` fetches a config map.
    ``steps_from_config_map(config_map, namespace, ref)`` loads the bundle it
    holds and returns its step resources for the given install namespace.
    """

    def __init__(
        self,
        namespace: str,
        config_map_getter: ConfigMapGetter,
        steps_from_config_map: StepsFromConfigMap,
    ) -> None:
        self.namespace = namespace
        self._get_config_map = config_map_getter
        self._steps_from_config_map = steps_from_config_map
        self._unpacked_steps: dict[str, list[StepResource]] = {}

    def manifest_for_step(self, step: Step) -> str:
        """Return the manifest that should be applied to the cluster for a step."""
        manifest = step.resource.manifest
        ref = ref_for_step(step)
        if ref is None:
            return manifest

        _log.debug("step %s is a reference to configmap %s", step.resource.name, ref)
        resource = step.resource
        for unpacked in self._unpacked_steps_for_bundle(step.resolving, ref):
            if (
                unpacked.name == resource.name
                and unpacked.kind == resource.kind
                and unpacked.version == resource.version
                and unpacked.group == resource.group
            ):
                manifest = unpacked.manifest
                break

        if manifest == resource.manifest:
            raise LookupError(f"couldn't find unpacked step for {step}")
        return manifest

    def _unpacked_steps_for_bundle(
        self, bundle_name: str, ref: UnpackedBundleReference
    ) -> list[StepResource]:
        cached = self._unpacked_steps.get(bundle_name)
        if cached is not None:
            return cached

        try:
            config_map = self._get_config_map(ref.namespace, ref.name)
        except Exception as err:
            raise RuntimeError(
                f"error finding unpacked bundle configmap for ref {ref}: {err}"
            ) from err

        try:
            steps = list(self._steps_from_config_map(config_map, self.namespace, ref))
        except Exception as err:
            raise RuntimeError(f"error calculating steps for ref {ref}: {err}") from err

        self._unpacked_steps[bundle_name] = steps
        return steps