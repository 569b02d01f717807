"""Resolve image templates in catalog sources and report the outcome in status.

Catalog sources are Kubernetes-shaped dicts. A catalog source takes part when
the template getter returns a non-empty image template for it. The template is
expanded by a replacer that returns the processed image reference together
with the template variables it could not resolve.
"""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

STATUS_TYPE_TEMPLATES_HAVE_RESOLVED = "TemplatesHaveResolved"
STATUS_TYPE_RESOLVED_IMAGE = "ResolvedImage"

REASON_UNABLE_TO_RESOLVE = "UnableToResolve"
REASON_ALL_TEMPLATES_RESOLVED = "AllTemplatesResolved"

CONDITION_TRUE = "True"
CONDITION_FALSE = "False"

_GENERIC_MESSAGE = "cannot construct catalog image reference"

# Image reference grammar: name[:tag][@digest].
_DOMAIN_COMPONENT = r"(?:[a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9-]*[a-zA-Z0-9])"
_DOMAIN = rf"{_DOMAIN_COMPONENT}(?:\.{_DOMAIN_COMPONENT})*(?::[0-9]+)?"
_NAME_COMPONENT = r"[a-z0-9]+(?:(?:[._]|__|[-]*)[a-z0-9]+)*"
_NAME = rf"(?:{_DOMAIN}/)?{_NAME_COMPONENT}(?:/{_NAME_COMPONENT})*"
_TAG = r"[\w][\w.-]{0,127}"
_DIGEST = r"[A-Za-z][A-Za-z0-9]*(?:[-_+.][A-Za-z][A-Za-z0-9]*)*:[0-9A-Fa-f]{32,}"
_REFERENCE = re.compile(rf"^(?P<name>{_NAME})(?::{_TAG})?(?:@{_DIGEST})?$")
_NAME_TOTAL_LENGTH_MAX = 255

_log = logging.getLogger(__name__)


def _parse_image_reference(reference: str) -> str:
    """Return the reference unchanged if it is a valid image reference."""
    if not reference:
        raise ValueError("repository name must have at least one component")
    match = _REFERENCE.match(reference)
    if match is None:
        raise ValueError(f"invalid reference format: {reference!r}")
    if len(match.group("name")) > _NAME_TOTAL_LENGTH_MAX:
        raise ValueError(
            f"repository name must not be more than {_NAME_TOTAL_LENGTH_MAX} characters"
        )
    return reference


@dataclass(frozen=True)
class Condition:
    """A status condition set on a catalog source."""

    type: str
    status: str
    reason: str
    message: str


class CatalogSourceClient(Protocol):
    def remove_status_conditions(self, catalog_source: dict, *condition_types: str) -> Any: ...

    def update_spec_and_status_conditions(
        self, catalog_source: dict, *conditions: Condition
    ) -> Any: ...

    def update_status_with_conditions(
        self, catalog_source: dict, *conditions: Condition
    ) -> Any: ...


def unresolved_message(invalid_syntax: bool, unresolved_templates: Sequence[str]) -> str:
    """Explain why a catalog image reference could not be constructed."""
    quoted = '"' + '", "'.join(unresolved_templates) + '"'
    templates_resolved = len(unresolved_templates) == 0
    if invalid_syntax and not templates_resolved:
        return (
            f"{_GENERIC_MESSAGE}, because variable(s) {quoted} could not be resolved "
            "and one or more template(s) has improper syntax"
        )
    if invalid_syntax:
        return f"{_GENERIC_MESSAGE}, because one or more template(s) has improper syntax"
    if not templates_resolved:
        return f"{_GENERIC_MESSAGE}, because variable(s) {quoted} could not be resolved"
    return _GENERIC_MESSAGE


class CatalogTemplateOperator:
    """Keeps catalog source images in line with their image templates.

    ``template_getter(catalog_source)`` returns the image template or "".
    ``replace_templates(template)`` returns ``(processed, unresolved)``.
    ``parse_reference(image)`` raises ValueError for an invalid image reference.
    ``update_server_version()``, when given, runs before every sync; its
    failures are logged and otherwise ignored.
    """

    def __init__(
        self,
        client: CatalogSourceClient,
        replace_templates: Callable[[str], tuple[str, Sequence[str]]],
        template_getter: Callable[[dict], str],
        *,
        parse_reference: Callable[[str], Any] = _parse_image_reference,
        update_server_version: Callable[[], Any] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.client = client
        self.replace_templates = replace_templates
        self.template_getter = template_getter
        self.parse_reference = parse_reference
        self.update_server_version = update_server_version
        self.logger = logger or _log

    def _refresh_server_version(self) -> None:
        if self.update_server_version is None:
            return
        try:
            self.update_server_version()
        except Exception as err:
            self.logger.warning("unable to obtain server version from discovery client: %s", err)

    def sync_catalog_source(self, catalog_source: Any) -> None:
        """Resolve the catalog source's image template and record the result."""
        self._refresh_server_version()

        if not isinstance(catalog_source, Mapping):
            self.logger.debug("wrong type: %r", catalog_source)
            return

        output = copy.deepcopy(dict(catalog_source))
        metadata = output.get("metadata") or {}
        self.logger.debug(
            "syncing catalog source %s/%s for annotation templates",
            metadata.get("namespace", ""),
            metadata.get("name", ""),
        )

        template = self.template_getter(output)
        if not template:
            self.logger.debug("this catalog source is not participating in template replacement")
            self.client.remove_status_conditions(
                output, STATUS_TYPE_TEMPLATES_HAVE_RESOLVED, STATUS_TYPE_RESOLVED_IMAGE
            )
            return

        processed, unresolved = self.replace_templates(template)
        unresolved = list(unresolved)
        templates_resolved = not unresolved
        try:
            self.parse_reference(processed)
            invalid_syntax = False
        except ValueError:
            invalid_syntax = True

        if templates_resolved and not invalid_syntax:
            conditions = (
                Condition(
                    STATUS_TYPE_TEMPLATES_HAVE_RESOLVED,
                    CONDITION_TRUE,
                    REASON_ALL_TEMPLATES_RESOLVED,
                    "catalog image reference was successfully resolved",
                ),
                Condition(
                    STATUS_TYPE_RESOLVED_IMAGE,
                    CONDITION_TRUE,
                    REASON_ALL_TEMPLATES_RESOLVED,
                    processed,
                ),
            )
            spec = output.setdefault("spec", {})
            if spec.get("image", "") != processed:
                spec["image"] = processed
                self.client.update_spec_and_status_conditions(output, *conditions)
                self.logger.info("The catalog image has been updated to %r", processed)
            else:
                self.client.update_status_with_conditions(output, *conditions)
                self.logger.info(
                    "The catalog image %r does not require an update because the image "
                    "has not changed",
                    processed,
                )
            return

        message = unresolved_message(invalid_syntax, unresolved)
        self.client.update_status_with_conditions(
            output,
            Condition(
                STATUS_TYPE_TEMPLATES_HAVE_RESOLVED,
                CONDITION_FALSE,
                REASON_UNABLE_TO_RESOLVE,
                message,
            ),
            Condition(
                STATUS_TYPE_RESOLVED_IMAGE,
                CONDITION_FALSE,
                REASON_UNABLE_TO_RESOLVE,
                processed,
            ),
        )
        self.logger.info(message)