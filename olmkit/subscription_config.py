"""Configuration for the subscription syncer."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any


class InvalidSyncerConfigError(ValueError):
    """A subscription syncer configuration value is missing or not allowed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"invalid subscription syncer config: {reason}")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SyncerConfig:
    """Everything a subscription syncer needs.

    ``clock`` is a zero-argument callable giving the current time.
    """

    logger: logging.Logger | None = None
    clock: Callable[[], datetime] | None = None
    client: Any = None
    lister: Any = None
    subscription_informer: Any = None
    catalog_informer: Any = None
    install_plan_informer: Any = None
    subscription_queue: Any = None
    reconcilers: list[Any] = field(default_factory=list)
    registry_reconciler_factory: Any = None
    global_catalog_namespace: str = ""

    def append_reconcilers(self, *reconcilers: Any) -> None:
        """Add the non-None reconcilers to the end of the chain."""
        self.reconcilers.extend(rec for rec in reconcilers if rec is not None)

    def validate(self) -> None:
        """Raise InvalidSyncerConfigError for the first problem found."""
        checks = (
            (self.logger is None, "nil logger"),
            (self.clock is None, "nil clock"),
            (self.client is None, "nil client"),
            (self.lister is None, "nil lister"),
            (self.subscription_informer is None, "nil subscription informer"),
            (self.catalog_informer is None, "nil catalog informer"),
            (self.install_plan_informer is None, "nil installplan informer"),
            (self.subscription_queue is None, "nil subscription queue"),
            (len(self.reconcilers) == 0, "no reconcilers"),
            (self.registry_reconciler_factory is None, "nil reconciler factory"),
            (
                self.global_catalog_namespace == "",
                "global catalog namespace cannot be namespace all",
            ),
        )
        for failed, reason in checks:
            if failed:
                raise InvalidSyncerConfigError(reason)


def default_syncer_config(**overrides: Any) -> SyncerConfig:
    """Return the default syncer configuration with the given fields replaced."""
    base = SyncerConfig(
        logger=logging.getLogger("olmkit.subscription"),
        clock=_utc_now,
        reconcilers=[],
    )
    return replace(base, **overrides)