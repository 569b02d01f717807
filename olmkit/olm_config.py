"""Configuration for the OLM operator, with defaults and validation."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from olmkit.groups import reconcile_api_intersection

DEFAULT_RESYNC_PERIOD = 30.0
DEFAULT_JITTER_FACTOR = 0.2


class InvalidConfigError(ValueError):
    """A configuration value is missing or not allowed."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"{name} config invalid: {reason}")


def resync_with_jitter(period: float, factor: float) -> Callable[[], float]:
    """Return a function giving ``period`` seconds plus up to ``factor * period``.

    A factor that is not positive is treated as 1.
    """
    if factor <= 0.0:
        factor = 1.0

    def next_period() -> float:
        return period + random.random() * factor * period

    return next_period


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OperatorConfig:
    """Everything the OLM operator needs to run.

    ``resync_period`` is a zero-argument callable giving seconds; ``clock`` is a
    zero-argument callable giving the current time.
    """

    resync_period: Callable[[], float] | None = None
    operator_namespace: str = ""
    watched_namespaces: list[str] = field(default_factory=list)
    clock: Callable[[], datetime] | None = None
    logger: logging.Logger | None = None
    operator_client: Any = None
    external_client: Any = None
    strategy_resolver: Any = None
    api_reconciler: Callable[..., Any] | None = None
    api_labeler: Any = None
    rest_config: Any = None
    config_client: Any = None

    def validate(self) -> None:
        """Raise InvalidConfigError for the first problem found."""
        nil = "must not be nil"
        checks = (
            ("resync period", self.resync_period is None, nil),
            ("operator namespace", self.operator_namespace == "", "must be a single namespace"),
            ("watched namespaces", len(self.watched_namespaces) == 0, "must watch at least one namespace"),
            ("clock", self.clock is None, nil),
            ("logger", self.logger is None, nil),
            ("operator client", self.operator_client is None, nil),
            ("external client", self.external_client is None, nil),
            ("strategy resolver", self.strategy_resolver is None, nil),
            ("api reconciler", self.api_reconciler is None, nil),
            ("api labeler", self.api_labeler is None, nil),
            ("rest config", self.rest_config is None, nil),
        )
        for name, failed, reason in checks:
            if failed:
                raise InvalidConfigError(name, reason)


def default_operator_config(**overrides: Any) -> OperatorConfig:
    """Return the default configuration with the given fields replaced.

    The strategy resolver and API labeler have no defaults and must be supplied.
    """
    base = OperatorConfig(
        resync_period=resync_with_jitter(DEFAULT_RESYNC_PERIOD, DEFAULT_JITTER_FACTOR),
        operator_namespace="default",
        watched_namespaces=[""],
        clock=_utc_now,
        logger=logging.getLogger("olmkit.olm"),
        api_reconciler=reconcile_api_intersection,
    )
    return replace(base, **overrides)