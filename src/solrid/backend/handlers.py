"""Handler map — Route connector operations to Solr request handlers.

Each operation the connector performs is mapped to a Solr request handler
(``select``, ``mlt``, ...).  Before a request is executed, the handler's
parameter sets are applied:

  - defaults: set only when the caller did not supply the parameter
  - appends: always added alongside caller values
  - invariants: always overwrite caller values
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Protocol

from solrid.backend.exceptions import HandlerNotFoundError
from solrid.backend.params import ParamBag

logger = logging.getLogger(__name__)


class Operation(StrEnum):
    """Operations a connector can route to a request handler."""

    RETRIEVE = "retrieve"
    SIMILAR = "similar"


class HandlerMap(Protocol):
    """Resolves handlers and prepares request parameters per operation."""

    def get_handler(self, operation: Operation) -> str: ...

    def prepare(self, operation: Operation, params: ParamBag) -> None: ...


@dataclass
class HandlerConfig:
    """Request handler path plus its parameter sets."""

    path: str = "select"
    defaults: ParamBag = field(default_factory=ParamBag)
    appends: ParamBag = field(default_factory=ParamBag)
    invariants: ParamBag = field(default_factory=ParamBag)

    def apply(self, params: ParamBag) -> None:
        for key, values in self.defaults.items():
            if key not in params:
                params.set(key, values)
        params.merge(self.appends)
        for key, values in self.invariants.items():
            params.set(key, values)


class DefaultHandlerMap:
    """In-memory ``HandlerMap`` keyed by ``Operation``.

    Example:
        >>> handlers = DefaultHandlerMap.for_solr()
        >>> handlers.get_handler(Operation.SIMILAR)
        'select'
    """

    def __init__(self, handlers: dict[Operation, HandlerConfig] | None = None) -> None:
        self._handlers: dict[Operation, HandlerConfig] = dict(handlers or {})

    @classmethod
    def for_solr(cls, paths: dict[str, str] | None = None) -> DefaultHandlerMap:
        """Build the stock Solr handler setup.

        Args:
            paths: Optional handler path overrides keyed by operation name,
                e.g. ``{"similar": "mlt"}``.
        """
        paths = paths or {}
        handlers = {
            Operation.RETRIEVE: HandlerConfig(
                path=paths.get(Operation.RETRIEVE, "select"),
                defaults=ParamBag({"rows": 20, "wt": "json"}),
            ),
            Operation.SIMILAR: HandlerConfig(
                path=paths.get(Operation.SIMILAR, "select"),
                defaults=ParamBag({"wt": "json", "mlt": "true", "mlt.count": 5, "mlt.fl": "title"}),
                invariants=ParamBag({"rows": 1}),
            ),
        }
        return cls(handlers)

    def register(self, operation: Operation, config: HandlerConfig) -> None:
        if operation in self._handlers:
            logger.warning("Overwriting existing handler for operation: %s", operation)
        self._handlers[operation] = config

    def _config(self, operation: Any) -> HandlerConfig:
        try:
            return self._handlers[operation]
        except KeyError:
            raise HandlerNotFoundError(
                f"No handler mapped for operation '{operation}'. "
                f"Available operations: {[str(op) for op in self._handlers]}"
            ) from None

    def get_handler(self, operation: Operation) -> str:
        """Return the request handler path for *operation*."""
        return self._config(operation).path

    def prepare(self, operation: Operation, params: ParamBag) -> None:
        """Apply the handler's defaults, appends and invariants to *params*."""
        self._config(operation).apply(params)

    @property
    def operations(self) -> list[Operation]:
        return list(self._handlers)
