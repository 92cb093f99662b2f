"""Solr backend layer — Connector, handler routing and HTTP execution.

Use ``create_connector()`` to build a connector from application settings,
or compose ``Connector`` with your own ``HandlerMap`` and ``Executor``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from solrid.backend.connector import Connector
from solrid.backend.executor import HttpExecutor
from solrid.backend.handlers import DefaultHandlerMap, Operation
from solrid.backend.params import ParamBag

if TYPE_CHECKING:
    from solrid.config.settings import Settings

__all__ = [
    "Connector",
    "DefaultHandlerMap",
    "HttpExecutor",
    "Operation",
    "ParamBag",
    "create_connector",
]


def create_connector(settings: Settings) -> Connector:
    """Build a ``Connector`` wired to Solr from *settings*.

    The returned connector still needs ``await connector.initialize()``.
    """
    solr = settings.solr
    executor = HttpExecutor(
        base_url=solr.base_url,
        collection=solr.collection,
        username=solr.username,
        password=solr.password,
        timeout=solr.timeout,
    )
    return Connector(
        handler_map=DefaultHandlerMap.for_solr(solr.handlers),
        executor=executor,
        id_fields=solr.id_fields,
    )
