"""Solr connector — Retrieve and find similar records across identifier fields.

The connector does not own any transport.  It builds the identifier query,
hands the parameters to a ``HandlerMap`` for preparation and delegates the
request to an ``Executor``::

    connector = Connector(
        handler_map=DefaultHandlerMap.for_solr(),
        executor=HttpExecutor(base_url="http://localhost:8983/solr"),
        id_fields="id, marc_001",
    )
    await connector.initialize()
    data = await connector.retrieve("AC01234567")
"""

from __future__ import annotations

import logging
from typing import Any

from solrid.backend.executor import Executor
from solrid.backend.handlers import HandlerMap, Operation
from solrid.backend.params import ParamBag
from solrid.core.identifiers import IdentifierConfig

logger = logging.getLogger(__name__)


class Connector:
    """Connector that looks records up by any configured identifier field.

    Attributes:
        handler_map: Resolves handlers and prepares parameters per operation.
        executor: Sends prepared requests to the backend.
        identifiers: Frozen identifier configuration.
    """

    def __init__(
        self,
        handler_map: HandlerMap,
        executor: Executor,
        id_fields: str | IdentifierConfig | None = None,
    ) -> None:
        self.handler_map = handler_map
        self.executor = executor
        if isinstance(id_fields, IdentifierConfig):
            self.identifiers = id_fields
        else:
            self.identifiers = IdentifierConfig.from_raw(id_fields)

    @property
    def unique_key(self) -> str:
        """Field used as the canonical record identifier."""
        return self.identifiers.unique_key

    @property
    def id_fields(self) -> list[str]:
        return list(self.identifiers.fields)

    async def initialize(self) -> None:
        """Initialize the executor when it has a lifecycle."""
        initialize = getattr(self.executor, "initialize", None)
        if initialize is not None:
            await initialize()

    async def shutdown(self) -> None:
        shutdown = getattr(self.executor, "shutdown", None)
        if shutdown is not None:
            await shutdown()

    async def retrieve(self, doc_id: str, params: ParamBag | None = None) -> Any:
        """Return the document(s) matching *doc_id* in any identifier field.

        Args:
            doc_id: The identifier value to look up.
            params: Extra request parameters; a new bag is created when omitted.

        Returns:
            The executor's response, unchanged.
        """
        return await self._run(Operation.RETRIEVE, doc_id, params)

    async def similar(self, doc_id: str, params: ParamBag | None = None) -> Any:
        """Return records similar to the record identified by *doc_id*."""
        return await self._run(Operation.SIMILAR, doc_id, params)

    async def _run(self, operation: Operation, doc_id: str, params: ParamBag | None) -> Any:
        if params is None:
            params = ParamBag()
        query = self.identifiers.query_for(doc_id)
        params.set("q", query)

        handler = self.handler_map.get_handler(operation)
        self.handler_map.prepare(operation, params)
        logger.debug("Running %s via handler '%s' with q=%s", operation, handler, query)

        return await self.executor.execute(handler, params)
