"""
Sync context

Drives a full indexing pass: fetch records, flatten them, submit one bulk
request and refresh the index.
"""

from typing import Any, Dict, List, Optional, Type, Union

from docsync.core.config import Settings, get_settings
from docsync.core.storage.elasticsearch import ElasticsearchClient, create_es_client
from docsync.engine.bulk import BulkPayload
from docsync.engine.enums import Operation
from docsync.engine.flattener import DocumentFlattener
from docsync.engine.index_manager import IndexManager
from docsync.engine.models import OperationResult
from docsync.engine.registry import MetadataRegistry
from docsync.exceptions import IndexOperationError, StorageError, SyncFailedError
from docsync.models.record import SearchableRecord
from docsync.models.source import RecordSource
from docsync.utils import get_logger

logger = get_logger("engine.context")

TypeName = Union[str, Type[SearchableRecord]]


class SyncContext:
    """Index lifecycle and data synchronization for one index"""

    def __init__(
        self,
        registry: MetadataRegistry,
        source: RecordSource,
        es_client: ElasticsearchClient,
        index_name: str,
        flattener: Optional[DocumentFlattener] = None,
        owns_client: bool = False,
    ) -> None:
        """
        Args:
            registry: registered record types and mappings
            source: data store the records are fetched from
            es_client: search engine client
            index_name: name of the synchronized index
            flattener: document flattener (a default one is created)
            owns_client: close es_client when the context is closed
        """
        self.registry = registry
        self.source = source
        self.es_client = es_client
        self.index_name = index_name
        self.flattener = flattener or DocumentFlattener()
        self.index_manager = IndexManager(es_client, index_name, registry)
        self._owns_client = owns_client

    async def __aenter__(self) -> "SyncContext":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self.es_client.close()

    @property
    def indexed_models(self) -> List[str]:
        return self.registry.names

    # ------------------------------------------------------------------
    # index lifecycle
    # ------------------------------------------------------------------

    async def index_exists(self) -> bool:
        return await self.index_manager.exists()

    async def create_index(self) -> OperationResult:
        """Create the index without indexing data; see index_data for both"""
        await self.index_manager.create()
        return self._result(Operation.CREATE_INDEX, True, f"Created {self.index_name}")

    async def drop_index(self) -> OperationResult:
        dropped = await self.index_manager.drop()
        if dropped:
            message = f"Dropped {self.index_name}"
        else:
            message = f"Could not drop {self.index_name}"
            logger.warning(message)
        return self._result(Operation.DROP_INDEX, dropped, message)

    async def rebuild_index(self) -> OperationResult:
        """Drop and re-create the index; use reindex_data to index the data too"""
        await self.index_manager.rebuild()
        return self._result(Operation.REBUILD_INDEX, True, f"Rebuilt {self.index_name}")

    async def refresh_index(self) -> OperationResult:
        await self.index_manager.refresh()
        return self._result(Operation.REFRESH_INDEX, True, f"Refreshed {self.index_name}")

    # ------------------------------------------------------------------
    # data
    # ------------------------------------------------------------------

    async def index_data(self, *type_names: TypeName) -> OperationResult:
        """
        Create the index and index the data of all or the given record types

        Args:
            *type_names: record types (classes, class names or search type names);
                every registered type when empty

        Returns:
            result with the number of documents indexed per type

        Raises:
            ConfigError: an unknown record type was requested
            IndexConflictError: the index already exists, use reindex_data
            FieldResolutionError: a record could not be flattened
            SyncFailedError: fetching records or the bulk write failed
        """
        record_types = self._resolve(type_names)
        names = [record_type.__name__ for record_type in record_types]

        logger.debug(f"Indexing {', '.join(names)}")

        await self.index_manager.create()

        payload = BulkPayload()
        indexed_count: Dict[str, int] = {}

        for record_type in record_types:
            logger.info(f"Indexing: {record_type.__name__}")

            records = await self._fetch(record_type)
            indexed_count[record_type.__name__] = len(records)

            for record in records:
                document = self.flattener.flatten(record)
                parent = self.flattener.parent_id(record) if record_type.is_embedded() else None
                payload.append(
                    self.index_name,
                    record_type.search_type_name(),
                    record.id,
                    document,
                    parent,
                )

        if payload:
            logger.debug(f"Bulk indexing:\n{payload.to_ndjson()}")
            response = await self._submit(payload)

            if self._has_errors(response):
                raise SyncFailedError(
                    f"Indexing {', '.join(names)} failed with the following response:\n {response}",
                    response=response,
                    failed_ids=self._failed_ids(response),
                )
        else:
            response = None
            logger.info(f"No records to index for {', '.join(names)}")

        logger.info(
            f"Indexed {len(names)} model(s) to {self.index_name}: {response}",
            extra={"index": self.index_name, "documents": len(payload)},
        )
        logger.info("Indexing Report:")
        for name, count in indexed_count.items():
            logger.info(f"Indexed {name}: {count} document(s)")

        await self.index_manager.refresh()

        return self._result(
            Operation.INDEX_DATA,
            True,
            f"Indexed {len(payload)} document(s) from {len(names)} model(s) to {self.index_name}",
            indexed_count,
        )

    async def reindex_data(self, *type_names: TypeName) -> OperationResult:
        """
        Drop the index, then create it and index the data again

        Raises:
            IndexOperationError: the index could not be dropped
            (and everything index_data raises)
        """
        logger.info(f"Reindexing: {self.index_name}")

        if not await self.index_manager.drop():
            raise IndexOperationError(f"Could not drop {self.index_name}!!!", self.index_name)

        result = await self.index_data(*type_names)
        return result.model_copy(update={"operation": Operation.REINDEX_DATA})

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _resolve(self, type_names: tuple) -> List[Type[SearchableRecord]]:
        if not type_names:
            return list(self.registry)
        return [self.registry.get(name) for name in type_names]

    async def _fetch(self, record_type: Type[SearchableRecord]) -> List[SearchableRecord]:
        """Fetch the records of one type; embedded types are collected parent by parent"""
        tags = record_type.type_tags()
        try:
            if not record_type.is_embedded():
                return list(await self.source.fetch_by_type_tag(record_type, tags))

            records: List[SearchableRecord] = []
            for parent in await self.source.fetch_all(record_type.embedded_in):
                records.extend(
                    await self.source.fetch_embedded_collection(
                        parent, record_type.embedded_as, tags
                    )
                )
            return records
        except StorageError as e:
            raise SyncFailedError(
                f"Fetching {record_type.__name__} records failed: {e.message}"
            ) from e

    async def _submit(self, payload: BulkPayload) -> Any:
        try:
            return await self.es_client.bulk(payload.lines())
        except StorageError as e:
            raise SyncFailedError(
                f"Indexing failed with the following error: {e.message}"
            ) from e

    @staticmethod
    def _has_errors(response: Any) -> bool:
        if isinstance(response, dict):
            return bool(response.get("errors")) or "error" in response
        return "error" in str(response)

    @staticmethod
    def _failed_ids(response: Any) -> List[str]:
        if not isinstance(response, dict):
            return []
        failed = []
        for item in response.get("items", []):
            for result in item.values():
                if isinstance(result, dict) and result.get("error"):
                    failed.append(str(result.get("_id")))
        return failed

    def _result(
        self,
        operation: Operation,
        success: bool,
        message: str,
        counts: Optional[Dict[str, int]] = None,
    ) -> OperationResult:
        return OperationResult(
            operation=operation,
            index_name=self.index_name,
            success=success,
            message=message,
            counts=counts or {},
        )


def create_sync_context(
    registry: MetadataRegistry,
    source: RecordSource,
    settings: Optional[Settings] = None,
) -> SyncContext:
    """
    Build a sync context and its client from settings

    Args:
        registry: registered record types
        source: data store collaborator
        settings: application settings (defaults to get_settings())

    Returns:
        SyncContext that closes its client on exit
    """
    settings = settings or get_settings()
    return SyncContext(
        registry,
        source,
        create_es_client(settings),
        settings.es_index,
        owns_client=True,
    )
