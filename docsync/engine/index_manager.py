"""
Index lifecycle manager

Existence checks, creation, deletion, rebuild and refresh of the synchronized index
"""

from docsync.core.storage.elasticsearch import ElasticsearchClient
from docsync.engine.enums import IndexState
from docsync.engine.registry import MetadataRegistry
from docsync.exceptions import (
    IndexConflictError,
    IndexNotFoundError,
    IndexOperationError,
    StorageError,
)
from docsync.utils import get_logger

logger = get_logger("engine.index_manager")


class IndexManager:
    """The only component that creates, deletes or refreshes the index"""

    def __init__(
        self,
        es_client: ElasticsearchClient,
        index_name: str,
        registry: MetadataRegistry,
    ) -> None:
        self.es_client = es_client
        self.index_name = index_name
        self.registry = registry

    async def exists(self) -> bool:
        """
        Check that the index exists and is available

        Raises:
            IndexOperationError: the search engine could not be reached
        """
        try:
            return await self.es_client.index_exists(self.index_name)
        except StorageError as e:
            raise IndexOperationError(
                f"Could not check {self.index_name}: {e.message}", self.index_name
            ) from e

    async def state(self) -> IndexState:
        return IndexState.PRESENT if await self.exists() else IndexState.ABSENT

    async def create(self) -> bool:
        """
        Create the index with the registry's merged mappings

        Returns:
            True once the index exists

        Raises:
            IndexConflictError: the index already exists
            IndexOperationError: creation failed or the index did not appear
        """
        if await self.exists():
            raise IndexConflictError(
                f"{self.index_name} already exists !! use rebuild_index to rebuild the index.",
                self.index_name,
            )

        logger.info(f"Creating index: {self.index_name}")

        try:
            result = await self.es_client.create_index(self.index_name, self.registry.mappings)
        except StorageError as e:
            raise IndexOperationError(
                f"Could not create {self.index_name}: {e.message}", self.index_name
            ) from e

        logger.info(f"Created {self.index_name}: {result}")

        if not await self.exists():
            raise IndexOperationError(f"Could not create {self.index_name}!!!", self.index_name)
        return True

    async def drop(self) -> bool:
        """
        Delete the index

        Returns:
            True if the index is gone afterwards (also when it never existed)

        Raises:
            IndexOperationError: the delete request failed
        """
        if not await self.exists():
            return True

        logger.debug(f"Dropping index: {self.index_name}")

        try:
            result = await self.es_client.delete_index(self.index_name)
        except StorageError as e:
            raise IndexOperationError(
                f"Could not drop {self.index_name}: {e.message}", self.index_name
            ) from e

        logger.debug(f"Dropped {self.index_name}: {result}")

        return not await self.exists()

    async def rebuild(self) -> bool:
        """
        Drop and re-create the index without indexing any data

        Raises:
            IndexNotFoundError: the index does not exist
            IndexOperationError: the drop did not remove the index
        """
        if not await self.exists():
            raise IndexNotFoundError(
                f"{self.index_name} does not exist !! use create_index to create the index first.",
                self.index_name,
            )

        logger.info(f"Rebuilding index: {self.index_name}")

        if not await self.drop():
            raise IndexOperationError(f"Could not drop {self.index_name}!!!", self.index_name)

        return await self.create()

    async def refresh(self) -> None:
        """
        Refresh the index so searches see newly written documents

        Raises:
            IndexOperationError: the refresh request failed
        """
        logger.debug(f"Refreshing: {self.index_name}")

        try:
            result = await self.es_client.refresh_index(self.index_name)
        except StorageError as e:
            raise IndexOperationError(
                f"Could not refresh {self.index_name}: {e.message}", self.index_name
            ) from e

        logger.info(f"Refreshed {self.index_name}: {result}")
