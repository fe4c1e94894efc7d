"""
Record sources

The data store the index is synchronized from. The sync layer only needs
three queries from it; RecordSource declares them and InMemoryRecordSource
answers them from records held in memory.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, Type

from docsync.exceptions import StorageError
from docsync.models.record import SearchableRecord


class RecordSource(ABC):
    """Data store collaborator"""

    @abstractmethod
    async def fetch_by_type_tag(
        self, record_type: Type[SearchableRecord], tags: Sequence[Optional[str]]
    ) -> List[SearchableRecord]:
        """
        Fetch the top-level records of a type

        Args:
            record_type: record type whose collection is queried
            tags: accepted type tags (None matches untagged records)

        Returns:
            matching records in storage order
        """

    @abstractmethod
    async def fetch_all(self, record_type: Type[SearchableRecord]) -> List[SearchableRecord]:
        """Fetch every record of a type, whatever its type tag"""

    @abstractmethod
    async def fetch_embedded_collection(
        self,
        parent: SearchableRecord,
        accessor: str,
        tags: Sequence[Optional[str]],
    ) -> List[SearchableRecord]:
        """
        Fetch the embedded records a parent exposes through an accessor

        Args:
            parent: the embedding record
            accessor: accessor name on the parent
            tags: accepted type tags
        """


class InMemoryRecordSource(RecordSource):
    """Record source backed by a list of records"""

    def __init__(self, records: Optional[Iterable[SearchableRecord]] = None) -> None:
        self._records: List[SearchableRecord] = []
        if records:
            self.add(*records)

    def add(self, *records: SearchableRecord) -> None:
        """
        Store top-level records

        Raises:
            StorageError: an embedded record was given; those live inside their parent
        """
        for record in records:
            if type(record).is_embedded():
                raise StorageError(
                    f"{type(record).__name__} is embedded and must be stored inside its parent"
                )
            self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    async def fetch_by_type_tag(
        self, record_type: Type[SearchableRecord], tags: Sequence[Optional[str]]
    ) -> List[SearchableRecord]:
        root = record_type.collection_root()
        return [
            record
            for record in self._records
            if isinstance(record, root) and record.type_tag in tags
        ]

    async def fetch_all(self, record_type: Type[SearchableRecord]) -> List[SearchableRecord]:
        return [record for record in self._records if isinstance(record, record_type)]

    async def fetch_embedded_collection(
        self,
        parent: SearchableRecord,
        accessor: str,
        tags: Sequence[Optional[str]],
    ) -> List[SearchableRecord]:
        children = parent.embedded.get(accessor, [])
        return [child for child in children if child.type_tag in tags]
