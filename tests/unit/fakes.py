"""Test doubles for the search engine client."""

from typing import Any, Dict, List, Optional, Set, Tuple

from docsync.exceptions import StorageError

INDEX_NAME = "docs"


class FakeSearchEngine:
    """Stands in for ElasticsearchClient and records every call."""

    def __init__(
        self,
        present: bool = False,
        bulk_response: Optional[Dict[str, Any]] = None,
        create_succeeds: bool = True,
        drop_succeeds: bool = True,
        fail_on: Optional[Set[str]] = None,
    ) -> None:
        self.present = present
        self.bulk_response = bulk_response or {"took": 3, "errors": False, "items": []}
        self.create_succeeds = create_succeeds
        self.drop_succeeds = drop_succeeds
        self.fail_on = fail_on or set()
        self.calls: List[Tuple[str, str]] = []
        self.created_mappings: Optional[Dict[str, Any]] = None
        self.operations: Optional[List[str]] = None
        self.closed = False

    def _record(self, name: str, index: str) -> None:
        self.calls.append((name, index))
        if name in self.fail_on:
            raise StorageError(f"{name} failed: connection refused")

    @property
    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    @property
    def mutating_calls(self) -> List[str]:
        return [name for name in self.call_names if name != "exists"]

    async def index_exists(self, index: str) -> bool:
        self._record("exists", index)
        return self.present

    async def create_index(
        self, index: str, mappings: Dict[str, Any], settings: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        self._record("create", index)
        self.created_mappings = mappings
        if self.create_succeeds:
            self.present = True
        return {"acknowledged": True, "index": index}

    async def delete_index(self, index: str) -> bool:
        self._record("delete", index)
        if self.drop_succeeds:
            self.present = False
        return True

    async def refresh_index(self, index: str) -> Dict[str, Any]:
        self._record("refresh", index)
        return {"_shards": {"total": 1, "successful": 1, "failed": 0}}

    async def bulk(self, operations: List[str]) -> Dict[str, Any]:
        self._record("bulk", "_bulk")
        self.operations = list(operations)
        return self.bulk_response

    async def close(self) -> None:
        self.closed = True
