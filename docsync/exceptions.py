"""
docsync exception definitions

All custom exceptions inherit from DocSyncError
"""

from typing import Any, List, Optional


class DocSyncError(Exception):
    """Base exception for docsync"""

    def __init__(self, message: str, *args: object) -> None:
        self.message = message
        super().__init__(message, *args)


class ConfigError(DocSyncError):
    """Configuration error"""

    pass


class StorageError(DocSyncError):
    """Storage layer error (search engine transport or data store)"""

    pass


class IndexLifecycleError(DocSyncError):
    """Base class for index lifecycle errors"""

    def __init__(self, message: str, index_name: Optional[str] = None) -> None:
        self.index_name = index_name
        super().__init__(message)


class IndexConflictError(IndexLifecycleError):
    """Create attempted on an index that already exists"""

    pass


class IndexNotFoundError(IndexLifecycleError):
    """Operation requiring an existing index attempted on an absent one"""

    pass


class IndexOperationError(IndexLifecycleError):
    """Drop, create or refresh did not reach the expected post-condition"""

    pass


class FieldResolutionError(DocSyncError):
    """A declared field has neither a raw attribute nor an accessor"""

    def __init__(self, record_type: str, field: str, message: Optional[str] = None) -> None:
        self.record_type = record_type
        self.field = field
        super().__init__(
            message or f"{record_type} has no attribute or accessor named '{field}'"
        )


class SyncFailedError(DocSyncError):
    """Bulk write or record fetch failed"""

    def __init__(
        self,
        message: str,
        response: Optional[Any] = None,
        failed_ids: Optional[List[str]] = None,
    ) -> None:
        self.response = response
        self.failed_ids = failed_ids or []
        super().__init__(message)
