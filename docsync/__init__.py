"""docsync - search index synchronization

Keeps a full-text search index in step with records from a document store
"""

__version__ = "0.1.0"

from docsync.engine import (
    BulkPayload,
    DocumentFlattener,
    IndexManager,
    IndexState,
    MetadataRegistry,
    Operation,
    OperationResult,
    SyncContext,
    create_sync_context,
)
from docsync.exceptions import (
    ConfigError,
    DocSyncError,
    FieldResolutionError,
    IndexConflictError,
    IndexLifecycleError,
    IndexNotFoundError,
    IndexOperationError,
    StorageError,
    SyncFailedError,
)
from docsync.models import InMemoryRecordSource, RecordSource, SearchableRecord

__all__ = [
    # Version
    "__version__",
    # Engine
    "SyncContext",
    "create_sync_context",
    "IndexManager",
    "MetadataRegistry",
    "DocumentFlattener",
    "BulkPayload",
    "IndexState",
    "Operation",
    "OperationResult",
    # Records
    "SearchableRecord",
    "RecordSource",
    "InMemoryRecordSource",
    # Exceptions
    "DocSyncError",
    "ConfigError",
    "StorageError",
    "IndexLifecycleError",
    "IndexConflictError",
    "IndexNotFoundError",
    "IndexOperationError",
    "FieldResolutionError",
    "SyncFailedError",
]
