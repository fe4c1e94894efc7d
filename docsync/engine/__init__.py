"""
docsync engine

Registry, flattening, bulk payloads, index lifecycle and the sync context
"""

from docsync.engine.bulk import BulkPayload, serialize_document
from docsync.engine.context import SyncContext, create_sync_context
from docsync.engine.enums import IndexState, Operation, ProjectionKind, RelationKind
from docsync.engine.flattener import DocumentFlattener
from docsync.engine.index_manager import IndexManager
from docsync.engine.models import OperationResult
from docsync.engine.registry import MetadataRegistry

__all__ = [
    # Sync
    "SyncContext",
    "create_sync_context",
    "IndexManager",
    "MetadataRegistry",
    # Documents
    "DocumentFlattener",
    "BulkPayload",
    "serialize_document",
    # Enums
    "IndexState",
    "Operation",
    "RelationKind",
    "ProjectionKind",
    # Models
    "OperationResult",
]
