"""
Record models and data sources
"""

from docsync.models.record import RelationFields, SearchableRecord
from docsync.models.source import InMemoryRecordSource, RecordSource

__all__ = [
    "SearchableRecord",
    "RelationFields",
    "RecordSource",
    "InMemoryRecordSource",
]
