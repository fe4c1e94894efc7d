"""
Storage module

Elasticsearch client used by the index lifecycle and sync layers
"""

from docsync.core.storage.elasticsearch import (
    ESConfig,
    ElasticsearchClient,
    create_es_client,
)

__all__ = [
    "ESConfig",
    "ElasticsearchClient",
    "create_es_client",
]
