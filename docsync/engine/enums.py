"""
Engine enums

Index state, relation shapes and operation names
"""

from enum import Enum


class IndexState(str, Enum):
    """Index lifecycle state"""

    ABSENT = "absent"
    PRESENT = "present"


class RelationKind(str, Enum):
    """Shape of a resolved relation"""

    ONE = "one"  # single related record
    MANY = "many"  # ordered collection of related records


class ProjectionKind(str, Enum):
    """Shape of a relation's declared projection"""

    SINGLE_FIELD = "single_field"
    MULTI_FIELD = "multi_field"


class Operation(str, Enum):
    """Operations exposed by the sync context"""

    CREATE_INDEX = "create_index"
    DROP_INDEX = "drop_index"
    REBUILD_INDEX = "rebuild_index"
    REFRESH_INDEX = "refresh_index"
    INDEX_DATA = "index_data"
    REINDEX_DATA = "reindex_data"
