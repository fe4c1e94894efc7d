"""
Document flattener

Turns one record into the flat document sent to the search index
"""

from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from docsync.engine.enums import ProjectionKind, RelationKind
from docsync.exceptions import FieldResolutionError
from docsync.models.record import RelationFields, SearchableRecord


class DocumentFlattener:
    """Builds flattened documents from records"""

    def flatten(self, record: SearchableRecord) -> Dict[str, Any]:
        """
        Flatten a record

        Key order is stable: id, declared fields, relations, then the parent
        keys of embedded records.

        Args:
            record: the record to flatten

        Returns:
            flat document

        Raises:
            FieldResolutionError: a declared field or relation cannot be resolved
        """
        record_type = type(record)
        document: Dict[str, Any] = {"id": record.id}

        for field in record_type.search_fields:
            document[field] = record.read_field(field)

        for relation, fields in record_type.search_relations.items():
            related = record.relation(relation)
            if self.is_collection(related):
                related = list(related)
            kind = self.relation_kind(related)
            if kind is None:
                continue
            if kind is RelationKind.MANY:
                document[relation] = [self.project(item, fields) for item in related]
            else:
                document[relation] = self.project(related, fields)

        if record_type.is_embedded():
            parent_id = self.parent_id(record)
            document[f"{record_type.parent_foreign_key()}_id"] = parent_id
            document["_parent"] = parent_id

        return document

    @staticmethod
    def is_collection(value: Any) -> bool:
        """A to-many relation value: any iterable other than text, a mapping or a single model"""
        if isinstance(value, (str, bytes, Mapping, BaseModel)):
            return False
        return isinstance(value, Iterable)

    @staticmethod
    def relation_kind(related: Any) -> Optional[RelationKind]:
        """Shape of a resolved relation, None when there is nothing to index"""
        if related is None:
            return None
        if DocumentFlattener.is_collection(related):
            return RelationKind.MANY if related else None
        return RelationKind.ONE

    @staticmethod
    def projection_kind(fields: RelationFields) -> ProjectionKind:
        if isinstance(fields, str):
            return ProjectionKind.SINGLE_FIELD
        return ProjectionKind.MULTI_FIELD

    def project(self, item: Any, fields: RelationFields) -> Dict[str, Any]:
        """Project the declared fields of one related record"""
        if self.projection_kind(fields) is ProjectionKind.SINGLE_FIELD:
            names: List[str] = [fields]  # type: ignore[list-item]
        else:
            names = list(fields)
        return {name: self._read(item, name) for name in names}

    @staticmethod
    def parent_id(record: SearchableRecord) -> str:
        """
        Identifier of an embedded record's parent, as a string

        Raises:
            FieldResolutionError: the record is not linked to a parent
        """
        parent = record.embedding_parent()
        foreign_key = type(record).parent_foreign_key() or "parent"
        if parent is None:
            raise FieldResolutionError(
                type(record).__name__,
                foreign_key,
                f"Embedded {type(record).__name__} {record.id} has no parent record",
            )
        return str(parent.id)

    @staticmethod
    def _read(item: Any, name: str) -> Any:
        if isinstance(item, SearchableRecord):
            return item.read_field(name)
        if isinstance(item, Mapping):
            if name in item:
                return item[name]
        elif hasattr(item, name):
            value = getattr(item, name)
            return value() if callable(value) else value
        raise FieldResolutionError(type(item).__name__, name)
