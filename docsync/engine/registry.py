"""
Metadata registry

Known record types and the merged index mapping document
"""

import copy
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterator, List, Type, Union

from elasticsearch_dsl import Document
from elasticsearch_dsl import Mapping as DSLMapping

from docsync.exceptions import ConfigError
from docsync.models.record import SearchableRecord
from docsync.utils import get_logger

logger = get_logger("engine.registry")

RecordType = Type[SearchableRecord]


def _mapping_to_dict(mappings: Any) -> Dict[str, Any]:
    """
    Normalize a mapping fragment to a plain dict

    Accepts a dict, an elasticsearch_dsl Mapping or an elasticsearch_dsl
    Document class.
    """
    if mappings is None:
        return {}
    if isinstance(mappings, DSLMapping):
        return mappings.to_dict()
    if isinstance(mappings, type) and issubclass(mappings, Document):
        return mappings._doc_type.mapping.to_dict()
    if isinstance(mappings, Mapping):
        return copy.deepcopy(dict(mappings))
    raise ConfigError(f"Unsupported mapping fragment: {type(mappings).__name__}")


class MetadataRegistry:
    """Registered record types and their mapping fragments"""

    def __init__(self) -> None:
        self._names: List[str] = []
        self._types: Dict[str, RecordType] = {}
        self._mappings: Dict[str, Dict[str, Any]] = {}

    def register(self, record_type: RecordType, mappings: Any = None) -> RecordType:
        """
        Register a record type

        Args:
            record_type: SearchableRecord subclass
            mappings: mapping fragment; defaults to the type's search_mappings

        Returns:
            the record type, so this doubles as a decorator body

        Raises:
            ConfigError: not a SearchableRecord subclass, or a bad fragment
        """
        if not (isinstance(record_type, type) and issubclass(record_type, SearchableRecord)):
            raise ConfigError(f"{record_type!r} is not a SearchableRecord subclass")

        fragment = _mapping_to_dict(
            mappings if mappings is not None else record_type.search_mappings
        )
        if record_type.is_embedded() and "_parent" not in fragment:
            fragment["_parent"] = {"type": record_type.embedded_in.search_type_name()}

        name = record_type.__name__
        self._types[name] = record_type
        self._names = sorted(set(self._names) | {name})
        self._mappings[record_type.search_type_name()] = fragment

        logger.debug(f"Registered {name} as {record_type.search_type_name()}")
        return record_type

    def record(self, mappings: Any = None) -> Callable[[RecordType], RecordType]:
        """Class decorator form of register()"""

        def decorator(record_type: RecordType) -> RecordType:
            return self.register(record_type, mappings)

        return decorator

    def get(self, name: Union[str, RecordType]) -> RecordType:
        """
        Look up a registered type by class, class name or search type name

        Raises:
            ConfigError: the type is not registered
        """
        if isinstance(name, type):
            key = name.__name__
            if self._types.get(key) is name:
                return name
            raise ConfigError(f"{key} is not a registered record type")

        if name in self._types:
            return self._types[name]
        for record_type in self._types.values():
            if record_type.search_type_name() == name:
                return record_type
        raise ConfigError(f"{name} is not a registered record type")

    @property
    def names(self) -> List[str]:
        """Registered type names, sorted"""
        return list(self._names)

    @property
    def mappings(self) -> Dict[str, Dict[str, Any]]:
        """Merged mapping document keyed by search type name"""
        return copy.deepcopy(self._mappings)

    def __contains__(self, name: object) -> bool:
        if isinstance(name, type):
            return self._types.get(name.__name__) is name
        return name in self._types

    def __iter__(self) -> Iterator[RecordType]:
        return (self._types[name] for name in self._names)

    def __len__(self) -> int:
        return len(self._names)
