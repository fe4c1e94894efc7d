"""
Searchable record model

Base class for record types that are synchronized with the search index.
A record type declares what gets indexed as class variables:

    class Article(SearchableRecord):
        search_fields = ["title", "body"]
        search_relations = {"author": "name", "tags": ["name", "slug"]}

    class Comment(SearchableRecord):
        embedded_in = Article
        embedded_as = "comments"
        search_fields = ["text"]

Raw stored values live in ``attributes``; computed values are ordinary
methods, properties or pydantic fields on the subclass.
"""

from typing import Any, ClassVar, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from docsync.exceptions import FieldResolutionError
from docsync.utils import to_snake_case

RelationFields = Union[str, List[str]]

# pydantic's own members never count as record accessors
_MODEL_MEMBERS = frozenset(dir(BaseModel))

_MISSING = object()


class _ParentLink:
    """Holds the embedding parent; compares by identity so record equality never recurses"""

    __slots__ = ("record",)

    def __init__(self, record: "SearchableRecord") -> None:
        self.record = record


class SearchableRecord(BaseModel):
    """One record supplied by the data store"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    # declared search metadata
    search_fields: ClassVar[List[str]] = []
    search_relations: ClassVar[Dict[str, RelationFields]] = {}
    search_mappings: ClassVar[Optional[Any]] = None

    # embedding metadata
    embedded_in: ClassVar[Optional[Type["SearchableRecord"]]] = None
    embedded_as: ClassVar[Optional[str]] = None
    embedded_parent_foreign_key: ClassVar[Optional[str]] = None

    id: Any
    attributes: Dict[str, Any] = Field(default_factory=dict, description="Raw stored values")
    type_tag: Optional[str] = Field(default=None, description="Polymorphic type tag (_type)")
    embedded: Dict[str, List["SearchableRecord"]] = Field(
        default_factory=dict, description="Embedded collections by accessor name"
    )

    _parent_link: Optional[_ParentLink] = PrivateAttr(default=None)

    def model_post_init(self, __context: Any) -> None:
        if self.type_tag is None and type(self).is_sub_type():
            self.type_tag = type(self).__name__

        for children in self.embedded.values():
            for child in children:
                child._parent_link = _ParentLink(self)

    # ------------------------------------------------------------------
    # type-level metadata
    # ------------------------------------------------------------------

    @classmethod
    def search_type_name(cls) -> str:
        """Type name used in the search engine (_type)"""
        return to_snake_case(cls.__name__)

    @classmethod
    def is_embedded(cls) -> bool:
        return cls.embedded_in is not None

    @classmethod
    def is_sub_type(cls) -> bool:
        """True when this type derives from another concrete record type"""
        return any(
            base is not SearchableRecord and issubclass(base, SearchableRecord)
            for base in cls.__bases__
        )

    @classmethod
    def collection_root(cls) -> Type["SearchableRecord"]:
        """The base type whose collection stores this type's records"""
        root = cls
        while root.is_sub_type():
            root = next(
                base
                for base in root.__bases__
                if base is not SearchableRecord and issubclass(base, SearchableRecord)
            )
        return root

    @classmethod
    def type_tags(cls) -> List[Optional[str]]:
        """
        Type tags a fetch for this type must match

        Subtypes only match their own tag; base types also match untagged records.
        """
        if cls.is_sub_type():
            return [cls.__name__]
        return [None, cls.__name__]

    @classmethod
    def parent_foreign_key(cls) -> Optional[str]:
        if cls.embedded_in is None:
            return None
        return cls.embedded_parent_foreign_key or to_snake_case(cls.embedded_in.__name__)

    # ------------------------------------------------------------------
    # instance access
    # ------------------------------------------------------------------

    def embedding_parent(self) -> Optional["SearchableRecord"]:
        """The record this one is embedded in, if any"""
        if self._parent_link is None:
            return None
        return self._parent_link.record

    def embedding_accessor(self) -> Optional[str]:
        return type(self).embedded_as

    def read_field(self, name: str) -> Any:
        """
        Resolve a declared field

        A raw attribute always wins over a computed accessor of the same name.

        Raises:
            FieldResolutionError: neither exists
        """
        if name in self.attributes:
            return self.attributes[name]

        value = self._accessor(name)
        if value is _MISSING:
            raise FieldResolutionError(type(self).__name__, name)
        return value

    def relation(self, name: str) -> Any:
        """
        Resolve a relation: embedded collection first, then the accessor

        Raises:
            FieldResolutionError: no such relation
        """
        if name in self.embedded:
            return list(self.embedded[name])

        value = self._accessor(name)
        if value is _MISSING:
            raise FieldResolutionError(
                type(self).__name__, name, f"{type(self).__name__} has no relation named '{name}'"
            )
        return value

    def _accessor(self, name: str) -> Any:
        if name.startswith("_") or name in _MODEL_MEMBERS:
            return _MISSING

        value = getattr(self, name, _MISSING)
        if value is not _MISSING and callable(value) and not isinstance(value, BaseModel):
            value = value()
        return value
