"""
Bulk payload builder

Accumulates action/document pairs in the newline-delimited bulk format
"""

import json
import re
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel

_NEWLINES = re.compile(r"\r?\n")


def _json_default(value: Any) -> Any:
    """JSON fallback for values the json module does not know"""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_document(document: Dict[str, Any]) -> str:
    """Serialize a document to one line of JSON"""
    return _NEWLINES.sub(" ", json.dumps(document, ensure_ascii=False, default=_json_default))


class BulkPayload:
    """Ordered bulk request body"""

    def __init__(self) -> None:
        self._pairs: List[Tuple[str, str]] = []

    @staticmethod
    def action_line(
        index_name: str,
        type_name: str,
        doc_id: Any,
        parent_id: Optional[Any] = None,
    ) -> str:
        meta: Dict[str, Any] = {"_index": index_name, "_type": type_name, "_id": str(doc_id)}
        if parent_id is not None:
            meta["_parent"] = str(parent_id)
        meta["refresh"] = "true"
        return json.dumps({"index": meta}, ensure_ascii=False)

    def append(
        self,
        index_name: str,
        type_name: str,
        doc_id: Any,
        document: Dict[str, Any],
        parent_id: Optional[Any] = None,
    ) -> str:
        """
        Add one action/document pair

        Args:
            index_name: target index
            type_name: search type name
            doc_id: document id
            document: flattened document
            parent_id: parent id for embedded records

        Returns:
            the two-line wire fragment that was appended
        """
        action = self.action_line(index_name, type_name, doc_id, parent_id)
        body = serialize_document(document)
        self._pairs.append((action, body))
        return f"{action}\n{body}\n"

    def lines(self) -> List[str]:
        """Payload lines, action and document alternating"""
        return [line for pair in self._pairs for line in pair]

    def to_ndjson(self) -> str:
        return "".join(f"{action}\n{body}\n" for action, body in self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)
