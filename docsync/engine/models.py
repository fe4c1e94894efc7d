"""
Engine data models
"""

from typing import Dict

from pydantic import BaseModel, Field

from docsync.engine.enums import Operation


class OperationResult(BaseModel):
    """Outcome of one exposed operation"""

    operation: Operation
    index_name: str
    success: bool
    message: str = Field(description="Human-readable log line")
    counts: Dict[str, int] = Field(
        default_factory=dict, description="Documents indexed per record type"
    )

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def __str__(self) -> str:
        return self.message
