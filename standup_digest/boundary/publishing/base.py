"""
Document publisher interface.

Dependencies: pydantic
System role: Contract between the orchestrator and report destinations
"""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel


class PublishResult(BaseModel):
    """Location of a published report."""

    url: str
    document_id: str | None = None


@runtime_checkable
class DocumentPublisher(Protocol):
    """Anything that renders template replacements into a named document."""

    async def publish(self, replacements: dict[str, str], output_name: str) -> PublishResult:
        ...
