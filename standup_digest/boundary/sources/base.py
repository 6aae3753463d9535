"""
Document source interface.

Dependencies: langchain_core.documents
System role: Contract between the orchestrator and activity sources
"""

import json
from typing import Any, Protocol, runtime_checkable

from langchain_core.documents import Document


@runtime_checkable
class DocumentSource(Protocol):
    """Anything that turns a query into summarizable documents."""

    async def fetch_documents(self, **query: Any) -> list[Document]:
        ...


def to_document(data: Any, metadata: dict[str, str]) -> Document:
    """One document per source: the payload as pretty-printed JSON."""
    return Document(
        page_content=json.dumps(data, indent=2, ensure_ascii=False, default=str),
        metadata=metadata,
    )
