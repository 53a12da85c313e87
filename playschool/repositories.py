"""Repository capability over one entity type: find, get, insert, update, delete.

`DocumentRepository` is backed by a Beanie document (MongoDB);
`MemoryRepository` keeps records in a dict and is used by the tests.
Both hand out the same pydantic "Out" records with a string `id`.
"""
from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

from beanie import Document, PydanticObjectId
from pydantic import BaseModel

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def safe_object_id(value: str | None) -> PydanticObjectId | None:
    if not value:
        return None
    try:
        return PydanticObjectId(value)
    except Exception:
        return None


class Repository(ABC, Generic[RecordT]):
    @abstractmethod
    async def find(self, **filters: Any) -> list[RecordT]:
        """Records whose fields equal every given filter value."""

    @abstractmethod
    async def get(self, record_id: str) -> Optional[RecordT]:
        ...

    @abstractmethod
    async def insert(self, data: dict) -> RecordT:
        ...

    @abstractmethod
    async def update(self, record_id: str, changes: dict) -> Optional[RecordT]:
        ...

    @abstractmethod
    async def delete(self, record_id: str) -> bool:
        ...

    async def find_one(self, **filters: Any) -> Optional[RecordT]:
        found = await self.find(**filters)
        return found[0] if found else None


class DocumentRepository(Repository[RecordT]):
    def __init__(self, document: type[Document], record: type[RecordT]):
        self.document = document
        self.record = record

    def _to_record(self, doc: Document) -> RecordT:
        return self.record.model_validate({**doc.model_dump(exclude={"id", "revision_id"}), "id": str(doc.id)})

    async def _get_document(self, record_id: str) -> Optional[Document]:
        oid = safe_object_id(record_id)
        if not oid:
            return None
        return await self.document.get(oid)

    async def find(self, **filters: Any) -> list[RecordT]:
        query = {key: getattr(value, "value", value) for key, value in filters.items()}
        docs = await self.document.find(query).to_list()
        return [self._to_record(d) for d in docs]

    async def get(self, record_id: str) -> Optional[RecordT]:
        doc = await self._get_document(record_id)
        return self._to_record(doc) if doc else None

    async def insert(self, data: dict) -> RecordT:
        doc = self.document(**data)
        await doc.insert()
        return self._to_record(doc)

    async def update(self, record_id: str, changes: dict) -> Optional[RecordT]:
        doc = await self._get_document(record_id)
        if not doc:
            return None
        for key, value in changes.items():
            setattr(doc, key, value)
        if "updated_at" in type(doc).model_fields:
            doc.updated_at = datetime.utcnow()
        await doc.save()
        return self._to_record(doc)

    async def delete(self, record_id: str) -> bool:
        doc = await self._get_document(record_id)
        if not doc:
            return False
        await doc.delete()
        return True


class MemoryRepository(Repository[RecordT]):
    def __init__(self, record: type[RecordT], records: list[RecordT] | None = None):
        self.record = record
        self._items: dict[str, RecordT] = {}
        for item in records or []:
            self._items[item.id] = item

    async def find(self, **filters: Any) -> list[RecordT]:
        return [
            item.model_copy()
            for item in self._items.values()
            if all(getattr(item, key, None) == value for key, value in filters.items())
        ]

    async def get(self, record_id: str) -> Optional[RecordT]:
        item = self._items.get(record_id)
        return item.model_copy() if item else None

    async def insert(self, data: dict) -> RecordT:
        item = self.record.model_validate({**data, "id": uuid.uuid4().hex[:24]})
        self._items[item.id] = item
        return item.model_copy()

    async def update(self, record_id: str, changes: dict) -> Optional[RecordT]:
        item = self._items.get(record_id)
        if not item:
            return None
        updated = self.record.model_validate({**item.model_dump(), **changes})
        self._items[record_id] = updated
        return updated.model_copy()

    async def delete(self, record_id: str) -> bool:
        return self._items.pop(record_id, None) is not None
