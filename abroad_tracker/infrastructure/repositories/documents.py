from __future__ import annotations

from typing import Optional

from ...domain.events import ChangeBus
from ...domain.models import DocumentItem
from ...domain.repositories import ActivityRepository, DocumentsRepository, KeyValueStore
from ..keys import StoreKeys
from ..mappers import document_from_dict, document_to_dict
from .base import StoreCollection


class StoreDocumentsRepository(StoreCollection[DocumentItem], DocumentsRepository):
    def __init__(self, store: KeyValueStore, activity: ActivityRepository, *, bus: Optional[ChangeBus] = None):
        super().__init__(
            store,
            StoreKeys.DOCUMENTS,
            parse=document_from_dict,
            dump=document_to_dict,
            bus=bus,
        )
        self._activity = activity

    async def set_done(self, index: int, done: bool) -> Optional[DocumentItem]:
        documents = await self._load()
        if index < 0 or index >= len(documents):
            return None
        updated = documents[index].with_done(done)
        documents[index] = updated
        await self._write(documents)
        action = "Completed" if done else "Unchecked"
        await self._activity.append(f"{action} document: {updated.text}")
        await self._notify()
        return updated

    async def mark_all(self, done: bool) -> None:
        documents = [doc.with_done(done) for doc in await self._load()]
        await self._write(documents)
        if done:
            await self._activity.append("Marked all documents as completed")
        else:
            await self._activity.append("Cleared all document checks")
        await self._notify()
