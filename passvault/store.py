"""
Store boundary for the vault view.

The view reaches credentials only through the four coroutines of
``VaultStore``: list, add, delete and generate. Any failure crosses this
boundary as a ``StoreError`` whose message is shown to the user verbatim.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from .storage import StorageManager

logger = logging.getLogger(__name__)


@dataclass
class Entry:
    """Represents a single credential entry."""
    name: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    url: Optional[str] = None
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Entry':
        """Create from dictionary."""
        return cls(
            name=data['name'],
            username=data['username'],
            password=data['password'],
            url=data.get('url'),
            notes=data.get('notes'),
        )


class StoreError(Exception):
    """A store operation failed; the message is the human-readable detail."""


class VaultStore(ABC):
    """The authoritative credential store, as seen by the vault view."""

    @abstractmethod
    async def list_entries(self) -> List[Entry]:
        """Return every entry, in store order."""

    @abstractmethod
    async def add_entry(self, name: str, username: str, password: str,
                        url: Optional[str] = None, notes: Optional[str] = None) -> None:
        """Add a new entry."""

    @abstractmethod
    async def delete_entry(self, name: str) -> None:
        """Delete the entry called ``name``."""

    @abstractmethod
    async def generate_password(self, length: int) -> str:
        """Return a freshly generated password of ``length`` characters."""


class StorageBackedStore(VaultStore):
    """
    ``VaultStore`` over a local, unlocked ``StorageManager``.

    Storage work (file I/O, encryption) is blocking, so every call runs in a
    worker thread and the event loop stays responsive.
    """

    def __init__(self, storage: StorageManager):
        self.storage = storage

    async def _call(self, operation: str, func, *args):
        logger.debug(f"Store operation '{operation}' started")
        try:
            result = await asyncio.to_thread(func, *args)
        except Exception as e:
            logger.warning(f"Store operation '{operation}' failed: {e}")
            raise StoreError(str(e)) from e
        logger.debug(f"Store operation '{operation}' finished")
        return result

    async def list_entries(self) -> List[Entry]:
        records = await self._call("list", self.storage.get_entries)
        return [Entry.from_dict(r) for r in records]

    async def add_entry(self, name: str, username: str, password: str,
                        url: Optional[str] = None, notes: Optional[str] = None) -> None:
        record = Entry(name=name, username=username, password=password,
                       url=url, notes=notes).to_dict()
        await self._call("add", self.storage.add_entry, record)

    async def delete_entry(self, name: str) -> None:
        removed = await self._call("delete", self.storage.delete_entry, name)
        if not removed:
            logger.info(f"Delete of '{name}' found no such entry; nothing to remove")

    async def generate_password(self, length: int) -> str:
        return await self._call("generate", self.storage.generate_password, length)
