"""
Vault view: the client-side cache of the credential store.

The view holds the entry collection as last listed by the store, the
selected entry (by name), the draft used to compose a new entry, and a single
error slot. Every mutating operation is followed by a full reload from the
store; nothing is inserted or removed locally.

Operations never raise. A failure is written to the error slot and also
returned as an ``OperationResult``, so callers can react either way.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from .clipboard import Clipboard
from .store import Entry, StoreError, VaultStore
from .utils import blank_to_none
from . import config

logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    """Outcome of a view operation."""
    ok: bool
    value: Any = None
    error: Optional[str] = None
    cancelled: bool = False


class VaultView:
    """In-memory view over a ``VaultStore``."""

    def __init__(self, store: VaultStore, clipboard: Optional[Clipboard] = None,
                 discard_stale_loads: bool = False):
        """
        Args:
            store: The authoritative store
            clipboard: Where copy operations write to; copies fail without one
            discard_stale_loads: When True, a load result is applied only if
                no newer load was issued meanwhile. When False (the default),
                whichever load completes last wins.
        """
        self.store = store
        self.clipboard = clipboard
        self.discard_stale_loads = discard_stale_loads
        self._entries: List[Entry] = []
        self._selected_name: Optional[str] = None
        self._draft = Entry()
        self._adding = False
        self._error: Optional[str] = None
        self._load_seq = 0

    # State accessors

    @property
    def entries(self) -> List[Entry]:
        return list(self._entries)

    @property
    def selected_name(self) -> Optional[str]:
        return self._selected_name

    @property
    def selected(self) -> Optional[Entry]:
        """The selected entry, or None if nothing (still) matches the selection."""
        return self._find(self._selected_name)

    @property
    def draft(self) -> Entry:
        """The staging entry; callers edit its fields in place."""
        return self._draft

    @property
    def adding(self) -> bool:
        return self._adding

    @property
    def error(self) -> Optional[str]:
        return self._error

    def clear_error(self) -> None:
        self._error = None

    def select(self, name: str) -> bool:
        """Select the entry called ``name``. Returns False if there is none."""
        if self._find(name) is None:
            return False
        self._selected_name = name
        return True

    def clear_selection(self) -> None:
        self._selected_name = None

    def open_add(self) -> None:
        """Open the add workflow, keeping whatever the draft holds."""
        self._adding = True

    def cancel_add(self) -> None:
        """Close the add workflow and discard the draft."""
        self._adding = False
        self._draft = Entry()

    # Store-backed operations

    async def load(self) -> OperationResult:
        """Replace the collection with the store's current list."""
        self._load_seq += 1
        seq = self._load_seq

        ok, outcome = await self._call_store(self.store.list_entries)

        if self.discard_stale_loads and seq != self._load_seq:
            # A newer load owns the collection and the error slot
            logger.debug(f"Discarding result of load #{seq}; load #{self._load_seq} is newer")
            return OperationResult(ok=ok, value=self.entries, error=None if ok else outcome)

        if not ok:
            return self._fail(config.ERROR_LOAD, outcome)

        self._entries = list(outcome)
        if self._selected_name is not None and self._find(self._selected_name) is None:
            logger.debug("Selected entry is gone after reload; clearing selection")
            self._selected_name = None
        logger.debug(f"Loaded {len(self._entries)} entries")
        return OperationResult(ok=True, value=self.entries)

    async def add_entry(self, candidate: Optional[Entry] = None) -> OperationResult:
        """
        Submit ``candidate`` (the draft by default) to the store.

        On success the draft is reset, the add workflow closes and the
        collection is reloaded. On failure the draft and workflow are left as
        they were so the user can correct and retry.
        """
        if candidate is None:
            candidate = self._draft

        problem = self._validate(candidate)
        if problem:
            return self._fail(config.ERROR_ADD, problem)

        ok, outcome = await self._call_store(
            self.store.add_entry,
            candidate.name,
            candidate.username,
            candidate.password,
            url=blank_to_none(candidate.url),
            notes=blank_to_none(candidate.notes),
        )
        if not ok:
            return self._fail(config.ERROR_ADD, outcome)

        logger.info(f"Entry '{candidate.name}' added")
        self._draft = Entry()
        self._adding = False
        await self.load()
        return OperationResult(ok=True)

    async def delete_entry(self, name: str, confirmed: bool = False) -> OperationResult:
        """
        Delete the entry called ``name``. Deletion is irreversible, so the
        caller must pass ``confirmed=True`` after asking the user; otherwise
        nothing happens.
        """
        if not confirmed:
            logger.info(f"Deletion of '{name}' was not confirmed; nothing deleted")
            return OperationResult(ok=False, cancelled=True)

        ok, outcome = await self._call_store(self.store.delete_entry, name)
        if not ok:
            return self._fail(config.ERROR_DELETE, outcome)

        logger.info(f"Entry '{name}' deleted")
        if self._selected_name == name:
            self._selected_name = None
        await self.load()
        return OperationResult(ok=True)

    async def generate(self, length: int = config.PASSWORD_GENERATOR_DEFAULT_LENGTH) -> OperationResult:
        """Ask the store for a password and put it in the draft."""
        draft = self._draft
        ok, outcome = await self._call_store(self.store.generate_password, length)
        if not ok:
            return self._fail(config.ERROR_GENERATE, outcome)
        if draft is self._draft:
            draft.password = outcome
        else:
            logger.debug("Draft was reset while generating; generated password not applied")
        return OperationResult(ok=True, value=outcome)

    # Derived views

    def filter_entries(self, query: str) -> List[Entry]:
        """
        Entries whose name, username or url contains ``query``, ignoring case,
        in collection order. Notes are not searched. An empty query returns
        the whole collection.
        """
        if not query:
            return list(self._entries)
        needle = query.lower()
        return [e for e in self._entries
                if needle in e.name.lower()
                or needle in e.username.lower()
                or (e.url and needle in e.url.lower())]

    # Clipboard

    def copy(self, text: str, clear_after_ms: Optional[int] = None) -> OperationResult:
        """Write ``text`` to the clipboard."""
        if self.clipboard is None:
            return self._fail(config.ERROR_COPY, "no clipboard available")
        try:
            self.clipboard.set_text(text, clear_after_ms)
        except Exception as e:
            return self._fail(config.ERROR_COPY, str(e))
        return OperationResult(ok=True)

    def copy_username(self, name: str) -> OperationResult:
        entry = self._find(name)
        if entry is None:
            return self._fail(config.ERROR_COPY, f"no entry named '{name}'")
        return self.copy(entry.username)

    def copy_password(self, name: str) -> OperationResult:
        """Copy the password of ``name``; the clipboard clears itself later."""
        entry = self._find(name)
        if entry is None:
            return self._fail(config.ERROR_COPY, f"no entry named '{name}'")
        return self.copy(entry.password, clear_after_ms=config.CLIPBOARD_CLEAR_TIMEOUT_DEFAULT)

    # Helpers

    def _find(self, name: Optional[str]) -> Optional[Entry]:
        if name is None:
            return None
        return next((e for e in self._entries if e.name == name), None)

    @staticmethod
    def _validate(candidate: Entry) -> Optional[str]:
        if not candidate.name or not candidate.name.strip():
            return "Name is required"
        if not candidate.username or not candidate.username.strip():
            return "Username is required"
        if not candidate.password:
            return "Password is required"
        return None

    async def _call_store(self, method, *args, **kwargs) -> Tuple[bool, Any]:
        try:
            return True, await method(*args, **kwargs)
        except StoreError as e:
            return False, str(e)
        except Exception as e:
            # Stores should raise StoreError; anything else is still a store failure
            logger.error(f"Unexpected error from store: {e}", exc_info=True)
            return False, str(e) or e.__class__.__name__

    def _fail(self, template: str, detail: str) -> OperationResult:
        message = template.format(detail=detail)
        logger.warning(message)
        self._error = message
        return OperationResult(ok=False, error=message)
