"""Shared fixtures and fakes for the vault tests."""

from typing import List, Optional

import pytest

from passvault.clipboard import Clipboard
from passvault.crypto import CryptoManager
from passvault.storage import StorageManager
from passvault.store import Entry, StoreError, VaultStore


class FakeStore(VaultStore):
    """In-memory store that records calls and can be told to fail."""

    def __init__(self, entries: Optional[List[Entry]] = None):
        self.entries: List[Entry] = list(entries or [])
        self.calls = []
        self.fail = {}  # operation name -> error message
        self.next_passwords: List[str] = []

    def _maybe_fail(self, operation):
        if operation in self.fail:
            raise StoreError(self.fail[operation])

    async def list_entries(self):
        self.calls.append(("list",))
        self._maybe_fail("list")
        return [Entry(**e.to_dict()) for e in self.entries]

    async def add_entry(self, name, username, password, url=None, notes=None):
        self.calls.append(("add", name, username, password, url, notes))
        self._maybe_fail("add")
        if any(e.name == name for e in self.entries):
            raise StoreError(f"An entry named '{name}' already exists")
        self.entries.append(Entry(name, username, password, url, notes))

    async def delete_entry(self, name):
        self.calls.append(("delete", name))
        self._maybe_fail("delete")
        self.entries = [e for e in self.entries if e.name != name]

    async def generate_password(self, length):
        self.calls.append(("generate", length))
        self._maybe_fail("generate")
        if self.next_passwords:
            return self.next_passwords.pop(0)
        return "p" * length


class RecordingClipboard(Clipboard):
    def __init__(self, error: Optional[Exception] = None):
        self.writes = []
        self.error = error

    def set_text(self, text, clear_after_ms=None):
        if self.error is not None:
            raise self.error
        self.writes.append((text, clear_after_ms))


@pytest.fixture
def sample_entries():
    return [
        Entry(name="Bank", username="alice", password="x", url="bank.com"),
        Entry(name="Email", username="alice", password="y"),
        Entry(name="Forum", username="bob", password="z", url="https://forum.example.org",
              notes="alice's old account"),
    ]


@pytest.fixture
def store(sample_entries):
    return FakeStore(sample_entries)


@pytest.fixture
def clipboard():
    return RecordingClipboard()


@pytest.fixture
def fast_crypto():
    """Argon2 with minimal cost so tests stay quick."""
    return CryptoManager(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def storage(tmp_path, fast_crypto):
    manager = StorageManager(str(tmp_path / "vault.enc"), crypto=fast_crypto)
    manager.create_new_vault("master-password")
    return manager
