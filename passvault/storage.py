"""
Storage management for the password manager.

NOTICE:
This module handles secure storage of passwords. All data is encrypted locally
and never transmitted. Use only on devices you own or administer.
"""

import os
import json
import struct
import datetime
import threading
import stat
import platform
import shutil
import logging
from typing import List, Dict, Optional, Any

from cryptography.exceptions import InvalidTag

from .crypto import CryptoManager
from . import config

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('name', 'username', 'password')


class StorageManager:

    """Manages encrypted storage of credential records, keyed by name."""
    # File format version

    VERSION = 1
    MAGIC_BYTES = b'PVLT'  # PassVault

    def __init__(self, filepath: str, crypto: Optional[CryptoManager] = None):

        """
        Initialize storage manager.
        Args:
            filepath: Path to the encrypted storage file
            crypto: Crypto manager to use; a default one is created if omitted
        """
        self.filepath = filepath
        self.crypto = crypto or CryptoManager()
        self._lock = threading.Lock()
        self._key: Optional[bytearray] = None
        self._salt: Optional[bytes] = None
        self._entries: List[Dict[str, Any]] = []

    def create_new_vault(self, master_password: str) -> None:
        """
        Create a new, empty password vault.
        Args:
            master_password: The master password for encryption
        """

        with self._lock:
            self._salt = self.crypto.generate_salt()
            self._key = bytearray(self.crypto.derive_key(master_password, self._salt))
            self._entries = []
            self._save()
        logger.info(f"Created new vault at {self.filepath}")

    def unlock(self, master_password: str) -> bool:
        """
        Unlock an existing vault.
        Args:
            master_password: The master password
        Returns:
            True if unlock successful, False otherwise
        """
        with self._lock:
            if not os.path.exists(self.filepath):
                logger.warning(f"Unlock: Vault file not found: {self.filepath}")
                return False

            try:
                with open(self.filepath, 'rb') as f:
                    magic = f.read(4)
                    if magic != self.MAGIC_BYTES:
                        logger.warning(f"Unlock: Magic bytes mismatch. Expected {self.MAGIC_BYTES}, got {magic}")
                        return False

                    version = struct.unpack('<I', f.read(4))[0]
                    if version != self.VERSION:
                        logger.warning(f"Unlock: Version mismatch. Expected {self.VERSION}, got {version}")
                        return False

                    salt = self._read_block(f)
                    nonce = self._read_block(f)
                    tag = self._read_block(f)
                    ciphertext = self._read_block(f)

                key = bytearray(self.crypto.derive_key(master_password, salt))
                plaintext = self.crypto.decrypt(ciphertext, key, nonce, tag)
                data = json.loads(plaintext.decode('utf-8'))

                self._salt = salt
                self._key = key
                self._entries = list(data['entries'])
                logger.info(f"Unlocked vault with {len(self._entries)} entries")
                return True

            except InvalidTag:
                logger.warning("Unlock: Wrong master password or corrupted vault")
            except (OSError, ValueError, KeyError, struct.error) as e:
                logger.error(f"Unlock: Error during unlock process: {e}", exc_info=True)

            self._key = None
            self._salt = None
            self._entries = []
            return False

    @staticmethod
    def _read_block(f) -> bytes:
        size = struct.unpack('<I', f.read(4))[0]
        return f.read(size)

    def is_unlocked(self) -> bool:
        """
        Check if vault is unlocked."""
        return self._key is not None

    def lock(self) -> None:
        """
        Lock the vault and clear sensitive data."""

        with self._lock:
            if self._key:
                self.crypto.clear_bytes(self._key)
            self._key = None
            self._entries = []

    def get_entries(self) -> List[Dict[str, Any]]:
        """
        Get all entry records, in insertion order."""

        with self._lock:
            if not self.is_unlocked():
                raise RuntimeError("Vault is locked")
            return [dict(e) for e in self._entries]

    def add_entry(self, entry: Dict[str, Any]) -> None:
        """
        Add a new entry record. Names are unique; a duplicate is rejected."""
        for field_name in REQUIRED_FIELDS:
            if not entry.get(field_name):
                raise ValueError(f"Field '{field_name}' is required")

        with self._lock:
            if not self.is_unlocked():
                raise RuntimeError("Vault is locked")
            if any(e['name'] == entry['name'] for e in self._entries):
                raise ValueError(f"An entry named '{entry['name']}' already exists")
            record = {
                'name': entry['name'],
                'username': entry['username'],
                'password': entry['password'],
                'url': entry.get('url') or None,
                'notes': entry.get('notes') or None,
                'date_added': datetime.datetime.now().isoformat(),
            }
            self._entries.append(record)
            try:
                self._save()
            except Exception:
                self._entries.pop()
                raise
        logger.info(f"Added entry '{entry['name']}'")

    def delete_entry(self, name: str) -> bool:
        """
        Delete an entry by name.
        Returns:
            True if an entry was removed, False if none had that name
        """
        with self._lock:
            if not self.is_unlocked():
                raise RuntimeError("Vault is locked")
            remaining = [e for e in self._entries if e['name'] != name]
            if len(remaining) == len(self._entries):
                return False
            previous = self._entries
            self._entries = remaining
            try:
                self._save()
            except Exception:
                self._entries = previous
                raise
        logger.info(f"Deleted entry '{name}'")
        return True

    def generate_password(self, length: int) -> str:
        """
        Generate a password; does not require the vault to be unlocked."""
        return self.crypto.generate_password(length)

    def _save(self) -> None:
        """
        Save entries to encrypted file."""
        if not self.is_unlocked():
            raise RuntimeError("Vault is locked")

        data = {
            'entries': self._entries,
            'metadata': {
                'version': self.VERSION,
                'last_modified': datetime.datetime.now().isoformat()
            }
        }

        plaintext = json.dumps(data, indent=2).encode('utf-8')
        ciphertext, nonce, tag = self.crypto.encrypt(plaintext, self._key)

        directory = os.path.dirname(self.filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)

        tmp_path = self.filepath + '.tmp'
        try:
            with open(tmp_path, 'wb') as f:
                # Header
                f.write(self.MAGIC_BYTES)
                f.write(struct.pack('<I', self.VERSION))

                for block in (self._salt, nonce, tag, ciphertext):
                    f.write(struct.pack('<I', len(block)))
                    f.write(block)

            # Atomic replace using shutil.move
            shutil.move(tmp_path, self.filepath)

            if not self._set_file_permissions(self.filepath):
                logger.warning(f"Could not restrict permissions on vault file: {self.filepath}")

        except Exception as e:
            logger.error(f"Error saving vault file {self.filepath}: {e}", exc_info=True)
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def _set_file_permissions(self, filepath: str) -> bool:
        """
        Set file to be readable/writable by owner only."""
        if platform.system() == 'Windows':
            # NTFS ACLs are not managed here; the file inherits its directory's ACL
            return False
        os.chmod(filepath, stat.S_IRUSR | stat.S_IWUSR)  # 600
        return True


def default_vault_path() -> str:
    """Get the default path for the vault file, creating its directory."""
    app_dir = os.path.join(os.path.expanduser("~"), config.CONFIG_DIR_NAME)
    os.makedirs(app_dir, exist_ok=True)
    return os.path.join(app_dir, config.DEFAULT_VAULT_FILE)


def open_vault(master_password: str, filepath: Optional[str] = None,
               crypto: Optional[CryptoManager] = None) -> StorageManager:
    """
    Open the vault at ``filepath`` (the default location if omitted).

    A missing file means a new, empty vault is created with
    ``master_password``. An existing file must unlock with it.

    Raises:
        ValueError: If an existing vault cannot be unlocked
    """
    storage = StorageManager(filepath or default_vault_path(), crypto=crypto)
    if not os.path.exists(storage.filepath):
        storage.create_new_vault(master_password)
        return storage
    if not storage.unlock(master_password):
        raise ValueError(f"Could not unlock vault at {storage.filepath}")
    return storage
