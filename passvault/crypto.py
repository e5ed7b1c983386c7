"""
Cryptographic operations for the password manager.

NOTICE:
This module handles encryption/decryption of vault data and password
generation. It must only be used for personal password management on devices
you own or administer.
"""

import os
import secrets
import logging
from typing import Tuple
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from argon2.low_level import hash_secret_raw, Type

from . import config

logger = logging.getLogger(__name__)


class CryptoManager:
    """Handles all cryptographic operations for the password manager."""

    def __init__(self, time_cost: int = config.ARGON2_TIME_COST,
                 memory_cost: int = config.ARGON2_MEMORY_COST,
                 parallelism: int = config.ARGON2_PARALLELISM):
        """Initialize the crypto manager with Argon2id parameters."""
        self.time_cost = time_cost
        self.memory_cost = memory_cost
        self.parallelism = parallelism

    def generate_salt(self) -> bytes:
        """Generate a cryptographically secure random salt."""
        return os.urandom(config.SALT_SIZE)

    def derive_key(self, password: str, salt: bytes) -> bytes:
        """
        Derive an encryption key from a password using Argon2id.

        Args:
            password: The master password
            salt: Random salt for key derivation

        Returns:
            32-byte encryption key
        """
        return hash_secret_raw(
            secret=password.encode('utf-8'),
            salt=salt,
            time_cost=self.time_cost,
            memory_cost=self.memory_cost,
            parallelism=self.parallelism,
            hash_len=config.KEY_SIZE,
            type=Type.ID
        )

    def encrypt(self, plaintext: bytes, key: bytes) -> Tuple[bytes, bytes, bytes]:
        """
        Encrypt data using AES-256-GCM.

        Returns:
            Tuple of (ciphertext, nonce, tag)
        """
        nonce = os.urandom(config.NONCE_SIZE)
        sealed = AESGCM(key).encrypt(nonce, plaintext, None)
        # AESGCM appends the 16-byte tag to the ciphertext
        return sealed[:-16], nonce, sealed[-16:]

    def decrypt(self, ciphertext: bytes, key: bytes, nonce: bytes, tag: bytes) -> bytes:
        """
        Decrypt data using AES-256-GCM.

        Raises:
            InvalidTag: If authentication fails (wrong key or tampered data)
        """
        return AESGCM(key).decrypt(nonce, ciphertext + tag, None)

    def generate_password(self, length: int) -> str:
        """
        Generate a random password.

        The length is clamped to the configured generator bounds, so callers
        always get a usable password back.
        """
        clamped = max(config.PASSWORD_GENERATOR_MIN_LENGTH,
                      min(config.PASSWORD_GENERATOR_MAX_LENGTH, int(length)))
        if clamped != length:
            logger.debug(f"Requested password length {length} clamped to {clamped}")
        chars = config.PASSWORD_GENERATOR_CHARSET
        return ''.join(secrets.choice(chars) for _ in range(clamped))

    def clear_bytes(self, data: bytearray) -> None:
        """Attempt to clear sensitive bytes from memory."""
        if isinstance(data, bytearray):
            for i in range(len(data)):
                data[i] = 0
