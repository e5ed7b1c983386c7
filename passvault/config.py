"""
Configuration constants for the PassVault application.
"""


# Security Settings
SALT_SIZE = 16  # Use: Size of the cryptographic salt in bytes for key derivation. Type: int. Range: At least 16 bytes (128 bits).
KEY_SIZE = 32  # Use: Size of the encryption key in bytes. Corresponds to AES-256. Type: int. Range: 16, 24 or 32 bytes.
NONCE_SIZE = 12  # Use: Size of the AES-GCM nonce in bytes. Type: int. Range: 12 bytes (96 bits) is the recommended size for GCM.
ARGON2_TIME_COST = 2  # Use: Argon2id time cost (iterations). Type: int. Range: Typically 1 to 10.
ARGON2_MEMORY_COST = 65536  # Use: Argon2id memory cost in KiB. Type: int. Range: At least 65536 (64 MB) outside of tests.
ARGON2_PARALLELISM = 4  # Use: Argon2id parallelism (lanes). Type: int. Range: Typically 1 to 8.

# Password Generator Settings
PASSWORD_GENERATOR_DEFAULT_LENGTH = 16  # Use: Default length for generated passwords. Type: int. Range: PASSWORD_GENERATOR_MIN_LENGTH to PASSWORD_GENERATOR_MAX_LENGTH.
PASSWORD_GENERATOR_MIN_LENGTH = 8  # Use: Minimum length of generated passwords; shorter requests are raised to this. Type: int. Range: Positive integer.
PASSWORD_GENERATOR_MAX_LENGTH = 32  # Use: Maximum length of generated passwords; longer requests are cut to this. Type: int. Range: Positive integer.
PASSWORD_GENERATOR_CHARSET = (  # Use: Alphabet the generator draws from. Type: str. Range: Non-empty string of distinct characters.
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "0123456789"
    "!@#$%^&*()"
)

# Clipboard Settings
CLIPBOARD_CLEAR_TIMEOUT_DEFAULT_SECONDS = 30  # Use: Seconds after which a copied password is cleared from the clipboard. Type: int. Range: Positive integer.
CLIPBOARD_CLEAR_TIMEOUT_DEFAULT = CLIPBOARD_CLEAR_TIMEOUT_DEFAULT_SECONDS * 1000  # Use: Same timeout in milliseconds, as QTimer expects. Type: int. Range: Derived value.

# Error Messages
ERROR_LOAD = "Failed to load entries: {detail}"  # Use: Error slot text when listing entries fails. Type: str (format). Range: Must contain {detail}.
ERROR_ADD = "Failed to add entry: {detail}"  # Use: Error slot text when adding an entry fails. Type: str (format). Range: Must contain {detail}.
ERROR_DELETE = "Failed to delete entry: {detail}"  # Use: Error slot text when deleting an entry fails. Type: str (format). Range: Must contain {detail}.
ERROR_GENERATE = "Failed to generate password: {detail}"  # Use: Error slot text when password generation fails. Type: str (format). Range: Must contain {detail}.
ERROR_COPY = "Failed to copy to clipboard: {detail}"  # Use: Error slot text when the clipboard write fails. Type: str (format). Range: Must contain {detail}.

# File and Directory Names
CONFIG_DIR_NAME = ".passvault"  # Use: Hidden directory in the user's home holding the vault file. Type: str. Range: Any valid directory name.
DEFAULT_VAULT_FILE = "vault.enc"  # Use: Default filename for the encrypted vault. Type: str. Range: Any valid filename.

# Logging
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'  # Use: Format string passed to logging.basicConfig. Type: str. Range: Valid logging format.
