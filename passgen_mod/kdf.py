from __future__ import annotations
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives import hashes

from .errors import DerivationError


DERIVED_KEY_LEN = 32  # 256-bit derived block


def _encode(value: str, field: str) -> bytes:
    if not isinstance(value, str):
        raise DerivationError(f"{field} must be a string, got {type(value).__name__}.")
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise DerivationError(f"{field} cannot be encoded as UTF-8.") from e


def stretch(word: str, salt: str, iterations: int) -> bytes:
    """Run PBKDF2-HMAC-SHA256 over word/salt and return the derived block.

    Same (word, salt, iterations) always gives the same 32 bytes.
    """
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        raise DerivationError("Iterations must be an integer.")
    if iterations < 1:
        raise DerivationError(f"Iterations must be positive, got {iterations}.")

    password = _encode(word, "Word")
    salt_bytes = _encode(salt, "Salt")

    try:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=DERIVED_KEY_LEN,
            salt=salt_bytes,
            iterations=iterations,
        )
        return kdf.derive(password)
    except UnsupportedAlgorithm as e:
        raise DerivationError("PBKDF2-HMAC-SHA256 is not available on this platform.") from e
    except (ValueError, OverflowError) as e:
        raise DerivationError(f"Key derivation rejected its inputs: {e}") from e
