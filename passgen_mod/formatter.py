from __future__ import annotations
import string

from .errors import FormatError


UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

# Fixed order: the repair pass walks the classes in this order and
# ALPHABET is their concatenation.
CHARACTER_CLASSES = (UPPERCASE, LOWERCASE, DIGITS, SYMBOLS)
ALPHABET = "".join(CHARACTER_CLASSES)

BLOCK_LEN = 32
HEX_LEN = BLOCK_LEN * 2
REPAIR_SLICE = 8  # hex chars per class: 4 for position, 4 for character

_HEX_DIGITS = frozenset("0123456789abcdef")


def _check_length(length: int) -> None:
    if isinstance(length, bool) or not isinstance(length, int):
        raise FormatError("Password length must be an integer.")
    if length < 1:
        raise FormatError(f"Password length must be at least 1, got {length}.")


def _check_hex(hex_buffer: str) -> None:
    if not isinstance(hex_buffer, str) or len(hex_buffer) != HEX_LEN:
        raise FormatError(f"Hex buffer must be {HEX_LEN} characters.")
    if not _HEX_DIGITS.issuperset(hex_buffer):
        raise FormatError("Hex buffer must contain only lowercase hex digits.")


def to_hex(block: bytes) -> str:
    if not isinstance(block, (bytes, bytearray, memoryview)):
        raise FormatError("Derived block must be bytes.")
    block = bytes(block)
    if len(block) != BLOCK_LEN:
        raise FormatError(f"Derived block must be {BLOCK_LEN} bytes, got {len(block)}.")
    return block.hex()


def map_to_alphabet(hex_buffer: str, length: int) -> str:
    """Render one alphabet character per hex byte, cycling through the buffer."""
    _check_hex(hex_buffer)
    _check_length(length)

    chars = []
    for i in range(length):
        offset = (i * 2) % HEX_LEN
        value = int(hex_buffer[offset : offset + 2], 16)
        chars.append(ALPHABET[value % len(ALPHABET)])
    return "".join(chars)


def missing_classes(candidate: str) -> list[int]:
    # Indexes into CHARACTER_CLASSES with no representative in candidate.
    present = set(candidate)
    return [k for k, cls in enumerate(CHARACTER_CLASSES) if present.isdisjoint(cls)]


def ensure_requirements(candidate: str, hex_buffer: str) -> str:
    """
    Overwrite one position per missing character class.

    Class k reads hex_buffer[k*8 : k*8+8]: the first four hex digits pick the
    position, the last four pick the character within the class. When two
    missing classes land on the same position the later class wins, so the
    earlier one can stay missing. Outputs of earlier releases depend on this.
    """
    _check_hex(hex_buffer)
    if not candidate:
        raise FormatError("Candidate password must not be empty.")

    missing = missing_classes(candidate)
    if not missing:
        return candidate

    chars = list(candidate)
    for k in missing:
        part = hex_buffer[k * REPAIR_SLICE : (k + 1) * REPAIR_SLICE]
        position = int(part[:4], 16) % len(chars)
        replacements = CHARACTER_CLASSES[k]
        chars[position] = replacements[int(part[4:], 16) % len(replacements)]

    return "".join(chars)


def format_password(block: bytes, length: int) -> str:
    _check_length(length)
    hex_buffer = to_hex(block)
    candidate = map_to_alphabet(hex_buffer, length)
    return ensure_requirements(candidate, hex_buffer)
