import pytest

from cryptography.exceptions import UnsupportedAlgorithm

from passgen_mod.errors import DerivationError
from passgen_mod.kdf import DERIVED_KEY_LEN, stretch


# RFC 7914 section 11 PBKDF2-HMAC-SHA256 vector, truncated to 32 bytes.
RFC_VECTOR = "120fb6cffcf8b32c43e7225256c4f837a86548c92ccc35480805987cb70be17b"
HUNTER2_BLOCK = "1dd195a15ad9b6798b950db6f78ca7e057a5fc168158329850be4b51034afe82"


def test_matches_reference_vector():
    assert stretch("password", "salt", 1).hex() == RFC_VECTOR


def test_hunter2_block():
    assert stretch("hunter2", "obsidian-salt", 100_000).hex() == HUNTER2_BLOCK


def test_deterministic_and_fixed_size():
    block1 = stretch("word", "salt", 1000)
    block2 = stretch("word", "salt", 1000)
    assert block1 == block2
    assert len(block1) == 32
    assert isinstance(block1, bytes)


@pytest.mark.parametrize(
    "word, salt, iterations",
    [("word!", "salt", 1000), ("word", "salt!", 1000), ("word", "salt", 1001)],
)
def test_any_input_change_changes_block(word, salt, iterations):
    assert stretch(word, salt, iterations) != stretch("word", "salt", 1000)


def test_block_size_is_fixed():
    assert DERIVED_KEY_LEN == 32
    for word in ("", "w", "x" * 1000):
        assert len(stretch(word, "salt", 1)) == DERIVED_KEY_LEN


@pytest.mark.parametrize("iterations", [0, -1, -100_000])
def test_rejects_non_positive_iterations(iterations):
    with pytest.raises(DerivationError, match="positive"):
        stretch("word", "salt", iterations)


@pytest.mark.parametrize("iterations", [1.5, "1000", None, True])
def test_rejects_non_integer_iterations(iterations):
    with pytest.raises(DerivationError, match="integer"):
        stretch("word", "salt", iterations)


def test_rejects_non_string_word():
    with pytest.raises(DerivationError, match="Word"):
        stretch(b"word", "salt", 1)


def test_rejects_unencodable_text():
    # Lone surrogate has no UTF-8 encoding.
    with pytest.raises(DerivationError, match="UTF-8") as exc_info:
        stretch("bad\ud800", "salt", 1)
    assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)


def test_unavailable_primitive_is_a_derivation_error(monkeypatch):
    def unsupported(**kwargs):
        raise UnsupportedAlgorithm("no PBKDF2 here")

    monkeypatch.setattr("passgen_mod.kdf.PBKDF2HMAC", unsupported)
    with pytest.raises(DerivationError, match="not available") as exc_info:
        stretch("word", "salt", 1)
    assert isinstance(exc_info.value.__cause__, UnsupportedAlgorithm)


def test_iterations_beyond_the_primitive_range():
    with pytest.raises(DerivationError) as exc_info:
        stretch("w", "s", 2**64)
    assert exc_info.value.__cause__ is not None
