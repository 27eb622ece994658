from __future__ import annotations


class PasswordGenError(Exception):
    """Base class for every error raised by the derivation pipeline."""


class ValidationError(PasswordGenError, ValueError):
    # Bad caller input: empty word/salt, non-positive length or iterations.
    pass


class DerivationError(PasswordGenError):
    # The stretching primitive failed or rejected its inputs.
    pass


class FormatError(PasswordGenError, ValueError):
    # Pipeline wiring bug: wrong-size derived block, bad length.
    pass
