from __future__ import annotations
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Optional

from .errors import ValidationError
from .formatter import format_password
from .kdf import stretch
from .settings import MAX_ITERATIONS, MAX_LENGTH, MIN_ITERATIONS, MIN_LENGTH


def _require_text(value: str, field: str) -> None:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string.")
    if value.strip() == "":
        raise ValidationError(f"{field} must not be empty.")


def _require_positive_int(value: int, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer.")
    if value < 1:
        raise ValidationError(f"{field} must be at least 1, got {value}.")


def _require_range(value: int, field: str, low: int, high: int) -> None:
    if not low <= value <= high:
        raise ValidationError(f"{field} must be between {low} and {high}, got {value}.")


@dataclass(frozen=True)
class DerivationRequest:
    word: str
    salt: str
    length: int
    iterations: int

    def validate(self, strict: bool = False) -> "DerivationRequest":
        """
        Check the request and return it unchanged.

        Word and salt are only tested for emptiness after trimming; derivation
        uses them as given. With strict=True length and iterations must also
        fall inside the slider bounds (8-32 and 10000-500000).
        """
        _require_text(self.word, "Word")
        _require_text(self.salt, "Salt")
        _require_positive_int(self.length, "Length")
        _require_positive_int(self.iterations, "Iterations")
        if strict:
            _require_range(self.length, "Length", MIN_LENGTH, MAX_LENGTH)
            _require_range(self.iterations, "Iterations", MIN_ITERATIONS, MAX_ITERATIONS)
        return self


def generate(request: DerivationRequest, strict: bool = False) -> str:
    request.validate(strict=strict)
    block = stretch(request.word, request.salt, request.iterations)
    return format_password(block, request.length)


def derive_password(word: str, salt: str, length: int, iterations: int) -> str:
    """
    Derive the deterministic password for (word, salt, length, iterations).

    Raises ValidationError for bad input, DerivationError when PBKDF2 fails
    and FormatError on a pipeline contract violation.
    """
    return generate(DerivationRequest(word=word, salt=salt, length=length, iterations=iterations))


def submit_derivation(executor: Executor, request: DerivationRequest, strict: bool = False) -> Future:
    # Validate up front so bad input fails in the caller, not in the worker.
    request.validate(strict=strict)
    return executor.submit(generate, request, strict)


def derive_many(
    requests: Iterable[DerivationRequest],
    max_workers: Optional[int] = None,
    strict: bool = False,
) -> list[str]:
    """Derive independent requests on a thread pool; results keep request order."""
    requests = list(requests)
    for request in requests:
        request.validate(strict=strict)
    if not requests:
        return []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(generate, request, strict) for request in requests]
        try:
            return [future.result() for future in futures]
        except BaseException:
            for future in futures:
                future.cancel()
            raise
