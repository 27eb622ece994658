from __future__ import annotations
import argparse
import logging
import sys
import time
from getpass import getpass
from typing import Optional, Sequence

from passgen_mod.errors import PasswordGenError, ValidationError
from passgen_mod.generator import DerivationRequest, derive_many
from passgen_mod.settings import GeneratorSettings

logger = logging.getLogger(__name__)


def build_parser(settings: GeneratorSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="passgen",
        description="Deterministic password generator - PBKDF2-HMAC-SHA256 over a word and a salt.",
    )
    parser.add_argument(
        "-s", "--salt", action="append",
        help=f"Salt (repeat for one password per salt; default: {settings.salt!r})",
    )
    parser.add_argument(
        "-l", "--length", type=int, default=settings.length,
        help=f"Password length (default: {settings.length})",
    )
    parser.add_argument(
        "-i", "--iterations", type=int, default=settings.iterations,
        help=f"PBKDF2 iterations (default: {settings.iterations})",
    )
    parser.add_argument("--strict", action="store_true", help="Enforce length 8-32 and iterations 10000-500000")
    parser.add_argument("-j", "--jobs", type=int, default=None, help="Worker threads when several salts are given")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        settings = GeneratorSettings.from_env()
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    args = build_parser(settings).parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.jobs is not None and args.jobs < 1:
        print("Error: --jobs must be at least 1.", file=sys.stderr)
        return 2

    salts = args.salt or [settings.salt]
    word = getpass("Word: ")

    requests = [
        DerivationRequest(word=word, salt=salt, length=args.length, iterations=args.iterations)
        for salt in salts
    ]
    logger.debug(
        "Deriving %d password(s): length=%d iterations=%d strict=%s",
        len(requests), args.length, args.iterations, args.strict,
    )

    started = time.perf_counter()
    try:
        passwords = derive_many(requests, max_workers=args.jobs, strict=args.strict)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except PasswordGenError as e:
        logger.debug("Derivation failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logger.debug("Derived in %.3fs", time.perf_counter() - started)

    if len(passwords) == 1:
        print(passwords[0])
    else:
        for salt, password in zip(salts, passwords):
            print(f"{salt}\t{password}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
