"""
Error mapping and CLI utilities.

Provides centralized exception-to-exit-code mapping and a command wrapper so
Typer commands share one error handling path.
"""
from __future__ import annotations

import typer
from typing import Callable, TypeVar

T = TypeVar('T')

EXIT_CODES = {
    "AssetNotFound": 1,
    "KVKeyNotFound": 1,
    "EmptyKeyError": 2,
    "TTLTooShortError": 2,
    "ValueError": 2,
    "KVHttpError": 3,
    "KVWriteError": 3,
    "DeserializeAssetsError": 4,
}


class AssetNotFound(Exception):
    """Request path has no entry in the index."""
    pass


def exit_code_for(exc: BaseException) -> int:
    """
    Map exception to exit code.

    - 0: Success
    - 1: Asset or key not found (AssetNotFound, KVKeyNotFound)
    - 2: Caller error (EmptyKeyError, TTLTooShortError, ValueError)
    - 3: Store/network error (KVHttpError, KVWriteError) or unknown error
    - 4: Index cannot be decoded (DeserializeAssetsError)
    """
    return EXIT_CODES.get(type(exc).__name__, 3)


def run_and_exit(func: Callable[[], T]) -> T:
    """
    Run a CLI command body, converting exceptions to typer.Exit.

    The error is reported on stderr and the original exception is kept as
    the cause of the Exit.
    """
    try:
        return func()
    except Exception as e:
        from .printers import print_error
        print_error(e)
        raise typer.Exit(code=exit_code_for(e)) from e
