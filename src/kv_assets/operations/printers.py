"""
Human-readable output formatting for the CLI.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from rich.console import Console
from rich.table import Table

from ..models import AssetIndex, AssetMetadata

_console = Console()
_err_console = Console(stderr=True)


def print_index(index: AssetIndex) -> None:
    """Print every index entry, sorted by request path."""
    table = Table(title=f"Asset index ({len(index)} entries)")
    table.add_column("Request path", style="cyan")
    table.add_column("Storage key", style="yellow")
    table.add_column("Modified (UTC)")
    table.add_column("Size", justify="right")

    for key in sorted(index):
        md = index[key]
        table.add_row(key, md.path, _format_time(md.modified), _format_bytes(md.size))

    _console.print(table)


def print_metadata(path: str, md: AssetMetadata) -> None:
    """Print metadata for one resolved path."""
    _console.print(f"[bold]Path:[/] {path}")
    _console.print(f"[bold]Key:[/] {md.path}")
    _console.print(f"[bold]Modified:[/] {_format_time(md.modified)}")
    _console.print(f"[bold]Size:[/] {_format_bytes(md.size)}")


def print_written(target: str, size: int, out: Optional[str] = None) -> None:
    if out:
        _console.print(f"Wrote {_format_bytes(size)} from {target} to {out}")
    else:
        _console.print(f"Stored {_format_bytes(size)} at {target}")


def print_error(exc: BaseException) -> None:
    _err_console.print(f"[bold red]Error:[/] {type(exc).__name__}: {exc}", highlight=False)


def _format_time(epoch_s: int) -> str:
    try:
        return datetime.fromtimestamp(epoch_s, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
    except (OverflowError, OSError, ValueError):
        return str(epoch_s)


def _format_bytes(size: int) -> str:
    """Format byte size in human-readable format."""
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024.0:
            if unit == 'B':
                return f"{size} {unit}"
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} PB"
