"""
kv-assets CLI

Administrative commands around an asset index and its KV namespace:
- index-show: List the entries of a binary index file
- lookup: Resolve a request path through the index (no network)
- get: Resolve a request path and fetch the asset from KV
- kv-get: Read a raw value from KV
- kv-put: Write a raw value to KV, optionally with an expiration TTL
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from .assets import normalize_path
from .cli_context import CLIContext
from .index_codec import deserialize_index
from .operations import AssetNotFound, run_and_exit
from .operations.printers import print_index, print_metadata, print_written

app = typer.Typer(name="kv-assets", help="Serve static assets from KV storage")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
):
    """kv-assets command line interface."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def _write_output(data: bytes, out: Optional[Path]) -> None:
    if out is None:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    else:
        out.write_bytes(data)


@app.command("index-show")
def index_show(
    index_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Binary index file")
):
    """List all entries in an index file."""
    def _show() -> None:
        print_index(deserialize_index(index_file.read_bytes()))

    run_and_exit(_show)


@app.command()
def lookup(
    index_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Binary index file"),
    path: str = typer.Argument(..., help="Request path, with or without leading '/'"),
):
    """Resolve a request path to its storage metadata without contacting KV.

    Needs no store credentials.
    """
    def _lookup() -> None:
        key = normalize_path(path)
        md = deserialize_index(index_file.read_bytes()).get(key)
        if md is None:
            raise AssetNotFound(f"No index entry for {path}")
        print_metadata(path, md)

    run_and_exit(_lookup)


@app.command()
def get(
    index_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Binary index file"),
    path: str = typer.Argument(..., help="Request path, with or without leading '/'"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write asset to file instead of stdout"),
):
    """Fetch an asset by request path."""
    def _get() -> None:
        ctx = CLIContext.from_env()
        try:
            data = ctx.assets(index_file).get_asset(path)
            if data is None:
                raise AssetNotFound(f"No index entry for {path}")
            _write_output(data, out)
            if out is not None:
                print_written(path, len(data), str(out))
        finally:
            ctx.close()

    run_and_exit(_get)


@app.command("kv-get")
def kv_get(
    key: str = typer.Argument(..., help="Storage key"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write value to file instead of stdout"),
):
    """Read a raw value from KV."""
    def _kv_get() -> None:
        ctx = CLIContext.from_env()
        try:
            data = ctx.client.get_value(key)
            _write_output(data, out)
            if out is not None:
                print_written(key, len(data), str(out))
        finally:
            ctx.close()

    run_and_exit(_kv_get)


@app.command("kv-put")
def kv_put(
    key: str = typer.Argument(..., help="Storage key"),
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="File holding the value"),
    ttl: Optional[int] = typer.Option(None, "--ttl", help="Expiration TTL in seconds (>= 60)"),
):
    """Write a raw value to KV."""
    def _kv_put() -> None:
        ctx = CLIContext.from_env()
        try:
            data = file.read_bytes()
            ctx.client.put_value(key, data, expiration_ttl=ttl)
            print_written(key, len(data))
        finally:
            ctx.close()

    run_and_exit(_kv_put)


if __name__ == "__main__":
    app()
