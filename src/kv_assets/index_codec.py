"""
Binary encoding of the asset index.

Format (version 1):

    +--------+---------+------------------------------------------+
    | "KVAI" | 0x01    | zstd frame: canonical JSON IndexDocument |
    +--------+---------+------------------------------------------+

The JSON is canonical (sorted keys, no whitespace, ASCII) and the zstd frame
carries its content size and checksum, so equal indexes encode to identical
bytes and corruption is detected on decode. The index producer must write this
exact layout.
"""
from __future__ import annotations

import json
import logging

import zstandard as zstd
from pydantic import ValidationError

from .errors import DeserializeAssetsError
from .models import AssetIndex, IndexDocument

__all__ = ["MAGIC", "FORMAT_VERSION", "serialize_index", "deserialize_index"]

logger = logging.getLogger(__name__)

MAGIC = b"KVAI"
FORMAT_VERSION = 1
HEADER_SIZE = len(MAGIC) + 1
ZSTD_LEVEL = 3


def serialize_index(index: AssetIndex) -> bytes:
    """
    Encode an index into the versioned binary format.

    Args:
        index: Mapping of normalized request path to metadata

    Returns:
        Blob suitable for KVAssets
    """
    data = IndexDocument.from_index(index).model_dump(mode="json")
    canonical = json.dumps(
        data,
        sort_keys=True,
        separators=(',', ':'),
        ensure_ascii=True
    )
    compressor = zstd.ZstdCompressor(
        level=ZSTD_LEVEL,
        write_content_size=True,
        write_checksum=True
    )
    payload = compressor.compress(canonical.encode('utf-8'))
    return MAGIC + bytes([FORMAT_VERSION]) + payload


def deserialize_index(blob: bytes) -> AssetIndex:
    """
    Decode a blob produced by serialize_index.

    Raises:
        DeserializeAssetsError: If the blob is malformed or uses another encoding
    """
    blob = bytes(blob)
    if len(blob) < HEADER_SIZE or blob[:len(MAGIC)] != MAGIC:
        raise DeserializeAssetsError("not an asset index: bad magic bytes")

    version = blob[len(MAGIC)]
    if version != FORMAT_VERSION:
        raise DeserializeAssetsError(
            f"unsupported asset index version {version}, expected {FORMAT_VERSION}"
        )

    try:
        raw = zstd.ZstdDecompressor().decompress(blob[HEADER_SIZE:], allow_extra_data=False)
    except zstd.ZstdError as e:
        raise DeserializeAssetsError(f"corrupt asset index payload: {e}") from e

    try:
        document = IndexDocument.model_validate_json(raw)
    except ValidationError as e:
        raise DeserializeAssetsError(f"invalid asset index document: {e}") from e

    index = document.to_index()
    logger.debug(f"Decoded asset index with {len(index)} entries")
    return index
