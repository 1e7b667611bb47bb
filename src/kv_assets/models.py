"""
Data models for the asset index and store responses.

AssetMetadata is the in-memory value type held by the index. The Pydantic
models describe documents that cross a boundary: the JSON payload inside the
binary index blob and the store's write acknowledgment.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field

U64_MAX = 2**64 - 1


@dataclass(frozen=True, order=True)
class AssetMetadata:
    """
    Metadata for one asset stored in KV.

    Invariants:
    - path: storage key in the namespace (not the request path)
    - modified: UTC seconds since epoch, unsigned 64-bit
    - size: byte length, unsigned 64-bit

    Ordering is (path, modified, size), used for deterministic output only.
    """
    path: str
    modified: int
    size: int

    def __post_init__(self):
        for name in ("modified", "size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if not 0 <= value <= U64_MAX:
                raise ValueError(f"{name} out of unsigned 64-bit range: {value}")


# Request path (leading "/" removed) -> metadata
AssetIndex = Dict[str, AssetMetadata]


class MetadataEntry(BaseModel):
    """Serialized form of AssetMetadata."""
    path: str = Field(..., strict=True, description="Storage key in the KV namespace")
    modified: int = Field(..., strict=True, ge=0, le=U64_MAX, description="Last modified, UTC epoch seconds")
    size: int = Field(..., strict=True, ge=0, le=U64_MAX, description="Size in bytes")


class IndexDocument(BaseModel):
    """Payload of the binary index blob."""
    entries: Dict[str, MetadataEntry] = Field(default_factory=dict, description="Request path to metadata")

    @classmethod
    def from_index(cls, index: AssetIndex) -> IndexDocument:
        return cls(entries={
            key: MetadataEntry(path=md.path, modified=md.modified, size=md.size)
            for key, md in index.items()
        })

    def to_index(self) -> AssetIndex:
        return {
            key: AssetMetadata(path=e.path, modified=e.modified, size=e.size)
            for key, e in self.entries.items()
        }


class WriteKVResponse(BaseModel):
    """
    Acknowledgment returned by the store for a value write.

    errors/messages are kept verbatim; the live API sends objects such as
    {"code": 10000, "message": "..."} where older responses sent strings.
    """
    success: bool
    errors: List[Union[str, Dict[str, Any]]] = Field(default_factory=list)
    messages: List[Union[str, Dict[str, Any]]] = Field(default_factory=list)


__all__ = ["AssetMetadata", "AssetIndex", "MetadataEntry", "IndexDocument", "WriteKVResponse"]
