"""Segment model and loaders for segment files.

A segment file is JSON or YAML holding a list of mappings (or a mapping with a
``segments`` key). Each mapping is one of:

- clear: ``{"clear": "text"}`` or ``{"clear_hex": "c3a9"}``
- encoded: ``{"encoding": "B", "charset": "utf-8", "data": "w6k="}``
  (``data_hex`` in place of ``data``)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import orjson
import yaml

from encword.errors import SegmentFormatError


@dataclass(frozen=True)
class ClearSegment:
    data: bytes


@dataclass(frozen=True)
class EncodedSegment:
    data: bytes
    encoding: str
    charset: bytes


Segment = ClearSegment | EncodedSegment
Ast = Sequence[Segment]


def _payload_bytes(payload: dict[str, Any], key: str) -> bytes | None:
    if payload.get(f"{key}_hex") is not None:
        try:
            return bytes.fromhex(str(payload[f"{key}_hex"]))
        except ValueError as exc:
            raise SegmentFormatError(f"Invalid hex in '{key}_hex': {exc}") from exc
    if payload.get(key) is not None:
        return str(payload[key]).encode("utf-8")
    return None


def segment_from_mapping(payload: dict[str, Any]) -> Segment:
    if not isinstance(payload, dict):
        raise SegmentFormatError(f"Segment must be a mapping, got {type(payload).__name__}")

    clear = _payload_bytes(payload, "clear")
    if clear is not None:
        return ClearSegment(data=clear)

    if "encoding" in payload:
        data = _payload_bytes(payload, "data")
        if data is None:
            raise SegmentFormatError("Encoded segment needs 'data' or 'data_hex'")
        return EncodedSegment(
            data=data,
            encoding=str(payload["encoding"]),
            charset=str(payload.get("charset") or "").encode("utf-8"),
        )
    raise SegmentFormatError(f"Unrecognized segment keys: {sorted(payload)}")


def segment_to_mapping(segment: Segment) -> dict[str, Any]:
    """Inverse of ``segment_from_mapping``; bytes are always written as hex."""
    if isinstance(segment, ClearSegment):
        return {"clear_hex": segment.data.hex()}
    return {
        "encoding": segment.encoding,
        "charset": segment.charset.decode("utf-8", errors="replace"),
        "data_hex": segment.data.hex(),
    }


def load_segments(path: Path) -> list[Segment]:
    if path.suffix.lower() in {".yml", ".yaml"}:
        payload = yaml.safe_load(path.read_text())
    else:
        payload = orjson.loads(path.read_bytes())
    if isinstance(payload, dict):
        payload = payload.get("segments")
    if not isinstance(payload, list):
        raise SegmentFormatError("Segment file must hold a list of segments")
    return [segment_from_mapping(item) for item in payload]


def sample_segments() -> dict[str, Any]:
    return {
        "segments": [
            {"encoding": "Q", "charset": "iso-8859-1", "data": "Caf=E9_au_lait"},
            {"clear": " - "},
            {"encoding": "B", "charset": "utf-8", "data": "w6l0w6k="},
        ]
    }
