"""Segment evaluator: fold a segment sequence into one readable string.

Each segment is decoded on its own. A failure at any stage is reported to the
warning sink and replaced by the lossy UTF-8 reading of the segment's raw
bytes, so evaluation always returns text.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from encword.charset import decode_charset
from encword.errors import DecodeError, DecodeUtf8Error
from encword.segments import ClearSegment, EncodedSegment, Segment
from encword.transfer import decode_transfer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodeWarning:
    index: int
    stage: str
    value: str
    error: str

    def describe(self) -> str:
        if self.stage == "utf8":
            return f"failed to decode clear bytes to utf-8: {self.error}"
        if self.stage == "charset":
            return f"failed to decode bytes to charset {self.value!r}: {self.error}"
        return f"failed to decode bytes from {self.value!r}: {self.error}"


WarningSink = Callable[[DecodeWarning], None]


@dataclass
class SegmentOutcome:
    segment: Segment
    text: str
    fallback: bool


@dataclass
class Evaluation:
    text: str
    outcomes: list[SegmentOutcome] = field(default_factory=list)
    warnings: list[DecodeWarning] = field(default_factory=list)


def log_warning(warning: DecodeWarning) -> None:
    logger.warning("segment %d: %s", warning.index, warning.describe())


def lossy_decode(data: bytes) -> str:
    """UTF-8 with invalid sequences replaced by U+FFFD; accepts any bytes."""
    return data.decode("utf-8", errors="replace")


def decode_utf8(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeUtf8Error(exc) from exc


def _emit(sink: WarningSink, warning: DecodeWarning) -> None:
    try:
        sink(warning)
    except Exception:
        logger.debug("warning sink raised for segment %d", warning.index, exc_info=True)


def _label(charset: bytes) -> str:
    return charset.decode("ascii", errors="backslashreplace")


def evaluate_segment(index: int, segment: Segment, sink: WarningSink) -> SegmentOutcome:
    """Decode one segment, reporting to ``sink`` before falling back."""
    if isinstance(segment, ClearSegment):
        try:
            return SegmentOutcome(segment, decode_utf8(segment.data), fallback=False)
        except DecodeUtf8Error as exc:
            _emit(sink, DecodeWarning(index, exc.stage, "utf-8", str(exc)))
            return SegmentOutcome(segment, lossy_decode(segment.data), fallback=True)

    if not isinstance(segment, EncodedSegment):
        raise TypeError(f"Unsupported segment type: {type(segment).__name__}")

    try:
        decoded = decode_transfer(segment.encoding, segment.data)
    except DecodeError as exc:
        _emit(sink, DecodeWarning(index, "encoding", segment.encoding, str(exc)))
        return SegmentOutcome(segment, lossy_decode(segment.data), fallback=True)

    try:
        text = decode_charset(segment.charset, decoded)
    except DecodeError as exc:
        _emit(sink, DecodeWarning(index, "charset", _label(segment.charset), str(exc)))
        # fall back on the raw payload, not the transfer-decoded bytes
        return SegmentOutcome(segment, lossy_decode(segment.data), fallback=True)
    return SegmentOutcome(segment, text, fallback=False)


def evaluate_report(
    segments: Iterable[Segment], on_warning: WarningSink | None = None
) -> Evaluation:
    """Evaluate ``segments`` and keep per-segment outcomes and warnings."""
    warnings: list[DecodeWarning] = []

    def sink(warning: DecodeWarning) -> None:
        warnings.append(warning)
        (on_warning or log_warning)(warning)

    outcomes = [evaluate_segment(i, seg, sink) for i, seg in enumerate(segments)]
    return Evaluation(
        text="".join(o.text for o in outcomes), outcomes=outcomes, warnings=warnings
    )


def evaluate(segments: Iterable[Segment], on_warning: WarningSink | None = None) -> str:
    """Decode a segment sequence into one string; never raises a ``DecodeError``."""
    return evaluate_report(segments, on_warning).text
