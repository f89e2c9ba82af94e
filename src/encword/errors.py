"""Decode error taxonomy.

Each error wraps the codec exception that caused it and reports that
exception's message unchanged, so callers see the same text the underlying
library produced.
"""

from __future__ import annotations


class DecodeError(ValueError):
    """Base class for per-segment decode failures."""

    stage = "decode"

    def __init__(self, cause: Exception) -> None:
        super().__init__(str(cause))
        self.__cause__ = cause

    @property
    def cause(self) -> Exception:
        return self.__cause__  # type: ignore[return-value]


class DecodeUtf8Error(DecodeError):
    stage = "utf8"


class DecodeBase64Error(DecodeError):
    stage = "encoding"


class DecodeQuotedPrintableError(DecodeError):
    stage = "encoding"


class DecodeCharsetError(DecodeError):
    stage = "charset"


class SegmentFormatError(ValueError):
    """Raised when a segment mapping matches neither the clear nor encoded shape."""
