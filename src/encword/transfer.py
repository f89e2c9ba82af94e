"""Transfer decoding for encoded-word payloads.

``B`` selects strict base64; every other tag falls through to
quoted-printable in robust mode, with ``_`` standing in for a space.
"""

from __future__ import annotations

import base64
import binascii

from encword.errors import DecodeBase64Error, DecodeQuotedPrintableError

BASE64_TAG = "B"


def decode_base64(data: bytes) -> bytes:
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeBase64Error(exc) from exc


def decode_quoted_printable(data: bytes) -> bytes:
    """Decode quoted-printable, tolerating stray ``=`` sequences.

    ``binascii.a2b_qp`` keeps malformed escapes as literal bytes rather than
    rejecting them.
    """
    data = data.replace(b"_", b" ")
    try:
        return binascii.a2b_qp(data)
    except (binascii.Error, ValueError) as exc:
        raise DecodeQuotedPrintableError(exc) from exc


def decode_transfer(encoding: str, data: bytes) -> bytes:
    """Decode ``data`` with the transfer encoding named by ``encoding``."""
    if encoding.upper() == BASE64_TAG:
        return decode_base64(data)
    return decode_quoted_printable(data)
