"""Charset-label resolution and lossy text decoding.

Labels resolve through the WHATWG label table that browsers and mail clients
share (``x-sjis``, ``latin1`` as windows-1252, ...). Labels outside that
table fall back to the Python codec registry.
"""

from __future__ import annotations

import codecs

import webencodings

from encword.errors import DecodeCharsetError


def _registry_encoding(name: str) -> webencodings.Encoding | None:
    try:
        info = codecs.lookup(name)
    except LookupError:
        return None
    if not getattr(info, "_is_text_encoding", True):
        return None
    return webencodings.Encoding(info.name, info)


def lookup_charset(label: bytes) -> webencodings.Encoding | None:
    """Map a charset label to an encoding, or ``None`` if it is unknown.

    An RFC 2231 language suffix (``utf-8*en``) is ignored. Bytes-to-bytes
    codecs such as ``base64`` or ``rot13`` do not count.
    """
    try:
        name = label.decode("ascii").split("*", 1)[0].strip()
    except UnicodeDecodeError:
        return None
    if not name:
        return None
    return webencodings.lookup(name) or _registry_encoding(name)


def resolve_charset(label: bytes) -> str | None:
    encoding = lookup_charset(label)
    return encoding.name if encoding else None


def decode_ascii(data: bytes) -> str:
    """Decode ASCII, replacing every byte above 0x7F with U+FFFD."""
    return data.decode("ascii", errors="replace")


def decode_charset(label: bytes, data: bytes) -> str:
    """Decode ``data`` with the charset named by ``label``, or ASCII if unknown.

    A byte-order mark, when present, overrides the label.
    """
    encoding = lookup_charset(label)
    if encoding is None:
        return decode_ascii(data)
    try:
        text, _encoding = webencodings.decode(data, encoding, errors="replace")
    except (UnicodeError, LookupError) as exc:
        # some codecs (idna) refuse errors="replace" outright
        raise DecodeCharsetError(exc) from exc
    return text
